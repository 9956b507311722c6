"""
Tree Printer
============

Renders trees built by the default denotations (symbols holding their
operands in ``first``, ``second`` and ``third``) for debugging and tests.

Two formats are available:

    >>> printer = TreePrinter()
    >>> printer.format(tree)
    '(+ a (* b c))'
    >>> print(printer.dump([tree]))
    +
      a
      *
        b
        c

Lists (argument lists, statement blocks) are written in brackets. Nodes
that are not symbols are written with str().
"""

from typing import Any, Iterable

from tdop.symbol import Arity, Symbol
from tdop.tokens import TokenKind


class TreePrinter:
    """Formats symbol trees as s-expressions or indented outlines."""

    def __init__(self, indent: str = "  "):
        self.indent = indent
        self.output: list[str] = []
        self.indent_level = 0

    def format(self, node: Any) -> str:
        """Return a one-line s-expression for a node."""
        if node is None:
            return "()"
        if isinstance(node, list):
            return "[" + " ".join(self.format(item) for item in node) + "]"
        if not isinstance(node, Symbol):
            return str(node)

        children = node.children()
        label = self._label(node)
        if not children:
            return label
        return "(" + " ".join([label] + [self.format(child) for child in children]) + ")"

    def dump(self, nodes: Iterable[Any]) -> str:
        """Return an indented outline of a statement list."""
        self.output = []
        self.indent_level = 0
        for node in nodes:
            self._visit(node)
        return "\n".join(self.output)

    def _visit(self, node: Any) -> None:
        if isinstance(node, list):
            self._emit("[]" if not node else "[")
            if node:
                self.indent_level += 1
                for item in node:
                    self._visit(item)
                self.indent_level -= 1
                self._emit("]")
            return
        if not isinstance(node, Symbol):
            self._emit(str(node))
            return

        self._emit(self._label(node))
        self.indent_level += 1
        for child in node.children():
            self._visit(child)
        self.indent_level -= 1

    def _emit(self, text: str) -> None:
        self.output.append(f"{self.indent * self.indent_level}{text}")

    @staticmethod
    def _label(node: Symbol) -> str:
        if node.arity == Arity.LITERAL:
            if node.kind == TokenKind.STRING:
                return f'"{node.value}"'
            if isinstance(node.value, str):
                return node.value
            return repr(node.value)
        if node.arity == Arity.NAME and node.value is not None:
            return str(node.value)
        return node.id
