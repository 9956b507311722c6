# =============================================================================
# test_printer.py - Tree Printer Unit Tests
# =============================================================================

from tdop.printer import TreePrinter
from tdop.symbol import Arity, Symbol
from tdop.tokens import TokenKind


def leaf(value, arity=Arity.NAME, kind=TokenKind.NAME) -> Symbol:
    symbol_id = "(name)" if arity == Arity.NAME else "(literal)"
    return Symbol(symbol_id, value=value, arity=arity, kind=kind)


def node(symbol_id, *children) -> Symbol:
    symbol = Symbol(symbol_id, arity=Arity.OPERATOR, value=symbol_id)
    for slot, child in zip(("first", "second", "third"), children):
        setattr(symbol, slot, child)
    return symbol


class TestFormat:
    """One-line s-expressions."""

    def test_leaf(self):
        assert TreePrinter().format(leaf("a")) == "a"

    def test_nested(self):
        tree = node("+", leaf("a"), node("*", leaf("b"), leaf("c")))
        assert TreePrinter().format(tree) == "(+ a (* b c))"

    def test_string_literal_quoted(self):
        assert TreePrinter().format(leaf("hi", Arity.LITERAL, TokenKind.STRING)) == '"hi"'

    def test_number_literal(self):
        assert TreePrinter().format(leaf("42", Arity.LITERAL, TokenKind.NUMBER)) == "42"

    def test_constant_value(self):
        assert TreePrinter().format(leaf(None, Arity.LITERAL)) == "None"

    def test_list(self):
        assert TreePrinter().format([leaf("a"), leaf("b")]) == "[a b]"
        assert TreePrinter().format([]) == "[]"

    def test_missing_child_skipped(self):
        tree = node("function", None, [leaf("x")], [])
        assert TreePrinter().format(tree) == "(function [x] [])"

    def test_none(self):
        assert TreePrinter().format(None) == "()"

    def test_foreign_node(self):
        """Grammars may return plain values instead of symbols."""
        assert TreePrinter().format(("sum", 1, 2)) == "('sum', 1, 2)"


class TestDump:
    """Indented outlines."""

    def test_outline(self):
        tree = node("+", leaf("a"), node("*", leaf("b"), leaf("c")))
        assert TreePrinter().dump([tree]).splitlines() == [
            "+",
            "  a",
            "  *",
            "    b",
            "    c",
        ]

    def test_list_children(self):
        block = node("{", [leaf("a")])
        assert TreePrinter(indent="    ").dump([block]).splitlines() == [
            "{",
            "    [",
            "        a",
            "    ]",
        ]

    def test_empty_list(self):
        assert TreePrinter().dump([node("{", [])]) == "{\n  []"

    def test_printer_reusable(self):
        printer = TreePrinter()
        printer.dump([leaf("a")])
        assert printer.dump([leaf("b")]) == "b"
