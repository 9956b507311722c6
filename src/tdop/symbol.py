"""
Symbols and Default Denotations
===============================

A Symbol is one entry of a grammar's symbol table: the lexical atom's id,
its left binding power and up to three parsing behaviors.

- nud (null denotation): how the symbol begins an expression
- led (left denotation): how it extends an already parsed left operand
- std (statement denotation): how it parses a whole statement

Table entries are templates. The parser never hands a template out; every
token occurrence is a copy made by Symbol.instantiate(), so per-occurrence
fields (value, position, arity, children) never leak between occurrences.

Denotation Protocol
-------------------
    nud(symbol, parser) -> node
    led(symbol, parser, left) -> node
    std(symbol, parser) -> node or None

The defaults below build trees out of the symbols themselves, storing
operands in the ``first``, ``second`` and ``third`` slots. Grammars are free
to return any node type instead.
"""

import copy
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING, Any, Callable, Optional

from tdop.errors import InvalidAssignmentTargetError
from tdop.tokens import TokenKind

if TYPE_CHECKING:
    from tdop.parser import Parser
    from tdop.scope import Scope


# Binding power used by prefix operators for their operand.
PREFIX_BINDING_POWER = 70


class Arity(Enum):
    """Role of one symbol occurrence in the tree."""
    NAME = auto()
    LITERAL = auto()
    OPERATOR = auto()
    STATEMENT = auto()


NullDenotation = Callable[["Symbol", "Parser"], Any]
LeftDenotation = Callable[["Symbol", "Parser", Any], Any]
StatementDenotation = Callable[["Symbol", "Parser"], Any]


@dataclass(eq=False)
class Symbol:
    """
    A symbol table template, or one occurrence copied from it.

    Attributes:
        id: Operator text, keyword, or a category marker such as
            "(name)", "(literal)" or "(end)"
        lbp: Left binding power; 0 means the symbol never continues
            an expression
        bp: Binding power the default left denotations recurse with
        arity: Per-occurrence role, set by the parser and denotations
        nud, led, std: Parsing behaviors (None when absent)
        value: Source text, or the constant value for constants
        kind: Raw token kind of the occurrence
        line_number, char_pos: Position copied from the raw token
        reserved: True once the name is reserved in a scope
        assignment: True for occurrences parsed as assignments
        scope: Scope frame a name was bound in
        first, second, third: Child slots used by the default denotations
    """
    id: str
    lbp: int = 0
    bp: int = 0
    arity: Optional[Arity] = None
    nud: Optional[NullDenotation] = field(default=None, repr=False)
    led: Optional[LeftDenotation] = field(default=None, repr=False)
    std: Optional[StatementDenotation] = field(default=None, repr=False)
    value: Any = None
    kind: Optional[TokenKind] = None
    line_number: int = 0
    char_pos: int = 0
    reserved: bool = False
    assignment: bool = False
    scope: Optional["Scope"] = field(default=None, repr=False)
    first: Any = field(default=None, repr=False)
    second: Any = field(default=None, repr=False)
    third: Any = field(default=None, repr=False)

    def instantiate(self) -> "Symbol":
        """Return a fresh occurrence copied from this template."""
        return copy.copy(self)

    @property
    def name(self) -> str:
        """Text a scope binds this symbol under."""
        return self.value if isinstance(self.value, str) and self.value else self.id

    def children(self) -> list:
        """Return the non-empty child slots in order."""
        return [c for c in (self.first, self.second, self.third) if c is not None]

    def __str__(self) -> str:
        if self.arity in (Arity.NAME, Arity.LITERAL) and self.value is not None:
            return str(self.value)
        return self.id


# =============================================================================
# Default Null Denotations
# =============================================================================

def nud_itself(symbol: Symbol, parser: "Parser") -> Symbol:
    """Literals and names stand for themselves."""
    return symbol


def nud_prefix(symbol: Symbol, parser: "Parser") -> Symbol:
    """Unary prefix operator: the operand goes into ``first``."""
    symbol.first = parser.expression(PREFIX_BINDING_POWER)
    symbol.arity = Arity.OPERATOR
    return symbol


def nud_constant(symbol: Symbol, parser: "Parser") -> Symbol:
    """
    Turn a constant name into a literal.

    The name is reserved in the current scope so it cannot be declared as
    a variable there, and the occurrence takes the value registered on the
    template (the parser overwrote it with the source text).
    """
    parser.scope.reserve(symbol)
    template = parser.symbol_table.get(symbol.id)
    symbol.value = template.value if template is not None else symbol.value
    symbol.arity = Arity.LITERAL
    return symbol


# =============================================================================
# Default Left Denotations
# =============================================================================

def led_infix(symbol: Symbol, parser: "Parser", left: Any) -> Symbol:
    """Left-associative binary operator."""
    symbol.first = left
    symbol.second = parser.expression(symbol.bp)
    symbol.arity = Arity.OPERATOR
    return symbol


def led_infixr(symbol: Symbol, parser: "Parser", left: Any) -> Symbol:
    """Right-associative binary operator: equal precedence nests rightward."""
    symbol.first = left
    symbol.second = parser.expression(symbol.bp - 1)
    symbol.arity = Arity.OPERATOR
    return symbol


def led_assignment(symbol: Symbol, parser: "Parser", left: Any) -> Symbol:
    """
    Right-associative assignment with a check on the target.

    The left operand must be a name, a member access or a subscript.
    """
    if not _is_assignable(left):
        raise InvalidAssignmentTargetError(symbol.id, **parser.error_context(symbol))
    led_infixr(symbol, parser, left)
    symbol.assignment = True
    return symbol


def _is_assignable(node: Any) -> bool:
    if not isinstance(node, Symbol):
        return False
    if node.arity == Arity.NAME and not node.reserved:
        return True
    return node.arity == Arity.OPERATOR and node.id in (".", "[")


# Denotations a grammar may refer to by name.
DEFAULT_DENOTATIONS: dict[str, Callable[..., Any]] = {
    "nud_itself": nud_itself,
    "nud_prefix": nud_prefix,
    "nud_constant": nud_constant,
    "led_infix": led_infix,
    "led_infixr": led_infixr,
    "led_assignment": led_assignment,
}
