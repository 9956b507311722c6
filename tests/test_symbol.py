# =============================================================================
# test_symbol.py - Symbol and Raw Token Unit Tests
# =============================================================================
# Tests for symbol templates, occurrence copies, the default denotations
# used outside a full parse, and the raw token contract.
# =============================================================================

import pytest

from tdop.symbol import (
    DEFAULT_DENOTATIONS,
    PREFIX_BINDING_POWER,
    Arity,
    Symbol,
    led_infix,
    nud_itself,
)
from tdop.tokens import LINE_BREAK, RawToken, TokenKind


# =============================================================================
# Symbols
# =============================================================================

class TestSymbol:
    """Templates and their occurrences."""

    def test_defaults(self):
        symbol = Symbol("+")
        assert symbol.lbp == 0
        assert symbol.nud is None
        assert symbol.led is None
        assert symbol.std is None
        assert symbol.children() == []

    def test_instantiate_copies_fields(self):
        template = Symbol("+", lbp=50, bp=50, led=led_infix)
        occurrence = template.instantiate()
        assert occurrence is not template
        assert occurrence.lbp == 50
        assert occurrence.led is led_infix

    def test_occurrence_changes_do_not_leak(self):
        template = Symbol("+", lbp=50)
        occurrence = template.instantiate()
        occurrence.value = "+"
        occurrence.first = Symbol("(name)")
        occurrence.line_number = 7
        assert template.value is None
        assert template.first is None
        assert template.line_number == 0

    def test_name_prefers_text(self):
        assert Symbol("(name)", value="count").name == "count"
        assert Symbol("if").name == "if"
        assert Symbol("true", value=True).name == "true"

    def test_children_in_order(self):
        a, b, c = Symbol("a"), Symbol("b"), Symbol("c")
        symbol = Symbol("?", first=a, second=b, third=c)
        assert symbol.children() == [a, b, c]

    def test_str(self):
        assert str(Symbol("(name)", value="x", arity=Arity.NAME)) == "x"
        assert str(Symbol("+", value="+", arity=Arity.OPERATOR)) == "+"

    def test_symbols_compare_by_identity(self):
        assert Symbol("+") != Symbol("+")

    def test_default_denotations_by_name(self):
        assert DEFAULT_DENOTATIONS["nud_itself"] is nud_itself
        assert set(DEFAULT_DENOTATIONS) == {
            "nud_itself",
            "nud_prefix",
            "nud_constant",
            "led_infix",
            "led_infixr",
            "led_assignment",
        }

    def test_prefix_binds_below_member_access(self):
        assert 60 < PREFIX_BINDING_POWER < 80


# =============================================================================
# Raw Tokens
# =============================================================================

class TestRawToken:
    """The tokenizer/parser contract."""

    def test_repr(self):
        assert repr(RawToken(TokenKind.NAME, "a", 3, 9)) == "RawToken(NAME, 'a', 3:9)"

    def test_frozen(self):
        token = RawToken(TokenKind.NAME, "a")
        with pytest.raises(AttributeError):
            token.value = "b"

    def test_literal_kinds(self):
        assert TokenKind.STRING.is_literal
        assert TokenKind.NUMBER.is_literal
        assert TokenKind.REGEX.is_literal
        assert not TokenKind.NAME.is_literal
        assert not TokenKind.OPERATOR.is_literal

    def test_coerce_passthrough(self):
        token = RawToken(TokenKind.NAME, "a")
        assert RawToken.coerce(token) is token

    def test_coerce_mapping(self):
        token = RawToken.coerce({"type": "number", "value": 12, "line_number": 2, "char_pos": 4})
        assert token == RawToken(TokenKind.NUMBER, "12", 2, 4)

    def test_end_defaults_to_text_length(self):
        assert RawToken(TokenKind.NAME, "ab", 1, 1).end == (1, 3)

    def test_coerce_mapping_end(self):
        token = RawToken.coerce({
            "type": "string", "value": "hi", "line_number": 1, "char_pos": 1,
            "end_line": 1, "end_pos": 5,
        })
        assert token.end == (1, 5)

    def test_coerce_unknown_type_is_operator(self):
        assert RawToken.coerce({"type": "punct", "value": "+"}).kind == TokenKind.OPERATOR

    def test_coerce_line_break(self):
        token = RawToken.coerce({"type": "eol", "value": LINE_BREAK})
        assert token.kind == TokenKind.NEWLINE

    def test_coerce_type_case_insensitive(self):
        assert RawToken.coerce({"type": "NAME", "value": "a"}).kind == TokenKind.NAME
