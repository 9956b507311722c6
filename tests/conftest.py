"""
tdop Test Configuration
=======================

Shared fixtures for the parser test suite.

It provides:
- CalcGrammar, a small arithmetic grammar with one statement keyword
  and blocks that open scopes
- parse/sexp helpers that run source text through the reference
  tokenizer and the parser
"""

import pytest

from tdop.grammar import Grammar, GrammarRegistry
from tdop.lexer import Tokenizer
from tdop.parser import Parser
from tdop.printer import TreePrinter


class CalcGrammar(Grammar):
    """Arithmetic with assignment, grouping, a constant and print."""

    language = "calc"

    def build(self):
        for delimiter in (";", ")", "}"):
            self.symbol(delimiter)

        self.define_assignment("=")
        self.define_operator("+", 50)
        self.define_operator("-", 50)
        self.define_operator("*", 60)
        self.define_operator("/", 60)
        self.define_operator_right_assoc("^", 70)

        self.define_prefix("-")
        self.define_prefix("(", "nud_group")
        self.define_constant("pi", 3.14159)

        self.define_statement("print", "std_print")
        self.define_statement("{", "std_block")

    def nud_group(self, symbol, parser):
        expression = parser.expression(0)
        parser.advance(")")
        return expression

    def std_print(self, symbol, parser):
        symbol.first = parser.expression(0)
        if parser.peek(";"):
            parser.advance(";")
        return symbol

    def std_block(self, symbol, parser):
        with parser.scoped():
            symbol.first = parser.statements(["}"])
        parser.advance("}")
        return symbol


def make_parser(source: str, grammar=CalcGrammar, registry=None) -> Parser:
    """Tokenize source text and return a parser over it."""
    tokens = Tokenizer(source, "<test>").tokenize()
    return Parser(
        tokens,
        grammar,
        registry=registry,
        filename="<test>",
        source_lines=source.splitlines(),
    )


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def calc_grammar():
    """Fixture: the arithmetic test grammar class."""
    return CalcGrammar


@pytest.fixture
def registry():
    """Fixture: a private registry so tests never share built tables."""
    return GrammarRegistry()


@pytest.fixture
def parser_for():
    """Fixture: build a Parser for source text (CalcGrammar by default)."""
    return make_parser


@pytest.fixture
def parse():
    """Fixture: parse source text and return the statement list."""
    def _parse(source: str, grammar=CalcGrammar):
        return make_parser(source, grammar).parse()
    return _parse


@pytest.fixture
def sexp():
    """Fixture: parse source text and format each statement as an s-expression."""
    printer = TreePrinter()

    def _sexp(source: str, grammar=CalcGrammar):
        statements = make_parser(source, grammar).parse()
        return [printer.format(statement) for statement in statements]
    return _sexp
