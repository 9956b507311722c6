"""
tdop - Top-Down Operator Precedence Parsing Engine
==================================================

This package provides a reusable Pratt parser: a flat token stream is
turned into a parse tree by asking each symbol of a per-language table
how it begins an expression, continues one, or parses a statement.

Main Components
---------------
- **symbol**: Symbol templates, arities and the default denotations
- **scope**: Lexical frames resolving identifiers, innermost first
- **grammar**: Registration DSL, symbol tables and the language registry
- **parser**: Token cursor, statement and expression loops, scope stack

Supporting modules:

- **lexer**: Reference tokenizer for C-like source text
- **printer**: Renders symbol trees as s-expressions or outlines
- **grammars**: Bundled grammars (a JavaScript subset)
- **cli**: The tdop-parse command-line tool

Quick Start
-----------
Define a grammar:
    >>> from tdop import Grammar, Parser, Tokenizer, TreePrinter
    >>> class Calc(Grammar):
    ...     language = "calc"
    ...     def build(self):
    ...         self.define_operator("+", 50)
    ...         self.define_operator("*", 60)
    ...         self.define_assignment("=")

Parse with it:
    >>> tokens = Tokenizer("x = 1 + 2 * 3").tokenize()
    >>> tree = Parser(tokens, Calc).parse()
    >>> TreePrinter().format(tree[0])
    '(= x (+ 1 (* 2 3)))'

Or use the command-line tool:
    $ tdop-parse app.js
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from tdop.errors import (
    TdopError,
    ConfigurationError,
    GrammarError,
    ParseError,
    UnknownOperatorError,
    UnexpectedTokenError,
    MissingNullDenotationError,
    InvalidAssignmentTargetError,
    DuplicateDeclarationError,
    TokenizeError,
    UnterminatedStringError,
    InvalidCharacterError,
    ScopeError,
    SourceLocation,
    ErrorCollector,
)
from tdop.tokens import RawToken, TokenKind, LINE_BREAK
from tdop.symbol import (
    Arity,
    Symbol,
    nud_itself,
    nud_prefix,
    nud_constant,
    led_infix,
    led_infixr,
    led_assignment,
)
from tdop.scope import Scope
from tdop.grammar import (
    Grammar,
    GrammarRegistry,
    SymbolTable,
    default_registry,
)
from tdop.parser import Parser
from tdop.lexer import Tokenizer
from tdop.printer import TreePrinter

__all__ = [
    "__version__",
    # Core
    "Parser",
    "Grammar",
    "GrammarRegistry",
    "SymbolTable",
    "default_registry",
    "Scope",
    "Symbol",
    "Arity",
    "nud_itself",
    "nud_prefix",
    "nud_constant",
    "led_infix",
    "led_infixr",
    "led_assignment",
    # Tokens
    "RawToken",
    "TokenKind",
    "LINE_BREAK",
    "Tokenizer",
    # Output
    "TreePrinter",
    # Exception hierarchy
    "TdopError",
    "ConfigurationError",
    "GrammarError",
    "ParseError",
    "UnknownOperatorError",
    "UnexpectedTokenError",
    "MissingNullDenotationError",
    "InvalidAssignmentTargetError",
    "DuplicateDeclarationError",
    "TokenizeError",
    "UnterminatedStringError",
    "InvalidCharacterError",
    "ScopeError",
    "SourceLocation",
    "ErrorCollector",
]
