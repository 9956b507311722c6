"""
Top-Down Operator Precedence Parser
===================================

The Parser walks a raw token stream and builds a tree by asking each
symbol how to parse itself. It knows nothing about a particular language:
operators, keywords and the nodes they build all come from the grammar's
symbol table.

Parsing Protocol
----------------
- statement(): a symbol with a statement denotation (std) parses the
  whole statement; anything else is an expression statement.
- expression(rbp): the first symbol's null denotation (nud) produces the
  left operand; while the next symbol binds tighter than rbp, its left
  denotation (led) extends the tree.

Left-associative operators parse their right operand at their own
binding power, right-associative ones at one less:

    a - b - c   ->   (a - b) - c
    a = b = c   ->   a = (b = c)

Line Breaks
-----------
Line-break tokens never end an expression by themselves. advance() skips
them and remembers that one was skipped, so peek("\\n") can tell whether
a line break separated the previous token from the current one. A
statement ends where the next token cannot continue the expression.

Example Usage
-------------
>>> from tdop.lexer import Tokenizer
>>> from tdop.printer import TreePrinter
>>> from tdop.grammars.javascript import JavaScriptGrammar
>>> tokens = Tokenizer("a = b + c * d;").tokenize()
>>> statements = Parser(tokens, JavaScriptGrammar).parse()
>>> print(TreePrinter().format(statements[0]))
(= a (+ b (* c d)))
"""

import logging
from contextlib import contextmanager
from typing import Any, Iterable, Iterator, Mapping, Optional, Union

from tdop.errors import (
    GrammarError,
    MissingNullDenotationError,
    ScopeError,
    SourceLocation,
    UnexpectedTokenError,
    UnknownOperatorError,
)
from tdop.grammar import (
    END_ID,
    LITERAL_ID,
    GrammarRegistry,
    GrammarSource,
    default_registry,
)
from tdop.scope import Scope
from tdop.symbol import Arity, Symbol
from tdop.tokens import LINE_BREAK, RawToken, TokenKind

logger = logging.getLogger(__name__)

# Tokens consumed after an expression statement.
STATEMENT_TERMINATORS = (";", LINE_BREAK)


class Parser:
    """
    Pratt parser over one token sequence.

    A Parser is used for a single parse; it owns its token cursor and its
    scope chain. The symbol table it reads is shared with every other
    parser for the same language and is never modified.

    Attributes:
        tokens: Raw tokens being parsed
        position: Index of the next raw token to materialize
        token: Current symbol occurrence (None until the first advance)
        scope: Innermost scope frame
        symbol_table: The language's built symbol table
        filename: Source filename for error reporting
    """

    def __init__(
        self,
        tokens: Iterable[Union[RawToken, Mapping[str, Any]]],
        grammar: GrammarSource,
        *,
        registry: Optional[GrammarRegistry] = None,
        filename: str = "<input>",
        source_lines: Optional[list[str]] = None,
    ):
        """
        Initialize the parser.

        Args:
            tokens: Raw tokens from the tokenizer
            grammar: Grammar class or instance (built through the registry
                on first use) or an already built SymbolTable
            registry: Registry caching built tables (default: process-wide)
            filename: Source filename for error messages
            source_lines: Original source lines for error context

        Raises:
            ConfigurationError: If the grammar declares no language
        """
        registry = registry if registry is not None else default_registry
        self.symbol_table = registry.table_for(grammar)

        self.tokens = [RawToken.coerce(t) for t in tokens]
        self.position = 0
        self.token: Optional[Symbol] = None
        self.filename = filename
        self.source_lines = source_lines or []
        self.scope = Scope(filename=filename)

        # Set when advance() skipped a line break to reach the current token
        self._line_break = False

    # =========================================================================
    # Entry Point
    # =========================================================================

    def parse(self) -> list[Any]:
        """
        Parse the whole token stream.

        Returns:
            One tree node per top-level statement
        """
        logger.debug("parsing %s (%d tokens)", self.filename, len(self.tokens))
        statements = self.statements()
        logger.debug("parsed %d statements from %s", len(statements), self.filename)
        return statements

    @property
    def at_end(self) -> bool:
        """True once the current token is the end sentinel."""
        return self.token is not None and self.token.id == END_ID

    # =========================================================================
    # Token Cursor
    # =========================================================================

    def next(self) -> Symbol:
        """
        Materialize the next raw token as a symbol occurrence.

        Names resolve through the scope chain, literals copy the generic
        "(literal)" carrier, comments are skipped, and any other text must
        match a symbol id exactly. Past the last token the "(end)" sentinel
        is returned.

        Raises:
            UnknownOperatorError: If operator text has no table entry
        """
        while self.position < len(self.tokens):
            raw = self.tokens[self.position]
            self.position += 1

            if raw.kind == TokenKind.COMMENT:
                continue

            if raw.kind == TokenKind.NAME:
                symbol = self.scope.find(raw.value, self.symbol_table)
                arity = Arity.NAME
            elif raw.kind.is_literal:
                symbol = self.symbol_table.instantiate(LITERAL_ID)
                arity = Arity.LITERAL
            else:
                symbol_id = LINE_BREAK if raw.kind == TokenKind.NEWLINE else raw.value
                symbol = self.symbol_table.instantiate(symbol_id)
                if symbol is None:
                    raise UnknownOperatorError(
                        raw.value,
                        raw.kind.value,
                        location=SourceLocation(self.filename, raw.line_number, raw.char_pos),
                        source_line=self.source_line(raw.line_number),
                    )
                arity = Arity.OPERATOR

            symbol.value = raw.value
            symbol.arity = arity
            symbol.kind = raw.kind
            symbol.line_number = raw.line_number
            symbol.char_pos = raw.char_pos
            return symbol

        return self._end_symbol()

    def advance(self, expected_id: Optional[str] = None) -> None:
        """
        Move to the next symbol, skipping line breaks.

        Args:
            expected_id: If given, the current symbol must have this id

        Raises:
            UnexpectedTokenError: If the current symbol is not expected_id
        """
        if expected_id is not None and not self.peek(expected_id):
            found = self.token.id if self.token is not None else END_ID
            raise UnexpectedTokenError(
                expected_id,
                found,
                **self.error_context(self.token),
            )

        self._line_break = False
        self.token = self.next()
        self._skip_line_breaks()

    def peek(self, symbol_id: str) -> bool:
        """
        Check the current symbol's id without consuming it.

        Asking for the line-break id reports whether a line break came
        right before the current symbol; any other id is compared after
        skipping pending line breaks.
        """
        if symbol_id == LINE_BREAK:
            return self._line_break or (
                self.token is not None and self.token.id == LINE_BREAK
            )
        self._skip_line_breaks()
        return self.token is not None and self.token.id == symbol_id

    def _skip_line_breaks(self) -> None:
        while self.token is not None and self.token.id == LINE_BREAK:
            self._line_break = True
            self.token = self.next()

    def _end_symbol(self) -> Symbol:
        end = self.symbol_table.instantiate(END_ID)
        end.lbp = 0
        end.arity = Arity.OPERATOR
        if self.tokens:
            end.line_number, end.char_pos = self.tokens[-1].end
        return end

    # =========================================================================
    # Statements
    # =========================================================================

    def statements(self, terminators: Iterable[str] = ()) -> list[Any]:
        """
        Parse statements until a terminator or the end of input.

        Args:
            terminators: Ids that end the list (left unconsumed); "(end)"
                always ends it

        Returns:
            Tree nodes of the parsed statements; statements whose
            denotation returned None are left out
        """
        if self.token is None:
            self.advance()

        stop = set(terminators)
        stop.add(END_ID)

        statements = []
        while self.token.id not in stop:
            statement = self.statement()
            if statement is not None:
                statements.append(statement)
        return statements

    def statement(self) -> Any:
        """
        Parse a single statement.

        A symbol with a statement denotation is consumed, reserved in the
        current scope and asked to parse the statement. Otherwise an
        expression is parsed and trailing terminators are consumed.
        """
        if self.token is None:
            self.advance()

        token = self.token
        if token.std is not None:
            self.advance()
            self.scope.reserve(token)
            token.arity = Arity.STATEMENT
            return token.std(token, self)

        expression = self.expression(0)
        while self.token.id in STATEMENT_TERMINATORS:
            self.advance()
        return expression

    # =========================================================================
    # Expressions
    # =========================================================================

    def expression(self, rbp: int = 0) -> Any:
        """
        Parse an expression whose operators bind tighter than rbp.

        Raises:
            MissingNullDenotationError: If the first symbol cannot begin
                an expression
        """
        token = self.token
        if token.nud is None:
            raise MissingNullDenotationError(token.id, **self.error_context(token))
        self.advance()

        left = token.nud(token, self)
        while rbp < self.token.lbp:
            token = self.token
            if token.led is None:
                raise GrammarError(
                    f"'{token.id}' has binding power {token.lbp} but no left denotation",
                    self.symbol_table.language,
                )
            self.advance()
            left = token.led(token, self, left)
        return left

    # =========================================================================
    # Scopes
    # =========================================================================

    def new_scope(self) -> Scope:
        """Push a child scope of the current one and make it current."""
        self.scope = Scope(self.scope, self.filename)
        logger.debug("entered %r", self.scope)
        return self.scope

    def scope_pop(self) -> Scope:
        """
        Return to the enclosing scope.

        Raises:
            ScopeError: If the current scope is the root scope
        """
        if self.scope.parent is None:
            raise ScopeError("cannot pop the root scope")
        logger.debug("left %r", self.scope)
        self.scope = self.scope.parent
        return self.scope

    @contextmanager
    def scoped(self) -> Iterator[Scope]:
        """
        Run a block inside a new scope, popping it on every exit path.

            with parser.scoped() as scope:
                scope.define(parameter)
                body = parser.statements(["}"])

        Raises:
            ScopeError: If the block left a different scope current
        """
        scope = self.new_scope()
        try:
            yield scope
        finally:
            if self.scope is not scope:
                raise ScopeError(
                    f"unbalanced scope: expected depth {scope.depth}, "
                    f"found depth {self.scope.depth}"
                )
            self.scope_pop()

    # =========================================================================
    # Error Context
    # =========================================================================

    def source_line(self, line: int) -> Optional[str]:
        """Get source line for error reporting."""
        if 0 < line <= len(self.source_lines):
            return self.source_lines[line - 1]
        return None

    def error_context(self, symbol: Optional[Symbol]) -> dict[str, Any]:
        """Location and source line keyword arguments for a ParseError."""
        if symbol is None or symbol.line_number <= 0:
            return {"location": None, "source_line": None}
        return {
            "location": SourceLocation(self.filename, symbol.line_number, symbol.char_pos),
            "source_line": self.source_line(symbol.line_number),
        }
