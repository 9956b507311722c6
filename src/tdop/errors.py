"""
TDOP Error Hierarchy
====================

This module defines the exception hierarchy for the parsing engine.
All exceptions inherit from TdopError, allowing callers to catch every
engine-related error with a single except clause if desired.

Exception Hierarchy
-------------------
TdopError (base)
├── ConfigurationError - grammar/parser set up incorrectly
│   └── GrammarError - bad registration or frozen symbol table
├── ParseError - errors tied to a position in the token stream
│   ├── UnknownOperatorError - token text has no symbol table entry
│   ├── UnexpectedTokenError - advance() expected a different token
│   ├── MissingNullDenotationError - symbol cannot begin an expression
│   ├── InvalidAssignmentTargetError - left side is not assignable
│   ├── DuplicateDeclarationError - name declared twice in one scope
│   └── TokenizeError - reference tokenizer failures
│       ├── UnterminatedStringError
│       └── InvalidCharacterError
└── ScopeError - scope push/pop discipline violated

Every parse error is fatal for the current parse. The parser never
resynchronizes; callers handling several independent units catch at the
unit boundary and may gather errors with ErrorCollector.

Error messages follow this format:
    filename:line:column: error: description
        source_line_text
            ^ (pointer to error location)
    hint: suggestion for fixing (when available)
"""

from dataclasses import dataclass
from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class TdopError(Exception):
    """
    Base exception for all parsing engine errors.

        try:
            tree = Parser(tokens, JavaScriptGrammar).parse()
        except TdopError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in source code for error reporting.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """
    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        """Format as 'filename:line:column' for error messages."""
        return f"{self.filename}:{self.line}:{self.column}"


# =============================================================================
# Configuration Errors
# =============================================================================

class ConfigurationError(TdopError):
    """
    The parser or grammar is not set up correctly.

    Raised before any token is consumed, for example when a grammar
    declares no language identifier.
    """
    pass


class GrammarError(ConfigurationError):
    """
    Invalid grammar registration.

    Raised while a grammar's build() runs when a denotation cannot be
    resolved to a callable, or afterwards when something tries to
    register into a frozen symbol table.
    """

    def __init__(self, message: str, language: Optional[str] = None):
        self.language = language
        if language:
            message = f"grammar '{language}': {message}"
        super().__init__(message)


# =============================================================================
# Parse Errors
# =============================================================================

class ParseError(TdopError):
    """
    Base exception for errors tied to a token position.

    Attributes:
        message: The error description
        location: Where in the source the error occurred (optional)
        hint: A suggestion for fixing the error (optional)
        source_line: The actual source text at the error location (optional)
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        self.source_line = source_line
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """
        Format the error message with location, source context, and hint.

        Example output:
            app.js:3:9: error: unknown operator '~~' (operator)
                a = b ~~ c;
                      ^
        """
        parts = []

        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        if self.source_line is not None and self.location is not None:
            parts.append(f"    {self.source_line}")
            if self.location.column > 0:
                padding = " " * (4 + self.location.column - 1)
                parts.append(f"{padding}^")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


class UnknownOperatorError(ParseError):
    """
    A raw token has no matching symbol table entry.

    This is the primary guard against a tokenizer producing text the
    grammar never registered.
    """

    def __init__(
        self,
        text: str,
        kind: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.text = text
        self.kind = kind
        super().__init__(
            f"unknown operator '{text}' ({kind})",
            location=location,
            source_line=source_line,
        )


class UnexpectedTokenError(ParseError):
    """
    The current token is not the one a grammar rule asked for.

    Raised by Parser.advance() when called with an expected id.
    """

    def __init__(
        self,
        expected: str,
        found: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.expected = expected
        self.found = found
        super().__init__(
            f"expected '{expected}' but got '{found}'",
            location=location,
            source_line=source_line,
        )


class MissingNullDenotationError(ParseError):
    """
    A symbol that can only appear in infix position began an expression.

    Example:
        * a        // '*' has no prefix behavior
    """

    def __init__(
        self,
        symbol_id: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.symbol_id = symbol_id
        super().__init__(
            f"'{symbol_id}' cannot begin an expression",
            location=location,
            hint="this symbol is only valid after an operand",
            source_line=source_line,
        )


class InvalidAssignmentTargetError(ParseError):
    """
    Left side of an assignment is not assignable.

    Examples of invalid targets:
        - 42 = x
        - (a + b) = x
    """

    def __init__(
        self,
        operator: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.operator = operator
        super().__init__(
            f"invalid left-hand side in '{operator}' assignment",
            location=location,
            hint="left side must be a name, a member access or a subscript",
            source_line=source_line,
        )


class DuplicateDeclarationError(ParseError):
    """
    Name declared more than once in the same scope.
    """

    def __init__(
        self,
        identifier: str,
        location: Optional[SourceLocation] = None,
        original_location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.identifier = identifier
        self.original_location = original_location

        hint = None
        if original_location:
            hint = f"'{identifier}' was first declared at {original_location}"

        super().__init__(
            f"redeclaration of '{identifier}'",
            location=location,
            hint=hint,
            source_line=source_line,
        )


# =============================================================================
# Tokenizer Errors
# =============================================================================

class TokenizeError(ParseError):
    """Error raised by the reference tokenizer."""
    pass


class UnterminatedStringError(TokenizeError):
    """
    Unterminated string literal.

    Raised when a string literal is not closed before the end of the
    line or file.
    """

    def __init__(
        self,
        quote: str = '"',
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        super().__init__(
            "unterminated string literal",
            location=location,
            hint=f"add closing {quote!r} to complete the string",
            source_line=source_line,
        )


class InvalidCharacterError(TokenizeError):
    """
    Character that cannot start any token.
    """

    def __init__(
        self,
        char: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.char = char
        super().__init__(
            f"invalid character '{char}' (0x{ord(char):02X})",
            location=location,
            source_line=source_line,
        )


# =============================================================================
# Scope Errors
# =============================================================================

class ScopeError(TdopError):
    """
    Scope push/pop discipline violated.

    Raised when a statement handler pops the root scope or pops a
    frame other than the one it pushed. This always indicates a bug
    in a grammar's denotation, never bad input.
    """
    pass


# =============================================================================
# Error Collection for Multiple Error Reporting
# =============================================================================

class ErrorCollector:
    """
    Collects errors from independent parse units for batch reporting.

    A single parse stops at its first error; a caller parsing many files
    keeps going with the next file and reports everything at the end.

    Example:
        collector = ErrorCollector(max_errors=20)

        for path in paths:
            try:
                parse_file(path)
            except TdopError as e:
                collector.add(e)
                if collector.should_stop():
                    break

        if collector.has_errors():
            print(collector.report())
    """

    def __init__(self, max_errors: int = 100):
        """
        Initialize the error collector.

        Args:
            max_errors: Maximum errors to collect before should_stop() is True
        """
        self.errors: list[TdopError] = []
        self.warnings: list[str] = []
        self.max_errors = max_errors

    def add(self, error: TdopError) -> None:
        """Add an error to the collection."""
        self.errors.append(error)

    def add_warning(self, message: str, location: Optional[SourceLocation] = None) -> None:
        """Add a warning message."""
        if location:
            self.warnings.append(f"{location}: warning: {message}")
        else:
            self.warnings.append(f"warning: {message}")

    def has_errors(self) -> bool:
        """Return True if any errors have been collected."""
        return len(self.errors) > 0

    def should_stop(self) -> bool:
        """Return True if max_errors has been reached."""
        return len(self.errors) >= self.max_errors

    def error_count(self) -> int:
        """Return the number of collected errors."""
        return len(self.errors)

    def report(self) -> str:
        """Format all errors and warnings for display."""
        lines = []

        for error in self.errors:
            lines.append(str(error))
            lines.append("")

        for warning in self.warnings:
            lines.append(warning)

        error_word = "error" if len(self.errors) == 1 else "errors"
        warning_word = "warning" if len(self.warnings) == 1 else "warnings"
        lines.append(
            f"\n{len(self.errors)} {error_word}, {len(self.warnings)} {warning_word}"
        )

        return "\n".join(lines)

    def clear(self) -> None:
        """Clear all collected errors and warnings."""
        self.errors.clear()
        self.warnings.clear()
