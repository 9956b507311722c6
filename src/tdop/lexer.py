"""
Reference Tokenizer
===================

This module implements a tokenizer for C-like source text that produces
the raw tokens the parser consumes. The parser never depends on it; any
tokenizer that yields RawToken objects (or equivalent mappings) will do.

Token Categories
----------------
- NAME: identifiers and word keywords (keywords are resolved by the
  grammar, not here)
- NUMBER: decimal integers, decimals with fraction/exponent, 0x hex
- STRING: 'single' or "double" quoted, escapes decoded
- COMMENT: // line comments and /* block */ comments
- NEWLINE: one token per line break, value "\\n"
- OPERATOR: punctuators, longest match first

Positions are 1-indexed lines and columns.

Example Usage
-------------
>>> from tdop.lexer import Tokenizer
>>> for token in Tokenizer("a = b // note").tokenize():
...     print(token)
RawToken(NAME, 'a', 1:1)
RawToken(OPERATOR, '=', 1:3)
RawToken(NAME, 'b', 1:5)
RawToken(COMMENT, '// note', 1:7)
"""

import string
from typing import Iterator, Optional

from tdop.errors import (
    InvalidCharacterError,
    SourceLocation,
    TokenizeError,
    UnterminatedStringError,
)
from tdop.tokens import LINE_BREAK, RawToken, TokenKind


# Punctuators, longest first so the scanner can take the first match.
OPERATORS = sorted(
    [
        "===", "!==", "<<=", ">>=", ">>>",
        "==", "!=", "<=", ">=", "&&", "||", "++", "--", "<<", ">>",
        "+=", "-=", "*=", "/=", "%=", "&=", "|=", "^=", "=>",
        "+", "-", "*", "/", "%", "=", "<", ">", "!", "&", "|", "^", "~",
        "?", ":", ";", ",", ".", "(", ")", "[", "]", "{", "}",
    ],
    key=len,
    reverse=True,
)


class Tokenizer:
    """
    Tokenizes C-like source text into RawToken objects.

    Usage:
        tokens = list(Tokenizer(source_text, filename).tokenize())

    Attributes:
        source: The source text being tokenized
        filename: Name of the source file (for error reporting)
    """

    IDENT_START = string.ascii_letters + "_$"
    IDENT_CHARS = string.ascii_letters + string.digits + "_$"

    ESCAPE_SEQUENCES = {
        "n": "\n",
        "r": "\r",
        "t": "\t",
        "b": "\b",
        "f": "\f",
        "v": "\v",
        "0": "\0",
        "\\": "\\",
        "'": "'",
        '"': '"',
    }

    def __init__(self, source: str, filename: str = "<input>", line_number: int = 1):
        """
        Initialize the tokenizer.

        Args:
            source: The source text to tokenize
            filename: Name of the source file (for error messages)
            line_number: Starting line number
        """
        self.source = source
        self.filename = filename

        self._pos = 0
        self._line = line_number
        self._column = 1
        self._line_start_pos = 0

    def tokenize(self) -> Iterator[RawToken]:
        """
        Generate raw tokens from the source text.

        Raises:
            TokenizeError: If invalid text is encountered
        """
        while not self._at_end():
            char = self._peek()

            if char in " \t\r\f\v":
                self._advance()
                continue

            token = self._scan_token()
            if token is not None:
                yield token

    # =========================================================================
    # Character Access Methods
    # =========================================================================

    def _at_end(self) -> bool:
        return self._pos >= len(self.source)

    def _peek(self, offset: int = 0) -> str:
        """Character at current position + offset, or "" past the end."""
        pos = self._pos + offset
        if pos >= len(self.source):
            return ""
        return self.source[pos]

    def _advance(self) -> str:
        """Consume one character, tracking line and column."""
        if self._at_end():
            return ""

        char = self.source[self._pos]
        self._pos += 1

        if char == "\n":
            self._line += 1
            self._column = 1
            self._line_start_pos = self._pos
        else:
            self._column += 1

        return char

    def _make_token(self, kind: TokenKind, value: str, line: int, column: int) -> RawToken:
        return RawToken(
            kind=kind,
            value=value,
            line_number=line,
            char_pos=column,
            end_line=self._line,
            end_pos=self._column,
        )

    def _location(self, line: Optional[int] = None, column: Optional[int] = None) -> SourceLocation:
        return SourceLocation(self.filename, line or self._line, column or self._column)

    def _get_current_line(self) -> str:
        """Get the current line of source text for error reporting."""
        line_end = self.source.find("\n", self._line_start_pos)
        if line_end == -1:
            line_end = len(self.source)
        return self.source[self._line_start_pos:line_end]

    # =========================================================================
    # Token Scanning
    # =========================================================================

    def _scan_token(self) -> Optional[RawToken]:
        start_line = self._line
        start_column = self._column
        char = self._peek()

        if char == "\n":
            self._advance()
            return self._make_token(TokenKind.NEWLINE, LINE_BREAK, start_line, start_column)

        if char == "/" and self._peek(1) in ("/", "*"):
            return self._scan_comment(start_line, start_column)

        if char in self.IDENT_START:
            return self._scan_identifier(start_line, start_column)

        if char.isdigit() or (char == "." and self._peek(1).isdigit()):
            return self._scan_number(start_line, start_column)

        if char in ("'", '"'):
            return self._scan_string(char, start_line, start_column)

        return self._scan_operator(start_line, start_column)

    def _scan_comment(self, start_line: int, start_column: int) -> RawToken:
        """
        Scan a // or /* */ comment, keeping its delimiters.

        Raises:
            TokenizeError: If a block comment is not terminated
        """
        chars = [self._advance(), self._advance()]

        if chars[1] == "/":
            while not self._at_end() and self._peek() != "\n":
                chars.append(self._advance())
            return self._make_token(TokenKind.COMMENT, "".join(chars), start_line, start_column)

        while not self._at_end():
            if self._peek() == "*" and self._peek(1) == "/":
                chars.append(self._advance())
                chars.append(self._advance())
                return self._make_token(TokenKind.COMMENT, "".join(chars), start_line, start_column)
            chars.append(self._advance())

        raise TokenizeError(
            "unterminated block comment",
            self._location(start_line, start_column),
            hint="add closing */ to terminate the comment",
        )

    def _scan_identifier(self, start_line: int, start_column: int) -> RawToken:
        chars = []
        while self._peek() and self._peek() in self.IDENT_CHARS:
            chars.append(self._advance())
        return self._make_token(TokenKind.NAME, "".join(chars), start_line, start_column)

    def _scan_number(self, start_line: int, start_column: int) -> RawToken:
        """
        Scan a numeric literal, keeping its source text.

        Handles 42, 3.14, .5, 1e-3 and 0x7F.
        """
        chars = []

        if self._peek() == "0" and self._peek(1) in ("x", "X"):
            chars.append(self._advance())
            chars.append(self._advance())
            while self._peek() and self._peek() in string.hexdigits:
                chars.append(self._advance())
            if len(chars) == 2:
                raise TokenizeError(
                    "expected hexadecimal digits after '0x'",
                    self._location(start_line, start_column),
                    source_line=self._get_current_line(),
                )
            return self._make_token(TokenKind.NUMBER, "".join(chars), start_line, start_column)

        while self._peek().isdigit():
            chars.append(self._advance())

        if self._peek() == "." and self._peek(1).isdigit():
            chars.append(self._advance())
            while self._peek().isdigit():
                chars.append(self._advance())

        if self._peek() in ("e", "E"):
            sign = self._peek(1) in ("+", "-")
            if self._peek(2 if sign else 1).isdigit():
                chars.append(self._advance())
                if sign:
                    chars.append(self._advance())
                while self._peek().isdigit():
                    chars.append(self._advance())

        return self._make_token(TokenKind.NUMBER, "".join(chars), start_line, start_column)

    def _scan_string(self, quote: str, start_line: int, start_column: int) -> RawToken:
        """
        Scan a quoted string literal; the token value is the decoded text.

        Raises:
            UnterminatedStringError: If the closing quote is missing
        """
        self._advance()

        chars = []
        while not self._at_end():
            char = self._peek()

            if char == quote:
                self._advance()
                return self._make_token(TokenKind.STRING, "".join(chars), start_line, start_column)

            if char == "\n":
                break

            if char == "\\":
                self._advance()
                chars.append(self._scan_escape_sequence())
            else:
                chars.append(self._advance())

        raise UnterminatedStringError(
            quote,
            self._location(start_line, start_column),
            self._get_current_line(),
        )

    def _scan_escape_sequence(self) -> str:
        if self._at_end():
            raise TokenizeError("unexpected end of input in escape sequence", self._location())

        char = self._advance()
        if char in self.ESCAPE_SEQUENCES:
            return self.ESCAPE_SEQUENCES[char]

        if char in ("x", "u"):
            width = 2 if char == "x" else 4
            digits = []
            for _ in range(width):
                if self._peek() and self._peek() in string.hexdigits:
                    digits.append(self._advance())
                else:
                    break
            if len(digits) != width:
                raise TokenizeError(
                    f"expected {width} hexadecimal digits after '\\{char}'",
                    self._location(),
                    source_line=self._get_current_line(),
                )
            return chr(int("".join(digits), 16))

        # Unknown escapes stand for the character itself
        return char

    def _scan_operator(self, start_line: int, start_column: int) -> RawToken:
        for operator in OPERATORS:
            if self.source.startswith(operator, self._pos):
                for _ in operator:
                    self._advance()
                return self._make_token(TokenKind.OPERATOR, operator, start_line, start_column)

        raise InvalidCharacterError(
            self._peek(),
            self._location(start_line, start_column),
            self._get_current_line(),
        )
