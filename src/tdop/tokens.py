"""
Raw Token Contract
==================

The parser consumes raw tokens produced by an external tokenizer. This
module fixes the shape of those tokens; it performs no scanning itself.

Each raw token carries:

- kind: the lexical category (TokenKind)
- value: the literal source text (unquoted for strings)
- line_number: source line (1-indexed)
- char_pos: source column (1-indexed)
- end_line, end_pos: where the token's source text ends (optional)

Tokenizers that predate RawToken may hand over plain mappings with the
keys ``type``, ``value``, ``line_number`` and ``char_pos``;
RawToken.coerce() normalizes them.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Union


class TokenKind(Enum):
    """Lexical category of a raw token."""

    NAME = "name"           # identifiers and word keywords
    STRING = "string"       # string literals
    NUMBER = "number"       # numeric literals
    REGEX = "regex"         # regular expression literals
    COMMENT = "comment"     # skipped by the parser
    OPERATOR = "operator"   # punctuators and operator text
    NEWLINE = "newline"     # soft line breaks

    @property
    def is_literal(self) -> bool:
        """Return True for kinds the parser turns into literal symbols."""
        return self in (TokenKind.STRING, TokenKind.NUMBER, TokenKind.REGEX)


LINE_BREAK = "\n"


@dataclass(frozen=True)
class RawToken:
    """
    A single token as handed over by the tokenizer.

    Attributes:
        kind: The TokenKind classification
        value: Source text of the token
        line_number: Line in source (1-indexed)
        char_pos: Column in source (1-indexed)
        end_line: Line just past the token's source text (0 if unknown)
        end_pos: Column just past the token's source text (0 if unknown)
    """
    kind: TokenKind
    value: str
    line_number: int = 1
    char_pos: int = 1
    end_line: int = field(default=0, compare=False)
    end_pos: int = field(default=0, compare=False)

    @property
    def end(self) -> tuple[int, int]:
        """
        Position just past the token.

        Without a recorded end the value is assumed to be the source text
        on one line, which is not true for decoded strings.
        """
        if self.end_line:
            return self.end_line, self.end_pos
        return self.line_number, self.char_pos + len(self.value)

    def __repr__(self) -> str:
        return f"RawToken({self.kind.name}, {self.value!r}, {self.line_number}:{self.char_pos})"

    @classmethod
    def coerce(cls, token: Union["RawToken", Mapping[str, Any]]) -> "RawToken":
        """
        Normalize a token given either as a RawToken or as a mapping.

        Mapping tokens use the ``type`` key for their kind. Any type name
        that is not a known kind is treated as operator text, except a
        bare line break which becomes NEWLINE.
        """
        if isinstance(token, RawToken):
            return token

        value = str(token.get("value", ""))
        type_name = str(token.get("type", "operator")).lower()
        try:
            kind = TokenKind(type_name)
        except ValueError:
            kind = TokenKind.NEWLINE if value == LINE_BREAK else TokenKind.OPERATOR

        return cls(
            kind=kind,
            value=value,
            line_number=int(token.get("line_number", 1)),
            char_pos=int(token.get("char_pos", 1)),
            end_line=int(token.get("end_line", 0)),
            end_pos=int(token.get("end_pos", 0)),
        )
