"""Character classes, token kinds, and the character/token data structures."""

from __future__ import annotations

import unicodedata
from dataclasses import dataclass, field
from enum import Enum

# Value carried by the synthetic end-of-input character.
EOF = "EOF"


class CharClass(Enum):
    START = "Start"  # placeholder, never produced by a stream
    WHITESPACE = "Whitespace"
    NEWLINE = "NewLine"
    HASH = "Hash"  # #
    PERCENT = "Percent"  # %
    LETTER = "Letter"
    NUMBER = "Number"
    OPERATOR = "Operator"  # + - , / ( ) . * ~ and other punctuation/symbols
    END_OF_INPUT = "EndOfInput"
    OTHER = "Other"


class TokenKind(Enum):
    IDENTIFIER = "IDENTIFIER"
    HEXVALUE = "HEXVALUE"
    NUMBER = "NUMBER"
    PERCENT = "PERCENT"
    PLUS = "PLUS"
    MINUS = "MINUS"
    COMMA = "COMMA"
    SLASH = "SLASH"
    LPAREN = "LPAREN"
    RPAREN = "RPAREN"
    OPERATOR = "OPERATOR"  # any operator character without a kind of its own
    WHITESPACE = "WHITESPACE"
    ENDOFINPUT = "ENDOFINPUT"
    ERROR = "ERROR"


@dataclass(frozen=True, slots=True)
class Position:
    """Source position, 1-based line and column, 0-based code point offset."""

    line: int
    column: int
    offset: int


@dataclass(frozen=True, slots=True)
class Span:
    """Source range from start to end position."""

    start: Position
    end: Position


@dataclass(frozen=True, slots=True)
class Character:
    """A single classified code point with its source position."""

    value: str = ""
    kind: CharClass = CharClass.START
    index: int = 0
    line: int = 1
    column: int = 1

    @property
    def position(self) -> Position:
        return Position(self.line, self.column, self.index)

    @property
    def end(self) -> Position:
        """Position immediately after this character; line breaks end their line."""
        if self.kind is CharClass.END_OF_INPUT:
            return self.position
        if self.kind is CharClass.NEWLINE:
            return Position(self.line + 1, 1, self.index + 1)
        return Position(self.line, self.column + 1, self.index + 1)


@dataclass(frozen=True, slots=True)
class Token:
    """A lexical token. Only value and kind take part in equality."""

    value: str
    kind: TokenKind
    span: Span | None = field(default=None, compare=False, repr=False)


def classify(ch: str | None) -> CharClass:
    """Return the character class of a single raw character.

    Never raises: absent input and anything unrecognized map to OTHER.
    """
    if ch == EOF:
        return CharClass.END_OF_INPUT
    if not ch or len(ch) != 1:
        return CharClass.OTHER
    if ch in "\n\r":
        return CharClass.NEWLINE
    if ch.isspace():
        return CharClass.WHITESPACE
    if ch == "#":
        return CharClass.HASH
    if ch == "%":
        return CharClass.PERCENT
    if ch.isalpha():
        return CharClass.LETTER
    if ch.isdecimal():
        return CharClass.NUMBER
    if unicodedata.category(ch)[0] in "PS":
        return CharClass.OPERATOR
    return CharClass.OTHER


def span_of(chars: list[Character]) -> Span:
    """Span covering a non-empty run of characters."""
    return Span(chars[0].position, chars[-1].end)
