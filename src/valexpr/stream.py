"""Finite, non-restartable streams of classified characters."""

from __future__ import annotations

import unicodedata
from collections.abc import Iterator, Sequence

from valexpr.tokens import EOF, CharClass, Character, classify


class CharacterStream:
    """Iterate over a source string one classified code point at a time.

    After the last real character a single END_OF_INPUT character is
    produced; every later call to ``next()`` raises StopIteration.
    """

    def __init__(self, source: str, *, normalize: bool = False) -> None:
        if normalize:
            source = unicodedata.normalize("NFC", source)
        self._source = source
        self._pos = 0
        self._line = 1
        self._col = 1
        self._eof_emitted = False

    @property
    def source(self) -> str:
        return self._source

    def __iter__(self) -> Iterator[Character]:
        return self

    def __next__(self) -> Character:
        if self._pos >= len(self._source):
            if self._eof_emitted:
                raise StopIteration
            self._eof_emitted = True
            return self._at(EOF, CharClass.END_OF_INPUT)

        ch = self._source[self._pos]
        result = self._at(ch, classify(ch))
        self._advance(ch)
        return result

    def peek(self, offset: int = 0) -> str | None:
        """Return the raw character `offset` places ahead without consuming it."""
        if offset < 0:
            raise ValueError(f"peek offset must be non-negative, got {offset}")
        idx = self._pos + offset
        if idx < len(self._source):
            return self._source[idx]
        return None

    def is_eof(self) -> bool:
        """True once the END_OF_INPUT character has been produced."""
        return self._eof_emitted

    def at_error(self) -> Character:
        """Error sentinel at the current position."""
        return self._at("Error", CharClass.OTHER)

    def _at(self, value: str, kind: CharClass) -> Character:
        return Character(value, kind, self._pos, self._line, self._col)

    def _advance(self, ch: str) -> None:
        self._pos += 1
        # \r\n is one line break, counted at the \n
        if ch == "\n" or (ch == "\r" and self.peek() != "\n"):
            self._line += 1
            self._col = 1
        else:
            self._col += 1


class CharacterArrayStream:
    """Iterate over an already classified character sequence.

    The characters are produced unchanged, followed by one END_OF_INPUT
    character placed just past the last one.
    """

    def __init__(self, characters: Sequence[Character]) -> None:
        self._characters = list(characters)
        self._pos = 0
        self._eof_emitted = False

    def __iter__(self) -> Iterator[Character]:
        return self

    def __next__(self) -> Character:
        if self._pos < len(self._characters):
            ch = self._characters[self._pos]
            self._pos += 1
            return ch
        if self._eof_emitted:
            raise StopIteration
        self._eof_emitted = True
        return self._eof_character()

    def peek(self, offset: int = 0) -> str | None:
        if offset < 0:
            raise ValueError(f"peek offset must be non-negative, got {offset}")
        idx = self._pos + offset
        if idx < len(self._characters):
            return self._characters[idx].value
        return None

    def is_eof(self) -> bool:
        return self._eof_emitted

    def at_error(self) -> Character:
        if self._pos < len(self._characters):
            at = self._characters[self._pos]
        else:
            at = self._eof_character()
        return Character("Error", CharClass.OTHER, at.index, at.line, at.column)

    def _eof_character(self) -> Character:
        if not self._characters:
            return Character(EOF, CharClass.END_OF_INPUT, 0, 1, 1)
        last = self._characters[-1]
        return Character(EOF, CharClass.END_OF_INPUT, last.index + 1, last.line, last.column + 1)
