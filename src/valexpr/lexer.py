"""Tokenizer: drives a character stream through the lexer context."""

from __future__ import annotations

import sys
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import TextIO

from valexpr.context import Context
from valexpr.debug import dump_characters, dump_tokens
from valexpr.stream import CharacterArrayStream, CharacterStream
from valexpr.tokens import CharClass, Character, Token


@dataclass(frozen=True, slots=True)
class LexerOptions:
    """Lexer configuration.

    merge_operators: consecutive operator characters form one token.
    normalize: apply Unicode NFC normalization to source strings.
    """

    merge_operators: bool = True
    normalize: bool = False


class Tokenizer:
    """Turn source text, or an already classified character sequence, into tokens."""

    def __init__(self, options: LexerOptions | None = None) -> None:
        self._options = options or LexerOptions()
        self._log: TextIO | None = None
        self._log_enabled = False
        self._message: str | None = None

    @property
    def options(self) -> LexerOptions:
        return self._options

    # ------------------------------------------------------------------
    # Logging toggles
    # ------------------------------------------------------------------

    def with_logging(self, message: str | None = None, file: TextIO | None = None) -> Tokenizer:
        """Mirror every stage to *file* (stderr when omitted) until switched off."""
        self._log_enabled = True
        self._log = file
        self._message = message
        return self

    def without_logging(self) -> Tokenizer:
        self._log_enabled = False
        self._log = None
        self._message = None
        return self

    def _sink(self) -> TextIO | None:
        if not self._log_enabled:
            return None
        return self._log if self._log is not None else sys.stderr

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def tokenize(self, source: str | Iterable[Character]) -> list[Token]:
        """Tokenize a string or a character stream and return the token list."""
        if isinstance(source, str):
            self._log_source(source)
            stream: Iterable[Character] = CharacterStream(
                source, normalize=self._options.normalize
            )
        elif isinstance(source, (CharacterStream, CharacterArrayStream)):
            stream = source
        else:
            # Plain sequences carry no end marker of their own
            stream = CharacterArrayStream(list(source))
        return self._run(stream)

    def get_characters(self, source: str) -> list[Character]:
        """Return the classified characters of *source*, without the end marker."""
        self._log_source(source)
        stream = CharacterStream(source, normalize=self._options.normalize)
        chars = [ch for ch in stream if ch.kind is not CharClass.END_OF_INPUT]
        sink = self._sink()
        if sink is not None:
            sink.write(f"RESULT ({len(chars)} CHARACTERS):\n")
            dump_characters(chars, file=sink)
        return chars

    def tokenize_characters(self, characters: Sequence[Character]) -> list[Token]:
        """Tokenize a pre-built character sequence."""
        sink = self._sink()
        if sink is not None:
            self._log_header(sink)
            sink.write(f"SOURCE:\t{len(characters)} characters\n")
        return self._run(CharacterArrayStream(characters))

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _run(self, stream: Iterable[Character]) -> list[Token]:
        ctx = Context(merge_operators=self._options.merge_operators)
        tokens: list[Token] = []
        for ch in stream:
            token = ctx.process_tokens(ch)
            if token is not None:
                tokens.append(token)
            if ch.kind is CharClass.END_OF_INPUT:
                break

        sink = self._sink()
        if sink is not None:
            sink.write(f"RESULT ({len(tokens)} TOKENS):\n")
            dump_tokens(tokens, file=sink)
        return tokens

    def _log_source(self, source: str) -> None:
        sink = self._sink()
        if sink is None:
            return
        self._log_header(sink)
        sink.write(f"SOURCE:\t{len(source)} characters {source!r}\n")

    def _log_header(self, sink: TextIO) -> None:
        sink.write(f"TOKENIZER: {self._message or 'tokenization'}\n")


def tokenize(source: str, options: LexerOptions | None = None) -> list[Token]:
    """Convenience function: tokenize source text and return token list."""
    return Tokenizer(options).tokenize(source)
