"""Tokenizer and parser for CSS-like value expressions."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from valexpr.ast import Program
    from valexpr.lexer import LexerOptions
    from valexpr.tokens import Token

__version__ = "0.1.0"


def tokenize(source: str, options: LexerOptions | None = None) -> list[Token]:
    """Tokenize source text into a flat token list."""
    from valexpr.lexer import tokenize as _tokenize

    return _tokenize(source, options)


def parse(source: str, options: LexerOptions | None = None) -> Program:
    """Tokenize and parse source text into a Program AST."""
    from valexpr.parser import parse as _parse

    return _parse(source, options)
