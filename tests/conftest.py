"""Shared test fixtures and helpers."""

from __future__ import annotations

import pytest

from valexpr.ast import Program
from valexpr.lexer import LexerOptions, Tokenizer
from valexpr.parser import parse
from valexpr.tokens import Token, TokenKind


@pytest.fixture
def lex():
    """Return a helper that tokenizes source with the given lexer options."""

    def _lex(source: str, **options: bool) -> list[Token]:
        return Tokenizer(LexerOptions(**options)).tokenize(source)

    return _lex


@pytest.fixture
def parse_source():
    """Return a helper that parses source and returns a Program."""

    def _parse(source: str, **options: bool) -> Program:
        return parse(source, LexerOptions(**options))

    return _parse


def assert_kinds(tokens: list[Token], expected: list[TokenKind]) -> None:
    """Assert that the token kinds match the expected list."""
    actual = [t.kind for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def assert_values(tokens: list[Token], expected: list[str]) -> None:
    """Assert that the token values match the expected list."""
    actual = [t.value for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def single_expression(program: Program):
    """Return the expression of a program holding exactly one statement."""
    assert len(program.body) == 1, f"Expected 1 statement, got {len(program.body)}"
    return program.body[0].expression
