"""Tokenizer properties checked over a corpus of inputs."""

from __future__ import annotations

import pytest

from valexpr.lexer import tokenize
from valexpr.tokens import TokenKind

CORPUS = [
    "",
    " ",
    "word 123",
    "rgba(100 128 255 / 0.5)",
    "rgb(255, 0, 0)",
    "#ff00ff00",
    "50% 25%",
    "2 + 3 * 4",
    "(1 + 2) * 3",
    "-5",
    "a\nb\r\nc",
    "%%%",
    "#",
    "##",
    "1.5e3",
    "calc(100% - 2 * 3)",
    "\x00\x01 x",
    "café über",
    "  \t  ",
    "+-*/~",
    "12%5",
    "á",
]


@pytest.mark.parametrize("source", CORPUS)
def test_values_concatenate_to_source(source: str) -> None:
    assert "".join(t.value for t in tokenize(source)) == source


@pytest.mark.parametrize("source", CORPUS)
def test_retokenizing_is_idempotent(source: str) -> None:
    tokens = tokenize(source)
    assert tokenize("".join(t.value for t in tokens)) == tokens


@pytest.mark.parametrize("source", CORPUS)
def test_no_token_is_empty(source: str) -> None:
    assert all(t.value for t in tokenize(source))


@pytest.mark.parametrize(
    ("source", "kind"),
    [
        ("   ", TokenKind.WHITESPACE),
        ("abc", TokenKind.IDENTIFIER),
        ("123", TokenKind.NUMBER),
        ("*~.", TokenKind.OPERATOR),
        ("+", TokenKind.PLUS),
        ("\n\n", TokenKind.ERROR),
        ("%%", TokenKind.ERROR),
        ("\x00\x00", TokenKind.ERROR),
        ("#", TokenKind.HEXVALUE),
        ("##", TokenKind.HEXVALUE),
    ],
)
def test_single_class_input_is_one_token(source: str, kind: TokenKind) -> None:
    tokens = tokenize(source)
    assert len(tokens) == 1
    assert tokens[0].kind == kind
    assert tokens[0].value == source
