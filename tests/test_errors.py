"""Test error formatting and context snippets."""

import pytest

from valexpr.errors import EmptyBufferError, ParseError
from valexpr.parser import parse
from valexpr.tokens import Token, TokenKind


def _error(source: str) -> ParseError:
    with pytest.raises(ParseError) as exc_info:
        parse(source)
    return exc_info.value


class TestErrorFormatting:
    def test_full_block(self):
        assert _error("1 +").format() == (
            "error: expected operand after '+', found end of input\n"
            "  --> input.val:1:4\n"
            "  |\n"
            "1 | 1 +\n"
            "  |    ^\n"
            "  = while parsing BinaryExpression"
        )

    def test_str_is_formatted_block(self):
        err = _error("1 +")
        assert str(err) == err.format()

    def test_carets_span_token(self):
        formatted = _error("rgb(1 22").format()
        assert "rgb(1 22" in formatted
        assert "      ^^" in formatted

    def test_custom_filename(self):
        formatted = _error(")").format("colors.val")
        assert "--> colors.val:1:1" in formatted

    def test_multiline_source_line(self):
        formatted = _error("1\n2 )").format()
        assert "2:3" in formatted
        assert "2 | 2 )" in formatted

    def test_token_without_span_points_at_end(self):
        err = ParseError("boom", Token("x", TokenKind.ERROR), "Expression", "ab\ncd")
        assert (err.span.start.line, err.span.start.column) == (2, 3)
        assert err.format().startswith("error: boom\n")


class TestEmptyBufferError:
    def test_message(self):
        assert str(EmptyBufferError()) == "cannot create token from empty buffer"


class TestLineBreakStyles:
    def test_crlf_source(self):
        err = _error("1\r\n)")
        assert (err.span.start.line, err.span.start.column) == (2, 1)
        assert "2 | )\n" in err.format()

    def test_carriage_return_source(self):
        err = _error("1\r2 )")
        assert (err.span.start.line, err.span.start.column) == (2, 3)
        assert "2 | 2 )\n" in err.format()

    def test_form_feed_does_not_split_lines(self):
        err = _error("1\f)")
        assert (err.span.start.line, err.span.start.column) == (1, 3)
        assert "1 | 1\f)\n" in err.format()
