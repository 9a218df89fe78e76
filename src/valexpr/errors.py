"""Error types with formatted source context."""

from __future__ import annotations

from valexpr.tokens import Position, Span, Token, TokenKind


class EmptyBufferError(Exception):
    """Raised when a token would be built from an empty character buffer.

    The transition table never allows this; seeing it means the lexer is broken.
    """

    def __init__(self) -> None:
        super().__init__("cannot create token from empty buffer")


class ParseError(Exception):
    """Raised on the first parse error, with the offending token and source context."""

    def __init__(self, message: str, token: Token, construct: str, source: str = "") -> None:
        self.message = message
        self.token = token
        self.construct = construct
        self.source = source
        self.span = token.span or _fallback_span(source)
        super().__init__(self.format())

    @property
    def at_end(self) -> bool:
        """True when the parse failed because the input ran out."""
        return self.token.kind == TokenKind.ENDOFINPUT

    def format(self, filename: str = "input.val") -> str:
        lines = _source_lines(self.source)
        line_idx = self.span.start.line - 1
        col = self.span.start.column

        if 0 <= line_idx < len(lines):
            source_line = lines[line_idx]
        else:
            source_line = ""

        # Underline the full span when on one line, otherwise to end of line
        if self.span.end.line == self.span.start.line:
            underline_len = max(1, self.span.end.column - col)
        else:
            underline_len = max(1, len(source_line) - col + 1)

        pad = " " * (col - 1)
        carets = "^" * underline_len

        line_num = str(self.span.start.line)
        gutter_width = len(line_num) + 1

        blank_gutter = " " * gutter_width + "|"
        line_gutter = f"{line_num:>{gutter_width - 1}} |"

        return (
            f"error: {self.message}\n"
            f"{' ' * gutter_width}--> {filename}:{self.span.start.line}:{col}\n"
            f"{blank_gutter}\n"
            f"{line_gutter} {source_line}\n"
            f"{blank_gutter} {pad}{carets}\n"
            f"{' ' * gutter_width}= while parsing {self.construct}"
        )


def _source_lines(source: str) -> list[str]:
    """Split on LF, CRLF and CR, the line breaks the character stream counts."""
    return source.replace("\r\n", "\n").replace("\r", "\n").split("\n")


def _fallback_span(source: str) -> Span:
    """End-of-source span for tokens built without position information."""
    lines = _source_lines(source)
    line = len(lines)
    column = len(lines[-1]) + 1
    pos = Position(line, column, len(source))
    return Span(pos, pos)
