"""Value expression parser: converts a token stream into an AST."""

from __future__ import annotations

from collections.abc import Callable

from valexpr.ast import (
    BinaryExpression,
    CallExpression,
    Expression,
    ExpressionStatement,
    GroupExpression,
    HexLiteral,
    Identifier,
    NumericLiteral,
    PercentLiteral,
    Program,
    UnaryExpression,
)
from valexpr.errors import ParseError
from valexpr.lexer import LexerOptions, tokenize
from valexpr.tokens import Position, Span, Token, TokenKind


class Parser:
    """Recursive descent parser for value expression token streams.

    Grammar, lowest precedence first (binary levels are left-associative):

        Program        := Expression* ENDOFINPUT
        Expression     := Additive
        Additive       := Multiplicative ((PLUS | MINUS) Multiplicative)*
        Multiplicative := Unary ((SLASH | OPERATOR) Unary)*
        Unary          := (PLUS | MINUS) Unary | Primary
        Primary        := NUMBER | HEXVALUE | PERCENT
                        | IDENTIFIER LPAREN Arguments? RPAREN
                        | IDENTIFIER | LPAREN Expression RPAREN

    Whitespace tokens, and ERROR tokens made only of line breaks, are
    dropped up front.
    """

    def __init__(self, tokens: list[Token], source: str = "") -> None:
        self._tokens = [t for t in tokens if not _is_layout(t)]
        if not self._tokens or self._tokens[-1].kind != TokenKind.ENDOFINPUT:
            self._tokens.append(_end_token(self._tokens or tokens))
        self._source = source
        self._pos = 0

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def _peek(self) -> Token:
        return self._tokens[self._pos]

    def _at(self, *kinds: TokenKind) -> bool:
        return self._peek().kind in kinds

    def _at_eof(self) -> bool:
        return self._peek().kind == TokenKind.ENDOFINPUT

    def _advance(self) -> Token:
        tok = self._tokens[self._pos]
        if tok.kind != TokenKind.ENDOFINPUT:
            self._pos += 1
        return tok

    def _expect(self, kind: TokenKind, message: str, construct: str) -> Token:
        tok = self._peek()
        if tok.kind != kind:
            raise self._error(message, tok, construct)
        return self._advance()

    def _starts_expression(self) -> bool:
        return self._peek().kind in _EXPRESSION_START

    def _span_from(self, start: Token) -> Span | None:
        """Span from the start of `start` to the end of the last consumed token."""
        if self._pos == 0:
            return None
        end = self._tokens[self._pos - 1].span
        if start.span is None or end is None:
            return None
        return Span(start.span.start, end.end)

    # ------------------------------------------------------------------
    # Program level
    # ------------------------------------------------------------------

    def parse(self) -> Program:
        first = self._peek()
        body: list[ExpressionStatement] = []

        while not self._at_eof():
            start = self._peek()
            expr = self._parse_expression()
            body.append(ExpressionStatement(expr, self._span_from(start)))

        span = self._span_from(first) if body else first.span
        return Program(tuple(body), span)

    def _parse_expression(self) -> Expression:
        return self._parse_additive()

    # ------------------------------------------------------------------
    # Binary and unary operators
    # ------------------------------------------------------------------

    def _parse_additive(self) -> Expression:
        start = self._peek()
        left = self._parse_multiplicative()

        while self._at(TokenKind.PLUS, TokenKind.MINUS):
            op = self._advance()
            right = self._parse_operand(op, self._parse_multiplicative, "BinaryExpression")
            left = BinaryExpression(op.value, left, right, self._span_from(start))

        return left

    def _parse_multiplicative(self) -> Expression:
        start = self._peek()
        left = self._parse_unary()

        while self._at(TokenKind.SLASH, TokenKind.OPERATOR):
            op = self._advance()
            right = self._parse_operand(op, self._parse_unary, "BinaryExpression")
            left = BinaryExpression(op.value, left, right, self._span_from(start))

        return left

    def _parse_unary(self) -> Expression:
        # Collected iteratively so long sign chains do not recurse
        ops: list[Token] = []
        while self._at(TokenKind.PLUS, TokenKind.MINUS):
            ops.append(self._advance())

        if not ops:
            return self._parse_primary()

        expr = self._parse_operand(ops[-1], self._parse_primary, "UnaryExpression")
        for op in reversed(ops):
            expr = UnaryExpression(op.value, expr, self._span_from(op))
        return expr

    def _parse_operand(
        self, op: Token, parse_fn: Callable[[], Expression], construct: str
    ) -> Expression:
        if not self._starts_expression():
            tok = self._peek()
            if tok.kind == TokenKind.ENDOFINPUT:
                message = f"expected operand after '{op.value}', found end of input"
            else:
                message = f"expected operand after '{op.value}', found {_describe(tok)}"
            raise self._error(message, tok, construct)
        return parse_fn()

    # ------------------------------------------------------------------
    # Primary expressions
    # ------------------------------------------------------------------

    def _parse_primary(self) -> Expression:
        tok = self._peek()

        if tok.kind == TokenKind.NUMBER:
            self._advance()
            return NumericLiteral(self._to_int(tok, tok.value, "NumericLiteral"), tok.span)

        if tok.kind == TokenKind.PERCENT:
            self._advance()
            return PercentLiteral(self._to_int(tok, tok.value[:-1], "PercentLiteral"), tok.span)

        if tok.kind == TokenKind.HEXVALUE:
            self._advance()
            return HexLiteral(tok.value, tok.span)

        if tok.kind == TokenKind.IDENTIFIER:
            self._advance()
            ident = Identifier(tok.value, tok.span)
            if self._at(TokenKind.LPAREN):
                return self._parse_call(ident, tok)
            return ident

        if tok.kind == TokenKind.LPAREN:
            return self._parse_group()

        if tok.kind == TokenKind.ENDOFINPUT:
            raise self._error("expected expression, found end of input", tok, "Expression")
        if tok.kind == TokenKind.ERROR:
            raise self._error(f"unrecognized input {tok.value!r}", tok, "Expression")
        raise self._error(f"expected expression, found {_describe(tok)}", tok, "Expression")

    def _parse_call(self, callee: Identifier, start: Token) -> CallExpression:
        self._advance()  # consume LPAREN
        args: list[Expression] = []

        if not self._at(TokenKind.RPAREN):
            args.append(self._parse_argument(callee))
            while self._at(TokenKind.COMMA):
                self._advance()
                args.append(self._parse_argument(callee))

        self._expect(
            TokenKind.RPAREN,
            f"expected ')' to close call to '{callee.name}'",
            "CallExpression",
        )
        return CallExpression(callee, tuple(args), self._span_from(start))

    def _parse_argument(self, callee: Identifier) -> Expression:
        if not self._starts_expression():
            tok = self._peek()
            found = "end of input" if tok.kind == TokenKind.ENDOFINPUT else _describe(tok)
            raise self._error(
                f"expected argument in call to '{callee.name}', found {found}",
                tok,
                "CallExpression",
            )
        return self._parse_expression()

    def _parse_group(self) -> GroupExpression:
        start = self._advance()  # consume LPAREN

        if not self._starts_expression():
            tok = self._peek()
            found = "end of input" if tok.kind == TokenKind.ENDOFINPUT else _describe(tok)
            raise self._error(f"expected expression after '(', found {found}", tok, "GroupExpression")

        expr = self._parse_expression()
        self._expect(TokenKind.RPAREN, "expected ')' to close group", "GroupExpression")
        return GroupExpression(expr, self._span_from(start))

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _error(self, message: str, tok: Token, construct: str) -> ParseError:
        return ParseError(message, tok, construct, self._source)

    def _to_int(self, tok: Token, digits: str, construct: str) -> int:
        # int() refuses digit strings past the interpreter's conversion limit
        try:
            return int(digits)
        except ValueError:
            raise self._error(
                f"numeric literal too long ({len(digits)} digits)", tok, construct
            ) from None


# Module-level constants
_EXPRESSION_START: frozenset[TokenKind] = frozenset(
    {
        TokenKind.NUMBER,
        TokenKind.PERCENT,
        TokenKind.HEXVALUE,
        TokenKind.IDENTIFIER,
        TokenKind.LPAREN,
        TokenKind.PLUS,
        TokenKind.MINUS,
    }
)


def _is_layout(tok: Token) -> bool:
    if tok.kind == TokenKind.WHITESPACE:
        return True
    return tok.kind == TokenKind.ERROR and tok.value.strip("\r\n") == ""


def _describe(tok: Token) -> str:
    return f"{tok.kind.value} {tok.value!r}"


def _end_token(tokens: list[Token]) -> Token:
    """Synthetic end-of-input token placed after the last real token."""
    span = tokens[-1].span if tokens else Span(Position(1, 1, 0), Position(1, 1, 0))
    if span is None:
        return Token("", TokenKind.ENDOFINPUT)
    return Token("", TokenKind.ENDOFINPUT, Span(span.end, span.end))


def parse_tokens(tokens: list[Token], source: str = "") -> Program:
    """Parse an existing token list; `source` is only used for error context."""
    return Parser(tokens, source).parse()


def parse(source: str, options: LexerOptions | None = None) -> Program:
    """Convenience function: tokenize and parse source text into a Program AST."""
    return Parser(tokenize(source, options), source).parse()
