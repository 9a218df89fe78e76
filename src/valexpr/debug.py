"""Diagnostic dumps of characters, tokens and AST trees to a text sink."""

from __future__ import annotations

import sys
from collections.abc import Iterable
from typing import Any, TextIO

from valexpr.ast import (
    BinaryExpression,
    CallExpression,
    ExpressionStatement,
    GroupExpression,
    HexLiteral,
    Identifier,
    Node,
    NumericLiteral,
    PercentLiteral,
    Program,
    UnaryExpression,
)
from valexpr.tokens import Character, Token


def dump_characters(chars: Iterable[Character], *, file: TextIO = sys.stderr) -> None:
    """Print one line per character: position, class and value."""
    for ch in chars:
        file.write(f"  {ch.line}:{ch.column} [{ch.index}] {ch.kind.value} {ch.value!r}\n")


def dump_tokens(tokens: Iterable[Token], *, file: TextIO = sys.stderr) -> None:
    """Print one line per token: kind and value."""
    for tok in tokens:
        file.write(f"  {tok.kind.value} {tok.value!r}\n")


def dump_ast(program: Program, *, file: TextIO = sys.stderr) -> None:
    """Print a human-readable AST tree to *file*."""
    file.write("Program\n")
    for stmt in program.body:
        file.write(f"{_indent(1)}ExpressionStatement\n")
        _dump_expr(stmt.expression, 2, file)


def _indent(depth: int) -> str:
    return "  " * depth


def _dump_expr(node: Node, depth: int, f: TextIO) -> None:
    if isinstance(node, NumericLiteral):
        f.write(f"{_indent(depth)}NumericLiteral {node.value}\n")
    elif isinstance(node, PercentLiteral):
        f.write(f"{_indent(depth)}PercentLiteral {node.value}%\n")
    elif isinstance(node, HexLiteral):
        f.write(f"{_indent(depth)}HexLiteral {node.value}\n")
    elif isinstance(node, Identifier):
        f.write(f"{_indent(depth)}Identifier {node.name}\n")
    elif isinstance(node, BinaryExpression):
        f.write(f"{_indent(depth)}BinaryExpression {node.operator}\n")
        _dump_expr(node.left, depth + 1, f)
        _dump_expr(node.right, depth + 1, f)
    elif isinstance(node, UnaryExpression):
        f.write(f"{_indent(depth)}UnaryExpression {node.operator}\n")
        _dump_expr(node.argument, depth + 1, f)
    elif isinstance(node, CallExpression):
        f.write(f"{_indent(depth)}CallExpression {node.callee.name}\n")
        for arg in node.arguments:
            _dump_expr(arg, depth + 1, f)
    elif isinstance(node, GroupExpression):
        f.write(f"{_indent(depth)}GroupExpression\n")
        _dump_expr(node.expression, depth + 1, f)


def ast_to_dict(node: Node) -> dict[str, Any]:
    """Convert a node and its children to plain JSON-ready data."""
    result: dict[str, Any] = {"type": node.kind.value}
    if isinstance(node, Program):
        result["body"] = [ast_to_dict(stmt) for stmt in node.body]
    elif isinstance(node, (ExpressionStatement, GroupExpression)):
        result["expression"] = ast_to_dict(node.expression)
    elif isinstance(node, BinaryExpression):
        result["operator"] = node.operator
        result["left"] = ast_to_dict(node.left)
        result["right"] = ast_to_dict(node.right)
    elif isinstance(node, UnaryExpression):
        result["operator"] = node.operator
        result["argument"] = ast_to_dict(node.argument)
    elif isinstance(node, CallExpression):
        result["callee"] = ast_to_dict(node.callee)
        result["arguments"] = [ast_to_dict(arg) for arg in node.arguments]
    elif isinstance(node, Identifier):
        result["name"] = node.name
    else:
        result["value"] = node.value
    return result
