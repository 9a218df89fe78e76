"""Minimal LSP server for value expressions, diagnostics only."""

from __future__ import annotations

from lsprotocol.types import (
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_OPEN,
    Diagnostic,
    DiagnosticSeverity,
    DidChangeTextDocumentParams,
    DidOpenTextDocumentParams,
    Position,
    PublishDiagnosticsParams,
    Range,
    TextDocumentSyncKind,
)
from pygls.lsp.server import LanguageServer

from valexpr.errors import ParseError
from valexpr.parser import parse

server = LanguageServer("valexpr-lsp", "0.1.0", text_document_sync_kind=TextDocumentSyncKind.Full)


def _diagnostic(exc: ParseError) -> Diagnostic:
    # ParseError positions are 1-based, LSP positions 0-based
    start = exc.span.start
    end = exc.span.end
    return Diagnostic(
        range=Range(
            start=Position(line=start.line - 1, character=start.column - 1),
            end=Position(line=end.line - 1, character=end.column - 1),
        ),
        message=f"{exc.message} (while parsing {exc.construct})",
        severity=DiagnosticSeverity.Error,
        source="valexpr",
    )


def _validate(ls: LanguageServer, uri: str) -> None:
    """Tokenize and parse the document, then publish diagnostics."""
    doc = ls.workspace.get_text_document(uri)
    diagnostics: list[Diagnostic] = []

    try:
        parse(doc.source)
    except ParseError as exc:
        diagnostics.append(_diagnostic(exc))

    ls.text_document_publish_diagnostics(
        PublishDiagnosticsParams(uri=uri, diagnostics=diagnostics)
    )


@server.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(ls: LanguageServer, params: DidOpenTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


@server.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(ls: LanguageServer, params: DidChangeTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


def main() -> None:
    server.start_io()
