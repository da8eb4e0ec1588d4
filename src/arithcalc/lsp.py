"""Minimal LSP server for arithmetic expression files, diagnostics only."""

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

from arithcalc import __version__
from arithcalc.comments import strip_comments
from arithcalc.errors import locate
from arithcalc.outcome import Error
from arithcalc.parser import evaluate

server = LanguageServer(
    "arithcalc-lsp", __version__, text_document_sync_kind=TextDocumentSyncKind.Full
)


def _validate(ls: LanguageServer, uri: str) -> None:
    """Evaluate the document and publish its first error, if any."""
    doc = ls.workspace.get_text_document(uri)
    source = doc.source
    diagnostics: list[Diagnostic] = []

    stripped = strip_comments(source)
    outcome = evaluate(stripped.text)
    if isinstance(outcome, Error):
        position = stripped.original_position(outcome.position)
        line, col = locate(source, position)
        diagnostics.append(
            Diagnostic(
                range=Range(
                    start=Position(line=line - 1, character=col - 1),
                    end=Position(line=line - 1, character=col),
                ),
                message=f"{outcome.kind.description} (ERROR:{outcome.position})",
                severity=DiagnosticSeverity.Error,
                source="arithcalc",
            )
        )

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
