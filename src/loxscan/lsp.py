"""Minimal LSP server for Lox — lexical diagnostics only."""

from __future__ import annotations

import tomllib
from pathlib import Path

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

from loxscan import __version__
from loxscan.config import CONFIG_FILENAME, ScanOptions, load_config, options_from_config
from loxscan.errors import ConfigError, LexError
from loxscan.log import get_logger
from loxscan.scanner import scan_all

logger = get_logger(__name__)

server = LanguageServer(
    "loxscan-lsp", __version__, text_document_sync_kind=TextDocumentSyncKind.Full
)


def _utf16_len(text: str) -> int:
    return len(text.encode("utf-16-le")) // 2


def to_diagnostic(error: LexError) -> Diagnostic:
    """Convert a LexError (1-based position) into an LSP Diagnostic (0-based).

    Scanner columns count bytes; LSP characters count UTF-16 code units, so
    the line prefix and the skipped text are re-measured.
    """
    line = error.position.line - 1
    offset = error.position.offset
    line_start = error.source.rfind(b"\n", 0, offset) + 1
    prefix = error.source[line_start:offset].decode("utf-8", errors="replace")
    col = _utf16_len(prefix)
    # Underline what was skipped, clipped to the error's own line
    flagged = error.skipped.split(b"\n", 1)[0].decode("utf-8", errors="replace")
    width = max(1, _utf16_len(flagged))
    return Diagnostic(
        range=Range(
            start=Position(line=line, character=col),
            end=Position(line=line, character=col + width),
        ),
        message=error.message,
        severity=DiagnosticSeverity.Error,
        source="loxscan",
    )


def _options_for(path: str | None) -> ScanOptions:
    """Scan options from the loxscan.toml beside the document, if any."""
    if not path:
        return ScanOptions()
    try:
        return options_from_config(load_config(None, Path(path).parent))
    except (ConfigError, tomllib.TOMLDecodeError) as exc:
        logger.warning("ignoring %s beside %s: %s", CONFIG_FILENAME, path, exc)
        return ScanOptions()


def _validate(ls: LanguageServer, uri: str) -> None:
    """Scan the document and publish one diagnostic per lexical error."""
    doc = ls.workspace.get_text_document(uri)
    _, errors = scan_all(doc.source, _options_for(doc.path))
    logger.debug("validated %s: %d lexical error(s)", uri, len(errors))

    ls.text_document_publish_diagnostics(
        PublishDiagnosticsParams(uri=uri, diagnostics=[to_diagnostic(e) for e in errors])
    )


@server.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(ls: LanguageServer, params: DidOpenTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


@server.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(ls: LanguageServer, params: DidChangeTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


def main() -> None:
    server.start_io()
