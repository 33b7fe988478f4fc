"""Ingest utilities shared by CLI commands and library callers."""

from __future__ import annotations

from os import PathLike
from pathlib import Path

from ..config import IngestConfig
from ..diagnostics import DiagnosticSink
from ..models import Transaction
from .pipeline import parse_transactions


def load_transactions(
    csv_path: str | PathLike[str],
    *,
    config: IngestConfig | None = None,
    sink: DiagnosticSink | None = None,
) -> list[Transaction]:
    """Read a bank-export CSV file and return its eligible transactions.

    The file is decoded as UTF-8 (a leading BOM is tolerated). ``OSError``
    subclasses such as ``FileNotFoundError`` propagate unchanged;
    :class:`~statement_insights.errors.StructuralParseError` propagates from
    the parser.
    """

    p = Path(csv_path)
    with p.open(encoding="utf-8-sig", newline="") as f:
        text = f.read()
    return parse_transactions(text, config=config, sink=sink)


__all__ = ["load_transactions"]
