"""CSV text → :class:`~statement_insights.models.Transaction` records.

Parsing follows RFC 4180 rules via the stdlib :mod:`csv` module in strict
mode, so an unterminated quote or stray text after a closing quote is a
structural failure rather than silently merged data.

Single pass, in order:

1. Map header labels through ``config.header_map`` (case-sensitive; unknown
   labels pass through unchanged and end up in ``Transaction.extra``).
2. Coerce cells: ``amount``/``fee``/``balance`` to ``Decimal | None``, the two
   date columns to ISO timestamps, everything else to trimmed strings.
3. Keep rows whose ``state`` equals ``config.completed_state`` and whose two
   dates parsed.
4. Rewrite rows matched by the first applicable adjustment rule.

Only :class:`~statement_insights.errors.StructuralParseError` escapes. Field
and row level problems are reported to the diagnostic sink and absorbed.
"""

from __future__ import annotations

import csv
from collections.abc import Iterator, Mapping
from decimal import Decimal
from io import StringIO

from ..config import IngestConfig
from ..diagnostics import (
    AdjustmentApplied,
    DiagnosticSink,
    FieldCoercionAnomaly,
    IneligibleRowSkip,
    LoggingSink,
    SkipReason,
)
from ..errors import StructuralParseError
from ..logging_setup import get_logger
from ..models import RawRow, Transaction
from .adjustments import apply_rule, first_matching_rule
from .coercion import clean_text, to_decimal, to_iso_timestamp

logger = get_logger("statement_insights.ingest.pipeline")

NUMERIC_FIELDS = ("amount", "fee", "balance")
DATE_FIELDS = ("started_date", "completed_date")
TEXT_FIELDS = ("type", "product", "description", "currency", "state")
_CANONICAL_FIELDS = frozenset(NUMERIC_FIELDS + DATE_FIELDS + TEXT_FIELDS)

_BOM = "\ufeff"


def normalize_headers(labels: list[str], header_map: Mapping[str, str]) -> list[str]:
    """Map raw header labels to canonical field names.

    Labels are trimmed and matched case-sensitively. A UTF-8 byte-order mark
    on the first label is dropped before lookup.
    """

    out: list[str] = []
    for i, label in enumerate(labels):
        if i == 0 and label.startswith(_BOM):
            label = label[len(_BOM) :]
        label = label.strip()
        out.append(header_map.get(label, label))
    return out


def _iter_raw_rows(raw_text: str, header_map: Mapping[str, str]) -> Iterator[tuple[int, RawRow]]:
    """Yield ``(start_line, row)`` pairs; blank lines are skipped.

    Cells missing from short rows are simply absent keys; overflow
    cells beyond the header width are discarded.
    """

    # A single cell can be as long as the whole input; the limit is global and only grows.
    csv.field_size_limit(max(csv.field_size_limit(), len(raw_text)))
    with StringIO(raw_text) as f:
        reader = csv.reader(f, strict=True)
        headers: list[str] | None = None
        consumed = 0
        try:
            for cells in reader:
                start_line = consumed + 1
                consumed = reader.line_num
                if not cells:
                    continue
                if headers is None:
                    headers = normalize_headers(cells, header_map)
                    continue
                yield start_line, dict(zip(headers, cells, strict=False))
        except csv.Error as e:
            raise StructuralParseError(
                f"malformed CSV near line {reader.line_num}: {e}", line=reader.line_num
            ) from e


def build_transaction(
    line: int,
    row: RawRow,
    *,
    config: IngestConfig,
    sink: DiagnosticSink,
) -> Transaction:
    """Coerce one raw row; unparsable numbers and dates become ``None``."""

    numbers: dict[str, Decimal | None] = {}
    for name in NUMERIC_FIELDS:
        raw = row.get(name)
        try:
            numbers[name] = to_decimal(raw)
        except ValueError as e:
            sink.record(FieldCoercionAnomaly(line, name, raw or "", str(e)))
            numbers[name] = None

    dates: dict[str, str | None] = {}
    for name in DATE_FIELDS:
        raw = row.get(name)
        try:
            dates[name] = to_iso_timestamp(raw, config.date_format)
        except ValueError as e:
            sink.record(FieldCoercionAnomaly(line, name, raw or "", str(e)))
            dates[name] = None

    return Transaction(
        type=clean_text(row.get("type")),
        product=clean_text(row.get("product")),
        started_date=dates["started_date"],
        completed_date=dates["completed_date"],
        description=clean_text(row.get("description")),
        amount=numbers["amount"],
        fee=numbers["fee"],
        currency=clean_text(row.get("currency")),
        state=clean_text(row.get("state")),
        balance=numbers["balance"],
        line=line,
        extra={k: v for k, v in row.items() if k not in _CANONICAL_FIELDS},
    )


def ineligibility(tx: Transaction, *, completed_state: str) -> IneligibleRowSkip | None:
    """Return the skip record for ``tx`` or ``None`` when it is eligible."""

    if tx.state != completed_state:
        return IneligibleRowSkip(tx.line, SkipReason.not_completed, f"state={tx.state!r}")
    if not tx.completed_date:
        return IneligibleRowSkip(tx.line, SkipReason.missing_completed_date)
    if not tx.started_date:
        return IneligibleRowSkip(tx.line, SkipReason.missing_started_date)
    return None


def parse_transactions(
    raw_text: str,
    *,
    config: IngestConfig | None = None,
    sink: DiagnosticSink | None = None,
) -> list[Transaction]:
    """Parse bank-export CSV text into completed, adjusted transactions.

    Parameters
    ----------
    raw_text:
        The whole export: header line first, one transaction per line after
        that. Quoted fields may contain commas and newlines.
    config:
        Header mapping, date format, completed-state label and adjustment
        rules. Defaults to :class:`~statement_insights.config.IngestConfig`.
    sink:
        Receives coercion anomalies, skipped rows and applied adjustments.
        Defaults to a :class:`~statement_insights.diagnostics.LoggingSink`.

    Returns
    -------
    list[Transaction]
        Eligible transactions in source order (not re-sorted by date). Empty
        for empty or header-only input.

    Raises
    ------
    StructuralParseError
        When the text cannot be tokenized. No partial result is returned.
    """

    cfg = config or IngestConfig()
    diag = sink if sink is not None else LoggingSink()

    # Materialize first so a structural error late in the file yields nothing.
    raw_rows = list(_iter_raw_rows(raw_text, cfg.header_map))

    out: list[Transaction] = []
    for line, row in raw_rows:
        tx = build_transaction(line, row, config=cfg, sink=diag)
        skip = ineligibility(tx, completed_state=cfg.completed_state)
        if skip is not None:
            diag.record(skip)
            continue
        rule = first_matching_rule(cfg.adjustment_rules, tx)
        if rule is not None:
            adjusted = apply_rule(rule, tx)
            diag.record(AdjustmentApplied(tx.line, rule.name, tx.amount, adjusted.amount))
            tx = adjusted
        out.append(tx)

    logger.debug("parsed %d rows, kept %d transactions", len(raw_rows), len(out))
    return out


__all__ = [
    "DATE_FIELDS",
    "NUMERIC_FIELDS",
    "TEXT_FIELDS",
    "build_transaction",
    "ineligibility",
    "normalize_headers",
    "parse_transactions",
]
