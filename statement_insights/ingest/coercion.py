"""Cell-level coercion helpers used while building rows.

Each helper returns ``None`` for "absent" and raises ``ValueError`` with a
short reason when the text is present but unusable; the pipeline turns those
into :class:`~statement_insights.diagnostics.FieldCoercionAnomaly` records.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal, InvalidOperation


def clean_text(value: str | None) -> str:
    """Trim a raw cell; missing cells (short rows) become ``""``."""

    if value is None:
        return ""
    return value.strip()


def to_decimal(raw: str | None) -> Decimal | None:
    """Parse ``raw`` as a signed decimal after dropping grouping commas.

    ``None`` or blank input is absent. Non-numeric and non-finite values
    (``NaN``, ``Infinity``) raise ``ValueError``.
    """

    if raw is None:
        return None
    s = raw.strip()
    if not s:
        return None
    # Strip thousands separators; keep decimal point.
    s = s.replace(",", "").strip()
    # Decimal() would accept "1_000".
    if "_" in s:
        raise ValueError(f"not a number: {raw!r}")
    try:
        d = Decimal(s)
    except InvalidOperation as exc:
        raise ValueError(f"not a number: {raw!r}") from exc
    if not d.is_finite():
        raise ValueError(f"not a finite number: {raw!r}")
    return d


def to_iso_timestamp(raw: str | None, date_format: str) -> str | None:
    """Parse ``raw`` with ``date_format`` and render ``YYYY-MM-DDTHH:MM``.

    Seconds are kept only when the format produced a non-zero value.
    """

    if raw is None:
        return None
    s = raw.strip()
    if not s:
        return None
    try:
        dt = datetime.strptime(s, date_format)
    except ValueError as exc:
        raise ValueError(f"does not match {date_format!r}") from exc
    timespec = "seconds" if dt.second else "minutes"
    return dt.isoformat(timespec=timespec)


__all__ = ["clean_text", "to_decimal", "to_iso_timestamp"]
