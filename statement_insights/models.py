"""Data models and type aliases for ``statement_insights``.

The :class:`Transaction` record is a frozen ``dataclass`` with explicit field
order and types. Dates are kept as normalized ISO strings
(``YYYY-MM-DDTHH:MM``) rather than ``datetime`` objects so the record stays
JSON-friendly and compares exactly in tests; numeric fields are ``Decimal``
with ``None`` as the explicit "absent" value.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from decimal import Decimal
from types import MappingProxyType
from typing import TypeAlias

# One data line of the source text keyed by (normalized) column label. Values
# are raw cell strings exactly as returned by the CSV reader.
RawRow: TypeAlias = Mapping[str, str]


def _frozen_mapping(value: Mapping[str, str] | None = None) -> Mapping[str, str]:
    return MappingProxyType(dict(value or {}))


@dataclass(frozen=True, slots=True)
class Transaction:
    """A single normalized bank transaction.

    ``amount``, ``fee`` and ``balance`` are ``None`` when the source cell was
    empty or could not be parsed as a finite number; they are never coerced
    to zero. The two dates are ``None`` only on rows the pipeline later
    drops. ``line`` is the 1-based line in the source text where the row
    started. Columns without a canonical name are retained in ``extra``.
    """

    type: str
    product: str
    started_date: str | None
    completed_date: str | None
    description: str
    amount: Decimal | None
    fee: Decimal | None
    currency: str
    state: str
    balance: Decimal | None
    line: int = 0
    extra: Mapping[str, str] = field(default_factory=_frozen_mapping, compare=False)

    def __post_init__(self) -> None:
        # Freeze caller-provided dicts so ``extra`` cannot be mutated later.
        if not isinstance(self.extra, MappingProxyType):
            object.__setattr__(self, "extra", _frozen_mapping(self.extra))

    def to_dict(self) -> dict[str, object]:
        """Return a JSON-friendly mapping (decimals rendered as strings)."""

        def _num(d: Decimal | None) -> str | None:
            return None if d is None else str(d)

        return {
            "type": self.type,
            "product": self.product,
            "started_date": self.started_date,
            "completed_date": self.completed_date,
            "description": self.description,
            "amount": _num(self.amount),
            "fee": _num(self.fee),
            "currency": self.currency,
            "state": self.state,
            "balance": _num(self.balance),
        }


Transactions: TypeAlias = Iterable[Transaction]
"""Any iterable of :class:`Transaction` records, in source order."""


__all__ = ["RawRow", "Transaction", "Transactions"]
