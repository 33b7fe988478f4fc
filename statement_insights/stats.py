"""Summary statistics and drill-down filtering over parsed transactions.

The overview reports three buckets plus the covered date range:

- card payments: ``type == "CARD_PAYMENT"`` with a negative amount, summed
  as absolute values;
- savings: ``product == "Savings"`` with a positive amount;
- credit-card repayments: ``type == "TRANSFER"`` whose description is exactly
  ``"Credit card repayment"``, summed as absolute values.

Amounts are rounded to one decimal place (half-up) before aggregation.
Transactions with an absent amount are ignored by every bucket.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from .models import Transaction

CARD_PAYMENT_TYPE = "CARD_PAYMENT"
TRANSFER_TYPE = "TRANSFER"
SAVINGS_PRODUCT = "Savings"
CREDIT_CARD_REPAYMENT_DESCRIPTION = "Credit card repayment"

_ONE_DECIMAL = Decimal("0.1")


@dataclass(frozen=True, slots=True)
class BucketTotal:
    amount: Decimal
    count: int


@dataclass(frozen=True, slots=True)
class TransactionSummary:
    """Headline numbers for a set of transactions."""

    card_payments: BucketTotal
    savings: BucketTotal
    credit_card_repayments: BucketTotal
    first_date: str | None
    last_date: str | None
    total_count: int


def _rounded(amount: Decimal) -> Decimal:
    return amount.quantize(_ONE_DECIMAL, rounding=ROUND_HALF_UP)


def _bucket(
    items: list[tuple[Transaction, Decimal]],
    predicate: Callable[[Transaction, Decimal], bool],
    *,
    absolute: bool,
) -> BucketTotal:
    total = Decimal("0")
    count = 0
    for tx, amount in items:
        if not predicate(tx, amount):
            continue
        total += abs(amount) if absolute else amount
        count += 1
    return BucketTotal(amount=total, count=count)


def summarize_transactions(transactions: Iterable[Transaction]) -> TransactionSummary:
    """Compute the overview buckets and first/last completed date."""

    txs = list(transactions)
    with_amounts = [(t, _rounded(t.amount)) for t in txs if t.amount is not None]

    card_payments = _bucket(
        with_amounts,
        lambda t, a: t.type == CARD_PAYMENT_TYPE and a < 0,
        absolute=True,
    )
    savings = _bucket(
        with_amounts,
        lambda t, a: t.product == SAVINGS_PRODUCT and a > 0,
        absolute=False,
    )
    repayments = _bucket(
        with_amounts,
        lambda t, _a: t.type == TRANSFER_TYPE
        and t.description == CREDIT_CARD_REPAYMENT_DESCRIPTION,
        absolute=True,
    )

    # ISO timestamps order lexicographically.
    dates = sorted(t.completed_date for t in txs if t.completed_date)
    return TransactionSummary(
        card_payments=card_payments,
        savings=savings,
        credit_card_repayments=repayments,
        first_date=dates[0] if dates else None,
        last_date=dates[-1] if dates else None,
        total_count=len(txs),
    )


def filter_transactions(
    transactions: Iterable[Transaction],
    *,
    type: str | None = None,
    product: str | None = None,
    description: str | None = None,
) -> list[Transaction]:
    """Keep transactions whose fields equal every filter given; order is preserved."""

    out: list[Transaction] = []
    for t in transactions:
        if type is not None and t.type != type:
            continue
        if product is not None and t.product != product:
            continue
        if description is not None and t.description != description:
            continue
        out.append(t)
    return out


def sort_by_completed_date(transactions: Iterable[Transaction]) -> list[Transaction]:
    """Stable sort by ``completed_date`` (ISO strings); undated rows go last."""

    return sorted(
        transactions,
        key=lambda t: (t.completed_date is None, t.completed_date or ""),
    )


__all__ = [
    "CARD_PAYMENT_TYPE",
    "CREDIT_CARD_REPAYMENT_DESCRIPTION",
    "SAVINGS_PRODUCT",
    "TRANSFER_TYPE",
    "BucketTotal",
    "TransactionSummary",
    "filter_transactions",
    "sort_by_completed_date",
    "summarize_transactions",
]
