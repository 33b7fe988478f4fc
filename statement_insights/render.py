"""Terminal rendering of summaries and transaction lists (rich-based).

Functions here build :class:`rich.table.Table` objects and leave printing to
the caller, so they can be rendered to any :class:`rich.console.Console`
(including a recording console in tests).
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime
from decimal import Decimal

from rich.table import Table
from rich.text import Text

from .models import Transaction
from .stats import TransactionSummary

_CURRENCY_SYMBOLS = {"EUR": "€", "GBP": "£", "USD": "$"}


def format_amount(amount: Decimal | None, currency: str) -> str:
    """``€1,234.50`` for known symbols, ``CHF 12.00`` otherwise; ``-`` when absent."""

    if amount is None:
        return "-"
    sign = "-" if amount < 0 else ""
    body = f"{abs(amount):,.2f}"
    code = currency.strip().upper()
    symbol = _CURRENCY_SYMBOLS.get(code)
    if symbol:
        return f"{sign}{symbol}{body}"
    if not code:
        return f"{sign}{body}"
    return f"{sign}{code} {body}"


def format_timestamp(value: str | None) -> str:
    """Render an ISO timestamp as ``01 Mar 2024 14:30``."""

    if not value:
        return "-"
    return datetime.fromisoformat(value).strftime("%d %b %Y %H:%M")


def _amount_cell(tx: Transaction) -> Text:
    if tx.amount is None:
        return Text("-")
    if tx.amount > 0:
        return Text(f"↑ {format_amount(tx.amount, tx.currency)}", style="green")
    if tx.amount < 0:
        return Text(f"↓ {format_amount(abs(tx.amount), tx.currency)}", style="red")
    return Text(format_amount(tx.amount, tx.currency))


def transactions_table(transactions: Iterable[Transaction], *, title: str | None = None) -> Table:
    """Type, completed date, description, signed amount and balance per row."""

    table = Table(title=title)
    table.add_column("Type", style="bold")
    table.add_column("Date")
    table.add_column("Description")
    table.add_column("Amount", justify="right")
    table.add_column("Balance", justify="right")
    for tx in transactions:
        table.add_row(
            tx.type,
            format_timestamp(tx.completed_date),
            tx.description,
            _amount_cell(tx),
            format_amount(tx.balance, tx.currency),
        )
    return table


def summary_table(summary: TransactionSummary, *, currency: str = "EUR") -> Table:
    table = Table(title="Financial Overview")
    table.add_column("Bucket")
    table.add_column("Total", justify="right")
    table.add_column("Transactions", justify="right")
    rows = (
        ("Card Payments", summary.card_payments),
        ("Savings", summary.savings),
        ("Credit Card Repayment", summary.credit_card_repayments),
    )
    for label, bucket in rows:
        table.add_row(label, format_amount(bucket.amount, currency), f"{bucket.count:,}")
    table.caption = (
        f"First transaction: {format_timestamp(summary.first_date)}  |  "
        f"Last transaction: {format_timestamp(summary.last_date)}"
        if summary.first_date
        else "No transactions"
    )
    return table


__all__ = ["format_amount", "format_timestamp", "summary_table", "transactions_table"]
