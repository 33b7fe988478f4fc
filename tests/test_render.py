from decimal import Decimal

from rich.console import Console

from statement_insights import Transaction, summarize_transactions
from statement_insights.render import (
    format_amount,
    format_timestamp,
    summary_table,
    transactions_table,
)


def _render(renderable) -> str:
    console = Console(width=160, record=True, color_system=None)
    console.print(renderable)
    return console.export_text()


def test_format_amount():
    assert format_amount(Decimal("1234.5"), "EUR") == "€1,234.50"
    assert format_amount(Decimal("-3"), "gbp") == "-£3.00"
    assert format_amount(Decimal("12"), "CHF") == "CHF 12.00"
    assert format_amount(Decimal("12"), "") == "12.00"
    assert format_amount(None, "EUR") == "-"


def test_format_timestamp():
    assert format_timestamp("2024-03-01T14:30") == "01 Mar 2024 14:30"
    assert format_timestamp(None) == "-"


def test_transactions_table_rows():
    tx = Transaction(
        type="CARD_PAYMENT",
        product="Current",
        started_date="2024-03-01T14:28",
        completed_date="2024-03-01T14:30",
        description="Tesco",
        amount=Decimal("-45.99"),
        fee=None,
        currency="EUR",
        state="COMPLETED",
        balance=Decimal("120"),
    )

    out = _render(transactions_table([tx]))

    assert "CARD_PAYMENT" in out
    assert "01 Mar 2024 14:30" in out
    assert "↓ €45.99" in out
    assert "€120.00" in out


def test_summary_table_empty():
    out = _render(summary_table(summarize_transactions([])))

    assert "Card Payments" in out
    assert "Credit Card Repayment" in out
    assert "No transactions" in out
