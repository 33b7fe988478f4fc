from decimal import Decimal

import pytest

from statement_insights.ingest.coercion import clean_text, to_decimal, to_iso_timestamp

DATE_FORMAT = "%d/%m/%Y %H:%M"


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("1,234.56", Decimal("1234.56")),
        ("-1,000,000.01", Decimal("-1000000.01")),
        ("  -45.99 ", Decimal("-45.99")),
        ("+3", Decimal("3")),
        ("0", Decimal("0")),
    ],
)
def test_to_decimal_parses_grouped_numbers(raw, expected):
    assert to_decimal(raw) == expected


@pytest.mark.parametrize("raw", [None, "", "   "])
def test_to_decimal_blank_is_absent(raw):
    assert to_decimal(raw) is None


@pytest.mark.parametrize(
    "raw", ["abc", "nan", "sNaN", "inf", "1.2.3", "(5.00)", "1_000", "-2_200.00"]
)
def test_to_decimal_rejects_non_numbers(raw):
    with pytest.raises(ValueError):
        to_decimal(raw)


def test_to_iso_timestamp_day_first():
    assert to_iso_timestamp("01/03/2024 14:30", DATE_FORMAT) == "2024-03-01T14:30"
    assert to_iso_timestamp(" 31/12/2023 00:05 ", DATE_FORMAT) == "2023-12-31T00:05"


@pytest.mark.parametrize("raw", [None, "", "  "])
def test_to_iso_timestamp_blank_is_absent(raw):
    assert to_iso_timestamp(raw, DATE_FORMAT) is None


@pytest.mark.parametrize(
    "raw", ["2024-03-01 14:30", "01/03/2024", "13/13/2024 10:00", "01/03/2024 14:30:59"]
)
def test_to_iso_timestamp_rejects_other_layouts(raw):
    with pytest.raises(ValueError):
        to_iso_timestamp(raw, DATE_FORMAT)


def test_to_iso_timestamp_keeps_non_zero_seconds():
    fmt = "%Y-%m-%d %H:%M:%S"
    assert to_iso_timestamp("2024-03-01 14:30:59", fmt) == "2024-03-01T14:30:59"
    assert to_iso_timestamp("2024-03-01 14:30:00", fmt) == "2024-03-01T14:30"


def test_clean_text():
    assert clean_text(None) == ""
    assert clean_text("  COMPLETED\t") == "COMPLETED"
