# ruff: noqa: E501
"""Pytest configuration for test isolation.

The CLI loads ``.env`` from the working directory and reads
``SI_CONFIG_PATH``/``STATEMENT_INSIGHTS_LOG_LEVEL``; it also configures the
package logger once per process. To keep tests hermetic, every test runs in
its own temporary working directory with those variables unset, and logging
configuration is undone afterwards.
"""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest

from statement_insights.logging_setup import reset_logging
from tests.helpers.csv_text import HEADER, dedent_csv


@pytest.fixture(autouse=True)
def _isolate_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    for name in ("SI_CONFIG_PATH", "STATEMENT_INSIGHTS_LOG_LEVEL"):
        # setenv first so teardown also removes values a test loads from .env
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
    yield
    reset_logging()


@pytest.fixture
def sample_csv() -> str:
    return dedent_csv(
        f"""
        {HEADER}
        CARD_PAYMENT,Current,01/03/2024 14:28,01/03/2024 14:30,Tesco,-45.99,0.00,EUR,COMPLETED,120.00
        TRANSFER,Current,02/03/2024 09:00,02/03/2024 09:01,To Trading Places,-2200.00,0.00,EUR,COMPLETED,"1,234.56"
        CARD_PAYMENT,Current,03/03/2024 10:00,,Pending shop,-5.00,0.00,EUR,PENDING,1229.56
        TOPUP,Savings,04/03/2024 08:00,04/03/2024 08:00,Top up,"1,000.50",0.00,EUR,COMPLETED,2230.06
        """
    )
