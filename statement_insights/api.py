"""Public API surface for the ``statement_insights`` package.

This module is a stable import path for library callers. Parsing lives in
``statement_insights.ingest`` and aggregation in ``statement_insights.stats``;
both are re-exported here.
"""

from __future__ import annotations

from .ingest.pipeline import parse_transactions
from .ingest.utils import load_transactions
from .stats import (
    TransactionSummary,
    filter_transactions,
    sort_by_completed_date,
    summarize_transactions,
)

__all__ = [
    "TransactionSummary",
    "filter_transactions",
    "load_transactions",
    "parse_transactions",
    "sort_by_completed_date",
    "summarize_transactions",
]
