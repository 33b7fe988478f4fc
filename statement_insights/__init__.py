"""Public interface for the ``statement_insights`` package.

This module exposes the package's API functions and public models/types as the
stable import surface. There is no runtime logic here, only symbol re-exports.
"""

from .api import (
    filter_transactions,
    load_transactions,
    parse_transactions,
    sort_by_completed_date,
    summarize_transactions,
)
from .config import AdjustmentRule, IngestConfig, load_config, resolve_config
from .diagnostics import (
    AdjustmentApplied,
    CollectingSink,
    DiagnosticSink,
    FieldCoercionAnomaly,
    IneligibleRowSkip,
    LoggingSink,
    SkipReason,
)
from .errors import ConfigError, StatementInsightsError, StructuralParseError
from .models import RawRow, Transaction, Transactions
from .stats import BucketTotal, TransactionSummary

__all__ = [
    # API
    "parse_transactions",
    "load_transactions",
    "summarize_transactions",
    "filter_transactions",
    "sort_by_completed_date",
    # Models / types
    "RawRow",
    "Transaction",
    "Transactions",
    "BucketTotal",
    "TransactionSummary",
    # Configuration
    "AdjustmentRule",
    "IngestConfig",
    "load_config",
    "resolve_config",
    # Diagnostics
    "DiagnosticSink",
    "LoggingSink",
    "CollectingSink",
    "FieldCoercionAnomaly",
    "IneligibleRowSkip",
    "AdjustmentApplied",
    "SkipReason",
    # Errors
    "StatementInsightsError",
    "StructuralParseError",
    "ConfigError",
]
