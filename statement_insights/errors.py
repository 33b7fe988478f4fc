"""Exception hierarchy for ``statement_insights``.

Only failures that abort a whole import are exceptions. Per-row and per-field
problems are reported through :mod:`statement_insights.diagnostics` instead.
"""

from __future__ import annotations


class StatementInsightsError(Exception):
    """Base exception for all package failures."""


class StructuralParseError(StatementInsightsError):
    """The input text cannot be tokenized into rows and columns.

    ``line`` is the 1-based line number reported by the CSV reader when the
    failure was detected (``None`` when unknown). The underlying
    :class:`csv.Error` is chained as ``__cause__``.
    """

    def __init__(self, message: str, *, line: int | None = None) -> None:
        super().__init__(message)
        self.line = line


class ConfigError(StatementInsightsError):
    """Raised for unreadable or invalid ingestion configuration."""


__all__ = ["ConfigError", "StatementInsightsError", "StructuralParseError"]
