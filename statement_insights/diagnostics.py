"""Structured diagnostics emitted by the ingestion pipeline.

The pipeline never prints. Each per-row or per-field event is handed to a
:class:`DiagnosticSink`; the default :class:`LoggingSink` forwards events to
the package logger, while :class:`CollectingSink` keeps them in memory so
callers (and tests) can inspect what was absorbed during an import.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Protocol, TypeAlias, runtime_checkable

from .logging_setup import get_logger


class SkipReason(str, Enum):
    """Why a constructed row was left out of the result."""

    not_completed = "not_completed"
    missing_started_date = "missing_started_date"
    missing_completed_date = "missing_completed_date"


@dataclass(frozen=True, slots=True)
class FieldCoercionAnomaly:
    """A cell whose raw text could not be coerced; the field became absent."""

    line: int
    field: str
    raw_value: str
    reason: str


@dataclass(frozen=True, slots=True)
class IneligibleRowSkip:
    """A row dropped by the eligibility filter. Not an error."""

    line: int
    reason: SkipReason
    detail: str = ""


@dataclass(frozen=True, slots=True)
class AdjustmentApplied:
    """A transaction rewritten by an adjustment rule."""

    line: int
    rule: str
    original_amount: Decimal
    adjusted_amount: Decimal


DiagnosticEvent: TypeAlias = FieldCoercionAnomaly | IneligibleRowSkip | AdjustmentApplied


@runtime_checkable
class DiagnosticSink(Protocol):
    def record(self, event: DiagnosticEvent) -> None: ...


class LoggingSink:
    """Forward events to a logger: anomalies at WARNING, skips at DEBUG, rewrites at INFO."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger or get_logger("statement_insights.ingest")

    def record(self, event: DiagnosticEvent) -> None:
        match event:
            case FieldCoercionAnomaly():
                self._logger.warning(
                    "line %d: could not coerce %s=%r (%s); field left absent",
                    event.line,
                    event.field,
                    event.raw_value,
                    event.reason,
                )
            case IneligibleRowSkip():
                self._logger.debug(
                    "line %d: row skipped (%s) %s",
                    event.line,
                    event.reason.value,
                    event.detail,
                )
            case AdjustmentApplied():
                self._logger.info(
                    "line %d: %s adjustment %s -> %s",
                    event.line,
                    event.rule,
                    event.original_amount,
                    event.adjusted_amount,
                )


class CollectingSink:
    """Keep every event in arrival order, optionally forwarding to another sink."""

    def __init__(self, forward: DiagnosticSink | None = None) -> None:
        self.events: list[DiagnosticEvent] = []
        self._forward = forward

    def record(self, event: DiagnosticEvent) -> None:
        self.events.append(event)
        if self._forward is not None:
            self._forward.record(event)

    @property
    def anomalies(self) -> list[FieldCoercionAnomaly]:
        return [e for e in self.events if isinstance(e, FieldCoercionAnomaly)]

    @property
    def skips(self) -> list[IneligibleRowSkip]:
        return [e for e in self.events if isinstance(e, IneligibleRowSkip)]

    @property
    def adjustments(self) -> list[AdjustmentApplied]:
        return [e for e in self.events if isinstance(e, AdjustmentApplied)]


__all__ = [
    "AdjustmentApplied",
    "CollectingSink",
    "DiagnosticEvent",
    "DiagnosticSink",
    "FieldCoercionAnomaly",
    "IneligibleRowSkip",
    "LoggingSink",
    "SkipReason",
]
