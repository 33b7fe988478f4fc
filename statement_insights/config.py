"""Ingestion configuration: header mapping, date format and adjustment rules.

Every constant the pipeline depends on is exposed here as a named default and
carried by :class:`IngestConfig`, so a different bank export layout or another
rewrite rule only needs a different config object (or JSON file), not a code
change.

Example JSON accepted by :func:`load_config`::

    {
      "date_format": "%d/%m/%Y %H:%M",
      "adjustment_rules": [
        {"name": "rent", "target_description": "To Trading Places",
         "target_amount": "-2200", "adjusted_amount": "-1000"}
      ]
    }
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from decimal import Decimal
from os import PathLike
from pathlib import Path
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from .errors import ConfigError

CONFIG_PATH_ENV_VAR = "SI_CONFIG_PATH"

DEFAULT_HEADER_MAP: Mapping[str, str] = MappingProxyType(
    {
        "Type": "type",
        "Product": "product",
        "Started Date": "started_date",
        "Completed Date": "completed_date",
        "Description": "description",
        "Amount": "amount",
        "Fee": "fee",
        "Currency": "currency",
        "State": "state",
        "Balance": "balance",
    }
)

# Slash-separated day-first date, space, 24-hour time without seconds.
DEFAULT_DATE_FORMAT = "%d/%m/%Y %H:%M"
DEFAULT_COMPLETED_STATE = "COMPLETED"

DEFAULT_RENT_DESCRIPTION = "to trading places"
DEFAULT_RENT_AMOUNT = Decimal("-2200")
DEFAULT_ADJUSTED_RENT_AMOUNT = Decimal("-1000")
DEFAULT_TOLERANCE = Decimal("0.01")
DEFAULT_MARKER = "⚡"
DEFAULT_ANNOTATION = " (adjusted)"


class AdjustmentRule(BaseModel):
    """A description+amount predicate and the rewrite applied on a match.

    A transaction matches when its trimmed, lower-cased description equals
    ``target_description`` and its amount lies strictly within ``tolerance``
    of ``target_amount``. A match is replaced by a copy whose amount is
    ``adjusted_amount`` and whose description is wrapped in ``marker`` and
    ``annotation``.

    ``adjusted_amount`` must lie outside the tolerance window around
    ``target_amount``; otherwise an already-rewritten record would match
    again.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = "rent"
    target_description: str = DEFAULT_RENT_DESCRIPTION
    target_amount: Decimal = DEFAULT_RENT_AMOUNT
    adjusted_amount: Decimal = DEFAULT_ADJUSTED_RENT_AMOUNT
    tolerance: Decimal = DEFAULT_TOLERANCE
    marker: str = DEFAULT_MARKER
    annotation: str = DEFAULT_ANNOTATION

    @field_validator("target_description")
    @classmethod
    def _normalize_description(cls, v: str) -> str:
        normalized = v.strip().lower()
        if not normalized:
            raise ValueError("target_description must be non-empty")
        return normalized

    @field_validator("target_amount", "adjusted_amount", "tolerance")
    @classmethod
    def _finite(cls, v: Decimal) -> Decimal:
        if not v.is_finite():
            raise ValueError("amounts must be finite")
        return v

    @field_validator("tolerance")
    @classmethod
    def _positive_tolerance(cls, v: Decimal) -> Decimal:
        if v <= 0:
            raise ValueError("tolerance must be positive")
        return v

    @model_validator(mode="after")
    def _adjusted_outside_window(self) -> AdjustmentRule:
        if abs(self.adjusted_amount - self.target_amount) < self.tolerance:
            raise ValueError(
                f"adjustment rule {self.name!r}: adjusted_amount must differ from "
                "target_amount by at least the tolerance, or rewritten records would re-match"
            )
        return self


class IngestConfig(BaseModel):
    """Everything :func:`~statement_insights.ingest.pipeline.parse_transactions` needs."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    header_map: dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_HEADER_MAP))
    date_format: str = DEFAULT_DATE_FORMAT
    completed_state: str = DEFAULT_COMPLETED_STATE
    adjustment_rules: tuple[AdjustmentRule, ...] = Field(
        default_factory=lambda: (AdjustmentRule(),)
    )

    @field_validator("date_format", "completed_state")
    @classmethod
    def _non_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must be non-empty")
        return v


def load_config(path: str | PathLike[str]) -> IngestConfig:
    """Read an :class:`IngestConfig` from a JSON file.

    Keys omitted from the file keep their defaults. Raises :class:`ConfigError`
    when the file cannot be read or fails validation.
    """

    p = Path(path)
    try:
        text = p.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"cannot read config file {p}: {e}") from e
    try:
        return IngestConfig.model_validate_json(text)
    except ValidationError as e:
        raise ConfigError(f"invalid config file {p}: {e}") from e


def resolve_config(path: str | PathLike[str] | None = None) -> IngestConfig:
    """Return the config from ``path``, then ``SI_CONFIG_PATH``, then defaults."""

    if path is None:
        env_val = os.getenv(CONFIG_PATH_ENV_VAR)
        if env_val and env_val.strip():
            path = env_val.strip()
    if path is None:
        return IngestConfig()
    return load_config(path)


__all__ = [
    "CONFIG_PATH_ENV_VAR",
    "DEFAULT_ADJUSTED_RENT_AMOUNT",
    "DEFAULT_ANNOTATION",
    "DEFAULT_COMPLETED_STATE",
    "DEFAULT_DATE_FORMAT",
    "DEFAULT_HEADER_MAP",
    "DEFAULT_MARKER",
    "DEFAULT_RENT_AMOUNT",
    "DEFAULT_RENT_DESCRIPTION",
    "DEFAULT_TOLERANCE",
    "AdjustmentRule",
    "IngestConfig",
    "load_config",
    "resolve_config",
]
