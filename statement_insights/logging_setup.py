"""Package logging for ``statement_insights``.

Library code only calls :func:`get_logger`; nothing is printed until the CLI
(or a host application) calls :func:`configure_logging`. The level comes
from ``--log-level``, then ``STATEMENT_INSIGHTS_LOG_LEVEL``, then INFO.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import IO

LEVEL_ENV_VAR = "STATEMENT_INSIGHTS_LOG_LEVEL"
_ROOT = "statement_insights"
_FORMAT = "%(levelname)s %(name)s: %(message)s"

_handler: logging.Handler | None = None


def resolve_level(name: str | None) -> int:
    """Level for an explicit name, else the env var, else INFO.

    Unknown names fall back to INFO.
    """

    name = (name or os.getenv(LEVEL_ENV_VAR) or "").strip().upper()
    return logging.getLevelNamesMapping().get(name, logging.INFO)


def configure_logging(level: str | None = None, *, stream: IO[str] | None = None) -> None:
    """Send package records to ``stream`` (stderr by default). Later calls are no-ops."""

    global _handler
    if _handler is not None:
        return

    root = logging.getLogger(_ROOT)
    for h in list(root.handlers):
        root.removeHandler(h)

    _handler = logging.StreamHandler(stream or sys.stderr)
    _handler.setFormatter(logging.Formatter(_FORMAT))
    root.addHandler(_handler)
    root.setLevel(resolve_level(level))
    root.propagate = False


def reset_logging() -> None:
    """Undo :func:`configure_logging` so the next call takes effect."""

    global _handler
    root = logging.getLogger(_ROOT)
    for h in list(root.handlers):
        root.removeHandler(h)
    root.setLevel(logging.NOTSET)
    root.propagate = True
    _handler = None


def get_logger(name: str) -> logging.Logger:
    root = logging.getLogger(_ROOT)
    if not root.handlers:
        root.addHandler(logging.NullHandler())
    return logging.getLogger(name)


__all__ = ["LEVEL_ENV_VAR", "configure_logging", "get_logger", "reset_logging", "resolve_level"]
