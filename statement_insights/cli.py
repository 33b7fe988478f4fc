"""CLI for the ``statement_insights`` package.

This module exposes callable command handlers (``cmd_summary``,
``cmd_transactions``) and a Typer-based console interface. Environment
variables (notably ``SI_CONFIG_PATH`` and ``STATEMENT_INSIGHTS_LOG_LEVEL``)
are loaded from a local ``.env`` using ``python-dotenv`` before delegating to
command logic. Parsing and aggregation live in ``statement_insights.ingest``
and ``statement_insights.stats``.
"""

from __future__ import annotations

import json
import sys
from collections import Counter
from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv
from rich.console import Console
from typer.models import OptionInfo

from .config import IngestConfig, resolve_config
from .diagnostics import CollectingSink, LoggingSink
from .errors import ConfigError, StructuralParseError
from .ingest import load_transactions
from .logging_setup import configure_logging
from .models import Transaction
from .render import summary_table, transactions_table
from .stats import filter_transactions, sort_by_completed_date, summarize_transactions


def _load(
    csv_path: str, config_path: str | None
) -> tuple[list[Transaction], CollectingSink] | None:
    """Resolve config and parse ``csv_path``; print an error and return ``None`` on failure."""

    try:
        config: IngestConfig = resolve_config(config_path)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return None

    sink = CollectingSink(forward=LoggingSink())
    try:
        transactions = load_transactions(csv_path, config=config, sink=sink)
    except FileNotFoundError:
        print(f"Error: File not found: {csv_path}", file=sys.stderr)
        return None
    except PermissionError:
        print(f"Error: Permission denied: {csv_path}", file=sys.stderr)
        return None
    except UnicodeDecodeError as e:
        print(f"Error: '{csv_path}' is not UTF-8 text: {e}", file=sys.stderr)
        return None
    except StructuralParseError as e:
        print(f"Error: Failed to parse CSV: {e}. No transactions were loaded.", file=sys.stderr)
        return None
    return transactions, sink


def _report_diagnostics(sink: CollectingSink) -> None:
    skipped = len(sink.skips)
    anomalies = len(sink.anomalies)
    adjusted = len(sink.adjustments)
    if skipped or anomalies or adjusted:
        print(
            f"{skipped} row(s) skipped, {anomalies} field anomaly(ies), {adjusted} adjusted",
            file=sys.stderr,
        )


def _dominant_currency(transactions: list[Transaction]) -> str:
    counts = Counter(t.currency for t in transactions if t.currency)
    if not counts:
        return "EUR"
    return counts.most_common(1)[0][0]


def cmd_summary(csv_path: str, *, config_path: str | None = None) -> int:
    """Print the overview buckets (card payments, savings, repayments) for ``csv_path``.

    Returns ``0`` on success and ``1`` when the file cannot be read, the
    config is invalid, or the CSV is structurally malformed.
    """

    loaded = _load(csv_path, config_path)
    if loaded is None:
        return 1
    transactions, sink = loaded

    summary = summarize_transactions(transactions)
    Console().print(summary_table(summary, currency=_dominant_currency(transactions)))
    _report_diagnostics(sink)
    return 0


def cmd_transactions(
    csv_path: str,
    *,
    config_path: str | None = None,
    tx_type: str | None = None,
    product: str | None = None,
    description: str | None = None,
    sort_by_date: bool = False,
    as_json: bool = False,
) -> int:
    """Print the eligible transactions of ``csv_path`` as a table or JSON.

    Filters are exact matches and may be combined. Source order is kept
    unless ``sort_by_date`` is set.
    """

    loaded = _load(csv_path, config_path)
    if loaded is None:
        return 1
    transactions, sink = loaded

    rows = filter_transactions(
        transactions, type=tx_type, product=product, description=description
    )
    if sort_by_date:
        rows = sort_by_completed_date(rows)

    if as_json:
        print(json.dumps([t.to_dict() for t in rows], ensure_ascii=False, indent=2))
    elif not rows:
        print("No transactions.")
    else:
        Console().print(transactions_table(rows, title=f"{len(rows)} transaction(s)"))
    _report_diagnostics(sink)
    return 0


# ---- Typer-based console interface -------------------------------------------


app = typer.Typer(
    no_args_is_help=True,
    add_completion=False,
    help=(
        "Summarize bank-export CSV files (Type, Product, Started Date, Completed Date, "
        "Description, Amount, Fee, Currency, State, Balance). Loads a local .env first."
    ),
)

# Module-level option objects to satisfy ruff B008 (no calls in parameter
# defaults).
CSV_PATH_OPTION: OptionInfo = typer.Option(
    ...,  # required
    "--csv-path",
    help="Path to a bank-export CSV file",
    dir_okay=False,
    file_okay=True,
    exists=False,  # allow non-existent here; the handler will report nice errors
)
CONFIG_OPTION: OptionInfo = typer.Option(
    "--config",
    help="JSON ingestion config (falls back to SI_CONFIG_PATH, then built-in defaults).",
    dir_okay=False,
)


@app.command("summary")
def summary_cmd(
    csv_path: Annotated[Path, CSV_PATH_OPTION],
    config: Annotated[Path | None, CONFIG_OPTION] = None,
) -> None:
    """Show card payments, savings and credit-card repayment totals."""

    code = cmd_summary(str(csv_path), config_path=str(config) if config else None)
    raise typer.Exit(code)


@app.command("transactions")
def transactions_cmd(
    csv_path: Annotated[Path, CSV_PATH_OPTION],
    config: Annotated[Path | None, CONFIG_OPTION] = None,
    *,
    tx_type: str | None = typer.Option(
        None, "--type", help="Exact transaction type, e.g. CARD_PAYMENT."
    ),
    product: str | None = typer.Option(None, help="Exact product, e.g. Savings."),
    description: str | None = typer.Option(None, help="Exact description."),
    sort_by_date: bool = typer.Option(False, help="Sort by completed date instead of file order."),
    as_json: bool = typer.Option(False, "--json", help="Emit JSON instead of a table."),
) -> None:
    """List eligible transactions, optionally filtered."""

    code = cmd_transactions(
        str(csv_path),
        config_path=str(config) if config else None,
        tx_type=tx_type,
        product=product,
        description=description,
        sort_by_date=sort_by_date,
        as_json=as_json,
    )
    raise typer.Exit(code)


@app.callback()
def _root(
    log_level: str | None = typer.Option(
        None, help="Log level (falls back to STATEMENT_INSIGHTS_LOG_LEVEL, then INFO)."
    ),
) -> None:
    """Root command.

    Loads ``.env`` from the current working directory (without overriding any
    already-set environment variables) and configures package logging.
    """

    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)
    configure_logging(log_level)


def main() -> None:
    app()


if __name__ == "__main__":  # pragma: no cover
    main()
