"""CSV ingestion: header mapping, cell coercion, filtering and adjustments."""

from .pipeline import parse_transactions
from .utils import load_transactions

__all__ = ["load_transactions", "parse_transactions"]
