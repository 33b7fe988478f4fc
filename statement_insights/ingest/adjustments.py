"""Description+amount rewrite rules applied after filtering.

The default configuration carries one rule: a recurring rent transfer
exported at its full amount is rewritten to the configured share and its
description is marked so the change stays visible downstream.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import replace

from ..config import AdjustmentRule
from ..models import Transaction


def matches(rule: AdjustmentRule, tx: Transaction) -> bool:
    """Return ``True`` when ``tx`` satisfies the rule's predicate.

    Transactions with an absent amount never match.
    """

    if tx.amount is None:
        return False
    if tx.description.strip().lower() != rule.target_description:
        return False
    return abs(tx.amount - rule.target_amount) < rule.tolerance


def apply_rule(rule: AdjustmentRule, tx: Transaction) -> Transaction:
    """Return the rewritten copy of ``tx``. The caller checks :func:`matches` first."""

    return replace(
        tx,
        amount=rule.adjusted_amount,
        description=f"{rule.marker}{tx.description}{rule.annotation}",
    )


def first_matching_rule(
    rules: Sequence[AdjustmentRule], tx: Transaction
) -> AdjustmentRule | None:
    for rule in rules:
        if matches(rule, tx):
            return rule
    return None


__all__ = ["apply_rule", "first_matching_rule", "matches"]
