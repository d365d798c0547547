"""
Net worth history.

Net worth is recorded as dated snapshots. The current value is the most
recent snapshot on or before the reference date.
"""

from datetime import date
from decimal import Decimal
from typing import Iterable

from firetrack.aggregation.period import ZERO, DateRange
from firetrack.models.finance import NetWorthEntry


def current_net_worth(entries: Iterable[NetWorthEntry], reference: date) -> Decimal:
    """
    Latest recorded net worth on or before `reference`.

    Returns 0 when nothing has been recorded yet. On a tie the entry
    listed last wins.
    """
    latest = None
    for entry in entries:
        if entry.recorded_on > reference:
            continue
        if latest is None or entry.recorded_on >= latest.recorded_on:
            latest = entry
    return latest.amount if latest is not None else ZERO


def net_worth_history(
    entries: Iterable[NetWorthEntry],
    reference: date,
    months: int = 12,
) -> list[NetWorthEntry]:
    """Entries of the trailing `months` months, oldest first."""
    window = DateRange.trailing_months(reference, months)
    history = [e for e in entries if window.contains(e.recorded_on)]
    history.sort(key=lambda e: e.recorded_on)
    return history


def net_worth_change(history: list[NetWorthEntry]) -> Decimal:
    """Difference between the last and first entry of a sorted history."""
    if len(history) < 2:
        return ZERO
    return history[-1].amount - history[0].amount
