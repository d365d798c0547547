"""Aggregation package."""

from firetrack.aggregation.networth import (
    current_net_worth,
    net_worth_change,
    net_worth_history,
)
from firetrack.aggregation.period import (
    DateRange,
    PeriodAggregator,
    annual_expenses,
    monthly_category_breakdown,
)

__all__ = [
    "DateRange",
    "PeriodAggregator",
    "annual_expenses",
    "current_net_worth",
    "monthly_category_breakdown",
    "net_worth_change",
    "net_worth_history",
]
