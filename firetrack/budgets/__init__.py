"""Budget evaluation and alerts."""

from firetrack.budgets.alerts import (
    budget_period_range,
    check_budget_alerts,
    period_spend,
)
from firetrack.budgets.evaluator import (
    DEFAULT_ALERT_THRESHOLD,
    BudgetEvaluator,
    budget_percentage,
    derive_status,
    is_budget_applicable,
    select_active_budgets,
)

__all__ = [
    "DEFAULT_ALERT_THRESHOLD",
    "BudgetEvaluator",
    "budget_percentage",
    "budget_period_range",
    "check_budget_alerts",
    "derive_status",
    "is_budget_applicable",
    "period_spend",
    "select_active_budgets",
]
