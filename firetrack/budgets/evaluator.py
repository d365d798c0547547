"""
Budget Evaluator

Compares per-category spend against budget limits.

DESIGN DECISION: Status is derived from the unrounded percentage.
Rounding happens afterwards, only for display, so a spend of 99.96%
reads 100.0 but stays "warning" rather than "danger".
"""

from decimal import Decimal
from typing import Iterable, Mapping, Optional

from firetrack.aggregation.period import HUNDRED, ZERO, DateRange
from firetrack.models.finance import (
    Budget,
    BudgetOverviewItem,
    BudgetStatus,
    SpendingLevel,
)
from firetrack.presentation import round_percentage

DEFAULT_ALERT_THRESHOLD = Decimal("80")


def is_budget_applicable(budget: Budget, period: DateRange) -> bool:
    """
    Whether a budget overlaps the period.

    It must start on or before the period end and be open-ended or end
    on or after the period start.
    """
    if budget.start_date > period.end:
        return False
    return budget.end_date is None or budget.end_date >= period.start


def select_active_budgets(budgets: Iterable[Budget], period: DateRange) -> list[Budget]:
    """ACTIVE budgets that apply to the period."""
    return [
        budget for budget in budgets
        if budget.status == BudgetStatus.ACTIVE and is_budget_applicable(budget, period)
    ]


def budget_percentage(spent: Decimal, amount: Decimal) -> Decimal:
    """Share of the budget used, capped at 100. A zero budget reads 0."""
    if amount == ZERO:
        return ZERO
    return min(HUNDRED, HUNDRED * spent / amount)


def derive_status(
    percentage: Decimal,
    alert_threshold: Optional[Decimal] = None,
    default_threshold: Decimal = DEFAULT_ALERT_THRESHOLD,
) -> SpendingLevel:
    # An unset or zero threshold falls back to the default
    threshold = alert_threshold or default_threshold
    if percentage >= HUNDRED:
        return SpendingLevel.DANGER
    if percentage >= threshold:
        return SpendingLevel.WARNING
    return SpendingLevel.SAFE


class BudgetEvaluator:
    """
    Builds the budget-vs-spend overview.

    Usage:
        evaluator = BudgetEvaluator()
        items = evaluator.evaluate(budgets, aggregator.sum_by_category())
    """

    def __init__(self, default_threshold: Decimal = DEFAULT_ALERT_THRESHOLD):
        self.default_threshold = Decimal(default_threshold)

    def evaluate_one(self, budget: Budget, spent: Decimal) -> BudgetOverviewItem:
        spent = Decimal(str(spent))
        percentage = budget_percentage(spent, budget.amount)
        return BudgetOverviewItem(
            category=budget.category,
            budget=budget.amount,
            spent=spent,
            percentage=round_percentage(percentage),
            status=derive_status(percentage, budget.alert_threshold, self.default_threshold),
        )

    def evaluate(
        self,
        budgets: Iterable[Budget],
        spend_by_category: Mapping[str, Decimal],
    ) -> list[BudgetOverviewItem]:
        """
        One overview item per budget, sorted by category name.

        Categories match exactly (case-sensitive). A category with no
        spend counts as 0. Spend values may be Decimal, int or float.
        """
        items = [
            self.evaluate_one(budget, spend_by_category.get(budget.category, ZERO))
            for budget in budgets
        ]
        items.sort(key=lambda item: item.category)
        return items
