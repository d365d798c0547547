"""
Budget alerts.

Each ACTIVE budget is checked against the spend of its category over its
own period (month, quarter or year containing today). The check returns
alert drafts; persisting them is up to the caller.

An alert type already raised for a budget during the current period is
not raised again.
"""

from datetime import date
from decimal import Decimal
from typing import Iterable

from firetrack.aggregation.period import HUNDRED, ZERO, DateRange
from firetrack.budgets.evaluator import DEFAULT_ALERT_THRESHOLD
from firetrack.models.finance import (
    Budget,
    BudgetAlert,
    BudgetAlertType,
    BudgetPeriod,
    BudgetStatus,
    Transaction,
    TransactionType,
)

DEFAULT_PERIOD_ENDING_DAYS = 3


def budget_period_range(period: BudgetPeriod, today: date) -> DateRange:
    """Calendar window of a budget period containing `today`."""
    if period == BudgetPeriod.QUARTERLY:
        return DateRange.for_quarter(today)
    if period == BudgetPeriod.YEARLY:
        return DateRange.for_year(today)
    return DateRange.for_month(today)


def period_spend(
    budget: Budget,
    transactions: Iterable[Transaction],
    window: DateRange,
) -> Decimal:
    """Expense total of the budget's category inside the window."""
    return sum(
        (
            txn.magnitude for txn in transactions
            if txn.type == TransactionType.EXPENSE
            and txn.category == budget.category
            and window.contains(txn.transaction_date)
        ),
        ZERO,
    )


def _already_raised(
    budget: Budget,
    existing_alerts: Iterable[BudgetAlert],
    window: DateRange,
) -> set[BudgetAlertType]:
    return {
        alert.alert_type for alert in existing_alerts
        if alert.budget_id == budget.id and alert.created_at.date() >= window.start
    }


def check_budget_alerts(
    budgets: Iterable[Budget],
    transactions: Iterable[Transaction],
    today: date,
    existing_alerts: Iterable[BudgetAlert] = (),
    default_threshold: Decimal = DEFAULT_ALERT_THRESHOLD,
    period_ending_days: int = DEFAULT_PERIOD_ENDING_DAYS,
) -> list[BudgetAlert]:
    """
    Alert drafts for every ACTIVE budget.

    BUDGET_EXCEEDED at 100% or more, otherwise THRESHOLD_REACHED at the
    budget's threshold. PERIOD_ENDING is added on top when the period
    ends within `period_ending_days` days (the last day itself excluded).
    The percentage here is not capped.
    """
    transactions = list(transactions)
    existing_alerts = list(existing_alerts)

    alerts = []
    for budget in budgets:
        if budget.status != BudgetStatus.ACTIVE:
            continue

        window = budget_period_range(budget.period, today)
        spent = period_spend(budget, transactions, window)
        percentage = ZERO if budget.amount == ZERO else HUNDRED * spent / budget.amount
        threshold = budget.alert_threshold or default_threshold
        raised = _already_raised(budget, existing_alerts, window)

        if percentage >= HUNDRED:
            if BudgetAlertType.BUDGET_EXCEEDED not in raised:
                alerts.append(BudgetAlert(
                    budget_id=budget.id,
                    user_id=budget.user_id,
                    alert_type=BudgetAlertType.BUDGET_EXCEEDED,
                    percentage_used=float(percentage),
                    message=(
                        f"Budget for {budget.category} exceeded: spent "
                        f"{spent:.2f} of {budget.amount:.2f}."
                    ),
                ))
        elif percentage >= threshold:
            if BudgetAlertType.THRESHOLD_REACHED not in raised:
                alerts.append(BudgetAlert(
                    budget_id=budget.id,
                    user_id=budget.user_id,
                    alert_type=BudgetAlertType.THRESHOLD_REACHED,
                    percentage_used=float(percentage),
                    message=(
                        f"You have used {percentage:.0f}% of the budget for "
                        f"{budget.category}."
                    ),
                ))

        days_until_end = (window.end - today).days
        if 0 < days_until_end <= period_ending_days:
            if BudgetAlertType.PERIOD_ENDING not in raised:
                alerts.append(BudgetAlert(
                    budget_id=budget.id,
                    user_id=budget.user_id,
                    alert_type=BudgetAlertType.PERIOD_ENDING,
                    percentage_used=float(percentage),
                    message=(
                        f"The budget period for {budget.category} ends in "
                        f"{days_until_end} days. {percentage:.0f}% used."
                    ),
                ))

    return alerts
