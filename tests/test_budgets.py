"""
Tests for the Budget Evaluator and budget alerts.
"""

import pytest
from datetime import date, datetime
from decimal import Decimal

from firetrack.aggregation import DateRange
from firetrack.budgets import (
    BudgetEvaluator,
    budget_percentage,
    budget_period_range,
    check_budget_alerts,
    derive_status,
    is_budget_applicable,
    select_active_budgets,
)
from firetrack.models.finance import (
    Budget,
    BudgetAlert,
    BudgetAlertType,
    BudgetPeriod,
    BudgetStatus,
    SpendingLevel,
    Transaction,
    TransactionType,
)


def _budget(category="Alimentari", amount=1000, **kwargs):
    kwargs.setdefault("start_date", date(2024, 1, 1))
    return Budget(
        user_id="user-1",
        category=category,
        amount=Decimal(str(amount)),
        **kwargs,
    )


def _expense(amount, day, category="Alimentari"):
    return Transaction(
        user_id="user-1",
        amount=Decimal(str(amount)),
        category=category,
        type=TransactionType.EXPENSE,
        transaction_date=day,
    )


MARCH = DateRange.for_month(date(2024, 3, 15))


class TestApplicability:
    """Tests for which budgets apply to a month."""

    def test_open_ended_budget_applies(self):
        """Test an open-ended budget started earlier."""
        assert is_budget_applicable(_budget(), MARCH)

    def test_budget_starting_after_month_end(self):
        """Test a budget that starts next month."""
        assert not is_budget_applicable(_budget(start_date=date(2024, 4, 1)), MARCH)

    def test_budget_starting_on_month_end(self):
        """Test a budget that starts on the last day of the month."""
        assert is_budget_applicable(_budget(start_date=date(2024, 3, 31)), MARCH)

    def test_budget_ended_before_month(self):
        """Test a budget that ended last month."""
        budget = _budget(start_date=date(2024, 1, 1), end_date=date(2024, 2, 29))
        assert not is_budget_applicable(budget, MARCH)

    def test_budget_ending_on_month_start(self):
        """Test a budget ending on the first day of the month."""
        budget = _budget(start_date=date(2024, 1, 1), end_date=date(2024, 3, 1))
        assert is_budget_applicable(budget, MARCH)

    def test_only_active_budgets_selected(self):
        """Test that paused and completed budgets are left out."""
        budgets = [
            _budget(category="Casa"),
            _budget(category="Svago", status=BudgetStatus.PAUSED),
            _budget(category="Viaggi", status=BudgetStatus.COMPLETED),
        ]
        selected = select_active_budgets(budgets, MARCH)
        assert [b.category for b in selected] == ["Casa"]


class TestPercentageAndStatus:
    """Tests for percentage and status derivation."""

    def test_zero_budget_reads_zero(self):
        """Test that a zero budget does not divide by zero."""
        assert budget_percentage(Decimal("50"), Decimal("0")) == Decimal("0")

    def test_percentage_is_capped(self):
        """Test that overspending caps the percentage at 100."""
        assert budget_percentage(Decimal("1500"), Decimal("1000")) == Decimal("100")

    def test_status_levels(self):
        """Test the three status levels with the default threshold."""
        assert derive_status(Decimal("100")) == SpendingLevel.DANGER
        assert derive_status(Decimal("80")) == SpendingLevel.WARNING
        assert derive_status(Decimal("79.9")) == SpendingLevel.SAFE

    def test_custom_threshold(self):
        """Test that the budget's own threshold wins over the default."""
        assert derive_status(Decimal("85"), Decimal("90")) == SpendingLevel.SAFE
        assert derive_status(Decimal("50"), Decimal("50")) == SpendingLevel.WARNING

    def test_zero_threshold_uses_default(self):
        """Test that a zero threshold does not turn every budget into a warning."""
        assert derive_status(Decimal("0"), Decimal("0")) == SpendingLevel.SAFE
        assert derive_status(Decimal("80"), Decimal("0")) == SpendingLevel.WARNING


class TestBudgetEvaluator:
    """Tests for the budget overview."""

    def test_fully_spent_budget_is_danger(self):
        """Test amount 1000, spent 1000, threshold 80."""
        items = BudgetEvaluator().evaluate(
            [_budget(amount=1000, alert_threshold=Decimal("80"))],
            {"Alimentari": Decimal("1000")},
        )
        assert items[0].percentage == 100.0
        assert items[0].status == SpendingLevel.DANGER

    def test_threshold_reached_is_warning(self):
        """Test amount 1000, spent 850."""
        items = BudgetEvaluator().evaluate([_budget(amount=1000)], {"Alimentari": Decimal("850")})
        assert items[0].percentage == 85.0
        assert items[0].status == SpendingLevel.WARNING

    def test_zero_amount_budget_is_safe(self):
        """Test a zero-amount budget with spending."""
        items = BudgetEvaluator().evaluate([_budget(amount=0)], {"Alimentari": Decimal("50")})
        assert items[0].percentage == 0.0
        assert items[0].status == SpendingLevel.SAFE

    def test_budget_without_spend(self):
        """Test a budget whose category has no transactions."""
        items = BudgetEvaluator().evaluate([_budget(category="Trasporti")], {})
        assert items[0].spent == Decimal("0")
        assert items[0].percentage == 0.0
        assert items[0].status == SpendingLevel.SAFE

    def test_status_uses_unrounded_percentage(self):
        """Test that 99.95% displays as 100.0 but stays a warning."""
        items = BudgetEvaluator().evaluate(
            [_budget(amount=1000)], {"Alimentari": Decimal("999.5")}
        )
        assert items[0].percentage == 100.0
        assert items[0].status == SpendingLevel.WARNING

    def test_percentage_rounds_half_up(self):
        """Test one-decimal half-up rounding."""
        items = BudgetEvaluator().evaluate(
            [_budget(amount=200)], {"Alimentari": Decimal("24.7")}
        )
        assert items[0].percentage == 12.4

    def test_overspent_budget_caps_at_100(self):
        """Test that overspending shows 100.0."""
        items = BudgetEvaluator().evaluate([_budget(amount=200)], {"Alimentari": Decimal("500")})
        assert items[0].percentage == 100.0
        assert items[0].spent == Decimal("500")
        assert items[0].status == SpendingLevel.DANGER

    def test_category_match_is_case_sensitive(self):
        """Test that categories must match exactly."""
        items = BudgetEvaluator().evaluate([_budget()], {"alimentari": Decimal("900")})
        assert items[0].spent == Decimal("0")

    def test_sorted_by_category(self):
        """Test case-sensitive ascending order."""
        items = BudgetEvaluator().evaluate(
            [_budget(category="casa"), _budget(category="Bollette"), _budget(category="Alimentari")],
            {},
        )
        assert [i.category for i in items] == ["Alimentari", "Bollette", "casa"]

    def test_default_threshold_is_configurable(self):
        """Test an evaluator built with another default threshold."""
        items = BudgetEvaluator(default_threshold=Decimal("90")).evaluate(
            [_budget(amount=1000)], {"Alimentari": Decimal("850")}
        )
        assert items[0].status == SpendingLevel.SAFE

    def test_evaluation_is_idempotent(self):
        """Test that equal inputs give equal outputs."""
        budgets = [_budget(amount=1000), _budget(category="Casa", amount=300)]
        spend = {"Alimentari": Decimal("850"), "Casa": Decimal("10")}
        evaluator = BudgetEvaluator()
        assert evaluator.evaluate(budgets, spend) == evaluator.evaluate(budgets, spend)

    def test_zero_threshold_falls_back_to_default(self):
        """Test that a threshold of 0 behaves like an unset one."""
        items = BudgetEvaluator().evaluate(
            [
                _budget(amount=500, alert_threshold=Decimal("0")),
                _budget(category="Regali", amount=0, alert_threshold=Decimal("0")),
            ],
            {"Regali": Decimal("10")},
        )
        assert [(i.category, i.percentage, i.status) for i in items] == [
            ("Alimentari", 0.0, SpendingLevel.SAFE),
            ("Regali", 0.0, SpendingLevel.SAFE),
        ]

    def test_float_spend_accepted(self):
        """Test a spend mapping with float values."""
        items = BudgetEvaluator().evaluate([_budget(amount=1000)], {"Alimentari": 850.0})
        assert items[0].spent == Decimal("850")
        assert items[0].percentage == 85.0
        assert items[0].status == SpendingLevel.WARNING


class TestBudgetPeriodRange:
    """Tests for budget period windows."""

    def test_monthly(self):
        window = budget_period_range(BudgetPeriod.MONTHLY, date(2024, 3, 15))
        assert (window.start, window.end) == (date(2024, 3, 1), date(2024, 3, 31))

    def test_quarterly(self):
        window = budget_period_range(BudgetPeriod.QUARTERLY, date(2024, 3, 15))
        assert (window.start, window.end) == (date(2024, 1, 1), date(2024, 3, 31))

    def test_yearly(self):
        window = budget_period_range(BudgetPeriod.YEARLY, date(2024, 3, 15))
        assert (window.start, window.end) == (date(2024, 1, 1), date(2024, 12, 31))


class TestBudgetAlerts:
    """Tests for the budget alert check."""

    def test_exceeded_alert(self):
        """Test an overspent monthly budget."""
        budget = _budget(amount=500)
        alerts = check_budget_alerts(
            [budget], [_expense(600, date(2024, 3, 5))], date(2024, 3, 15)
        )
        assert len(alerts) == 1
        assert alerts[0].alert_type == BudgetAlertType.BUDGET_EXCEEDED
        assert alerts[0].percentage_used == pytest.approx(120.0)
        assert alerts[0].budget_id == budget.id

    def test_threshold_alert(self):
        """Test a budget past its threshold but not exceeded."""
        alerts = check_budget_alerts(
            [_budget(amount=500)], [_expense(420, date(2024, 3, 5))], date(2024, 3, 15)
        )
        assert [a.alert_type for a in alerts] == [BudgetAlertType.THRESHOLD_REACHED]
        assert alerts[0].percentage_used == pytest.approx(84.0)

    def test_no_alert_below_threshold(self):
        """Test that low spending raises nothing mid-month."""
        alerts = check_budget_alerts(
            [_budget(amount=500)], [_expense(100, date(2024, 3, 5))], date(2024, 3, 15)
        )
        assert alerts == []

    def test_period_ending_alert(self):
        """Test the alert in the last days of the period."""
        alerts = check_budget_alerts(
            [_budget(amount=500)], [_expense(100, date(2024, 3, 5))], date(2024, 3, 29)
        )
        assert [a.alert_type for a in alerts] == [BudgetAlertType.PERIOD_ENDING]

    def test_period_ending_added_to_exceeded(self):
        """Test that period ending is raised on top of other alerts."""
        alerts = check_budget_alerts(
            [_budget(amount=500)], [_expense(700, date(2024, 3, 5))], date(2024, 3, 28)
        )
        assert [a.alert_type for a in alerts] == [
            BudgetAlertType.BUDGET_EXCEEDED,
            BudgetAlertType.PERIOD_ENDING,
        ]

    def test_no_period_ending_on_last_day(self):
        """Test that the last day itself does not count as ending soon."""
        alerts = check_budget_alerts(
            [_budget(amount=500)], [_expense(100, date(2024, 3, 5))], date(2024, 3, 31)
        )
        assert alerts == []

    def test_existing_alert_not_repeated(self):
        """Test that an alert raised this period is not raised again."""
        budget = _budget(amount=500)
        existing = [
            BudgetAlert(
                budget_id=budget.id,
                user_id="user-1",
                alert_type=BudgetAlertType.BUDGET_EXCEEDED,
                percentage_used=110.0,
                message="exceeded",
                created_at=datetime(2024, 3, 10, 9, 0),
            )
        ]
        alerts = check_budget_alerts(
            [budget], [_expense(600, date(2024, 3, 5))], date(2024, 3, 15), existing
        )
        assert alerts == []

    def test_alert_from_previous_period_does_not_block(self):
        """Test that last month's alert does not silence this month."""
        budget = _budget(amount=500)
        existing = [
            BudgetAlert(
                budget_id=budget.id,
                user_id="user-1",
                alert_type=BudgetAlertType.BUDGET_EXCEEDED,
                percentage_used=110.0,
                message="exceeded",
                created_at=datetime(2024, 2, 20, 9, 0),
            )
        ]
        alerts = check_budget_alerts(
            [budget], [_expense(600, date(2024, 3, 5))], date(2024, 3, 15), existing
        )
        assert [a.alert_type for a in alerts] == [BudgetAlertType.BUDGET_EXCEEDED]

    def test_quarterly_budget_counts_whole_quarter(self):
        """Test that a quarterly budget sums spending since the quarter start."""
        alerts = check_budget_alerts(
            [_budget(amount=1000, period=BudgetPeriod.QUARTERLY)],
            [
                _expense(600, date(2024, 1, 10)),
                _expense(500, date(2024, 3, 5)),
                _expense(900, date(2023, 12, 31)),
            ],
            date(2024, 3, 15),
        )
        assert alerts[0].alert_type == BudgetAlertType.BUDGET_EXCEEDED
        assert alerts[0].percentage_used == pytest.approx(110.0)

    def test_inactive_budget_skipped(self):
        """Test that paused budgets raise nothing."""
        alerts = check_budget_alerts(
            [_budget(amount=100, status=BudgetStatus.PAUSED)],
            [_expense(600, date(2024, 3, 5))],
            date(2024, 3, 15),
        )
        assert alerts == []

    def test_zero_threshold_alerts_at_default(self):
        """Test that a threshold of 0 falls back to the default of 80."""
        alerts = check_budget_alerts(
            [_budget(amount=1000, alert_threshold=Decimal("0"))],
            [_expense(100, date(2024, 3, 5))],
            date(2024, 3, 15),
        )
        assert alerts == []

    def test_zero_amount_budget_raises_no_spending_alert(self):
        """Test that a zero budget reads 0% instead of dividing by zero."""
        alerts = check_budget_alerts(
            [_budget(amount=0)], [_expense(50, date(2024, 3, 5))], date(2024, 3, 15)
        )
        assert alerts == []

    def test_other_categories_ignored(self):
        """Test that only the budget's category counts."""
        alerts = check_budget_alerts(
            [_budget(amount=100)],
            [_expense(600, date(2024, 3, 5), category="Casa")],
            date(2024, 3, 15),
        )
        assert alerts == []


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
