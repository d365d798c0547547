"""
Tests for the FIRE Formula Engine and projections.
"""

import pytest
from decimal import Decimal

from firetrack.fire import (
    DegenerateRateError,
    barista_breakdown,
    barista_fire_number,
    coast_fire_number,
    compute_fire_progress,
    fire_milestones,
    fire_number,
    future_expense_impact,
    progress_ratio,
    real_return,
    swr_scenarios,
    time_to_fire,
    time_to_fire_scenarios,
)
from firetrack.presentation import round_fire_progress


class TestFireNumber:
    """Tests for the FIRE number."""

    def test_four_percent_rule(self):
        """Test 28200 a year at 4%."""
        assert fire_number(28200, 4) == pytest.approx(705000)

    def test_decimal_inputs(self):
        """Test that Decimal inputs are accepted."""
        assert fire_number(Decimal("28200"), Decimal("4")) == pytest.approx(705000)

    def test_zero_rate_raises(self):
        """Test that a zero withdrawal rate is refused."""
        with pytest.raises(DegenerateRateError) as exc_info:
            fire_number(28200, 0)
        assert isinstance(exc_info.value, ValueError)
        assert exc_info.value.field == "swr_rate"

    def test_idempotent(self):
        """Test that repeated calls agree."""
        assert fire_number(31000, 3.5) == fire_number(31000, 3.5)


class TestCoastFire:
    """Tests for Coast FIRE."""

    def test_default_profile(self):
        """Test the default profile: 35 years at 7%."""
        result = coast_fire_number(28200, 4, 30, 65, 7)
        assert result == pytest.approx(705000 / 1.07 ** 35)
        assert result == pytest.approx(66032, abs=1)

    def test_retirement_age_reached(self):
        """Test that no years left means the full FIRE number."""
        assert coast_fire_number(28200, 4, 65, 65, 7) == pytest.approx(705000)

    def test_retirement_age_passed_is_not_clamped(self):
        """Test that a past retirement age gives more than the FIRE number."""
        assert coast_fire_number(28200, 4, 70, 65, 7) > 705000

    def test_zero_rate_raises(self):
        """Test that Coast FIRE inherits the rate check."""
        with pytest.raises(DegenerateRateError):
            coast_fire_number(28200, 0, 30, 65, 7)


class TestBaristaFire:
    """Tests for Barista FIRE."""

    def test_part_time_income_offsets_expenses(self):
        """Test 28200 of expenses with 15000 of part-time income."""
        assert barista_fire_number(28200, 4, 15000) == pytest.approx(330000)

    def test_income_above_expenses(self):
        """Test that the uncovered amount is floored at 0."""
        assert barista_fire_number(28200, 4, 40000) == 0.0

    def test_zero_rate_raises(self):
        with pytest.raises(DegenerateRateError):
            barista_fire_number(28200, 0, 15000)


class TestProgressRatio:
    """Tests for progress towards a target."""

    def test_progress(self):
        """Test 120000 towards 750000."""
        assert progress_ratio(120000, 750000) == pytest.approx(16.0)

    def test_zero_target(self):
        """Test that a zero target gives 0."""
        assert progress_ratio(120000, 0) == 0.0

    def test_negative_net_worth_floored(self):
        """Test that debt does not give negative progress."""
        assert progress_ratio(-5000, 750000) == 0.0

    def test_not_capped(self):
        """Test that passing the goal reads above 100."""
        assert progress_ratio(1500000, 750000) == pytest.approx(200.0)


class TestComputeFireProgress:
    """Tests for the combined progress record."""

    def test_default_profile(self):
        """Test all targets for the default profile."""
        progress = compute_fire_progress(
            current_net_worth=Decimal("120000"),
            annual_expenses=Decimal("28200"),
            swr_rate=Decimal("4"),
            current_age=30,
            retirement_age=65,
            expected_return=Decimal("7"),
            part_time_income=Decimal("15000"),
        )
        assert progress.fire_target == pytest.approx(705000)
        assert progress.barista_fire_target == pytest.approx(330000)
        assert progress.fire_progress == pytest.approx(100 * 120000 / 705000)
        assert progress.barista_fire_progress == pytest.approx(100 * 120000 / 330000)
        assert progress.coast_fire_progress > 100
        assert progress.current_net_worth == 120000.0

    def test_rounding_at_presentation(self):
        """Test that rounding is applied only by the presentation helper."""
        progress = compute_fire_progress(120000, 28200, 4, 30, 65, 7, 15000)
        rounded = round_fire_progress(progress)
        assert rounded.fire_progress == 17.0
        assert rounded.fire_target == 705000
        assert progress.fire_progress != rounded.fire_progress


class TestProjections:
    """Tests for FIRE projections."""

    def test_real_return(self):
        """Test the inflation-adjusted return."""
        assert real_return(0.07, 0.02) == pytest.approx(1.07 / 1.02 - 1)

    def test_already_at_target(self):
        """Test that reaching the target takes no time."""
        result = time_to_fire(800000, 10000, 705000)
        assert result.months == 0
        assert result.reached is True
        assert result.trace == []

    def test_savings_only(self):
        """Test a projection with no market return."""
        result = time_to_fire(0, 12000, 24000, expected_return=0.0, inflation_rate=0.0)
        assert result.months == 24
        assert result.years == 2.0
        assert result.reached is True
        assert [p.month for p in result.trace] == [12, 24]
        assert result.trace[-1].percentage == pytest.approx(100.0)

    def test_month_cap(self):
        """Test that an unreachable target stops at the cap."""
        result = time_to_fire(0, 0, 705000, expected_return=0.0, inflation_rate=0.0)
        assert result.months == 600
        assert result.reached is False
        assert len(result.trace) == 50

    def test_growth_shortens_time(self):
        """Test that returns reach the target sooner than savings alone."""
        with_growth = time_to_fire(100000, 20000, 705000, 0.07, 0.02)
        without = time_to_fire(100000, 20000, 705000, 0.0, 0.0)
        assert with_growth.reached
        assert with_growth.months < without.months

    def test_scenarios(self):
        """Test the three market scenarios."""
        projections = time_to_fire_scenarios(100000, 20000, 705000)
        assert [p.scenario.name for p in projections] == [
            "Pessimistic", "Realistic", "Optimistic",
        ]
        months = [p.time_to_fire.months for p in projections]
        assert months[0] > months[1] > months[2]

    def test_milestones(self):
        """Test which milestones have been reached."""
        milestones = fire_milestones(300000, 705000)
        assert [m.percentage for m in milestones] == [10, 25, 50, 75, 90, 100]
        assert [m.reached for m in milestones] == [True, True, False, False, False, False]
        assert milestones[2].amount == pytest.approx(352500)

    def test_swr_scenarios(self):
        """Test the FIRE number for each withdrawal rate."""
        scenarios = swr_scenarios(28200)
        assert [s.rate for s in scenarios] == [2.5, 3.0, 3.5, 4.0, 4.5]
        assert scenarios[0].fire_number == pytest.approx(1128000)
        assert scenarios[3].fire_number == pytest.approx(705000)
        assert scenarios[3].multiplier == pytest.approx(25)

    def test_future_expense_today(self):
        """Test an expense due now: its present value is the full amount."""
        impact = future_expense_impact(705000, 50000, 0)
        assert impact.present_value == pytest.approx(50000)
        assert impact.adjusted_fire_number == pytest.approx(755000)
        assert impact.delay_in_years == pytest.approx(50000 / 28200)

    def test_future_expense_discounted(self):
        """Test that a later expense costs less today."""
        impact = future_expense_impact(705000, 50000, 10)
        assert impact.present_value < 50000
        assert impact.additional_capital_needed == impact.present_value

    def test_barista_breakdown(self):
        """Test the split between work and investments."""
        breakdown = barista_breakdown(28200, 15000, 4)
        assert breakdown.expenses_covered_by_work == 15000
        assert breakdown.expenses_covered_by_investments == 13200
        assert breakdown.fire_number == pytest.approx(330000)

    def test_barista_breakdown_work_covers_all(self):
        """Test part-time income above expenses."""
        breakdown = barista_breakdown(28200, 40000, 4)
        assert breakdown.expenses_covered_by_work == 28200
        assert breakdown.fire_number == 0.0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
