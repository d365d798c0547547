"""
FIRE Formula Engine

Target net worth figures for FIRE, Coast FIRE and Barista FIRE, and the
progress of a net worth towards them.

Rates are percentages (4 means 4%). Decimal inputs are accepted and
converted to float: these are projections, not bookkeeping.

DESIGN DECISION: No silent corrections. A zero withdrawal rate raises
instead of falling back to a default, and Coast FIRE is not clamped when
the retirement age is not in the future. The validator reports both.
"""

from firetrack.models.finance import FireProgress


class DegenerateRateError(ValueError):
    """A rate of zero makes the formula undefined."""

    def __init__(self, field: str, value: float):
        self.field = field
        self.value = value
        super().__init__(f"{field} must be greater than 0 (got {value})")


def _require_rate(swr_rate) -> float:
    rate = float(swr_rate)
    if rate == 0:
        raise DegenerateRateError("swr_rate", rate)
    return rate


def fire_number(annual_expenses, swr_rate) -> float:
    """
    Net worth needed to cover `annual_expenses` at the withdrawal rate.

    >>> fire_number(28200, 4)
    705000.0
    """
    return float(annual_expenses) / (_require_rate(swr_rate) / 100)


def coast_fire_number(
    annual_expenses,
    swr_rate,
    current_age,
    retirement_age,
    expected_return,
) -> float:
    """
    Net worth that compounds to the FIRE number by retirement age.

    fire_number / (1 + expected_return/100) ** (retirement_age - current_age)

    When retirement_age <= current_age the exponent is not positive and
    the result is at least the FIRE number.
    """
    target = fire_number(annual_expenses, swr_rate)
    years = int(retirement_age) - int(current_age)
    return target / (1 + float(expected_return) / 100) ** years


def barista_fire_number(annual_expenses, swr_rate, part_time_income) -> float:
    """FIRE number for the expenses part-time income does not cover."""
    uncovered = max(0.0, float(annual_expenses) - float(part_time_income))
    return uncovered / (_require_rate(swr_rate) / 100)


def progress_ratio(current_net_worth, target) -> float:
    """
    Net worth as a percentage of a target.

    0 for a non-positive target. Floored at 0, never capped.
    """
    target = float(target)
    if target <= 0:
        return 0.0
    return max(0.0, 100 * float(current_net_worth) / target)


def compute_fire_progress(
    current_net_worth,
    annual_expenses,
    swr_rate,
    current_age,
    retirement_age,
    expected_return,
    part_time_income,
) -> FireProgress:
    """All three targets and the progress towards each of them."""
    fire_target = fire_number(annual_expenses, swr_rate)
    coast_target = coast_fire_number(
        annual_expenses, swr_rate, current_age, retirement_age, expected_return
    )
    barista_target = barista_fire_number(annual_expenses, swr_rate, part_time_income)

    return FireProgress(
        fire_target=fire_target,
        coast_fire_target=coast_target,
        barista_fire_target=barista_target,
        current_net_worth=float(current_net_worth),
        annual_expenses=float(annual_expenses),
        fire_progress=progress_ratio(current_net_worth, fire_target),
        coast_fire_progress=progress_ratio(current_net_worth, coast_target),
        barista_fire_progress=progress_ratio(current_net_worth, barista_target),
    )
