"""
FIRE projections.

Calculator helpers built on top of the formula engine: how long until
FIRE, which milestones are behind you, what different withdrawal rates
or a large future expense do to the target.

Unlike the engine, returns and inflation here are fractions (0.07 means
7%), matching how the simulation compounds them.
"""

from firetrack.fire.engine import fire_number
from firetrack.models.finance import (
    BaristaBreakdown,
    FireMilestone,
    FutureExpenseImpact,
    ProjectionPoint,
    ReturnScenario,
    ScenarioProjection,
    SwrScenario,
    TimeToFire,
)

MAX_PROJECTION_MONTHS = 600

MILESTONES = [
    (10, "First 10%"),
    (25, "A quarter"),
    (50, "Halfway"),
    (75, "Three quarters"),
    (90, "Last 10%"),
    (100, "FIRE!"),
]

SWR_LEVELS = [
    (2.5, "Very conservative", "Maximum safety, suited to very long retirements"),
    (3.0, "Conservative", "High safety, recommended for early retirement"),
    (3.5, "Moderate", "Balance between safety and capital required"),
    (4.0, "Aggressive", "The 4% rule, standard for traditional retirement"),
    (4.5, "Very aggressive", "High risk, needs flexible spending"),
]

DEFAULT_SCENARIOS = [
    ReturnScenario(
        name="Pessimistic", expected_return=0.05, inflation_rate=0.03, savings_growth_rate=0.0
    ),
    ReturnScenario(
        name="Realistic", expected_return=0.07, inflation_rate=0.02, savings_growth_rate=0.02
    ),
    ReturnScenario(
        name="Optimistic", expected_return=0.09, inflation_rate=0.015, savings_growth_rate=0.04
    ),
]


def real_return(expected_return: float, inflation_rate: float) -> float:
    """Inflation-adjusted return: (1 + r) / (1 + i) - 1."""
    return (1 + expected_return) / (1 + inflation_rate) - 1


def time_to_fire(
    current_savings,
    annual_savings,
    target,
    expected_return: float = 0.07,
    inflation_rate: float = 0.02,
    max_months: int = MAX_PROJECTION_MONTHS,
) -> TimeToFire:
    """
    Simulate monthly growth until `target` is reached.

    Each month the portfolio compounds at the real monthly rate and the
    monthly share of `annual_savings` is added. The simulation stops at
    the target or after `max_months`.
    """
    target = float(target)
    monthly_return = (1 + real_return(expected_return, inflation_rate)) ** (1 / 12) - 1
    monthly_savings = float(annual_savings) / 12

    value = float(current_savings)
    months = 0
    trace = []

    while value < target and months < max_months:
        value = value * (1 + monthly_return) + monthly_savings
        months += 1

        if months % 12 == 0 or value >= target:
            trace.append(ProjectionPoint(
                month=months,
                value=value,
                percentage=100 * value / target if target > 0 else 0.0,
            ))

    return TimeToFire(months=months, reached=value >= target, trace=trace)


def time_to_fire_scenarios(
    current_savings,
    annual_savings,
    target,
    scenarios: list[ReturnScenario] = DEFAULT_SCENARIOS,
) -> list[ScenarioProjection]:
    """Time to FIRE under each scenario, with savings grown by its rate."""
    projections = []
    for scenario in scenarios:
        adjusted_savings = float(annual_savings) * (1 + scenario.savings_growth_rate)
        projections.append(ScenarioProjection(
            scenario=scenario,
            time_to_fire=time_to_fire(
                current_savings,
                adjusted_savings,
                target,
                scenario.expected_return,
                scenario.inflation_rate,
            ),
        ))
    return projections


def fire_milestones(current_net_worth, target) -> list[FireMilestone]:
    """The 10/25/50/75/90/100% steps towards the FIRE number."""
    net_worth = float(current_net_worth)
    target = float(target)

    milestones = []
    for percentage, label in MILESTONES:
        amount = target * percentage / 100
        milestones.append(FireMilestone(
            percentage=percentage,
            label=label,
            amount=amount,
            reached=net_worth >= amount,
        ))
    return milestones


def swr_scenarios(annual_expenses) -> list[SwrScenario]:
    """FIRE number for each withdrawal rate from 2.5% to 4.5%."""
    return [
        SwrScenario(
            rate=rate,
            risk=risk,
            description=description,
            fire_number=fire_number(annual_expenses, rate),
        )
        for rate, risk, description in SWR_LEVELS
    ]


def future_expense_impact(
    current_fire_number,
    expense_amount,
    years_until_expense,
    expected_return: float = 0.07,
    inflation_rate: float = 0.02,
) -> FutureExpenseImpact:
    """
    Capital to add today to fund an expense `years_until_expense` away.

    The delay assumes yearly savings of 4% of the current FIRE number.
    """
    target = float(current_fire_number)
    present_value = float(expense_amount) / (
        (1 + real_return(expected_return, inflation_rate)) ** float(years_until_expense)
    )
    yearly_savings = target * 0.04

    return FutureExpenseImpact(
        present_value=present_value,
        additional_capital_needed=present_value,
        adjusted_fire_number=target + present_value,
        delay_in_years=present_value / yearly_savings if yearly_savings > 0 else 0.0,
    )


def barista_breakdown(annual_expenses, part_time_income, swr_rate=4) -> BaristaBreakdown:
    """How much of the yearly expenses work covers and how much investments must."""
    expenses = float(annual_expenses)
    covered_by_work = min(float(part_time_income), expenses)
    covered_by_investments = expenses - covered_by_work

    return BaristaBreakdown(
        fire_number=fire_number(covered_by_investments, swr_rate),
        expenses_covered_by_work=covered_by_work,
        expenses_covered_by_investments=covered_by_investments,
    )
