"""FIRE formulas and projections."""

from firetrack.fire.engine import (
    DegenerateRateError,
    barista_fire_number,
    coast_fire_number,
    compute_fire_progress,
    fire_number,
    progress_ratio,
)
from firetrack.fire.projections import (
    barista_breakdown,
    fire_milestones,
    future_expense_impact,
    real_return,
    swr_scenarios,
    time_to_fire,
    time_to_fire_scenarios,
)

__all__ = [
    "DegenerateRateError",
    "barista_breakdown",
    "barista_fire_number",
    "coast_fire_number",
    "compute_fire_progress",
    "fire_milestones",
    "fire_number",
    "future_expense_impact",
    "progress_ratio",
    "real_return",
    "swr_scenarios",
    "time_to_fire",
    "time_to_fire_scenarios",
]
