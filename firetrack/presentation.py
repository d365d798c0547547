"""
Presentation boundary.

Values leave the calculation layer unrounded. Rounding and chart colours
are applied here, right before results are handed to a caller.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Mapping, Sequence, Union

from firetrack.models.finance import CategorySpendingEntry, FireProgress

ONE_DECIMAL = Decimal("0.1")


def round_percentage(value: Union[Decimal, float, int]) -> float:
    """Round a percentage to one decimal, halves away from zero."""
    # str() keeps floats like 85.05 from turning into 85.04999...
    return float(Decimal(str(value)).quantize(ONE_DECIMAL, rounding=ROUND_HALF_UP))


def category_spending_entries(
    totals: Iterable[tuple[str, Decimal]],
    colors: Mapping[str, str],
    fallback_palette: Sequence[str],
) -> list[CategorySpendingEntry]:
    """
    Chart slices for category totals, largest first.

    Known categories use their configured colour. Any other category takes
    the palette colour at its own position in the sorted list.

    Raises:
        ValueError: If the fallback palette is empty
    """
    if not fallback_palette:
        raise ValueError("Fallback palette must contain at least one colour")

    ordered = sorted(totals, key=lambda item: (-item[1], item[0]))

    entries = []
    for index, (name, value) in enumerate(ordered):
        color = colors.get(name) or fallback_palette[index % len(fallback_palette)]
        entries.append(CategorySpendingEntry(name=name, value=value, color=color))
    return entries


def round_fire_progress(progress: FireProgress) -> FireProgress:
    """Round money to whole units and progress to one decimal."""
    return FireProgress(
        fire_target=round(progress.fire_target),
        coast_fire_target=round(progress.coast_fire_target),
        barista_fire_target=round(progress.barista_fire_target),
        current_net_worth=progress.current_net_worth,
        annual_expenses=progress.annual_expenses,
        fire_progress=round_percentage(progress.fire_progress),
        coast_fire_progress=round_percentage(progress.coast_fire_progress),
        barista_fire_progress=round_percentage(progress.barista_fire_progress),
    )
