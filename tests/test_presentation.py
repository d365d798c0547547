"""
Tests for rounding and chart colours at the presentation boundary.
"""

import pytest
from decimal import Decimal

from firetrack.presentation import category_spending_entries, round_percentage


COLORS = {"Alimentari": "#10b981"}
PALETTE = ["#111111", "#222222"]


class TestRoundPercentage:
    """Tests for one-decimal half-up rounding."""

    def test_half_rounds_up(self):
        assert round_percentage(Decimal("12.35")) == 12.4

    def test_float_input(self):
        """Test that float noise does not round a half down."""
        assert round_percentage(85.05) == 85.1


class TestCategorySpendingEntries:
    """Tests for chart slices."""

    def test_configured_and_fallback_colours(self):
        """Test configured colours first, palette by position otherwise."""
        entries = category_spending_entries(
            [("Casa", Decimal("100")), ("Alimentari", Decimal("300")), ("Svago", Decimal("50"))],
            COLORS,
            PALETTE,
        )
        assert [(e.name, e.color) for e in entries] == [
            ("Alimentari", "#10b981"),
            ("Casa", "#222222"),
            ("Svago", "#111111"),
        ]

    def test_empty_palette_rejected(self):
        """Test that an empty palette is refused before any colour is picked."""
        with pytest.raises(ValueError):
            category_spending_entries([("Casa", Decimal("100"))], COLORS, [])

    def test_empty_palette_rejected_without_totals(self):
        """Test that the palette is checked even when there is nothing to colour."""
        with pytest.raises(ValueError):
            category_spending_entries([], COLORS, [])


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
