"""Configuration package."""

from firetrack.config.settings import (
    AppSettings,
    BudgetSettings,
    FireDefaultsSettings,
    Settings,
    get_settings,
    validate_all_settings,
)

__all__ = [
    "AppSettings",
    "BudgetSettings",
    "FireDefaultsSettings",
    "Settings",
    "get_settings",
    "validate_all_settings",
]
