"""
Configuration Management for FireTrack

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
Profile defaults, labels and the chart palette are read from here and
nowhere else, so a deployment can change them without touching the
calculation code.
"""

from decimal import Decimal
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_CATEGORY_COLORS = {
    "Alimentari": "#10b981",
    "Trasporti": "#3b82f6",
    "Casa": "#f59e0b",
    "Bollette": "#ef4444",
    "Salute": "#ec4899",
    "Svago": "#8b5cf6",
    "Abbigliamento": "#06b6d4",
    "Ristoranti": "#f97316",
    "Viaggi": "#14b8a6",
    "Istruzione": "#6366f1",
    "Senza Categoria": "#6b7280",
}

DEFAULT_FALLBACK_PALETTE = [
    "#10b981",
    "#3b82f6",
    "#f59e0b",
    "#ef4444",
    "#8b5cf6",
    "#ec4899",
    "#06b6d4",
    "#84cc16",
]


class FireDefaultsSettings(BaseSettings):
    """
    Default FIRE parameters.

    Used when a profile is created lazily for a new user and for the
    part-time income assumed by Barista FIRE.
    """

    model_config = SettingsConfigDict(
        env_prefix="FIRE_",
        extra="ignore"
    )

    swr_rate: Decimal = Field(
        default=Decimal("4"),
        gt=0,
        description="Safe withdrawal rate in percent"
    )
    current_age: int = Field(default=30, ge=0, le=150)
    retirement_age: int = Field(default=65, ge=0, le=150)
    expected_return: Decimal = Field(
        default=Decimal("7"),
        ge=0,
        description="Expected nominal annual return in percent"
    )
    inflation_rate: Decimal = Field(
        default=Decimal("2"),
        ge=0,
        description="Expected annual inflation in percent"
    )
    monthly_expenses: Decimal = Field(default=Decimal("2350"), ge=0)
    annual_expenses: Decimal = Field(default=Decimal("28200"), ge=0)
    part_time_income: Decimal = Field(
        default=Decimal("15000"),
        ge=0,
        description="Annual part-time income assumed for Barista FIRE"
    )


class BudgetSettings(BaseSettings):
    """Budget evaluation and presentation configuration."""

    model_config = SettingsConfigDict(
        env_prefix="BUDGET_",
        extra="ignore"
    )

    default_alert_threshold: Decimal = Field(
        default=Decimal("80"),
        ge=0,
        le=100,
        description="Percentage at which a budget without its own threshold turns to warning"
    )
    uncategorized_label: str = Field(
        default="Senza Categoria",
        min_length=1,
        description="Label used for transactions without a category"
    )
    period_ending_days: int = Field(
        default=3,
        ge=0,
        description="Days before period end that trigger a PERIOD_ENDING alert"
    )
    category_colors: dict[str, str] = Field(
        default_factory=lambda: dict(DEFAULT_CATEGORY_COLORS),
        description="Chart colour per known category"
    )
    fallback_palette: list[str] = Field(
        default_factory=lambda: list(DEFAULT_FALLBACK_PALETTE),
        description="Colours assigned by position to unknown categories"
    )

    @field_validator("fallback_palette")
    @classmethod
    def validate_palette(cls, v: list[str]) -> list[str]:
        """An empty palette would leave unknown categories without a colour."""
        if not v:
            raise ValueError("fallback_palette must contain at least one colour")
        return v


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Environment
    app_environment: str = Field(
        default="development",
        description="Application environment"
    )
    debug_mode: bool = Field(
        default=False,
        description="Enable debug mode"
    )

    # Projection limits
    max_projection_months: int = Field(
        default=600,
        ge=12,
        description="Cap on the time-to-FIRE simulation"
    )
    net_worth_history_months: int = Field(
        default=12,
        ge=1,
        description="Months of net worth history returned by default"
    )


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Note: These are loaded lazily to allow partial configuration

    @property
    def fire(self) -> FireDefaultsSettings:
        return FireDefaultsSettings()

    @property
    def budget(self) -> BudgetSettings:
        return BudgetSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Uses LRU cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}.
    Useful for startup checks.
    """
    results = {}

    settings = get_settings()

    for name in ("fire", "budget", "app"):
        try:
            _ = getattr(settings, name)
            results[name] = True
        except Exception as e:
            results[name] = False
            results[f"{name}_error"] = str(e)

    return results
