"""
Core Data Models for FireTrack

These models define the strict schemas for all data flowing through the system.
They are designed to:
1. Enforce type safety at runtime
2. Provide clear validation error messages
3. Be serializable for API responses and logging
4. Keep money exact (Decimal) until the presentation boundary

DESIGN DECISION: Input records (transactions, budgets, profile, net worth)
are read-only snapshots owned by the persistence layer. Derived records
(overview items, FIRE progress) are recomputed on every request and
never stored.
"""

from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Optional
from uuid import UUID, uuid4

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class TransactionType(str, Enum):
    """
    Direction of a transaction.

    The stored amount is a magnitude; the sign comes from this type.
    """
    INCOME = "INCOME"
    EXPENSE = "EXPENSE"


class BudgetStatus(str, Enum):
    """Lifecycle status of a budget. Only ACTIVE budgets are evaluated."""
    ACTIVE = "ACTIVE"
    PAUSED = "PAUSED"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class BudgetPeriod(str, Enum):
    """Window a budget limit applies to when checking alerts."""
    MONTHLY = "MONTHLY"
    QUARTERLY = "QUARTERLY"
    YEARLY = "YEARLY"


class SpendingLevel(str, Enum):
    """Status of a budget line in the overview."""
    SAFE = "safe"
    WARNING = "warning"
    DANGER = "danger"


class BudgetAlertType(str, Enum):
    """Kinds of budget alerts."""
    BUDGET_EXCEEDED = "BUDGET_EXCEEDED"
    THRESHOLD_REACHED = "THRESHOLD_REACHED"
    PERIOD_ENDING = "PERIOD_ENDING"


class AnalyticsPeriod(str, Enum):
    """
    Granularity requested for spending analytics.

    Each value maps to the number of trailing months analysed.
    """
    MONTH = "month"
    QUARTER = "quarter"
    YEAR = "year"

    @property
    def months(self) -> int:
        return {"month": 6, "quarter": 12, "year": 24}[self.value]


# =============================================================================
# INPUT RECORDS
# =============================================================================

class Transaction(BaseModel):
    """
    A single income or expense entry.

    CRITICAL: `amount` is always treated as a magnitude.
    Whatever sign was stored, direction comes from `type`.
    """
    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    id: UUID = Field(
        default_factory=uuid4,
        description="Unique transaction ID"
    )
    user_id: str = Field(
        ...,
        min_length=1,
        description="Owner of the transaction"
    )
    description: str = Field(
        default="",
        max_length=500,
        description="Free-text description"
    )
    amount: Decimal = Field(
        ...,
        description="Amount (magnitude; direction comes from type)"
    )
    category: Optional[str] = Field(
        default=None,
        max_length=100,
        description="Free-text category, None when uncategorized"
    )
    type: TransactionType = Field(
        ...,
        description="INCOME or EXPENSE"
    )
    transaction_date: date = Field(
        ...,
        description="Calendar date of the transaction"
    )
    notes: Optional[str] = Field(
        default=None,
        max_length=1000
    )

    @field_validator("transaction_date", mode="before")
    @classmethod
    def truncate_datetime(cls, v):
        """Accept timestamps but keep only the calendar date."""
        if isinstance(v, datetime):
            return v.date()
        return v

    @property
    def magnitude(self) -> Decimal:
        """Absolute value of the stored amount."""
        return abs(self.amount)


class Budget(BaseModel):
    """
    A spending limit for one category.

    A budget applies to a month if it starts on or before the month end
    and is open-ended or ends on or after the month start.
    """
    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    id: UUID = Field(default_factory=uuid4)
    user_id: str = Field(..., min_length=1)
    category: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Category this budget limits"
    )
    amount: Decimal = Field(
        ...,
        ge=0,
        description="Budget limit"
    )
    alert_threshold: Optional[Decimal] = Field(
        default=None,
        ge=0,
        description="Percentage at which the budget turns to warning (default applied at evaluation)"
    )
    status: BudgetStatus = Field(default=BudgetStatus.ACTIVE)
    period: BudgetPeriod = Field(default=BudgetPeriod.MONTHLY)
    start_date: date
    end_date: Optional[date] = Field(
        default=None,
        description="None means open-ended"
    )
    notes: Optional[str] = Field(default=None, max_length=1000)

    @model_validator(mode="after")
    def validate_dates(self) -> "Budget":
        """Validate date relationships."""
        if self.end_date and self.end_date < self.start_date:
            raise ValueError("Budget end date cannot be before start date")
        return self


class Profile(BaseModel):
    """
    FIRE parameters of a user.

    Exactly one per user. Rates are percentages (4 means 4%).
    All values are non-negative; zero SWR is caught by the validator.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    id: str = Field(
        ...,
        min_length=1,
        description="User ID this profile belongs to"
    )
    swr_rate: Decimal = Field(default=Decimal("4"), ge=0)
    current_age: int = Field(default=30, ge=0, le=150)
    retirement_age: int = Field(default=65, ge=0, le=150)
    expected_return: Decimal = Field(default=Decimal("7"), ge=0)
    inflation_rate: Decimal = Field(default=Decimal("2"), ge=0)
    monthly_expenses: Optional[Decimal] = Field(default=Decimal("2350"), ge=0)
    annual_expenses: Optional[Decimal] = Field(default=Decimal("28200"), ge=0)
    created_at: datetime = Field(default_factory=datetime.utcnow)


class NetWorthEntry(BaseModel):
    """A dated net worth snapshot."""
    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    id: UUID = Field(default_factory=uuid4)
    user_id: str = Field(..., min_length=1)
    recorded_on: date
    amount: Decimal
    notes: Optional[str] = Field(default=None, max_length=1000)


# =============================================================================
# DERIVED RECORDS
# =============================================================================

class CategorySpendingEntry(BaseModel):
    """One slice of the category spending chart."""

    name: str
    value: Decimal = Field(..., ge=0)
    color: str


class BudgetOverviewItem(BaseModel):
    """Budget-vs-spend line for one budget."""

    category: str
    budget: Decimal
    spent: Decimal
    percentage: float = Field(
        ...,
        ge=0,
        le=100,
        description="Share of the budget used, one decimal"
    )
    status: SpendingLevel


class SavingsRate(BaseModel):
    """Monthly income, expenses and the resulting savings rate."""

    income: Decimal
    expenses: Decimal
    savings_rate: float = Field(
        ...,
        ge=0,
        description="Percentage of income saved, floored at 0"
    )


class MonthlyCategoryBreakdown(BaseModel):
    """Expense totals per category for one month (YYYY-MM)."""

    month: str = Field(..., pattern=r"^\d{4}-\d{2}$")
    categories: dict[str, Decimal] = Field(default_factory=dict)

    @property
    def total(self) -> Decimal:
        return sum(self.categories.values(), Decimal("0"))


class FireProgress(BaseModel):
    """
    FIRE targets and progress towards them.

    Progress values are percentages floored at 0 and never capped:
    values above 100 mean the goal has been passed.
    """

    fire_target: float
    coast_fire_target: float
    barista_fire_target: float
    current_net_worth: float
    annual_expenses: float
    fire_progress: float = Field(..., ge=0)
    coast_fire_progress: float = Field(..., ge=0)
    barista_fire_progress: float = Field(..., ge=0)


class BudgetAlert(BaseModel):
    """An alert draft produced by the budget alert check."""

    budget_id: UUID
    user_id: str
    alert_type: BudgetAlertType
    percentage_used: float
    message: str
    created_at: datetime = Field(default_factory=datetime.utcnow)


# =============================================================================
# PROJECTION RECORDS
# =============================================================================

class ProjectionPoint(BaseModel):
    """Simulated portfolio value at the end of a month."""

    month: int = Field(..., ge=1)
    value: float
    percentage: float


class TimeToFire(BaseModel):
    """Outcome of the time-to-FIRE simulation."""

    months: int = Field(..., ge=0)
    reached: bool = Field(
        ...,
        description="False when the simulation hit its month cap first"
    )
    trace: list[ProjectionPoint] = Field(
        default_factory=list,
        description="One point per simulated year, plus the month the target is reached"
    )

    @property
    def years(self) -> float:
        return self.months / 12


class ReturnScenario(BaseModel):
    """Market assumptions for one projection scenario. Rates are fractions."""

    name: str
    expected_return: float
    inflation_rate: float
    savings_growth_rate: float = 0.0


class ScenarioProjection(BaseModel):
    """Time to FIRE under one scenario."""

    scenario: ReturnScenario
    time_to_fire: TimeToFire


class FireMilestone(BaseModel):
    """A fraction of the FIRE number and whether it has been reached."""

    percentage: int
    label: str
    amount: float
    reached: bool


class SwrScenario(BaseModel):
    """FIRE number under one safe withdrawal rate."""

    rate: float
    risk: str
    description: str
    fire_number: float

    @property
    def multiplier(self) -> float:
        return 100 / self.rate


class FutureExpenseImpact(BaseModel):
    """Effect of a known future expense on the FIRE number."""

    present_value: float
    additional_capital_needed: float
    adjusted_fire_number: float
    delay_in_years: float


class BaristaBreakdown(BaseModel):
    """Split of annual expenses between part-time work and investments."""

    fire_number: float
    expenses_covered_by_work: float
    expenses_covered_by_investments: float


# =============================================================================
# VALIDATION MODELS
# =============================================================================

class ValidationIssue(BaseModel):
    """A single validation issue found."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'invalid_value', 'suspicious_value')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        ...,
        pattern="^(error|warning|info)$",
        description="Issue severity"
    )
    suggested_fix: Optional[str] = None


class ValidationResult(BaseModel):
    """
    Result of the two-stage FIRE parameter validation.

    Stage 1: Schema validation (required, non-degenerate values)
    Stage 2: Semantic validation (plausibility checks)
    """

    profile_id: str
    validated_at: datetime = Field(default_factory=datetime.utcnow)

    schema_valid: bool
    semantic_valid: bool
    is_valid: bool

    issues: list[ValidationIssue] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        """Check if there are any error-level issues."""
        return any(issue.severity == "error" for issue in self.issues)

    @property
    def error_count(self) -> int:
        """Count error-level issues."""
        return sum(1 for issue in self.issues if issue.severity == "error")
