"""
Data Models Package

This package contains all Pydantic models used by FireTrack.
All data flowing through the system must conform to these schemas.
"""

from firetrack.models.finance import (
    AnalyticsPeriod,
    BaristaBreakdown,
    Budget,
    BudgetAlert,
    BudgetAlertType,
    BudgetOverviewItem,
    BudgetPeriod,
    BudgetStatus,
    CategorySpendingEntry,
    FireMilestone,
    FireProgress,
    FutureExpenseImpact,
    MonthlyCategoryBreakdown,
    NetWorthEntry,
    Profile,
    ProjectionPoint,
    ReturnScenario,
    SavingsRate,
    ScenarioProjection,
    SpendingLevel,
    SwrScenario,
    TimeToFire,
    Transaction,
    TransactionType,
    ValidationIssue,
    ValidationResult,
)
from firetrack.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Input records
    "Budget",
    "BudgetPeriod",
    "BudgetStatus",
    "NetWorthEntry",
    "Profile",
    "Transaction",
    "TransactionType",
    # Derived records
    "AnalyticsPeriod",
    "BudgetAlert",
    "BudgetAlertType",
    "BudgetOverviewItem",
    "CategorySpendingEntry",
    "FireProgress",
    "MonthlyCategoryBreakdown",
    "SavingsRate",
    "SpendingLevel",
    # Projection records
    "BaristaBreakdown",
    "FireMilestone",
    "FutureExpenseImpact",
    "ProjectionPoint",
    "ReturnScenario",
    "ScenarioProjection",
    "SwrScenario",
    "TimeToFire",
    # Validation
    "ValidationIssue",
    "ValidationResult",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
