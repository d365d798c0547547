"""
Audit Models for FireTrack

Every computed report and every profile change is logged for audit purposes.
This provides:
1. Traceability of what a user was shown and from which inputs
2. Debugging information when numbers look wrong
3. Ability to reconstruct history

DESIGN DECISION: Audit logs are append-only. We never delete or modify them.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Budget reports
    BUDGET_OVERVIEW_COMPUTED = "budget_overview_computed"
    CATEGORY_SPENDING_COMPUTED = "category_spending_computed"
    SAVINGS_RATE_COMPUTED = "savings_rate_computed"
    ANALYTICS_COMPUTED = "analytics_computed"
    BUDGET_ALERTS_RAISED = "budget_alerts_raised"

    # FIRE reports
    FIRE_PROGRESS_COMPUTED = "fire_progress_computed"
    FIRE_PROJECTION_COMPUTED = "fire_projection_computed"

    # Profile
    PROFILE_CREATED = "profile_created"
    PROFILE_NOT_FOUND = "profile_not_found"

    # Validation
    PARAMETER_VALIDATION_FAILED = "parameter_validation_failed"
    DEGENERATE_INPUT = "degenerate_input"

    # System events
    SYSTEM_ERROR = "system_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class AuditEvent(BaseModel):
    """
    A single audit event.

    This is the core unit of our audit trail.
    """

    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=datetime.utcnow,
        description="When the event occurred (UTC)"
    )

    event_type: AuditEventType
    severity: AuditSeverity = Field(default=AuditSeverity.INFO)

    # Context - which user / entity is this about?
    user_id: Optional[str] = None
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'budget', 'profile', 'report')"
    )
    entity_id: Optional[str] = None

    correlation_id: Optional[UUID] = Field(
        default=None,
        description="ID to correlate the events of one flow"
    )

    description: str = Field(..., max_length=500)
    details: dict[str, Any] = Field(default_factory=dict)

    error_code: Optional[str] = None
    error_message: Optional[str] = None

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "user_id": self.user_id,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "error_code": self.error_code,
            "error_message": self.error_message,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.fire_progress_computed(user_id, progress, correlation_id)
        event = AuditEventBuilder.profile_created(user_id, correlation_id)
    """

    @staticmethod
    def budget_overview_computed(
        user_id: str,
        month: str,
        item_count: int,
        statuses: dict[str, int],
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BUDGET_OVERVIEW_COMPUTED,
            user_id=user_id,
            entity_type="report",
            entity_id=month,
            correlation_id=correlation_id,
            description=f"Budget overview for {month}: {item_count} budgets",
            details={
                "month": month,
                "item_count": item_count,
                "statuses": statuses,
            },
        )

    @staticmethod
    def category_spending_computed(
        user_id: str,
        month: str,
        category_count: int,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.CATEGORY_SPENDING_COMPUTED,
            user_id=user_id,
            entity_type="report",
            entity_id=month,
            correlation_id=correlation_id,
            description=f"Category spending for {month}: {category_count} categories",
            details={"month": month, "category_count": category_count},
        )

    @staticmethod
    def savings_rate_computed(
        user_id: str,
        month: str,
        savings_rate: float,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SAVINGS_RATE_COMPUTED,
            user_id=user_id,
            entity_type="report",
            entity_id=month,
            correlation_id=correlation_id,
            description=f"Savings rate for {month}: {savings_rate:.1f}%",
            details={"month": month, "savings_rate": savings_rate},
        )

    @staticmethod
    def analytics_computed(
        user_id: str,
        period: str,
        month_count: int,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ANALYTICS_COMPUTED,
            user_id=user_id,
            entity_type="report",
            correlation_id=correlation_id,
            description=f"Spending analytics ({period}) over {month_count} months",
            details={"period": period, "month_count": month_count},
        )

    @staticmethod
    def budget_alerts_raised(
        user_id: str,
        alerts: list[dict],
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BUDGET_ALERTS_RAISED,
            severity=AuditSeverity.WARNING if alerts else AuditSeverity.INFO,
            user_id=user_id,
            entity_type="budget",
            correlation_id=correlation_id,
            description=f"Budget alert check raised {len(alerts)} alerts",
            details={"alerts": alerts},
        )

    @staticmethod
    def fire_progress_computed(
        user_id: str,
        fire_target: float,
        fire_progress: float,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.FIRE_PROGRESS_COMPUTED,
            user_id=user_id,
            entity_type="profile",
            entity_id=user_id,
            correlation_id=correlation_id,
            description=f"FIRE progress computed: {fire_progress:.1f}% of {fire_target:,.0f}",
            details={
                "fire_target": fire_target,
                "fire_progress": fire_progress,
            },
        )

    @staticmethod
    def fire_projection_computed(
        user_id: str,
        years: float,
        reached: bool,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.FIRE_PROJECTION_COMPUTED,
            user_id=user_id,
            entity_type="profile",
            entity_id=user_id,
            correlation_id=correlation_id,
            description=f"Time to FIRE projected: {years:.1f} years",
            details={"years": years, "reached": reached},
        )

    @staticmethod
    def profile_created(
        user_id: str,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.PROFILE_CREATED,
            user_id=user_id,
            entity_type="profile",
            entity_id=user_id,
            correlation_id=correlation_id,
            description="Profile created with default FIRE parameters",
        )

    @staticmethod
    def profile_not_found(
        user_id: str,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.PROFILE_NOT_FOUND,
            severity=AuditSeverity.WARNING,
            user_id=user_id,
            entity_type="profile",
            entity_id=user_id,
            correlation_id=correlation_id,
            description="No profile found for user",
        )

    @staticmethod
    def validation_failed(
        user_id: str,
        stage: str,
        issues: list[dict],
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.PARAMETER_VALIDATION_FAILED,
            severity=AuditSeverity.WARNING,
            user_id=user_id,
            entity_type="profile",
            entity_id=user_id,
            correlation_id=correlation_id,
            description=f"{stage.capitalize()} validation failed with {len(issues)} issues",
            details={
                "stage": stage,
                "issues": issues,
            },
        )

    @staticmethod
    def degenerate_input(
        user_id: str,
        error_message: str,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.DEGENERATE_INPUT,
            severity=AuditSeverity.WARNING,
            user_id=user_id,
            entity_type="profile",
            entity_id=user_id,
            correlation_id=correlation_id,
            description="Calculation rejected degenerate input",
            error_message=error_message,
        )

    @staticmethod
    def system_error(
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SYSTEM_ERROR,
            severity=AuditSeverity.ERROR,
            description=f"System error: {error_type}",
            error_message=error_message,
            details=details or {},
            correlation_id=correlation_id,
        )
