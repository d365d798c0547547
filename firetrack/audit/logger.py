"""
Audit Logger

DESIGN DECISION: Every computed report is logged.
This provides:
1. Traceability of the figures shown to a user
2. Debugging capability

The audit logger:
- Is async to match the storage layer
- Gracefully handles failures (doesn't crash the app if logging fails)
- Supports correlation IDs to trace related events

The calculation modules never log. Only the flows in the orchestrator do.
"""

from typing import Optional
from uuid import UUID, uuid4

import structlog

from firetrack.models.audit import AuditEvent, AuditEventBuilder
from firetrack.services.storage import AuditStorageInterface


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


class AuditLogger:
    """
    Central audit logging service.

    Logs events both to:
    1. Structured local log (for debugging)
    2. An audit storage backend, when one is configured
    """

    def __init__(
        self,
        storage: Optional[AuditStorageInterface] = None,
    ):
        """
        Initialize audit logger.

        Args:
            storage: Storage backend for persistence.
                    If None, only logs locally.
        """
        self._storage = storage
        self._logger = structlog.get_logger("firetrack.audit")

    async def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Always logs locally. Persists to storage if available.

        Returns True if storage write succeeded (or no storage configured).
        """
        # Always log locally
        log_dict = event.to_log_dict()

        if event.severity.value in ("error", "critical"):
            self._logger.error("audit_event", **log_dict)
        elif event.severity.value == "warning":
            self._logger.warning("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

        # Persist to storage if available
        if self._storage:
            try:
                return await self._storage.append_event(event)
            except Exception as e:
                # Log failure but don't raise
                self._logger.error(
                    "audit_storage_failed",
                    error=str(e),
                    event_id=str(event.event_id),
                )
                return False

        return True

    async def log_budget_overview(
        self,
        user_id: str,
        month: str,
        item_count: int,
        statuses: dict[str, int],
        correlation_id: UUID,
    ) -> None:
        """Log a computed budget overview."""
        event = AuditEventBuilder.budget_overview_computed(
            user_id=user_id,
            month=month,
            item_count=item_count,
            statuses=statuses,
            correlation_id=correlation_id,
        )
        await self.log(event)

    async def log_category_spending(
        self,
        user_id: str,
        month: str,
        category_count: int,
        correlation_id: UUID,
    ) -> None:
        """Log a computed category spending chart."""
        event = AuditEventBuilder.category_spending_computed(
            user_id=user_id,
            month=month,
            category_count=category_count,
            correlation_id=correlation_id,
        )
        await self.log(event)

    async def log_savings_rate(
        self,
        user_id: str,
        month: str,
        savings_rate: float,
        correlation_id: UUID,
    ) -> None:
        """Log a computed savings rate."""
        event = AuditEventBuilder.savings_rate_computed(
            user_id=user_id,
            month=month,
            savings_rate=savings_rate,
            correlation_id=correlation_id,
        )
        await self.log(event)

    async def log_analytics(
        self,
        user_id: str,
        period: str,
        month_count: int,
        correlation_id: UUID,
    ) -> None:
        """Log computed spending analytics."""
        event = AuditEventBuilder.analytics_computed(
            user_id=user_id,
            period=period,
            month_count=month_count,
            correlation_id=correlation_id,
        )
        await self.log(event)

    async def log_budget_alerts(
        self,
        user_id: str,
        alerts: list[dict],
        correlation_id: UUID,
    ) -> None:
        """Log the result of a budget alert check."""
        event = AuditEventBuilder.budget_alerts_raised(
            user_id=user_id,
            alerts=alerts,
            correlation_id=correlation_id,
        )
        await self.log(event)

    async def log_fire_progress(
        self,
        user_id: str,
        fire_target: float,
        fire_progress: float,
        correlation_id: UUID,
    ) -> None:
        """Log computed FIRE progress."""
        event = AuditEventBuilder.fire_progress_computed(
            user_id=user_id,
            fire_target=fire_target,
            fire_progress=fire_progress,
            correlation_id=correlation_id,
        )
        await self.log(event)

    async def log_fire_projection(
        self,
        user_id: str,
        years: float,
        reached: bool,
        correlation_id: UUID,
    ) -> None:
        """Log a computed time-to-FIRE projection."""
        event = AuditEventBuilder.fire_projection_computed(
            user_id=user_id,
            years=years,
            reached=reached,
            correlation_id=correlation_id,
        )
        await self.log(event)

    async def log_profile_created(
        self,
        user_id: str,
        correlation_id: UUID,
    ) -> None:
        """Log lazy profile creation."""
        event = AuditEventBuilder.profile_created(
            user_id=user_id,
            correlation_id=correlation_id,
        )
        await self.log(event)

    async def log_profile_not_found(
        self,
        user_id: str,
        correlation_id: UUID,
    ) -> None:
        """Log a missing profile."""
        event = AuditEventBuilder.profile_not_found(
            user_id=user_id,
            correlation_id=correlation_id,
        )
        await self.log(event)

    async def log_validation_failed(
        self,
        user_id: str,
        stage: str,
        issues: list[dict],
        correlation_id: UUID,
    ) -> None:
        """Log validation failure."""
        event = AuditEventBuilder.validation_failed(
            user_id=user_id,
            stage=stage,
            issues=issues,
            correlation_id=correlation_id,
        )
        await self.log(event)

    async def log_degenerate_input(
        self,
        user_id: str,
        error_message: str,
        correlation_id: UUID,
    ) -> None:
        """Log a calculation that refused degenerate input."""
        event = AuditEventBuilder.degenerate_input(
            user_id=user_id,
            error_message=error_message,
            correlation_id=correlation_id,
        )
        await self.log(event)

    async def log_error(
        self,
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log an error."""
        event = AuditEventBuilder.system_error(
            error_type=error_type,
            error_message=error_message,
            details=details,
            correlation_id=correlation_id,
        )
        await self.log(event)


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Use this at the start of a new report request.
    Pass it through all subsequent operations.
    """
    return uuid4()
