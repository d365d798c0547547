"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract interface for the data source.
This allows us to:
1. Plug in whatever database the host application uses
2. Use in-memory storage for testing
3. Keep the calculations decoupled from persistence

The interface is intentionally simple - we're not building a full ORM.
Just the reads the reports need, plus the writes used to seed data.
Every read is scoped to one user.
"""

from abc import ABC, abstractmethod
from datetime import date
from typing import Optional
from uuid import UUID

from firetrack.models.audit import AuditEvent
from firetrack.models.finance import (
    Budget,
    BudgetAlert,
    BudgetStatus,
    NetWorthEntry,
    Profile,
    Transaction,
    TransactionType,
)


class FinanceStorageInterface(ABC):
    """
    Abstract interface for the finance data source.

    Any storage implementation (PostgreSQL, SQLite, etc.)
    must implement these methods.
    """

    @abstractmethod
    async def list_transactions(
        self,
        user_id: str,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
        transaction_type: Optional[TransactionType] = None,
    ) -> list[Transaction]:
        """
        List a user's transactions with optional filters.

        Args:
            user_id: Owner of the transactions
            date_from: Only transactions on or after this date
            date_to: Only transactions on or before this date
            transaction_type: Only INCOME or only EXPENSE

        Returns:
            Matching transactions, oldest first
        """
        pass

    @abstractmethod
    async def list_budgets(
        self,
        user_id: str,
        status: Optional[BudgetStatus] = None,
    ) -> list[Budget]:
        """
        List a user's budgets, optionally filtered by status.
        """
        pass

    @abstractmethod
    async def get_profile(self, user_id: str) -> Optional[Profile]:
        """
        Retrieve the profile of a user.

        Returns:
            The profile if found, None otherwise
        """
        pass

    @abstractmethod
    async def save_profile(self, profile: Profile) -> bool:
        """
        Create or replace the profile of a user.

        Returns:
            True if saved successfully
        """
        pass

    @abstractmethod
    async def list_net_worth(
        self,
        user_id: str,
        date_from: Optional[date] = None,
    ) -> list[NetWorthEntry]:
        """
        List a user's net worth entries, oldest first.

        Args:
            user_id: Owner of the entries
            date_from: Only entries recorded on or after this date
        """
        pass

    @abstractmethod
    async def add_transaction(self, transaction: Transaction) -> bool:
        """
        Store a transaction.

        Raises:
            DuplicateError: If a transaction with the same ID exists
        """
        pass

    @abstractmethod
    async def add_budget(self, budget: Budget) -> bool:
        """
        Store a budget.

        Raises:
            DuplicateError: If a budget with the same ID exists
        """
        pass

    @abstractmethod
    async def add_net_worth_entry(self, entry: NetWorthEntry) -> bool:
        """Store a net worth entry."""
        pass

    @abstractmethod
    async def list_alerts(self, user_id: str) -> list[BudgetAlert]:
        """List the budget alerts already raised for a user."""
        pass

    @abstractmethod
    async def add_alert(self, alert: BudgetAlert) -> bool:
        """Store a raised budget alert."""
        pass


class AuditStorageInterface(ABC):
    """
    Abstract interface for audit log storage.

    Audit logs are append-only - we never delete or modify them.
    """

    @abstractmethod
    async def append_event(self, event: AuditEvent) -> bool:
        """
        Append an audit event to the log.

        Args:
            event: The audit event to log

        Returns:
            True if logged successfully
        """
        pass

    @abstractmethod
    async def get_events_by_correlation_id(
        self,
        correlation_id: UUID,
    ) -> list[AuditEvent]:
        """
        Get all events for a correlation ID (e.g., one report request).

        Returns:
            List of related events in chronological order
        """
        pass

    @abstractmethod
    async def get_events_by_entity(
        self,
        entity_type: str,
        entity_id: str,
    ) -> list[AuditEvent]:
        """
        Get all events for a specific entity.

        Args:
            entity_type: Type of entity (e.g., 'profile', 'budget')
            entity_id: The entity's ID

        Returns:
            List of events in chronological order
        """
        pass

    @abstractmethod
    async def get_recent_events(
        self,
        limit: int = 100,
    ) -> list[AuditEvent]:
        """
        Get the most recent audit events.

        Returns:
            List of recent events (newest first)
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class NotFoundError(StorageError):
    """Entity not found in storage."""
    pass


class ProfileNotFoundError(NotFoundError):
    """The user has no profile, so FIRE figures cannot be computed."""

    def __init__(self, user_id: str):
        self.user_id = user_id
        super().__init__(f"Profile not found for user: {user_id}")


class DuplicateError(StorageError):
    """Attempted to insert a duplicate entity."""
    pass
