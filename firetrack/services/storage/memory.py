"""
In-Memory Storage Implementation

DESIGN DECISION: The host application owns the real database. This
implementation keeps per-user lists in memory so that flows and tests
run without any backend.

TRADEOFFS:
- Nothing survives the process
- Intended for a single event loop (no locking)
- Filters are applied in Python, like any small backend would
"""

from collections import defaultdict
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
from firetrack.services.storage.interface import (
    AuditStorageInterface,
    DuplicateError,
    FinanceStorageInterface,
)


class InMemoryFinanceStorage(FinanceStorageInterface):
    """
    In-memory implementation of the finance data source.
    """

    def __init__(self):
        self._transactions: dict[str, list[Transaction]] = defaultdict(list)
        self._budgets: dict[str, list[Budget]] = defaultdict(list)
        self._profiles: dict[str, Profile] = {}
        self._net_worth: dict[str, list[NetWorthEntry]] = defaultdict(list)
        self._alerts: dict[str, list[BudgetAlert]] = defaultdict(list)

    async def list_transactions(
        self,
        user_id: str,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
        transaction_type: Optional[TransactionType] = None,
    ) -> list[Transaction]:
        """List transactions with optional filters."""
        transactions = []
        for txn in self._transactions.get(user_id, []):
            # Apply filters
            if date_from and txn.transaction_date < date_from:
                continue
            if date_to and txn.transaction_date > date_to:
                continue
            if transaction_type and txn.type != transaction_type:
                continue
            transactions.append(txn)

        transactions.sort(key=lambda t: t.transaction_date)
        return transactions

    async def list_budgets(
        self,
        user_id: str,
        status: Optional[BudgetStatus] = None,
    ) -> list[Budget]:
        """List budgets, optionally by status."""
        return [
            budget for budget in self._budgets.get(user_id, [])
            if status is None or budget.status == status
        ]

    async def get_profile(self, user_id: str) -> Optional[Profile]:
        return self._profiles.get(user_id)

    async def save_profile(self, profile: Profile) -> bool:
        self._profiles[profile.id] = profile
        return True

    async def list_net_worth(
        self,
        user_id: str,
        date_from: Optional[date] = None,
    ) -> list[NetWorthEntry]:
        """List net worth entries, oldest first."""
        entries = [
            entry for entry in self._net_worth.get(user_id, [])
            if date_from is None or entry.recorded_on >= date_from
        ]
        entries.sort(key=lambda e: e.recorded_on)
        return entries

    async def add_transaction(self, transaction: Transaction) -> bool:
        existing = self._transactions[transaction.user_id]
        if any(txn.id == transaction.id for txn in existing):
            raise DuplicateError(f"Transaction already exists: {transaction.id}")
        existing.append(transaction)
        return True

    async def add_budget(self, budget: Budget) -> bool:
        existing = self._budgets[budget.user_id]
        if any(b.id == budget.id for b in existing):
            raise DuplicateError(f"Budget already exists: {budget.id}")
        existing.append(budget)
        return True

    async def add_net_worth_entry(self, entry: NetWorthEntry) -> bool:
        self._net_worth[entry.user_id].append(entry)
        return True

    async def list_alerts(self, user_id: str) -> list[BudgetAlert]:
        return list(self._alerts.get(user_id, []))

    async def add_alert(self, alert: BudgetAlert) -> bool:
        self._alerts[alert.user_id].append(alert)
        return True


class InMemoryAuditStorage(AuditStorageInterface):
    """
    In-memory implementation of audit log storage.

    Append-only: events are never removed.
    """

    def __init__(self):
        self._events: list[AuditEvent] = []

    async def append_event(self, event: AuditEvent) -> bool:
        """Append an audit event."""
        self._events.append(event)
        return True

    async def get_events_by_correlation_id(
        self,
        correlation_id: UUID,
    ) -> list[AuditEvent]:
        """Get events by correlation ID."""
        events = [e for e in self._events if e.correlation_id == correlation_id]
        events.sort(key=lambda e: e.timestamp)
        return events

    async def get_events_by_entity(
        self,
        entity_type: str,
        entity_id: str,
    ) -> list[AuditEvent]:
        """Get events by entity."""
        events = [
            e for e in self._events
            if e.entity_type == entity_type and e.entity_id == entity_id
        ]
        events.sort(key=lambda e: e.timestamp)
        return events

    async def get_recent_events(
        self,
        limit: int = 100,
    ) -> list[AuditEvent]:
        """Get recent events."""
        # Sort newest first
        events = sorted(self._events, key=lambda e: e.timestamp, reverse=True)
        return events[:limit]
