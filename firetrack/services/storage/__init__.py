"""
Storage Services Package

Provides abstract interfaces and an in-memory implementation for the data
source. The host application plugs in its own backend behind the interface.
"""

from firetrack.services.storage.interface import (
    AuditStorageInterface,
    DuplicateError,
    FinanceStorageInterface,
    NotFoundError,
    ProfileNotFoundError,
    StorageError,
)
from firetrack.services.storage.memory import (
    InMemoryAuditStorage,
    InMemoryFinanceStorage,
)

__all__ = [
    # Interfaces
    "AuditStorageInterface",
    "FinanceStorageInterface",
    # Exceptions
    "DuplicateError",
    "NotFoundError",
    "ProfileNotFoundError",
    "StorageError",
    # In-memory implementation
    "InMemoryAuditStorage",
    "InMemoryFinanceStorage",
]
