"""
Storage Services Package

Provides the abstract storage interface and the in-memory implementation.
"""

from finance_dashboard.services.storage.interface import (
    FinanceStorageInterface,
    NotFoundError,
    ReferentialIntegrityError,
    StorageError,
)
from finance_dashboard.services.storage.memory import (
    MemoryFinanceStorage,
    name_sort_key,
)

__all__ = [
    # Interfaces
    "FinanceStorageInterface",
    # Exceptions
    "NotFoundError",
    "ReferentialIntegrityError",
    "StorageError",
    # In-memory implementation
    "MemoryFinanceStorage",
    "name_sort_key",
]
