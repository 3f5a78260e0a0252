"""Services package."""

from finance_dashboard.services.storage import (
    FinanceStorageInterface,
    MemoryFinanceStorage,
    NotFoundError,
    ReferentialIntegrityError,
    StorageError,
)

__all__ = [
    "FinanceStorageInterface",
    "MemoryFinanceStorage",
    "NotFoundError",
    "ReferentialIntegrityError",
    "StorageError",
]
