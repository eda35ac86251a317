"""
Storage Services Package

Provides abstract interfaces and concrete implementations for data storage.
Local state is a JSON file on the device; savings are replicated to
Google Sheets. Both are designed to be swappable.
"""

from src.services.storage.interface import (
    DuplicateError,
    IncomeStoreInterface,
    NotFoundError,
    PendingSavingsQueueInterface,
    SavingLedgerInterface,
    SavingStorageInterface,
    StorageConnectionError,
    StorageError,
)
from src.services.storage.local import LocalStateStore
from src.services.storage.google_sheets import (
    GoogleSheetsClient,
    GoogleSheetsSavingStorage,
)

__all__ = [
    # Interfaces
    "IncomeStoreInterface",
    "PendingSavingsQueueInterface",
    "SavingLedgerInterface",
    "SavingStorageInterface",
    # Exceptions
    "DuplicateError",
    "NotFoundError",
    "StorageConnectionError",
    "StorageError",
    # Local implementation
    "LocalStateStore",
    # Google Sheets implementation
    "GoogleSheetsClient",
    "GoogleSheetsSavingStorage",
]
