"""Services package."""

from src.services.storage import (
    DuplicateError,
    GoogleSheetsClient,
    GoogleSheetsSavingStorage,
    IncomeStoreInterface,
    LocalStateStore,
    NotFoundError,
    PendingSavingsQueueInterface,
    SavingLedgerInterface,
    SavingStorageInterface,
    StorageConnectionError,
    StorageError,
)
from src.services.sync import SyncOutcome, SyncService

__all__ = [
    # Storage services
    "DuplicateError",
    "GoogleSheetsClient",
    "GoogleSheetsSavingStorage",
    "IncomeStoreInterface",
    "LocalStateStore",
    "NotFoundError",
    "PendingSavingsQueueInterface",
    "SavingLedgerInterface",
    "SavingStorageInterface",
    "StorageConnectionError",
    "StorageError",
    # Sync
    "SyncOutcome",
    "SyncService",
]
