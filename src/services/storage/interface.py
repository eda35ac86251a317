"""
Abstract Storage Interfaces

DESIGN DECISION: What may leave the device is part of the type system.
Incomes and savings live behind DIFFERENT interfaces instead of one
store with a "replicate" flag:

- IncomeStoreInterface: local-only. There is no remote implementation
  and none of the sync code accepts one.
- SavingLedgerInterface: the on-device copy of savings.
- PendingSavingsQueueInterface: durable queue of savings not yet
  replicated.
- SavingStorageInterface: the remote store savings are replicated to.

Local interfaces are synchronous (small JSON state on disk); the remote
one is async.
"""

from abc import ABC, abstractmethod
from typing import Optional

from src.models.income import Income
from src.models.saving import Saving


class IncomeStoreInterface(ABC):
    """
    On-device storage of the user's income definitions.

    Incomes never leave the device.
    """

    @abstractmethod
    def list_incomes(self) -> list[Income]:
        """
        Return all incomes in the order the user added them.
        """
        pass

    @abstractmethod
    def add_income(self, income: Income) -> None:
        """
        Append an income.

        Raises:
            DuplicateError: If an income with the same id exists
        """
        pass

    @abstractmethod
    def update_income(self, income: Income) -> None:
        """
        Replace the income with the same id, keeping its position.

        Raises:
            NotFoundError: If no income has this id
        """
        pass

    @abstractmethod
    def remove_income(self, income_id: str) -> bool:
        """
        Remove an income by id.

        Returns:
            True if something was removed
        """
        pass

    @abstractmethod
    def replace_incomes(self, incomes: list[Income]) -> None:
        """Replace the whole income list."""
        pass


class SavingLedgerInterface(ABC):
    """
    On-device, append-only copy of savings.

    This is what reports read from, online or offline.
    """

    @abstractmethod
    def append_saving(self, saving: Saving) -> None:
        """Append a saving."""
        pass

    @abstractmethod
    def list_savings(self) -> list[Saving]:
        """Return savings in insertion order."""
        pass

    @abstractmethod
    def replace_savings(self, savings: list[Saving]) -> None:
        """Replace the ledger (e.g. with the remote copy after a sync)."""
        pass


class PendingSavingsQueueInterface(ABC):
    """
    Durable queue of savings waiting to be replicated.

    Items come out in insertion order. Delivery is at-least-once: an item
    may be pushed again if the queue could not be cleared after a push.
    """

    @abstractmethod
    def enqueue(self, saving: Saving) -> None:
        """Add a saving to the end of the queue."""
        pass

    @abstractmethod
    def peek_all(self) -> list[Saving]:
        """Return all queued savings without removing them."""
        pass

    @abstractmethod
    def clear(self) -> None:
        """Drop everything from the queue."""
        pass


class SavingStorageInterface(ABC):
    """
    Remote storage that savings are replicated to.

    Any backend (Google Sheets, a hosted database, ...) must implement
    these methods.
    """

    @abstractmethod
    async def save_saving(self, saving: Saving) -> bool:
        """
        Save a single saving.

        Returns:
            True if saved successfully

        Raises:
            StorageError: If save fails
        """
        pass

    @abstractmethod
    async def save_savings(self, savings: list[Saving]) -> bool:
        """
        Save a batch of savings in order.

        Returns:
            True if saved successfully

        Raises:
            StorageError: If save fails
        """
        pass

    @abstractmethod
    async def list_savings(self, month: Optional[str] = None) -> list[Saving]:
        """
        List savings, newest first.

        Args:
            month: Only savings with exactly this month label

        Returns:
            List of matching savings
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class NotFoundError(StorageError):
    """Entity not found in storage."""
    pass


class DuplicateError(StorageError):
    """Attempted to insert a duplicate entity."""
    pass


class StorageConnectionError(StorageError):
    """Could not connect to storage backend."""
    pass
