"""
Saving Sync Service

Local-first recording of savings with opportunistic replication.

Flow for a new saving:
1. Always append to the local ledger (reports work offline)
2. If a remote store is configured and we are online, push it
3. If offline, or the push fails, park it in the pending queue

The pending queue is flushed in insertion order whenever connectivity
is back. Delivery is at-least-once: if the remote accepted a batch but
the queue could not be cleared, the batch is pushed again next time.
Duplicates are not filtered here.
"""

from enum import Enum
from typing import Callable, Optional
from uuid import UUID

from src.activity import ActivityLogger
from src.models.saving import Saving
from src.services.storage.interface import (
    PendingSavingsQueueInterface,
    SavingLedgerInterface,
    SavingStorageInterface,
    StorageError,
)


class SyncOutcome(str, Enum):
    """What happened to a newly recorded saving."""
    REPLICATED = "replicated"  # Stored locally and remotely
    QUEUED = "queued"          # Stored locally, waiting for replication
    LOCAL_ONLY = "local_only"  # No remote store configured


def _always_online() -> bool:
    return True


class SyncService:
    """
    Keeps the local saving ledger and the remote store in step.

    Args:
        ledger: On-device saving ledger
        queue: Durable queue of not-yet-replicated savings
        remote: Remote saving store; None means local-only mode
        is_online: Connectivity probe, called before every remote call
        activity_logger: Structured activity logs
    """

    def __init__(
        self,
        ledger: SavingLedgerInterface,
        queue: PendingSavingsQueueInterface,
        remote: Optional[SavingStorageInterface] = None,
        is_online: Optional[Callable[[], bool]] = None,
        activity_logger: Optional[ActivityLogger] = None,
    ):
        self._ledger = ledger
        self._queue = queue
        self._remote = remote
        self._is_online = is_online or _always_online
        self._activity = activity_logger or ActivityLogger()

    @property
    def has_remote(self) -> bool:
        return self._remote is not None

    def pending_count(self) -> int:
        return len(self._queue.peek_all())

    def _can_reach_remote(self) -> bool:
        return self._remote is not None and self._is_online()

    async def record_saving(
        self,
        saving: Saving,
        correlation_id: Optional[UUID] = None,
    ) -> SyncOutcome:
        """Store a saving locally and replicate it if possible."""
        self._ledger.append_saving(saving)
        self._activity.log_saving_recorded(
            saving_id=saving.id,
            amount=saving.amount,
            hours=saving.hours,
            month=saving.month,
            correlation_id=correlation_id,
        )

        if self._remote is None:
            return SyncOutcome.LOCAL_ONLY

        if not self._is_online():
            self._queue.enqueue(saving)
            self._activity.log_saving_queued(
                saving_id=saving.id,
                reason="offline",
                correlation_id=correlation_id,
            )
            return SyncOutcome.QUEUED

        try:
            await self._remote.save_saving(saving)
        except StorageError as e:
            self._activity.log_external_service_error(
                service="saving_storage",
                error_message=str(e),
                correlation_id=correlation_id,
            )
            self._queue.enqueue(saving)
            self._activity.log_saving_queued(
                saving_id=saving.id,
                reason="remote_error",
                correlation_id=correlation_id,
            )
            return SyncOutcome.QUEUED

        self._activity.log_saving_replicated(
            saving_id=saving.id,
            correlation_id=correlation_id,
        )
        return SyncOutcome.REPLICATED

    async def flush_pending(self, correlation_id: Optional[UUID] = None) -> bool:
        """
        Push every queued saving as one batch.

        Returns:
            True if the queue is empty afterwards

        Raises:
            StorageError: If the batch was sent but the queue could not be
                cleared; the same batch is sent again on the next flush
        """
        if not self._can_reach_remote():
            return False

        pending = self._queue.peek_all()
        if not pending:
            return True

        try:
            await self._remote.save_savings(pending)
        except StorageError as e:
            self._activity.log_sync_failed(
                error_message=str(e),
                pending_count=len(pending),
                correlation_id=correlation_id,
            )
            return False

        self._queue.clear()
        self._activity.log_sync_flushed(count=len(pending), correlation_id=correlation_id)
        return True

    async def load_remote(self, correlation_id: Optional[UUID] = None) -> bool:
        """
        Replace the local ledger with the remote savings.

        Savings still waiting in the queue are kept, so nothing recorded
        offline disappears from reports.

        Returns:
            True if the ledger was refreshed
        """
        if not self._can_reach_remote():
            return False

        try:
            remote_savings = await self._remote.list_savings()
        except StorageError as e:
            self._activity.log_external_service_error(
                service="saving_storage",
                error_message=str(e),
                correlation_id=correlation_id,
            )
            return False

        known_ids = {saving.id for saving in remote_savings}
        merged = list(remote_savings) + [
            saving for saving in self._queue.peek_all() if saving.id not in known_ids
        ]
        merged.sort(key=lambda s: s.created_at)
        self._ledger.replace_savings(merged)
        return True

    async def initial_sync(self, correlation_id: Optional[UUID] = None) -> bool:
        """Flush pending savings, then refresh the ledger from remote."""
        if not self._can_reach_remote():
            return False

        await self.flush_pending(correlation_id)
        return await self.load_remote(correlation_id)
