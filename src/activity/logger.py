"""
Activity Logger

Structured, local-only logging of what the user did and what the sync
layer did about it.

DESIGN DECISION: These are operational logs, not an audit trail.
Nothing written here is persisted or replicated.
"""

import logging
import sys
from typing import Optional
from uuid import UUID, uuid4

import structlog


# Configure structlog for structured logging
logging.basicConfig(format="%(message)s", stream=sys.stdout, level=logging.INFO)

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
        structlog.processors.JSONRenderer(ensure_ascii=False),
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def set_log_level(level: str) -> None:
    """Set the minimum level for structured logs (e.g. from AppSettings)."""
    logging.getLogger().setLevel(getattr(logging, level.upper(), logging.INFO))


class ActivityLogger:
    """
    Central activity logging service.

    One instance per app; pass a correlation id to tie together the
    events of a single user action (e.g. evaluate cost -> save).
    """

    def __init__(self, logger_name: str = "worktime.activity"):
        self._logger = structlog.get_logger(logger_name)

    def _emit(
        self,
        level: str,
        event: str,
        correlation_id: Optional[UUID] = None,
        **fields,
    ) -> None:
        if correlation_id is not None:
            fields["correlation_id"] = str(correlation_id)
        getattr(self._logger, level)(event, **fields)

    def log_income_added(
        self,
        income_id: str,
        income_type: str,
        hours: float,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a new income definition."""
        self._emit(
            "info",
            "income_added",
            correlation_id,
            income_id=income_id,
            income_type=income_type,
            hours=hours,
        )

    def log_income_updated(
        self,
        income_id: str,
        income_type: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log an edited income."""
        self._emit(
            "info",
            "income_updated",
            correlation_id,
            income_id=income_id,
            income_type=income_type,
        )

    def log_income_removed(
        self,
        income_id: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a removed income."""
        self._emit("info", "income_removed", correlation_id, income_id=income_id)

    def log_income_rejected(
        self,
        income_type: str,
        issues: list[dict],
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log an income entry refused by validation."""
        self._emit(
            "warning",
            "income_rejected",
            correlation_id,
            income_type=income_type,
            issues=issues,
        )

    def log_cost_evaluated(
        self,
        amount: float,
        hourly_rate: float,
        hours_needed: float,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log an amount converted into working time."""
        self._emit(
            "debug",
            "cost_evaluated",
            correlation_id,
            amount=amount,
            hourly_rate=hourly_rate,
            hours_needed=hours_needed,
        )

    def log_saving_recorded(
        self,
        saving_id: str,
        amount: float,
        hours: float,
        month: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a saving stored on the device."""
        self._emit(
            "info",
            "saving_recorded",
            correlation_id,
            saving_id=saving_id,
            amount=amount,
            hours=hours,
            month=month,
        )

    def log_saving_replicated(
        self,
        saving_id: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a saving pushed to the remote store."""
        self._emit("info", "saving_replicated", correlation_id, saving_id=saving_id)

    def log_saving_queued(
        self,
        saving_id: str,
        reason: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a saving parked in the pending queue."""
        self._emit(
            "warning",
            "saving_queued",
            correlation_id,
            saving_id=saving_id,
            reason=reason,
        )

    def log_sync_flushed(
        self,
        count: int,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a successful flush of the pending queue."""
        self._emit("info", "sync_flushed", correlation_id, count=count)

    def log_sync_failed(
        self,
        error_message: str,
        pending_count: int,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a failed flush; the queue is kept for the next attempt."""
        self._emit(
            "warning",
            "sync_failed",
            correlation_id,
            error_message=error_message,
            pending_count=pending_count,
        )

    def log_external_service_error(
        self,
        service: str,
        error_message: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log external service error."""
        self._emit(
            "error",
            "external_service_error",
            correlation_id,
            service=service,
            error_message=error_message,
        )


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Use this at the start of a new user action (e.g. saving an amount).
    Pass it through all subsequent operations.
    """
    return uuid4()
