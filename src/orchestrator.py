"""
Main Orchestrator for the Work-Hours Cost Calculator

This module ties together all the components and defines the
end-to-end flows for:
1. Incomes (form -> validate -> build -> store locally)
2. Cost (amount -> hourly rate -> hours needed -> working time -> saving)
3. Reports (local ledger -> monthly summaries in working time)

DESIGN DECISION: The orchestrator enforces the boundaries:
- Nothing is stored without passing entry validation
- Incomes only ever reach the local income store
- Savings only ever reach storage through the sync service

The calculation core stays pure; every side effect happens here.
"""

from datetime import date
from typing import Callable, Optional
from uuid import UUID

import structlog
from pydantic import ValidationError

from src.activity import ActivityLogger, create_correlation_id, set_log_level
from src.calculator import (
    average_hourly_rate,
    calculate_hours_needed,
    format_working_time,
    work_schedule,
)
from src.config import get_settings
from src.i18n import MonthOption, format_currency, months_for_selection, persian_month_label
from src.models.income import (
    Income,
    IncomeFormData,
    ValidationResult,
    build_income,
)
from src.models.saving import CostEvaluation, Saving
from src.models.time import WorkSchedule
from src.queries import SavingsReporter
from src.services.storage import (
    GoogleSheetsClient,
    GoogleSheetsSavingStorage,
    IncomeStoreInterface,
    LocalStateStore,
    SavingLedgerInterface,
    SavingStorageInterface,
    StorageError,
)
from src.services.sync import SyncOutcome, SyncService
from src.validation import IncomeValidator, SavingValidator, get_user_friendly_summary


logger = structlog.get_logger(__name__)


class IncomeFlow:
    """
    Orchestrates income management.

    Flow:
    1. Form data -> two-stage validation
    2. Valid form -> concrete income variant (defaults applied)
    3. Income -> local income store

    Incomes are never replicated.
    """

    def __init__(
        self,
        income_store: IncomeStoreInterface,
        validator: Optional[IncomeValidator] = None,
        activity_logger: Optional[ActivityLogger] = None,
    ):
        self._store = income_store
        self._validator = validator or IncomeValidator()
        self._activity = activity_logger or ActivityLogger()

    def list_incomes(self) -> list[Income]:
        return self._store.list_incomes()

    def hourly_rate(self) -> float:
        """Average hourly rate of the current income list."""
        return average_hourly_rate(self._store.list_incomes())

    def schedule(self) -> WorkSchedule:
        """Work schedule implied by the current income list."""
        return work_schedule(self._store.list_incomes())

    def _validate(
        self,
        form: IncomeFormData,
        correlation_id: UUID,
    ) -> ValidationResult:
        result = self._validator.validate(form)
        if not result.is_valid:
            self._activity.log_income_rejected(
                income_type=form.type.value,
                issues=[
                    {"field": i.field, "type": i.issue_type, "message": i.message}
                    for i in result.issues
                ],
                correlation_id=correlation_id,
            )
        return result

    def add_income(
        self,
        form: IncomeFormData,
        correlation_id: Optional[UUID] = None,
    ) -> tuple[Optional[Income], ValidationResult]:
        """
        Validate and store a new income.

        Returns:
            (income, validation_result); income is None when invalid
        """
        correlation_id = correlation_id or create_correlation_id()

        result = self._validate(form, correlation_id)
        if not result.is_valid:
            return None, result

        income = build_income(form)
        self._store.add_income(income)

        self._activity.log_income_added(
            income_id=income.id,
            income_type=income.type,
            hours=income.hours,
            correlation_id=correlation_id,
        )
        return income, result

    def update_income(
        self,
        income_id: str,
        form: IncomeFormData,
        correlation_id: Optional[UUID] = None,
    ) -> tuple[Optional[Income], ValidationResult]:
        """
        Validate and replace an existing income, keeping its id and position.

        Raises:
            NotFoundError: If no income has this id
        """
        correlation_id = correlation_id or create_correlation_id()

        result = self._validate(form, correlation_id)
        if not result.is_valid:
            return None, result

        income = build_income(form, income_id=income_id)
        self._store.update_income(income)

        self._activity.log_income_updated(
            income_id=income.id,
            income_type=income.type,
            correlation_id=correlation_id,
        )
        return income, result

    def remove_income(
        self,
        income_id: str,
        correlation_id: Optional[UUID] = None,
    ) -> bool:
        """Remove an income; False if it did not exist."""
        removed = self._store.remove_income(income_id)
        if removed:
            self._activity.log_income_removed(
                income_id=income_id,
                correlation_id=correlation_id,
            )
        return removed


class CostFlow:
    """
    Orchestrates the "what does this cost me" flow.

    Flow:
    1. Amount -> hours needed at the current average hourly rate
    2. Hours -> working time text (schedule derived from incomes)
    3. User decides not to spend -> saving recorded via sync service
    """

    def __init__(
        self,
        income_store: IncomeStoreInterface,
        sync_service: SyncService,
        saving_validator: Optional[SavingValidator] = None,
        activity_logger: Optional[ActivityLogger] = None,
        today: Optional[Callable[[], date]] = None,
    ):
        self._income_store = income_store
        self._sync = sync_service
        self._validator = saving_validator or SavingValidator()
        self._activity = activity_logger or ActivityLogger()
        self._today = today or date.today

    def evaluate(
        self,
        amount: float,
        correlation_id: Optional[UUID] = None,
    ) -> CostEvaluation:
        """Express an amount in working time."""
        incomes = self._income_store.list_incomes()
        hourly_rate = average_hourly_rate(incomes)
        schedule = work_schedule(incomes)

        hours_needed = calculate_hours_needed(amount, hourly_rate)
        working_time = format_working_time(
            hours_needed,
            schedule.hours_per_day,
            schedule.days_per_week,
        )

        self._activity.log_cost_evaluated(
            amount=amount,
            hourly_rate=hourly_rate,
            hours_needed=hours_needed,
            correlation_id=correlation_id,
        )
        return CostEvaluation(
            amount=amount,
            hourly_rate=hourly_rate,
            hours_needed=hours_needed,
            working_time=working_time,
        )

    async def save(
        self,
        evaluation: CostEvaluation,
        correlation_id: Optional[UUID] = None,
    ) -> tuple[Optional[Saving], Optional[SyncOutcome], str]:
        """
        Record an evaluated amount as a saving.

        Returns:
            (saving, sync_outcome, user_message); saving is None when
            the amount cannot be saved
        """
        correlation_id = correlation_id or create_correlation_id()

        result = self._validator.validate(evaluation.amount, evaluation.hourly_rate)
        if not result.is_valid:
            return None, None, get_user_friendly_summary(result)

        saving = Saving(
            amount=evaluation.amount,
            hours=evaluation.hours_needed,
            month=persian_month_label(self._today()),
        )
        outcome = await self._sync.record_saving(saving, correlation_id)

        message = f"مبلغ {format_currency(saving.amount)} به صرفه‌جویی‌های شما اضافه شد"
        return saving, outcome, message


class ReportFlow:
    """
    Orchestrates the savings reports.

    Reports always read the local ledger; refresh() pulls the remote copy
    into it first when possible.
    """

    def __init__(
        self,
        ledger: SavingLedgerInterface,
        income_store: IncomeStoreInterface,
        sync_service: Optional[SyncService] = None,
        today: Optional[Callable[[], date]] = None,
    ):
        self._ledger = ledger
        self._income_store = income_store
        self._sync = sync_service
        self._today = today or date.today

    def _reporter(self) -> SavingsReporter:
        return SavingsReporter(work_schedule(self._income_store.list_incomes()))

    def available_months(self, count: int = 12) -> list[MonthOption]:
        """Month choices for the report screen, newest first."""
        return months_for_selection(self._today(), count)

    def current_month_report(self) -> dict:
        return self.month_report(persian_month_label(self._today()))

    def month_report(self, month: str) -> dict:
        """Totals for a single month label."""
        return self._reporter().month_report(self._ledger.list_savings(), month)

    def monthly_breakdown(self) -> list[dict]:
        return self._reporter().monthly_breakdown(self._ledger.list_savings())

    def totals(self) -> dict:
        return self._reporter().totals_report(self._ledger.list_savings())

    async def refresh(self, correlation_id: Optional[UUID] = None) -> bool:
        """Flush pending savings and reload the ledger from remote."""
        if self._sync is None:
            return False
        return await self._sync.initial_sync(correlation_id)


def create_app_components(
    use_remote: bool = True,
    is_online: Optional[Callable[[], bool]] = None,
) -> tuple[IncomeFlow, CostFlow, ReportFlow, SyncService]:
    """
    Factory function to create all application components.

    Args:
        use_remote: Whether to replicate savings to Google Sheets.
                    Falls back to local-only when not configured.
        is_online: Connectivity probe for the sync service

    Returns:
        (income_flow, cost_flow, report_flow, sync_service)
    """
    app_settings = get_settings().app
    set_log_level(app_settings.log_level)
    activity_logger = ActivityLogger()

    local_store = LocalStateStore(app_settings.local_state_file)

    remote: Optional[SavingStorageInterface] = None
    if use_remote:
        try:
            remote = GoogleSheetsSavingStorage(GoogleSheetsClient())
        except (ValidationError, StorageError) as e:
            # Remote not configured - continue local-only
            logger.warning("remote_storage_unavailable", error=str(e))
            remote = None

    sync_service = SyncService(
        ledger=local_store,
        queue=local_store,
        remote=remote,
        is_online=is_online,
        activity_logger=activity_logger,
    )

    income_flow = IncomeFlow(
        income_store=local_store,
        activity_logger=activity_logger,
    )
    cost_flow = CostFlow(
        income_store=local_store,
        sync_service=sync_service,
        activity_logger=activity_logger,
    )
    report_flow = ReportFlow(
        ledger=local_store,
        income_store=local_store,
        sync_service=sync_service,
    )

    return income_flow, cost_flow, report_flow, sync_service
