"""
Integration tests for the end-to-end flows.
"""

import asyncio
import logging
from datetime import date

import pytest

from src.models.income import DailyIncome, IncomeFormData, IncomeType
from src.orchestrator import (
    CostFlow,
    IncomeFlow,
    ReportFlow,
    create_app_components,
)
from src.services.storage import LocalStateStore, NotFoundError
from src.services.sync import SyncOutcome, SyncService
from src.validation import IncomeValidator


TODAY = date(2025, 10, 19)
MEHR = "مهر ۱۴۰۴"


def _today() -> date:
    return TODAY


def _flows():
    store = LocalStateStore()
    sync = SyncService(ledger=store, queue=store)
    income_flow = IncomeFlow(store, validator=IncomeValidator(max_amount=1_000_000_000))
    cost_flow = CostFlow(store, sync, today=_today)
    report_flow = ReportFlow(store, store, sync, today=_today)
    return income_flow, cost_flow, report_flow, store


def _add_default_incomes(income_flow: IncomeFlow) -> None:
    income_flow.add_income(IncomeFormData(type=IncomeType.HOURLY, amount=100))
    income_flow.add_income(IncomeFormData(type=IncomeType.DAILY, amount=400, hours=8))


class TestIncomeFlow:
    """Tests for income management."""

    def test_add_income(self):
        """Test a valid form is stored as the matching variant."""
        income_flow, _, _, store = _flows()
        income, result = income_flow.add_income(
            IncomeFormData(type=IncomeType.DAILY, amount=800, hours=10)
        )
        assert result.is_valid
        assert isinstance(income, DailyIncome)
        assert store.list_incomes() == [income]

    def test_invalid_income_not_stored(self):
        """Test that a rejected form leaves the store untouched."""
        income_flow, _, _, store = _flows()
        income, result = income_flow.add_income(
            IncomeFormData(type=IncomeType.DAILY, amount=800, hours=30)
        )
        assert income is None
        assert not result.is_valid
        assert store.list_incomes() == []

    def test_hourly_rate_and_schedule(self):
        """Test the derived rate and schedule."""
        income_flow, _, _, _ = _flows()
        _add_default_incomes(income_flow)
        assert income_flow.hourly_rate() == 75.0
        assert income_flow.schedule().hours_per_day == 8

    def test_update_income_keeps_id(self):
        """Test editing an income."""
        income_flow, _, _, _ = _flows()
        income, _ = income_flow.add_income(
            IncomeFormData(type=IncomeType.HOURLY, amount=100)
        )
        updated, _ = income_flow.update_income(
            income.id, IncomeFormData(type=IncomeType.HOURLY, amount=200)
        )
        assert updated.id == income.id
        assert income_flow.hourly_rate() == 200.0

    def test_update_missing_income(self):
        """Test editing an unknown income."""
        income_flow, _, _, _ = _flows()
        with pytest.raises(NotFoundError):
            income_flow.update_income(
                "missing", IncomeFormData(type=IncomeType.HOURLY, amount=1)
            )

    def test_remove_income(self):
        """Test removing an income."""
        income_flow, _, _, _ = _flows()
        income, _ = income_flow.add_income(
            IncomeFormData(type=IncomeType.HOURLY, amount=100)
        )
        assert income_flow.remove_income(income.id) is True
        assert income_flow.list_incomes() == []


class TestCostFlow:
    """Tests for evaluating and saving an amount."""

    def test_evaluate(self):
        """Test 150 Toman at 75 per hour is two working hours."""
        income_flow, cost_flow, _, _ = _flows()
        _add_default_incomes(income_flow)

        evaluation = cost_flow.evaluate(150)
        assert evaluation.hourly_rate == 75.0
        assert evaluation.hours_needed == 2.0
        assert evaluation.working_time.text == "۲ ساعت کاری"

    def test_evaluate_without_incomes(self):
        """Test that no income gives the zero result."""
        _, cost_flow, _, _ = _flows()
        evaluation = cost_flow.evaluate(150)
        assert evaluation.hours_needed == 0.0
        assert evaluation.working_time.text == "۰ ثانیه"

    def test_save(self):
        """Test a saving is recorded under the current month label."""
        income_flow, cost_flow, _, store = _flows()
        _add_default_incomes(income_flow)

        saving, outcome, message = asyncio.run(cost_flow.save(cost_flow.evaluate(150)))

        assert outcome == SyncOutcome.LOCAL_ONLY
        assert saving.month == MEHR
        assert saving.hours == 2.0
        assert store.list_savings() == [saving]
        assert message == "مبلغ ۱۵۰ تومان به صرفه‌جویی‌های شما اضافه شد"

    def test_save_without_incomes(self):
        """Test that nothing is saved when the rate is unknown."""
        _, cost_flow, _, store = _flows()
        saving, outcome, message = asyncio.run(cost_flow.save(cost_flow.evaluate(150)))

        assert saving is None
        assert outcome is None
        assert "ابتدا حداقل یک درآمد ثبت کنید" in message
        assert store.list_savings() == []


class TestReportFlow:
    """Tests for the report flow."""

    def test_current_month_report(self):
        """Test savings appear in this month's report."""
        income_flow, cost_flow, report_flow, _ = _flows()
        _add_default_incomes(income_flow)
        asyncio.run(cost_flow.save(cost_flow.evaluate(150)))
        asyncio.run(cost_flow.save(cost_flow.evaluate(600)))

        report = report_flow.current_month_report()
        assert report["month"] == MEHR
        assert report["count"] == 2
        assert report["total_amount"] == 750
        assert report["working_time"] == "۱ روز و ۲ ساعت کاری"

    def test_totals_and_breakdown(self):
        """Test totals and the per-month list."""
        income_flow, cost_flow, report_flow, _ = _flows()
        _add_default_incomes(income_flow)
        asyncio.run(cost_flow.save(cost_flow.evaluate(150)))

        assert report_flow.totals()["count"] == 1
        assert [m["month"] for m in report_flow.monthly_breakdown()] == [MEHR]

    def test_available_months(self):
        """Test the month choices start with the current month."""
        _, _, report_flow, _ = _flows()
        months = report_flow.available_months()
        assert len(months) == 12
        assert months[0].label == MEHR

    def test_refresh_local_only(self):
        """Test refresh is a no-op without a remote."""
        _, _, report_flow, _ = _flows()
        assert asyncio.run(report_flow.refresh()) is False


class TestAppFactory:
    """Tests for component wiring."""

    def test_local_only_components(self, tmp_path, monkeypatch):
        """Test wiring with a local state file and no remote."""
        path = tmp_path / "state.json"
        monkeypatch.setenv("LOCAL_STATE_PATH", str(path))

        income_flow, cost_flow, report_flow, sync = create_app_components(use_remote=False)
        income_flow.add_income(IncomeFormData(type=IncomeType.HOURLY, amount=100))

        assert sync.has_remote is False
        assert path.exists()
        assert cost_flow.evaluate(100).hours_needed == 1.0

    def test_unconfigured_remote_falls_back(self, tmp_path, monkeypatch):
        """Test that missing Google Sheets settings mean local-only."""
        monkeypatch.setenv("LOCAL_STATE_PATH", str(tmp_path / "state.json"))
        monkeypatch.delenv("GOOGLE_SHEETS_CREDENTIALS_PATH", raising=False)
        monkeypatch.delenv("GOOGLE_SHEETS_SPREADSHEET_ID", raising=False)

        _, _, _, sync = create_app_components(use_remote=True)
        assert sync.has_remote is False

    def test_log_level_from_settings(self, tmp_path, monkeypatch):
        """Test that LOG_LEVEL sets the root log level."""
        monkeypatch.setenv("LOCAL_STATE_PATH", str(tmp_path / "state.json"))
        monkeypatch.setenv("LOG_LEVEL", "WARNING")
        root = logging.getLogger()
        previous = root.level
        try:
            create_app_components(use_remote=False)
            assert root.level == logging.WARNING
        finally:
            root.setLevel(previous)
