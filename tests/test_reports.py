"""
Tests for savings reports.
"""

from src.models.saving import Saving
from src.models.time import WorkSchedule
from src.queries import SavingsReporter, overall_totals, summarize_by_month


MEHR = "مهر ۱۴۰۴"
ABAN = "آبان ۱۴۰۴"


def _savings() -> list[Saving]:
    return [
        Saving(id="a", amount=100, hours=2, month=MEHR),
        Saving(id="b", amount=200, hours=8, month=MEHR),
        Saving(id="c", amount=50, hours=1, month=ABAN),
    ]


class TestAggregation:
    """Tests for the grouping helpers."""

    def test_summarize_by_month(self):
        """Test per-label totals in first-seen order."""
        groups = summarize_by_month(_savings())
        assert list(groups) == [MEHR, ABAN]
        assert groups[MEHR].total_amount == 300
        assert groups[MEHR].total_hours == 10
        assert groups[MEHR].count == 2

    def test_labels_compared_exactly(self):
        """Test that labels differing only in digits script are separate."""
        savings = [
            Saving(amount=1, hours=1, month="مهر ۱۴۰۴"),
            Saving(amount=1, hours=1, month="مهر 1404"),
        ]
        assert len(summarize_by_month(savings)) == 2

    def test_overall_totals(self):
        """Test totals over every saving."""
        totals = overall_totals(_savings())
        assert totals.total_amount == 350
        assert totals.total_hours == 11
        assert totals.count == 3

    def test_empty(self):
        """Test that no savings give zero totals."""
        assert summarize_by_month([]) == {}
        assert overall_totals([]).count == 0


class TestSavingsReporter:
    """Tests for report dictionaries."""

    def test_month_report(self):
        """Test one month with working time."""
        report = SavingsReporter().month_report(_savings(), MEHR)
        assert report["month"] == MEHR
        assert report["total_amount"] == 300
        assert report["count"] == 2
        assert report["working_time"] == "۱ روز و ۲ ساعت کاری"
        assert report["working_hours_rounded"] == 10

    def test_month_without_savings(self):
        """Test that an empty month reports zeros."""
        report = SavingsReporter().month_report(_savings(), "دی ۱۴۰۴")
        assert report["count"] == 0
        assert report["total_amount"] == 0
        assert report["working_time"] == "۰ ثانیه"

    def test_monthly_breakdown(self):
        """Test one entry per month label."""
        breakdown = SavingsReporter().monthly_breakdown(_savings())
        assert [entry["month"] for entry in breakdown] == [MEHR, ABAN]
        assert breakdown[1]["working_time"] == "۱ ساعت کاری"

    def test_totals_report(self):
        """Test totals with working time."""
        report = SavingsReporter().totals_report(_savings())
        assert report["count"] == 3
        assert report["working_time"] == "۱ روز و ۳ ساعت کاری"

    def test_uses_given_schedule(self):
        """Test that working time follows the user's schedule."""
        reporter = SavingsReporter(WorkSchedule(hours_per_day=5, days_per_week=5))
        assert reporter.month_report(_savings(), MEHR)["working_time"] == "۲ روز کاری"
