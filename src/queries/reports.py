"""
Savings Reports

DESIGN DECISION: Savings are grouped by their month LABEL, using plain
string equality. Labels are display strings ("مهر ۱۴۰۴"); they are
never parsed back into dates, so no calendar logic lives here.

Reports are computed from whatever saving list they are given (normally
the local ledger), so they work the same online and offline.
"""

from typing import Optional, Sequence

from src.calculator.duration import format_working_time
from src.models.saving import MonthlySummary, Saving, SavingsTotals
from src.models.time import WorkingTime, WorkSchedule


def summarize_by_month(savings: Sequence[Saving]) -> dict[str, MonthlySummary]:
    """
    Aggregate savings per month label.

    Keys keep the order in which each label was first seen.
    """
    groups: dict[str, MonthlySummary] = {}

    for saving in savings:
        summary = groups.get(saving.month)
        if summary is None:
            summary = MonthlySummary(month=saving.month)
            groups[saving.month] = summary
        summary.total_amount += saving.amount
        summary.total_hours += saving.hours
        summary.count += 1

    return groups


def overall_totals(savings: Sequence[Saving]) -> SavingsTotals:
    """Aggregate all savings regardless of month."""
    totals = SavingsTotals()
    for saving in savings:
        totals.total_amount += saving.amount
        totals.total_hours += saving.hours
        totals.count += 1
    return totals


class SavingsReporter:
    """
    Builds the numbers shown on the reports screen.

    Working time is expressed with the schedule given at construction,
    typically the one derived from the user's incomes.
    """

    def __init__(self, schedule: Optional[WorkSchedule] = None):
        self._schedule = schedule or WorkSchedule()

    def working_time(self, hours: float) -> WorkingTime:
        return format_working_time(
            hours,
            self._schedule.hours_per_day,
            self._schedule.days_per_week,
        )

    def month_report(self, savings: Sequence[Saving], month: str) -> dict:
        """Totals for one month label; zeros when the month has no savings."""
        summary = summarize_by_month(savings).get(month) or MonthlySummary(month=month)
        return self._summary_to_dict(summary)

    def monthly_breakdown(self, savings: Sequence[Saving]) -> list[dict]:
        """One entry per month label, in first-seen order."""
        return [
            self._summary_to_dict(summary)
            for summary in summarize_by_month(savings).values()
        ]

    def totals_report(self, savings: Sequence[Saving]) -> dict:
        """Totals over every saving."""
        totals = overall_totals(savings)
        working_time = self.working_time(totals.total_hours)
        return {
            "total_amount": totals.total_amount,
            "total_hours": totals.total_hours,
            "count": totals.count,
            "working_time": working_time.text,
            "working_hours_rounded": working_time.total_hours,
        }

    def _summary_to_dict(self, summary: MonthlySummary) -> dict:
        working_time = self.working_time(summary.total_hours)
        return {
            "month": summary.month,
            "total_amount": summary.total_amount,
            "total_hours": summary.total_hours,
            "count": summary.count,
            "working_time": working_time.text,
            "working_hours_rounded": working_time.total_hours,
        }
