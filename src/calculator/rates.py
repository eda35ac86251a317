"""
Income Aggregator

Turns a list of heterogeneous incomes into a single average hourly rate,
and derives the work schedule used to express amounts as working time.

DESIGN DECISION: The rate is the UNWEIGHTED mean of each income's implied
hourly rate (amount / hours). An income worth 1 hour a month counts as
much as one worth 200. This is intentional product behaviour; do not
switch it to an hours-weighted average.

DESIGN DECISION: Everything here is a pure function of the income list
passed in. No ambient state, no I/O, and no exceptions for degenerate
input: an empty list simply produces the defaults.
"""

import math
from typing import Sequence

from src.calculator.duration import WEEKS_PER_MONTH
from src.models.income import (
    CustomIncome,
    DailyIncome,
    HourlyIncome,
    Income,
    MonthlyIncome,
    ProjectIncome,
    WeeklyIncome,
)
from src.models.time import WorkSchedule
from src.numeric import is_positive, round_half_up


DEFAULT_WORKING_DAYS_PER_WEEK = 6.0
DEFAULT_WORKING_HOURS_PER_DAY = 8.0


def implied_hourly_rate(income: Income) -> float:
    """
    amount / hours for a single income, 0.0 if hours is not positive.
    """
    if isinstance(income, (
        HourlyIncome,
        DailyIncome,
        WeeklyIncome,
        MonthlyIncome,
        ProjectIncome,
        CustomIncome,
    )):
        if income.hours > 0:
            return income.amount / income.hours
        return 0.0
    raise TypeError(f"Unsupported income variant: {type(income).__name__}")


def average_hourly_rate(incomes: Sequence[Income]) -> float:
    """
    Average hourly rate across all incomes.

    Each income with positive hours contributes amount / hours once.
    Returns 0.0 when nothing contributes. Non-finite rates (from an
    infinite or NaN amount) are skipped so the result is always finite.
    """
    total = 0.0
    count = 0

    for income in incomes:
        rate = implied_hourly_rate(income)
        if not income.hours > 0 or not math.isfinite(rate):
            continue
        total += rate
        count += 1

    return total / count if count > 0 else 0.0


def working_days_per_week(incomes: Sequence[Income]) -> float:
    """
    Working days per week, taken from the first income that defines one.

    Weekly incomes give it directly; monthly and project incomes are
    converted using 4.33 weeks per month. List order matters.
    """
    for income in incomes:
        if isinstance(income, WeeklyIncome):
            if is_positive(income.days_per_week):
                return income.days_per_week
        elif isinstance(income, MonthlyIncome):
            days = round_half_up(income.days_per_month / WEEKS_PER_MONTH)
            if days > 0:
                return float(days)
        elif isinstance(income, ProjectIncome):
            days = round_half_up(income.avg_days / WEEKS_PER_MONTH)
            if days > 0:
                return float(days)
        elif isinstance(income, (HourlyIncome, DailyIncome, CustomIncome)):
            continue
        else:
            raise TypeError(f"Unsupported income variant: {type(income).__name__}")

    return DEFAULT_WORKING_DAYS_PER_WEEK


def working_hours_per_day(incomes: Sequence[Income]) -> float:
    """
    Working hours per day, taken from the first income that defines one.

    Hourly and custom incomes carry no day length and are skipped.
    """
    for income in incomes:
        if isinstance(income, (DailyIncome, WeeklyIncome, MonthlyIncome, ProjectIncome)):
            if is_positive(income.hours_per_day):
                return income.hours_per_day
        elif isinstance(income, (HourlyIncome, CustomIncome)):
            continue
        else:
            raise TypeError(f"Unsupported income variant: {type(income).__name__}")

    return DEFAULT_WORKING_HOURS_PER_DAY


def work_schedule(incomes: Sequence[Income]) -> WorkSchedule:
    """The schedule implied by the income list."""
    return WorkSchedule(
        hours_per_day=working_hours_per_day(incomes),
        days_per_week=working_days_per_week(incomes),
    )


def calculate_hours_needed(amount: float, hourly_rate: float) -> float:
    """Hours of work needed to earn `amount`; 0.0 for degenerate input."""
    if not is_positive(hourly_rate) or not is_positive(amount):
        return 0.0
    return amount / hourly_rate
