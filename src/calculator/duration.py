"""
Duration Formatters

Render an hours quantity as Persian text.

Two formatters share one technique:
1. Cascade: split the quantity unit by unit, each unit taken from the
   remainder of the previous one (floor the quotient, carry the rest).
2. Tier selection: show the coarsest non-zero unit, plus the next finer
   unit when that one is non-zero. Never more than two units.

format_working_time() works on a WORKING-TIME basis: a "day" is one
working day of the user's schedule, a month is 4.33 working weeks and a
year is 12 such months. This is an approximation, not calendar math;
drift at large magnitudes is expected.

format_hours() works on calendar time (365.25-day years, 30-day months)
and is used for raw elapsed durations.

Neither formatter raises. Zero, negative and non-finite input all
produce the canonical zero result.
"""

import math
from typing import Sequence

from src.i18n.persian import to_persian_digits
from src.models.time import TimeBreakdown, WorkingTime, WorkingTimeBreakdown
from src.numeric import is_positive, round_half_up


WEEKS_PER_MONTH = 4.33
MONTHS_PER_YEAR = 12

ZERO_TEXT = "۰ ثانیه"
LESS_THAN_ONE_HOUR = "کمتر از ۱ ساعت"
LESS_THAN_ONE_SECOND = "کمتر از یک ثانیه"
WORKING_BASIS_SUFFIX = "کاری"
PART_SEPARATOR = " و "
DETAIL_SEPARATOR = "، "

WORKING_UNIT_LABELS = ("سال", "ماه", "هفته", "روز", "ساعت")
CALENDAR_UNIT_LABELS = ("قرن", "سال", "ماه", "هفته", "روز", "ساعت", "دقیقه", "ثانیه")

# Calendar units in hours, coarsest first: century, year, month, week, day
CALENDAR_UNIT_HOURS = (
    100 * 365.25 * 24,
    365.25 * 24,
    30 * 24,
    7 * 24,
    24,
)


def _cascade_step(value: float, unit: float) -> tuple[int, float]:
    """Whole `unit`s contained in `value`, and what is left over."""
    count = math.floor(value / unit)
    return count, value - count * unit


def _select_tiers(values: Sequence[int], labels: Sequence[str]) -> list[str]:
    """Coarsest non-zero unit, plus the next finer one when non-zero."""
    for index, value in enumerate(values):
        if value > 0:
            parts = [f"{to_persian_digits(value)} {labels[index]}"]
            if index + 1 < len(values) and values[index + 1] > 0:
                parts.append(
                    f"{to_persian_digits(values[index + 1])} {labels[index + 1]}"
                )
            return parts
    return []


# =============================================================================
# WORKING-TIME BASIS
# =============================================================================

def working_time_breakdown(
    total_hours: float,
    hours_per_day: float = 8.0,
    days_per_week: float = 6.0,
) -> WorkingTimeBreakdown:
    """
    Split hours into working years/months/weeks/days/hours.

    Days come from hours, weeks from whole days, months from whole weeks
    (4.33 per month) and years from whole months (12 per year).
    """
    if not (
        is_positive(total_hours)
        and is_positive(hours_per_day)
        and is_positive(days_per_week)
    ):
        return WorkingTimeBreakdown()

    full_days, remaining_hours = _cascade_step(total_hours, hours_per_day)
    weeks, remaining_days = _cascade_step(full_days, days_per_week)
    months, remaining_weeks = _cascade_step(weeks, WEEKS_PER_MONTH)
    years, remaining_months = _cascade_step(months, MONTHS_PER_YEAR)

    return WorkingTimeBreakdown(
        years=years,
        months=round_half_up(remaining_months),
        weeks=round_half_up(remaining_weeks),
        days=round_half_up(remaining_days),
        hours=round_half_up(remaining_hours),
    )


def format_working_time(
    total_hours: float,
    hours_per_day: float = 8.0,
    days_per_week: float = 6.0,
) -> WorkingTime:
    """
    Format hours as working time, e.g. "۱ روز و ۲ ساعت کاری".

    Returns the text and the total rounded to whole hours.
    """
    if not (
        is_positive(total_hours)
        and is_positive(hours_per_day)
        and is_positive(days_per_week)
    ):
        return WorkingTime(text=ZERO_TEXT, total_hours=0)

    breakdown = working_time_breakdown(total_hours, hours_per_day, days_per_week)
    parts = _select_tiers(
        (
            breakdown.years,
            breakdown.months,
            breakdown.weeks,
            breakdown.days,
            breakdown.hours,
        ),
        WORKING_UNIT_LABELS,
    ) or [LESS_THAN_ONE_HOUR]

    rounded_total = round_half_up(total_hours)
    if rounded_total > 0:
        text = f"{PART_SEPARATOR.join(parts)} {WORKING_BASIS_SUFFIX}"
        return WorkingTime(text=text, total_hours=rounded_total)

    return WorkingTime(text=PART_SEPARATOR.join(parts), total_hours=0)


# =============================================================================
# CALENDAR BASIS
# =============================================================================

def hours_to_all_units(total_hours: float) -> TimeBreakdown:
    """Split hours into centuries down to seconds (calendar time)."""
    if not is_positive(total_hours):
        return TimeBreakdown()

    counts = []
    remaining = total_hours
    for unit in CALENDAR_UNIT_HOURS:
        count, remaining = _cascade_step(remaining, unit)
        counts.append(count)

    minutes = (total_hours % 1) * 60
    seconds = (minutes % 1) * 60

    centuries, years, months, weeks, days = counts
    return TimeBreakdown(
        centuries=centuries,
        years=years,
        months=months,
        weeks=weeks,
        days=days,
        hours=round_half_up(remaining),
        minutes=round_half_up(minutes),
        seconds=round_half_up(seconds),
    )


def format_hours(total_hours: float) -> str:
    """Format hours as calendar time, e.g. "۲ روز و ۳ ساعت"."""
    if not is_positive(total_hours):
        return ZERO_TEXT

    breakdown = hours_to_all_units(total_hours)
    parts = _select_tiers(
        (
            breakdown.centuries,
            breakdown.years,
            breakdown.months,
            breakdown.weeks,
            breakdown.days,
            breakdown.hours,
            breakdown.minutes,
            breakdown.seconds,
        ),
        CALENDAR_UNIT_LABELS,
    )
    return PART_SEPARATOR.join(parts) or LESS_THAN_ONE_SECOND


def detailed_time_breakdown(total_hours: float) -> str:
    """
    Every non-zero calendar unit, comma separated.

    Minutes are only listed for durations shorter than a day.
    """
    breakdown = hours_to_all_units(total_hours)
    units = [
        (breakdown.centuries, "قرن"),
        (breakdown.years, "سال"),
        (breakdown.months, "ماه"),
        (breakdown.weeks, "هفته"),
        (breakdown.days, "روز"),
        (breakdown.hours, "ساعت"),
    ]
    if breakdown.days == 0 and breakdown.years == 0:
        units.append((breakdown.minutes, "دقیقه"))

    return DETAIL_SEPARATOR.join(
        f"{to_persian_digits(value)} {label}" for value, label in units if value > 0
    )
