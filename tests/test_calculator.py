"""
Tests for the calculation core: income aggregation and duration formatting.
"""

import math

import pytest

from src.calculator import (
    average_hourly_rate,
    calculate_hours_needed,
    detailed_time_breakdown,
    format_hours,
    format_working_time,
    hours_to_all_units,
    implied_hourly_rate,
    work_schedule,
    working_days_per_week,
    working_hours_per_day,
    working_time_breakdown,
)
from src.calculator.duration import LESS_THAN_ONE_HOUR, LESS_THAN_ONE_SECOND, ZERO_TEXT
from src.models.income import (
    CustomIncome,
    DailyIncome,
    HourlyIncome,
    MonthlyIncome,
    ProjectIncome,
    WeeklyIncome,
)
from src.numeric import round_half_up


class TestRounding:
    """Tests for half-up rounding."""

    def test_halves_round_up(self):
        """Test that .5 rounds up rather than to even."""
        assert round_half_up(2.5) == 3
        assert round_half_up(0.5) == 1
        assert round_half_up(1.49) == 1


class TestAverageHourlyRate:
    """Tests for the income aggregator."""

    def test_empty_list_is_zero(self):
        """Test that no incomes means a zero rate."""
        assert average_hourly_rate([]) == 0.0

    def test_unweighted_mean(self):
        """Test mean of per-income rates: (100 + 400/8) / 2 = 75."""
        incomes = [
            HourlyIncome(amount=100),
            DailyIncome(amount=400, hours_per_day=8),
        ]
        assert average_hourly_rate(incomes) == 75.0

    def test_order_independent(self):
        """Test that list order does not change the rate."""
        incomes = [
            HourlyIncome(amount=100),
            MonthlyIncome(amount=20800, days_per_month=26, hours_per_day=8),
            CustomIncome(amount=90, hours_per_unit=3),
        ]
        assert average_hourly_rate(incomes) == pytest.approx(
            average_hourly_rate(list(reversed(incomes)))
        )

    def test_every_variant_contributes(self):
        """Test the implied rate of each variant."""
        assert implied_hourly_rate(HourlyIncome(amount=120)) == 120
        assert implied_hourly_rate(DailyIncome(amount=800, hours_per_day=8)) == 100
        assert implied_hourly_rate(
            WeeklyIncome(amount=4000, days_per_week=5, hours_per_day=8)
        ) == 100
        assert implied_hourly_rate(
            ProjectIncome(amount=6000, avg_days=10, hours_per_day=6)
        ) == 100
        assert implied_hourly_rate(CustomIncome(amount=300, hours_per_unit=3)) == 100

    def test_non_finite_amount_skipped(self):
        """Test that an infinite amount does not poison the mean."""
        incomes = [HourlyIncome(amount=math.inf), HourlyIncome(amount=50)]
        assert average_hourly_rate(incomes) == 50.0

    def test_unknown_variant_raises(self):
        """Test that a non-income object is refused."""
        with pytest.raises(TypeError):
            implied_hourly_rate(object())


class TestWorkSchedule:
    """Tests for schedule derivation from incomes."""

    def test_defaults_without_incomes(self):
        """Test the default 8 hours x 6 days."""
        schedule = work_schedule([])
        assert schedule.hours_per_day == 8.0
        assert schedule.days_per_week == 6.0

    def test_first_defining_income_wins(self):
        """Test that hourly incomes are skipped and the first weekly is used."""
        incomes = [
            HourlyIncome(amount=100),
            WeeklyIncome(amount=1, days_per_week=5, hours_per_day=9),
            WeeklyIncome(amount=1, days_per_week=4, hours_per_day=7),
        ]
        assert working_days_per_week(incomes) == 5
        assert working_hours_per_day(incomes) == 9

    def test_monthly_days_converted_to_weekly(self):
        """Test 22 days a month -> round(22 / 4.33) = 5 days a week."""
        incomes = [MonthlyIncome(amount=1, days_per_month=22)]
        assert working_days_per_week(incomes) == 5.0

    def test_project_days_converted_to_weekly(self):
        """Test 26 average days -> 6 days a week."""
        incomes = [ProjectIncome(amount=1, avg_days=26)]
        assert working_days_per_week(incomes) == 6.0

    def test_zero_conversion_is_skipped(self):
        """Test that a month of 1 day (rounds to 0 a week) is passed over."""
        incomes = [
            MonthlyIncome(amount=1, days_per_month=1),
            WeeklyIncome(amount=1, days_per_week=4),
        ]
        assert working_days_per_week(incomes) == 4

    def test_daily_income_defines_day_length(self):
        """Test that a daily income sets hours per day but not days."""
        incomes = [DailyIncome(amount=1, hours_per_day=10)]
        assert working_hours_per_day(incomes) == 10
        assert working_days_per_week(incomes) == 6.0


class TestHoursNeeded:
    """Tests for amount -> hours conversion."""

    def test_basic_division(self):
        """Test 150 at 75 per hour is 2 hours."""
        assert calculate_hours_needed(150, 75) == 2.0

    def test_zero_rate(self):
        """Test that no income yields zero hours."""
        assert calculate_hours_needed(100, 0) == 0.0

    def test_non_positive_amount(self):
        """Test that a negative amount yields zero hours."""
        assert calculate_hours_needed(-5, 10) == 0.0


class TestFormatWorkingTime:
    """Tests for the working-time formatter."""

    def test_zero(self):
        """Test the canonical zero result."""
        result = format_working_time(0)
        assert result.text == ZERO_TEXT
        assert result.total_hours == 0

    def test_negative_and_nan(self):
        """Test that degenerate hours are treated as zero."""
        assert format_working_time(-3).text == ZERO_TEXT
        assert format_working_time(math.nan).text == ZERO_TEXT

    def test_non_positive_schedule(self):
        """Test that a zero-length day yields the zero result."""
        result = format_working_time(10, 0, 6)
        assert result.text == ZERO_TEXT
        assert result.total_hours == 0

    def test_day_and_hours(self):
        """Test 10 hours at 8/6 is one day and two hours."""
        result = format_working_time(10, 8, 6)
        assert result.text == "۱ روز و ۲ ساعت کاری"
        assert result.total_hours == 10

    def test_only_hours(self):
        """Test that a short duration shows hours only."""
        assert format_working_time(3, 8, 6).text == "۳ ساعت کاری"

    def test_finer_unit_dropped_when_zero(self):
        """Test 50 hours: one week, zero days, so hours are not shown."""
        result = format_working_time(50, 8, 6)
        assert result.text == "۱ هفته کاری"
        assert result.total_hours == 50

    def test_full_working_year(self):
        """Test 52 full weeks at 8/6 (2496 hours) is one working year."""
        result = format_working_time(2496, 8, 6)
        assert result.text == "۱ سال کاری"
        assert result.total_hours == 2496

    def test_weeks_and_days(self):
        """Test 60 hours at 8/6 is one week and one day."""
        assert format_working_time(60, 8, 6).text == "۱ هفته و ۱ روز کاری"

    def test_months_and_weeks(self):
        """Test 240 hours at 8/6 is one month and one week."""
        assert format_working_time(240, 8, 6).text == "۱ ماه و ۱ هفته کاری"

    def test_years_and_months(self):
        """Test 3000 hours at 8/6 is one year and two months."""
        result = format_working_time(3000, 8, 6)
        assert result.text == "۱ سال و ۲ ماه کاری"
        assert result.total_hours == 3000

    def test_nominal_working_year_floors_below_a_year(self):
        """Test 8 x 6 x 4.33 x 12 hours floors to 11 months and 3 weeks."""
        result = format_working_time(8 * 6 * 4.33 * 12, 8, 6)
        assert result.text == "۱۱ ماه و ۳ هفته کاری"
        assert result.total_hours == 2494

    def test_less_than_one_hour(self):
        """Test that a fraction rounding to zero has no suffix."""
        result = format_working_time(0.3, 8, 6)
        assert result.text == LESS_THAN_ONE_HOUR
        assert result.total_hours == 0

    def test_fraction_rounding_to_one_hour(self):
        """Test that 0.6 hours shows as one hour."""
        result = format_working_time(0.6, 8, 6)
        assert result.text == "۱ ساعت کاری"
        assert result.total_hours == 1

    def test_at_most_two_units(self):
        """Test that text never lists more than two units."""
        for hours in (10, 57, 300, 1234.5, 9999):
            text = format_working_time(hours, 8, 6).text
            assert text.count(" و ") <= 1

    def test_total_is_rounded_hours(self):
        """Test that total_hours is the half-up rounded input."""
        for hours in (0.6, 2.5, 10, 47.49, 1000.5):
            assert format_working_time(hours).total_hours == round_half_up(hours)

    def test_deterministic(self):
        """Test that the same input gives the same output."""
        assert format_working_time(123.4, 7, 5) == format_working_time(123.4, 7, 5)

    def test_breakdown_cascade(self):
        """Test the raw breakdown for 10 hours at 8/6."""
        breakdown = working_time_breakdown(10, 8, 6)
        assert (breakdown.years, breakdown.months, breakdown.weeks) == (0, 0, 0)
        assert (breakdown.days, breakdown.hours) == (1, 2)


class TestFormatHours:
    """Tests for the calendar-time formatter."""

    def test_zero(self):
        """Test the canonical zero text."""
        assert format_hours(0) == ZERO_TEXT
        assert format_hours(-1) == ZERO_TEXT

    def test_days_and_hours(self):
        """Test 51 hours is two days and three hours."""
        assert format_hours(51) == "۲ روز و ۳ ساعت"

    def test_centuries_and_years(self):
        """Test 150 calendar years is one century and fifty years."""
        assert format_hours(24 * 365.25 * 150) == "۱ قرن و ۵۰ سال"

    def test_years_and_months(self):
        """Test 9600 hours is one year and one month."""
        assert format_hours(9600) == "۱ سال و ۱ ماه"

    def test_months_and_weeks(self):
        """Test 960 hours is one month and one week."""
        assert format_hours(960) == "۱ ماه و ۱ هفته"

    def test_minutes(self):
        """Test a quarter hour is fifteen minutes."""
        assert format_hours(0.25) == "۱۵ دقیقه"

    def test_less_than_one_second(self):
        """Test a tiny duration."""
        assert format_hours(0.0001) == LESS_THAN_ONE_SECOND

    def test_all_units(self):
        """Test the calendar breakdown of one week and a day."""
        breakdown = hours_to_all_units(8 * 24)
        assert breakdown.weeks == 1
        assert breakdown.days == 1
        assert breakdown.hours == 0

    def test_detailed_breakdown(self):
        """Test the comma separated detail text."""
        assert detailed_time_breakdown(51) == "۲ روز، ۳ ساعت"
        assert detailed_time_breakdown(0.25) == "۱۵ دقیقه"
        assert detailed_time_breakdown(0) == ""


class TestCostRoundTrip:
    """Tests for incomes -> rate -> hours -> working time."""

    def test_total_matches_rounded_hours_needed(self):
        """Test the formatted total equals the rounded hours needed."""
        incomes = [
            HourlyIncome(amount=120_000),
            MonthlyIncome(amount=25_000_000, days_per_month=22, hours_per_day=9),
            CustomIncome(amount=700_000, hours_per_unit=5),
        ]
        rate = average_hourly_rate(incomes)
        schedule = work_schedule(incomes)

        for amount in (1_000, 350_000, 4_200_000, 99_999_999):
            hours = calculate_hours_needed(amount, rate)
            result = format_working_time(
                hours, schedule.hours_per_day, schedule.days_per_week
            )
            assert result.total_hours == round_half_up(hours)
