"""
Calculation core: income aggregation and working-time formatting.

Everything in this package is pure and synchronous.
"""

from src.calculator.duration import (
    detailed_time_breakdown,
    format_hours,
    format_working_time,
    hours_to_all_units,
    working_time_breakdown,
)
from src.calculator.rates import (
    average_hourly_rate,
    calculate_hours_needed,
    implied_hourly_rate,
    work_schedule,
    working_days_per_week,
    working_hours_per_day,
)

__all__ = [
    # Duration formatting
    "detailed_time_breakdown",
    "format_hours",
    "format_working_time",
    "hours_to_all_units",
    "working_time_breakdown",
    # Income aggregation
    "average_hourly_rate",
    "calculate_hours_needed",
    "implied_hourly_rate",
    "work_schedule",
    "working_days_per_week",
    "working_hours_per_day",
]
