"""
Working-Time Models

Value objects produced and consumed by the calculation core.
"""

from pydantic import BaseModel, ConfigDict, Field


class WorkSchedule(BaseModel):
    """How long a working day is and how many of them make a week."""
    model_config = ConfigDict(frozen=True)

    hours_per_day: float = Field(default=8.0, gt=0)
    days_per_week: float = Field(default=6.0, gt=0)


class WorkingTimeBreakdown(BaseModel):
    """
    An hours quantity split on a working-time basis.

    `years` is a total; every other field is the remainder left
    by the next coarser unit.
    """
    model_config = ConfigDict(frozen=True)

    years: int = 0
    months: int = 0
    weeks: int = 0
    days: int = 0
    hours: int = 0


class TimeBreakdown(BaseModel):
    """An hours quantity split on a calendar-time basis."""
    model_config = ConfigDict(frozen=True)

    centuries: int = 0
    years: int = 0
    months: int = 0
    weeks: int = 0
    days: int = 0
    hours: int = 0
    minutes: int = 0
    seconds: int = 0


class WorkingTime(BaseModel):
    """Formatted working time: display text plus the rounded total hours."""
    model_config = ConfigDict(frozen=True)

    text: str
    total_hours: int = Field(default=0, ge=0)
