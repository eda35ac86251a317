"""
Income Models

An income is a user-declared earning definition. Whatever its shape
(per hour, per day, per month, per project, per custom unit), it is
normalised through a derived `hours` value: the number of working hours
that `amount` pays for. The implied hourly rate is `amount / hours`.

DESIGN DECISION: Incomes are a tagged union (discriminated on `type`),
not one record with a pile of optional fields. Every consumer dispatches
on the concrete class, so a new variant cannot slip through unnoticed.

DESIGN DECISION: Non-positive schedule inputs are replaced by defaults
inside the model. Rejecting bad input is the job of the entry validator;
once a record exists, `hours > 0` always holds.
"""

import secrets
import time
from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    computed_field,
    field_validator,
)


DEFAULT_HOURS_PER_DAY = 8.0
DEFAULT_DAYS_PER_WEEK = 6.0
DEFAULT_DAYS_PER_MONTH = 26.0
DEFAULT_HOURS_PER_UNIT = 1.0
DEFAULT_CUSTOM_TITLE = "واحد سفارشی"

_ID_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"


def generate_id() -> str:
    """
    Generate an opaque record identifier.

    Format: "<epoch milliseconds>-<9 random base36 characters>".
    """
    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(9))
    return f"{int(time.time() * 1000)}-{suffix}"


def _positive_or(value: Optional[float], default: float) -> float:
    # `not value > 0` also catches NaN
    if value is None or not value > 0:
        return default
    return value


# =============================================================================
# ENUMS
# =============================================================================

class IncomeType(str, Enum):
    """Supported ways of declaring an income."""
    HOURLY = "hourly"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    PROJECT = "project"
    CUSTOM = "custom"


# =============================================================================
# INCOME VARIANTS
# =============================================================================

class BaseIncome(BaseModel):
    """Fields shared by every income variant."""
    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    id: str = Field(
        default_factory=generate_id,
        min_length=1,
        description="Caller-generated identifier, unique within the income list"
    )
    amount: float = Field(
        ...,
        description="Amount earned for `hours` of work (Toman)"
    )


class HourlyIncome(BaseIncome):
    """amount = hourly rate."""
    type: Literal["hourly"] = "hourly"

    @computed_field
    @property
    def hours(self) -> float:
        return 1.0


class DailyIncome(BaseIncome):
    """amount = income for one working day."""
    type: Literal["daily"] = "daily"
    hours_per_day: float = DEFAULT_HOURS_PER_DAY

    @field_validator('hours_per_day')
    @classmethod
    def default_hours_per_day(cls, v: float) -> float:
        return _positive_or(v, DEFAULT_HOURS_PER_DAY)

    @computed_field
    @property
    def hours(self) -> float:
        return self.hours_per_day


class WeeklyIncome(BaseIncome):
    """amount = income for one working week."""
    type: Literal["weekly"] = "weekly"
    days_per_week: float = DEFAULT_DAYS_PER_WEEK
    hours_per_day: float = DEFAULT_HOURS_PER_DAY

    @field_validator('days_per_week')
    @classmethod
    def default_days_per_week(cls, v: float) -> float:
        return _positive_or(v, DEFAULT_DAYS_PER_WEEK)

    @field_validator('hours_per_day')
    @classmethod
    def default_hours_per_day(cls, v: float) -> float:
        return _positive_or(v, DEFAULT_HOURS_PER_DAY)

    @computed_field
    @property
    def hours(self) -> float:
        return self.days_per_week * self.hours_per_day


class MonthlyIncome(BaseIncome):
    """amount = income for one working month."""
    type: Literal["monthly"] = "monthly"
    days_per_month: float = DEFAULT_DAYS_PER_MONTH
    hours_per_day: float = DEFAULT_HOURS_PER_DAY

    @field_validator('days_per_month')
    @classmethod
    def default_days_per_month(cls, v: float) -> float:
        return _positive_or(v, DEFAULT_DAYS_PER_MONTH)

    @field_validator('hours_per_day')
    @classmethod
    def default_hours_per_day(cls, v: float) -> float:
        return _positive_or(v, DEFAULT_HOURS_PER_DAY)

    @computed_field
    @property
    def hours(self) -> float:
        return self.days_per_month * self.hours_per_day


class ProjectIncome(BaseIncome):
    """amount = average monthly income from projects."""
    type: Literal["project"] = "project"
    avg_days: float = DEFAULT_DAYS_PER_MONTH
    hours_per_day: float = DEFAULT_HOURS_PER_DAY

    @field_validator('avg_days')
    @classmethod
    def default_avg_days(cls, v: float) -> float:
        return _positive_or(v, DEFAULT_DAYS_PER_MONTH)

    @field_validator('hours_per_day')
    @classmethod
    def default_hours_per_day(cls, v: float) -> float:
        return _positive_or(v, DEFAULT_HOURS_PER_DAY)

    @computed_field
    @property
    def hours(self) -> float:
        return self.avg_days * self.hours_per_day


class CustomIncome(BaseIncome):
    """
    amount = income per custom unit (e.g. one edited clip).

    hours_per_unit is the average time needed to deliver one unit.
    """
    type: Literal["custom"] = "custom"
    title: str = Field(
        default=DEFAULT_CUSTOM_TITLE,
        max_length=100,
        description="Display name of the unit"
    )
    hours_per_unit: float = DEFAULT_HOURS_PER_UNIT

    @field_validator('title')
    @classmethod
    def default_title(cls, v: str) -> str:
        return v or DEFAULT_CUSTOM_TITLE

    @field_validator('hours_per_unit')
    @classmethod
    def default_hours_per_unit(cls, v: float) -> float:
        return _positive_or(v, DEFAULT_HOURS_PER_UNIT)

    @computed_field
    @property
    def hours(self) -> float:
        return self.hours_per_unit


Income = Annotated[
    Union[
        HourlyIncome,
        DailyIncome,
        WeeklyIncome,
        MonthlyIncome,
        ProjectIncome,
        CustomIncome,
    ],
    Field(discriminator="type"),
]

IncomeListAdapter = TypeAdapter(list[Income])


def parse_incomes(data: list[dict]) -> list:
    """Parse serialized incomes (e.g. from local state) into variant models."""
    return IncomeListAdapter.validate_python(data)


def dump_incomes(incomes: list) -> list[dict]:
    """Serialize incomes to JSON-compatible dicts (derived hours included)."""
    return IncomeListAdapter.dump_python(incomes, mode="json")


# =============================================================================
# ENTRY FORM
# =============================================================================

class IncomeFormData(BaseModel):
    """
    Raw values collected when a user declares or edits an income.

    `hours` is the generic "hours" box of the form: hours per day for a
    daily income, hours per unit for a custom income.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    type: IncomeType
    amount: float = 0.0
    hours: Optional[float] = None
    days_per_week: Optional[float] = None
    days_per_month: Optional[float] = None
    avg_days: Optional[float] = None
    hours_per_day: Optional[float] = None
    title: Optional[str] = None


def build_income(form: IncomeFormData, income_id: Optional[str] = None):
    """
    Turn entry form data into the matching income variant.

    Missing or non-positive schedule values fall back to the defaults
    (8 hours/day, 6 days/week, 26 days/month, 1 hour/unit).
    """
    common = {"id": income_id or generate_id(), "amount": form.amount}

    if form.type == IncomeType.HOURLY:
        return HourlyIncome(**common)
    elif form.type == IncomeType.DAILY:
        return DailyIncome(
            **common,
            hours_per_day=_positive_or(
                form.hours if form.hours is not None else form.hours_per_day,
                DEFAULT_HOURS_PER_DAY,
            ),
        )
    elif form.type == IncomeType.WEEKLY:
        return WeeklyIncome(
            **common,
            days_per_week=_positive_or(form.days_per_week, DEFAULT_DAYS_PER_WEEK),
            hours_per_day=_positive_or(form.hours_per_day, DEFAULT_HOURS_PER_DAY),
        )
    elif form.type == IncomeType.MONTHLY:
        return MonthlyIncome(
            **common,
            days_per_month=_positive_or(form.days_per_month, DEFAULT_DAYS_PER_MONTH),
            hours_per_day=_positive_or(form.hours_per_day, DEFAULT_HOURS_PER_DAY),
        )
    elif form.type == IncomeType.PROJECT:
        return ProjectIncome(
            **common,
            avg_days=_positive_or(form.avg_days, DEFAULT_DAYS_PER_MONTH),
            hours_per_day=_positive_or(form.hours_per_day, DEFAULT_HOURS_PER_DAY),
        )
    elif form.type == IncomeType.CUSTOM:
        return CustomIncome(
            **common,
            title=form.title or DEFAULT_CUSTOM_TITLE,
            hours_per_unit=_positive_or(form.hours, DEFAULT_HOURS_PER_UNIT),
        )
    raise TypeError(f"Unsupported income type: {form.type!r}")


# =============================================================================
# VALIDATION MODELS
# =============================================================================

class ValidationIssue(BaseModel):
    """A single validation issue found on entry."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'out_of_range')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        ...,
        pattern="^(error|warning|info)$",
        description="Issue severity"
    )


class ValidationResult(BaseModel):
    """
    Result of the two-stage entry validation.

    Stage 1: Schema validation (required values present and positive)
    Stage 2: Semantic validation (values physically plausible)
    """

    schema_valid: bool
    semantic_valid: bool
    is_valid: bool = Field(
        ...,
        description="Overall validation result"
    )
    issues: list[ValidationIssue] = Field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        """Check if there are any error-level issues."""
        return any(issue.severity == "error" for issue in self.issues)

    @property
    def error_count(self) -> int:
        """Count error-level issues."""
        return sum(1 for issue in self.issues if issue.severity == "error")
