"""
Saving and Report Models

A saving is the record of a decision NOT to spend an amount. It carries
the working-time equivalent computed at the moment it was recorded, so
later changes to the income list never rewrite history.

DESIGN DECISION: Savings are immutable. The only lifecycle operations
are creation and (remote side) deletion.
"""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.models.income import generate_id
from src.models.time import WorkingTime


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Saving(BaseModel):
    """An amount the user chose not to spend."""
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    id: str = Field(
        default_factory=generate_id,
        min_length=1,
        description="Opaque identifier"
    )
    amount: float = Field(
        ...,
        gt=0,
        description="Amount not spent (Toman)"
    )
    hours: float = Field(
        ...,
        ge=0,
        description="Working hours equivalent at recording time"
    )
    month: str = Field(
        ...,
        min_length=1,
        description="Persian 'Month Year' label, e.g. 'مهر ۱۴۰۴' (grouping key only)"
    )
    created_at: datetime = Field(
        default_factory=_utcnow,
        description="When the saving was recorded (UTC)"
    )

    @field_validator('created_at')
    @classmethod
    def assume_utc(cls, v: datetime) -> datetime:
        """Timestamps without an offset are taken to be UTC."""
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v

    def to_sheets_row(self) -> list:
        """
        Convert to a row suitable for Google Sheets storage.

        Returns columns in order:
        [id, amount, hours, month, created_at]
        """
        return [
            self.id,
            str(self.amount),
            str(self.hours),
            self.month,
            self.created_at.isoformat(),
        ]


class MonthlySummary(BaseModel):
    """Savings aggregated under one month label."""

    month: str
    total_amount: float = 0.0
    total_hours: float = 0.0
    count: int = Field(default=0, ge=0)


class SavingsTotals(BaseModel):
    """Savings aggregated over all months."""

    total_amount: float = 0.0
    total_hours: float = 0.0
    count: int = Field(default=0, ge=0)


class CostEvaluation(BaseModel):
    """A prospective cost expressed in working time."""
    model_config = ConfigDict(frozen=True)

    amount: float
    hourly_rate: float = Field(ge=0)
    hours_needed: float = Field(ge=0)
    working_time: WorkingTime
