"""Entry validation package."""

from src.validation.validator import (
    IncomeValidator,
    SavingValidator,
    get_user_friendly_summary,
)

__all__ = ["IncomeValidator", "SavingValidator", "get_user_friendly_summary"]
