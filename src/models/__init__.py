"""
Data Models Package

This package contains all Pydantic models used by the calculator.
All data flowing through the system must conform to these schemas.
"""

from src.models.income import (
    BaseIncome,
    CustomIncome,
    DailyIncome,
    HourlyIncome,
    Income,
    IncomeFormData,
    IncomeType,
    MonthlyIncome,
    ProjectIncome,
    ValidationIssue,
    ValidationResult,
    WeeklyIncome,
    build_income,
    dump_incomes,
    generate_id,
    parse_incomes,
)
from src.models.saving import (
    CostEvaluation,
    MonthlySummary,
    Saving,
    SavingsTotals,
)
from src.models.time import (
    TimeBreakdown,
    WorkingTime,
    WorkingTimeBreakdown,
    WorkSchedule,
)

__all__ = [
    # Income models
    "BaseIncome",
    "CustomIncome",
    "DailyIncome",
    "HourlyIncome",
    "Income",
    "IncomeFormData",
    "IncomeType",
    "MonthlyIncome",
    "ProjectIncome",
    "ValidationIssue",
    "ValidationResult",
    "WeeklyIncome",
    "build_income",
    "dump_incomes",
    "generate_id",
    "parse_incomes",
    # Saving models
    "CostEvaluation",
    "MonthlySummary",
    "Saving",
    "SavingsTotals",
    # Time models
    "TimeBreakdown",
    "WorkingTime",
    "WorkingTimeBreakdown",
    "WorkSchedule",
]
