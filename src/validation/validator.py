"""
Two-Stage Entry Validation

DESIGN DECISION: Validation happens where the user types, before a
record exists. The income models themselves never reject values; they
fall back to defaults. So anything the user should be told about must
be caught here.

STAGE 1 - SCHEMA VALIDATION:
- Amount present and positive
- Inputs required by the chosen income type present and positive

STAGE 2 - SEMANTIC VALIDATION:
- Values that cannot describe a real schedule
  (more than 24 hours a day, more than 7 days a week, ...)
- Suspiciously large values

IMPORTANT: Validation NEVER silently fixes issues.
It reports them so the form can show them.
"""

from typing import Optional

from src.config import get_settings
from src.models.income import (
    IncomeFormData,
    IncomeType,
    ValidationIssue,
    ValidationResult,
)
from src.numeric import is_positive


MAX_HOURS_PER_DAY = 24
MAX_DAYS_PER_WEEK = 7
MAX_DAYS_PER_MONTH = 31
MAX_HOURS_PER_UNIT = 24 * 31

# Persian field labels used in messages
FIELD_LABELS = {
    "amount": "مبلغ",
    "hours": "ساعت",
    "hours_per_day": "ساعت کاری در روز",
    "days_per_week": "روز کاری در هفته",
    "days_per_month": "روز کاری در ماه",
    "avg_days": "میانگین روز کاری",
}

# Inputs each income type requires (form field names)
REQUIRED_FIELDS = {
    IncomeType.HOURLY: [],
    IncomeType.DAILY: ["hours"],
    IncomeType.WEEKLY: ["days_per_week", "hours_per_day"],
    IncomeType.MONTHLY: ["days_per_month", "hours_per_day"],
    IncomeType.PROJECT: ["avg_days", "hours_per_day"],
    IncomeType.CUSTOM: ["hours"],
}


def _error(field: str, issue_type: str, message: str) -> ValidationIssue:
    return ValidationIssue(
        field=field,
        issue_type=issue_type,
        message=message,
        severity="error",
    )


def _warning(field: str, issue_type: str, message: str) -> ValidationIssue:
    return ValidationIssue(
        field=field,
        issue_type=issue_type,
        message=message,
        severity="warning",
    )


class IncomeValidator:
    """
    Validates income entry forms through a two-stage pipeline.

    Stage 2 is skipped when stage 1 already found errors.
    """

    def __init__(self, max_amount: Optional[float] = None):
        if max_amount is None:
            max_amount = get_settings().app.max_income_amount
        self._max_amount = max_amount

    def _validate_schema(
        self,
        form: IncomeFormData,
    ) -> tuple[bool, list[ValidationIssue]]:
        """
        Stage 1: required inputs present and positive.

        Returns: (is_valid, list_of_issues)
        """
        issues = []

        if not is_positive(form.amount):
            issues.append(_error(
                "amount",
                "invalid_value",
                "لطفاً مبلغ معتبر و بیشتر از صفر وارد کنید",
            ))

        for field in REQUIRED_FIELDS[form.type]:
            value = getattr(form, field)
            if value is None:
                issues.append(_error(
                    field,
                    "missing",
                    f"وارد کردن «{FIELD_LABELS[field]}» الزامی است",
                ))
            elif not is_positive(value):
                issues.append(_error(
                    field,
                    "invalid_value",
                    f"«{FIELD_LABELS[field]}» باید بیشتر از صفر باشد",
                ))

        is_valid = not any(issue.severity == "error" for issue in issues)
        return is_valid, issues

    def _validate_semantic(
        self,
        form: IncomeFormData,
    ) -> tuple[bool, list[ValidationIssue]]:
        """
        Stage 2: values must describe a possible schedule.

        Returns: (is_valid, list_of_issues)
        """
        issues = []

        hours_per_day = form.hours_per_day
        if form.type == IncomeType.DAILY:
            hours_per_day = form.hours
        if hours_per_day is not None and hours_per_day > MAX_HOURS_PER_DAY:
            issues.append(_error(
                "hours" if form.type == IncomeType.DAILY else "hours_per_day",
                "out_of_range",
                f"یک روز بیشتر از {MAX_HOURS_PER_DAY} ساعت ندارد",
            ))

        if (
            form.type == IncomeType.WEEKLY
            and form.days_per_week is not None
            and form.days_per_week > MAX_DAYS_PER_WEEK
        ):
            issues.append(_error(
                "days_per_week",
                "out_of_range",
                f"یک هفته بیشتر از {MAX_DAYS_PER_WEEK} روز ندارد",
            ))

        if form.type in (IncomeType.MONTHLY, IncomeType.PROJECT):
            days = form.days_per_month if form.type == IncomeType.MONTHLY else form.avg_days
            field = "days_per_month" if form.type == IncomeType.MONTHLY else "avg_days"
            if days is not None and days > MAX_DAYS_PER_MONTH:
                issues.append(_error(
                    field,
                    "out_of_range",
                    f"یک ماه بیشتر از {MAX_DAYS_PER_MONTH} روز ندارد",
                ))

        if (
            form.type == IncomeType.CUSTOM
            and form.hours is not None
            and form.hours > MAX_HOURS_PER_UNIT
        ):
            issues.append(_warning(
                "hours",
                "suspicious_value",
                "زمان انجام هر واحد بیشتر از یک ماه است؛ لطفاً بررسی کنید",
            ))

        if form.amount > self._max_amount:
            issues.append(_warning(
                "amount",
                "suspicious_value",
                "مبلغ وارد شده بسیار بزرگ است؛ لطفاً بررسی کنید",
            ))

        is_valid = not any(issue.severity == "error" for issue in issues)
        return is_valid, issues

    def validate(self, form: IncomeFormData) -> ValidationResult:
        """Run both stages and combine the result."""
        schema_valid, issues = self._validate_schema(form)

        semantic_valid = False
        if schema_valid:
            semantic_valid, semantic_issues = self._validate_semantic(form)
            issues.extend(semantic_issues)

        return ValidationResult(
            schema_valid=schema_valid,
            semantic_valid=semantic_valid,
            is_valid=schema_valid and semantic_valid,
            issues=issues,
        )


class SavingValidator:
    """Checks that an amount can be turned into a saving."""

    def validate(self, amount: float, hourly_rate: float) -> ValidationResult:
        issues = []

        if not is_positive(amount):
            issues.append(_error(
                "amount",
                "invalid_value",
                "لطفاً مبلغ معتبر و بیشتر از صفر وارد کنید",
            ))
        if not is_positive(hourly_rate):
            issues.append(_error(
                "hourly_rate",
                "missing",
                "ابتدا حداقل یک درآمد ثبت کنید",
            ))

        is_valid = not issues
        return ValidationResult(
            schema_valid=is_valid,
            semantic_valid=is_valid,
            is_valid=is_valid,
            issues=issues,
        )


def get_user_friendly_summary(result: ValidationResult) -> str:
    """
    Generate a Persian summary of a validation result for the form.
    """
    if result.is_valid and not result.issues:
        return "✅ اطلاعات معتبر است"

    lines = []
    if result.has_errors:
        lines.append(f"❌ {result.error_count} مورد باید اصلاح شود:")
    else:
        lines.append("⚠️ لطفاً موارد زیر را بررسی کنید:")

    for issue in result.issues:
        marker = "•" if issue.severity == "error" else "◦"
        lines.append(f"{marker} {issue.message}")

    return "\n".join(lines)
