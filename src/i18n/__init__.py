"""Locale helpers (Persian digits, currency, Jalali month labels)."""

from src.i18n.persian import (
    CURRENCY_LABEL,
    PERSIAN_MONTHS,
    MonthOption,
    format_currency,
    format_month_value,
    format_number,
    gregorian_to_jalali,
    months_for_selection,
    parse_persian_number,
    persian_month_label,
    to_english_digits,
    to_persian_digits,
)

__all__ = [
    "CURRENCY_LABEL",
    "PERSIAN_MONTHS",
    "MonthOption",
    "format_currency",
    "format_month_value",
    "format_number",
    "gregorian_to_jalali",
    "months_for_selection",
    "parse_persian_number",
    "persian_month_label",
    "to_english_digits",
    "to_persian_digits",
]
