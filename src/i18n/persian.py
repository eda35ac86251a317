"""
Persian Locale Helpers

Digit script conversion, number and currency formatting, and the
Gregorian -> Jalali conversion used to build month labels.

Month labels ("مهر ۱۴۰۴") are display strings. They are used as
grouping keys for savings reports and are never parsed back into dates.
"""

import math
import re
from datetime import date
from typing import Optional

import jdatetime
from pydantic import BaseModel

from src.numeric import round_half_up


PERSIAN_MONTHS = [
    "فروردین", "اردیبهشت", "خرداد", "تیر", "مرداد", "شهریور",
    "مهر", "آبان", "آذر", "دی", "بهمن", "اسفند",
]

PERSIAN_DIGITS = "۰۱۲۳۴۵۶۷۸۹"
CURRENCY_LABEL = "تومان"

_TO_PERSIAN = str.maketrans("0123456789", PERSIAN_DIGITS)
_TO_ENGLISH = str.maketrans(PERSIAN_DIGITS, "0123456789")


_LEADING_NUMBER = re.compile(r"^\s*([-+]?(?:\d+\.?\d*|\.\d+))")


class MonthOption(BaseModel):
    """A selectable report month: machine value plus display label."""

    value: str  # "1404-07"
    label: str  # "مهر ۱۴۰۴"


def to_persian_digits(value) -> str:
    """Render every ASCII digit of `value` in Persian script."""
    return str(value).translate(_TO_PERSIAN)


def to_english_digits(text: str) -> str:
    """Replace Persian digits with ASCII digits; everything else is kept."""
    return text.translate(_TO_ENGLISH)


def format_number(num: float) -> str:
    """
    Format a number with thousands separators and Persian digits.

    At most three fraction digits are kept, trailing zeros dropped:
    1234567 -> "۱,۲۳۴,۵۶۷", 1234.5 -> "۱,۲۳۴.۵".
    """
    if not math.isfinite(num):
        return to_persian_digits(num)
    if float(num).is_integer():
        text = f"{int(num):,}"
    else:
        text = f"{num:,.3f}".rstrip("0").rstrip(".")
    return to_persian_digits(text)


def format_currency(amount: float) -> str:
    """Format a Toman amount, rounded to a whole number."""
    if not math.isfinite(amount):
        return f"{format_number(amount)} {CURRENCY_LABEL}"
    return f"{format_number(round_half_up(amount))} {CURRENCY_LABEL}"


def parse_persian_number(text: str) -> float:
    """
    Parse user input that may contain Persian digits and separators.

    Like a lenient form field: the leading numeric part is used,
    anything unparseable yields 0.0.
    """
    if not text:
        return 0.0
    cleaned = to_english_digits(text).replace(",", "").replace("٬", "")
    match = _LEADING_NUMBER.match(cleaned)
    if not match:
        return 0.0
    value = float(match.group(1))
    return value if math.isfinite(value) else 0.0


def _to_jalali(day: Optional[date]) -> jdatetime.date:
    return jdatetime.date.fromgregorian(date=day or date.today())


def gregorian_to_jalali(gy: int, gm: int, gd: int) -> tuple[int, int, int]:
    """
    Convert a Gregorian date to a Jalali (Solar Hijri) date.

    Returns (year, month, day), month and day 1-based.
    """
    jalali = _to_jalali(date(gy, gm, gd))
    return jalali.year, jalali.month, jalali.day


def persian_month_label(day: Optional[date] = None) -> str:
    """Month label for `day` (today by default), e.g. "مهر ۱۴۰۴"."""
    jalali = _to_jalali(day)
    return f"{PERSIAN_MONTHS[jalali.month - 1]} {to_persian_digits(jalali.year)}"


def months_for_selection(
    day: Optional[date] = None,
    count: int = 12,
) -> list[MonthOption]:
    """
    The current Jalali month and the `count - 1` months before it,
    newest first.
    """
    jalali = _to_jalali(day)

    options = []
    for offset in range(count):
        jy, month_index = divmod(jalali.year * 12 + jalali.month - 1 - offset, 12)
        jm = month_index + 1
        options.append(MonthOption(
            value=f"{jy}-{jm:02d}",
            label=f"{PERSIAN_MONTHS[jm - 1]} {to_persian_digits(jy)}",
        ))
    return options


def format_month_value(value: str) -> str:
    """Turn a "1404-07" month value into its label; "" when malformed."""
    if not value:
        return ""
    try:
        year_text, month_text = value.split("-")
        year = int(year_text)
        month = int(month_text)
    except ValueError:
        return ""
    if not 1 <= month <= 12:
        return ""
    return f"{PERSIAN_MONTHS[month - 1]} {to_persian_digits(year)}"
