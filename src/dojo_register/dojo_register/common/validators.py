from __future__ import annotations

from datetime import date
from typing import Any, Optional

from ..core.enums import ClassCategory
from ..core.exceptions import ValidationError
from .datetime_utils import parse_iso_date


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_text(value: Any, field_name: str) -> str:
    """Non-blank string, returned as given (passwords keep their exact characters)."""
    if value is None or value == "":
        raise ValidationError(f"{field_name} is required")
    if not isinstance(value, str):
        raise ValidationError(f"{field_name} must be a string")
    if not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value


def require_min_length(value: Optional[str], field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def require_int(value: Any, field_name: str) -> int:
    if value is None or value == "":
        raise ValidationError(f"{field_name} is required")
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be an integer")
    if isinstance(value, float) and not value.is_integer():
        raise ValidationError(f"{field_name} must be an integer")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an integer")


def require_positive_int(value: Any, field_name: str) -> int:
    n = require_int(value, field_name)
    if n <= 0:
        raise ValidationError(f"{field_name} must be a positive integer")
    return n


def parse_category(value: Optional[str]) -> ClassCategory:
    if not value:
        raise ValidationError("Class category is required")
    try:
        return ClassCategory(value)
    except ValueError:
        raise ValidationError("Invalid class category")


def parse_optional_date(value: Any, field_name: str) -> Optional[date]:
    if value is None or value == "":
        return None
    if isinstance(value, date):
        return value
    try:
        return parse_iso_date(str(value))
    except ValueError:
        raise ValidationError(f"{field_name} must be a date (YYYY-MM-DD)")


def parse_month_year(month: Any, year: Any, *, required: bool = False) -> Optional[tuple[int, int]]:
    """Validate a month/year pair.

    Both or neither must be given; ``required`` rejects neither.
    """

    has_month = month not in (None, "")
    has_year = year not in (None, "")
    if not has_month and not has_year:
        if required:
            raise ValidationError("Month and year are required")
        return None
    if has_month != has_year:
        raise ValidationError("Month and year must be given together")

    m = require_int(month, "Month")
    y = require_int(year, "Year")
    if not 1 <= m <= 12:
        raise ValidationError("Month must be between 1 and 12")
    if not 1900 <= y <= 9999:
        raise ValidationError("Year is out of range")
    return m, y
