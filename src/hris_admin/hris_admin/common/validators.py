from __future__ import annotations

from datetime import date
from typing import Optional

from ..core.exceptions import ValidationError
from .datetime_utils import parse_iso_date


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_max_length(value: str, field_name: str, max_len: int) -> str:
    if len(value) > max_len:
        raise ValidationError(f"{field_name} cannot exceed {max_len} characters")
    return value


def require_date(value: Optional[str], field_name: str) -> date:
    value = require_non_empty(value, field_name)
    try:
        return parse_iso_date(value)
    except ValueError:
        raise ValidationError(f"{field_name} must be in YYYY-MM-DD format")


def require_date_range(start: Optional[str], end: Optional[str]) -> tuple[date, date]:
    start_date = require_date(start, "startDate")
    end_date = require_date(end, "endDate")
    if start_date > end_date:
        raise ValidationError("startDate must not be after endDate")
    return start_date, end_date


def parse_int(value, field_name: str, *, default: int, min_value: int = 1, max_value: Optional[int] = None) -> int:
    if value is None or value == "":
        return default
    try:
        n = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an integer")
    if n < min_value:
        raise ValidationError(f"{field_name} must be >= {min_value}")
    if max_value is not None and n > max_value:
        raise ValidationError(f"{field_name} must be <= {max_value}")
    return n


def parse_bool(value) -> Optional[bool]:
    if value is None or value == "":
        return None
    return str(value).strip().lower() in {"1", "true", "yes", "active"}
