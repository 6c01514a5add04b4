from __future__ import annotations

from datetime import date, datetime, time
from enum import Enum
from typing import Any, Optional, Type, TypeVar

from ..core.exceptions import ValidationError

E = TypeVar("E", bound=Enum)


def require_non_empty(value: Any, field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_min_length(value: str, field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def parse_enum(enum_cls: Type[E], value: Any, field_name: str, *, default: Optional[E] = None) -> E:
    if value is None or value == "":
        if default is not None:
            return default
        raise ValidationError(f"{field_name} is required")
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise ValidationError(f"{field_name} must be one of: {allowed}")


def parse_filter_enum(enum_cls: Type[E], value: Any, field_name: str) -> Optional[E]:
    """Query-string filters treat missing and 'all' as no filter."""
    if value is None or value == "" or value == "all":
        return None
    return parse_enum(enum_cls, value, field_name)


def parse_date(value: Any, field_name: str) -> date:
    if isinstance(value, date) and not isinstance(value, datetime):
        return value
    try:
        return datetime.strptime(str(value or "").strip(), "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(f"{field_name} must be a date (YYYY-MM-DD)")


def parse_optional_date(value: Any, field_name: str) -> Optional[date]:
    if value is None or value == "":
        return None
    return parse_date(value, field_name)


def parse_time(value: Any, field_name: str) -> time:
    v = str(value or "").strip()
    for fmt in ("%H:%M:%S", "%H:%M"):
        try:
            return datetime.strptime(v, fmt).time()
        except ValueError:
            continue
    raise ValidationError(f"{field_name} must be a time (HH:MM[:SS])")


def parse_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be an integer")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an integer")


def parse_optional_int(value: Any, field_name: str) -> Optional[int]:
    if value is None or value == "":
        return None
    return parse_int(value, field_name)


def parse_float(value: Any, field_name: str) -> float:
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a number")
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number")


def parse_optional_float(value: Any, field_name: str) -> Optional[float]:
    if value is None or value == "":
        return None
    return parse_float(value, field_name)
