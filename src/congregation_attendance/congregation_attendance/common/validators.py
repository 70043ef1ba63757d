from __future__ import annotations

from typing import Iterable

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_non_negative(value: int, field_name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{field_name} must be an integer")
    if value < 0:
        raise ValidationError(f"{field_name} cannot be negative")
    return value


def require_weekdays(values: Iterable[int]) -> frozenset[int]:
    """Validate a weekly schedule (weekday indices 0..6, 0 = Sunday)."""
    days = set()
    for v in values:
        if isinstance(v, bool) or not isinstance(v, int) or not 0 <= v <= 6:
            raise ValidationError(f"Invalid weekday index: {v!r}")
        days.add(v)
    return frozenset(days)


def require_min_length(value: str, field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} must have at least {min_len} characters")
    return value
