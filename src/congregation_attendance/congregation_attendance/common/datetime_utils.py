from __future__ import annotations

import calendar
from datetime import date, datetime

from ..core.constants import ISO_DATE_FORMAT, YEAR_MONTH_FORMAT
from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime((value or "").strip(), ISO_DATE_FORMAT).date()
    except ValueError:
        raise ValidationError(f"Invalid date (YYYY-MM-DD): {value!r}")


def parse_year_month(value: str) -> tuple[int, int]:
    """Parse a YYYY-MM period key into (year, month)."""
    try:
        parsed = datetime.strptime((value or "").strip(), YEAR_MONTH_FORMAT)
    except ValueError:
        raise ValidationError(f"Invalid period (YYYY-MM): {value!r}")
    return parsed.year, parsed.month


def normalize_year_month(value: str) -> str:
    year, month = parse_year_month(value)
    return f"{year:04d}-{month:02d}"


def format_iso_date(value: date) -> str:
    return value.strftime(ISO_DATE_FORMAT)


def year_month_of(value: date) -> str:
    return value.strftime(YEAR_MONTH_FORMAT)


def shift_month(year_month: str, delta: int) -> str:
    """Move a period key ``delta`` months forward (negative goes back)."""
    year, month = parse_year_month(year_month)
    index = year * 12 + (month - 1) + int(delta)
    return f"{index // 12:04d}-{index % 12 + 1:02d}"


def month_bounds(year_month: str) -> tuple[date, date]:
    """First and last day of a YYYY-MM period."""
    year, month = parse_year_month(year_month)
    _, num_days = calendar.monthrange(year, month)
    return date(year, month, 1), date(year, month, num_days)


def sunday_first_weekday(value: date) -> int:
    """Weekday index with 0 = Sunday, matching the unit schedule convention."""
    return value.isoweekday() % 7


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()
