"""Service calendar: which days of a month a unit holds services."""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date
from typing import Iterable

from ..common.datetime_utils import parse_year_month, sunday_first_weekday, year_month_of
from ..common.validators import require_weekdays
from ..core.exceptions import NotFoundError
from ..units.model import Unit
from ..units.repository import UnitRepository


def valid_service_dates(unit_id: str, year_month: str, schedule_weekdays: Iterable[int]) -> list[date]:
    """All days of ``year_month`` whose weekday is in the schedule, ascending.

    ``unit_id`` only identifies the caller's unit; the result depends solely on
    the month and the weekday set.
    """

    year, month = parse_year_month(year_month)
    weekdays = require_weekdays(schedule_weekdays)
    if not weekdays:
        return []

    _, num_days = calendar.monthrange(year, month)
    out: list[date] = []
    for day in range(1, num_days + 1):
        d = date(year, month, day)
        if sunday_first_weekday(d) in weekdays:
            out.append(d)
    return out


def is_service_date(value: date, schedule_weekdays: Iterable[int]) -> bool:
    return sunday_first_weekday(value) in require_weekdays(schedule_weekdays)


def month_entry_date(year_month: str, schedule_weekdays: Iterable[int]) -> date:
    """Date to land on when navigating into a month: its first service, else day 1."""
    dates = valid_service_dates("", year_month, schedule_weekdays)
    if dates:
        return dates[0]
    year, month = parse_year_month(year_month)
    return date(year, month, 1)


def resolve_selected_date(selected: date, schedule_weekdays: Iterable[int]) -> date:
    """Snap a selected date that is not a service day to its month's first service day."""
    weekdays = require_weekdays(schedule_weekdays)
    dates = valid_service_dates("", year_month_of(selected), weekdays)
    if dates and not is_service_date(selected, weekdays):
        return dates[0]
    return selected


@dataclass(frozen=True)
class MonthCalendar:
    unit_id: str
    period: str
    dates: list[date]


class ServiceCalendarService:
    """Resolves units and builds their monthly service calendars."""

    def __init__(self, units: UnitRepository):
        self._units = units

    def get_unit(self, unit_id: str) -> Unit:
        unit = self._units.get_by_id(unit_id)
        if not unit:
            raise NotFoundError(f"Unknown unit: {unit_id}")
        return unit

    def month(self, unit_id: str, period: str) -> MonthCalendar:
        unit = self.get_unit(unit_id)
        return MonthCalendar(
            unit_id=unit.unit_id,
            period=period,
            dates=valid_service_dates(unit.unit_id, period, unit.service_days),
        )
