from datetime import date

import pytest

from congregation_attendance.common.datetime_utils import shift_month
from congregation_attendance.core.exceptions import NotFoundError, ValidationError
from congregation_attendance.schedules.service import (
    ServiceCalendarService,
    is_service_date,
    month_entry_date,
    resolve_selected_date,
    valid_service_dates,
)


def test_sunday_and_wednesday_in_february_2026():
    dates = valid_service_dates("central", "2026-02", {0, 3})

    assert len(dates) == 8
    assert dates == [
        date(2026, 2, 1),
        date(2026, 2, 4),
        date(2026, 2, 8),
        date(2026, 2, 11),
        date(2026, 2, 15),
        date(2026, 2, 18),
        date(2026, 2, 22),
        date(2026, 2, 25),
    ]


def test_dates_stay_in_month_ascending_and_on_schedule():
    schedules = [{0}, {6}, {0, 3}, {1, 2, 3, 4, 5}, set(range(7))]
    for year in (2024, 2025, 2026):
        for month in range(1, 13):
            period = f"{year:04d}-{month:02d}"
            for weekdays in schedules:
                dates = valid_service_dates("u", period, weekdays)
                assert all(d.year == year and d.month == month for d in dates)
                assert all(a < b for a, b in zip(dates, dates[1:]))
                assert all(d.isoweekday() % 7 in weekdays for d in dates)


def test_every_day_schedule_covers_whole_month():
    assert len(valid_service_dates("u", "2024-02", range(7))) == 29
    assert len(valid_service_dates("u", "2025-02", range(7))) == 28
    assert len(valid_service_dates("u", "2026-01", range(7))) == 31


def test_leap_day_is_included():
    # 2024-02-01 is a Thursday, so the 29th is the fifth Thursday.
    assert valid_service_dates("u", "2024-02", {4})[-1] == date(2024, 2, 29)


def test_empty_schedule_gives_no_dates():
    assert valid_service_dates("u", "2026-02", set()) == []


@pytest.mark.parametrize("weekdays", [{7}, {-1}, {"0"}])
def test_invalid_weekday_rejected(weekdays):
    with pytest.raises(ValidationError):
        valid_service_dates("u", "2026-02", weekdays)


@pytest.mark.parametrize("period", ["2026-13", "2026/02", "", "feb"])
def test_invalid_period_rejected(period):
    with pytest.raises(ValidationError):
        valid_service_dates("u", period, {0})


def test_is_service_date():
    assert is_service_date(date(2026, 2, 1), {0})
    assert not is_service_date(date(2026, 2, 2), {0})


def test_month_entry_date_uses_first_service_or_first_day():
    assert month_entry_date("2026-03", {3}) == date(2026, 3, 4)
    assert month_entry_date("2026-03", set()) == date(2026, 3, 1)


def test_resolve_selected_date_snaps_to_first_service_day():
    assert resolve_selected_date(date(2026, 2, 3), {0, 3}) == date(2026, 2, 1)
    assert resolve_selected_date(date(2026, 2, 18), {0, 3}) == date(2026, 2, 18)
    assert resolve_selected_date(date(2026, 2, 3), set()) == date(2026, 2, 3)


def test_shift_month_crosses_year_boundary():
    assert shift_month("2026-01", -1) == "2025-12"
    assert shift_month("2025-12", 1) == "2026-01"
    assert shift_month("2026-02", 0) == "2026-02"


def test_calendar_service_uses_unit_schedule(units_repo):
    svc = ServiceCalendarService(units_repo)

    assert len(svc.month("central", "2026-02").dates) == 8
    assert len(svc.month("north", "2026-02").dates) == 4
    assert svc.month("empty", "2026-02").dates == []


def test_calendar_service_unknown_unit(units_repo):
    with pytest.raises(NotFoundError):
        ServiceCalendarService(units_repo).month("nope", "2026-02")
