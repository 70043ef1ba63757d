from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import Iterable, Optional

from ..attendance.model import AttendanceFilter, AttendanceRecord
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import normalize_year_month, now_local, year_month_of
from ..core.enums import FrequencyCategory
from ..members.model import Member
from ..members.repository import MemberRepository
from ..schedules.service import ServiceCalendarService, valid_service_dates
from ..settings.service import SettingsService
from .categories import CategoryInfo, categorize
from .statistics import AttendanceStats, summarize

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MemberFrequency:
    member: Member
    stats: AttendanceStats
    category: CategoryInfo


@dataclass(frozen=True)
class MonthlyReport:
    unit_id: str
    period: str
    total_services: int
    members: list[MemberFrequency]
    category_counts: dict[FrequencyCategory, int]
    average_percent: float


class FrequencyReportService:
    """Per-member monthly statistics for a unit.

    Nothing here is persisted: every call recomputes from current records and
    settings.
    """

    def __init__(
        self,
        calendar: ServiceCalendarService,
        members: MemberRepository,
        attendance: AttendanceRepository,
        settings: SettingsService,
    ):
        self._calendar = calendar
        self._members = members
        self._attendance = attendance
        self._settings = settings

    def member_frequencies(
        self,
        unit_id: str,
        period: str,
        *,
        schedule_weekdays: Optional[Iterable[int]] = None,
    ) -> tuple[int, list[MemberFrequency]]:
        """Return ``(total_services, rows)`` for the active members of the unit.

        ``schedule_weekdays`` pins the schedule that was in force during the
        period; without it the unit's current schedule is used.
        """

        period = normalize_year_month(period)
        unit = self._calendar.get_unit(unit_id)
        if schedule_weekdays is None:
            schedule_weekdays = unit.service_days
            if period < year_month_of(now_local().date()):
                logger.debug("Period %s for unit %s computed with the current schedule", period, unit_id)

        service_dates = set(valid_service_dates(unit.unit_id, period, schedule_weekdays))
        total_services = len(service_dates)
        settings = self._settings.get()

        # records on days outside the schedule do not count toward the period
        by_member: dict[str, list[AttendanceRecord]] = defaultdict(list)
        for r in self._attendance.list_attendance(AttendanceFilter(unit_id=unit.unit_id, period_prefix=period)):
            if r.service_date in service_dates:
                by_member[r.member_id].append(r)

        rows: list[MemberFrequency] = []
        for m in self._members.list_members(unit.unit_id):
            if not m.active or m.unit_id != unit.unit_id:
                continue
            stats = summarize(by_member.get(m.member_id, []), total_services, settings)
            rows.append(MemberFrequency(member=m, stats=stats, category=categorize(stats.absences, settings.thresholds)))
        return total_services, rows

    def monthly_report(
        self,
        unit_id: str,
        period: str,
        *,
        schedule_weekdays: Optional[Iterable[int]] = None,
    ) -> MonthlyReport:
        period = normalize_year_month(period)
        total_services, rows = self.member_frequencies(unit_id, period, schedule_weekdays=schedule_weekdays)

        counts = {tier: 0 for tier in FrequencyCategory}
        for row in rows:
            counts[row.category.tier] += 1

        rows.sort(key=lambda r: (-r.stats.absences, r.member.name.lower()))
        average = sum(r.stats.percent for r in rows) / len(rows) if rows else 0.0

        return MonthlyReport(
            unit_id=unit_id,
            period=period,
            total_services=total_services,
            members=rows,
            category_counts=counts,
            average_percent=average,
        )
