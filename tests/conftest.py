from __future__ import annotations

from datetime import date
from typing import Optional

import pytest

from congregation_attendance.attendance.model import AttendanceFilter, AttendanceKey, AttendanceRecord
from congregation_attendance.common.datetime_utils import month_bounds
from congregation_attendance.container import assemble
from congregation_attendance.followups.model import CabinetFollowUp, FollowUpKey
from congregation_attendance.members.model import Member
from congregation_attendance.settings.model import Settings
from congregation_attendance.units.model import Nucleus, Unit


class InMemoryUnits:
    def __init__(self, units: list[Unit], nuclei: Optional[list[Nucleus]] = None):
        self._units = {u.unit_id: u for u in units}
        self._nuclei = list(nuclei or [])

    def list_units(self):
        return list(self._units.values())

    def get_by_id(self, unit_id: str) -> Optional[Unit]:
        return self._units.get(unit_id)

    def list_nuclei(self):
        return list(self._nuclei)


class InMemoryMembers:
    def __init__(self, members: list[Member]):
        self._by_id = {m.member_id: m for m in members}

    def list_members(self, unit_id: Optional[str] = None):
        items = [m for m in self._by_id.values() if unit_id is None or m.unit_id == unit_id]
        return sorted(items, key=lambda m: m.name)

    def get_by_id(self, member_id: str) -> Optional[Member]:
        return self._by_id.get(member_id)

    def upsert_member(self, member: Member) -> None:
        self._by_id[member.member_id] = member

    def insert_many(self, members) -> int:
        for m in members:
            self._by_id[m.member_id] = m
        return len(members)


class InMemoryAttendance:
    def __init__(self):
        self.records: list[AttendanceRecord] = []
        self.replace_calls = 0

    def list_attendance(self, flt: AttendanceFilter):
        out = []
        for r in self.records:
            if flt.unit_id is not None and r.unit_id != flt.unit_id:
                continue
            if flt.service_date is not None and r.service_date != flt.service_date:
                continue
            if flt.member_id is not None and r.member_id != flt.member_id:
                continue
            if flt.period_prefix is not None:
                start, end = month_bounds(flt.period_prefix)
                if not start <= r.service_date <= end:
                    continue
            out.append(r)
        return out

    def replace_attendance(self, keys, new_records) -> None:
        self.replace_calls += 1
        drop = set(keys)
        self.records = [r for r in self.records if AttendanceKey(r.member_id, r.service_date) not in drop]
        self.records.extend(new_records)

    def live_for(self, member_id: str, service_date: date) -> list[AttendanceRecord]:
        return [r for r in self.records if r.member_id == member_id and r.service_date == service_date]


class InMemoryFollowUps:
    def __init__(self):
        self.records: dict[FollowUpKey, CabinetFollowUp] = {}

    def list_follow_ups(self, *, member_id=None, period=None):
        return [
            r
            for r in self.records.values()
            if (member_id is None or r.member_id == member_id) and (period is None or r.period == period)
        ]

    def replace_follow_up(self, key: FollowUpKey, record: CabinetFollowUp) -> None:
        self.records[key] = record


class InMemorySettings:
    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings
        self.saves = 0

    def get_settings(self) -> Optional[Settings]:
        return self.settings

    def set_settings(self, settings: Settings) -> None:
        self.saves += 1
        self.settings = settings


# February 2026 starts on a Sunday: 4 Sundays and 4 Wednesdays.
CENTRAL = Unit(unit_id="central", name="Central", service_days=(0, 3), pastor_phone="+55 (11) 99999-0000")
NORTH = Unit(unit_id="north", name="North", service_days=(0,), pastor_phone="5511888880000")
EMPTY = Unit(unit_id="empty", name="No services", service_days=())


@pytest.fixture
def units_repo():
    return InMemoryUnits([CENTRAL, NORTH, EMPTY], [Nucleus("youth", "Youth", "purple"), Nucleus("women", "Women", "pink")])


@pytest.fixture
def members_repo():
    return InMemoryMembers(
        [
            Member(member_id="m1", name="Ana", unit_id="central", nucleus_id="women"),
            Member(member_id="m2", name="Bruno", unit_id="central", nucleus_id="youth"),
            Member(member_id="m3", name="Carla", unit_id="central", nucleus_id="women"),
            Member(member_id="m4", name="Davi", unit_id="central", active=False),
            Member(member_id="m5", name="Elisa", unit_id="north", nucleus_id="youth"),
        ]
    )


@pytest.fixture
def attendance_repo():
    return InMemoryAttendance()


@pytest.fixture
def follow_ups_repo():
    return InMemoryFollowUps()


@pytest.fixture
def settings_repo():
    return InMemorySettings()


@pytest.fixture
def container(units_repo, members_repo, attendance_repo, follow_ups_repo, settings_repo):
    return assemble(
        units_repo=units_repo,
        members_repo=members_repo,
        attendance_repo=attendance_repo,
        follow_ups_repo=follow_ups_repo,
        settings_repo=settings_repo,
        default_password="123456",
    )
