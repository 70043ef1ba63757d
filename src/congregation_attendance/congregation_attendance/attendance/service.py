from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Optional, Sequence, Union

from ..common.datetime_utils import now_local, parse_iso_date
from ..common.identifiers import new_id
from ..common.validators import require_non_empty
from ..core.constants import NOT_REGISTERED
from ..core.enums import AttendanceStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..members.model import Member
from ..members.repository import MemberRepository
from .model import AttendanceFilter, AttendanceKey, AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

StatusInput = Union[AttendanceStatus, str, None]

# Register ordering: pending members first, then absent, justified, present.
_ROSTER_ORDER = {
    None: 0,
    AttendanceStatus.ABSENT: 1,
    AttendanceStatus.JUSTIFIED: 2,
    AttendanceStatus.PRESENT: 3,
}


def parse_attendance_status(value: StatusInput) -> Optional[AttendanceStatus]:
    """Translate boundary input into a storable status.

    ``None`` and ``"NOT_REGISTERED"`` both mean "no record".
    """

    if value is None or isinstance(value, AttendanceStatus):
        return value
    raw = str(value).strip().upper()
    if raw == NOT_REGISTERED:
        return None
    try:
        return AttendanceStatus(raw)
    except ValueError:
        raise ValidationError(f"Unknown attendance status: {value!r}")


def _as_date(value: Union[date, str]) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return parse_iso_date(value)


@dataclass(frozen=True)
class RosterEntry:
    member: Member
    status: Optional[AttendanceStatus]
    justification_text: Optional[str] = None

    @property
    def status_label(self) -> str:
        return self.status.value if self.status else NOT_REGISTERED


@dataclass(frozen=True)
class DaySummary:
    total: int
    present: int
    absent: int
    justified: int
    not_registered: int
    presence_rate: float

    @property
    def completed(self) -> bool:
        return self.total > 0 and self.not_registered == 0


class AttendanceRegisterService:
    """Use case: take the roll call for one unit on one service date."""

    def __init__(self, attendance: AttendanceRepository, members: MemberRepository):
        self._attendance = attendance
        self._members = members

    def _active_members(self, unit_id: str) -> list[Member]:
        return [m for m in self._members.list_members(unit_id) if m.active and m.unit_id == unit_id]

    def _records_for_day(self, unit_id: str, service_date: date) -> dict[str, AttendanceRecord]:
        rows = self._attendance.list_attendance(AttendanceFilter(unit_id=unit_id, service_date=service_date))
        return {r.member_id: r for r in rows}

    def current_record(self, member_id: str, service_date: Union[date, str]) -> Optional[AttendanceRecord]:
        rows = self._attendance.list_attendance(
            AttendanceFilter(member_id=member_id, service_date=_as_date(service_date))
        )
        return rows[-1] if rows else None

    def current_status(self, member_id: str, service_date: Union[date, str]) -> Optional[AttendanceStatus]:
        record = self.current_record(member_id, service_date)
        return record.status if record else None

    def _clear(self, member_id: str, service_date: date) -> None:
        self._attendance.replace_attendance([AttendanceKey(member_id=member_id, service_date=service_date)], [])
        logger.info("Attendance cleared member=%s date=%s", member_id, service_date)

    def _store(
        self,
        *,
        member_id: str,
        service_date: date,
        unit_id: str,
        status: AttendanceStatus,
        justification_text: Optional[str],
    ) -> AttendanceRecord:
        text = (justification_text or "").strip() or None
        record = AttendanceRecord(
            record_id=new_id(),
            member_id=member_id,
            unit_id=unit_id,
            service_date=service_date,
            status=status,
            registered_at=now_local(),
            justification_text=text if status == AttendanceStatus.JUSTIFIED else None,
        )
        self._attendance.replace_attendance([record.key], [record])
        logger.info("Attendance set member=%s date=%s status=%s", member_id, service_date, status.value)
        return record

    def _check_member(self, member_id: str, unit_id: str) -> None:
        member_id = require_non_empty(member_id, "Member")
        unit_id = require_non_empty(unit_id, "Unit")
        member = self._members.get_by_id(member_id)
        if not member:
            raise NotFoundError(f"Unknown member: {member_id}")
        if member.unit_id != unit_id:
            raise ValidationError(f"Member {member_id} does not belong to unit {unit_id}")

    def set_attendance(
        self,
        member_id: str,
        service_date: Union[date, str],
        unit_id: str,
        status: StatusInput,
        justification_text: Optional[str] = None,
    ) -> Optional[AttendanceRecord]:
        """Apply a status tap.

        Tapping the member's current status again clears it (no record).
        Returns the live record afterwards, or None when nothing is stored.
        """

        self._check_member(member_id, unit_id)
        service_date = _as_date(service_date)
        requested = parse_attendance_status(status)
        current = self.current_status(member_id, service_date)
        if requested is None or requested == current:
            self._clear(member_id, service_date)
            return None

        return self._store(
            member_id=member_id,
            service_date=service_date,
            unit_id=unit_id,
            status=requested,
            justification_text=justification_text,
        )

    def update_justification(
        self,
        member_id: str,
        service_date: Union[date, str],
        unit_id: str,
        justification_text: Optional[str],
    ) -> AttendanceRecord:
        """Confirm the justification editor: always stores JUSTIFIED, never toggles."""

        self._check_member(member_id, unit_id)
        return self._store(
            member_id=member_id,
            service_date=_as_date(service_date),
            unit_id=unit_id,
            status=AttendanceStatus.JUSTIFIED,
            justification_text=justification_text,
        )

    def batch_set_attendance(self, records: Sequence[AttendanceRecord]) -> list[AttendanceRecord]:
        """Replace every live record sharing a key with the batch, in one step.

        When the batch repeats a key, the last entry wins.
        """

        by_key: dict[AttendanceKey, AttendanceRecord] = {}
        for r in records:
            if not isinstance(r.status, AttendanceStatus):
                raise ValidationError(f"Batch entries need a storable status, got {r.status!r}")
            if r.status != AttendanceStatus.JUSTIFIED and r.justification_text:
                r = replace(r, justification_text=None)
            by_key.pop(r.key, None)
            by_key[r.key] = r

        batch = list(by_key.values())
        if not batch:
            return []
        self._attendance.replace_attendance(list(by_key.keys()), batch)
        logger.info("Attendance batch written (%d records)", len(batch))
        return batch

    def finalize_absences(self, unit_id: str, service_date: Union[date, str]) -> list[AttendanceRecord]:
        """Mark every active member still without a record as ABSENT."""

        unit_id = require_non_empty(unit_id, "Unit")
        service_date = _as_date(service_date)
        existing = self._records_for_day(unit_id, service_date)
        now = now_local()

        pending = [
            AttendanceRecord(
                record_id=new_id(),
                member_id=m.member_id,
                unit_id=unit_id,
                service_date=service_date,
                status=AttendanceStatus.ABSENT,
                registered_at=now,
            )
            for m in self._active_members(unit_id)
            if m.member_id not in existing
        ]
        written = self.batch_set_attendance(pending)
        logger.info("Finalized unit=%s date=%s: %d members marked absent", unit_id, service_date, len(written))
        return written

    def roster(
        self,
        unit_id: str,
        service_date: Union[date, str],
        *,
        search: Optional[str] = None,
        nucleus_id: Optional[str] = None,
        status: StatusInput = None,
        filter_status: bool = False,
    ) -> list[RosterEntry]:
        """Active members of the unit with their status on the date.

        ``status`` only filters when ``filter_status`` is set, so that
        NOT_REGISTERED (None) can be used as a filter value.
        """

        service_date = _as_date(service_date)
        records = self._records_for_day(unit_id, service_date)
        wanted = parse_attendance_status(status) if filter_status else None
        needle = (search or "").strip().lower()

        entries: list[RosterEntry] = []
        for m in self._active_members(unit_id):
            rec = records.get(m.member_id)
            entry = RosterEntry(
                member=m,
                status=rec.status if rec else None,
                justification_text=rec.justification_text if rec else None,
            )
            if needle and needle not in m.name.lower():
                continue
            if nucleus_id and m.nucleus_id != nucleus_id:
                continue
            if filter_status and entry.status != wanted:
                continue
            entries.append(entry)

        entries.sort(key=lambda e: (_ROSTER_ORDER[e.status], e.member.name.lower()))
        return entries

    def day_summary(self, unit_id: str, service_date: Union[date, str]) -> DaySummary:
        service_date = _as_date(service_date)
        active_ids = {m.member_id for m in self._active_members(unit_id)}
        records = [r for r in self._records_for_day(unit_id, service_date).values() if r.member_id in active_ids]

        present = sum(1 for r in records if r.status == AttendanceStatus.PRESENT)
        absent = sum(1 for r in records if r.status == AttendanceStatus.ABSENT)
        justified = sum(1 for r in records if r.status == AttendanceStatus.JUSTIFIED)
        total = len(active_ids)

        return DaySummary(
            total=total,
            present=present,
            absent=absent,
            justified=justified,
            not_registered=total - len(records),
            presence_rate=(present / total) * 100 if total > 0 else 0.0,
        )

    def is_date_completed(self, unit_id: str, service_date: Union[date, str]) -> bool:
        return self.day_summary(unit_id, service_date).completed
