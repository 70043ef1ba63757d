from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Union

from ..common.datetime_utils import normalize_year_month, now_local
from ..common.validators import require_non_empty
from ..core.enums import FollowUpStatus
from ..core.exceptions import ValidationError
from ..reports.categories import is_follow_up_eligible
from ..reports.service import FrequencyReportService, MemberFrequency
from .model import CabinetFollowUp, FollowUpKey
from .repository import FollowUpRepository

logger = logging.getLogger(__name__)


def parse_follow_up_status(value: Union[FollowUpStatus, str]) -> FollowUpStatus:
    if isinstance(value, FollowUpStatus):
        return value
    try:
        return FollowUpStatus(str(value or "").strip().upper())
    except ValueError:
        raise ValidationError(f"Unknown follow-up status: {value!r}")


@dataclass(frozen=True)
class FollowUpEntry:
    frequency: MemberFrequency
    status: FollowUpStatus
    last_update: Optional[datetime] = None

    @property
    def absences(self) -> int:
        return self.frequency.stats.absences


@dataclass(frozen=True)
class FollowUpBoard:
    unit_id: str
    period: str
    active: list[FollowUpEntry]
    resolved: list[FollowUpEntry]


class FollowUpService:
    """Pastoral follow-up workflow.

    Any status can move to any other; DONE only moves the member to the
    resolved list. Eligibility is recomputed from statistics on every call.
    """

    def __init__(self, follow_ups: FollowUpRepository, reports: FrequencyReportService):
        self._follow_ups = follow_ups
        self._reports = reports

    def set_status(self, member_id: str, period: str, status: Union[FollowUpStatus, str]) -> CabinetFollowUp:
        member_id = require_non_empty(member_id, "Member")
        period = normalize_year_month(period)
        status = parse_follow_up_status(status)

        record = CabinetFollowUp(member_id=member_id, period=period, status=status, last_update=now_local())
        self._follow_ups.replace_follow_up(FollowUpKey(member_id=member_id, period=period), record)
        logger.info("Follow-up member=%s period=%s -> %s", member_id, period, status.value)
        return record

    def status_for(self, member_id: str, period: str) -> FollowUpStatus:
        rows = self._follow_ups.list_follow_ups(member_id=member_id, period=normalize_year_month(period))
        return rows[-1].status if rows else FollowUpStatus.PENDING

    def build_board(self, unit_id: str, period: str) -> FollowUpBoard:
        period = normalize_year_month(period)
        _, frequencies = self._reports.member_frequencies(unit_id, period)
        records = {r.member_id: r for r in self._follow_ups.list_follow_ups(period=period)}

        active: list[FollowUpEntry] = []
        resolved: list[FollowUpEntry] = []
        for f in frequencies:
            if not is_follow_up_eligible(f.stats.absences):
                continue
            rec = records.get(f.member.member_id)
            entry = FollowUpEntry(
                frequency=f,
                status=rec.status if rec else FollowUpStatus.PENDING,
                last_update=rec.last_update if rec else None,
            )
            (resolved if entry.status == FollowUpStatus.DONE else active).append(entry)

        active.sort(key=lambda e: -e.absences)
        resolved.sort(key=lambda e: -e.absences)
        logger.debug("Follow-up board unit=%s period=%s: %d active, %d resolved", unit_id, period, len(active), len(resolved))
        return FollowUpBoard(unit_id=unit_id, period=period, active=active, resolved=resolved)

    def entry_for(self, unit_id: str, member_id: str, period: str) -> FollowUpEntry:
        period = normalize_year_month(period)
        _, frequencies = self._reports.member_frequencies(unit_id, period)
        for f in frequencies:
            if f.member.member_id == member_id:
                return FollowUpEntry(frequency=f, status=self.status_for(member_id, period))
        raise ValidationError(f"Member {member_id} is not an active member of unit {unit_id}")
