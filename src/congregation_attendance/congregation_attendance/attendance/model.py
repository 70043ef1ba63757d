from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceKey:
    """At most one live record exists per key."""

    member_id: str
    service_date: date


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: member X had status S on service date D within unit U."""

    record_id: str
    member_id: str
    unit_id: str
    service_date: date
    status: AttendanceStatus
    registered_at: datetime
    justification_text: Optional[str] = None

    @property
    def key(self) -> AttendanceKey:
        return AttendanceKey(member_id=self.member_id, service_date=self.service_date)


@dataclass(frozen=True)
class AttendanceFilter:
    """Every field is optional; unset fields do not restrict the query."""

    unit_id: Optional[str] = None
    service_date: Optional[date] = None
    member_id: Optional[str] = None
    period_prefix: Optional[str] = None
