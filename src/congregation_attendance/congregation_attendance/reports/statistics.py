from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from ..attendance.model import AttendanceRecord
from ..common.validators import require_non_negative
from ..core.enums import AttendanceStatus
from ..settings.model import Settings


@dataclass(frozen=True)
class AttendanceStats:
    presences: int
    absences: int
    justifications: int
    explicit_absences: int
    unregistered: int
    total_services: int
    percent: float


def summarize(records: Iterable[AttendanceRecord], total_services: int, settings: Settings) -> AttendanceStats:
    """Aggregate one member's records for a period.

    ``records`` must already be restricted to the member and the period.
    Service days without a record count as absences; a period without
    services reports a 0% rate.
    """

    total_services = require_non_negative(total_services, "Total services")
    records = list(records)

    presences = sum(1 for r in records if r.status == AttendanceStatus.PRESENT)
    justifications = sum(1 for r in records if r.status == AttendanceStatus.JUSTIFIED)
    explicit_absences = sum(1 for r in records if r.status == AttendanceStatus.ABSENT)
    unregistered = max(total_services - len(records), 0)

    absences = explicit_absences + unregistered

    percent = (presences / total_services) * 100 if total_services > 0 else 0.0

    return AttendanceStats(
        presences=presences,
        absences=absences,
        justifications=justifications,
        explicit_absences=explicit_absences,
        unregistered=unregistered,
        total_services=total_services,
        percent=percent,
    )
