from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Storable attendance statuses.

    "Not registered" is the absence of a record and is modelled as ``None``.
    """

    PRESENT = "PRESENT"
    ABSENT = "ABSENT"
    JUSTIFIED = "JUSTIFIED"


class FollowUpStatus(str, Enum):
    """Pastoral follow-up (cabinet) workflow state."""

    PENDING = "PENDING"
    SCHEDULED = "SCHEDULED"
    DONE = "DONE"


class FrequencyCategory(str, Enum):
    """Severity tiers, declared in ascending order of severity."""

    REGULAR = "REGULAR"
    ATTENTION = "ATTENTION"
    LOW = "LOW"
    CRITICAL = "CRITICAL"
