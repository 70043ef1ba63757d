from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ..core.enums import FollowUpStatus


@dataclass(frozen=True)
class FollowUpKey:
    member_id: str
    period: str


@dataclass(frozen=True)
class CabinetFollowUp:
    """Domain entity: pastoral follow-up status of a member for one month."""

    member_id: str
    period: str
    status: FollowUpStatus
    last_update: datetime

    @property
    def key(self) -> FollowUpKey:
        return FollowUpKey(member_id=self.member_id, period=self.period)
