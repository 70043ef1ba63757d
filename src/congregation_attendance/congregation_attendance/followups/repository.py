from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import CabinetFollowUp, FollowUpKey


class FollowUpRepository(Protocol):
    def list_follow_ups(self, *, member_id: Optional[str] = None, period: Optional[str] = None) -> Sequence[CabinetFollowUp]:
        raise NotImplementedError

    def replace_follow_up(self, key: FollowUpKey, record: CabinetFollowUp) -> None:
        """Atomically swap the live record for ``key``."""

        raise NotImplementedError
