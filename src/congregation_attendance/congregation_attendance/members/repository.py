from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Member


class MemberRepository(Protocol):
    def list_members(self, unit_id: Optional[str] = None) -> Sequence[Member]:
        raise NotImplementedError

    def get_by_id(self, member_id: str) -> Optional[Member]:
        raise NotImplementedError

    def upsert_member(self, member: Member) -> None:
        """Insert the member, or overwrite the one with the same id."""

        raise NotImplementedError

    def insert_many(self, members: Sequence[Member]) -> int:
        raise NotImplementedError
