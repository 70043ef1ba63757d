from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Optional, Sequence

from ..common.identifiers import new_id
from ..common.validators import require_non_empty
from ..core.exceptions import NotFoundError, ValidationError
from ..units.repository import UnitRepository
from .model import Member
from .repository import MemberRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NewMember:
    name: str
    unit_id: str
    nucleus_id: Optional[str] = None
    phone: Optional[str] = None


class MemberService:
    """Use case: maintain the member list (create, edit, bulk import)."""

    def __init__(self, members: MemberRepository, units: UnitRepository):
        self._members = members
        self._units = units

    def _require_unit(self, unit_id: str) -> None:
        if not self._units.get_by_id(unit_id):
            raise NotFoundError(f"Unknown unit: {unit_id}")

    def list_active(self, unit_id: str) -> list[Member]:
        return [m for m in self._members.list_members(unit_id) if m.active and m.unit_id == unit_id]

    def get(self, member_id: str) -> Member:
        member = self._members.get_by_id(member_id)
        if not member:
            raise NotFoundError(f"Unknown member: {member_id}")
        return member

    def save(self, member: Member) -> Member:
        name = require_non_empty(member.name, "Name")
        self._require_unit(member.unit_id)

        member = replace(
            member,
            member_id=member.member_id or new_id(),
            name=name,
            nucleus_id=member.nucleus_id or None,
            phone=(member.phone or "").strip() or None,
        )
        self._members.upsert_member(member)
        logger.info("Member %s saved (unit=%s, active=%s)", member.member_id, member.unit_id, member.active)
        return member

    def deactivate(self, member_id: str) -> Member:
        return self.save(replace(self.get(member_id), active=False))

    def import_members(self, rows: Sequence[NewMember]) -> list[Member]:
        """Bulk insert new members; all rows are validated before anything is written."""

        created: list[Member] = []
        for i, row in enumerate(rows, start=1):
            try:
                name = require_non_empty(row.name, "Name")
            except ValidationError as e:
                raise ValidationError(f"Row {i}: {e}")
            self._require_unit(row.unit_id)
            created.append(
                Member(
                    member_id=new_id(),
                    name=name,
                    unit_id=row.unit_id,
                    nucleus_id=row.nucleus_id or None,
                    phone=(row.phone or "").strip() or None,
                )
            )

        self._members.insert_many(created)
        logger.info("Imported %d members", len(created))
        return created
