from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_bool, db_cursor, fetchall, fetchone
from .model import Member
from .repository import MemberRepository

_COLUMNS = "member_id, name, unit_id, nucleus_id, active, phone"


def _to_member(r: dict) -> Member:
    return Member(
        member_id=str(r["member_id"]),
        name=r["name"],
        unit_id=str(r["unit_id"]),
        nucleus_id=r.get("nucleus_id"),
        active=as_bool(r.get("active")),
        phone=r.get("phone"),
    )


def _params(m: Member) -> tuple:
    return (m.member_id, m.name, m.unit_id, m.nucleus_id, 1 if m.active else 0, m.phone)


class MySQLMemberRepository(MemberRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_members(self, unit_id: Optional[str] = None) -> Sequence[Member]:
        with db_cursor(self._conn_factory) as (_, cur):
            if unit_id is None:
                cur.execute(f"SELECT {_COLUMNS} FROM members ORDER BY name ASC")
            else:
                cur.execute(
                    f"SELECT {_COLUMNS} FROM members WHERE unit_id=%s ORDER BY name ASC",
                    (str(unit_id),),
                )
            return [_to_member(r) for r in fetchall(cur)]

    def get_by_id(self, member_id: str) -> Optional[Member]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM members WHERE member_id=%s", (str(member_id),))
            r = fetchone(cur)
            return _to_member(r) if r else None

    def upsert_member(self, member: Member) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                INSERT INTO members({_COLUMNS})
                VALUES(%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    name=VALUES(name),
                    unit_id=VALUES(unit_id),
                    nucleus_id=VALUES(nucleus_id),
                    active=VALUES(active),
                    phone=VALUES(phone)
                """,
                _params(member),
            )

    def insert_many(self, members: Sequence[Member]) -> int:
        if not members:
            return 0
        with db_cursor(self._conn_factory) as (_, cur):
            cur.executemany(
                f"INSERT INTO members({_COLUMNS}) VALUES(%s,%s,%s,%s,%s,%s)",
                [_params(m) for m in members],
            )
            return len(members)
