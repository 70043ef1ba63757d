from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import FollowUpStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import CabinetFollowUp, FollowUpKey
from .repository import FollowUpRepository


class MySQLFollowUpRepository(FollowUpRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_follow_ups(self, *, member_id: Optional[str] = None, period: Optional[str] = None) -> Sequence[CabinetFollowUp]:
        clauses: list[str] = []
        params: list[object] = []
        if member_id is not None:
            clauses.append("member_id=%s")
            params.append(str(member_id))
        if period is not None:
            clauses.append("period=%s")
            params.append(str(period))

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT member_id, period, status, last_update
                FROM cabinet_follow_ups
                {where}
                ORDER BY period ASC, member_id ASC
                """,
                tuple(params),
            )
            return [
                CabinetFollowUp(
                    member_id=str(r["member_id"]),
                    period=r["period"],
                    status=FollowUpStatus(r["status"]),
                    last_update=r["last_update"],
                )
                for r in fetchall(cur)
            ]

    def replace_follow_up(self, key: FollowUpKey, record: CabinetFollowUp) -> None:
        # Unique (member_id, period) key makes this a single atomic replace.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO cabinet_follow_ups(member_id, period, status, last_update)
                VALUES(%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE status=VALUES(status), last_update=VALUES(last_update)
                """,
                (key.member_id, key.period, record.status.value, record.last_update),
            )
