from __future__ import annotations

from typing import Sequence

from ..common.datetime_utils import month_bounds
from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import AttendanceFilter, AttendanceKey, AttendanceRecord
from .repository import AttendanceRepository


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_attendance(self, flt: AttendanceFilter) -> Sequence[AttendanceRecord]:
        clauses: list[str] = []
        params: list[object] = []
        if flt.unit_id is not None:
            clauses.append("unit_id=%s")
            params.append(str(flt.unit_id))
        if flt.service_date is not None:
            clauses.append("service_date=%s")
            params.append(flt.service_date)
        if flt.member_id is not None:
            clauses.append("member_id=%s")
            params.append(str(flt.member_id))
        if flt.period_prefix is not None:
            start, end = month_bounds(flt.period_prefix)
            clauses.append("service_date BETWEEN %s AND %s")
            params.extend([start, end])

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT record_id, member_id, unit_id, service_date, status, justification_text, registered_at
                FROM attendance_records
                {where}
                ORDER BY service_date ASC, member_id ASC
                """,
                tuple(params),
            )
            return [
                AttendanceRecord(
                    record_id=str(r["record_id"]),
                    member_id=str(r["member_id"]),
                    unit_id=str(r["unit_id"]),
                    service_date=r["service_date"],
                    status=AttendanceStatus(r["status"]),
                    registered_at=r["registered_at"],
                    justification_text=r.get("justification_text"),
                )
                for r in fetchall(cur)
            ]

    def replace_attendance(self, keys: Sequence[AttendanceKey], new_records: Sequence[AttendanceRecord]) -> None:
        # Single db_cursor block => single transaction for delete + insert.
        with db_cursor(self._conn_factory) as (_, cur):
            if keys:
                cur.executemany(
                    "DELETE FROM attendance_records WHERE member_id=%s AND service_date=%s",
                    [(k.member_id, k.service_date) for k in keys],
                )
            if new_records:
                cur.executemany(
                    """
                    INSERT INTO attendance_records
                        (record_id, member_id, unit_id, service_date, status, justification_text, registered_at)
                    VALUES(%s,%s,%s,%s,%s,%s,%s)
                    """,
                    [
                        (
                            r.record_id,
                            r.member_id,
                            r.unit_id,
                            r.service_date,
                            r.status.value,
                            r.justification_text,
                            r.registered_at,
                        )
                        for r in new_records
                    ],
                )
