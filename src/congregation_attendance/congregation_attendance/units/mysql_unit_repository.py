from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Nucleus, Unit
from .repository import UnitRepository


def parse_service_days(value: Optional[str]) -> tuple[int, ...]:
    """Service days are stored as a comma separated list, e.g. '0,3'."""
    if not value:
        return ()
    return tuple(sorted({int(part) for part in str(value).split(",") if part.strip()}))


def _to_unit(r: dict) -> Unit:
    return Unit(
        unit_id=str(r["unit_id"]),
        name=r["name"],
        service_days=parse_service_days(r.get("service_days")),
        pastor_phone=r.get("pastor_phone"),
    )


class MySQLUnitRepository(UnitRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_units(self) -> Sequence[Unit]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT unit_id, name, service_days, pastor_phone FROM units ORDER BY name ASC")
            return [_to_unit(r) for r in fetchall(cur)]

    def get_by_id(self, unit_id: str) -> Optional[Unit]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT unit_id, name, service_days, pastor_phone FROM units WHERE unit_id=%s",
                (str(unit_id),),
            )
            r = fetchone(cur)
            return _to_unit(r) if r else None

    def list_nuclei(self) -> Sequence[Nucleus]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT nucleus_id, name, color FROM nuclei ORDER BY name ASC")
            return [
                Nucleus(nucleus_id=str(r["nucleus_id"]), name=r["name"], color=r.get("color"))
                for r in fetchall(cur)
            ]
