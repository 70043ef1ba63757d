from __future__ import annotations

import json
from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import CategoryThresholds, Settings
from .repository import SettingsRepository

_SETTINGS_ROW_ID = 1


def settings_to_json(settings: Settings) -> str:
    return json.dumps(
        {
            "thresholds": {
                "attention": settings.thresholds.attention,
                "low": settings.thresholds.low,
                "critical": settings.thresholds.critical,
            },
            "access_password_hash": settings.access_password_hash,
        }
    )


def settings_from_json(raw: str) -> Settings:
    data = json.loads(raw)
    t = data.get("thresholds") or {}
    defaults = CategoryThresholds()
    return Settings(
        thresholds=CategoryThresholds(
            attention=int(t.get("attention", defaults.attention)),
            low=int(t.get("low", defaults.low)),
            critical=int(t.get("critical", defaults.critical)),
        ),
        access_password_hash=str(data.get("access_password_hash") or ""),
    )


class MySQLSettingsRepository(SettingsRepository):
    """Settings live as a single JSON document in ``app_settings``."""

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_settings(self) -> Optional[Settings]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT data FROM app_settings WHERE settings_id=%s", (_SETTINGS_ROW_ID,))
            r = fetchone(cur)
            if not r or not r.get("data"):
                return None
            return settings_from_json(r["data"])

    def set_settings(self, settings: Settings) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO app_settings(settings_id, data)
                VALUES(%s,%s)
                ON DUPLICATE KEY UPDATE data=VALUES(data)
                """,
                (_SETTINGS_ROW_ID, settings_to_json(settings)),
            )
