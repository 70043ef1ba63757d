from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import mysql.connector

DEFAULT_DATABASE = "congregation_attendance"


@dataclass(frozen=True)
class DBConfig:
    host: str = "localhost"
    port: int = 3306
    user: str = "root"
    password: str = ""
    database: str = DEFAULT_DATABASE

    @classmethod
    def from_dict(cls, raw: dict) -> "DBConfig":
        """Build from a settings module ``DB_CONFIG`` dict; missing keys use defaults."""
        base = cls()
        return cls(
            host=str(raw.get("host") or base.host),
            port=int(raw.get("port") or base.port),
            user=str(raw.get("user") or base.user),
            password=str(raw.get("password") or ""),
            database=str(raw.get("database") or base.database),
        )


class DatabaseConnection:
    """Hands out one short-lived MySQL connection per unit of work.

    Repositories share a single instance through :meth:`get_instance`; each
    ``db_cursor`` block opens and closes its own connection.
    """

    _instance: Optional["DatabaseConnection"] = None

    def __init__(self, config: DBConfig):
        self.config = config

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        if cls._instance is None or cls._instance.config != config:
            cls._instance = cls(config)
        return cls._instance

    def connect(self, *, with_database: bool = True):
        # without the schema selected so bootstrap can CREATE DATABASE
        params = {
            "host": self.config.host,
            "port": self.config.port,
            "user": self.config.user,
            "password": self.config.password,
        }
        if with_database:
            params["database"] = self.config.database
        return mysql.connector.connect(**params)
