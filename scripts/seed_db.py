from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
for p in (REPO_ROOT, REPO_ROOT / "src" / "congregation_attendance"):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))

from config import get_settings_module

from congregation_attendance.common.logger import configure_logging
from congregation_attendance.database.bootstrap import apply_schema, apply_seed_sql


def main() -> None:
    configure_logging("INFO")
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")
    apply_seed_sql(db_config, seed_path=REPO_ROOT / "database" / "seed.sql")


if __name__ == "__main__":
    main()
