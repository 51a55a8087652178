from __future__ import annotations

import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import load_settings

from src.attendance_relay.attendance_relay.database.bootstrap import apply_schema, list_tables
from src.attendance_relay.attendance_relay.database.connection import DBConfig, DatabaseConnection


def main() -> None:
    settings = load_settings()
    config = DBConfig.from_mapping(settings["DB_CONFIG"])
    conn = DatabaseConnection.get_instance(config)

    apply_schema(conn, schema_path=REPO_ROOT / "database" / "schema.sql")
    tables = list_tables(conn)
    print(f"OK: Applied schema.sql -> {config.user}@{config.host}:{config.port}/{config.database} (tables={len(tables)})")


if __name__ == "__main__":
    main()
