"""Create the attendance tables and the default admin account.

Safe to re-run: every CREATE is IF NOT EXISTS and the admin is only added
when no account with that username exists.
"""

from __future__ import annotations

from _env import SCHEMA_PATH, describe, load_settings

from src.attendance_tracker.attendance_tracker.database.bootstrap import apply_schema, ensure_default_admin, list_tables


def main() -> None:
    db_config = dict(load_settings().DB_CONFIG)

    apply_schema(db_config, schema_path=SCHEMA_PATH)
    created_admin = ensure_default_admin(db_config)
    tables = list_tables(db_config)

    print(f"OK: schema applied to {describe(db_config)}")
    print(f"    tables: {', '.join(tables)}")
    print(f"    default admin: {'created' if created_admin else 'already present'}")


if __name__ == "__main__":
    main()
