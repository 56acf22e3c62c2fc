"""Load the demo students from database/seed.sql (INSERT IGNORE, re-runnable)."""

from __future__ import annotations

from _env import SEED_PATH, describe, load_settings

from src.attendance_tracker.attendance_tracker.database.bootstrap import apply_seed_sql


def main() -> None:
    db_config = dict(load_settings().DB_CONFIG)
    apply_seed_sql(db_config, seed_path=SEED_PATH)
    print(f"OK: demo students loaded into {describe(db_config)}")


if __name__ == "__main__":
    main()
