"""Delete expired session rows.

Validation already ignores expired rows; this only keeps the table small.
Suitable for a daily cron job.
"""

from __future__ import annotations

from _env import describe, load_settings

from src.attendance_tracker.attendance_tracker.container import build_container


def main() -> None:
    settings = load_settings()
    db_config = dict(settings.DB_CONFIG)
    container = build_container(db_config=db_config, jwt_secret=settings.JWT_SECRET)
    removed = container.session_authority.purge_expired()
    print(f"OK: removed {removed} expired session(s) from {describe(db_config)}")


if __name__ == "__main__":
    main()
