"""Schema, seed and default-account setup used by `create_app` and `scripts/`."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterator

from werkzeug.security import generate_password_hash

from ..core.enums import Role
from .connection import DBConfig, DatabaseConnection
from .mysql_base import db_cursor, fetchone

logger = logging.getLogger(__name__)

DEFAULT_ADMIN_USERNAME = "admin"
DEFAULT_ADMIN_PASSWORD = "admin123"

# schema.sql names its own database; the configured one wins.
_DB_SELECTION_RE = re.compile(r"(?im)^\s*(CREATE\s+DATABASE|USE)\b[^;]*;\s*$")
_LINE_COMMENT_RE = re.compile(r"(?m)^\s*--.*$")
_QUOTED_RE = re.compile(r"""('(?:[^'\\]|\\.)*'|"(?:[^"\\]|\\.)*")""", re.S)


def iter_sql_statements(sql: str) -> Iterator[str]:
    """Split a script on ';' outside quoted literals, dropping '--' comment lines."""
    pending = ""
    for i, part in enumerate(_QUOTED_RE.split(_LINE_COMMENT_RE.sub("", sql))):
        if i % 2:
            pending += part
            continue
        head, *rest = part.split(";")
        if not rest:
            pending += head
            continue
        for stmt in [pending + head, *rest[:-1]]:
            if stmt.strip():
                yield stmt.strip()
        pending = rest[-1]
    if pending.strip():
        yield pending.strip()


def _run_script(db: DatabaseConnection, path: str | Path) -> int:
    sql = _DB_SELECTION_RE.sub("", Path(path).read_text(encoding="utf-8"))
    count = 0
    with db_cursor(db, dictionary=False) as (_, cur):
        for stmt in iter_sql_statements(sql):
            cur.execute(stmt)
            count += 1
    return count


def ensure_database_exists(db_config: dict) -> None:
    target = DBConfig.from_dict(db_config)
    with db_cursor(DatabaseConnection(target.server_only()), dictionary=False) as (_, cur):
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)
    count = _run_script(DatabaseConnection(DBConfig.from_dict(db_config)), schema_path)
    logger.info("Applied %d schema statement(s) from %s", count, schema_path)


def apply_seed_sql(db_config: dict, *, seed_path: str | Path) -> None:
    count = _run_script(DatabaseConnection(DBConfig.from_dict(db_config)), seed_path)
    logger.info("Applied %d seed statement(s) from %s", count, seed_path)


def ensure_default_admin(db_config: dict) -> bool:
    """Create the demo admin account if the users table has no admin.

    Returns True when the account was created.
    """
    with db_cursor(DatabaseConnection(DBConfig.from_dict(db_config))) as (_, cur):
        cur.execute("SELECT id FROM users WHERE role=%s LIMIT 1", (Role.ADMIN.value,))
        if fetchone(cur):
            return False
        cur.execute(
            "INSERT INTO users (username, password_hash, role) VALUES (%s, %s, %s)",
            (DEFAULT_ADMIN_USERNAME, generate_password_hash(DEFAULT_ADMIN_PASSWORD), Role.ADMIN.value),
        )

    logger.warning("Created default admin account %r with the demo password", DEFAULT_ADMIN_USERNAME)
    return True


def list_tables(db_config: dict) -> list[str]:
    with db_cursor(DatabaseConnection(DBConfig.from_dict(db_config)), dictionary=False) as (_, cur):
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
