from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import AuthenticatedUser
from .repository import SessionRepository


class MySQLSessionRepository(SessionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, *, user_id: int, token: str, issued_at: datetime, expires_at: datetime) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO sessions(user_id, token, issued_at, expires_at)
                VALUES(%s,%s,%s,%s)
                """,
                (user_id, token, issued_at, expires_at),
            )
            return int(cur.lastrowid)

    def get_active_user(self, token: str, now: datetime) -> Optional[AuthenticatedUser]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT u.id, u.username, u.role
                FROM sessions s
                JOIN users u ON u.id = s.user_id
                WHERE s.token=%s AND s.expires_at > %s
                """,
                (token, now),
            )
            row = fetchone(cur)
            if not row:
                return None
            return AuthenticatedUser(user_id=int(row["id"]), username=row["username"], role=Role(row["role"]))

    def delete(self, token: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM sessions WHERE token=%s", (token,))
            return cur.rowcount > 0

    def delete_expired(self, now: datetime) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM sessions WHERE expires_at <= %s", (now,))
            return int(cur.rowcount)
