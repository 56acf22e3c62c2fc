from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol

from .model import AuthenticatedUser


class SessionRepository(Protocol):
    def create(self, *, user_id: int, token: str, issued_at: datetime, expires_at: datetime) -> int:
        raise NotImplementedError

    def get_active_user(self, token: str, now: datetime) -> Optional[AuthenticatedUser]:
        """Account owning a stored, unexpired session for exactly this token."""

        raise NotImplementedError

    def delete(self, token: str) -> bool:
        raise NotImplementedError

    def delete_expired(self, now: datetime) -> int:
        raise NotImplementedError
