from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ..core.enums import Role


@dataclass(frozen=True)
class Session:
    """Server-side session row; its existence is what makes a token revocable."""

    session_id: int
    user_id: int
    token: str
    issued_at: datetime
    expires_at: datetime

    def is_live(self, now: datetime) -> bool:
        return now < self.expires_at


@dataclass(frozen=True)
class AuthenticatedUser:
    """Identity attached to a request after the bearer token was validated."""

    user_id: int
    username: str
    role: Role

    def summary(self) -> dict:
        return {"id": self.user_id, "username": self.username, "role": self.role.value}


@dataclass(frozen=True)
class LoginResult:
    user: AuthenticatedUser
    token: str
    expires_at: datetime
