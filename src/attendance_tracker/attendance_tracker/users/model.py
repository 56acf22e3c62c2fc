from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import Role


@dataclass(frozen=True)
class UserAccount:
    """Domain entity: a login account.

    Plain data object (no DB access code).
    """

    user_id: int
    username: str
    password_hash: str
    role: Role

    def summary(self) -> dict:
        """Public shape returned to clients; never includes the hash."""
        return {"id": self.user_id, "username": self.username, "role": self.role.value}
