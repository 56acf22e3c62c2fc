from __future__ import annotations

from typing import Optional, Protocol

from ..core.enums import Role
from .model import UserAccount


class UserRepository(Protocol):
    """Repository interface for UserAccount.

    The service layer depends on this interface, not on a concrete database.
    """

    def get_by_username(self, username: str) -> Optional[UserAccount]:
        raise NotImplementedError

    def create_user(self, *, username: str, password_hash: str, role: Role) -> int:
        """Insert an account; raises DuplicateUsernameError when the name is taken."""

        raise NotImplementedError
