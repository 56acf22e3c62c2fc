from __future__ import annotations

import logging
import secrets
from functools import lru_cache

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_min_length, require_non_empty
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.enums import Role
from ..core.exceptions import DuplicateUsernameError
from .model import UserAccount
from .repository import UserRepository

logger = logging.getLogger(__name__)


def hash_password(plaintext: str) -> str:
    """Salted one-way hash (werkzeug default: scrypt)."""
    return generate_password_hash(plaintext)


def verify_password(plaintext: str, password_hash: str) -> bool:
    try:
        return check_password_hash(password_hash, plaintext)
    except (TypeError, ValueError):
        # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
        return False


@lru_cache(maxsize=1)
def unknown_user_hash() -> str:
    """Hash of a random secret, checked in place of a missing account's hash.

    Login then costs one hash check whether or not the username exists.
    """
    return generate_password_hash(secrets.token_hex(16))


class UserService:
    """Use case: register accounts (credential store)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def create_user(self, *, username: str, password: str, role: Role = Role.TEACHER) -> UserAccount:
        username = require_non_empty(username, "Username")
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)

        if self._users.get_by_username(username):
            raise DuplicateUsernameError("Username already exists")

        password_hash = hash_password(password)
        user_id = self._users.create_user(username=username, password_hash=password_hash, role=role)
        logger.info("Registered %s account %r (id=%s)", role.value, username, user_id)
        return UserAccount(user_id=user_id, username=username, password_hash=password_hash, role=role)
