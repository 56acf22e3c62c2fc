from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Callable, Optional

from ..common.datetime_utils import now_local
from ..core.constants import DEFAULT_SESSION_DAYS
from ..core.exceptions import AuthenticationError, InvalidSessionError
from ..users.repository import UserRepository
from ..users.service import unknown_user_hash, verify_password
from .model import AuthenticatedUser, LoginResult
from .repository import SessionRepository
from .tokens import SessionTokenSigner

logger = logging.getLogger(__name__)


class SessionAuthority:
    """Use case: issue, validate and revoke login sessions.

    A token is accepted only if its signature and embedded expiry check out
    AND a matching unexpired row still exists in the session store. Logging
    out deletes the row, which revokes the token immediately.
    """

    def __init__(
        self,
        users: UserRepository,
        sessions: SessionRepository,
        signer: SessionTokenSigner,
        *,
        session_days: int = DEFAULT_SESSION_DAYS,
        clock: Callable[[], datetime] = now_local,
    ):
        self._users = users
        self._sessions = sessions
        self._signer = signer
        self._ttl = timedelta(days=int(session_days))
        self._clock = clock

    def login(self, username: str, password: str) -> LoginResult:
        username = username.strip() if isinstance(username, str) else ""
        user = self._users.get_by_username(username) if username else None
        stored_hash = user.password_hash if user else unknown_user_hash()
        password_ok = verify_password(password if isinstance(password, str) else "", stored_hash)
        if not user or not password_ok:
            logger.warning("Failed login for username %r", username)
            raise AuthenticationError("Invalid credentials")

        # JWT timestamps have second resolution; keep the row in step with the token.
        issued_at = self._clock().replace(microsecond=0)
        expires_at = issued_at + self._ttl
        token = self._signer.issue(user, issued_at=issued_at, expires_at=expires_at)
        self._sessions.create(user_id=user.user_id, token=token, issued_at=issued_at, expires_at=expires_at)

        logger.info("User %r logged in (session until %s)", user.username, expires_at.isoformat())
        return LoginResult(
            user=AuthenticatedUser(user_id=user.user_id, username=user.username, role=user.role),
            token=token,
            expires_at=expires_at,
        )

    def validate(self, token: Optional[str]) -> AuthenticatedUser:
        if not token:
            raise InvalidSessionError("Unauthorized")

        now = self._clock()
        claims = self._signer.verify(token, now=now)
        if claims is None:
            raise InvalidSessionError("Unauthorized")

        user = self._sessions.get_active_user(token, now)
        if user is None or user.user_id != int(claims["user_id"]):
            raise InvalidSessionError("Unauthorized")
        return user

    def logout(self, token: Optional[str]) -> None:
        if not token:
            return
        if self._sessions.delete(token):
            logger.info("Session revoked")

    def purge_expired(self) -> int:
        removed = self._sessions.delete_expired(self._clock())
        logger.info("Purged %d expired session(s)", removed)
        return removed
