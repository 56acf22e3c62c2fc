from __future__ import annotations

import secrets
from datetime import datetime
from typing import Optional

import jwt

from ..core.constants import JWT_ALGORITHM
from ..users.model import UserAccount


class SessionTokenSigner:
    """Mint and verify signed session tokens (HS256 JWT).

    Claims: user_id, username, role, iat, exp and a random jti so that two
    logins within the same second still produce different tokens.
    """

    def __init__(self, secret: str, *, algorithm: str = JWT_ALGORITHM):
        if not secret:
            raise ValueError("JWT secret must not be empty")
        self._secret = secret
        self._algorithm = algorithm

    def issue(self, user: UserAccount, *, issued_at: datetime, expires_at: datetime) -> str:
        payload = {
            "user_id": int(user.user_id),
            "username": user.username,
            "role": user.role.value,
            "iat": int(issued_at.timestamp()),
            "exp": int(expires_at.timestamp()),
            "jti": secrets.token_hex(16),
        }
        # pyjwt returns str in v2+
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: str, *, now: datetime) -> Optional[dict]:
        """Decoded claims if the signature is good and `exp` is after `now`, else None.

        Expiry is compared against the caller's clock rather than PyJWT's so the
        whole session layer shares one notion of "now".
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"verify_exp": False, "verify_iat": False, "require": ["exp", "user_id", "jti"]},
            )
            expires = int(payload["exp"])
        except (jwt.InvalidTokenError, TypeError, ValueError):
            return None

        if now.timestamp() >= expires:
            return None
        return payload
