from __future__ import annotations

import logging
from functools import wraps
from typing import Optional

from flask import g, jsonify, request

from ..core.exceptions import InvalidSessionError
from .service import SessionAuthority

logger = logging.getLogger(__name__)


def bearer_token() -> Optional[str]:
    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer":
        return None
    return token.strip() or None


def unauthorized():
    return jsonify({"message": "Unauthorized"}), 401


def make_token_required(authority: SessionAuthority):
    """Decorator factory: reject the request with 401 unless the bearer token is live.

    The validated user is exposed as `flask.g.current_user`.
    """

    def token_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                g.current_user = authority.validate(bearer_token())
            except InvalidSessionError:
                return unauthorized()
            except Exception:
                logger.exception("Session validation failed")
                return jsonify({"message": "Internal server error"}), 500
            return view(*args, **kwargs)

        return wrapper

    return token_required
