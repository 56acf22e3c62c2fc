from __future__ import annotations

import logging

from flask import Flask, jsonify

from ..common.http import json_object
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, DuplicateUsernameError, InvalidSessionError, ValidationError
from ..container import Container
from ..sessions.guard import bearer_token, unauthorized

logger = logging.getLogger(__name__)


def _credentials(data: dict):
    username = data.get("username")
    password = data.get("password")
    if not isinstance(username, str) or not isinstance(password, str) or not username or not password:
        return None
    return username, password


def register(app: Flask, container: Container) -> None:
    @app.route("/api/auth/login", methods=["POST"], endpoint="login")
    def login():
        data = json_object()
        credentials = _credentials(data)
        if credentials is None:
            return jsonify({"message": "Username and password are required"}), 400
        username, password = credentials

        try:
            result = container.session_authority.login(username, password)
        except AuthenticationError:
            return jsonify({"message": "Invalid credentials"}), 401
        except Exception:
            logger.exception("Login failed")
            return jsonify({"message": "Internal server error"}), 500

        return jsonify(
            {
                "message": "Login successful",
                "user": result.user.summary(),
                "token": result.token,
                "expiresAt": result.expires_at.isoformat(),
            }
        )

    @app.route("/api/auth/logout", methods=["POST"], endpoint="logout")
    def logout():
        try:
            container.session_authority.logout(bearer_token())
        except Exception:
            logger.exception("Logout failed")
            return jsonify({"message": "Internal server error"}), 500
        return jsonify({"message": "Logged out"})

    @app.route("/api/auth/signup", methods=["POST"], endpoint="signup")
    def signup():
        data = json_object()
        credentials = _credentials(data)
        if credentials is None:
            return jsonify({"message": "Username and password are required"}), 400
        username, password = credentials

        try:
            role = Role(data.get("role") or Role.TEACHER.value)
        except (TypeError, ValueError):
            return jsonify({"message": "Invalid role"}), 400

        try:
            if role == Role.ADMIN:
                # Only an existing admin may mint another admin.
                try:
                    current = container.session_authority.validate(bearer_token())
                except InvalidSessionError:
                    return unauthorized()
                if current.role != Role.ADMIN:
                    return jsonify({"message": "Forbidden"}), 403

            user = container.user_service.create_user(username=username, password=password, role=role)
        except DuplicateUsernameError as e:
            return jsonify({"message": str(e)}), 409
        except ValidationError as e:
            return jsonify({"message": str(e)}), 400
        except Exception:
            logger.exception("Signup failed")
            return jsonify({"message": "Internal server error"}), 500

        return jsonify({"message": "User registered successfully", "user": user.summary()})
