from __future__ import annotations

import pytest

from src.attendance_tracker.attendance_tracker.core.enums import Role
from src.attendance_tracker.attendance_tracker.core.exceptions import DuplicateUsernameError, ValidationError
from src.attendance_tracker.attendance_tracker.users.service import UserService, hash_password, verify_password


def test_hash_is_salted_and_verifiable():
    h1 = hash_password("secret123")
    h2 = hash_password("secret123")

    assert h1 != h2
    assert h1 != "secret123"
    assert verify_password("secret123", h1)
    assert verify_password("secret123", h2)
    assert not verify_password("secret124", h1)


def test_verify_password_rejects_malformed_hash():
    assert verify_password("anything", "CHANGE_ME") is False


def test_create_user_stores_hash_not_plaintext(users_repo):
    svc = UserService(users_repo)

    user = svc.create_user(username="  mr.reyes ", password="chalk123")

    assert user.username == "mr.reyes"
    assert user.role == Role.TEACHER
    stored = users_repo.get_by_username("mr.reyes")
    assert stored.password_hash != "chalk123"
    assert verify_password("chalk123", stored.password_hash)


def test_create_user_rejects_short_password(users_repo):
    svc = UserService(users_repo)

    with pytest.raises(ValidationError):
        svc.create_user(username="short", password="12345")
    assert users_repo.get_by_username("short") is None


def test_create_user_accepts_six_character_password(users_repo):
    svc = UserService(users_repo)

    assert svc.create_user(username="six", password="123456").username == "six"


def test_create_user_rejects_duplicate_username(users_repo):
    svc = UserService(users_repo)

    with pytest.raises(DuplicateUsernameError):
        svc.create_user(username="teacher", password="another123")


def test_create_user_requires_username(users_repo):
    svc = UserService(users_repo)

    with pytest.raises(ValidationError):
        svc.create_user(username="   ", password="secret123")


def test_summary_never_exposes_hash(users_repo):
    summary = users_repo.get_by_username("admin").summary()

    assert summary == {"id": 1, "username": "admin", "role": "admin"}


@pytest.mark.parametrize("username, password", [(123, "secret123"), ("new", 1234567), ("new", None)])
def test_create_user_rejects_non_string_credentials(users_repo, username, password):
    with pytest.raises(ValidationError):
        UserService(users_repo).create_user(username=username, password=password)
