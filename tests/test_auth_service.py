# tests/test_auth_service.py

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from todo_backend.errors import (
    DuplicateEmail,
    InvalidCredentials,
    Unauthenticated,
    ValidationError,
)
from todo_backend.models.user_model import User
from todo_backend.services import get_auth_service
from todo_backend.services.auth_service import AuthService
from todo_backend.stores.user_store import UserStore
from todo_backend.utils.db import db

pytestmark = pytest.mark.usefixtures("app_ctx")


def test_register_then_login_yield_same_identity() -> None:
    auth = get_auth_service()

    registered = auth.register("alice@example.com", "s3cret-pass")
    logged_in = auth.login("alice@example.com", "s3cret-pass")

    assert registered.email == logged_in.email == "alice@example.com"
    first = auth.verify(registered.token)
    second = auth.verify(logged_in.token)
    assert first == second
    assert first.email == "alice@example.com"
    assert isinstance(first.user_id, int)


def test_password_is_stored_as_bcrypt_hash() -> None:
    get_auth_service().register("alice@example.com", "s3cret-pass")

    user = db.session.execute(db.select(User)).scalar_one()
    assert user.password_hash != "s3cret-pass"
    assert user.password_hash.startswith("$2b$")


def test_duplicate_email_is_rejected_without_second_row() -> None:
    auth = get_auth_service()
    auth.register("alice@example.com", "s3cret-pass")

    with pytest.raises(DuplicateEmail):
        auth.register("alice@example.com", "another-pass")

    assert db.session.execute(db.select(db.func.count(User.id))).scalar_one() == 1


def test_wrong_password_and_unknown_email_are_indistinguishable() -> None:
    auth = get_auth_service()
    auth.register("alice@example.com", "s3cret-pass")

    with pytest.raises(InvalidCredentials) as wrong_password:
        auth.login("alice@example.com", "not-the-pass")
    with pytest.raises(InvalidCredentials) as unknown_email:
        auth.login("nobody@example.com", "s3cret-pass")

    assert wrong_password.value.message == unknown_email.value.message
    assert wrong_password.value.status_code == unknown_email.value.status_code == 400


def test_passwords_longer_than_bcrypt_window_are_not_truncated() -> None:
    auth = get_auth_service()
    prefix = "x" * 80
    auth.register("alice@example.com", prefix + "a")

    with pytest.raises(InvalidCredentials):
        auth.login("alice@example.com", prefix + "b")


@pytest.mark.parametrize(
    ("email", "password"),
    [(None, "pw"), ("", "pw"), ("   ", "pw"), ("a@example.com", None), ("a@example.com", ""), (42, "pw")],
)
def test_missing_credentials_are_validation_errors(email, password) -> None:
    with pytest.raises(ValidationError):
        get_auth_service().register(email, password)
    with pytest.raises(ValidationError):
        get_auth_service().login(email, password)


@pytest.mark.parametrize("token", [None, "", "not-a-jwt", "a.b.c"])
def test_verify_rejects_missing_or_malformed_tokens(token) -> None:
    with pytest.raises(Unauthenticated):
        get_auth_service().verify(token)


def test_verify_rejects_token_signed_with_other_secret() -> None:
    forged = jwt.encode(
        {
            "sub": "1",
            "email": "alice@example.com",
            "type": "access",
            "exp": datetime.now(timezone.utc) + timedelta(days=1),
        },
        "some-other-secret-with-enough-length-for-hs256",
        algorithm="HS256",
    )

    with pytest.raises(Unauthenticated):
        get_auth_service().verify(forged)


def test_verify_rejects_expired_token() -> None:
    auth = get_auth_service()
    result = auth.register("alice@example.com", "s3cret-pass")
    user = UserStore(db).find_by_email(result.email)

    expired = AuthService(UserStore(db), bcrypt_rounds=4, token_ttl=timedelta(seconds=-60))
    token = expired.issue_token(user)

    with pytest.raises(Unauthenticated):
        auth.verify(token)


def test_token_expires_after_seven_days(app) -> None:
    auth = get_auth_service()
    result = auth.register("alice@example.com", "s3cret-pass")

    claims = jwt.decode(result.token, app.config["JWT_SECRET_KEY"], algorithms=["HS256"])

    assert claims["exp"] - claims["iat"] == int(timedelta(days=7).total_seconds())
    assert claims["email"] == "alice@example.com"


def test_unknown_email_login_does_not_hash(monkeypatch) -> None:
    auth = get_auth_service()
    assert auth._dummy_hash.startswith("$2b$04$")

    def fail(_password):
        raise AssertionError("login must not build a new hash")

    monkeypatch.setattr(auth, "hash_password", fail)
    with pytest.raises(InvalidCredentials):
        auth.login("nobody@example.com", "s3cret-pass")
