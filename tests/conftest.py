# tests/conftest.py

from __future__ import annotations

from pathlib import Path

import pytest
from flask import Flask

from todo_backend.app import create_app
from todo_backend.services import get_auth_service


@pytest.fixture()
def app(tmp_path: Path) -> Flask:
    """
    App wired to a throwaway SQLite file.

    bcrypt runs at its minimum cost so the suite stays fast; everything
    else (schema, tokens, error handlers) is the real thing.
    """
    frontend = tmp_path / "frontend"
    frontend.mkdir()
    (frontend / "index.html").write_text('<!doctype html><div id="app"></div>', encoding="utf-8")

    return create_app(
        {
            "TESTING": True,
            "SQLALCHEMY_DATABASE_URI": f"sqlite:///{tmp_path / 'todo.sqlite3'}",
            "BCRYPT_ROUNDS": 4,
            "JWT_SECRET_KEY": "test-jwt-secret-with-enough-length-for-hs256",
            "FRONTEND_DIR": str(frontend),
        }
    )


@pytest.fixture()
def app_ctx(app: Flask):
    with app.app_context():
        yield


@pytest.fixture()
def client(app: Flask):
    return app.test_client()


@pytest.fixture()
def register(client):
    """Register a user over HTTP and return its Authorization headers."""

    def _register(email: str = "alice@example.com", password: str = "s3cret-pass") -> dict:
        resp = client.post("/api/register", json={"email": email, "password": password})
        assert resp.status_code == 200, resp.get_json()
        return {"Authorization": f"Bearer {resp.get_json()['token']}"}

    return _register


@pytest.fixture()
def owners(app_ctx) -> tuple[int, int]:
    """Two registered users (alice, bob) as raw user ids."""
    auth = get_auth_service()
    ids = []
    for email in ("alice@example.com", "bob@example.com"):
        result = auth.register(email, "s3cret-pass")
        ids.append(auth.verify(result.token).user_id)
    return ids[0], ids[1]
