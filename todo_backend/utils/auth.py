from functools import wraps

from flask import g, request

from todo_backend.errors import Unauthenticated
from todo_backend.services import get_auth_service


def bearer_token():
    """Token from ``Authorization: Bearer <token>``; None when absent."""
    header = request.headers.get("Authorization")
    if not header:
        return None
    parts = header.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise Unauthenticated("Invalid token format")
    return parts[1]


def auth_required(view):
    """Verify the bearer token and expose the caller as ``g.identity``."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        g.identity = get_auth_service().verify(bearer_token())
        return view(*args, **kwargs)

    return wrapper


def current_identity():
    return g.identity
