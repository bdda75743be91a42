"""Password hashing and signed session tokens.

Tokens are HS256 JWTs issued by flask-jwt-extended. The subject is the user
id and an ``email`` claim rides along, so a request can be attributed to a
user without touching the database.
"""
import base64
import hashlib
import logging
from dataclasses import dataclass
from datetime import timedelta

import bcrypt
from flask_jwt_extended import create_access_token, decode_token
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt import PyJWTError

from todo_backend.errors import (
    InvalidCredentials,
    Unauthenticated,
    ValidationError,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Identity:
    user_id: int
    email: str


@dataclass(frozen=True)
class AuthResult:
    token: str
    email: str


def _prehash(password: str) -> bytes:
    # bcrypt only reads 72 bytes; base64(sha256) keeps every character significant
    return base64.b64encode(hashlib.sha256(password.encode("utf-8")).digest())


def _require_credentials(email, password):
    if not isinstance(email, str) or not email.strip():
        raise ValidationError("Email and password are required")
    if not isinstance(password, str) or not password:
        raise ValidationError("Email and password are required")
    return email.strip(), password


class AuthService:
    def __init__(self, user_store, bcrypt_rounds: int = 10, token_ttl: timedelta = timedelta(days=7)):
        self.user_store = user_store
        self.bcrypt_rounds = bcrypt_rounds
        self.token_ttl = token_ttl
        # Built up front so the first unknown-email login costs one checkpw only
        self._dummy_hash = self.hash_password("not-a-real-password")

    def hash_password(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self.bcrypt_rounds)
        return bcrypt.hashpw(_prehash(password), salt).decode("utf-8")

    def check_password(self, password: str, password_hash: str) -> bool:
        try:
            return bcrypt.checkpw(_prehash(password), password_hash.encode("utf-8"))
        except ValueError:
            # Stored value is not a bcrypt hash
            return False

    def issue_token(self, user) -> str:
        return create_access_token(
            identity=str(user.id),
            additional_claims={"email": user.email},
            expires_delta=self.token_ttl,
        )

    def register(self, email, password) -> AuthResult:
        email, password = _require_credentials(email, password)
        user = self.user_store.add(email, self.hash_password(password))
        logger.info("Registered user %s (id=%s)", user.email, user.id)
        return AuthResult(token=self.issue_token(user), email=user.email)

    def login(self, email, password) -> AuthResult:
        email, password = _require_credentials(email, password)
        user = self.user_store.find_by_email(email)
        if user is None:
            # Spend the same bcrypt time as a real mismatch
            self.check_password(password, self._dummy_hash)
            logger.info("Failed login for %s", email)
            raise InvalidCredentials()
        if not self.check_password(password, user.password_hash):
            logger.info("Failed login for %s", email)
            raise InvalidCredentials()
        return AuthResult(token=self.issue_token(user), email=user.email)

    def verify(self, token) -> Identity:
        """Decode ``token`` and return who it belongs to.

        Raises Unauthenticated for a missing, malformed, expired or
        badly signed token.
        """
        if not token:
            raise Unauthenticated("Token not provided")
        try:
            claims = decode_token(token)
        except (PyJWTError, JWTExtendedException) as exc:
            logger.debug("Rejected token: %s", exc)
            raise Unauthenticated() from None

        if claims.get("type") != "access":
            raise Unauthenticated()
        try:
            user_id = int(claims["sub"])
        except (KeyError, TypeError, ValueError):
            raise Unauthenticated() from None
        return Identity(user_id=user_id, email=claims.get("email"))
