"""Password hashing and JWT access tokens."""

from __future__ import annotations

import base64
import hashlib
import hmac
import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Any

import jwt

from dochub.core.config import settings
from dochub.core.exceptions import UnauthorizedError

logger = logging.getLogger(__name__)

_HASH_SCHEME = "pbkdf2_sha256"


def hash_password(password: str, *, iterations: int | None = None) -> str:
    """Return ``pbkdf2_sha256$<iterations>$<salt>$<hash>`` for *password*."""
    rounds = iterations or settings.password_hash_iterations
    salt = secrets.token_bytes(16)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, rounds)
    return "$".join(
        [
            _HASH_SCHEME,
            str(rounds),
            base64.b64encode(salt).decode("ascii"),
            base64.b64encode(digest).decode("ascii"),
        ]
    )


def verify_password(password: str, encoded: str) -> bool:
    """Constant-time check of *password* against an encoded hash."""
    try:
        scheme, rounds, salt_b64, digest_b64 = encoded.split("$")
    except ValueError:
        return False
    if scheme != _HASH_SCHEME or not rounds.isdigit() or int(rounds) < 1:
        return False
    try:
        salt = base64.b64decode(salt_b64, validate=True)
        expected = base64.b64decode(digest_b64, validate=True)
    except ValueError:
        return False
    actual = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, int(rounds))
    return hmac.compare_digest(actual, expected)


def create_access_token(user_id: str, email: str, *, expires_in: timedelta | None = None) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "sub": user_id,
        "email": email,
        "iat": now,
        "exp": now + (expires_in or timedelta(minutes=settings.jwt_expire_minutes)),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> dict[str, Any]:
    """Verify *token* and return its claims.

    Any failure (expired, tampered, malformed, missing claims) surfaces as the
    same :class:`UnauthorizedError` so callers cannot probe token state.
    """
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["sub", "exp"]},
        )
    except jwt.ExpiredSignatureError as exc:
        logger.debug("Rejected expired access token")
        raise UnauthorizedError() from exc
    except jwt.InvalidTokenError as exc:
        logger.debug("Rejected invalid access token: %s", exc)
        raise UnauthorizedError() from exc
    return payload
