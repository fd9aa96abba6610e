"""
Password hashing and access token helpers.

Passwords are hashed with bcrypt directly (no passlib wrapper). Access tokens
are HS256 JWTs signed with ``Settings.jwt_secret`` that carry the user id as
the ``sub`` claim plus the user's email, and expire after
``Settings.access_token_expire_minutes``.
"""
import logging
from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
from jose import JWTError, jwt

from core.config import Settings

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"

# bcrypt only looks at the first 72 bytes of its input; longer passwords are
# rejected at the schema layer.
BCRYPT_MAX_PASSWORD_BYTES = 72


def hash_password(plain: str, rounds: int = 10) -> str:
    """Return a bcrypt hash of the password using a fresh salt."""
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(plain.encode("utf-8"), salt).decode("utf-8")


def verify_password(plain: str, hashed: str) -> bool:
    """Return True if the plaintext password matches the bcrypt hash."""
    try:
        return bcrypt.checkpw(plain.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        # Malformed stored hash or over-long input
        logger.warning("password_verify_error")
        return False


def create_access_token(
    settings: Settings,
    user_id: int,
    email: str,
    expires_delta: timedelta | None = None,
) -> str:
    """
    Encode a signed JWT for the given user.

    Args:
        settings: Provides the signing secret and default lifetime.
        user_id: Stored as the ``sub`` claim (stringified, per RFC 7519).
        email: Stored as the ``email`` claim.
        expires_delta: Overrides the configured lifetime.
    """
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.access_token_expire_minutes)
    now = datetime.now(UTC)
    payload = {
        "sub": str(user_id),
        "email": email,
        "iat": now,
        "exp": now + expires_delta,
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=ALGORITHM)


def decode_access_token(settings: Settings, token: str) -> dict[str, Any] | None:
    """Verify signature and expiry. Returns the claims, or None on any failure."""
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[ALGORITHM])
    except JWTError:
        return None
    if "sub" not in payload:
        return None
    return payload
