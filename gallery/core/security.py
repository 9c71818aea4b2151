"""Password hashing and signed session credentials (JWT) for authentication."""

import logging
from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
import jwt
from pydantic import ValidationError

from gallery.core.config import settings
from gallery.schemas.auth import Identity

logger = logging.getLogger(__name__)

# Bcrypt cost (rounds); fixed so every stored hash has the same work factor.
BCRYPT_ROUNDS = 12

# Min/max lengths for username and password validation.
USERNAME_MIN_LEN = 1
USERNAME_MAX_LEN = 255
PASSWORD_MIN_LEN = 8
PASSWORD_MAX_LEN = 128


def hash_password(plain_password: str) -> str:
    """Hash a plain-text password for storage. Salt is per call and embedded in the result."""
    # bcrypt has a 72-byte limit; truncate to avoid errors.
    pw_bytes = plain_password.encode("utf-8")[:72]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash. Malformed hashes are just a mismatch."""
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError, AttributeError):
        return False


def mint_credential(identity: Identity, ttl: timedelta | None = None) -> str:
    """Create a signed credential carrying id, username, role, iat and exp."""
    now = datetime.now(UTC)
    if ttl is None:
        ttl = timedelta(minutes=settings.JWT_EXPIRE_MINUTES)
    payload: dict[str, Any] = {
        "id": identity.id,
        "username": identity.username,
        "role": identity.role,
        "iat": now,
        "exp": now + ttl,
    }
    return jwt.encode(
        payload,
        settings.JWT_SECRET.get_secret_value(),
        algorithm=settings.JWT_ALGORITHM,
    )


def verify_credential(token: str) -> Identity | None:
    """
    Decode and validate a credential; return its Identity.
    Returns None for a bad signature, malformed token or claims, or an expired token.
    """
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET.get_secret_value(),
            algorithms=[settings.JWT_ALGORITHM],
            options={"require": ["exp", "iat"]},
        )
    except jwt.PyJWTError as e:
        logger.debug("Rejected credential: %s", e)
        return None
    try:
        return Identity.model_validate(payload)
    except ValidationError:
        logger.debug("Rejected credential: invalid claims")
        return None
