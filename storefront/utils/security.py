"""
Security utilities for authentication.

Provides password hashing and JWT token generation and validation.
"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import bcrypt
import jwt

from ..config.settings import get_settings

logger = logging.getLogger(__name__)
settings = get_settings()

# bcrypt only looks at the first 72 bytes of a secret
BCRYPT_MAX_BYTES = 72


def _password_bytes(password: str) -> bytes:
    return password.strip().encode("utf-8")[:BCRYPT_MAX_BYTES]


# ==================== PASSWORD HASHING ====================


def hash_password(password: Optional[str]) -> Optional[str]:
    """
    Hash a password using bcrypt.

    Surrounding whitespace is ignored; a blank password yields None.

    Args:
        password: Plain text password

    Returns:
        Hashed password string, or None for a blank password
    """
    if not password or not password.strip():
        return None

    salt = bcrypt.gensalt(rounds=settings.password_hash_rounds)
    hashed = bcrypt.hashpw(_password_bytes(password), salt)
    return hashed.decode("utf-8")


def verify_password(password: str, hashed_password: str) -> bool:
    """
    Verify a password against its hash.

    Args:
        password: Plain text password to verify
        hashed_password: Stored hash to verify against

    Returns:
        True if password matches, False otherwise
    """
    if not password or not hashed_password:
        return False
    try:
        return bcrypt.checkpw(_password_bytes(password), hashed_password.encode("utf-8"))
    except ValueError as e:
        logger.error(f"Password verification failed: {e}")
        return False


# ==================== JWT TOKENS ====================


def create_access_token(user_id: str) -> str:
    """
    Create a signed access token for a user.

    Args:
        user_id: The user's document id

    Returns:
        Encoded JWT access token
    """
    now = datetime.now(timezone.utc)
    expire = now + timedelta(days=settings.jwt_expire_days)

    payload = {
        "_id": str(user_id),
        "iat": now,
        "exp": expire,
    }

    token = jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)
    logger.debug(f"Created access token for user {user_id}, expires at {expire}")
    return token


def decode_access_token(token: str) -> Dict[str, Any]:
    """
    Decode and validate an access token.

    Raises:
        jwt.InvalidTokenError: bad signature, expired token or malformed input
    """
    payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    if "_id" not in payload:
        raise jwt.InvalidTokenError("Token has no subject")
    return payload


def get_token_from_header(authorization: Optional[str]) -> Optional[str]:
    """
    Extract the token from an Authorization header.

    The web client sends the bare token; "Bearer <token>" is accepted too.
    """
    if not authorization or not authorization.strip():
        return None

    parts = authorization.split()
    if len(parts) == 2 and parts[0].lower() == "bearer":
        return parts[1]
    if len(parts) == 1:
        return parts[0]
    return None
