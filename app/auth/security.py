# =============================================================================
# app/auth/security.py - Password Hashing and Bearer Tokens
# =============================================================================
# Thin wrappers around bcrypt and python-jose. The signing secret is always
# passed in by the caller (it comes from Settings), never read from a global
# here.
# =============================================================================

from datetime import datetime, timedelta, timezone
from typing import Any

import bcrypt
from jose import jwt

# bcrypt only looks at the first 72 bytes and bcrypt>=4.1 rejects longer
# input. Truncate on both hash and verify.
BCRYPT_MAX_BYTES = 72

DEFAULT_ALGORITHM = "HS256"
DEFAULT_EXPIRES_DAYS = 7


def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(password: str, rounds: int = 10) -> str:
    """
    Hash a password with a fresh salt.

    Args:
        password: Plain-text password
        rounds: bcrypt cost factor

    Returns:
        The bcrypt hash as a str (safe to store in a text column)
    """
    hashed = bcrypt.hashpw(_password_bytes(password), bcrypt.gensalt(rounds=rounds))
    return hashed.decode("utf-8")


def verify_password(password: str, hashed: str | None) -> bool:
    """
    Check a password against a stored hash.

    A missing or malformed hash counts as a mismatch.
    """
    if not hashed:
        return False
    try:
        return bcrypt.checkpw(_password_bytes(password), hashed.encode("utf-8"))
    except ValueError:
        return False


def create_access_token(
    user_id: str,
    secret: str,
    expires_days: int = DEFAULT_EXPIRES_DAYS,
    algorithm: str = DEFAULT_ALGORITHM,
    now: datetime | None = None,
) -> str:
    """
    Sign a bearer token for a user.

    The payload carries the user id twice: as "_id" (what the WTWR frontend
    reads) and as the standard "sub" claim.

    Args:
        user_id: 24-hex user identifier
        secret: Shared signing secret
        expires_days: Token lifetime
        algorithm: HMAC algorithm
        now: Issue time (defaults to the current UTC time)

    Returns:
        Encoded JWT string
    """
    issued_at = now or datetime.now(timezone.utc)
    payload = {
        "_id": user_id,
        "sub": user_id,
        "iat": issued_at,
        "exp": issued_at + timedelta(days=expires_days),
    }
    return jwt.encode(payload, secret, algorithm=algorithm)


def decode_access_token(
    token: str,
    secret: str,
    algorithm: str = DEFAULT_ALGORITHM,
) -> dict[str, Any]:
    """
    Verify a bearer token and return its payload.

    Raises:
        jose.ExpiredSignatureError: If the token has expired
        jose.JWTError: For any other verification failure
    """
    return jwt.decode(token, secret, algorithms=[algorithm])
