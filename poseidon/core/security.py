"""Password hashing and signed session tokens for authentication."""

from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
import jwt

from poseidon.core.config import settings

# Cost (rounds) read once at startup; 12 outside of tests.
BCRYPT_ROUNDS = settings.BCRYPT_ROUNDS

# Form limits shared with schemas.forms.
USERNAME_MAX_LEN = 125
PASSWORD_MIN_LEN = 8
PASSWORD_MAX_LEN = 128

# Symbols accepted in passwords; at least one is required.
PASSWORD_SYMBOLS = "@$!%*#?&"


def _encode(plain_password: str) -> bytes:
    # bcrypt only reads the first 72 bytes.
    return plain_password.encode("utf-8")[:72]


def hash_password(plain_password: str) -> str:
    """Salted bcrypt digest of plain_password at BCRYPT_ROUNDS cost."""
    if plain_password is None or plain_password == "":
        raise ValueError("A password is required")
    return bcrypt.hashpw(_encode(plain_password), bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash. Never raises."""
    if not plain_password or not hashed:
        return False
    try:
        return bcrypt.checkpw(_encode(plain_password), hashed.encode("utf-8"))
    except (ValueError, TypeError, AttributeError):
        return False


# Verified against when the username is unknown so both failure paths cost the same.
DUMMY_PASSWORD_HASH = hash_password("dummy-password-1!")


def create_session_token(user_id: int, session_version: int) -> str:
    """
    Create a signed session token with sub (user id), ver (session version) and exp.

    No role claim: the gate reads the role from the user record on each request.
    """
    now = datetime.now(UTC)
    expire = now + timedelta(minutes=settings.SESSION_EXPIRE_MINUTES)
    payload: dict[str, Any] = {
        "sub": str(user_id),
        "ver": session_version,
        "exp": expire,
        "iat": now,
    }
    return jwt.encode(
        payload,
        settings.SESSION_SECRET.get_secret_value(),
        algorithm=settings.SESSION_ALGORITHM,
    )


def decode_session_token(token: str) -> dict[str, Any]:
    """
    Decode and validate a session token; return payload (sub, ver, exp, iat).
    Raises jwt.PyJWTError on invalid or expired token.
    """
    return jwt.decode(
        token,
        settings.SESSION_SECRET.get_secret_value(),
        algorithms=[settings.SESSION_ALGORITHM],
    )
