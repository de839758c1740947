"""Password hashing and JWT creation/verification for authentication."""

import hashlib
import hmac
import secrets
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt

from app.core.config import settings

# Stored hash layout: hex(derived key) followed by the hex salt.
# Existing rows depend on these sizes; do not change them.
SALT_BYTES = 16
KEY_BYTES = 32
KEY_HEX_LEN = KEY_BYTES * 2
SALT_HEX_LEN = SALT_BYTES * 2

# scrypt cost parameters (N, r, p).
SCRYPT_N = 16384
SCRYPT_R = 8
SCRYPT_P = 1

PASSWORD_MIN_LEN = 8
PASSWORD_MAX_LEN = 128


def _derive_key(password: str, salt_hex: str) -> str:
    # The salt is used in its hex form, as text.
    key = hashlib.scrypt(
        password.encode("utf-8"),
        salt=salt_hex.encode("utf-8"),
        n=SCRYPT_N,
        r=SCRYPT_R,
        p=SCRYPT_P,
        dklen=KEY_BYTES,
    )
    return key.hex()


def hash_password(plain_password: str) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    salt_hex = secrets.token_hex(SALT_BYTES)
    return _derive_key(plain_password, salt_hex) + salt_hex


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash."""
    if len(hashed) != KEY_HEX_LEN + SALT_HEX_LEN:
        return False
    stored_key, salt_hex = hashed[:KEY_HEX_LEN], hashed[KEY_HEX_LEN:]
    candidate = _derive_key(plain_password, salt_hex)
    return hmac.compare_digest(candidate, stored_key)


def create_access_token(
    claims: dict[str, Any],
    expires_delta: timedelta | None = None,
) -> str:
    """Create a signed session token carrying claims plus iat and exp."""
    now = datetime.now(UTC)
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.JWT_EXPIRE_MINUTES)
    payload: dict[str, Any] = {
        **claims,
        "exp": now + expires_delta,
        "iat": now,
    }
    secret = settings.JWT_SECRET.get_secret_value()
    return jwt.encode(
        payload,
        secret,
        algorithm=settings.JWT_ALGORITHM,
    )


def decode_access_token(token: str) -> dict[str, Any]:
    """
    Decode and validate JWT; return payload (claims, exp, iat).
    Raises jwt.PyJWTError on invalid or expired token.
    """
    secret = settings.JWT_SECRET.get_secret_value()
    return jwt.decode(
        token,
        secret,
        algorithms=[settings.JWT_ALGORITHM],
        options={"require": ["exp"]},
    )
