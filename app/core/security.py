"""Password hashing and JWT signing/decoding for authentication."""

from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
import jwt

from app.core.config import Settings
from app.core.errors import HashingFailure, SigningFailure

# Bcrypt cost (rounds) used when no settings are passed.
BCRYPT_ROUNDS = 10

# Min/max lengths for username and password validation.
USERNAME_MIN_LEN = 3
USERNAME_MAX_LEN = 30
PASSWORD_MIN_LEN = 8
PASSWORD_MAX_LEN = 128

# Clients receive tokens with this prefix and send them back the same way.
TOKEN_PREFIX = "Bearer "


def hash_password(plain_password: str, rounds: int = BCRYPT_ROUNDS) -> str:
    """Hash a plain-text password with a fresh salt. Do not store plain passwords."""
    # bcrypt has a 72-byte limit; truncate to avoid errors (validation already limits length).
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=rounds)).decode("utf-8")
    except (ValueError, TypeError) as e:
        raise HashingFailure(f"Password hashing failed: {e!s}") from e


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash (constant-time compare inside bcrypt)."""
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


class TokenIssuer:
    """Signs bearer tokens binding a user id to the current password hash.

    The hash fingerprint makes every token issued before a password change
    unusable, because the stored hash no longer matches the claim.
    """

    def __init__(self, secret: str, algorithm: str = "HS256") -> None:
        if not secret or not secret.strip():
            raise SigningFailure("JWT secret key is not configured")
        self._secret = secret
        self._algorithm = algorithm

    @classmethod
    def from_settings(cls, cfg: Settings) -> "TokenIssuer":
        return cls(cfg.JWT_SECRET.get_secret_value(), cfg.JWT_ALGORITHM)

    def issue(self, user_id: str, hash_fingerprint: str, ttl_seconds: int) -> str:
        """Return a signed JWT (without the ``Bearer`` prefix)."""
        now = datetime.now(UTC)
        payload: dict[str, Any] = {
            "id": str(user_id),
            "hash": hash_fingerprint,
            "iat": now,
            "exp": now + timedelta(seconds=ttl_seconds),
        }
        try:
            return jwt.encode(payload, self._secret, algorithm=self._algorithm)
        except (jwt.PyJWTError, NotImplementedError, TypeError, ValueError) as e:
            raise SigningFailure(f"Token signing failed: {e!s}") from e

    def decode(self, token: str) -> dict[str, Any]:
        """
        Decode and validate a JWT; return payload (id, hash, iat, exp).
        Raises jwt.PyJWTError on invalid or expired token.
        """
        return jwt.decode(
            token,
            self._secret,
            algorithms=[self._algorithm],
            options={"require": ["exp", "iat"]},
        )


def bearer(token: str) -> str:
    return TOKEN_PREFIX + token
