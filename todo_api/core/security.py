"""Password hashing and JWT issuance/verification for authentication."""

import secrets
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from functools import cached_property
from typing import Any, Protocol

import bcrypt
import jwt

# Default bcrypt cost (rounds); overridable via BCRYPT_ROUNDS.
BCRYPT_ROUNDS = 12
# bcrypt only looks at the first 72 bytes of input.
BCRYPT_MAX_BYTES = 72

# Min/max lengths for username and password validation.
USERNAME_MIN_LEN = 3
USERNAME_MAX_LEN = 50
PASSWORD_MIN_LEN = 8
PASSWORD_MAX_LEN = 128

TOKEN_TTL = timedelta(days=1)


class InvalidTokenError(Exception):
    """Raised when a token is malformed, tampered with, or expired."""


class _Principal(Protocol):
    id: int
    username: str


class PasswordHasher:
    """bcrypt hash/verify. Hash output embeds a random salt; verify is deterministic."""

    def __init__(self, rounds: int = BCRYPT_ROUNDS) -> None:
        self.rounds = rounds

    @staticmethod
    def _encode(plain_password: str) -> bytes:
        if plain_password is None:
            raise TypeError("password must be a string, not None")
        return plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]

    def hash(self, plain_password: str) -> str:
        """Hash a plain-text password for storage. Do not store plain passwords."""
        pw_bytes = self._encode(plain_password)
        return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=self.rounds)).decode("utf-8")

    def verify(self, plain_password: str, hashed: str) -> bool:
        """Verify a plain password against a stored hash. False on mismatch or bad digest."""
        pw_bytes = self._encode(plain_password)
        if hashed is None:
            raise TypeError("hash must be a string, not None")
        try:
            return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
        except (ValueError, TypeError):
            return False

    @cached_property
    def dummy_hash(self) -> str:
        """Digest of a random value, used to spend equal time on unknown usernames."""
        return self.hash(secrets.token_urlsafe(16))


@dataclass(frozen=True)
class TokenClaims:
    """Decoded token payload. `username` is informational only."""

    subject: int
    username: str | None
    issued_at: datetime
    expires_at: datetime


class TokenService:
    """Signs and verifies bearer tokens with a process-wide secret."""

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        ttl: timedelta = TOKEN_TTL,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        if not secret or not secret.strip():
            raise ValueError("JWT secret must be set and non-empty")
        self._secret = secret
        self.algorithm = algorithm
        self.ttl = ttl
        self._clock = clock or (lambda: datetime.now(UTC))

    def issue(self, identity: _Principal) -> str:
        """Create a token with sub (user id), username, iat and exp = iat + ttl."""
        now = self._clock()
        payload: dict[str, Any] = {
            "sub": str(identity.id),
            "username": identity.username,
            "iat": now,
            "exp": now + self.ttl,
        }
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def verify(self, token: str) -> TokenClaims:
        """
        Decode and validate a token; return its claims.
        Raises InvalidTokenError on bad signature, malformed token, or expiry.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={"require": ["sub", "iat", "exp"]},
            )
        except jwt.ExpiredSignatureError as e:
            raise InvalidTokenError("Token has expired") from e
        except jwt.PyJWTError as e:
            raise InvalidTokenError(f"Invalid token: {e}") from e

        try:
            subject = int(payload["sub"])
        except (TypeError, ValueError) as e:
            raise InvalidTokenError("Invalid token subject") from e

        return TokenClaims(
            subject=subject,
            username=payload.get("username"),
            issued_at=datetime.fromtimestamp(payload["iat"], UTC),
            expires_at=datetime.fromtimestamp(payload["exp"], UTC),
        )
