"""
Password hashing and token handling.

Passwords are stored as bcrypt hashes. Tokens are signed JWTs carrying
the user id and username, valid for a configurable number of minutes.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
import jwt

from .config import Config
from .models import UserData


class InvalidTokenError(Exception):
    """Raised when a token is malformed, expired or badly signed."""


# bcrypt only looks at this many bytes of a password
BCRYPT_MAX_BYTES = 72


def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(password: str) -> str:
    """
    Hash a plaintext password with a fresh salt.

    Passwords longer than 72 bytes are truncated, so two passwords that
    share their first 72 bytes hash alike.
    """
    return bcrypt.hashpw(_password_bytes(password), bcrypt.gensalt()).decode("utf-8")


def verify_password(user: UserData, candidate: Optional[str]) -> bool:
    """Check a candidate password against the user's stored hash."""
    if not candidate:
        return False
    try:
        return bcrypt.checkpw(_password_bytes(candidate), user.password.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False


@dataclass
class TokenSubject:
    """Identity carried inside a token."""

    id: str
    username: str


class TokenService:
    """Issues and verifies signed, time-limited tokens."""

    def __init__(self, secret_key: str, algorithm: str = "HS256", expire_minutes: int = 60):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes

    @classmethod
    def from_config(cls, config: Config) -> "TokenService":
        return cls(
            secret_key=config.jwt_secret_key,
            algorithm=config.jwt_algorithm,
            expire_minutes=config.jwt_expire_minutes,
        )

    def issue(self, subject: TokenSubject) -> str:
        """Sign a token for the subject, expiring after expire_minutes."""
        now = datetime.now(timezone.utc)
        payload = {
            "id": subject.id,
            "username": subject.username,
            "iat": now,
            "exp": now + timedelta(minutes=self.expire_minutes),
        }
        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> TokenSubject:
        """
        Decode a token and return its subject.

        Raises:
            InvalidTokenError: On bad signature, expiry, missing claims
                or malformed input.
        """
        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                options={"require": ["exp"]},
            )
        except jwt.PyJWTError as e:
            raise InvalidTokenError(str(e)) from e

        if "id" not in payload or "username" not in payload:
            raise InvalidTokenError("Token is missing subject claims")

        return TokenSubject(id=payload["id"], username=payload["username"])
