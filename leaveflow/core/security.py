"""
Security utilities for authentication.

Provides password hashing with bcrypt and JWT session token management
with validation and error handling.
"""
from __future__ import annotations

import hashlib
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import bcrypt
from jose import ExpiredSignatureError, JWTError, jwt

from leaveflow.config.settings import Settings
from leaveflow.core.exceptions import AuthenticationError, ErrorCode, ValidationError


@dataclass(frozen=True)
class JWTSettings:
    """
    JWT configuration settings.

    Example:
        >>> jwt_settings = JWTSettings.from_settings(get_settings())
    """
    secret_key: str
    algorithm: str = "HS256"
    access_token_expires_minutes: int = 480

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if not self.secret_key:
            raise ValueError("JWT secret_key cannot be empty")
        if self.access_token_expires_minutes <= 0:
            raise ValueError("access_token_expires_minutes must be positive")

    @classmethod
    def from_settings(cls, settings: Settings) -> "JWTSettings":
        return cls(
            secret_key=settings.JWT_SECRET_KEY,
            algorithm=settings.JWT_ALGORITHM,
            access_token_expires_minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES,
        )


# ------------------------------------------------------------------ #
# Password hashing
# ------------------------------------------------------------------ #

def _prepare_password_for_bcrypt(password: str) -> bytes:
    """
    Prepare a password for bcrypt by handling the 72-byte limit.

    Passwords that would exceed the limit are replaced by their SHA-256
    hex digest, which is well under it.
    """
    raw = password.encode('utf-8')
    if len(raw) > 71:
        return hashlib.sha256(raw).hexdigest().encode('ascii')
    return raw


def hash_password(password: str, rounds: int = 10) -> str:
    """
    Hash a plaintext password using bcrypt.

    Raises:
        ValidationError: If password is empty
    """
    if not password:
        raise ValidationError("Password cannot be empty", field="password")

    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(_prepare_password_for_bcrypt(password), salt).decode('utf-8')


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    """Verify a plaintext password against a stored hash."""
    if not plain_password or not hashed_password:
        return False

    stored = hashed_password.encode('utf-8')
    try:
        if bcrypt.checkpw(_prepare_password_for_bcrypt(plain_password), stored):
            return True
        raw = plain_password.encode('utf-8')
        if len(raw) > 71:
            # Hashes written by bcrypt implementations that truncate at 72 bytes
            return bcrypt.checkpw(raw[:72], stored)
        return False
    except ValueError:
        # Stored value is not a bcrypt hash
        return False


# ------------------------------------------------------------------ #
# JWT utilities
# ------------------------------------------------------------------ #

def _utcnow() -> datetime:
    """Get current UTC time as timezone-aware datetime."""
    return datetime.now(timezone.utc)


class TokenDecodeError(AuthenticationError):
    """Raised when JWT token decoding fails."""

    def __init__(self, message: str = "Invalid or expired token") -> None:
        super().__init__(message, ErrorCode.TOKEN_INVALID)


class TokenExpiredError(AuthenticationError):
    """Raised when JWT token has expired."""

    def __init__(self) -> None:
        super().__init__("Token has expired", ErrorCode.TOKEN_EXPIRED)


def create_access_token(
    *,
    subject: Any,
    jwt_settings: JWTSettings,
    additional_claims: Optional[dict[str, Any]] = None,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """
    Create a signed JWT access token.

    Args:
        subject: Employee row identifier
        jwt_settings: JWT configuration
        additional_claims: Identity claims to embed (empId, name, ...)
        expires_delta: Custom expiry (overrides default)

    Returns:
        Encoded JWT token string
    """
    now = _utcnow()

    if expires_delta is None:
        expires_delta = timedelta(minutes=jwt_settings.access_token_expires_minutes)

    payload: dict[str, Any] = {
        "sub": str(subject),
        "iat": int(now.timestamp()),
        "exp": int((now + expires_delta).timestamp()),
        "type": "access",
    }
    if additional_claims:
        payload.update(additional_claims)

    return jwt.encode(
        payload,
        jwt_settings.secret_key,
        algorithm=jwt_settings.algorithm,
    )


def decode_token(token: str, jwt_settings: JWTSettings) -> dict[str, Any]:
    """
    Decode and validate a JWT token.

    Raises:
        TokenDecodeError: If token is invalid
        TokenExpiredError: If token has expired
    """
    if not token:
        raise TokenDecodeError("Missing token")

    try:
        return jwt.decode(
            token,
            jwt_settings.secret_key,
            algorithms=[jwt_settings.algorithm],
        )
    except ExpiredSignatureError as exc:
        raise TokenExpiredError() from exc
    except JWTError as exc:
        raise TokenDecodeError("Invalid or malformed token") from exc
