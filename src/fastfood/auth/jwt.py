"""JWT token creation and verification.

Learn: JWT (JSON Web Token) provides stateless authentication.
- Access token: short-lived (60min), used for API calls and WebSockets
- Refresh token: long-lived (30 days), used to get new access tokens

The token carries the subject id and role. verify_identity() is the one
verifier shared by the HTTP auth filter and the WebSocket gateway, so a
token valid for one is valid for the other until it expires.
"""

import enum
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

from fastfood.config import settings


class InvalidCredential(Exception):
    """Raised when a credential is missing, malformed, expired or forged."""


class Role(str, enum.Enum):
    USER = "user"
    ADMIN = "admin"


@dataclass(frozen=True)
class Identity:
    """The authenticated subject behind a request or connection."""

    subject_id: str
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN


def create_access_token(
    subject_id: str,
    role: Role | str = Role.USER,
    name: Optional[str] = None,
    expires_minutes: Optional[int] = None,
) -> str:
    """Create a JWT access token."""
    now = datetime.now(timezone.utc)
    payload = {
        "sub": subject_id,
        "role": Role(role).value,
        "type": "access",
        "exp": now + timedelta(
            minutes=expires_minutes or settings.access_token_expire_minutes
        ),
        "iat": now,
    }
    if name:
        payload["name"] = name
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def create_refresh_token(
    subject_id: str,
    role: Role | str = Role.USER,
    expires_days: Optional[int] = None,
) -> str:
    """Create a JWT refresh token."""
    now = datetime.now(timezone.utc)
    payload = {
        "sub": subject_id,
        "role": Role(role).value,
        "type": "refresh",
        "exp": now + timedelta(
            days=expires_days or settings.refresh_token_expire_days
        ),
        "iat": now,
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: Optional[str]) -> dict:
    """Verify and decode a JWT token.

    Returns the payload dict on success.
    Raises InvalidCredential on failure.
    """
    if not token:
        raise InvalidCredential("Token missing")
    try:
        return jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["exp", "sub", "role"]},
        )
    except jwt.ExpiredSignatureError:
        raise InvalidCredential("Token has expired")
    except jwt.InvalidTokenError as e:
        raise InvalidCredential(f"Invalid token: {e}")


def verify_identity(credential: Optional[str]) -> Identity:
    """Verify an access token and return the identity it carries.

    Rejects missing credentials, bad structure or signature, expired
    tokens, unknown roles and refresh tokens.
    """
    payload = verify_token(credential)
    if payload.get("type", "access") != "access":
        raise InvalidCredential("Not an access token")
    try:
        role = Role(payload["role"])
    except ValueError:
        raise InvalidCredential("Unknown role")
    return Identity(subject_id=str(payload["sub"]), role=role)
