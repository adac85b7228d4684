"""JWT token utilities for the admin capability."""

from datetime import datetime, timedelta, timezone

import jwt
from pydantic import BaseModel

from folio.config import AuthSettings

ADMIN_ROLE = "admin"


class TokenPayload(BaseModel):
    """JWT token payload."""

    sub: str  # Email of the token holder
    role: str
    exp: datetime


class JWTError(Exception):
    """JWT-related error."""

    pass


def create_token(email: str, settings: AuthSettings, role: str = ADMIN_ROLE) -> str:
    """Create a JWT token.

    Args:
        email: Email of the token holder
        settings: Authentication settings
        role: Role claim

    Returns:
        Encoded JWT token
    """
    expiry = datetime.now(timezone.utc) + timedelta(days=settings.jwt_expiry_days)

    payload = {
        "sub": email.strip().lower(),
        "role": role,
        "exp": expiry,
    }

    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str, settings: AuthSettings) -> TokenPayload:
    """Verify and decode a JWT token.

    Args:
        token: JWT token to verify
        settings: Authentication settings

    Returns:
        Token payload if valid

    Raises:
        JWTError: If token is invalid or expired
    """
    try:
        payload = jwt.decode(
            token, settings.jwt_secret, algorithms=[settings.jwt_algorithm]
        )
        return TokenPayload(**payload)
    except jwt.ExpiredSignatureError:
        raise JWTError("Token has expired")
    except (jwt.InvalidTokenError, ValueError):
        raise JWTError("Invalid token")
