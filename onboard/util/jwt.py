"""Session token verification.

The identity provider issues the session tokens; this service only checks
them.
"""

from datetime import datetime

import jwt
from pydantic import BaseModel

from onboard.config import AuthSettings
from onboard.util.error import SessionTokenError


class SessionTokenPayload(BaseModel):
    """Claims we rely on from an identity-provider session token."""

    sub: str  # Identity-provider subject id
    email: str
    exp: datetime


def verify_token(token: str, settings: AuthSettings) -> SessionTokenPayload:
    """Verify and decode a session token.

    Args:
        token: JWT to verify
        settings: Authentication settings

    Returns:
        Token payload if valid

    Raises:
        SessionTokenError: If token is invalid or expired
    """
    try:
        payload = jwt.decode(
            token,
            settings.session_token_key,
            algorithms=[settings.session_token_algorithm],
        )
    except jwt.ExpiredSignatureError:
        raise SessionTokenError("Session has expired")
    except jwt.InvalidTokenError:
        raise SessionTokenError("Invalid session token")

    try:
        return SessionTokenPayload(**payload)
    except ValueError:
        raise SessionTokenError("Session token is missing required claims")
