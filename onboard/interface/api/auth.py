"""Caller authentication for API routes.

The identity provider's frontend SDK sends its session token either as a
Bearer token or in a cookie; both carry the same JWT.
"""

from fastapi import HTTPException, Request, status

from onboard.config import AuthSettings
from onboard.util.error import SessionTokenError
from onboard.util.jwt import SessionTokenPayload, verify_token


def session_token_from(request: Request, settings: AuthSettings) -> str | None:
    authorization = request.headers.get("authorization")
    if authorization and authorization.lower().startswith("bearer "):
        return authorization[len("bearer ") :].strip() or None
    return request.cookies.get(settings.session_cookie_name)


def authenticate(request: Request, settings: AuthSettings) -> SessionTokenPayload:
    """Verify the caller's session token.

    Raises:
        HTTPException: 401 if the token is missing or invalid
    """
    token = session_token_from(request, settings)
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )

    try:
        return verify_token(token, settings)
    except SessionTokenError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
        )
