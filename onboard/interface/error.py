"""Interface layer errors and their HTTP mapping."""

from fastapi import HTTPException, status

from onboard.adapter.error import AdapterError, ProviderError, WebhookVerificationError
from onboard.domain.error import (
    BusinessRuleViolationError,
    ConflictError,
    DomainError,
    InvalidInvitationError,
    InvitationEmailMismatchError,
    InvitationExpiredError,
    NotAuthorizedError,
    NotFoundError,
    TokenCollisionError,
    ValidationError,
)
from onboard.util.error import SessionTokenError

# First match wins, so subclasses must come before their bases
ERROR_STATUS_CODES: tuple[tuple[type[Exception], int], ...] = (
    (SessionTokenError, status.HTTP_401_UNAUTHORIZED),
    (NotAuthorizedError, status.HTTP_403_FORBIDDEN),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (ConflictError, status.HTTP_400_BAD_REQUEST),
    (InvalidInvitationError, status.HTTP_400_BAD_REQUEST),
    (InvitationExpiredError, status.HTTP_400_BAD_REQUEST),
    (InvitationEmailMismatchError, status.HTTP_400_BAD_REQUEST),
    (BusinessRuleViolationError, status.HTTP_400_BAD_REQUEST),
    (WebhookVerificationError, status.HTTP_400_BAD_REQUEST),
    (TokenCollisionError, status.HTTP_500_INTERNAL_SERVER_ERROR),
    (ProviderError, status.HTTP_500_INTERNAL_SERVER_ERROR),
    (DomainError, status.HTTP_400_BAD_REQUEST),
    (AdapterError, status.HTTP_500_INTERNAL_SERVER_ERROR),
)


def status_code_for(
    error: Exception, overrides: dict[type[Exception], int] | None = None
) -> int:
    for error_type, code in (overrides or {}).items():
        if isinstance(error, error_type):
            return code
    for error_type, code in ERROR_STATUS_CODES:
        if isinstance(error, error_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def http_error(
    error: Exception, overrides: dict[type[Exception], int] | None = None
) -> HTTPException:
    """Translate an application error into the HTTPException to raise.

    Args:
        error: Domain, adapter or session-token error
        overrides: Route-specific status codes checked before the table

    Returns:
        HTTPException carrying the error message as detail
    """
    return HTTPException(status_code=status_code_for(error, overrides), detail=str(error))
