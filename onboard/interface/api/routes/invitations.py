"""Public invitation routes: link validation and direct acceptance."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, HTTPException, Query, Request, status
from pydantic import BaseModel

from onboard.adapter.error import AdapterError
from onboard.application.usecase.invitation import (
    AcceptInvitationRequest,
    AcceptInvitationResponse,
    AcceptInvitationUseCase,
    ValidateInvitationRequest,
    ValidateInvitationResponse,
    ValidateInvitationUseCase,
)
from onboard.config import AuthSettings
from onboard.domain.error import DomainError, InvalidInvitationError
from onboard.interface.api.auth import authenticate
from onboard.interface.error import http_error

router = APIRouter(prefix="/invitations", tags=["invitations"], route_class=DishkaRoute)


class AcceptInvitationAPIRequest(BaseModel):
    token: str = ""


@router.get("/validate", response_model=ValidateInvitationResponse)
async def validate_invitation(
    validate_use_case: FromDishka[ValidateInvitationUseCase],
    token: str | None = Query(default=None),
) -> ValidateInvitationResponse:
    """Check an invitation link before the invitee signs up.

    Unknown and already-used tokens are both reported as 404; an expired
    invitation is a 400.
    """
    if not token:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Token is required",
        )

    try:
        return await validate_use_case.execute(ValidateInvitationRequest(token=token))
    except DomainError as e:
        raise http_error(e, {InvalidInvitationError: status.HTTP_404_NOT_FOUND})


@router.post("/accept", response_model=AcceptInvitationResponse)
async def accept_invitation(
    request: AcceptInvitationAPIRequest,
    http_request: Request,
    accept_use_case: FromDishka[AcceptInvitationUseCase],
    auth_settings: FromDishka[AuthSettings],
) -> AcceptInvitationResponse:
    """Accept an invitation as the signed-in identity.

    Raises:
        HTTPException: 401 if not signed in, 400 for a bad, expired or
            mismatched token, 500 if the identity provider update fails
    """
    caller = authenticate(http_request, auth_settings)

    if not request.token:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Token is required",
        )

    try:
        return await accept_use_case.execute(
            AcceptInvitationRequest(
                caller_identity_id=caller.sub,
                caller_email=caller.email,
                token=request.token,
            )
        )
    except (DomainError, AdapterError) as e:
        raise http_error(e)
