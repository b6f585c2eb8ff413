"""Site-admin routes: invitation management and audit trail."""

from datetime import date
from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Query, Request, status
from pydantic import BaseModel

from onboard.adapter.error import AdapterError
from onboard.application.usecase.audit import (
    ListAuditLogsRequest,
    ListAuditLogsResponse,
    ListAuditLogsUseCase,
)
from onboard.application.usecase.invitation import (
    CancelInvitationRequest,
    CancelInvitationResponse,
    CancelInvitationUseCase,
    CreateInvitationRequest,
    CreateInvitationResponse,
    CreateInvitationUseCase,
    ListInvitationsRequest,
    ListInvitationsResponse,
    ListInvitationsUseCase,
    ResendInvitationRequest,
    ResendInvitationResponse,
    ResendInvitationUseCase,
)
from onboard.config import AuthSettings
from onboard.domain.error import DomainError
from onboard.domain.value import AuditCategory, InvitationStatus, UserRole
from onboard.interface.api.auth import authenticate
from onboard.interface.error import http_error

router = APIRouter(prefix="/admin", tags=["admin"], route_class=DishkaRoute)


class CreateInvitationAPIRequest(BaseModel):
    """API request for inviting a user."""

    email: str = ""
    first_name: str = ""
    last_name: str = ""
    role: UserRole | None = None
    company_id: UUID | None = None
    phone: str | None = None
    job_title: str | None = None
    department: str | None = None
    location: str | None = None
    date_of_birth: date | None = None


@router.post(
    "/invitations",
    response_model=CreateInvitationResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_invitation(
    request: CreateInvitationAPIRequest,
    http_request: Request,
    create_use_case: FromDishka[CreateInvitationUseCase],
    auth_settings: FromDishka[AuthSettings],
) -> CreateInvitationResponse:
    """Invite someone and email them the acceptance link.

    Raises:
        HTTPException: 400 for invalid input or conflicts, 401/403 for the
            caller, 404 for an unknown company, 500 if the email fails
    """
    caller = authenticate(http_request, auth_settings)

    try:
        return await create_use_case.execute(
            CreateInvitationRequest(
                caller_identity_id=caller.sub,
                **request.model_dump(),
            )
        )
    except (DomainError, AdapterError) as e:
        raise http_error(e)


@router.get("/invitations", response_model=ListInvitationsResponse)
async def list_invitations(
    http_request: Request,
    list_use_case: FromDishka[ListInvitationsUseCase],
    auth_settings: FromDishka[AuthSettings],
    status_filter: InvitationStatus | None = Query(default=None, alias="status"),
    limit: int = Query(default=50, ge=1, le=200),
    offset: int = Query(default=0, ge=0),
) -> ListInvitationsResponse:
    caller = authenticate(http_request, auth_settings)

    try:
        return await list_use_case.execute(
            ListInvitationsRequest(
                caller_identity_id=caller.sub,
                status=status_filter,
                limit=limit,
                offset=offset,
            )
        )
    except DomainError as e:
        raise http_error(e)


@router.post(
    "/invitations/{invitation_id}/cancel", response_model=CancelInvitationResponse
)
async def cancel_invitation(
    invitation_id: UUID,
    http_request: Request,
    cancel_use_case: FromDishka[CancelInvitationUseCase],
    auth_settings: FromDishka[AuthSettings],
) -> CancelInvitationResponse:
    caller = authenticate(http_request, auth_settings)

    try:
        return await cancel_use_case.execute(
            CancelInvitationRequest(
                caller_identity_id=caller.sub, invitation_id=invitation_id
            )
        )
    except DomainError as e:
        raise http_error(e)


@router.post(
    "/invitations/{invitation_id}/resend", response_model=ResendInvitationResponse
)
async def resend_invitation(
    invitation_id: UUID,
    http_request: Request,
    resend_use_case: FromDishka[ResendInvitationUseCase],
    auth_settings: FromDishka[AuthSettings],
) -> ResendInvitationResponse:
    """Issue a new token and expiry for a pending invitation and email it."""
    caller = authenticate(http_request, auth_settings)

    try:
        return await resend_use_case.execute(
            ResendInvitationRequest(
                caller_identity_id=caller.sub, invitation_id=invitation_id
            )
        )
    except (DomainError, AdapterError) as e:
        raise http_error(e)


@router.get("/audit-logs", response_model=ListAuditLogsResponse)
async def list_audit_logs(
    http_request: Request,
    list_use_case: FromDishka[ListAuditLogsUseCase],
    auth_settings: FromDishka[AuthSettings],
    category: AuditCategory | None = Query(default=None),
    limit: int = Query(default=50, ge=1, le=200),
    offset: int = Query(default=0, ge=0),
) -> ListAuditLogsResponse:
    caller = authenticate(http_request, auth_settings)

    try:
        return await list_use_case.execute(
            ListAuditLogsRequest(
                caller_identity_id=caller.sub,
                category=category,
                limit=limit,
                offset=offset,
            )
        )
    except DomainError as e:
        raise http_error(e)
