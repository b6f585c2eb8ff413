"""List invitations use case."""

import logfire
from pydantic import BaseModel, Field

from onboard.application.usecase.base import BaseUseCase
from onboard.application.usecase.invitation.summary import InvitationSummary
from onboard.domain.service import InvitationService, UserService
from onboard.domain.value import IdentityId, InvitationStatus, UserRole


class ListInvitationsRequest(BaseModel):
    caller_identity_id: str
    status: InvitationStatus | None = None
    limit: int = Field(default=50, ge=1, le=200)
    offset: int = Field(default=0, ge=0)


class ListInvitationsResponse(BaseModel):
    invitations: list[InvitationSummary]


class ListInvitationsUseCase(BaseUseCase):
    """Lists invitations for the admin dashboard.

    Each item reports its effective status, so lapsed invitations show as
    expired even before anything wrote that status.
    """

    def __init__(
        self, invitation_service: InvitationService, user_service: UserService
    ) -> None:
        self.invitation_service = invitation_service
        self.user_service = user_service

    async def execute(self, request: ListInvitationsRequest) -> ListInvitationsResponse:
        with logfire.span(
            "list_invitations.execute",
            status=request.status.value if request.status else None,
        ):
            await self.user_service.require_role(
                IdentityId(request.caller_identity_id),
                UserRole.SITE_ADMIN,
                "view invitations",
            )

            invitations = await self.invitation_service.list_invitations(
                request.status, request.limit, request.offset
            )
            return ListInvitationsResponse(
                invitations=[
                    InvitationSummary.from_invitation(
                        invitation, self.invitation_service.effective_status(invitation)
                    )
                    for invitation in invitations
                ]
            )
