"""Cancel invitation use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from onboard.application.usecase.base import BaseUseCase
from onboard.application.usecase.invitation.summary import InvitationSummary
from onboard.domain.service import AuditService, InvitationService, UserService
from onboard.domain.value import (
    AuditAction,
    AuditResourceType,
    IdentityId,
    InvitationId,
    InvitationStatus,
    UserRole,
)


class CancelInvitationRequest(BaseModel):
    caller_identity_id: str
    invitation_id: UUID


class CancelInvitationResponse(BaseModel):
    invitation: InvitationSummary
    message: str = "Invitation cancelled"


class CancelInvitationUseCase(BaseUseCase):
    def __init__(
        self,
        invitation_service: InvitationService,
        user_service: UserService,
        audit_service: AuditService,
    ) -> None:
        self.invitation_service = invitation_service
        self.user_service = user_service
        self.audit_service = audit_service

    async def execute(
        self, request: CancelInvitationRequest
    ) -> CancelInvitationResponse:
        """Cancel a pending invitation on behalf of a site admin."""
        with logfire.span(
            "cancel_invitation.execute", invitation_id=str(request.invitation_id)
        ):
            admin = await self.user_service.require_role(
                IdentityId(request.caller_identity_id),
                UserRole.SITE_ADMIN,
                "cancel invitations",
            )

            cancelled = await self.invitation_service.cancel(
                InvitationId(request.invitation_id)
            )
            await self.audit_service.record(
                AuditAction.INVITATION_CANCELLED,
                AuditResourceType.INVITATION,
                resource_id=str(cancelled.id),
                actor_id=admin.id,
                old_values={"status": InvitationStatus.PENDING.value},
                new_values={"status": cancelled.status.value},
            )

            return CancelInvitationResponse(
                invitation=InvitationSummary.from_invitation(
                    cancelled, cancelled.status
                )
            )
