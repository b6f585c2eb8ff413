"""Resend invitation use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from onboard.adapter.error import ProviderError
from onboard.application.usecase.base import BaseUseCase
from onboard.application.usecase.invitation.summary import InvitationSummary
from onboard.domain.service import (
    AuditService,
    InvitationService,
    NotificationService,
    UserService,
)
from onboard.domain.value import (
    AuditAction,
    AuditResourceType,
    IdentityId,
    InvitationId,
    UserRole,
)


class ResendInvitationRequest(BaseModel):
    caller_identity_id: str
    invitation_id: UUID


class ResendInvitationResponse(BaseModel):
    invitation: InvitationSummary
    message: str = "Invitation resent successfully"


class ResendInvitationUseCase(BaseUseCase):
    """Use case for re-sending an invitation with a fresh token.

    The previous link stops working; the new one is valid for the full
    expiry window again. If the new link cannot be emailed, the previous
    token and deadline are put back.
    """

    def __init__(
        self,
        invitation_service: InvitationService,
        user_service: UserService,
        notification_service: NotificationService,
        audit_service: AuditService,
    ) -> None:
        self.invitation_service = invitation_service
        self.user_service = user_service
        self.notification_service = notification_service
        self.audit_service = audit_service

    async def execute(
        self, request: ResendInvitationRequest
    ) -> ResendInvitationResponse:
        """Reissue and email a pending invitation.

        Raises:
            NotFoundError: If the caller or invitation does not exist
            NotAuthorizedError: If the caller is not a site admin
            BusinessRuleViolationError: If the invitation is not pending
            InvitationExpiredError: If the invitation already lapsed
            ProviderError: If the email could not be delivered
        """
        with logfire.span(
            "resend_invitation.execute", invitation_id=str(request.invitation_id)
        ):
            admin = await self.user_service.require_role(
                IdentityId(request.caller_identity_id),
                UserRole.SITE_ADMIN,
                "resend invitations",
            )

            previous = await self.invitation_service.get_by_id(
                InvitationId(request.invitation_id)
            )
            reissued = await self.invitation_service.reissue(previous.id)

            try:
                await self.notification_service.send_invitation(reissued)
            except ProviderError as e:
                logfire.error(
                    "Resend email failed, keeping previous link",
                    invitation_id=str(previous.id),
                    error=str(e),
                )
                await self.invitation_service.restore(previous)
                raise

            await self.audit_service.record(
                AuditAction.INVITATION_RESENT,
                AuditResourceType.INVITATION,
                resource_id=str(reissued.id),
                actor_id=admin.id,
                old_values={"expires_at": previous.expires_at.isoformat()},
                new_values={"expires_at": reissued.expires_at.isoformat()},
            )

            return ResendInvitationResponse(
                invitation=InvitationSummary.from_invitation(reissued, reissued.status)
            )
