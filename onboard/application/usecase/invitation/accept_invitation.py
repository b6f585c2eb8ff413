"""Accept invitation use case."""

import logfire
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from onboard.application.usecase.base import BaseUseCase
from onboard.application.usecase.invitation.summary import UserSummary
from onboard.domain.error import (
    InvalidInvitationError,
    InvitationEmailMismatchError,
    UserAlreadyExistsError,
)
from onboard.domain.service import (
    AuditService,
    IdentitySyncService,
    InvitationService,
    UserService,
)
from onboard.domain.value import (
    AuditAction,
    AuditResourceType,
    EmailAddress,
    IdentityId,
    InvitationToken,
)


class AcceptInvitationRequest(BaseModel):
    """Acceptance by an identity that is already signed in."""

    caller_identity_id: str
    caller_email: str
    token: str


class AcceptInvitationResponse(BaseModel):
    success: bool = True
    user: UserSummary
    message: str = "Invitation accepted successfully"


class AcceptInvitationUseCase(BaseUseCase):
    """Use case for redeeming an invitation token directly.

    Runs the same checks as webhook reconciliation; whichever path gets to the
    invitation first wins and the other finds it no longer pending.
    """

    def __init__(
        self,
        invitation_service: InvitationService,
        user_service: UserService,
        identity_sync_service: IdentitySyncService,
        audit_service: AuditService,
    ) -> None:
        self.invitation_service = invitation_service
        self.user_service = user_service
        self.identity_sync_service = identity_sync_service
        self.audit_service = audit_service

    async def execute(
        self, request: AcceptInvitationRequest
    ) -> AcceptInvitationResponse:
        """Accept the invitation for the calling identity.

        Checks, in order: token valid and pending, not expired, caller email
        matches, caller has no user yet.

        Raises:
            InvalidInvitationError: If the token is unknown or not pending
            InvitationExpiredError: If the invitation lapsed
            InvitationEmailMismatchError: If the caller's email differs
            UserAlreadyExistsError: If the caller already has a user
            ProviderError: If the identity provider could not be updated
        """
        identity_id = IdentityId(request.caller_identity_id)

        with logfire.span(
            "accept_invitation.execute",
            identity_id=identity_id,
            token=request.token[:8] + "...",
        ):
            try:
                token = InvitationToken(request.token)
            except PydanticValidationError as e:
                raise InvalidInvitationError() from e

            invitation = await self.invitation_service.get_valid_by_token(token)

            try:
                caller_email = EmailAddress(request.caller_email)
            except PydanticValidationError as e:
                raise InvitationEmailMismatchError() from e
            if caller_email != invitation.email:
                logfire.warn(
                    "Invitation email mismatch",
                    invitation_id=str(invitation.id),
                    identity_id=identity_id,
                )
                raise InvitationEmailMismatchError()

            if await self.user_service.find_by_identity(identity_id) is not None:
                logfire.warn("User already exists for identity", identity_id=identity_id)
                raise UserAlreadyExistsError("User already exists for this account")

            # Provider first: if it fails nothing is written and the token
            # can be redeemed again
            await self.identity_sync_service.sync_invitation(identity_id, invitation)
            accepted = await self.invitation_service.accept(invitation)
            user = await self.user_service.create_from_invitation(identity_id, accepted)

            await self.audit_service.record(
                AuditAction.INVITATION_ACCEPTED,
                AuditResourceType.INVITATION,
                resource_id=str(accepted.id),
                actor_id=user.id,
                old_values={"status": invitation.status.value},
                new_values={"status": accepted.status.value},
                metadata={"path": "direct"},
            )
            await self.audit_service.record(
                AuditAction.USER_CREATED,
                AuditResourceType.USER,
                resource_id=str(user.id),
                actor_id=user.id,
                new_values={
                    "role": user.role.value,
                    "company_id": str(user.company_id) if user.company_id else None,
                },
                metadata={"invitation_id": str(accepted.id)},
            )

            return AcceptInvitationResponse(user=UserSummary.from_user(user))
