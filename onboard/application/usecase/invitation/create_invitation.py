"""Create invitation use case."""

from datetime import date
from uuid import UUID

import logfire
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from onboard.adapter.error import ProviderError
from onboard.application.usecase.base import BaseUseCase, describe_validation_error
from onboard.application.usecase.invitation.summary import InvitationSummary
from onboard.domain.error import ValidationError
from onboard.domain.service import (
    AuditService,
    DirectoryService,
    InvitationService,
    NotificationService,
    UserService,
)
from onboard.domain.value import (
    AuditAction,
    AuditResourceType,
    CompanyId,
    EmailAddress,
    IdentityId,
    InvitationUserData,
    UserRole,
)


class CreateInvitationRequest(BaseModel):
    """Request to invite someone to the platform.

    Fields are validated by the use case so every failure reads the same way
    to the admin UI.
    """

    caller_identity_id: str
    email: str
    role: UserRole | None = None
    company_id: UUID | None = None
    first_name: str = ""
    last_name: str = ""
    phone: str | None = None
    job_title: str | None = None
    department: str | None = None
    location: str | None = None
    date_of_birth: date | None = None


class CreateInvitationResponse(BaseModel):
    invitation: InvitationSummary
    message: str = "Invitation sent successfully"


class CreateInvitationUseCase(BaseUseCase):
    """Use case for creating an invitation and emailing it.

    If the email cannot be delivered the invitation is removed again, so no
    pending invitation exists that the invitee was never told about.
    """

    def __init__(
        self,
        invitation_service: InvitationService,
        user_service: UserService,
        directory_service: DirectoryService,
        notification_service: NotificationService,
        audit_service: AuditService,
    ) -> None:
        """Initialize use case.

        Args:
            invitation_service: Invitation domain service
            user_service: User domain service
            directory_service: Company lookups
            notification_service: Invitation email dispatch
            audit_service: Audit trail
        """
        self.invitation_service = invitation_service
        self.user_service = user_service
        self.directory_service = directory_service
        self.notification_service = notification_service
        self.audit_service = audit_service

    async def execute(
        self, request: CreateInvitationRequest
    ) -> CreateInvitationResponse:
        """Execute create invitation use case.

        Raises:
            NotFoundError: If the caller or the company does not exist
            NotAuthorizedError: If the caller is not a site admin
            ValidationError: If the input is malformed
            ConflictError: If the email already has a user or a live invitation
            ProviderError: If the email could not be delivered
        """
        with logfire.span(
            "create_invitation.execute",
            caller=request.caller_identity_id,
            role=request.role.value if request.role else None,
        ):
            inviter = await self.user_service.require_role(
                IdentityId(request.caller_identity_id),
                UserRole.SITE_ADMIN,
                "create invitations",
            )

            try:
                email = EmailAddress(request.email)
                user_data = InvitationUserData(
                    first_name=request.first_name,
                    last_name=request.last_name,
                    phone=request.phone,
                    job_title=request.job_title,
                    department=request.department,
                    location=request.location,
                    date_of_birth=request.date_of_birth,
                )
            except PydanticValidationError as e:
                raise ValidationError(describe_validation_error(e)) from e

            if request.role is None:
                raise ValidationError("Role is required")

            company_id: CompanyId | None = None
            if request.role.requires_company:
                if request.company_id is None:
                    raise ValidationError(
                        f"Company is required for {request.role.display_name} users"
                    )
                company = await self.directory_service.get_company(
                    CompanyId(request.company_id)
                )
                company_id = company.id

            await self.user_service.ensure_email_available(email)

            lapsed = await self.invitation_service.release_lapsed(email)
            if lapsed is not None:
                await self.audit_service.record(
                    AuditAction.INVITATION_EXPIRED,
                    AuditResourceType.INVITATION,
                    resource_id=str(lapsed.id),
                    actor_id=inviter.id,
                    old_values={"status": "pending"},
                    new_values={"status": lapsed.status.value},
                )

            invitation = await self.invitation_service.create_invitation(
                email=email,
                role=request.role,
                company_id=company_id,
                invited_by=inviter.id,
                user_data=user_data,
            )

            try:
                await self.notification_service.send_invitation(invitation)
            except ProviderError as e:
                logfire.error(
                    "Invitation email failed, removing invitation",
                    invitation_id=str(invitation.id),
                    error=str(e),
                )
                await self.invitation_service.discard(invitation.id)
                raise

            await self.audit_service.record(
                AuditAction.INVITATION_SENT,
                AuditResourceType.INVITATION,
                resource_id=str(invitation.id),
                actor_id=inviter.id,
                new_values={
                    "email": str(invitation.email),
                    "role": invitation.role.value,
                    "company_id": str(company_id) if company_id else None,
                    "expires_at": invitation.expires_at.isoformat(),
                },
            )

            return CreateInvitationResponse(
                invitation=InvitationSummary.from_invitation(
                    invitation, invitation.status
                )
            )
