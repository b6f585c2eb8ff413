"""Validate invitation use case."""

import logfire
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from onboard.application.usecase.invitation.summary import InvitationSummary
from onboard.domain.error import InvalidInvitationError, ValidationError
from onboard.domain.service import DirectoryService, InvitationService
from onboard.domain.value import InvitationToken


class ValidateInvitationRequest(BaseModel):
    token: str


class ValidateInvitationResponse(BaseModel):
    success: bool = True
    invitation: InvitationSummary
    company_name: str | None = None


class ValidateInvitationUseCase:
    """Use case for checking an invitation link before sign-up.

    Public: the token itself is the credential.
    """

    def __init__(
        self,
        invitation_service: InvitationService,
        directory_service: DirectoryService,
    ) -> None:
        self.invitation_service = invitation_service
        self.directory_service = directory_service

    async def execute(
        self, request: ValidateInvitationRequest
    ) -> ValidateInvitationResponse:
        """Resolve a token to its invitation details.

        Raises:
            ValidationError: If no token was given
            InvalidInvitationError: If the token is unknown or used
            InvitationExpiredError: If the invitation lapsed
        """
        if not request.token:
            raise ValidationError("Token is required")

        with logfire.span(
            "validate_invitation.execute", token=request.token[:8] + "..."
        ):
            try:
                token = InvitationToken(request.token)
            except PydanticValidationError as e:
                raise InvalidInvitationError() from e

            invitation = await self.invitation_service.get_valid_by_token(token)
            company_name = (
                await self.directory_service.company_name(invitation.company_id)
                if invitation.company_id
                else None
            )

            logfire.info("Valid invitation found", invitation_id=str(invitation.id))
            return ValidateInvitationResponse(
                invitation=InvitationSummary.from_invitation(
                    invitation, invitation.status
                ),
                company_name=company_name,
            )
