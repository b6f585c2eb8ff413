"""Invitation use cases."""

from onboard.application.usecase.invitation.accept_invitation import (
    AcceptInvitationRequest,
    AcceptInvitationResponse,
    AcceptInvitationUseCase,
)
from onboard.application.usecase.invitation.cancel_invitation import (
    CancelInvitationRequest,
    CancelInvitationResponse,
    CancelInvitationUseCase,
)
from onboard.application.usecase.invitation.create_invitation import (
    CreateInvitationRequest,
    CreateInvitationResponse,
    CreateInvitationUseCase,
)
from onboard.application.usecase.invitation.list_invitations import (
    ListInvitationsRequest,
    ListInvitationsResponse,
    ListInvitationsUseCase,
)
from onboard.application.usecase.invitation.resend_invitation import (
    ResendInvitationRequest,
    ResendInvitationResponse,
    ResendInvitationUseCase,
)
from onboard.application.usecase.invitation.summary import (
    InvitationSummary,
    UserSummary,
)
from onboard.application.usecase.invitation.validate_invitation import (
    ValidateInvitationRequest,
    ValidateInvitationResponse,
    ValidateInvitationUseCase,
)

__all__ = [
    "AcceptInvitationRequest",
    "AcceptInvitationResponse",
    "AcceptInvitationUseCase",
    "CancelInvitationRequest",
    "CancelInvitationResponse",
    "CancelInvitationUseCase",
    "CreateInvitationRequest",
    "CreateInvitationResponse",
    "CreateInvitationUseCase",
    "InvitationSummary",
    "ListInvitationsRequest",
    "ListInvitationsResponse",
    "ListInvitationsUseCase",
    "ResendInvitationRequest",
    "ResendInvitationResponse",
    "ResendInvitationUseCase",
    "UserSummary",
    "ValidateInvitationRequest",
    "ValidateInvitationResponse",
    "ValidateInvitationUseCase",
]
