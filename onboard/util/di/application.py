"""Application layer DI providers."""

from dishka import Scope, provide

from onboard.adapter.identity.webhook import WebhookVerifier
from onboard.application.usecase.audit import ListAuditLogsUseCase
from onboard.application.usecase.invitation import (
    AcceptInvitationUseCase,
    CancelInvitationUseCase,
    CreateInvitationUseCase,
    ListInvitationsUseCase,
    ResendInvitationUseCase,
    ValidateInvitationUseCase,
)
from onboard.application.usecase.webhook import HandleIdentityEventUseCase
from onboard.domain.service import (
    AuditService,
    DirectoryService,
    IdentitySyncService,
    InvitationService,
    NotificationService,
    UserService,
)
from onboard.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Invitation use cases
    @provide(scope=Scope.REQUEST)
    def get_create_invitation_use_case(
        self,
        invitation_service: InvitationService,
        user_service: UserService,
        directory_service: DirectoryService,
        notification_service: NotificationService,
        audit_service: AuditService,
    ) -> CreateInvitationUseCase:
        """Provide create invitation use case."""
        return CreateInvitationUseCase(
            invitation_service=invitation_service,
            user_service=user_service,
            directory_service=directory_service,
            notification_service=notification_service,
            audit_service=audit_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_validate_invitation_use_case(
        self,
        invitation_service: InvitationService,
        directory_service: DirectoryService,
    ) -> ValidateInvitationUseCase:
        """Provide validate invitation use case."""
        return ValidateInvitationUseCase(
            invitation_service=invitation_service,
            directory_service=directory_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_accept_invitation_use_case(
        self,
        invitation_service: InvitationService,
        user_service: UserService,
        identity_sync_service: IdentitySyncService,
        audit_service: AuditService,
    ) -> AcceptInvitationUseCase:
        """Provide accept invitation use case."""
        return AcceptInvitationUseCase(
            invitation_service=invitation_service,
            user_service=user_service,
            identity_sync_service=identity_sync_service,
            audit_service=audit_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_cancel_invitation_use_case(
        self,
        invitation_service: InvitationService,
        user_service: UserService,
        audit_service: AuditService,
    ) -> CancelInvitationUseCase:
        return CancelInvitationUseCase(
            invitation_service=invitation_service,
            user_service=user_service,
            audit_service=audit_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_resend_invitation_use_case(
        self,
        invitation_service: InvitationService,
        user_service: UserService,
        notification_service: NotificationService,
        audit_service: AuditService,
    ) -> ResendInvitationUseCase:
        return ResendInvitationUseCase(
            invitation_service=invitation_service,
            user_service=user_service,
            notification_service=notification_service,
            audit_service=audit_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_list_invitations_use_case(
        self, invitation_service: InvitationService, user_service: UserService
    ) -> ListInvitationsUseCase:
        return ListInvitationsUseCase(
            invitation_service=invitation_service, user_service=user_service
        )

    # Webhook use cases
    @provide(scope=Scope.REQUEST)
    def get_handle_identity_event_use_case(
        self,
        webhook_verifier: WebhookVerifier,
        invitation_service: InvitationService,
        user_service: UserService,
        identity_sync_service: IdentitySyncService,
        audit_service: AuditService,
    ) -> HandleIdentityEventUseCase:
        """Provide identity webhook use case."""
        return HandleIdentityEventUseCase(
            webhook_verifier=webhook_verifier,
            invitation_service=invitation_service,
            user_service=user_service,
            identity_sync_service=identity_sync_service,
            audit_service=audit_service,
        )

    # Audit use cases
    @provide(scope=Scope.REQUEST)
    def get_list_audit_logs_use_case(
        self, audit_service: AuditService, user_service: UserService
    ) -> ListAuditLogsUseCase:
        return ListAuditLogsUseCase(
            audit_service=audit_service, user_service=user_service
        )
