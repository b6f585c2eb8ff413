"""Domain layer DI providers."""

from dishka import Scope, provide

from onboard.config import Settings
from onboard.domain.repository import (
    AuditLogRepository,
    CompanyRepository,
    InvitationRepository,
    UserRepository,
)
from onboard.domain.service import (
    AuditService,
    DirectoryService,
    EmailSender,
    IdentityProviderClient,
    IdentitySyncService,
    InvitationService,
    NotificationService,
    TokenService,
    UserService,
)
from onboard.util.cache import NameCache
from onboard.util.clock import Clock
from onboard.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_token_service(
        self, invitation_repository: InvitationRepository, settings: Settings
    ) -> TokenService:
        return TokenService(
            invitation_repository=invitation_repository,
            token_bytes=settings.invitations.token_bytes,
        )

    @provide
    def get_invitation_service(
        self,
        invitation_repository: InvitationRepository,
        token_service: TokenService,
        clock: Clock,
        settings: Settings,
    ) -> InvitationService:
        """Provide invitation domain service."""
        return InvitationService(
            invitation_repository=invitation_repository,
            token_service=token_service,
            clock=clock,
            expiry_days=settings.invitations.expiry_days,
        )

    @provide
    def get_user_service(
        self, user_repository: UserRepository, clock: Clock
    ) -> UserService:
        """Provide user domain service."""
        return UserService(user_repository=user_repository, clock=clock)

    @provide
    def get_audit_service(
        self, audit_log_repository: AuditLogRepository, clock: Clock
    ) -> AuditService:
        return AuditService(audit_log_repository=audit_log_repository, clock=clock)

    @provide
    def get_directory_service(
        self,
        company_repository: CompanyRepository,
        user_repository: UserRepository,
        name_cache: NameCache,
    ) -> DirectoryService:
        return DirectoryService(
            company_repository=company_repository,
            user_repository=user_repository,
            name_cache=name_cache,
        )

    @provide
    def get_notification_service(
        self,
        email_sender: EmailSender,
        directory_service: DirectoryService,
        settings: Settings,
    ) -> NotificationService:
        return NotificationService(
            email_sender=email_sender,
            directory_service=directory_service,
            settings=settings,
        )

    @provide
    def get_identity_sync_service(
        self, identity_client: IdentityProviderClient
    ) -> IdentitySyncService:
        return IdentitySyncService(identity_client=identity_client)
