"""Mock persistence providers for testing."""

from dishka import Scope, provide

from onboard.domain.repository import (
    AuditLogRepository,
    CompanyRepository,
    InvitationRepository,
    UserRepository,
)
from onboard.persistence.repository.inmemory import (
    InMemoryAuditLogRepository,
    InMemoryCompanyRepository,
    InMemoryInvitationRepository,
    InMemoryUserRepository,
)
from onboard.util.di.infrastructure.persistence import PersistenceProvider


class MockPersistenceProvider(PersistenceProvider):
    """Mock persistence provider using in-memory repositories.

    APP scope so state survives across the requests of one test (several
    HTTP calls in an end-to-end test); every test builds its own container.
    """

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_invitation_repository(self) -> InvitationRepository:
        """Provide in-memory invitation repository."""
        return InMemoryInvitationRepository()

    @provide(scope=Scope.APP)
    def get_user_repository(self) -> UserRepository:
        """Provide in-memory user repository."""
        return InMemoryUserRepository()

    @provide(scope=Scope.APP)
    def get_company_repository(self) -> CompanyRepository:
        return InMemoryCompanyRepository()

    @provide(scope=Scope.APP)
    def get_audit_log_repository(self) -> AuditLogRepository:
        return InMemoryAuditLogRepository()
