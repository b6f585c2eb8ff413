"""PostgreSQL repository implementations."""

from onboard.persistence.repository.audit_log import PostgresAuditLogRepository
from onboard.persistence.repository.company import PostgresCompanyRepository
from onboard.persistence.repository.invitation import PostgresInvitationRepository
from onboard.persistence.repository.user import PostgresUserRepository

__all__ = [
    "PostgresAuditLogRepository",
    "PostgresCompanyRepository",
    "PostgresInvitationRepository",
    "PostgresUserRepository",
]
