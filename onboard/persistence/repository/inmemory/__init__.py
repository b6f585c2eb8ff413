"""In-memory repository implementations for testing."""

from .audit_log import InMemoryAuditLogRepository
from .company import InMemoryCompanyRepository
from .invitation import InMemoryInvitationRepository
from .user import InMemoryUserRepository

__all__ = [
    "InMemoryAuditLogRepository",
    "InMemoryCompanyRepository",
    "InMemoryInvitationRepository",
    "InMemoryUserRepository",
]
