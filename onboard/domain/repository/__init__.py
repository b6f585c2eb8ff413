"""Repository interfaces for the onboarding domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from onboard.domain.repository.audit_log import AuditLogRepository
from onboard.domain.repository.company import CompanyRepository
from onboard.domain.repository.invitation import InvitationRepository
from onboard.domain.repository.user import UserRepository

__all__ = [
    "AuditLogRepository",
    "CompanyRepository",
    "InvitationRepository",
    "UserRepository",
]
