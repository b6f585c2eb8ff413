"""Domain model entities for the onboarding service."""

from onboard.domain.model.audit_log import AuditLogEntry
from onboard.domain.model.company import Company
from onboard.domain.model.invitation import Invitation
from onboard.domain.model.user import User

__all__ = [
    "AuditLogEntry",
    "Company",
    "Invitation",
    "User",
]
