"""Domain value objects."""

from onboard.domain.value.identifiers import (
    AuditLogId,
    CompanyId,
    IdentityId,
    InvitationId,
    UserId,
)
from onboard.domain.value.types import (
    AuditAction,
    AuditCategory,
    AuditResourceType,
    AuditSeverity,
    EmailAddress,
    InvitationStatus,
    InvitationToken,
    InvitationUserData,
    UserRole,
)

__all__ = [
    # Identifiers
    "AuditLogId",
    "CompanyId",
    "IdentityId",
    "InvitationId",
    "UserId",
    # Types
    "AuditAction",
    "AuditCategory",
    "AuditResourceType",
    "AuditSeverity",
    "EmailAddress",
    "InvitationStatus",
    "InvitationToken",
    "InvitationUserData",
    "UserRole",
]
