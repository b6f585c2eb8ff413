"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict, Optional
from uuid import UUID

from onboard.domain.model import AuditLogEntry, Company, Invitation, User
from onboard.domain.value import (
    AuditAction,
    AuditCategory,
    AuditLogId,
    AuditResourceType,
    AuditSeverity,
    CompanyId,
    EmailAddress,
    IdentityId,
    InvitationId,
    InvitationStatus,
    InvitationToken,
    InvitationUserData,
    UserId,
    UserRole,
)


def _uuid(value: Any) -> Optional[UUID]:
    if value is None:
        return None
    return UUID(value) if isinstance(value, str) else value


def row_to_company(row: Dict[str, Any]) -> Company:
    return Company(id=CompanyId(_uuid(row["id"])), name=row["name"])


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model."""
    company_id = _uuid(row.get("company_id"))
    return User(
        id=UserId(_uuid(row["id"])),
        user_id=IdentityId(row["user_id"]),
        email=EmailAddress(row["email"]),
        first_name=row.get("first_name"),
        last_name=row.get("last_name"),
        phone=row.get("phone"),
        job_title=row.get("job_title"),
        department=row.get("department"),
        location=row.get("location"),
        date_of_birth=row.get("date_of_birth"),
        role=UserRole(row["role"]),
        company_id=CompanyId(company_id) if company_id else None,
        is_active=row["is_active"],
        profile_completed=row["profile_completed"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def user_to_dict(user: User) -> Dict[str, Any]:
    """Convert User domain model to database dict."""
    data = user.model_dump()
    data["email"] = str(user.email)
    data["role"] = user.role.value
    return data


def row_to_invitation(row: Dict[str, Any]) -> Invitation:
    """Convert database row to Invitation domain model.

    Args:
        row: Database row as dict

    Returns:
        Invitation domain model
    """
    company_id = _uuid(row.get("company_id"))
    return Invitation(
        id=InvitationId(_uuid(row["id"])),
        email=EmailAddress(row["email"]),
        role=UserRole(row["role"]),
        company_id=CompanyId(company_id) if company_id else None,
        invited_by=UserId(_uuid(row["invited_by"])),
        token=InvitationToken(row["token"]),
        user_data=InvitationUserData(**row["user_data"]),
        status=InvitationStatus(row["status"]),
        expires_at=row["expires_at"],
        accepted_at=row.get("accepted_at"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def invitation_to_dict(invitation: Invitation) -> Dict[str, Any]:
    """Convert Invitation domain model to database dict.

    ``user_data`` goes into a JSONB column, so it is dumped in JSON mode
    (dates as ISO strings).
    """
    return {
        "id": invitation.id,
        "email": str(invitation.email),
        "role": invitation.role.value,
        "company_id": invitation.company_id,
        "invited_by": invitation.invited_by,
        "token": invitation.token.root,
        "user_data": invitation.user_data.model_dump(mode="json"),
        "status": invitation.status.value,
        "expires_at": invitation.expires_at,
        "accepted_at": invitation.accepted_at,
        "created_at": invitation.created_at,
        "updated_at": invitation.updated_at,
    }


def row_to_audit_log_entry(row: Dict[str, Any]) -> AuditLogEntry:
    actor_id = _uuid(row.get("actor_id"))
    return AuditLogEntry(
        id=AuditLogId(_uuid(row["id"])),
        actor_id=UserId(actor_id) if actor_id else None,
        action=AuditAction(row["action"]),
        resource_type=AuditResourceType(row["resource_type"]),
        resource_id=row.get("resource_id"),
        category=AuditCategory(row["category"]),
        severity=AuditSeverity(row["severity"]),
        old_values=row.get("old_values"),
        new_values=row.get("new_values"),
        metadata=row.get("metadata"),
        created_at=row["created_at"],
    )


def audit_log_entry_to_dict(entry: AuditLogEntry) -> Dict[str, Any]:
    return entry.model_dump(mode="json", exclude={"id", "actor_id", "created_at"}) | {
        "id": entry.id,
        "actor_id": entry.actor_id,
        "created_at": entry.created_at,
    }
