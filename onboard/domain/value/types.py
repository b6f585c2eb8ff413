"""Domain value objects.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

import re
from datetime import date
from enum import Enum
from types import MappingProxyType
from typing import Optional

from pydantic import field_validator

from onboard.domain.value.common import RootValueObject, ValueObject

_EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class UserRole(str, Enum):
    """Platform role of a user or of an invitation's prospect."""

    SITE_ADMIN = "site_admin"
    COMPANY_ADMIN = "company_admin"
    TRAINEE = "trainee"

    @property
    def requires_company(self) -> bool:
        """Company admins and trainees always belong to a company."""
        return self is not UserRole.SITE_ADMIN

    @property
    def display_name(self) -> str:
        return _ROLE_DISPLAY_NAMES[self]


_ROLE_DISPLAY_NAMES = MappingProxyType(
    {
        UserRole.SITE_ADMIN: "Site Administrator",
        UserRole.COMPANY_ADMIN: "Company Administrator",
        UserRole.TRAINEE: "Trainee",
    }
)


class InvitationStatus(str, Enum):
    """Status of an invitation.

    PENDING is the only initial state; the other three are terminal.
    """

    PENDING = "pending"
    ACCEPTED = "accepted"
    CANCELLED = "cancelled"
    EXPIRED = "expired"

    @property
    def is_terminal(self) -> bool:
        return self is not InvitationStatus.PENDING


class InvitationToken(RootValueObject[str]):
    """Bearer token embedded in the acceptance link."""

    @field_validator("root")
    @classmethod
    def validate_token_format(cls, v: str) -> str:
        """Validate token is not empty."""
        if len(v) < 1 or len(v) > 255:
            raise ValueError("Token must be 1-255 characters")
        return v

    @property
    def masked(self) -> str:
        """First characters only, for logs."""
        return self.root[:8] + "..."


class EmailAddress(RootValueObject[str]):
    """Email address, trimmed and lower-cased.

    The address is the anchor between an invitation and the identity that
    eventually accepts it, so comparisons must be case-insensitive.
    """

    @field_validator("root")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        """Normalize and validate email format."""
        normalized = v.strip().lower()
        if not _EMAIL_PATTERN.match(normalized):
            raise ValueError("Invalid email format")
        if len(normalized) > 255:
            raise ValueError("Email must be at most 255 characters")
        return normalized


def _blank_to_none(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None


class InvitationUserData(ValueObject):
    """Snapshot of the prospective user's details taken at invite time.

    Copied verbatim onto the User on acceptance, independently of whatever
    profile the identity provider holds.
    """

    first_name: str
    last_name: str
    phone: Optional[str] = None
    job_title: Optional[str] = None
    department: Optional[str] = None
    location: Optional[str] = None
    date_of_birth: Optional[date] = None

    @field_validator("first_name")
    @classmethod
    def validate_first_name(cls, v: str) -> str:
        v = v.strip()
        if len(v) < 2:
            raise ValueError("First name must be at least 2 characters")
        return v

    @field_validator("last_name")
    @classmethod
    def validate_last_name(cls, v: str) -> str:
        v = v.strip()
        if len(v) < 2:
            raise ValueError("Last name must be at least 2 characters")
        return v

    @field_validator("phone", "job_title", "department", "location", mode="before")
    @classmethod
    def strip_optional(cls, v: Optional[str]) -> Optional[str]:
        return _blank_to_none(v) if isinstance(v, str) else v

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class AuditCategory(str, Enum):
    """Grouping used to filter the audit log."""

    USER_MANAGEMENT = "user_management"
    INVITATION_MANAGEMENT = "invitation_management"
    SECURITY_EVENT = "security_event"


class AuditSeverity(str, Enum):
    """Severity recorded with each audit entry."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class AuditResourceType(str, Enum):
    """Kind of record an audit entry refers to."""

    USER = "user"
    INVITATION = "invitation"
    SECURITY_EVENT = "security_event"


class AuditAction(str, Enum):
    """Audited actions.

    Category and severity come from the tables below, which must cover
    every member.
    """

    USER_CREATED = "user_created"
    INVITATION_SENT = "invitation_sent"
    INVITATION_RESENT = "invitation_resent"
    INVITATION_ACCEPTED = "invitation_accepted"
    INVITATION_CANCELLED = "invitation_cancelled"
    INVITATION_EXPIRED = "invitation_expired"
    WEBHOOK_VERIFICATION_FAILED = "webhook_verification_failed"

    @property
    def category(self) -> AuditCategory:
        return AUDIT_ACTION_CATEGORIES[self]

    @property
    def severity(self) -> AuditSeverity:
        return AUDIT_ACTION_SEVERITIES[self]


AUDIT_ACTION_CATEGORIES = MappingProxyType(
    {
        AuditAction.USER_CREATED: AuditCategory.USER_MANAGEMENT,
        AuditAction.INVITATION_SENT: AuditCategory.INVITATION_MANAGEMENT,
        AuditAction.INVITATION_RESENT: AuditCategory.INVITATION_MANAGEMENT,
        AuditAction.INVITATION_ACCEPTED: AuditCategory.INVITATION_MANAGEMENT,
        AuditAction.INVITATION_CANCELLED: AuditCategory.INVITATION_MANAGEMENT,
        AuditAction.INVITATION_EXPIRED: AuditCategory.INVITATION_MANAGEMENT,
        AuditAction.WEBHOOK_VERIFICATION_FAILED: AuditCategory.SECURITY_EVENT,
    }
)

AUDIT_ACTION_SEVERITIES = MappingProxyType(
    {
        AuditAction.USER_CREATED: AuditSeverity.INFO,
        AuditAction.INVITATION_SENT: AuditSeverity.INFO,
        AuditAction.INVITATION_RESENT: AuditSeverity.INFO,
        AuditAction.INVITATION_ACCEPTED: AuditSeverity.INFO,
        AuditAction.INVITATION_CANCELLED: AuditSeverity.WARNING,
        AuditAction.INVITATION_EXPIRED: AuditSeverity.INFO,
        AuditAction.WEBHOOK_VERIFICATION_FAILED: AuditSeverity.ERROR,
    }
)

if set(AUDIT_ACTION_CATEGORIES) != set(AuditAction) or set(
    AUDIT_ACTION_SEVERITIES
) != set(AuditAction):
    raise RuntimeError("Every AuditAction needs a category and a severity")
