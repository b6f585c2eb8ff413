"""Invitation representation shared by the invitation use cases."""

from datetime import date, datetime

from pydantic import BaseModel

from onboard.domain.model import Invitation, User
from onboard.domain.value import InvitationStatus, UserRole


class InvitationUserDataItem(BaseModel):
    first_name: str
    last_name: str
    phone: str | None = None
    job_title: str | None = None
    department: str | None = None
    location: str | None = None
    date_of_birth: date | None = None


class InvitationSummary(BaseModel):
    """Invitation as returned to API callers.

    ``status`` is the effective status; the token is never included.
    """

    id: str
    email: str
    role: UserRole
    company_id: str | None
    status: InvitationStatus
    user_data: InvitationUserDataItem
    expires_at: datetime
    accepted_at: datetime | None = None
    created_at: datetime

    @classmethod
    def from_invitation(
        cls, invitation: Invitation, status: InvitationStatus
    ) -> "InvitationSummary":
        return cls(
            id=str(invitation.id),
            email=str(invitation.email),
            role=invitation.role,
            company_id=str(invitation.company_id) if invitation.company_id else None,
            status=status,
            user_data=InvitationUserDataItem(**invitation.user_data.model_dump()),
            expires_at=invitation.expires_at,
            accepted_at=invitation.accepted_at,
            created_at=invitation.created_at,
        )


class UserSummary(BaseModel):
    """Materialized user as returned to API callers."""

    id: str
    user_id: str
    email: str
    first_name: str | None = None
    last_name: str | None = None
    phone: str | None = None
    job_title: str | None = None
    department: str | None = None
    location: str | None = None
    date_of_birth: date | None = None
    role: UserRole
    company_id: str | None = None
    is_active: bool
    profile_completed: bool
    created_at: datetime

    @classmethod
    def from_user(cls, user: User) -> "UserSummary":
        data = user.model_dump(exclude={"id", "email", "company_id", "updated_at"})
        return cls(
            **data,
            id=str(user.id),
            email=str(user.email),
            company_id=str(user.company_id) if user.company_id else None,
        )
