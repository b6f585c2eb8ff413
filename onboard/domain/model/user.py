"""User aggregate root.

Users are materialized exactly once per identity-provider account, either
from an accepted invitation or by default provisioning.
"""

from datetime import date, datetime
from typing import Optional

from onboard.domain.model.common import DomainModel
from onboard.domain.value import (
    CompanyId,
    EmailAddress,
    IdentityId,
    UserId,
    UserRole,
)


class User(DomainModel):
    """Application user.

    ``user_id`` is the identity provider's subject id; ``id`` is ours.
    Both ``user_id`` and ``email`` are unique.
    """

    id: UserId
    user_id: IdentityId
    email: EmailAddress
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None
    job_title: Optional[str] = None
    department: Optional[str] = None
    location: Optional[str] = None
    date_of_birth: Optional[date] = None
    role: UserRole
    company_id: Optional[CompanyId] = None
    is_active: bool = True
    profile_completed: bool = False
    created_at: datetime
    updated_at: datetime

    @property
    def display_name(self) -> str:
        names = [n for n in (self.first_name, self.last_name) if n]
        return " ".join(names) if names else str(self.email)
