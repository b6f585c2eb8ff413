"""Invitation entity.

An invitation is an administrator's offer for one email address to join the
platform with a given role (and company), redeemable once with its token.
"""

from datetime import datetime, timedelta
from typing import Optional

from pydantic import model_validator

from onboard.domain.model.common import DomainModel
from onboard.domain.value import (
    CompanyId,
    EmailAddress,
    InvitationId,
    InvitationStatus,
    InvitationToken,
    InvitationUserData,
    UserId,
    UserRole,
)


class Invitation(DomainModel):
    """Invitation entity.

    Business rules:
    - At most one pending invitation per email
    - Tokens are unique across all invitations, ever
    - Status only moves out of PENDING, never back
    - company_id is required unless the role is site_admin
    - A stored PENDING invitation past ``expires_at`` is expired; the deadline
      wins over the stored status
    """

    id: InvitationId
    email: EmailAddress
    role: UserRole
    company_id: Optional[CompanyId] = None
    invited_by: UserId
    token: InvitationToken
    user_data: InvitationUserData
    status: InvitationStatus = InvitationStatus.PENDING
    expires_at: datetime
    accepted_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

    @model_validator(mode="after")
    def check_company_for_role(self) -> "Invitation":
        if self.role.requires_company and self.company_id is None:
            raise ValueError(f"Company is required for role {self.role.value}")
        return self

    @classmethod
    def issue(
        cls,
        *,
        invitation_id: InvitationId,
        email: EmailAddress,
        role: UserRole,
        company_id: Optional[CompanyId],
        invited_by: UserId,
        token: InvitationToken,
        user_data: InvitationUserData,
        now: datetime,
        valid_for: timedelta,
    ) -> "Invitation":
        """Create a new pending invitation expiring ``valid_for`` from ``now``."""
        return cls(
            id=invitation_id,
            email=email,
            role=role,
            company_id=company_id,
            invited_by=invited_by,
            token=token,
            user_data=user_data,
            status=InvitationStatus.PENDING,
            expires_at=now + valid_for,
            created_at=now,
            updated_at=now,
        )

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at < now

    def effective_status(self, now: datetime) -> InvitationStatus:
        """Status as callers should see it at ``now``."""
        if self.status == InvitationStatus.PENDING and self.is_expired(now):
            return InvitationStatus.EXPIRED
        return self.status

    def is_live(self, now: datetime) -> bool:
        """Pending and still within its deadline."""
        return self.effective_status(now) == InvitationStatus.PENDING
