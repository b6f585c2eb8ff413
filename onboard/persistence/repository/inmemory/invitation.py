"""In-memory invitation repository for testing."""

from datetime import datetime
from typing import Optional

from onboard.domain.error import PendingInvitationExistsError
from onboard.domain.model import Invitation
from onboard.domain.repository import InvitationRepository
from onboard.domain.value import (
    EmailAddress,
    InvitationId,
    InvitationStatus,
    InvitationToken,
)


class InMemoryInvitationRepository(InvitationRepository):
    """In-memory implementation of InvitationRepository for testing.

    Mirrors the database constraints: unique tokens and one stored-PENDING
    invitation per email.
    """

    def __init__(self) -> None:
        self._invitations: dict[InvitationId, Invitation] = {}

    async def find_by_id(self, invitation_id: InvitationId) -> Optional[Invitation]:
        return self._invitations.get(invitation_id)

    async def find_by_token(self, token: InvitationToken) -> Optional[Invitation]:
        for invitation in self._invitations.values():
            if invitation.token == token:
                return invitation
        return None

    async def find_pending_by_email(
        self, email: EmailAddress
    ) -> Optional[Invitation]:
        for invitation in self._invitations.values():
            if (
                invitation.email == email
                and invitation.status == InvitationStatus.PENDING
            ):
                return invitation
        return None

    async def token_exists(self, token: InvitationToken) -> bool:
        return await self.find_by_token(token) is not None

    async def list(
        self,
        status: InvitationStatus | None = None,
        limit: int = 50,
        offset: int = 0,
        *,
        as_of: datetime | None = None,
    ) -> list[Invitation]:
        def matches(invitation: Invitation) -> bool:
            if status is None:
                return True
            if as_of is not None:
                return invitation.effective_status(as_of) == status
            return invitation.status == status

        invitations = sorted(
            (i for i in self._invitations.values() if matches(i)),
            key=lambda i: i.created_at,
            reverse=True,
        )
        return invitations[offset : offset + limit]

    async def create(self, invitation: Invitation) -> Invitation:
        """Insert an invitation.

        Raises:
            PendingInvitationExistsError: If a pending invitation exists for
                the email
        """
        if await self.find_pending_by_email(invitation.email):
            raise PendingInvitationExistsError(str(invitation.email))
        if await self.token_exists(invitation.token):
            raise ValueError("Duplicate invitation token")
        self._invitations[invitation.id] = invitation
        return invitation

    async def transition(
        self,
        invitation_id: InvitationId,
        to_status: InvitationStatus,
        at: datetime,
        *,
        not_expired_at: datetime | None = None,
    ) -> Optional[Invitation]:
        current = self._invitations.get(invitation_id)
        if current is None or current.status != InvitationStatus.PENDING:
            return None
        if not_expired_at is not None and current.expires_at < not_expired_at:
            return None

        changes: dict = {"status": to_status, "updated_at": at}
        if to_status == InvitationStatus.ACCEPTED:
            changes["accepted_at"] = at
        updated = current.evolve(**changes)
        self._invitations[invitation_id] = updated
        return updated

    async def reissue(
        self,
        invitation_id: InvitationId,
        token: InvitationToken,
        expires_at: datetime,
        at: datetime,
    ) -> Optional[Invitation]:
        current = self._invitations.get(invitation_id)
        if current is None or current.status != InvitationStatus.PENDING:
            return None
        updated = current.evolve(token=token, expires_at=expires_at, updated_at=at)
        self._invitations[invitation_id] = updated
        return updated

    async def delete(self, invitation_id: InvitationId) -> None:
        self._invitations.pop(invitation_id, None)
