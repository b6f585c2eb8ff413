"""Invitation repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime

from onboard.domain.model.invitation import Invitation
from onboard.domain.value import (
    EmailAddress,
    InvitationId,
    InvitationStatus,
    InvitationToken,
)


class InvitationRepository(ABC):
    """Repository for Invitation entity.

    State changes are conditional writes: they only apply while the stored
    status is still PENDING, so concurrent callers cannot both win.
    """

    @abstractmethod
    async def find_by_id(self, invitation_id: InvitationId) -> Invitation | None:
        """Find an invitation by ID.

        Args:
            invitation_id: The invitation's unique identifier

        Returns:
            The invitation if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_token(self, token: InvitationToken) -> Invitation | None:
        """Find an invitation by token, whatever its status.

        Args:
            token: The invitation token

        Returns:
            The invitation if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_pending_by_email(self, email: EmailAddress) -> Invitation | None:
        """Find the stored-PENDING invitation for an email, if any.

        The result may already be past its expiry; callers decide.
        """
        pass

    @abstractmethod
    async def token_exists(self, token: InvitationToken) -> bool:
        pass

    @abstractmethod
    async def list(
        self,
        status: InvitationStatus | None = None,
        limit: int = 50,
        offset: int = 0,
        *,
        as_of: datetime | None = None,
    ) -> list[Invitation]:
        """List invitations, newest first.

        Args:
            status: Optional status filter
            limit: Maximum number of results
            offset: Number of results to skip
            as_of: When given, filter on the status as seen at this instant,
                so lapsed PENDING rows count as EXPIRED

        Returns:
            List of invitations
        """
        pass

    @abstractmethod
    async def create(self, invitation: Invitation) -> Invitation:
        """Insert a new invitation.

        Raises:
            PendingInvitationExistsError: If a pending invitation already
                exists for the same email
        """
        pass

    @abstractmethod
    async def transition(
        self,
        invitation_id: InvitationId,
        to_status: InvitationStatus,
        at: datetime,
        *,
        not_expired_at: datetime | None = None,
    ) -> Invitation | None:
        """Move a PENDING invitation to ``to_status``.

        Sets ``updated_at`` (and ``accepted_at`` when accepting) to ``at``.
        When ``not_expired_at`` is given the write also requires
        ``expires_at >= not_expired_at``.

        Returns:
            The updated invitation, or None if the conditions no longer held
        """
        pass

    @abstractmethod
    async def reissue(
        self,
        invitation_id: InvitationId,
        token: InvitationToken,
        expires_at: datetime,
        at: datetime,
    ) -> Invitation | None:
        """Replace token and expiry of a still-PENDING invitation.

        Returns:
            The updated invitation, or None if it is no longer pending
        """
        pass

    @abstractmethod
    async def delete(self, invitation_id: InvitationId) -> None:
        """Remove an invitation whose creation is being rolled back."""
        pass
