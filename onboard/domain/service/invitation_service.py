"""Invitation domain service.

Owns the invitation state machine. Every state change goes through a
conditional repository write, so when two requests race for the same
invitation exactly one of them observes success.
"""

from datetime import timedelta
from typing import Optional
from uuid import uuid4

import logfire

from onboard.domain.error import (
    BusinessRuleViolationError,
    InvalidInvitationError,
    InvitationExpiredError,
    NotFoundError,
    PendingInvitationExistsError,
)
from onboard.domain.model import Invitation
from onboard.domain.repository import InvitationRepository
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
from onboard.util.clock import Clock

from .base import Service
from .token_service import TokenService


class InvitationService(Service):
    """Domain service for invitation lifecycle operations."""

    def __init__(
        self,
        invitation_repository: InvitationRepository,
        token_service: TokenService,
        clock: Clock,
        expiry_days: int = 7,
    ) -> None:
        """Initialize invitation service.

        Args:
            invitation_repository: Invitation repository
            token_service: Token generator
            clock: Time source
            expiry_days: Days an issued invitation stays valid
        """
        self.invitation_repository = invitation_repository
        self.token_service = token_service
        self.clock = clock
        self.valid_for = timedelta(days=expiry_days)

    async def create_invitation(
        self,
        email: EmailAddress,
        role: UserRole,
        company_id: Optional[CompanyId],
        invited_by: UserId,
        user_data: InvitationUserData,
    ) -> Invitation:
        """Create a new pending invitation.

        A stored PENDING invitation for the same email that has already
        lapsed is first marked EXPIRED so it no longer blocks the new one.

        Args:
            email: Normalized invitee email
            role: Role the invitee will receive
            company_id: Company for company_admin/trainee roles
            invited_by: Inviting site admin
            user_data: Invitee details copied onto the user on acceptance

        Returns:
            Created invitation

        Raises:
            PendingInvitationExistsError: If a live pending invitation exists
            TokenCollisionError: If the generated token is already in use
        """
        with logfire.span(
            "invitation_service.create_invitation",
            email=str(email),
            role=role.value,
            invited_by=str(invited_by),
        ):
            now = self.clock.now()
            existing = await self.invitation_repository.find_pending_by_email(email)
            if existing is not None:
                if existing.is_live(now):
                    logfire.warn(
                        "Pending invitation already exists",
                        email=str(email),
                        invitation_id=str(existing.id),
                    )
                    raise PendingInvitationExistsError(str(email))
                await self.expire(existing)

            token = await self.token_service.generate_unique()
            invitation = Invitation.issue(
                invitation_id=InvitationId(uuid4()),
                email=email,
                role=role,
                company_id=company_id,
                invited_by=invited_by,
                token=token,
                user_data=user_data,
                now=now,
                valid_for=self.valid_for,
            )

            saved = await self.invitation_repository.create(invitation)
            logfire.info(
                "Invitation created",
                invitation_id=str(saved.id),
                email=str(email),
                expires_at=saved.expires_at.isoformat(),
            )
            return saved

    async def get_by_id(self, invitation_id: InvitationId) -> Invitation:
        """Get invitation by ID.

        Raises:
            NotFoundError: If no invitation has this ID
        """
        with logfire.span(
            "invitation_service.get_by_id", invitation_id=str(invitation_id)
        ):
            invitation = await self.invitation_repository.find_by_id(invitation_id)
            if invitation is None:
                logfire.warn("Invitation not found", invitation_id=str(invitation_id))
                raise NotFoundError("Invitation", str(invitation_id))
            return invitation

    async def get_valid_by_token(self, token: InvitationToken) -> Invitation:
        """Resolve a token to a pending, unexpired invitation.

        Unknown tokens and tokens of accepted/cancelled/expired invitations
        fail the same way.

        Raises:
            InvalidInvitationError: If the token is unknown or not pending
            InvitationExpiredError: If the invitation is pending but lapsed
        """
        with logfire.span(
            "invitation_service.get_valid_by_token", token=token.masked
        ):
            invitation = await self.invitation_repository.find_by_token(token)
            if invitation is None or invitation.status != InvitationStatus.PENDING:
                logfire.warn("Invalid invitation token", token=token.masked)
                raise InvalidInvitationError()

            if invitation.is_expired(self.clock.now()):
                logfire.warn(
                    "Invitation expired",
                    invitation_id=str(invitation.id),
                    expires_at=invitation.expires_at.isoformat(),
                )
                raise InvitationExpiredError()

            return invitation

    async def accept(self, invitation: Invitation) -> Invitation:
        """Mark a pending, unexpired invitation accepted.

        Raises:
            InvalidInvitationError: If another request changed the invitation
                first, or it lapsed in the meantime
        """
        with logfire.span(
            "invitation_service.accept", invitation_id=str(invitation.id)
        ):
            now = self.clock.now()
            accepted = await self.invitation_repository.transition(
                invitation.id,
                InvitationStatus.ACCEPTED,
                now,
                not_expired_at=now,
            )
            if accepted is None:
                logfire.warn(
                    "Invitation acceptance lost to a concurrent change",
                    invitation_id=str(invitation.id),
                )
                raise InvalidInvitationError()

            logfire.info("Invitation accepted", invitation_id=str(invitation.id))
            return accepted

    async def cancel(self, invitation_id: InvitationId) -> Invitation:
        """Cancel a pending invitation.

        Raises:
            NotFoundError: If the invitation does not exist
            BusinessRuleViolationError: If the invitation is not pending
            InvitationExpiredError: If the invitation already lapsed
        """
        with logfire.span(
            "invitation_service.cancel", invitation_id=str(invitation_id)
        ):
            invitation = await self.get_by_id(invitation_id)
            self._require_pending(invitation, "cancelled")

            now = self.clock.now()
            if invitation.is_expired(now):
                raise InvitationExpiredError()

            cancelled = await self.invitation_repository.transition(
                invitation_id, InvitationStatus.CANCELLED, now
            )
            if cancelled is None:
                raise BusinessRuleViolationError(
                    "Only pending invitations can be cancelled"
                )

            logfire.info("Invitation cancelled", invitation_id=str(invitation_id))
            return cancelled

    async def reissue(self, invitation_id: InvitationId) -> Invitation:
        """Give a live pending invitation a new token and a fresh deadline.

        The old token stops working immediately.

        Raises:
            NotFoundError: If the invitation does not exist
            BusinessRuleViolationError: If the invitation is not pending
            InvitationExpiredError: If the invitation already lapsed
        """
        with logfire.span(
            "invitation_service.reissue", invitation_id=str(invitation_id)
        ):
            invitation = await self.get_by_id(invitation_id)
            self._require_pending(invitation, "resent")

            now = self.clock.now()
            if invitation.is_expired(now):
                raise InvitationExpiredError()

            token = await self.token_service.generate_unique()
            reissued = await self.invitation_repository.reissue(
                invitation_id, token, now + self.valid_for, now
            )
            if reissued is None:
                raise BusinessRuleViolationError(
                    "Only pending invitations can be resent"
                )

            logfire.info(
                "Invitation reissued",
                invitation_id=str(invitation_id),
                expires_at=reissued.expires_at.isoformat(),
            )
            return reissued

    async def restore(self, previous: Invitation) -> Invitation | None:
        """Put back the token and deadline ``previous`` had before a reissue.

        Used when the reissued invitation could not be emailed, so the link
        the invitee already holds keeps working.

        Returns:
            The restored invitation, or None if it had left PENDING meanwhile
        """
        with logfire.span(
            "invitation_service.restore", invitation_id=str(previous.id)
        ):
            restored = await self.invitation_repository.reissue(
                previous.id, previous.token, previous.expires_at, self.clock.now()
            )
            if restored is not None:
                logfire.warn(
                    "Invitation reissue reverted", invitation_id=str(previous.id)
                )
            return restored

    async def expire(self, invitation: Invitation) -> Invitation | None:
        """Persist EXPIRED for a lapsed pending invitation.

        Returns:
            The expired invitation, or None if it had already left PENDING
        """
        with logfire.span("invitation_service.expire", invitation_id=str(invitation.id)):
            expired = await self.invitation_repository.transition(
                invitation.id, InvitationStatus.EXPIRED, self.clock.now()
            )
            if expired is not None:
                logfire.info("Invitation expired", invitation_id=str(invitation.id))
            return expired

    async def find_live_by_email(self, email: EmailAddress) -> Invitation | None:
        """Pending, unexpired invitation for ``email``, if any."""
        with logfire.span("invitation_service.find_live_by_email", email=str(email)):
            invitation = await self.invitation_repository.find_pending_by_email(email)
            if invitation is not None and invitation.is_live(self.clock.now()):
                return invitation
            return None

    async def release_lapsed(self, email: EmailAddress) -> Invitation | None:
        """Mark a lapsed pending invitation for ``email`` as expired.

        Returns:
            The invitation that was expired, or None if there was none
        """
        invitation = await self.invitation_repository.find_pending_by_email(email)
        if invitation is None or invitation.is_live(self.clock.now()):
            return None
        return await self.expire(invitation)

    async def discard(self, invitation_id: InvitationId) -> None:
        """Remove an invitation whose creation could not be completed."""
        with logfire.span(
            "invitation_service.discard", invitation_id=str(invitation_id)
        ):
            await self.invitation_repository.delete(invitation_id)
            logfire.warn("Invitation discarded", invitation_id=str(invitation_id))

    async def list_invitations(
        self,
        status: InvitationStatus | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[Invitation]:
        """List invitations, filtering and reporting by effective status.

        Args:
            status: Optional status filter
            limit: Maximum number of results
            offset: Number of results to skip

        Returns:
            List of invitations
        """
        with logfire.span(
            "invitation_service.list_invitations",
            status=status.value if status else None,
            limit=limit,
            offset=offset,
        ):
            invitations = await self.invitation_repository.list(
                status, limit, offset, as_of=self.clock.now()
            )
            logfire.info("Invitations listed", count=len(invitations))
            return invitations

    def effective_status(self, invitation: Invitation) -> InvitationStatus:
        return invitation.effective_status(self.clock.now())

    @staticmethod
    def _require_pending(invitation: Invitation, verb: str) -> None:
        if invitation.status != InvitationStatus.PENDING:
            logfire.warn(
                "Invitation not pending",
                invitation_id=str(invitation.id),
                status=invitation.status.value,
            )
            raise BusinessRuleViolationError(f"Only pending invitations can be {verb}")
