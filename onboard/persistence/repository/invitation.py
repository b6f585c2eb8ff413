"""PostgreSQL implementation of Invitation repository."""

from datetime import datetime
from typing import Optional

from sqlalchemy import and_, delete, insert, or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from onboard.domain.error import PendingInvitationExistsError
from onboard.domain.model import Invitation
from onboard.domain.repository import InvitationRepository
from onboard.domain.value import (
    EmailAddress,
    InvitationId,
    InvitationStatus,
    InvitationToken,
)
from onboard.persistence.mappers import invitation_to_dict, row_to_invitation
from onboard.persistence.tables import PENDING_EMAIL_INDEX, invitations_table

_PENDING = InvitationStatus.PENDING.value


class PostgresInvitationRepository(InvitationRepository):
    """PostgreSQL implementation of InvitationRepository.

    State changes are single ``UPDATE ... WHERE status = 'pending'``
    statements with ``RETURNING``; no row back means another writer won.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def _first(self, stmt) -> Optional[Invitation]:
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_invitation(dict(row)) if row else None

    async def find_by_id(self, invitation_id: InvitationId) -> Optional[Invitation]:
        return await self._first(
            select(invitations_table).where(invitations_table.c.id == invitation_id)
        )

    async def find_by_token(self, token: InvitationToken) -> Optional[Invitation]:
        return await self._first(
            select(invitations_table).where(invitations_table.c.token == token.root)
        )

    async def find_pending_by_email(
        self, email: EmailAddress
    ) -> Optional[Invitation]:
        """Find the pending invitation for an email.

        Served by the partial unique index, so at most one row matches.
        """
        return await self._first(
            select(invitations_table).where(
                and_(
                    invitations_table.c.email == str(email),
                    invitations_table.c.status == _PENDING,
                )
            )
        )

    async def token_exists(self, token: InvitationToken) -> bool:
        stmt = select(invitations_table.c.id).where(
            invitations_table.c.token == token.root
        )
        result = await self.session.execute(stmt)
        return result.first() is not None

    async def list(
        self,
        status: InvitationStatus | None = None,
        limit: int = 50,
        offset: int = 0,
        *,
        as_of: datetime | None = None,
    ) -> list[Invitation]:
        stmt = select(invitations_table)

        if status is not None:
            column = invitations_table.c.status
            if as_of is not None and status == InvitationStatus.PENDING:
                stmt = stmt.where(
                    and_(column == _PENDING, invitations_table.c.expires_at >= as_of)
                )
            elif as_of is not None and status == InvitationStatus.EXPIRED:
                stmt = stmt.where(
                    or_(
                        column == InvitationStatus.EXPIRED.value,
                        and_(
                            column == _PENDING,
                            invitations_table.c.expires_at < as_of,
                        ),
                    )
                )
            else:
                stmt = stmt.where(column == status.value)

        stmt = (
            stmt.order_by(invitations_table.c.created_at.desc())
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return [row_to_invitation(dict(row)) for row in result.mappings()]

    async def create(self, invitation: Invitation) -> Invitation:
        """Insert an invitation.

        The insert runs in a savepoint so a constraint violation leaves the
        request transaction usable.

        Raises:
            PendingInvitationExistsError: If the pending-per-email index
                rejects the row
        """
        try:
            async with self.session.begin_nested():
                await self.session.execute(
                    insert(invitations_table).values(**invitation_to_dict(invitation))
                )
        except IntegrityError as e:
            if PENDING_EMAIL_INDEX in str(e.orig):
                raise PendingInvitationExistsError(str(invitation.email)) from e
            raise
        return invitation

    async def transition(
        self,
        invitation_id: InvitationId,
        to_status: InvitationStatus,
        at: datetime,
        *,
        not_expired_at: datetime | None = None,
    ) -> Optional[Invitation]:
        values = {"status": to_status.value, "updated_at": at}
        if to_status == InvitationStatus.ACCEPTED:
            values["accepted_at"] = at

        conditions = [
            invitations_table.c.id == invitation_id,
            invitations_table.c.status == _PENDING,
        ]
        if not_expired_at is not None:
            conditions.append(invitations_table.c.expires_at >= not_expired_at)

        return await self._first(
            update(invitations_table)
            .where(and_(*conditions))
            .values(**values)
            .returning(*invitations_table.c)
        )

    async def reissue(
        self,
        invitation_id: InvitationId,
        token: InvitationToken,
        expires_at: datetime,
        at: datetime,
    ) -> Optional[Invitation]:
        return await self._first(
            update(invitations_table)
            .where(
                and_(
                    invitations_table.c.id == invitation_id,
                    invitations_table.c.status == _PENDING,
                )
            )
            .values(token=token.root, expires_at=expires_at, updated_at=at)
            .returning(*invitations_table.c)
        )

    async def delete(self, invitation_id: InvitationId) -> None:
        await self.session.execute(
            delete(invitations_table).where(invitations_table.c.id == invitation_id)
        )
