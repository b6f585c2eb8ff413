"""PostgreSQL implementation of User repository."""

from typing import Optional

from sqlalchemy import insert, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from onboard.domain.error import UserAlreadyExistsError
from onboard.domain.model import User
from onboard.domain.repository import UserRepository
from onboard.domain.value import EmailAddress, IdentityId, UserId
from onboard.persistence.mappers import row_to_user, user_to_dict
from onboard.persistence.tables import users_table


class PostgresUserRepository(UserRepository):
    """PostgreSQL implementation of UserRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def _find_one(self, condition) -> Optional[User]:
        result = await self.session.execute(select(users_table).where(condition))
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        return await self._find_one(users_table.c.id == user_id)

    async def find_by_identity(self, identity_id: IdentityId) -> Optional[User]:
        return await self._find_one(users_table.c.user_id == identity_id)

    async def find_by_email(self, email: EmailAddress) -> Optional[User]:
        return await self._find_one(users_table.c.email == str(email))

    async def create(self, user: User) -> User:
        """Insert a user.

        Raises:
            UserAlreadyExistsError: If ``user_id`` or ``email`` is taken
        """
        try:
            async with self.session.begin_nested():
                await self.session.execute(
                    insert(users_table).values(**user_to_dict(user))
                )
        except IntegrityError as e:
            raise UserAlreadyExistsError() from e
        return user
