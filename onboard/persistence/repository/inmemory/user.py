"""In-memory user repository for testing."""

from typing import Optional

from onboard.domain.error import UserAlreadyExistsError
from onboard.domain.model import User
from onboard.domain.repository import UserRepository
from onboard.domain.value import EmailAddress, IdentityId, UserId


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing."""

    def __init__(self) -> None:
        self._users: dict[UserId, User] = {}

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        return self._users.get(user_id)

    async def find_by_identity(self, identity_id: IdentityId) -> Optional[User]:
        for user in self._users.values():
            if user.user_id == identity_id:
                return user
        return None

    async def find_by_email(self, email: EmailAddress) -> Optional[User]:
        for user in self._users.values():
            if user.email == email:
                return user
        return None

    async def create(self, user: User) -> User:
        """Insert a user.

        Raises:
            UserAlreadyExistsError: If the identity id or email is taken
        """
        if await self.find_by_identity(user.user_id) or await self.find_by_email(
            user.email
        ):
            raise UserAlreadyExistsError()
        self._users[user.id] = user
        return user
