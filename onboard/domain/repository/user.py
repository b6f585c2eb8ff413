"""User repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from onboard.domain.model.user import User
from onboard.domain.value import EmailAddress, IdentityId, UserId


class UserRepository(ABC):
    """Repository for User aggregate."""

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        pass

    @abstractmethod
    async def find_by_identity(self, identity_id: IdentityId) -> Optional[User]:
        """Find a user by their identity-provider subject id.

        Args:
            identity_id: The ``sub`` of the identity provider account

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_email(self, email: EmailAddress) -> Optional[User]:
        pass

    @abstractmethod
    async def create(self, user: User) -> User:
        """Insert a new user.

        Raises:
            UserAlreadyExistsError: If the identity id or email is taken
        """
        pass
