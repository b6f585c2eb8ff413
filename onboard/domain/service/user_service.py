"""User domain service."""

from typing import Optional
from uuid import uuid4

import logfire

from onboard.domain.error import (
    NotAuthorizedError,
    NotFoundError,
    UserAlreadyExistsError,
)
from onboard.domain.model import Invitation, User
from onboard.domain.repository import UserRepository
from onboard.domain.value import EmailAddress, IdentityId, UserId, UserRole
from onboard.util.clock import Clock

from .base import Service


class UserService(Service):
    """Domain service for user lookups and materialization."""

    def __init__(self, user_repository: UserRepository, clock: Clock) -> None:
        """Initialize user service.

        Args:
            user_repository: User repository
            clock: Time source
        """
        self.user_repository = user_repository
        self.clock = clock

    async def find_by_identity(self, identity_id: IdentityId) -> Optional[User]:
        with logfire.span(
            "user_service.find_by_identity", identity_id=identity_id
        ):
            return await self.user_repository.find_by_identity(identity_id)

    async def get_by_id(self, user_id: UserId) -> User:
        """Get user by ID.

        Raises:
            NotFoundError: If user not found
        """
        with logfire.span("user_service.get_by_id", user_id=str(user_id)):
            user = await self.user_repository.find_by_id(user_id)
            if not user:
                logfire.warn("User not found", user_id=str(user_id))
                raise NotFoundError("User", str(user_id))
            return user

    async def require_role(
        self, identity_id: IdentityId, role: UserRole, action: str
    ) -> User:
        """Resolve the calling identity and check its role.

        Args:
            identity_id: Caller's identity-provider subject id
            role: Role the action requires
            action: Description used in the error message

        Returns:
            The calling user

        Raises:
            NotFoundError: If the caller has no user record
            NotAuthorizedError: If the caller has a different role
        """
        with logfire.span(
            "user_service.require_role", identity_id=identity_id, role=role.value
        ):
            user = await self.user_repository.find_by_identity(identity_id)
            if user is None:
                logfire.warn("Caller has no user record", identity_id=identity_id)
                raise NotFoundError("User", identity_id)
            if user.role != role:
                logfire.warn(
                    "Caller lacks required role",
                    identity_id=identity_id,
                    role=user.role.value,
                    required=role.value,
                )
                raise NotAuthorizedError(action, role.value)
            return user

    async def ensure_email_available(self, email: EmailAddress) -> None:
        """Raise if a user already exists with ``email``.

        Raises:
            UserAlreadyExistsError: If the email is taken
        """
        with logfire.span("user_service.ensure_email_available", email=str(email)):
            if await self.user_repository.find_by_email(email) is not None:
                logfire.warn("User already exists for email", email=str(email))
                raise UserAlreadyExistsError("A user with this email already exists")

    async def create_from_invitation(
        self,
        identity_id: IdentityId,
        invitation: Invitation,
        fallback_first_name: Optional[str] = None,
        fallback_last_name: Optional[str] = None,
    ) -> User:
        """Materialize the user an invitation describes.

        Role, company and profile fields come from the invitation; the
        fallback names are only used where the invitation has none.
        """
        data = invitation.user_data
        now = self.clock.now()
        return await self._create(
            User(
                id=UserId(uuid4()),
                user_id=identity_id,
                email=invitation.email,
                first_name=data.first_name or fallback_first_name,
                last_name=data.last_name or fallback_last_name,
                phone=data.phone,
                job_title=data.job_title,
                department=data.department,
                location=data.location,
                date_of_birth=data.date_of_birth,
                role=invitation.role,
                company_id=invitation.company_id,
                profile_completed=False,
                created_at=now,
                updated_at=now,
            )
        )

    async def create_default(
        self,
        identity_id: IdentityId,
        email: EmailAddress,
        first_name: Optional[str],
        last_name: Optional[str],
    ) -> User:
        """Provision a trainee without company for an uninvited sign-up."""
        now = self.clock.now()
        return await self._create(
            User(
                id=UserId(uuid4()),
                user_id=identity_id,
                email=email,
                first_name=first_name,
                last_name=last_name,
                role=UserRole.TRAINEE,
                company_id=None,
                profile_completed=False,
                created_at=now,
                updated_at=now,
            )
        )

    async def _create(self, user: User) -> User:
        with logfire.span(
            "user_service.create",
            identity_id=user.user_id,
            role=user.role.value,
        ):
            saved = await self.user_repository.create(user)
            logfire.info(
                "User created",
                user_id=str(saved.id),
                identity_id=saved.user_id,
                role=saved.role.value,
                company_id=str(saved.company_id) if saved.company_id else None,
            )
            return saved
