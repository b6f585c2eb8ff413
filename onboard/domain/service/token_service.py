"""Invitation token generation."""

import secrets

import logfire

from onboard.domain.error import TokenCollisionError
from onboard.domain.repository import InvitationRepository
from onboard.domain.value import InvitationToken

from .base import Service


class TokenService(Service):
    """Issues unguessable invitation tokens."""

    def __init__(
        self, invitation_repository: InvitationRepository, token_bytes: int = 32
    ) -> None:
        self.invitation_repository = invitation_repository
        self.token_bytes = token_bytes

    def generate(self) -> InvitationToken:
        """Return a fresh hex token from the OS random source."""
        return InvitationToken(secrets.token_hex(self.token_bytes))

    async def generate_unique(self) -> InvitationToken:
        """Generate a token that no invitation, past or present, carries.

        Raises:
            TokenCollisionError: If the generated token already exists
        """
        with logfire.span("token_service.generate_unique"):
            token = self.generate()
            if await self.invitation_repository.token_exists(token):
                logfire.error("Invitation token collision", token=token.masked)
                raise TokenCollisionError()
            return token
