"""Synchronization of user attributes back to the identity provider."""

from abc import ABC, abstractmethod
from typing import Any, Optional

import logfire

from onboard.domain.model import Invitation, User
from onboard.domain.value import CompanyId, IdentityId, InvitationId, UserRole

from .base import Service


class IdentityProviderClient(ABC):
    """Port to the identity provider's management API."""

    @abstractmethod
    async def update_user_metadata(
        self, identity_id: IdentityId, metadata: dict[str, Any]
    ) -> None:
        """Merge ``metadata`` into the identity's public metadata.

        Raises:
            IdentityProviderError: If the provider rejects the update
        """
        pass


class IdentitySyncService(Service):
    """Pushes role and company onto the identity so session tokens carry them.

    Updates merge into the provider's public metadata, so publishing the same
    values twice is harmless.
    """

    def __init__(self, identity_client: IdentityProviderClient) -> None:
        self.identity_client = identity_client

    async def publish(
        self,
        identity_id: IdentityId,
        role: UserRole,
        company_id: Optional[CompanyId] = None,
        invitation_id: Optional[InvitationId] = None,
    ) -> dict[str, Any]:
        """Publish role and company for ``identity_id``.

        Returns:
            The metadata that was sent

        Raises:
            IdentityProviderError: If the provider rejects the update
        """
        metadata: dict[str, Any] = {
            "role": role.value,
            "company_id": str(company_id) if company_id else None,
        }
        if invitation_id is not None:
            metadata["invitation_id"] = str(invitation_id)

        with logfire.span(
            "identity_sync_service.publish",
            identity_id=identity_id,
            role=role.value,
        ):
            await self.identity_client.update_user_metadata(identity_id, metadata)
            logfire.info("Identity metadata synced", identity_id=identity_id)
            return metadata

    async def sync_invitation(
        self, identity_id: IdentityId, invitation: Invitation
    ) -> dict[str, Any]:
        """Publish the role and company ``invitation`` grants to ``identity_id``."""
        return await self.publish(
            identity_id, invitation.role, invitation.company_id, invitation.id
        )

    async def sync_user(
        self, user: User, invitation_id: Optional[InvitationId] = None
    ) -> dict[str, Any]:
        """Publish ``user``'s role and company to the identity provider."""
        return await self.publish(
            user.user_id, user.role, user.company_id, invitation_id
        )
