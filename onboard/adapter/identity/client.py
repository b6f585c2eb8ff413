"""Identity provider management API client."""

from typing import Any

import httpx
import logfire

from onboard.adapter.error import IdentityProviderError
from onboard.domain.service.identity_service import IdentityProviderClient
from onboard.domain.value import IdentityId


class RealIdentityProviderClient(IdentityProviderClient):
    """Talks to the identity provider's backend API with the secret key."""

    def __init__(self, api_url: str, secret_key: str, timeout: float = 10.0) -> None:
        self.api_url = api_url.rstrip("/")
        self.secret_key = secret_key
        self.timeout = timeout

    async def update_user_metadata(
        self, identity_id: IdentityId, metadata: dict[str, Any]
    ) -> None:
        """Merge ``metadata`` into the user's public metadata.

        Raises:
            IdentityProviderError: If the request fails or is rejected
        """
        url = f"{self.api_url}/users/{identity_id}/metadata"

        try:
            async with httpx.AsyncClient() as client:
                response = await client.patch(
                    url,
                    json={"public_metadata": metadata},
                    headers={"Authorization": f"Bearer {self.secret_key}"},
                    timeout=self.timeout,
                )
        except httpx.HTTPError as e:
            logfire.error(
                "Identity provider HTTP error", identity_id=identity_id, error=str(e)
            )
            raise IdentityProviderError(f"HTTP error updating user metadata: {e}")

        if response.status_code != 200:
            logfire.error(
                "Identity provider metadata update failed",
                identity_id=identity_id,
                status_code=response.status_code,
                error=response.text,
            )
            raise IdentityProviderError(
                f"Metadata update failed: {response.status_code}"
            )


class MockIdentityProviderClient(IdentityProviderClient):
    """Keeps metadata in memory.

    Set ``fail`` to make updates raise ``IdentityProviderError``.
    """

    def __init__(self) -> None:
        self.metadata: dict[str, dict[str, Any]] = {}
        self.fail = False

    async def update_user_metadata(
        self, identity_id: IdentityId, metadata: dict[str, Any]
    ) -> None:
        if self.fail:
            raise IdentityProviderError("Mock identity provider failure")
        self.metadata.setdefault(identity_id, {}).update(metadata)
