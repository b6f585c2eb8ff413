"""Identity provider infrastructure providers."""

from dishka import Scope, provide

from onboard.adapter.identity.client import RealIdentityProviderClient
from onboard.config import Settings
from onboard.domain.service import IdentityProviderClient
from onboard.util.di.base import ProviderBase


class IdentityProvider(ProviderBase):
    """Identity provider component base."""

    __mock_component__ = "identity"


class ProdIdentityProvider(IdentityProvider):
    """Production identity provider management API client."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_identity_client(self, settings: Settings) -> IdentityProviderClient:
        """Provide identity provider client.

        Raises:
            ValueError: If the identity provider secret key is not configured
        """
        if not settings.identity_provider.secret_key:
            raise ValueError("Identity provider secret key must be configured")

        return RealIdentityProviderClient(
            api_url=settings.identity_provider.api_url,
            secret_key=settings.identity_provider.secret_key,
            timeout=settings.identity_provider.timeout_seconds,
        )
