"""Identity provider adapter: management API client and webhook verification."""

from .client import MockIdentityProviderClient, RealIdentityProviderClient
from .webhook import WebhookVerifier

__all__ = [
    "MockIdentityProviderClient",
    "RealIdentityProviderClient",
    "WebhookVerifier",
]
