"""Core DI providers."""

from dishka import Scope, provide

from onboard.adapter.identity.webhook import WebhookVerifier
from onboard.config import AuthSettings, Settings
from onboard.util.cache import NameCache
from onboard.util.clock import Clock
from onboard.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Settings and process-wide collaborators (non-mockable).

    Settings are loaded from environment variables and .env file automatically.
    """

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide(scope=Scope.APP)
    def provide_auth_settings(self, settings: Settings) -> AuthSettings:
        return settings.auth

    @provide(scope=Scope.APP)
    def provide_name_cache(self, settings: Settings, clock: Clock) -> NameCache:
        """Display-name cache shared by all requests."""
        return NameCache(
            settings.invitations.lookup_cache_ttl_seconds,
            clock,
            max_size=settings.invitations.lookup_cache_max_size,
        )

    @provide(scope=Scope.APP)
    def provide_webhook_verifier(
        self, settings: Settings, clock: Clock
    ) -> WebhookVerifier:
        return WebhookVerifier(
            secret=settings.identity_provider.webhook_secret,
            clock=clock,
            tolerance_seconds=settings.identity_provider.webhook_tolerance_seconds,
        )


class ClockProvider(ProviderBase):
    """Clock component base."""

    __mock_component__ = "clock"


class ProdClockProvider(ClockProvider):
    """Wall clock."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def provide_clock(self) -> Clock:
        return Clock()
