"""Email infrastructure providers."""

from dishka import Scope, provide

from onboard.adapter.email.client import RealEmailSender
from onboard.config import Settings
from onboard.domain.service import EmailSender
from onboard.util.di.base import ProviderBase


class EmailProvider(ProviderBase):
    """Email component base."""

    __mock_component__ = "email"


class ProdEmailProvider(EmailProvider):
    """Production email provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_email_sender(self, settings: Settings) -> EmailSender:
        """Provide transactional email sender.

        Raises:
            ValueError: If the email provider API key is not configured
        """
        if not settings.email.api_key:
            raise ValueError("Email provider API key must be configured")

        return RealEmailSender(
            api_url=settings.email.api_url,
            api_key=settings.email.api_key,
            from_address=settings.email.from_address,
            from_name=settings.email.from_name,
            timeout=settings.email.timeout_seconds,
        )
