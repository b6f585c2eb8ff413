"""HTTP client for the transactional email provider.

The provider accepts a JSON message (from, to, subject, html, text) with a
Bearer API key and answers 200 with a message id.
"""

import httpx
import logfire

from onboard.adapter.error import EmailDeliveryError
from onboard.domain.service.notification_service import EmailMessage, EmailSender


class RealEmailSender(EmailSender):
    """Sends email through the provider's REST API."""

    def __init__(
        self,
        api_url: str,
        api_key: str,
        from_address: str,
        from_name: str,
        timeout: float = 10.0,
    ) -> None:
        """Initialize email sender.

        Args:
            api_url: Provider endpoint that accepts messages
            api_key: Provider API key
            from_address: Sender address
            from_name: Sender display name
            timeout: Request timeout in seconds
        """
        self.api_url = api_url
        self.api_key = api_key
        self.sender = f"{from_name} <{from_address}>"
        self.timeout = timeout

    async def send(self, message: EmailMessage) -> None:
        """Send a message.

        Raises:
            EmailDeliveryError: If the request fails or is rejected
        """
        payload = {
            "from": self.sender,
            "to": [message.to],
            "subject": message.subject,
            "html": message.html,
            "text": message.text,
        }

        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(
                    self.api_url,
                    json=payload,
                    headers={"Authorization": f"Bearer {self.api_key}"},
                    timeout=self.timeout,
                )
        except httpx.HTTPError as e:
            logfire.error("Email provider HTTP error", error=str(e))
            raise EmailDeliveryError(f"HTTP error sending email: {e}")

        if response.status_code >= 300:
            logfire.error(
                "Email provider rejected message",
                status_code=response.status_code,
                error=response.text,
            )
            raise EmailDeliveryError(
                f"Email provider returned {response.status_code}"
            )

        logfire.info(
            "Email accepted by provider",
            to=message.to,
            message_id=response.json().get("id"),
        )


class MockEmailSender(EmailSender):
    """Records messages instead of sending them.

    Set ``fail`` to make the next sends raise ``EmailDeliveryError``.
    """

    def __init__(self) -> None:
        self.sent: list[EmailMessage] = []
        self.fail = False

    async def send(self, message: EmailMessage) -> None:
        if self.fail:
            raise EmailDeliveryError("Mock email delivery failure")
        self.sent.append(message)
