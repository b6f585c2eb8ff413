"""Infrastructure layer errors."""


class AdapterError(Exception):
    """Base infrastructure error."""

    pass


class ProviderError(AdapterError):
    """External provider error."""

    pass


class EmailDeliveryError(ProviderError):
    """The email provider did not accept a message."""

    pass


class IdentityProviderError(ProviderError):
    """The identity provider's management API rejected a request."""

    pass


class WebhookVerificationError(AdapterError):
    """A webhook delivery failed signature or timestamp checks."""

    pass
