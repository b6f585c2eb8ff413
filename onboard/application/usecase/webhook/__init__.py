"""Webhook use cases."""

from onboard.application.usecase.webhook.handle_identity_event import (
    HandleIdentityEventRequest,
    HandleIdentityEventResponse,
    HandleIdentityEventUseCase,
    WebhookOutcome,
)

__all__ = [
    "HandleIdentityEventRequest",
    "HandleIdentityEventResponse",
    "HandleIdentityEventUseCase",
    "WebhookOutcome",
]
