"""Observability configuration using Logfire.

Usage:
    import logfire

    # Structured logging
    logfire.info("Invitation created", invitation_id=str(invitation.id))

    # Manual spans for critical operations
    with logfire.span("accept_invitation", identity_id=identity_id):
        ...

Invitation tokens are bearer credentials: only ever log ``token[:8] + "..."``.
"""

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from onboard.config import Settings


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire for observability.

    Token Configuration:
    - Set OBSERVABILITY__LOGFIRE_TOKEN environment variable to enable cloud sending
    - If token is present, logs will be sent to Logfire cloud by default
    - Can be explicitly controlled with OBSERVABILITY__SEND_TO_LOGFIRE

    Args:
        settings: Application settings
    """
    # Priority: explicit setting > token presence > default (False)
    if settings.observability.send_to_logfire is not None:
        send_to_logfire = settings.observability.send_to_logfire
    elif settings.observability.logfire_token:
        send_to_logfire = True
    else:
        send_to_logfire = False

    config_kwargs = {
        "service_name": "onboard-api",
        "service_version": "0.1.0",
        "environment": settings.environment,
        "send_to_logfire": send_to_logfire,
        # Invitation links carry the token in the query string
        "scrubbing": logfire.ScrubbingOptions(extra_patterns=["token"]),
        "console": logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
    }

    if settings.observability.logfire_token:
        config_kwargs["token"] = settings.observability.logfire_token

    logfire.configure(**config_kwargs)

    logfire.info(
        "Observability configured",
        environment=settings.environment,
        debug=settings.debug,
        send_to_logfire=send_to_logfire,
        cloud_configured=bool(settings.observability.logfire_token),
    )


def instrument_fastapi(app: FastAPI) -> None:
    """Instrument FastAPI application with Logfire.

    Headers are not captured because they carry the session token. Endpoint
    arguments are recorded with any invitation token shortened.

    Args:
        app: FastAPI application instance
    """

    def _map_request_attributes(request, attributes):
        values = attributes.get("values") or {}
        if isinstance(values.get("token"), str):
            values = {**values, "token": values["token"][:8] + "..."}
        return {**attributes, "values": values, "path": request.url.path}

    logfire.instrument_fastapi(
        app,
        capture_headers=False,
        request_attributes_mapper=_map_request_attributes,
    )
    logfire.info("FastAPI instrumented")


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Instrument SQLAlchemy engine with Logfire.

    Args:
        engine: SQLAlchemy async engine
    """
    logfire.instrument_sqlalchemy(
        engine=engine.sync_engine,
        enable_commenter=True,  # Add SQL comments with span context
    )
    logfire.info("SQLAlchemy instrumented")


def instrument_httpx() -> None:
    """Instrument httpx so email and identity-provider calls are traced."""
    logfire.instrument_httpx()
    logfire.info("httpx instrumented")
