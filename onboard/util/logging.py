"""Logging configuration for the application."""

import logging
import sys

from onboard.config import Settings

# Third-party loggers that are too chatty at INFO
_NOISY_LOGGERS = ("httpx", "httpcore", "asyncio", "sqlalchemy.engine")


def resolve_log_level(settings: Settings) -> int:
    """Pick the stdlib log level for the configured environment.

    Args:
        settings: Application settings

    Returns:
        Logging level constant
    """
    if settings.debug:
        return logging.DEBUG
    if settings.environment == "production":
        return logging.WARNING
    return logging.INFO


def setup_logging(settings: Settings) -> None:
    """Configure stdlib logging alongside Logfire.

    Logfire carries the structured events; plain loggers (uvicorn, alembic,
    libraries) still go to stdout in a single format.

    Args:
        settings: Application settings
    """
    level = resolve_log_level(settings)

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,  # Override any existing configuration
    )

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger("onboard").setLevel(level)

    logger = logging.getLogger(__name__)
    logger.info(
        "Logging configured: environment=%s, level=%s",
        settings.environment,
        logging.getLevelName(level),
    )
