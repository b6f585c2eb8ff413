"""Utility layer errors."""


class UtilError(Exception):
    """Base utility error."""

    pass


class ConfigurationError(UtilError):
    """Configuration error."""

    pass


class SessionTokenError(UtilError):
    """Identity-provider session token could not be verified."""

    pass
