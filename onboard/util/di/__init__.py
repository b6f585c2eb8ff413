"""Dependency injection module."""

from typing import Type

from onboard.util.di.application import ProdApplicationProvider
from onboard.util.di.base import Component, ProviderBase
from onboard.util.di.core import ClockProvider, ProdClockProvider, ProdConfigProvider
from onboard.util.di.domain import ProdDomainProvider
from onboard.util.di.infrastructure import (
    EmailProvider,
    IdentityProvider,
    PersistenceProvider,
    ProdEmailProvider,
    ProdIdentityProvider,
    ProdPersistenceProvider,
)
from onboard.util.error import ConfigurationError

# Single list - all providers treated uniformly
PROVIDERS: list[Type[ProviderBase]] = [
    # Core providers (not mockable)
    ProdConfigProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    # Mockable components
    ClockProvider,
    EmailProvider,
    IdentityProvider,
    PersistenceProvider,
]


def get_provider(
    base: Type[ProviderBase], use_mock: bool = False
) -> Type[ProviderBase]:
    """Get appropriate provider class.

    - No subclasses: Concrete provider, use directly
    - Has subclasses: Mockable component, select by __is_mock__ flag

    Args:
        base: Provider base class
        use_mock: Whether to use mock implementation

    Returns:
        Provider class (not instantiated)

    Raises:
        ConfigurationError: If requested implementation not found
    """
    subclasses = base.__subclasses__()

    if not subclasses:
        return base

    impl = next(
        (c for c in subclasses if getattr(c, "__is_mock__", False) == use_mock),
        None,
    )

    if not impl:
        kind = "mock" if use_mock else "production"
        component_name = getattr(base, "__mock_component__", base.__name__)
        raise ConfigurationError(f"No {kind} implementation for {component_name}")

    return impl


__all__ = [
    "Component",
    "ProviderBase",
    "PROVIDERS",
    "get_provider",
    # Core providers
    "ProdConfigProvider",
    "ProdDomainProvider",
    "ProdApplicationProvider",
    # Mockable base classes
    "ClockProvider",
    "EmailProvider",
    "IdentityProvider",
    "PersistenceProvider",
    # Production implementations
    "ProdClockProvider",
    "ProdEmailProvider",
    "ProdIdentityProvider",
    "ProdPersistenceProvider",
]
