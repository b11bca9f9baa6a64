"""Dependency injection module.

Providers are listed once in ``PROVIDERS``. A provider with no subclasses
is concrete and always used as-is. A provider with subclasses is a
mockable component: its subclasses are the production and mock
implementations, told apart by ``__is_mock__``.
"""

from typing import Type

from forum.util.di.application import ProdApplicationProvider
from forum.util.di.base import Component, ProviderBase
from forum.util.di.core import ProdConfigProvider
from forum.util.di.domain import ProdDomainProvider
from forum.util.di.infrastructure import (
    PersistenceProvider,
    ProdPersistenceProvider,
)

PROVIDERS: list[Type[ProviderBase]] = [
    ProdConfigProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    PersistenceProvider,
]


def is_mockable(base: Type[ProviderBase]) -> bool:
    """Whether ``base`` is a component with swappable implementations."""
    return bool(base.__subclasses__())


def mockable_components() -> set[Component]:
    """Names of every component that tests may mock or unmock."""
    return {
        base.__mock_component__
        for base in PROVIDERS
        if is_mockable(base) and base.__mock_component__ is not None
    }


def get_provider(
    base: Type[ProviderBase], use_mock: bool = False
) -> Type[ProviderBase]:
    """Pick the provider class to instantiate for ``base``.

    Args:
        base: Entry from ``PROVIDERS``
        use_mock: Pick the mock implementation of a mockable component

    Returns:
        Provider class (not instantiated)

    Raises:
        ValueError: If the component has no implementation of that kind
    """
    if not is_mockable(base):
        return base

    for impl in base.__subclasses__():
        if getattr(impl, "__is_mock__", False) == use_mock:
            return impl

    kind = "mock" if use_mock else "production"
    raise ValueError(
        f"No {kind} implementation for {base.__mock_component__ or base.__name__}"
    )


__all__ = [
    "Component",
    "ProviderBase",
    "PROVIDERS",
    "get_provider",
    "is_mockable",
    "mockable_components",
    "ProdConfigProvider",
    "ProdDomainProvider",
    "ProdApplicationProvider",
    "PersistenceProvider",
    "ProdPersistenceProvider",
]
