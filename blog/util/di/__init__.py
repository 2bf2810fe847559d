"""Dependency injection wiring."""

from typing import Type

from blog.util.di.application import ProdApplicationProvider
from blog.util.di.base import Component, ProviderBase, get_provider
from blog.util.di.core import ProdConfigProvider
from blog.util.di.domain import ProdDomainProvider
from blog.util.di.infrastructure import ClockProvider, PersistenceProvider

# Every container is built from these; the last two are mockable components
PROVIDERS: list[Type[ProviderBase]] = [
    ProdConfigProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    ClockProvider,
    PersistenceProvider,
]

__all__ = [
    "Component",
    "PROVIDERS",
    "ProviderBase",
    "get_provider",
]
