"""Dependency injection wiring (dishka)."""

from typing import Type

from guestbook.util.di.application import ProdApplicationProvider
from guestbook.util.di.base import Component, ProviderBase, get_provider
from guestbook.util.di.core import ProdConfigProvider
from guestbook.util.di.domain import ProdDomainProvider
from guestbook.util.di.infrastructure import PersistenceProvider, ProdPersistenceProvider

# Order is irrelevant to dishka; grouped for reading
PROVIDERS: list[Type[ProviderBase]] = [
    ProdConfigProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    PersistenceProvider,
]

__all__ = [
    "Component",
    "ProviderBase",
    "PROVIDERS",
    "get_provider",
    "ProdConfigProvider",
    "ProdDomainProvider",
    "ProdApplicationProvider",
    "PersistenceProvider",
    "ProdPersistenceProvider",
]
