"""Production container and FastAPI hookup."""

import logfire
from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka
from fastapi import FastAPI

from guestbook.util.di import PROVIDERS, get_provider


def create_container() -> AsyncContainer:
    """Build the container with every production provider.

    Settings come from the environment when the config provider first runs.
    """
    providers = [get_provider(base, use_mock=False)() for base in PROVIDERS]
    logfire.debug(
        "Building DI container",
        providers=[type(p).__name__ for p in providers],
    )
    # FastapiProvider lets request-scoped providers receive the Request
    return make_async_container(*providers, FastapiProvider())


def setup_di(app: FastAPI, container: AsyncContainer) -> None:
    """Attach ``container`` to ``app``; it is closed by the app lifespan."""
    setup_dishka(container, app)
