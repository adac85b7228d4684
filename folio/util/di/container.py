"""Production DI container."""

import logfire
from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka
from fastapi import FastAPI

from folio.util.di import PROVIDERS, get_provider


def create_container() -> AsyncContainer:
    """Build the production container.

    Every mockable component (persistence, storage, remote) gets its
    production implementation. Settings come from the environment.
    """
    providers = [get_provider(base, use_mock=False)() for base in PROVIDERS]
    logfire.debug(
        "DI container built", providers=[type(p).__name__ for p in providers]
    )
    return make_async_container(*providers, FastapiProvider())


def setup_di(app: FastAPI, container: AsyncContainer) -> None:
    """Serve FromDishka dependencies from container.

    The app lifespan closes the container on shutdown.
    """
    setup_dishka(container, app)
