"""Production container."""

from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka
from fastapi import FastAPI

from blog.util.di import PROVIDERS, get_provider


def create_container() -> AsyncContainer:
    """Build the container with the production implementation of every component."""
    providers = [get_provider(base)() for base in PROVIDERS]
    # FastapiProvider exposes the current Request to REQUEST-scoped providers
    return make_async_container(*providers, FastapiProvider())


def setup_di(app: FastAPI, container: AsyncContainer) -> None:
    """Attach ``container`` to ``app`` so DishkaRoute endpoints can resolve from it."""
    setup_dishka(container, app)
