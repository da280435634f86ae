"""Dependency injection container wiring for the API process."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka
from fastapi import FastAPI
import logfire

from libre.util.di import PROVIDERS, get_provider


def create_container() -> AsyncContainer:
    """Build the production container: PostgreSQL, Redis and real OAuth clients.

    Settings are read from the environment when first requested.
    """
    provider_instances = [get_provider(base, use_mock=False)() for base in PROVIDERS]
    return make_async_container(*provider_instances, FastapiProvider())


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Close the container on shutdown.

    Runs the APP-scope finalizers: the database engine is disposed and the
    Redis pool closed.
    """
    yield
    container: AsyncContainer = app.state.dishka_container
    await container.close()
    logfire.info("DI container closed")


def setup_di(app: FastAPI, container: AsyncContainer) -> None:
    """Attach the container to the app; FastAPI routes resolve from it."""
    setup_dishka(container, app)
