"""Dependency injection container."""

from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka
from fastapi import FastAPI

from agora.util.di import build_providers


def create_container() -> AsyncContainer:
    """Build the production container.

    Every component uses its real implementation; settings come from the
    environment.
    """
    # FastapiProvider exposes the Request object to request-scoped factories
    return make_async_container(*build_providers(), FastapiProvider())


def setup_di(app: FastAPI, container: AsyncContainer) -> None:
    """Attach ``container`` to ``app`` so DishkaRoute handlers can resolve."""
    setup_dishka(container, app)
