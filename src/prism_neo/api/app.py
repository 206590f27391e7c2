"""
prism_neo.api.app

FastAPI app factory for the Prism Neo command service.

Responsibilities:
- Build the FastAPI application and register routers/middleware.
- Create and dispose shared infrastructure (HTTP client, confirmation store, command router).
- Provide a single composition root where cross-cutting concerns live.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI

from prism_neo import __version__
from prism_neo.api.routers.commands import router as commands_router
from prism_neo.api.routers.dev_auth import router as dev_auth_router
from prism_neo.api.routers.health import router as health_router
from prism_neo.billing.confirmation import ConfirmationStore
from prism_neo.commands.router import CommandRouter
from prism_neo.commands.service import CommandService
from prism_neo.observability.logging import configure_logging, get_logger
from prism_neo.observability.middleware import RequestContextMiddleware
from prism_neo.settings import Settings
from prism_neo.space_api.client import SpaceApiClient, create_http_client

log = get_logger(__name__)


def create_app(*, settings: Settings, http: httpx.AsyncClient | None = None) -> FastAPI:
    """
    `http` lets tests inject a client with a mock transport; by default one is built from
    settings on startup and closed on shutdown.
    """

    configure_logging(service_name=settings.service_name, level=settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info("startup", env=settings.env, space_api=settings.space_api_base_url)
        client = http if http is not None else create_http_client(settings)
        app.state.http = client
        # One store per process: pending logouts do not survive a restart.
        confirmations = ConfirmationStore(ttl_ms=settings.logout_confirm_ttl_seconds * 1000)
        service = CommandService.from_settings(
            settings,
            api=SpaceApiClient.from_settings(settings, client),
            confirmations=confirmations,
        )
        app.state.confirmations = confirmations
        app.state.command_router = CommandRouter(service)
        try:
            yield
        finally:
            if http is None:
                await client.aclose()
            log.info("shutdown")

    app = FastAPI(
        title="Prism Neo",
        version=__version__,
        docs_url="/docs",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(RequestContextMiddleware)
    app.include_router(health_router, tags=["health"])
    app.include_router(dev_auth_router)
    app.include_router(commands_router)

    return app
