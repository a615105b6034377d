"""
route_planner.api.app

FastAPI app factory for the route planner service.

Responsibilities:
- Build the FastAPI application and register routers/middleware.
- Create and dispose the shared `httpx.AsyncClient` and the routing session.
- Provide a single composition root where cross-cutting concerns live.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI

from route_planner import __version__
from route_planner.api.routers.health import router as health_router
from route_planner.api.routers.query import router as query_router
from route_planner.api.routers.routing import router as routing_router
from route_planner.observability.logging import configure_logging, get_logger
from route_planner.observability.middleware import RequestContextMiddleware
from route_planner.services.session_service import RoutingSession
from route_planner.settings import Settings

log = get_logger(__name__)


def create_app(
    *,
    settings: Settings,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    # Configure structured logging once at process startup (before app serves requests).
    configure_logging(service_name=settings.service_name, level=settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info("startup", env=settings.env)
        # `transport` lets tests replace the routing service with an in-process fake.
        async with httpx.AsyncClient(
            timeout=settings.http_timeout_s, transport=transport
        ) as http:
            session = RoutingSession(settings=settings, http=http)
            app.state.session = session
            if settings.fetch_info_on_startup:
                session.start()
            try:
                yield
            finally:
                await session.aclose()
                log.info("shutdown")

    app = FastAPI(
        title="Route Planner",
        version=__version__,
        docs_url="/docs",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.add_middleware(RequestContextMiddleware)
    app.include_router(health_router, tags=["health"])
    app.include_router(query_router)
    app.include_router(routing_router)

    return app


# --- Module Notes -----------------------------------------------------------
# One session per process: every browser tab talking to this app shares the query.
