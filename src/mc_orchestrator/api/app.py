"""
mc_orchestrator.api.app

FastAPI app factory for the Mobile Connect flow orchestrator.

Responsibilities:
- Build the FastAPI application and register routers/middleware.
- Compose the orchestrator from settings and the injected backends.
- Provide a single composition root where cross-cutting concerns live.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from mc_orchestrator.api.routers.health import router as health_router
from mc_orchestrator.api.routers.mobile_connect import router as mobile_connect_router
from mc_orchestrator.api.sessions import InMemorySessionStore, SessionMiddleware
from mc_orchestrator.backends.contracts import AuthorizationBackend, DiscoveryBackend
from mc_orchestrator.backends.unconfigured import UnconfiguredBackend
from mc_orchestrator.flow.orchestrator import FlowOrchestrator
from mc_orchestrator.flow.session_config import SessionConfigStore
from mc_orchestrator.observability.logging import configure_logging, get_logger
from mc_orchestrator.observability.middleware import RequestContextMiddleware
from mc_orchestrator.settings import Settings

log = get_logger(__name__)

STATIC_DIR = Path(__file__).resolve().parent / "static"
# Only flow endpoints need a session; health checks and static assets never create one.
SESSION_PATHS = ("/mobileconnect/", "/mobile_connect")


def create_app(
    *,
    settings: Settings,
    discovery: DiscoveryBackend | None = None,
    authorization: AuthorizationBackend | None = None,
) -> FastAPI:
    configure_logging(service_name=settings.service_name, level=settings.log_level)

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        log.info(
            "startup",
            env=settings.env,
            client_id=settings.client_id,
            discovery_url=settings.discovery_url,
            discovery_configured=discovery is not None,
            authorization_configured=authorization is not None,
        )
        yield
        log.info("shutdown")

    app = FastAPI(
        title="Mobile Connect Flow Orchestrator",
        version="0.1.0",
        docs_url="/docs" if settings.env != "prod" else None,
        openapi_url="/openapi.json" if settings.env != "prod" else None,
        lifespan=lifespan,
    )

    fallback = UnconfiguredBackend()
    app.state.sessions = InMemorySessionStore(max_age_seconds=settings.session_max_age_seconds)
    app.state.orchestrator = FlowOrchestrator(
        config_store=SessionConfigStore(settings=settings),
        discovery=discovery or fallback,
        authorization=authorization or fallback,
    )

    # Last added runs first: request context wraps the session lookup.
    app.add_middleware(
        SessionMiddleware,
        store=app.state.sessions,
        cookie_name=settings.session_cookie_name,
        max_age_seconds=settings.session_max_age_seconds,
        secure=settings.session_cookie_secure,
        paths=SESSION_PATHS,
    )
    app.add_middleware(RequestContextMiddleware)
    app.include_router(health_router, tags=["health"])
    app.include_router(mobile_connect_router)
    app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")
    return app


# --- Module Notes -----------------------------------------------------------
# Operator clients are injected here rather than constructed, so tests and alternative
# deployments swap them without touching the flow package.
