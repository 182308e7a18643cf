"""FastAPI application factory.

Learn: create_app() returns a fully wired FastAPI instance. The real-time
objects (connection registry, event router, WebSocket gateway) are built
here, per application, and parked on app.state. Routes and services
reach them through the request, so two apps (e.g. in tests) never share
connections.

Lifespan only deals with external resources: Redis at startup, and on
shutdown every open WebSocket, Redis and the database engine.
"""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from fastfood import __version__
from fastfood.api import api_router
from fastfood.api.health import root_router
from fastfood.config import settings
from fastfood.db.engine import engine
from fastfood.db.redis import close_redis, init_redis
from fastfood.middleware.rate_limit import RateLimitMiddleware
from fastfood.middleware.request_id import RequestIdMiddleware
from fastfood.middleware.security import SecurityHeadersMiddleware
from fastfood.realtime.gateway import RealtimeGateway
from fastfood.realtime.gateway import router as ws_router
from fastfood.realtime.registry import ConnectionRegistry
from fastfood.realtime.router import EventRouter

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown lifecycle."""
    logger.info(
        "fastfood.starting",
        version=__version__,
        environment=settings.environment,
        port=settings.port,
    )

    try:
        await init_redis()
        logger.info("fastfood.redis_connected", url=settings.redis_url)
    except Exception as e:
        # Redis only backs rate limiting; run without it
        logger.warning("fastfood.redis_unavailable", error=str(e))

    yield

    logger.info("fastfood.shutdown", connections=len(app.state.registry))
    await app.state.registry.close_all()
    await close_redis()
    await engine.dispose()


def create_app() -> FastAPI:
    """Build and return the FastAPI application."""
    app = FastAPI(
        title="Fast Food Backend",
        description="Ordering backend with real-time order and menu notifications",
        version=__version__,
        lifespan=lifespan,
    )

    # ── Real-time wiring ──────────────────────────────────────
    registry = ConnectionRegistry()
    app.state.registry = registry
    app.state.events = EventRouter(registry)
    app.state.gateway = RealtimeGateway(registry)

    # ── Middleware stack ──────────────────────────────────────
    # Starlette runs middleware in reverse order of registration.
    # Request flow: RequestId → Security → RateLimit → CORS → handler
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(
        RateLimitMiddleware,
        default_rpm=settings.rate_limit_rpm,
        auth_rpm=settings.rate_limit_auth_rpm,
    )
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestIdMiddleware)

    # ── Routes ────────────────────────────────────────────────
    app.include_router(root_router)
    app.include_router(api_router)
    app.include_router(ws_router)

    return app


# Default app instance (used by uvicorn: fastfood.main:app)
app = create_app()
