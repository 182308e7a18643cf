"""Health check endpoints.

Learn: Simple GET endpoints that verify the server is running
and dependencies (Postgres, Redis) are reachable, plus a count of
live WebSocket connections.
"""

from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse
from sqlalchemy import text

from fastfood import __version__
from fastfood.db.engine import engine

router = APIRouter()
root_router = APIRouter()


@root_router.get("/", response_class=PlainTextResponse)
async def root():
    return "Fast Food Backend API is running!"


@router.get("/health")
async def health_check(request: Request):
    """Check server health and dependency connectivity."""
    checks = {"server": "ok", "version": __version__}

    # Check Postgres
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        checks["postgres"] = "ok"
    except Exception as e:
        checks["postgres"] = f"error: {e}"

    # Check Redis
    try:
        from redis.asyncio import from_url
        from fastfood.config import settings

        r = from_url(settings.redis_url)
        await r.ping()
        await r.aclose()
        checks["redis"] = "ok"
    except Exception as e:
        checks["redis"] = f"error: {e}"

    status = "healthy" if all(
        v == "ok" for k, v in checks.items() if k != "version"
    ) else "degraded"

    return {
        "status": status,
        **checks,
        "websocket_connections": len(request.app.state.registry),
    }
