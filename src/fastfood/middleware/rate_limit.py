"""Rate limiting middleware — Redis fixed-window counters per client IP.

Learn: Each request increments "fastfood:rl:{ip}:{bucket}:{minute}".
Login and registration share a much smaller "auth" bucket to slow down
credential stuffing; everything else counts against "api". Health
checks are never limited.

When Redis was not initialised (tests, local dev) or errors mid-request,
the request goes through unlimited.
"""

import time

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from fastfood.db.redis import get_redis

logger = structlog.get_logger()

AUTH_PATHS = ("/api/auth/login", "/api/auth/register")
EXEMPT_PATHS = ("/", "/api/health")


class RateLimitMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, default_rpm: int = 100, auth_rpm: int = 10):
        super().__init__(app)
        self.default_rpm = default_rpm
        self.auth_rpm = auth_rpm

    def _bucket(self, path: str) -> tuple[str, int]:
        if path.startswith(AUTH_PATHS):
            return "auth", self.auth_rpm
        return "api", self.default_rpm

    async def dispatch(self, request: Request, call_next) -> Response:
        path = request.url.path
        if path in EXEMPT_PATHS:
            return await call_next(request)

        try:
            redis = get_redis()
        except RuntimeError:
            return await call_next(request)

        client_ip = request.client.host if request.client else "unknown"
        bucket, rpm = self._bucket(path)
        window = int(time.time() // 60)
        key = f"fastfood:rl:{client_ip}:{bucket}:{window}"

        try:
            count = await redis.incr(key)
            if count == 1:
                await redis.expire(key, 120)
        except Exception as e:
            logger.warning("rate_limit.redis_error", error=str(e))
            return await call_next(request)

        if count > rpm:
            logger.info("rate_limit.exceeded", client_ip=client_ip, bucket=bucket)
            return JSONResponse(
                status_code=429,
                content={"detail": "Rate limit exceeded. Try again later."},
                headers={"Retry-After": "60"},
            )

        response = await call_next(request)
        response.headers["X-RateLimit-Limit"] = str(rpm)
        response.headers["X-RateLimit-Remaining"] = str(max(0, rpm - count))
        return response
