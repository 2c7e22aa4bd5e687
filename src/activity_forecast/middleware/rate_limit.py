"""Rate limiting middleware."""

import logging
from typing import Callable, Optional

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from activity_forecast.config import RATE_LIMIT_ENABLED
from activity_forecast.rate_limiter import RateLimiter

logger = logging.getLogger(__name__)


class RateLimitMiddleware(BaseHTTPMiddleware):
    """FastAPI middleware enforcing a per-client rate limit.

    Returns HTTP 429 with a Retry-After header when a client exceeds the limit.
    """

    # Paths that should bypass rate limiting
    BYPASS_PATHS = {
        "/activities/health",
        "/activities/info",
        "/docs",
        "/redoc",
        "/openapi.json",
        "/favicon.ico",
    }

    def __init__(
        self,
        app,
        rate_limiter: Optional[RateLimiter] = None,
        enabled: bool = RATE_LIMIT_ENABLED
    ):
        """Initialize rate limit middleware.

        Args:
            app: FastAPI application instance
            rate_limiter: Limiter to consult (creates default if None)
            enabled: Whether limiting is applied at all
        """
        super().__init__(app)
        self.enabled = enabled
        self.rate_limiter = rate_limiter or (RateLimiter() if enabled else None)
        if self.rate_limiter:
            logger.info(
                f"Rate limit enabled: {self.enabled}, limit: {self.rate_limiter.max_requests} "
                f"requests per {self.rate_limiter.window_seconds}s"
            )
        else:
            logger.info("Rate limit disabled")

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Process request through rate limiting check.

        Args:
            request: Incoming HTTP request
            call_next: Next middleware/endpoint in chain

        Returns:
            HTTP response (either rate limit error or continued response)
        """
        if not self.enabled or request.url.path in self.BYPASS_PATHS:
            return await call_next(request)

        client_host = request.client.host if request.client else "unknown"
        is_allowed, retry_after = await self.rate_limiter.is_allowed(client_host)

        if not is_allowed:
            endpoint = f"{request.method} {request.url.path}"
            logger.warning(f"Rate limit exceeded for {client_host} accessing {endpoint}")

            return JSONResponse(
                status_code=429,
                content={
                    "detail": "Rate limit exceeded. Please try again later.",
                    "retry_after": retry_after
                },
                headers={"Retry-After": str(retry_after)}
            )

        response = await call_next(request)

        response.headers["X-RateLimit-Limit"] = str(self.rate_limiter.max_requests)
        response.headers["X-RateLimit-Window"] = str(self.rate_limiter.window_seconds)

        return response
