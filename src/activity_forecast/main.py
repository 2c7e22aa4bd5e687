"""Main FastAPI application for the activity forecast service."""

import logging
import traceback
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from activity_forecast.activities.cache import ForecastCache
from activity_forecast.api.endpoints import router as activities_router
from activity_forecast.config import (
    HOST, PORT, DEBUG, CACHE_TTL_SECONDS, CACHE_MAX_ENTRIES, RATE_LIMIT_ENABLED
)
from activity_forecast.logging_config import configure_logging
from activity_forecast.middleware.rate_limit import RateLimitMiddleware
from activity_forecast.rate_limiter import RateLimiter

# Configure logging
configure_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    try:
        cache = app.state.forecast_cache
        logger.info(f"Forecast cache ready: ttl={cache.ttl}s, max_entries={cache.max_entries}")
        logger.info("Starting Activity Forecast Service")
        yield
    except Exception as e:
        logger.error(f"Startup error: {e}")
        logger.error(traceback.format_exc())
        raise
    finally:
        app.state.forecast_cache.clear()
        if app.state.rate_limiter is not None:
            await app.state.rate_limiter.close()
        logger.info("Shutting down Activity Forecast Service")


def create_app(
    cache: Optional[ForecastCache] = None,
    rate_limiter: Optional[RateLimiter] = None,
    rate_limit_enabled: bool = RATE_LIMIT_ENABLED
) -> FastAPI:
    """Create and configure FastAPI application.

    Args:
        cache: Forecast cache shared by all requests (creates default if None)
        rate_limiter: Rate limiter for the middleware (creates default if None)
        rate_limit_enabled: Whether requests are rate limited

    Returns:
        Configured FastAPI application instance
    """
    app = FastAPI(
        title="Activity Forecast Service",
        description="Ranks skiing, surfing and sightseeing for a city over the coming week "
                    "using Open-Meteo forecasts",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan
    )

    app.state.forecast_cache = cache if cache is not None else ForecastCache(
        ttl=CACHE_TTL_SECONDS,
        max_entries=CACHE_MAX_ENTRIES
    )
    if rate_limiter is None and rate_limit_enabled:
        rate_limiter = RateLimiter()
    app.state.rate_limiter = rate_limiter

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_middleware(
        RateLimitMiddleware,
        rate_limiter=rate_limiter,
        enabled=rate_limit_enabled
    )

    app.include_router(activities_router)

    @app.get("/", tags=["root"])
    async def api_info() -> dict:
        """API information endpoint.

        Returns:
            Basic service information
        """
        return {
            "message": "Activity Forecast Service",
            "docs": "/docs",
            "cities": "/activities/cities",
            "rankings": "/activities/rankings",
            "health": "/activities/health"
        }

    return app


# Create app instance for uvicorn
app = create_app()


def main() -> None:
    """Main entry point for the application."""
    logger.info(f"Starting server on {HOST}:{PORT}")
    uvicorn.run(
        "activity_forecast.main:app",
        host=HOST,
        port=PORT,
        reload=DEBUG,
        log_level="info" if not DEBUG else "debug"
    )


if __name__ == "__main__":
    main()
