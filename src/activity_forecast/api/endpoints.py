"""API endpoints for the activity forecast service."""

import logging
from typing import AsyncGenerator, List, Optional

import httpx
from fastapi import APIRouter, Depends, HTTPException, Query, Request
from pydantic import ValidationError

from activity_forecast.activities.models import Activity, ForecastValidationError
from activity_forecast.config import CACHE_TTL_SECONDS, FORECAST_DAYS
from activity_forecast.weather.client import OpenMeteoResponseError
from activity_forecast.weather.models import ActivityRankings, City
from activity_forecast.weather.service import CityNotFoundError, WeatherService

logger = logging.getLogger(__name__)

# Create router
router = APIRouter(prefix="/activities", tags=["activities"])


async def get_weather_service(request: Request) -> AsyncGenerator[WeatherService, None]:
    """Dependency yielding a weather service bound to the application cache."""
    async with WeatherService(cache=request.app.state.forecast_cache) as weather_service:
        yield weather_service


@router.get("/cities", response_model=List[City])
async def search_cities(
    query: str = Query(..., min_length=1, description="City name or prefix to search for"),
    weather_service: WeatherService = Depends(get_weather_service)
) -> List[City]:
    """Search cities by name.

    Args:
        query: City name or prefix

    Returns:
        Matching cities, best match first

    Raises:
        HTTPException: If the geocoding service fails
    """
    try:
        cities = await weather_service.search_cities(query)
        logger.info(f"City search '{query}' returned {len(cities)} results")
        return cities

    except OpenMeteoResponseError as e:
        logger.error(f"Invalid geocoding data for '{query}': {e}")
        raise HTTPException(status_code=502, detail="Geocoding service returned invalid data")

    except httpx.HTTPError as e:
        logger.error(f"Geocoding request failed for '{query}': {e}")
        raise HTTPException(status_code=502, detail="Geocoding service temporarily unavailable")


@router.get("/rankings", response_model=ActivityRankings)
async def get_activity_rankings(
    city: str = Query(..., min_length=1, description="City name"),
    latitude: Optional[float] = Query(
        None,
        ge=-90,
        le=90,
        description="Latitude in decimal degrees (use with longitude)"
    ),
    longitude: Optional[float] = Query(
        None,
        ge=-180,
        le=180,
        description="Longitude in decimal degrees (use with latitude)"
    ),
    weather_service: WeatherService = Depends(get_weather_service)
) -> ActivityRankings:
    """Rank activities for a city over the coming week.

    If both coordinates are given they are used as-is; otherwise the city
    name is geocoded and the first match is used.

    Args:
        city: City name
        latitude: Optional latitude in decimal degrees
        longitude: Optional longitude in decimal degrees

    Returns:
        ActivityRankings with rankings, best days and the daily forecast

    Raises:
        HTTPException: If the city is unknown, data is invalid or upstream fails
    """
    try:
        rankings = await weather_service.get_activity_rankings(
            city=city,
            latitude=latitude,
            longitude=longitude
        )

        logger.info(
            f"Ranked activities for {rankings.city.name}: top is "
            f"{rankings.rankings[0].activity.value} ({rankings.rankings[0].score:.2f})"
        )
        return rankings

    except CityNotFoundError as e:
        logger.warning(f"City lookup failed: {e}")
        raise HTTPException(status_code=404, detail=str(e))

    except (ForecastValidationError, OpenMeteoResponseError) as e:
        logger.error(f"Invalid upstream data: {e}")
        raise HTTPException(status_code=502, detail="Weather service returned invalid forecast data")

    except ValidationError as e:
        logger.error(f"Data validation error: {e}")
        raise HTTPException(status_code=500, detail="Internal server error: data validation failed")

    except ValueError as e:
        logger.error(f"Error ranking activities: {e}")
        raise HTTPException(status_code=400, detail=str(e))

    except httpx.HTTPError as e:
        logger.error(f"Upstream error ranking activities: {e}")
        raise HTTPException(status_code=502, detail="Weather service temporarily unavailable")


@router.get("/health")
async def health_check() -> dict:
    """Health check endpoint.

    Returns:
        Health status response
    """
    return {"status": "healthy", "service": "activity-forecast"}


@router.get("/info")
async def get_service_info() -> dict:
    """Get service information.

    Returns:
        Service information including supported activities
    """
    return {
        "service": "Activity Forecast Service",
        "version": "0.1.0",
        "activities": [activity.value for activity in Activity],
        "forecast_days": FORECAST_DAYS,
        "cache_ttl_seconds": CACHE_TTL_SECONDS,
        "data_source": "Open-Meteo forecast, marine and geocoding APIs"
    }
