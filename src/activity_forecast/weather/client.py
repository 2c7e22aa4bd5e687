"""HTTP client for the Open-Meteo forecast, marine and geocoding APIs."""

import logging
from typing import Any, Dict, List, Optional

import httpx
from pydantic import ValidationError

from activity_forecast.config import (
    CITY_SEARCH_COUNT,
    FORECAST_DAILY_VARIABLES,
    FORECAST_DAYS,
    HTTP_TIMEOUT_SECONDS,
    MARINE_DAILY_VARIABLES,
    OPEN_METEO_FORECAST_URL,
    OPEN_METEO_GEOCODING_URL,
    OPEN_METEO_MARINE_URL,
    USER_AGENT,
)
from activity_forecast.weather.models import (
    OpenMeteoForecastResponse, OpenMeteoGeocodingResponse, OpenMeteoMarineResponse
)

logger = logging.getLogger(__name__)


class OpenMeteoResponseError(ValueError):
    """Raised when an Open-Meteo response does not have the expected format."""
    pass


class OpenMeteoClient:
    """Async client for fetching forecasts and geocoding results from Open-Meteo."""

    def __init__(
        self,
        forecast_url: str = OPEN_METEO_FORECAST_URL,
        marine_url: str = OPEN_METEO_MARINE_URL,
        geocoding_url: str = OPEN_METEO_GEOCODING_URL,
        client: Optional[httpx.AsyncClient] = None
    ):
        """Initialize the Open-Meteo client.

        Args:
            forecast_url: Forecast endpoint URL
            marine_url: Marine forecast endpoint URL
            geocoding_url: Geocoding search endpoint URL
            client: Preconfigured httpx client (creates default if None)
        """
        self.forecast_url = forecast_url
        self.marine_url = marine_url
        self.geocoding_url = geocoding_url
        self.client = client or httpx.AsyncClient(
            headers={"User-Agent": USER_AGENT},
            timeout=HTTP_TIMEOUT_SECONDS
        )

    async def _get_json(self, url: str, params: Dict[str, Any]) -> Dict[str, Any]:
        try:
            response = await self.client.get(url, params=params)
            response.raise_for_status()
            return response.json()

        except httpx.HTTPStatusError as e:
            logger.error(f"HTTP error from Open-Meteo: {e.response.status_code} - {e.response.text}")
            raise
        except httpx.RequestError as e:
            logger.error(f"Request error to Open-Meteo: {e}")
            raise

    async def get_daily_forecast(
        self,
        lat: float,
        lon: float,
        days: int = FORECAST_DAYS
    ) -> Dict[str, Any]:
        """Fetch daily forecast arrays for given coordinates.

        Args:
            lat: Latitude in decimal degrees
            lon: Longitude in decimal degrees
            days: Number of forecast days

        Returns:
            The "daily" object of the Open-Meteo response

        Raises:
            ValueError: If coordinates are invalid
            OpenMeteoResponseError: If the response is malformed
            httpx.HTTPError: If API request fails
        """
        if not (-90 <= lat <= 90) or not (-180 <= lon <= 180):
            raise ValueError(f"Invalid coordinates: lat={lat}, lon={lon}")

        params = {
            "latitude": lat,
            "longitude": lon,
            "daily": ",".join(FORECAST_DAILY_VARIABLES),
            "timezone": "auto",
            "forecast_days": days,
        }

        logger.info(f"Fetching {days}-day forecast for lat={lat}, lon={lon}")
        data = await self._get_json(self.forecast_url, params)

        try:
            OpenMeteoForecastResponse.model_validate(data)
        except ValidationError as e:
            logger.error(f"Invalid forecast response format: {e}")
            raise OpenMeteoResponseError(f"Invalid forecast response format: {e}") from e

        daily = data["daily"]
        logger.info(f"Successfully fetched forecast with {len(daily['time'])} days")
        return daily

    async def get_marine_forecast(
        self,
        lat: float,
        lon: float,
        days: int = FORECAST_DAYS
    ) -> Dict[str, Any]:
        """Fetch daily maximum wave heights for given coordinates.

        Args:
            lat: Latitude in decimal degrees
            lon: Longitude in decimal degrees
            days: Number of forecast days

        Returns:
            The "daily" object of the marine response

        Raises:
            OpenMeteoResponseError: If the response is malformed
            httpx.HTTPError: If API request fails
        """
        params = {
            "latitude": lat,
            "longitude": lon,
            "daily": ",".join(MARINE_DAILY_VARIABLES),
            "timezone": "auto",
            "forecast_days": days,
        }

        logger.info(f"Fetching marine forecast for lat={lat}, lon={lon}")
        data = await self._get_json(self.marine_url, params)

        try:
            OpenMeteoMarineResponse.model_validate(data)
        except ValidationError as e:
            logger.error(f"Invalid marine response format: {e}")
            raise OpenMeteoResponseError(f"Invalid marine response format: {e}") from e

        return data["daily"]

    async def search_cities(self, query: str, count: int = CITY_SEARCH_COUNT) -> List[Dict[str, Any]]:
        """Search cities by name.

        Args:
            query: City name or prefix
            count: Maximum number of results

        Returns:
            Geocoding results with name, latitude and longitude; empty if nothing matched

        Raises:
            OpenMeteoResponseError: If a result lacks a name or valid coordinates
            httpx.HTTPError: If API request fails
        """
        params = {
            "name": query,
            "count": count,
            "language": "en",
            "format": "json",
        }

        logger.info(f"Searching cities matching '{query}'")
        data = await self._get_json(self.geocoding_url, params)

        try:
            response = OpenMeteoGeocodingResponse.model_validate(data)
        except ValidationError as e:
            logger.error(f"Invalid geocoding response format: {e}")
            raise OpenMeteoResponseError(f"Invalid geocoding response format: {e}") from e

        results = [result.model_dump() for result in response.results or []]
        logger.info(f"Found {len(results)} cities matching '{query}'")
        return results

    async def aclose(self):
        """Close the async HTTP client."""
        await self.client.aclose()

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.aclose()
