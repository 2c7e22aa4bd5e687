"""Weather service tying Open-Meteo data to activity rankings."""

import logging
from typing import Any, Callable, Dict, List, Optional

import httpx
from pydantic import ValidationError

from activity_forecast.activities.cache import ForecastCache
from activity_forecast.activities.coastal import is_coastal as default_is_coastal
from activity_forecast.activities.models import DailyRecord, ForecastValidationError
from activity_forecast.activities.ranking import rank
from activity_forecast.weather.client import OpenMeteoClient, OpenMeteoResponseError
from activity_forecast.weather.models import (
    ActivityRankings, City, ForecastWindowData, OpenMeteoGeocodingResult
)

logger = logging.getLogger(__name__)

UNKNOWN_COUNTRY = "Unknown"

# Open-Meteo daily array -> DailyRecord field
REQUIRED_DAILY_FIELDS: Dict[str, str] = {
    "temperature_2m_max": "temperature_max",
    "temperature_2m_min": "temperature_min",
    "precipitation_sum": "precipitation",
    "windspeed_10m_max": "wind_speed",
    "cloudcover_mean": "cloud_cover",
    "weathercode": "weather_code",
}


class CityNotFoundError(LookupError):
    """Raised when a city name has no geocoding match."""
    pass


def build_daily_records(
    daily: Dict[str, Any],
    wave_heights: Optional[Dict[str, Optional[float]]] = None
) -> List[DailyRecord]:
    """Convert Open-Meteo daily arrays into chronological DailyRecords.

    Args:
        daily: The "daily" object of a forecast response
        wave_heights: Optional mapping of date to maximum wave height

    Returns:
        One DailyRecord per forecast date

    Raises:
        ForecastValidationError: If arrays are missing, short or hold nulls
    """
    dates = daily.get("time")
    if not dates:
        raise ForecastValidationError("Forecast response has no daily dates")

    missing = [name for name in REQUIRED_DAILY_FIELDS if name not in daily]
    if missing:
        raise ForecastValidationError(f"Forecast response is missing daily arrays: {', '.join(missing)}")

    for name in REQUIRED_DAILY_FIELDS:
        if len(daily[name]) < len(dates):
            raise ForecastValidationError(
                f"Daily array '{name}' has {len(daily[name])} values for {len(dates)} dates"
            )

    snowfall = daily.get("snowfall_sum") or []
    wave_heights = wave_heights or {}

    records = []
    for i, date in enumerate(dates):
        values = {field: daily[name][i] for name, field in REQUIRED_DAILY_FIELDS.items()}
        try:
            records.append(DailyRecord(
                date=date,
                snowfall=snowfall[i] if i < len(snowfall) else None,
                wave_height=wave_heights.get(date),
                **values
            ))
        except ValidationError as e:
            logger.error(f"Invalid forecast values for {date}: {e}")
            raise ForecastValidationError(f"Invalid forecast values for {date}: {e}") from e

    return records


class WeatherService:
    """Service for resolving locations, fetching forecasts and ranking activities."""

    def __init__(
        self,
        client: Optional[OpenMeteoClient] = None,
        cache: Optional[ForecastCache] = None,
        coastal_check: Callable[[float, float], bool] = default_is_coastal
    ):
        """Initialize the weather service.

        Args:
            client: Open-Meteo client instance (creates default if None)
            cache: Shared forecast cache (creates a private one if None)
            coastal_check: Function deciding whether coordinates are coastal
        """
        self.client = client or OpenMeteoClient()
        self.cache = cache if cache is not None else ForecastCache()
        self.coastal_check = coastal_check

    async def search_cities(self, query: str) -> List[City]:
        """Search cities by name, using cached results when fresh.

        Args:
            query: City name or prefix

        Returns:
            Matching cities, best match first

        Raises:
            OpenMeteoResponseError: If a result lacks a name or valid coordinates
            httpx.HTTPError: If the geocoding request fails
        """
        results = await self.cache.aget_or_compute(
            f"city-{query}",
            lambda: self.client.search_cities(query)
        )
        try:
            matches = [OpenMeteoGeocodingResult.model_validate(result) for result in results]
        except ValidationError as e:
            logger.error(f"Invalid geocoding result for '{query}': {e}")
            raise OpenMeteoResponseError(f"Invalid geocoding result: {e}") from e

        return [
            City(
                name=match.name,
                country=match.country or UNKNOWN_COUNTRY,
                latitude=match.latitude,
                longitude=match.longitude,
                admin1=match.admin1
            )
            for match in matches
        ]

    async def resolve_city(
        self,
        city: str,
        latitude: Optional[float] = None,
        longitude: Optional[float] = None
    ) -> City:
        """Resolve the city to rank activities for.

        Args:
            city: City name
            latitude: Latitude, used together with longitude
            longitude: Longitude, used together with latitude

        Returns:
            City built from the coordinates if both are given, else the first search match

        Raises:
            CityNotFoundError: If the city has no match
        """
        if latitude is not None and longitude is not None:
            return City(name=city, country=UNKNOWN_COUNTRY, latitude=latitude, longitude=longitude)

        cities = await self.search_cities(city)
        if not cities:
            raise CityNotFoundError(f'City "{city}" not found')

        logger.info(f"Resolved '{city}' to {cities[0].name}, {cities[0].country}")
        return cities[0]

    async def get_forecast_window(self, lat: float, lon: float) -> ForecastWindowData:
        """Get the normalized forecast window for coordinates, using the cache when fresh.

        Args:
            lat: Latitude in decimal degrees
            lon: Longitude in decimal degrees

        Returns:
            Forecast records and the coastal flag

        Raises:
            ForecastValidationError: If the forecast data is malformed
            ValueError: If coordinates are invalid
            httpx.HTTPError: If the forecast request fails
        """
        return await self.cache.aget_or_compute(
            f"weather-{lat}-{lon}",
            lambda: self._fetch_forecast_window(lat, lon)
        )

    async def _fetch_forecast_window(self, lat: float, lon: float) -> ForecastWindowData:
        coastal = self.coastal_check(lat, lon)
        daily = await self.client.get_daily_forecast(lat, lon)

        wave_heights = None
        if coastal:
            wave_heights = await self._fetch_wave_heights(lat, lon)

        records = build_daily_records(daily, wave_heights)
        logger.info(f"Normalized {len(records)} forecast days for ({lat}, {lon}), coastal={coastal}")
        return ForecastWindowData(records=records, is_coastal=coastal)

    async def _fetch_wave_heights(self, lat: float, lon: float) -> Optional[Dict[str, Optional[float]]]:
        """Fetch wave heights by date; None if the marine forecast is unavailable."""
        try:
            marine = await self.client.get_marine_forecast(lat, lon)
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"Marine forecast unavailable for ({lat}, {lon}), using default wave height: {e}")
            return None

        return dict(zip(marine["time"], marine["wave_height_max"]))

    async def get_activity_rankings(
        self,
        city: str,
        latitude: Optional[float] = None,
        longitude: Optional[float] = None
    ) -> ActivityRankings:
        """Rank activities for a city over the forecast window.

        Args:
            city: City name
            latitude: Optional latitude, used together with longitude
            longitude: Optional longitude, used together with latitude

        Returns:
            ActivityRankings with the resolved city, rankings and forecast

        Raises:
            CityNotFoundError: If the city has no match
            ForecastValidationError: If the forecast data is malformed
            httpx.HTTPError: If an upstream request fails
        """
        resolved = await self.resolve_city(city, latitude, longitude)
        window = await self.get_forecast_window(resolved.latitude, resolved.longitude)
        rankings = rank(window.records, window.is_coastal)

        return ActivityRankings(
            city=resolved,
            rankings=rankings,
            forecast=window.records
        )

    async def aclose(self):
        """Close the Open-Meteo client."""
        if self.client:
            try:
                await self.client.aclose()
            except Exception as e:
                logger.error(f"Error closing Open-Meteo client: {e}")

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.aclose()
