"""Data models for the activity forecast API and Open-Meteo responses."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from activity_forecast.activities.models import ActivityScore, DailyRecord


class City(BaseModel):
    """Resolved city information."""
    name: str = Field(..., description="City name")
    country: str = Field(..., description="Country name")
    latitude: float = Field(..., ge=-90, le=90, description="Latitude in decimal degrees")
    longitude: float = Field(..., ge=-180, le=180, description="Longitude in decimal degrees")
    admin1: Optional[str] = Field(None, description="First-level administrative area")


class ActivityRankings(BaseModel):
    """Activity rankings response model."""
    city: City = Field(..., description="Location the rankings were computed for")
    rankings: List[ActivityScore] = Field(..., description="Activities sorted by descending score")
    forecast: List[DailyRecord] = Field(..., description="Daily forecast the rankings were based on")


class ForecastWindowData(BaseModel):
    """Normalized forecast window as stored in the cache."""
    records: List[DailyRecord] = Field(..., description="Chronological daily records")
    is_coastal: bool = Field(..., description="Whether the location is coastal")


class OpenMeteoDaily(BaseModel):
    """Daily arrays from the Open-Meteo forecast endpoint."""
    model_config = ConfigDict(extra="allow")

    time: List[str] = Field(..., description="ISO dates")
    temperature_2m_max: List[Optional[float]]
    temperature_2m_min: List[Optional[float]]
    precipitation_sum: List[Optional[float]]
    windspeed_10m_max: List[Optional[float]]
    cloudcover_mean: List[Optional[float]]
    snowfall_sum: Optional[List[Optional[float]]] = None
    weathercode: List[Optional[int]]


class OpenMeteoForecastResponse(BaseModel):
    """Raw response from the Open-Meteo forecast endpoint."""
    model_config = ConfigDict(extra="allow")

    latitude: float
    longitude: float
    timezone: Optional[str] = None
    daily: OpenMeteoDaily


class OpenMeteoMarineDaily(BaseModel):
    """Daily arrays from the Open-Meteo marine endpoint."""
    model_config = ConfigDict(extra="allow")

    time: List[str]
    wave_height_max: List[Optional[float]]


class OpenMeteoMarineResponse(BaseModel):
    """Raw response from the Open-Meteo marine endpoint."""
    model_config = ConfigDict(extra="allow")

    daily: OpenMeteoMarineDaily


class OpenMeteoGeocodingResult(BaseModel):
    """One match from the Open-Meteo geocoding endpoint."""
    name: str
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    country: Optional[str] = None
    admin1: Optional[str] = None


class OpenMeteoGeocodingResponse(BaseModel):
    """Raw response from the Open-Meteo geocoding endpoint."""
    model_config = ConfigDict(extra="allow")

    results: Optional[List[OpenMeteoGeocodingResult]] = None

