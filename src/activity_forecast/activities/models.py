"""Data models for activity scoring and ranking."""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Defaults applied when upstream data omits a value
DEFAULT_SNOWFALL: float = 0.0
DEFAULT_WAVE_HEIGHT: float = 1.5


class ForecastValidationError(ValueError):
    """Raised when a forecast window is empty or malformed."""
    pass


class Activity(str, Enum):
    """Activities the service can recommend, in evaluation order."""
    SKIING = "Skiing"
    SURFING = "Surfing"
    OUTDOOR_SIGHTSEEING = "Outdoor Sightseeing"
    INDOOR_SIGHTSEEING = "Indoor Sightseeing"


class DailyRecord(BaseModel):
    """One day of normalized forecast data."""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    date: str = Field(..., description="Date in YYYY-MM-DD format")
    temperature_max: float = Field(..., alias="temperatureMax", description="Maximum temperature in Celsius")
    temperature_min: float = Field(..., alias="temperatureMin", description="Minimum temperature in Celsius")
    precipitation: float = Field(..., description="Precipitation sum in mm")
    wind_speed: float = Field(..., alias="windSpeed", description="Maximum wind speed in km/h")
    cloud_cover: float = Field(..., alias="cloudCover", description="Mean cloud cover in percent")
    snowfall: float = Field(DEFAULT_SNOWFALL, description="Snowfall sum in cm")
    wave_height: Optional[float] = Field(None, alias="waveHeight", description="Maximum wave height in metres")
    weather_code: int = Field(..., alias="weatherCode", description="WMO weather code")

    @field_validator("snowfall", mode="before")
    @classmethod
    def _default_missing_snowfall(cls, value):
        return DEFAULT_SNOWFALL if value is None else value

    @property
    def average_temperature(self) -> float:
        """Mean of the day's maximum and minimum temperature."""
        return (self.temperature_max + self.temperature_min) / 2

    @property
    def surf_wave_height(self) -> float:
        """Wave height used for surf scoring, defaulted when unknown."""
        return DEFAULT_WAVE_HEIGHT if self.wave_height is None else self.wave_height


class BestDay(BaseModel):
    """A day and its score for one activity."""
    date: str = Field(..., description="Date in YYYY-MM-DD format")
    score: float = Field(..., ge=0, le=1, description="Day score between 0 and 1")


class ActivityScore(BaseModel):
    """Overall suitability of one activity across the forecast window."""
    model_config = ConfigDict(populate_by_name=True)

    activity: Activity = Field(..., description="Activity name")
    score: float = Field(..., ge=0, le=1, description="Average daily score between 0 and 1")
    best_days: List[BestDay] = Field(..., alias="bestDays", max_length=3, description="Up to three best days")
    reasoning: str = Field(..., description="Human-readable explanation of the score")
