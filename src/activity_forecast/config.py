"""Configuration settings for the activity forecast service."""

import os
from typing import Final
from dotenv import load_dotenv

load_dotenv()

# Open-Meteo endpoints
OPEN_METEO_FORECAST_URL: Final[str] = "https://api.open-meteo.com/v1/forecast"
OPEN_METEO_MARINE_URL: Final[str] = "https://marine-api.open-meteo.com/v1/marine"
OPEN_METEO_GEOCODING_URL: Final[str] = "https://geocoding-api.open-meteo.com/v1/search"
USER_AGENT: Final[str] = "ActivityForecastService/0.1 (user@example.com)"

# Daily variables requested from the forecast endpoint
FORECAST_DAILY_VARIABLES: Final[tuple[str, ...]] = (
    "temperature_2m_max",
    "temperature_2m_min",
    "precipitation_sum",
    "windspeed_10m_max",
    "cloudcover_mean",
    "snowfall_sum",
    "weathercode",
)
MARINE_DAILY_VARIABLES: Final[tuple[str, ...]] = ("wave_height_max",)

# Server configuration
HOST: str = os.getenv("HOST", "0.0.0.0")
PORT: int = int(os.getenv("PORT", "4000"))
DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "DEBUG" if DEBUG else "INFO").upper()

# Forecast settings
FORECAST_DAYS: int = int(os.getenv("FORECAST_DAYS", "7"))
CITY_SEARCH_COUNT: int = int(os.getenv("CITY_SEARCH_COUNT", "10"))
HTTP_TIMEOUT_SECONDS: float = float(os.getenv("HTTP_TIMEOUT_SECONDS", "30"))

# In-process forecast cache
CACHE_TTL_SECONDS: int = int(os.getenv("CACHE_TTL_SECONDS", "3600"))  # 1 hour
CACHE_MAX_ENTRIES: int = int(os.getenv("CACHE_MAX_ENTRIES", "1024"))

# Redis (rate limiting)
REDIS_URL: str = os.getenv("REDIS_URL", "redis://localhost:6379")

# Rate limiting configuration
RATE_LIMIT_REQUESTS: int = int(os.getenv("RATE_LIMIT_REQUESTS", "20"))
RATE_LIMIT_WINDOW_SECONDS: float = float(os.getenv("RATE_LIMIT_WINDOW_SECONDS", "1"))
RATE_LIMIT_REDIS_KEY_PREFIX: str = os.getenv("RATE_LIMIT_REDIS_KEY_PREFIX", "activity_rate_limit")
RATE_LIMIT_ENABLED: bool = os.getenv("RATE_LIMIT_ENABLED", "true").lower() == "true"
