"""Pytest configuration and fixtures for activity_forecast tests."""

from __future__ import annotations

import os
from typing import Any, Callable

import pytest

# Must be set before activity_forecast.config is imported
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")

from activity_forecast.activities.models import DailyRecord  # noqa: E402


class FakeClock:
    """Manually advanced clock for cache tests."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    """Provide a fake clock starting at t=1000."""
    return FakeClock()


def make_day(date: str = "2024-01-01", **overrides: Any) -> DailyRecord:
    """Build a DailyRecord, overriding the defaults per test.

    Defaults score 0.0 skiing, 0.65 surfing, 0.7 outdoor and 0.2 indoor.
    """
    values: dict[str, Any] = {
        "date": date,
        "temperature_max": 20.0,
        "temperature_min": 14.0,
        "precipitation": 0.0,
        "wind_speed": 35.0,
        "cloud_cover": 80.0,
        "snowfall": 0.0,
        "wave_height": None,
        "weather_code": 3,
    }
    values.update(overrides)
    return DailyRecord(**values)


@pytest.fixture
def day_factory() -> Callable[..., DailyRecord]:
    """Provide the make_day factory."""
    return make_day


def open_meteo_daily(days: int = 7, **overrides: list[Any]) -> dict[str, Any]:
    """Build an Open-Meteo style "daily" object with constant values."""
    daily: dict[str, Any] = {
        "time": [f"2024-06-{day + 1:02d}" for day in range(days)],
        "temperature_2m_max": [24.0] * days,
        "temperature_2m_min": [18.0] * days,
        "precipitation_sum": [0.0] * days,
        "windspeed_10m_max": [12.0] * days,
        "cloudcover_mean": [20.0] * days,
        "snowfall_sum": [0.0] * days,
        "weathercode": [1] * days,
    }
    daily.update(overrides)
    return daily
