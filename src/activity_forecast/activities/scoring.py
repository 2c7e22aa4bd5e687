"""Per-activity suitability scoring.

Each activity scores every day of the forecast window as a sum of weighted
sub-scores (temperature, precipitation, wind, ...), each capped by its
weight so a day never scores above 1.0. The activity's overall score is the
mean of its daily scores and its best days are the three highest-scoring
days, ties kept in chronological order.
"""

import logging
import math
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from activity_forecast.activities.models import (
    Activity, ActivityScore, BestDay, DailyRecord
)

logger = logging.getLogger(__name__)

BEST_DAYS_COUNT = 3

# WMO weather codes
SNOW_WEATHER_CODES = frozenset({71, 73, 75, 77, 85, 86})
SEVERE_WEATHER_CODES = frozenset({45, 48, 51, 53, 55, 61, 63, 65, 80, 81, 82, 95, 96, 99})

NOT_COASTAL_REASONING = "This location is not near a coast suitable for surfing."
NO_SURF_DAY_REASONING = "This location is not suitable for surfing."

# Reasoning tiers: (score must exceed, template); the last entry is the fallback
REASONING_TEMPLATES: Dict[Activity, Tuple[Tuple[float, str], ...]] = {
    Activity.SKIING: (
        (0.7, "Excellent skiing conditions expected! Fresh snow and ideal temperatures make this "
              "a perfect destination for skiing, especially on {date}."),
        (0.5, "Good skiing conditions with favorable temperatures. Best conditions expected on {date}."),
        (0.3, "Moderate skiing conditions. Some days may have suitable weather, particularly {date}."),
        (-math.inf, "Poor skiing conditions expected. Consider alternative activities or destinations."),
    ),
    Activity.SURFING: (
        (0.7, "Excellent surfing conditions! Perfect waves and temperatures expected, especially on {date}."),
        (0.5, "Good surfing conditions with decent waves. Best day for surfing: {date}."),
        (0.3, "Fair surfing conditions. Some suitable days, with {date} being the most promising."),
        (-math.inf, "Poor surfing conditions expected this week."),
    ),
    Activity.OUTDOOR_SIGHTSEEING: (
        (0.7, "Perfect weather for outdoor activities! Clear skies and comfortable temperatures, "
              "especially on {date}."),
        (0.5, "Good conditions for outdoor sightseeing. Best weather expected on {date}."),
        (0.3, "Mixed conditions for outdoor activities. Plan for {date} for the best experience."),
        (-math.inf, "Challenging conditions for outdoor activities. Consider indoor alternatives."),
    ),
    Activity.INDOOR_SIGHTSEEING: (
        (0.7, "Perfect time for museums and indoor attractions! Poor outdoor weather makes indoor "
              "activities ideal, especially on {date}."),
        (0.5, "Good opportunity for indoor sightseeing due to unfavorable outdoor conditions on {date}."),
        (0.3, "Some days favor indoor activities, particularly {date}."),
        (-math.inf, "Weather is generally good for outdoor activities - indoor sightseeing less necessary."),
    ),
}


def skiing_day_score(day: DailyRecord) -> float:
    """Score one day for skiing: cold, snowy, calm."""
    parts = []

    avg_temp = day.average_temperature
    if -10 <= avg_temp <= 0:
        parts.append(0.4)
    elif -15 <= avg_temp <= 5:
        parts.append(0.2)

    if day.snowfall > 10:
        parts.append(0.3)
    elif day.snowfall > 5:
        parts.append(0.2)
    elif day.snowfall > 0:
        parts.append(0.1)

    if day.wind_speed < 20:
        parts.append(0.2)
    elif day.wind_speed < 30:
        parts.append(0.1)

    if day.weather_code in SNOW_WEATHER_CODES:
        parts.append(0.1)

    return math.fsum(parts)


def surfing_day_score(day: DailyRecord) -> float:
    """Score one day for surfing: warm, mid-sized waves, moderate wind, dry."""
    parts = []

    avg_temp = day.average_temperature
    if 20 <= avg_temp <= 25:
        parts.append(0.3)
    elif 15 <= avg_temp <= 30:
        parts.append(0.15)

    wave_height = day.surf_wave_height
    if 1 <= wave_height <= 2:
        parts.append(0.4)
    elif 0.5 <= wave_height <= 3:
        parts.append(0.2)

    if 10 <= day.wind_speed <= 20:
        parts.append(0.2)
    elif 5 <= day.wind_speed <= 25:
        parts.append(0.1)

    if day.precipitation < 1:
        parts.append(0.1)

    return math.fsum(parts)


def outdoor_sightseeing_day_score(day: DailyRecord) -> float:
    """Score one day for outdoor sightseeing: mild, dry, clear, calm."""
    parts = []

    avg_temp = day.average_temperature
    if 15 <= avg_temp <= 25:
        parts.append(0.35)
    elif 10 <= avg_temp <= 30:
        parts.append(0.2)
    elif 5 <= avg_temp <= 35:
        parts.append(0.1)

    if day.precipitation == 0:
        parts.append(0.35)
    elif day.precipitation < 2:
        parts.append(0.2)
    elif day.precipitation < 5:
        parts.append(0.1)

    if day.cloud_cover < 30:
        parts.append(0.2)
    elif day.cloud_cover < 60:
        parts.append(0.1)

    if day.wind_speed < 15:
        parts.append(0.1)

    return math.fsum(parts)


def indoor_sightseeing_day_score(day: DailyRecord) -> float:
    """Score one day for indoor sightseeing, which gains from bad weather outside."""
    parts = []

    avg_temp = day.average_temperature
    if avg_temp < 5 or avg_temp > 30:
        parts.append(0.3)
    elif avg_temp < 10 or avg_temp > 25:
        parts.append(0.15)

    if day.precipitation > 10:
        parts.append(0.4)
    elif day.precipitation > 5:
        parts.append(0.3)
    elif day.precipitation > 2:
        parts.append(0.2)
    elif day.precipitation > 0:
        parts.append(0.1)

    if day.wind_speed > 30:
        parts.append(0.2)
    elif day.wind_speed > 20:
        parts.append(0.1)

    if day.weather_code in SEVERE_WEATHER_CODES:
        parts.append(0.1)

    return math.fsum(parts)


def generate_reasoning(activity: Activity, score: float, best_day: Optional[BestDay]) -> str:
    """Pick the reasoning text for an activity's average score.

    Args:
        activity: Activity being described
        score: Average score across the window
        best_day: Highest-scoring day, or None if no day was scored

    Returns:
        Reasoning text, mentioning the best day's date when the score is high enough
    """
    if activity is Activity.SURFING and best_day is None:
        return NO_SURF_DAY_REASONING

    template = next(
        text for threshold, text in REASONING_TEMPLATES[activity] if score > threshold
    )
    if "{date}" not in template:
        return template
    if best_day is None:
        raise ValueError(f"No best day available for {activity.value} reasoning")
    return template.format(date=best_day.date)


def _score_window(
    activity: Activity,
    window: Sequence[DailyRecord],
    day_scorer: Callable[[DailyRecord], float]
) -> ActivityScore:
    """Score every day in the window and summarize the activity."""
    if not window:
        raise ValueError(f"Cannot score {activity.value} over an empty forecast window")

    daily: List[BestDay] = [BestDay(date=day.date, score=day_scorer(day)) for day in window]
    average = math.fsum(day.score for day in daily) / len(daily)

    # sorted() is stable, so equal scores keep chronological order
    best_days = sorted(daily, key=lambda day: day.score, reverse=True)[:BEST_DAYS_COUNT]

    logger.debug(f"{activity.value}: average={average:.3f} over {len(daily)} days")
    return ActivityScore(
        activity=activity,
        score=average,
        best_days=best_days,
        reasoning=generate_reasoning(activity, average, best_days[0])
    )


def score_skiing(window: Sequence[DailyRecord]) -> ActivityScore:
    """Rank the window for skiing."""
    return _score_window(Activity.SKIING, window, skiing_day_score)


def score_surfing(window: Sequence[DailyRecord], is_coastal: bool) -> ActivityScore:
    """Rank the window for surfing; inland locations score zero without scoring any day."""
    if not is_coastal:
        return ActivityScore(
            activity=Activity.SURFING,
            score=0.0,
            best_days=[],
            reasoning=NOT_COASTAL_REASONING
        )
    return _score_window(Activity.SURFING, window, surfing_day_score)


def score_outdoor_sightseeing(window: Sequence[DailyRecord]) -> ActivityScore:
    """Rank the window for outdoor sightseeing."""
    return _score_window(Activity.OUTDOOR_SIGHTSEEING, window, outdoor_sightseeing_day_score)


def score_indoor_sightseeing(window: Sequence[DailyRecord]) -> ActivityScore:
    """Rank the window for indoor sightseeing."""
    return _score_window(Activity.INDOOR_SIGHTSEEING, window, indoor_sightseeing_day_score)
