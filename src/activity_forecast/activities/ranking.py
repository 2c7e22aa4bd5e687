"""Ranking of activities over a forecast window."""

import logging
from typing import Any, List, Mapping, Sequence, Union

from pydantic import ValidationError

from activity_forecast.activities.models import (
    ActivityScore, DailyRecord, ForecastValidationError
)
from activity_forecast.activities.scoring import (
    score_indoor_sightseeing,
    score_outdoor_sightseeing,
    score_skiing,
    score_surfing,
)

logger = logging.getLogger(__name__)

RecordLike = Union[DailyRecord, Mapping[str, Any]]


def validate_window(window: Sequence[RecordLike]) -> List[DailyRecord]:
    """Validate a forecast window into DailyRecord instances.

    Args:
        window: Records or mappings with camelCase or snake_case field names

    Returns:
        List of DailyRecord in the original order

    Raises:
        ForecastValidationError: If the window is empty or a record is malformed
    """
    if not window:
        raise ForecastValidationError("Forecast window must contain at least one day")

    records = []
    for index, record in enumerate(window):
        if isinstance(record, DailyRecord):
            records.append(record)
            continue
        try:
            records.append(DailyRecord.model_validate(record))
        except ValidationError as e:
            logger.error(f"Invalid forecast record at position {index}: {e}")
            raise ForecastValidationError(f"Invalid forecast record at position {index}: {e}") from e

    return records


def rank(window: Sequence[RecordLike], is_coastal: bool) -> List[ActivityScore]:
    """Score all activities and order them from most to least suitable.

    Activities are evaluated as Skiing, Surfing, Outdoor Sightseeing, Indoor
    Sightseeing; the sort is stable, so equal scores keep that order.

    Args:
        window: Chronological forecast window, at least one day long
        is_coastal: Whether the location is near a surfable coast

    Returns:
        The four activity scores sorted by descending score

    Raises:
        ForecastValidationError: If the window is empty or malformed
    """
    records = validate_window(window)

    scores = [
        score_skiing(records),
        score_surfing(records, is_coastal),
        score_outdoor_sightseeing(records),
        score_indoor_sightseeing(records),
    ]
    ranked = sorted(scores, key=lambda result: result.score, reverse=True)

    logger.info(
        f"Ranked {len(ranked)} activities over {len(records)} days: "
        + ", ".join(f"{result.activity.value}={result.score:.2f}" for result in ranked)
    )
    return ranked
