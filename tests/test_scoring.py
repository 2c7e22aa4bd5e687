"""Tests for per-activity scoring and reasoning."""

from __future__ import annotations

import pytest

from activity_forecast.activities.models import Activity, BestDay
from activity_forecast.activities.scoring import (
    NO_SURF_DAY_REASONING,
    NOT_COASTAL_REASONING,
    generate_reasoning,
    indoor_sightseeing_day_score,
    outdoor_sightseeing_day_score,
    score_indoor_sightseeing,
    score_outdoor_sightseeing,
    score_skiing,
    score_surfing,
    skiing_day_score,
    surfing_day_score,
)
from conftest import make_day


def avg_temp(value: float) -> dict:
    """Overrides giving a day the requested average temperature."""
    return {"temperature_max": value + 2, "temperature_min": value - 2}


class TestSkiingDayScore:
    """Tests for skiing_day_score."""

    def test_perfect_powder_day(self) -> None:
        """Cold, heavy snow, calm wind and a snow code score 1.0."""
        day = make_day(
            temperature_max=-2, temperature_min=-8, snowfall=12, wind_speed=10, weather_code=73
        )
        assert skiing_day_score(day) == pytest.approx(1.0)
        assert skiing_day_score(day) <= 1.0

    @pytest.mark.parametrize(
        ("average", "expected"),
        [(-10, 0.4), (-5, 0.4), (0, 0.4), (-15, 0.2), (-12, 0.2), (3, 0.2), (5, 0.2), (-16, 0.0), (6, 0.0)],
    )
    def test_temperature_bands(self, average: float, expected: float) -> None:
        """Average temperature earns 0.4, 0.2 or nothing."""
        assert skiing_day_score(make_day(**avg_temp(average))) == pytest.approx(expected)

    @pytest.mark.parametrize(
        ("snowfall", "expected"),
        [(10.5, 0.3), (10, 0.2), (5.5, 0.2), (5, 0.1), (0.1, 0.1), (0, 0.0)],
    )
    def test_snowfall_bands(self, snowfall: float, expected: float) -> None:
        """Snowfall bands are strict lower bounds."""
        assert skiing_day_score(make_day(snowfall=snowfall)) == pytest.approx(expected)

    @pytest.mark.parametrize(("wind", "expected"), [(0, 0.2), (19.9, 0.2), (20, 0.1), (29.9, 0.1), (30, 0.0)])
    def test_wind_bands(self, wind: float, expected: float) -> None:
        """Calmer days score higher."""
        assert skiing_day_score(make_day(wind_speed=wind)) == pytest.approx(expected)

    @pytest.mark.parametrize("code", [71, 73, 75, 77, 85, 86])
    def test_snow_codes_earn_bonus(self, code: int) -> None:
        """Snow weather codes add 0.1."""
        assert skiing_day_score(make_day(weather_code=code)) == pytest.approx(0.1)

    def test_rain_code_earns_no_bonus(self) -> None:
        """Non-snow codes add nothing."""
        assert skiing_day_score(make_day(weather_code=61)) == 0.0


class TestSurfingDayScore:
    """Tests for surfing_day_score."""

    def ideal(self, **overrides) -> dict:
        values = {**avg_temp(22), "wave_height": 1.5, "wind_speed": 15, "precipitation": 0}
        values.update(overrides)
        return values

    def test_ideal_day(self) -> None:
        """Warm, mid-sized waves, moderate wind and no rain score 1.0."""
        assert surfing_day_score(make_day(**self.ideal())) == pytest.approx(1.0)

    def test_missing_wave_height_defaults_to_one_and_a_half_metres(self) -> None:
        """An absent wave height scores like 1.5 m."""
        assert surfing_day_score(make_day(**self.ideal(wave_height=None))) == pytest.approx(1.0)

    def test_flat_sea_is_not_defaulted(self) -> None:
        """A measured 0 m wave height is used as-is."""
        assert surfing_day_score(make_day(**self.ideal(wave_height=0.0))) == pytest.approx(0.6)

    @pytest.mark.parametrize(
        ("wave", "expected"),
        [(1, 1.0), (2, 1.0), (0.5, 0.8), (2.5, 0.8), (3, 0.8), (0.4, 0.6), (3.1, 0.6)],
    )
    def test_wave_bands(self, wave: float, expected: float) -> None:
        """Waves of 1-2 m are best, 0.5-3 m acceptable."""
        assert surfing_day_score(make_day(**self.ideal(wave_height=wave))) == pytest.approx(expected)

    @pytest.mark.parametrize(
        ("wind", "expected"),
        [(10, 1.0), (20, 1.0), (5, 0.9), (25, 0.9), (4.9, 0.8), (25.1, 0.8)],
    )
    def test_wind_bands(self, wind: float, expected: float) -> None:
        """Moderate wind is preferred over calm or strong wind."""
        assert surfing_day_score(make_day(**self.ideal(wind_speed=wind))) == pytest.approx(expected)

    @pytest.mark.parametrize(
        ("average", "expected"),
        [(20, 1.0), (25, 1.0), (15, 0.85), (30, 0.85), (14, 0.7), (31, 0.7)],
    )
    def test_temperature_bands(self, average: float, expected: float) -> None:
        """Warm days score higher."""
        assert surfing_day_score(make_day(**self.ideal(**avg_temp(average)))) == pytest.approx(expected)

    def test_rain_removes_bonus(self) -> None:
        """One millimetre of rain or more loses the no-rain bonus."""
        assert surfing_day_score(make_day(**self.ideal(precipitation=1))) == pytest.approx(0.9)


class TestOutdoorSightseeingDayScore:
    """Tests for outdoor_sightseeing_day_score."""

    def test_perfect_day(self) -> None:
        """Mild, dry, clear and calm scores 1.0."""
        day = make_day(**avg_temp(20), precipitation=0, cloud_cover=10, wind_speed=5)
        assert outdoor_sightseeing_day_score(day) == pytest.approx(1.0)

    @pytest.mark.parametrize(
        ("average", "expected"),
        [(15, 0.7), (25, 0.7), (10, 0.55), (28, 0.55), (5, 0.45), (35, 0.45), (4, 0.35), (36, 0.35)],
    )
    def test_temperature_bands(self, average: float, expected: float) -> None:
        """Comfortable temperatures score highest."""
        assert outdoor_sightseeing_day_score(make_day(**avg_temp(average))) == pytest.approx(expected)

    @pytest.mark.parametrize(
        ("precipitation", "expected"),
        [(0, 0.7), (0.1, 0.55), (1.9, 0.55), (2, 0.45), (4.9, 0.45), (5, 0.35)],
    )
    def test_precipitation_bands(self, precipitation: float, expected: float) -> None:
        """Only a completely dry day earns the full precipitation weight."""
        day = make_day(precipitation=precipitation)
        assert outdoor_sightseeing_day_score(day) == pytest.approx(expected)

    @pytest.mark.parametrize(("cloud", "expected"), [(29, 0.9), (30, 0.8), (59, 0.8), (60, 0.7)])
    def test_cloud_cover_bands(self, cloud: float, expected: float) -> None:
        """Clearer skies score higher."""
        assert outdoor_sightseeing_day_score(make_day(cloud_cover=cloud)) == pytest.approx(expected)

    def test_calm_wind_bonus(self) -> None:
        """Wind below 15 km/h adds 0.1."""
        assert outdoor_sightseeing_day_score(make_day(wind_speed=14.9)) == pytest.approx(0.8)
        assert outdoor_sightseeing_day_score(make_day(wind_speed=15)) == pytest.approx(0.7)


class TestIndoorSightseeingDayScore:
    """Tests for indoor_sightseeing_day_score."""

    def test_stormy_day(self) -> None:
        """Cold, very wet, windy and stormy scores 1.0."""
        day = make_day(**avg_temp(2), precipitation=15, wind_speed=40, weather_code=95)
        assert indoor_sightseeing_day_score(day) == pytest.approx(1.0)

    @pytest.mark.parametrize(
        ("average", "expected"),
        [(4, 0.5), (31, 0.5), (5, 0.35), (9, 0.35), (26, 0.35), (30, 0.35), (10, 0.2), (25, 0.2)],
    )
    def test_bad_temperature_bands(self, average: float, expected: float) -> None:
        """Uncomfortable temperatures favour indoor activities."""
        assert indoor_sightseeing_day_score(make_day(**avg_temp(average))) == pytest.approx(expected)

    @pytest.mark.parametrize(
        ("precipitation", "expected"),
        [(10.1, 0.6), (10, 0.5), (5.1, 0.5), (5, 0.4), (2.1, 0.4), (2, 0.3), (0.1, 0.3), (0, 0.2)],
    )
    def test_precipitation_bands(self, precipitation: float, expected: float) -> None:
        """Wetter days favour indoor activities."""
        day = make_day(precipitation=precipitation)
        assert indoor_sightseeing_day_score(day) == pytest.approx(expected)

    @pytest.mark.parametrize(("wind", "expected"), [(30.1, 0.2), (30, 0.1), (20.1, 0.1), (20, 0.0)])
    def test_wind_bands(self, wind: float, expected: float) -> None:
        """Strong wind favours indoor activities."""
        assert indoor_sightseeing_day_score(make_day(wind_speed=wind)) == pytest.approx(expected)

    @pytest.mark.parametrize("code", [45, 48, 51, 53, 55, 61, 63, 65, 80, 81, 82, 95, 96, 99])
    def test_severe_codes_earn_bonus(self, code: int) -> None:
        """Fog, drizzle, rain, showers and storms add 0.1."""
        day = make_day(weather_code=code, wind_speed=10)
        assert indoor_sightseeing_day_score(day) == pytest.approx(0.1)

    def test_snow_code_earns_no_bonus(self) -> None:
        """Snow codes are not severe weather for indoor scoring."""
        assert indoor_sightseeing_day_score(make_day(weather_code=73, wind_speed=10)) == 0.0


class TestWindowScoring:
    """Tests for averaging and best-day selection over a window."""

    def test_two_day_window_average_and_best_days(self) -> None:
        """Scores 0.6 and 0.9 average to 0.75 with the later day first."""
        first = make_day("2024-06-01", **avg_temp(28), precipitation=1, cloud_cover=20)
        second = make_day("2024-06-02", cloud_cover=20)

        result = score_outdoor_sightseeing([first, second])

        assert result.activity is Activity.OUTDOOR_SIGHTSEEING
        assert result.score == pytest.approx(0.75)
        assert [day.date for day in result.best_days] == ["2024-06-02", "2024-06-01"]
        assert [day.score for day in result.best_days] == pytest.approx([0.9, 0.6])
        assert result.reasoning == (
            "Perfect weather for outdoor activities! Clear skies and comfortable "
            "temperatures, especially on 2024-06-02."
        )

    def test_best_days_limited_to_three(self) -> None:
        """A week of forecasts yields three best days."""
        window = [make_day(f"2024-06-{day:02d}", snowfall=day) for day in range(1, 8)]

        result = score_skiing(window)

        assert len(result.best_days) == 3
        assert [day.date for day in result.best_days] == ["2024-06-06", "2024-06-07", "2024-06-01"]

    def test_ties_keep_chronological_order(self) -> None:
        """Equal scores keep the order of the forecast."""
        window = [make_day(f"2024-06-{day:02d}") for day in range(1, 6)]

        result = score_indoor_sightseeing(window)

        assert [day.date for day in result.best_days] == ["2024-06-01", "2024-06-02", "2024-06-03"]

    def test_single_day_window(self) -> None:
        """A one-day window has one best day equal to the average."""
        result = score_skiing([make_day(temperature_max=-2, temperature_min=-8, snowfall=12,
                                        wind_speed=10, weather_code=73)])

        assert result.score == pytest.approx(1.0)
        assert len(result.best_days) == 1
        assert result.reasoning.startswith("Excellent skiing conditions expected!")

    def test_empty_window_is_rejected(self) -> None:
        """Scoring needs at least one day."""
        with pytest.raises(ValueError):
            score_skiing([])


class TestSurfingCoastalGate:
    """Tests for the surfing coastal gate."""

    def test_inland_location_scores_zero(self) -> None:
        """Inland locations never surf, whatever the weather."""
        window = [make_day(**avg_temp(22), wave_height=1.5, wind_speed=15)]

        result = score_surfing(window, is_coastal=False)

        assert result.activity is Activity.SURFING
        assert result.score == 0
        assert result.best_days == []
        assert result.reasoning == "This location is not near a coast suitable for surfing."
        assert result.reasoning == NOT_COASTAL_REASONING

    def test_coastal_location_is_scored(self) -> None:
        """Coastal locations are scored day by day."""
        window = [make_day(**avg_temp(22), wave_height=1.5, wind_speed=15)]

        result = score_surfing(window, is_coastal=True)

        assert result.score == pytest.approx(1.0)
        assert len(result.best_days) == 1


class TestGenerateReasoning:
    """Tests for generate_reasoning."""

    best = BestDay(date="2024-06-03", score=0.8)

    @pytest.mark.parametrize(
        ("score", "prefix"),
        [
            (0.71, "Excellent skiing"),
            (0.7, "Good skiing"),
            (0.51, "Good skiing"),
            (0.5, "Moderate skiing"),
            (0.31, "Moderate skiing"),
            (0.3, "Poor skiing"),
            (0.0, "Poor skiing"),
        ],
    )
    def test_skiing_tiers(self, score: float, prefix: str) -> None:
        """Thresholds are strict: exactly 0.7 falls to the next tier."""
        assert generate_reasoning(Activity.SKIING, score, self.best).startswith(prefix)

    @pytest.mark.parametrize("activity", list(Activity))
    def test_upper_tiers_mention_best_day(self, activity: Activity) -> None:
        """Every tier above the lowest names the best day."""
        for score in (0.8, 0.6, 0.4):
            assert "2024-06-03" in generate_reasoning(activity, score, self.best)

    @pytest.mark.parametrize("activity", list(Activity))
    def test_lowest_tier_has_no_date(self, activity: Activity) -> None:
        """The lowest tier is a fixed message."""
        assert "2024-06-03" not in generate_reasoning(activity, 0.1, self.best)

    def test_surfing_without_best_day(self) -> None:
        """Surfing with no scored days uses the unsuitable-location message."""
        assert generate_reasoning(Activity.SURFING, 0.9, None) == NO_SURF_DAY_REASONING

    def test_indoor_lowest_tier(self) -> None:
        """Indoor sightseeing's lowest tier points outdoors."""
        assert generate_reasoning(Activity.INDOOR_SIGHTSEEING, 0.2, self.best) == (
            "Weather is generally good for outdoor activities - indoor sightseeing less necessary."
        )

    def test_missing_best_day_for_dated_tier(self) -> None:
        """A dated tier without a best day is an error."""
        with pytest.raises(ValueError):
            generate_reasoning(Activity.SKIING, 0.9, None)
