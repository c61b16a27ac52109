# ABOUTME: Tests for skill-level recommendations
# ABOUTME: Validates wave-height and wind based classification

from datetime import datetime, timezone

from surfcal.scoring.recommender import SurfRecommender
from surfcal.weather.models import SurfWindow


def test_small_waves_are_beginner_friendly():
    """0.6m is about 2ft"""
    result = SurfRecommender().classify(0.6, 4.0, 315.0)

    assert result.level == "beginner-friendly"
    assert "volume" in result.recommendation


def test_three_to_five_feet_is_optimal():
    recommender = SurfRecommender()

    assert recommender.classify(1.0, 4.0, 315.0).level == "optimal"
    # 1.5m is 4.92ft
    assert recommender.classify(1.5, 4.0, 315.0).level == "optimal"


def test_over_five_feet_is_advanced():
    result = SurfRecommender().classify(1.8, 4.0, 315.0)
    assert result.level == "advanced"
    assert result.audience == "Advanced surfers"


def test_big_waves_without_strong_wind_are_advanced():
    assert SurfRecommender().classify(3.0, 10.0, 180.0).level == "advanced"


def test_big_waves_and_strong_wind_are_extreme():
    result = SurfRecommender().classify(3.0, 20.0, 315.0)

    assert result.level == "extreme"
    assert "not recommended" in result.recommendation


def test_big_waves_strong_south_wind_suggests_sheltered_venue():
    recommender = SurfRecommender(sheltered_venue="Herzliya Marina")

    for direction in (135.0, 180.0, 225.0):
        result = recommender.classify(3.0, 20.0, direction)
        assert result.level == "extreme-sheltered"
        assert "Herzliya Marina" in result.recommendation


def test_classify_window_uses_window_conditions():
    window = SurfWindow(
        wave_height=1.2,
        wave_period=9.0,
        wind_speed=4.0,
        wind_direction=315.0,
        start_time=datetime(2025, 6, 1, 6, tzinfo=timezone.utc),
        end_time=datetime(2025, 6, 1, 8, tzinfo=timezone.utc),
        hour_count=2,
    )

    assert SurfRecommender().classify_window(window).level == "optimal"
