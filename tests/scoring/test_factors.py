import math

import pytest

from skyscore.scoring.factors import (
    aurora_cloud_penalty,
    cloud_score,
    curve_factor,
    darkness_penalty,
    feels_like_penalty,
    humidity_score,
    interpolate,
    kp_penalty,
    moon_score,
    outdoor_visibility_penalty,
    outdoor_wind_penalty,
    penalty_factor,
    precipitation_penalty,
    round_half_up,
    temperature_penalty,
    twilight_phase,
    uv_penalty,
    visibility_score,
    wind_score,
)


def test_round_half_up_rounds_halves_away_from_even():
    assert round_half_up(0.5) == 1
    assert round_half_up(2.5) == 3
    assert round_half_up(12.5) == 13
    assert round_half_up(-0.5) == 0
    assert round_half_up(44.8) == 45


def test_interpolate_clamps_outside_range():
    assert interpolate(0.0, 10.0, 100.0, 40.0, 0.0) == 100.0
    assert interpolate(50.0, 10.0, 100.0, 40.0, 0.0) == 0.0
    assert interpolate(25.0, 10.0, 100.0, 40.0, 0.0) == pytest.approx(50.0)


def test_cloud_score():
    assert cloud_score(0) == 100
    assert cloud_score(10) == 90
    assert cloud_score(100) == 0


def test_cloud_score_clamps_and_defaults():
    assert cloud_score(150) == 0
    assert cloud_score(-5) == 100
    assert cloud_score(None) == 50
    assert cloud_score(float("nan")) == 50
    assert cloud_score("not a number") == 50


def test_cloud_score_monotonic():
    scores = [cloud_score(c) for c in range(0, 101)]
    assert all(a >= b for a, b in zip(scores, scores[1:]))


def test_humidity_score():
    assert humidity_score(40) == 100
    assert humidity_score(50) == 100
    assert humidity_score(70) == 50
    assert humidity_score(90) == 0
    assert humidity_score(None) == 50


def test_wind_score_uses_kmh():
    assert wind_score(0) == 100
    assert wind_score(2) == 100  # 7.2 km/h
    assert wind_score(5) == 73  # 18 km/h
    assert wind_score(20) == 0
    assert wind_score(float("inf")) == 73


def test_visibility_score():
    assert visibility_score(10000) == 100
    assert visibility_score(25000) == 100
    assert visibility_score(5500) == 50
    assert visibility_score(500) == 0


def test_moon_score_endpoints():
    assert moon_score(0.0) == 100
    assert moon_score(1.0) == 100
    assert moon_score(0.5) == 0
    assert moon_score(0.1) == 80
    assert moon_score(None) == 0


def test_moon_score_symmetric_around_full_moon():
    offsets = [i / 100.0 for i in range(51)] + [0.0125, 0.0375, 0.3125]
    for x in offsets:
        assert moon_score(0.5 - x) == moon_score(0.5 + x), x


def test_curve_factor_points():
    factor = curve_factor("clouds", 10.0, 90, 40)
    assert factor.points == pytest.approx(36.0)
    assert factor.sub_score == 90


def test_penalty_factor_points():
    factor = penalty_factor("kp", 5.0, 0.3, 40)
    assert factor.points == 28.0
    assert factor.sub_score == 70

    # 25 * 0.3 = 7.5 loses 8 points, not 7
    assert penalty_factor("cloud", 15.0, 0.3, 25).points == 17.0


def test_kp_penalty_steps():
    assert kp_penalty(6, 5) == 0.0
    assert kp_penalty(5, 5) == 0.3
    assert kp_penalty(4.5, 5) == 0.6
    assert kp_penalty(4, 5) == 0.6
    assert kp_penalty(3, 5) == 0.85
    assert kp_penalty(2, 5) == 1.0


def test_twilight_phases():
    assert twilight_phase(-25) == "astronomical"
    assert twilight_phase(-15) == "nautical"
    assert twilight_phase(-12) == "civil"
    assert twilight_phase(-3) == "horizon"
    assert twilight_phase(0) == "day"
    assert twilight_phase(None) == "day"


def test_darkness_penalty():
    assert darkness_penalty(-25) == 0.0
    assert darkness_penalty(-15) == 0.2
    assert darkness_penalty(-8) == 0.7
    assert darkness_penalty(-3) == 0.9
    assert darkness_penalty(5) == 1.0


def test_aurora_cloud_penalty_table():
    assert aurora_cloud_penalty(10) == 0.0
    assert aurora_cloud_penalty(15) == 0.3
    assert aurora_cloud_penalty(50) == 0.6
    assert aurora_cloud_penalty(75) == 0.85
    assert aurora_cloud_penalty(100) == 1.0


def test_precipitation_penalty():
    assert precipitation_penalty(0) == 0.0
    assert precipitation_penalty(20) == 0.5
    assert precipitation_penalty(20, rain_tolerance=0.5) == 1.0
    assert precipitation_penalty(40, rain_tolerance=0.8) == pytest.approx(0.875)


def test_precipitation_penalty_raised_for_rain_condition():
    assert precipitation_penalty(5, condition="light rain") == 0.7
    assert precipitation_penalty(5, condition="Snow showers") == 0.7
    assert precipitation_penalty(90, condition="heavy rain") == 1.0


def test_temperature_penalty():
    assert temperature_penalty(20, (10, 25)) == 0.0
    assert temperature_penalty(8, (10, 25)) == 0.2
    assert temperature_penalty(40, (10, 25)) == 0.8
    assert temperature_penalty(45, (10, 25)) == 1.0


def test_outdoor_wind_penalty_with_tolerance():
    assert outdoor_wind_penalty(5) == 0.0
    assert outdoor_wind_penalty(35) == 0.65
    assert outdoor_wind_penalty(35, wind_tolerance=0.7) == pytest.approx(0.65 / 0.7)
    assert outdoor_wind_penalty(60, wind_tolerance=0.7) == 1.0


def test_feels_like_penalty():
    assert feels_like_penalty(10, 9) == 0.0
    assert feels_like_penalty(10, 6) == 0.3
    assert feels_like_penalty(10, 4) == 0.6
    assert feels_like_penalty(10, 0) == 0.9


def test_uv_penalty_scales_with_sensitivity():
    assert uv_penalty(1) == 0.0
    assert uv_penalty(6, uv_sensitivity=1.5) == pytest.approx(0.45)
    assert uv_penalty(14, uv_sensitivity=2.0) == 1.0


def test_outdoor_visibility_penalty():
    assert outdoor_visibility_penalty(10000) == 0.0
    assert outdoor_visibility_penalty(3000) == 0.5
    assert outdoor_visibility_penalty(500) == 1.0
    assert not math.isnan(outdoor_visibility_penalty(float("nan")))
