from skyscore import score_conditions
from skyscore.scoring.variants import SkyVariant

CLEAR_NIGHT = {
    "clouds": 10,
    "humidity": 40,
    "visibility": 10000,
    "windSpeed": 2,
    "moonPhase": 0.1,
}


def test_clear_night_scenario():
    result = score_conditions("sky", CLEAR_NIGHT)
    assert result.factor("clouds").sub_score == 90
    assert result.factor("humidity").sub_score == 100
    assert result.factor("visibility").sub_score == 100
    assert result.factor("wind").sub_score == 100
    assert result.factor("moon").sub_score == 80
    assert result.score == 91
    assert result.rating == "Excellent"


def test_weights_sum_to_100():
    assert sum(SkyVariant.weights.values()) == 100
    result = score_conditions("sky", CLEAR_NIGHT)
    assert sum(f.weight for f in result.factors) == 100


def test_defaults_score():
    result = score_conditions("sky", {})
    assert result.score == 45
    assert result.rating == "Poor"


def test_rating_bands():
    assert SkyVariant().rate(80, None) == "Excellent"
    assert SkyVariant().rate(79, None) == "Good"
    assert SkyVariant().rate(65, None) == "Good"
    assert SkyVariant().rate(50, None) == "Fair"
    assert SkyVariant().rate(35, None) == "Poor"
    assert SkyVariant().rate(34, None) == "Bad"


def test_cloud_monotonicity():
    previous = None
    for cloud in range(0, 101, 5):
        score = score_conditions("sky", {**CLEAR_NIGHT, "clouds": cloud}).score
        if previous is not None:
            assert score <= previous
        previous = score


def test_reasons_describe_present_factors():
    result = score_conditions("sky", CLEAR_NIGHT)
    assert result.reasons[0] == "Clear skies (10% cloud cover)"
    assert result.reasons[1] == "Waxing Crescent (20% illuminated) - dark skies"
    assert "Low humidity (40%) - transparent air" in result.reasons
    assert len(result.reasons) <= 4


def test_windy_and_hazy_reasons():
    result = score_conditions(
        "sky",
        {"cloud_cover": 60, "humidity": 95, "wind_speed": 15, "visibility": 2000, "moon_phase": 0.5},
    )
    assert result.reasons[0] == "Cloudy (60%) - most stars hidden"
    assert "Full Moon (100% illuminated) - moonlight washes out faint stars" in result.reasons
    assert "High humidity (95%) - expect haze" in result.reasons
    assert "Windy (54 km/h) - telescope shake likely" in result.reasons
    # Visibility reason is dropped by the four-reason limit.
    assert len(result.reasons) == 4


def test_recommendation_waits_for_darkness():
    result = score_conditions("sky", {**CLEAR_NIGHT, "is_dark": False})
    assert result.recommendation == "Wait for darkness before heading out."


def test_recommendation_waits_when_sun_is_up():
    result = score_conditions("sky", {**CLEAR_NIGHT, "sun_altitude": 40})
    assert result.recommendation == "Wait for darkness before heading out."
    night = score_conditions("sky", {**CLEAR_NIGHT, "sun_altitude": -30})
    assert night.recommendation.startswith("Excellent night for stargazing")


def test_recommendation_by_score_when_darkness_unknown():
    result = score_conditions("sky", CLEAR_NIGHT)
    assert result.recommendation.startswith("Excellent night for stargazing")


def test_details_moon():
    result = score_conditions("sky", CLEAR_NIGHT)
    assert result.details == {"moon_phase_name": "Waxing Crescent", "moon_illumination": 20}
