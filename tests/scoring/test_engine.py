import logging
import math

import pytest

from skyscore import ConditionsSnapshot, score_conditions
from skyscore.errors import ContractError, UnknownVariantError
from skyscore.scoring.engine import aggregate
from skyscore.scoring.snapshot import with_defaults
from skyscore.scoring.types import FactorResult
from skyscore.scoring.variants import (
    AuroraVariant,
    OutdoorVariant,
    SkyVariant,
    get_variant,
)

VARIANTS = ["sky", "aurora", "outdoor"]

NASTY_INPUTS = [
    {},
    {"cloud_cover": float("nan"), "humidity": float("inf"), "wind_speed": -float("inf")},
    {"cloud_cover": -400, "humidity": 900, "kp_index": 40, "sun_altitude": 500},
    {"cloud_cover": "cloudy", "temperature": None, "uv_index": [1, 2]},
    {"precip_probability": 1e12, "visibility": -1, "temperature": -300, "feels_like": 300},
]


@pytest.mark.parametrize("variant", VARIANTS)
@pytest.mark.parametrize("conditions", NASTY_INPUTS)
def test_score_is_bounded_integer(variant, conditions):
    result = score_conditions(variant, conditions)
    assert isinstance(result.score, int)
    assert 0 <= result.score <= 100
    assert len(result.reasons) <= 4


@pytest.mark.parametrize(
    "variant, defaults",
    [
        ("sky", SkyVariant.defaults),
        ("aurora", AuroraVariant.defaults),
        ("outdoor", OutdoorVariant.defaults),
    ],
)
def test_empty_conditions_equal_documented_defaults(variant, defaults):
    assert score_conditions(variant, {}) == score_conditions(variant, dict(defaults))
    assert score_conditions(variant, None) == score_conditions(variant, {})


def test_accepts_snapshot_instance():
    snapshot = ConditionsSnapshot(cloud_cover=10, humidity=40, wind_speed=2, moon_phase=0.1)
    assert score_conditions("sky", snapshot).score == 91


def test_accepts_variant_instance():
    result = score_conditions(OutdoorVariant(activity="picnic"), {"temperature": 20})
    assert result.details["activity"] == "Picnic"


def test_unknown_variant():
    with pytest.raises(UnknownVariantError):
        score_conditions("swimming", {})
    with pytest.raises(ValueError):
        get_variant("swimming")


def test_variant_names_are_case_insensitive():
    assert isinstance(get_variant(" SKY "), SkyVariant)


def test_bad_variant_options_are_contract_errors():
    with pytest.raises(ContractError):
        get_variant("sky", activity="hiking")


def test_non_mapping_conditions_raise_contract_error():
    with pytest.raises(ContractError):
        score_conditions("sky", [10, 40])
    with pytest.raises(TypeError):
        score_conditions("aurora", 5)


class _BrokenVariant(SkyVariant):
    name = "broken"

    def factors(self, snapshot):
        return (FactorResult(name="clouds", value=0.0, sub_score=0, weight=100, points=math.nan),)

    def reasons(self, snapshot, factors):
        return ["one", "two", "three", "four", "five"]


class _OverfullVariant(SkyVariant):
    name = "overfull"

    def factors(self, snapshot):
        return (FactorResult(name="clouds", value=0.0, sub_score=100, weight=100, points=150.0),)

    def reasons(self, snapshot, factors):
        return []


def test_non_finite_total_falls_back_to_neutral(caplog):
    with caplog.at_level(logging.WARNING, logger="skyscore.scoring.engine"):
        result = aggregate(_BrokenVariant(), with_defaults({}))
    assert result.score == 50
    assert result.rating == "Fair"
    assert "not finite" in caplog.text


def test_reasons_are_truncated():
    result = aggregate(_BrokenVariant(), with_defaults({}))
    assert result.reasons == ["one", "two", "three", "four"]


def test_total_is_clamped():
    result = aggregate(_OverfullVariant(), with_defaults({}))
    assert result.score == 100


def test_caps_apply_before_rounding(caplog):
    with caplog.at_level(logging.DEBUG, logger="skyscore.scoring.engine"):
        result = score_conditions("aurora", {"kp_index": 1, "cloud_cover": 0, "sun_altitude": -30})
    assert result.score == 30
    assert "capped at 30" in caplog.text
