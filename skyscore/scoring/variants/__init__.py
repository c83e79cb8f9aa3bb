from skyscore.errors import ContractError, UnknownVariantError

from .aurora import AlertDecision, AuroraVariant, should_alert
from .base import RatingBand, ScoreCap, ScoringVariant
from .outdoor import ACTIVITY_PROFILES, ActivityProfile, OutdoorVariant, activity_profile
from .sky import SkyVariant

VARIANTS = {
    "sky": SkyVariant,
    "aurora": AuroraVariant,
    "outdoor": OutdoorVariant,
}


def get_variant(name, **options) -> ScoringVariant:
    if isinstance(name, ScoringVariant):
        return name
    key = name.strip().lower() if isinstance(name, str) else name
    if key not in VARIANTS:
        raise UnknownVariantError(f"Unknown scoring variant: {name}")
    try:
        return VARIANTS[key](**options)
    except TypeError as e:
        raise ContractError(f"Invalid options for {key} variant: {e}") from e


__all__ = [
    "ACTIVITY_PROFILES",
    "ActivityProfile",
    "AlertDecision",
    "AuroraVariant",
    "OutdoorVariant",
    "RatingBand",
    "ScoreCap",
    "ScoringVariant",
    "SkyVariant",
    "VARIANTS",
    "activity_profile",
    "get_variant",
    "should_alert",
]
