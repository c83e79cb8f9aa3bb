from .engine import aggregate, score_conditions
from .latitude import kp_level, min_kp_for_latitude
from .moon import moon_illumination, moon_phase_info, moon_phase_name
from .snapshot import with_defaults
from .types import (
    ClearSkyResult,
    ConditionsSnapshot,
    FactorResult,
    HourSample,
    MoonPhaseInfo,
    ScoreResult,
    ValidatedSnapshot,
    Window,
)
from .variants import get_variant, should_alert
from .windows import (
    WindowConfig,
    find_aurora_windows,
    find_clear_sky_window,
    find_score_windows,
    find_window,
)

__all__ = [
    "ClearSkyResult",
    "ConditionsSnapshot",
    "FactorResult",
    "HourSample",
    "MoonPhaseInfo",
    "ScoreResult",
    "ValidatedSnapshot",
    "Window",
    "WindowConfig",
    "aggregate",
    "find_aurora_windows",
    "find_clear_sky_window",
    "find_score_windows",
    "find_window",
    "get_variant",
    "kp_level",
    "min_kp_for_latitude",
    "moon_illumination",
    "moon_phase_info",
    "moon_phase_name",
    "score_conditions",
    "should_alert",
    "with_defaults",
]
