__version__ = "0.1.0"

from .scoring import (
    ClearSkyResult,
    ConditionsSnapshot,
    FactorResult,
    HourSample,
    MoonPhaseInfo,
    ScoreResult,
    Window,
    WindowConfig,
    find_window,
    moon_phase_info,
    score_conditions,
    with_defaults,
)

__all__ = [
    "__version__",
    "ClearSkyResult",
    "ConditionsSnapshot",
    "FactorResult",
    "HourSample",
    "MoonPhaseInfo",
    "ScoreResult",
    "Window",
    "WindowConfig",
    "find_window",
    "moon_phase_info",
    "score_conditions",
    "with_defaults",
]
