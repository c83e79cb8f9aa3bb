from .factors import round_half_up
from .snapshot import BASE_DEFAULTS, clean_number
from .types import MoonPhaseInfo

NEW_MOON = "New Moon"

# (exclusive upper bound, name); New Moon at either end is checked first.
PHASE_NAMES = (
    (0.22, "Waxing Crescent"),
    (0.28, "First Quarter"),
    (0.47, "Waxing Gibbous"),
    (0.53, "Full Moon"),
    (0.72, "Waning Gibbous"),
    (0.78, "Last Quarter"),
)
LAST_PHASE_NAME = "Waning Crescent"


def _phase(phase: float | None) -> float:
    return clean_number(phase, BASE_DEFAULTS["moon_phase"], 0.0, 1.0)


def moon_phase_name(phase: float | None) -> str:
    phase = _phase(phase)
    if phase < 0.03 or phase > 0.97:
        return NEW_MOON
    for upper, name in PHASE_NAMES:
        if phase < upper:
            return name
    return LAST_PHASE_NAME


def moon_illumination(phase: float | None) -> float:
    """Illuminated fraction (0-1): 0 at new moon, 1 at full moon."""
    phase = _phase(phase)
    distance_from_new = phase if phase <= 0.5 else 1.0 - phase
    return abs(distance_from_new) * 2.0


def moon_phase_info(phase: float | None) -> MoonPhaseInfo:
    value = _phase(phase)
    return MoonPhaseInfo(
        phase=value,
        name=moon_phase_name(value),
        illumination_percent=round_half_up(moon_illumination(value) * 100.0),
    )
