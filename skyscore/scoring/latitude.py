"""Geomagnetic visibility thresholds by observer latitude."""

from dataclasses import dataclass
import math

from .snapshot import BASE_DEFAULTS, clean_number

# (minimum |latitude| in degrees, Kp needed); evaluated top-down.
KP_LATITUDE_STEPS = (
    (66.0, 1),
    (62.0, 2),
    (58.0, 3),
    (55.0, 4),
    (52.0, 5),
    (48.0, 6),
    (45.0, 7),
)
LOW_LATITUDE_MIN_KP = 8


@dataclass(frozen=True)
class KpLevel:
    kp: int
    level: str
    color: str
    description: str


KP_LEVELS = (
    KpLevel(0, "Quiet", "green", "No geomagnetic activity"),
    KpLevel(1, "Quiet", "green", "Very low activity"),
    KpLevel(2, "Unsettled", "green", "Low activity"),
    KpLevel(3, "Unsettled", "yellow", "Moderate activity"),
    KpLevel(4, "Active", "yellow", "Elevated activity"),
    KpLevel(5, "Minor Storm", "orange", "G1 Minor Storm - Aurora visible at 55°N"),
    KpLevel(6, "Moderate Storm", "orange", "G2 Moderate Storm - Aurora visible at 50°N"),
    KpLevel(7, "Strong Storm", "red", "G3 Strong Storm - Aurora visible at 45°N"),
    KpLevel(8, "Severe Storm", "red", "G4 Severe Storm - Widespread aurora"),
    KpLevel(9, "Extreme Storm", "red", "G5 Extreme Storm - Rare, aurora at low latitudes"),
)


def min_kp_for_latitude(latitude_deg: float | None) -> int:
    lat = abs(clean_number(latitude_deg, BASE_DEFAULTS["latitude"], -90.0, 90.0))
    for min_lat, kp in KP_LATITUDE_STEPS:
        if lat >= min_lat:
            return kp
    return LOW_LATITUDE_MIN_KP


def kp_level(kp_index: float | None) -> KpLevel:
    kp = clean_number(kp_index, BASE_DEFAULTS["kp_index"], 0.0, 9.0)
    return KP_LEVELS[min(int(math.floor(kp)), 9)]
