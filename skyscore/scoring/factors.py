import math

from .snapshot import BASE_DEFAULTS, clean_number
from .types import FactorResult

MS_TO_KMH = 3.6

HUMIDITY_IDEAL_PCT = 50.0
HUMIDITY_WORST_PCT = 90.0
WIND_IDEAL_KMH = 10.0
WIND_WORST_KMH = 40.0
VISIBILITY_IDEAL_M = 10000.0
VISIBILITY_WORST_M = 1000.0

ASTRONOMICAL_TWILIGHT_DEG = -18.0
NAUTICAL_TWILIGHT_DEG = -12.0
CIVIL_TWILIGHT_DEG = -6.0
HORIZON_DEG = 0.0

# (upper bound, penalty); first row whose bound is >= value wins.
AURORA_CLOUD_PENALTIES = (
    (10.0, 0.0),
    (25.0, 0.3),
    (50.0, 0.6),
    (75.0, 0.85),
    (100.0, 1.0),
)

PRECIP_PENALTIES = (
    (0.0, 0.0),
    (10.0, 0.2),
    (30.0, 0.5),
    (50.0, 0.7),
    (70.0, 0.85),
    (100.0, 1.0),
)

OUTDOOR_WIND_PENALTIES = (
    (10.0, 0.0),
    (20.0, 0.2),
    (30.0, 0.4),
    (40.0, 0.65),
    (50.0, 0.85),
    (100.0, 1.0),
)

UV_PENALTIES = (
    (2.0, 0.0),
    (5.0, 0.1),
    (7.0, 0.3),
    (10.0, 0.6),
    (15.0, 1.0),
)

TEMPERATURE_DISTANCE_PENALTIES = (
    (3.0, 0.2),
    (6.0, 0.4),
    (10.0, 0.6),
    (15.0, 0.8),
)

FEELS_LIKE_PENALTIES = (
    (2.0, 0.0),
    (5.0, 0.3),
    (8.0, 0.6),
)

# (lower bound, penalty); first row whose bound is <= value wins.
OUTDOOR_VISIBILITY_PENALTIES = (
    (10000.0, 0.0),
    (5000.0, 0.2),
    (2000.0, 0.5),
    (1000.0, 0.75),
    (0.0, 1.0),
)


def round_half_up(value: float) -> int:
    # Trim float noise first so x.5 boundaries round the same from both sides.
    return int(math.floor(round(value, 6) + 0.5))


def interpolate(value: float, x0: float, y0: float, x1: float, y1: float) -> float:
    if x1 == x0:
        return y1
    t = (value - x0) / (x1 - x0)
    t = max(0.0, min(1.0, t))
    return y0 + (y1 - y0) * t


def step_penalty(value: float, table: tuple[tuple[float, float], ...]) -> float:
    for upper, penalty in table:
        if value <= upper:
            return penalty
    return 1.0


def curve_factor(name: str, value: float, sub_score: int, weight: int) -> FactorResult:
    sub_score = max(0, min(100, sub_score))
    return FactorResult(
        name=name,
        value=value,
        sub_score=sub_score,
        weight=weight,
        points=sub_score * weight / 100.0,
    )


def penalty_factor(name: str, value: float, penalty: float, weight: int) -> FactorResult:
    penalty = max(0.0, min(1.0, penalty))
    lost = round_half_up(weight * penalty)
    return FactorResult(
        name=name,
        value=value,
        sub_score=round_half_up(100.0 * (1.0 - penalty)),
        weight=weight,
        points=float(weight - lost),
    )


def cloud_score(cloud_pct: float | None) -> int:
    cloud = clean_number(cloud_pct, BASE_DEFAULTS["cloud_cover"], 0.0, 100.0)
    return round_half_up(max(0.0, 100.0 - cloud))


def humidity_score(humidity_pct: float | None) -> int:
    humidity = clean_number(humidity_pct, BASE_DEFAULTS["humidity"], 0.0, 100.0)
    return round_half_up(
        interpolate(humidity, HUMIDITY_IDEAL_PCT, 100.0, HUMIDITY_WORST_PCT, 0.0)
    )


def wind_score(wind_ms: float | None) -> int:
    wind = clean_number(wind_ms, BASE_DEFAULTS["wind_speed"], 0.0)
    return round_half_up(
        interpolate(wind * MS_TO_KMH, WIND_IDEAL_KMH, 100.0, WIND_WORST_KMH, 0.0)
    )


def visibility_score(visibility_m: float | None) -> int:
    visibility = clean_number(visibility_m, BASE_DEFAULTS["visibility"], 0.0)
    return round_half_up(
        interpolate(visibility, VISIBILITY_WORST_M, 0.0, VISIBILITY_IDEAL_M, 100.0)
    )


def moon_score(phase: float | None) -> int:
    # Distance from full moon, so 0 and 1 (new) both score 100.
    phase = clean_number(phase, BASE_DEFAULTS["moon_phase"], 0.0, 1.0)
    return round_half_up(abs(phase - 0.5) * 200.0)


def kp_penalty(kp_index: float, min_kp: float) -> float:
    difference = kp_index - min_kp
    if difference < -2:
        return 1.0
    if difference < -1:
        return 0.85
    if difference < 0:
        return 0.6
    if difference == 0:
        return 0.3
    return 0.0


def twilight_phase(sun_altitude_deg: float | None) -> str:
    sun_alt = clean_number(sun_altitude_deg, BASE_DEFAULTS["sun_altitude"], -90.0, 90.0)
    if sun_alt < ASTRONOMICAL_TWILIGHT_DEG:
        return "astronomical"
    if sun_alt < NAUTICAL_TWILIGHT_DEG:
        return "nautical"
    if sun_alt < CIVIL_TWILIGHT_DEG:
        return "civil"
    if sun_alt < HORIZON_DEG:
        return "horizon"
    return "day"


DARKNESS_PENALTIES = {
    "astronomical": 0.0,
    "nautical": 0.2,
    "civil": 0.7,
    "horizon": 0.9,
    "day": 1.0,
}


def darkness_penalty(sun_altitude_deg: float | None) -> float:
    return DARKNESS_PENALTIES[twilight_phase(sun_altitude_deg)]


def aurora_cloud_penalty(cloud_pct: float | None) -> float:
    cloud = clean_number(cloud_pct, BASE_DEFAULTS["cloud_cover"], 0.0, 100.0)
    return step_penalty(cloud, AURORA_CLOUD_PENALTIES)


def precipitation_penalty(
    precip_pct: float | None,
    rain_tolerance: float = 1.0,
    condition: str = "",
) -> float:
    precip = clean_number(precip_pct, BASE_DEFAULTS["precip_probability"], 0.0, 100.0)
    penalty = step_penalty(precip, PRECIP_PENALTIES)
    penalty = min(1.0, penalty / rain_tolerance)
    condition = (condition or "").lower()
    if "rain" in condition or "snow" in condition:
        penalty = max(penalty, 0.7)
    return penalty


def temperature_penalty(temperature_c: float | None, temp_range: tuple[float, float]) -> float:
    temp = clean_number(temperature_c, BASE_DEFAULTS["temperature"])
    low, high = temp_range
    if low <= temp <= high:
        return 0.0
    distance = low - temp if temp < low else temp - high
    return step_penalty(distance, TEMPERATURE_DISTANCE_PENALTIES)


def outdoor_wind_penalty(wind_kmh: float | None, wind_tolerance: float = 1.0) -> float:
    wind = clean_number(wind_kmh, 10.0, 0.0)
    return min(1.0, step_penalty(wind, OUTDOOR_WIND_PENALTIES) / wind_tolerance)


def feels_like_penalty(temperature_c: float, feels_like_c: float) -> float:
    difference = abs(temperature_c - feels_like_c)
    for upper, penalty in FEELS_LIKE_PENALTIES:
        if difference <= upper:
            return penalty
    return 0.9


def uv_penalty(uv_index: float | None, uv_sensitivity: float = 1.0) -> float:
    uv = clean_number(uv_index, BASE_DEFAULTS["uv_index"], 0.0)
    return min(1.0, step_penalty(uv, UV_PENALTIES) * uv_sensitivity)


def outdoor_visibility_penalty(visibility_m: float | None) -> float:
    visibility = clean_number(visibility_m, BASE_DEFAULTS["visibility"], 0.0)
    for lower, penalty in OUTDOOR_VISIBILITY_PENALTIES:
        if visibility >= lower:
            return penalty
    return 1.0
