"""Input normalisation for the scoring engine.

Every public entry point runs its conditions through ``with_defaults`` once,
so the factor curves only ever see finite, range-clamped numbers.
"""

import dataclasses
import datetime
import logging
import math
from collections.abc import Mapping
from typing import Any

from skyscore.errors import ContractError
from .types import ConditionsSnapshot, HourSample, ValidatedSnapshot

logger = logging.getLogger(__name__)

# Nautical twilight; below this the sky counts as dark.
DARK_SUN_ALTITUDE_DEG = -12.0

BASE_DEFAULTS: dict[str, Any] = {
    "cloud_cover": 50.0,
    "humidity": 70.0,
    "wind_speed": 5.0,
    "visibility": 10000.0,
    "kp_index": 0.0,
    "sun_altitude": 0.0,
    "moon_phase": 0.5,
    "latitude": 53.3,
    "temperature": 15.0,
    "precip_probability": 0.0,
    "uv_index": 3.0,
    "weather_condition": "clear",
}

# (low, high) clamp bounds; None leaves that side open.
FIELD_RANGES: dict[str, tuple[float | None, float | None]] = {
    "cloud_cover": (0.0, 100.0),
    "humidity": (0.0, 100.0),
    "wind_speed": (0.0, None),
    "visibility": (0.0, None),
    "kp_index": (0.0, 9.0),
    "sun_altitude": (-90.0, 90.0),
    "moon_phase": (0.0, 1.0),
    "latitude": (-90.0, 90.0),
    "temperature": (-90.0, 60.0),
    "feels_like": (-90.0, 60.0),
    "precip_probability": (0.0, 100.0),
    "uv_index": (0.0, 20.0),
}

FIELD_ALIASES = {
    "clouds": "cloud_cover",
    "cloudCover": "cloud_cover",
    "windSpeed": "wind_speed",
    "wind_speed_ms": "wind_speed",
    "kp": "kp_index",
    "kpIndex": "kp_index",
    "sunAltitude": "sun_altitude",
    "moonPhase": "moon_phase",
    "lat": "latitude",
    "isDark": "is_dark",
    "feelsLike": "feels_like",
    "precipProbability": "precip_probability",
    "uvIndex": "uv_index",
    "weatherCondition": "weather_condition",
}

_SNAPSHOT_FIELDS = {f.name for f in dataclasses.fields(ConditionsSnapshot)}
_TIMESTAMP_KEYS = ("timestamp", "datetime", "time", "dt")


def as_number(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


def clean_number(
    value: Any,
    default: float,
    low: float | None = None,
    high: float | None = None,
) -> float:
    number = as_number(value)
    if number is None:
        number = default
    if low is not None:
        number = max(low, number)
    if high is not None:
        number = min(high, number)
    return number


def as_flag(value: Any) -> bool | None:
    if value is None:
        return None
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        text = value.strip().lower()
        if text in ("true", "yes", "1"):
            return True
        if text in ("false", "no", "0"):
            return False
        return None
    number = as_number(value)
    if number is None:
        return None
    return number != 0


def coerce_snapshot(conditions: Any) -> ConditionsSnapshot:
    if conditions is None:
        return ConditionsSnapshot()
    if isinstance(conditions, ConditionsSnapshot):
        return conditions
    if not isinstance(conditions, Mapping):
        raise ContractError(
            f"conditions must be a mapping or ConditionsSnapshot, got {type(conditions).__name__}"
        )
    values: dict[str, Any] = {}
    for key, value in conditions.items():
        name = FIELD_ALIASES.get(key, key)
        if name not in _SNAPSHOT_FIELDS:
            continue
        # Canonical names win over aliases when both are present.
        if name in values and key != name:
            continue
        values[name] = value
    return ConditionsSnapshot(**values)


def coerce_hour(sample: Any) -> HourSample:
    if isinstance(sample, HourSample):
        return HourSample(
            timestamp=parse_timestamp(sample.timestamp),
            conditions=coerce_snapshot(sample.conditions),
        )
    if not isinstance(sample, Mapping):
        raise ContractError(
            f"hour samples must be mappings or HourSample, got {type(sample).__name__}"
        )
    raw = None
    for key in _TIMESTAMP_KEYS:
        if sample.get(key) is not None:
            raw = sample[key]
            break
    conditions = sample.get("conditions")
    if conditions is None:
        conditions = sample
    return HourSample(timestamp=parse_timestamp(raw), conditions=coerce_snapshot(conditions))


def parse_timestamp(value: Any) -> datetime.datetime:
    if isinstance(value, datetime.datetime):
        dt = value
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        dt = datetime.datetime.fromtimestamp(value, tz=datetime.timezone.utc)
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            dt = datetime.datetime.fromisoformat(text)
        except ValueError as exc:
            raise ContractError(f"Invalid timestamp: {value!r}") from exc
    else:
        raise ContractError(f"Hour sample has no usable timestamp: {value!r}")
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=datetime.timezone.utc)
    return dt


def with_defaults(
    conditions: Any,
    defaults: Mapping[str, Any] | None = None,
) -> ValidatedSnapshot:
    """Return a fully populated, range-clamped copy of ``conditions``.

    ``defaults`` overrides ``BASE_DEFAULTS`` per field. ``feels_like`` falls
    back to the temperature and ``is_dark`` to the sun altitude when they are
    missing, so those derived fields stay consistent with their sources.
    """
    snapshot = coerce_snapshot(conditions)
    table = dict(BASE_DEFAULTS)
    if defaults:
        table.update(defaults)

    values: dict[str, Any] = {}
    substituted: list[str] = []
    for name, (low, high) in FIELD_RANGES.items():
        if name == "feels_like":
            continue
        raw = getattr(snapshot, name)
        if as_number(raw) is None:
            substituted.append(name)
        values[name] = clean_number(raw, float(table[name]), low, high)

    feels_like = as_number(snapshot.feels_like)
    if feels_like is None:
        substituted.append("feels_like")
        fallback = table.get("feels_like", values["temperature"])
        feels_like = clean_number(fallback, values["temperature"])
    low, high = FIELD_RANGES["feels_like"]
    values["feels_like"] = max(low, min(high, feels_like))

    is_dark = as_flag(snapshot.is_dark)
    if is_dark is None:
        substituted.append("is_dark")
        is_dark = as_flag(table.get("is_dark"))
        if is_dark is None:
            is_dark = values["sun_altitude"] < DARK_SUN_ALTITUDE_DEG
    values["is_dark"] = is_dark

    condition = snapshot.weather_condition
    if not isinstance(condition, str) or not condition.strip():
        substituted.append("weather_condition")
        condition = str(table["weather_condition"])
    values["weather_condition"] = condition.strip().lower()

    if substituted:
        logger.debug("Substituted defaults for: %s", ", ".join(substituted))
    return ValidatedSnapshot(substituted=tuple(substituted), **values)
