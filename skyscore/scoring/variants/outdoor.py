from dataclasses import dataclass

from skyscore.scoring.factors import (
    feels_like_penalty,
    outdoor_visibility_penalty,
    outdoor_wind_penalty,
    penalty_factor,
    precipitation_penalty,
    temperature_penalty,
    uv_penalty,
)
from skyscore.util.format import format_number

from .base import RatingBand, ScoringVariant


@dataclass(frozen=True)
class ActivityProfile:
    key: str
    name: str
    temp_range: tuple[float, float]
    wind_tolerance: float = 1.0
    rain_tolerance: float = 1.0
    uv_sensitivity: float = 1.0


ACTIVITY_PROFILES = {
    "hiking": ActivityProfile("hiking", "Hiking", (5.0, 25.0), 1.2, 0.8, 1.5),
    "cycling": ActivityProfile("cycling", "Cycling", (8.0, 28.0), 0.7, 0.6, 1.2),
    "walking": ActivityProfile("walking", "Walking", (5.0, 28.0), 1.0, 0.9, 1.0),
    "running": ActivityProfile("running", "Running", (3.0, 22.0), 0.9, 0.7, 1.3),
    "picnic": ActivityProfile("picnic", "Picnic", (15.0, 28.0), 0.7, 0.3, 1.0),
    "default": ActivityProfile("default", "General Outdoor", (10.0, 25.0)),
}


def activity_profile(activity: str | None) -> ActivityProfile:
    key = (activity or "default").strip().lower()
    return ACTIVITY_PROFILES.get(key, ACTIVITY_PROFILES["default"])


def uv_level(uv_index: float) -> str:
    if uv_index <= 2:
        return "Low"
    if uv_index <= 5:
        return "Moderate"
    if uv_index <= 7:
        return "High"
    if uv_index <= 10:
        return "Very High"
    return "Extreme"


def hour_summary(temperature: float, precip_probability: float, wind_kmh: float) -> str:
    parts = [f"{format_number(temperature, precision=0)}°C"]
    if precip_probability > 30:
        parts.append(f"{format_number(precip_probability, precision=0)}% rain")
    if wind_kmh > 25:
        parts.append(f"{format_number(wind_kmh, precision=0)}km/h wind")
    return ", ".join(parts)


class OutdoorVariant(ScoringVariant):
    """General outdoor activities. Wind speed is in km/h for this variant."""

    name = "outdoor"
    defaults = {
        "temperature": 15.0,
        "precip_probability": 0.0,
        "wind_speed": 10.0,
        "humidity": 50.0,
        "uv_index": 3.0,
        "visibility": 10000.0,
        "weather_condition": "clear",
    }
    weights = {
        "precipitation": 35,
        "temperature": 25,
        "wind": 20,
        "feels_like": 10,
        "uv_index": 5,
        "visibility": 5,
    }
    bands = (
        RatingBand(85, "Excellent"),
        RatingBand(70, "Good"),
        RatingBand(55, "Fair"),
        RatingBand(40, "Poor"),
    )
    floor_rating = "Not Recommended"

    def __init__(
        self,
        activity: str | None = None,
        temp_range: tuple[float, float] | None = None,
    ) -> None:
        self.profile = activity_profile(activity)
        if temp_range is not None:
            low, high = temp_range
            self.temp_range = (float(min(low, high)), float(max(low, high)))
        else:
            self.temp_range = self.profile.temp_range

    def _in_range(self, temperature: float) -> bool:
        low, high = self.temp_range
        return low <= temperature <= high

    def factors(self, snapshot):
        w = self.weights
        profile = self.profile
        return (
            penalty_factor(
                "precipitation",
                snapshot.precip_probability,
                precipitation_penalty(
                    snapshot.precip_probability,
                    profile.rain_tolerance,
                    snapshot.weather_condition,
                ),
                w["precipitation"],
            ),
            penalty_factor(
                "temperature",
                snapshot.temperature,
                temperature_penalty(snapshot.temperature, self.temp_range),
                w["temperature"],
            ),
            penalty_factor(
                "wind",
                snapshot.wind_speed,
                outdoor_wind_penalty(snapshot.wind_speed, profile.wind_tolerance),
                w["wind"],
            ),
            penalty_factor(
                "feels_like",
                snapshot.feels_like,
                feels_like_penalty(snapshot.temperature, snapshot.feels_like),
                w["feels_like"],
            ),
            penalty_factor(
                "uv_index",
                snapshot.uv_index,
                uv_penalty(snapshot.uv_index, profile.uv_sensitivity),
                w["uv_index"],
            ),
            penalty_factor(
                "visibility",
                snapshot.visibility,
                outdoor_visibility_penalty(snapshot.visibility),
                w["visibility"],
            ),
        )

    def reasons(self, snapshot, factors):
        by_name = {f.name: f for f in factors}
        reasons: list[str] = []

        precip = by_name["precipitation"].value
        precip_text = format_number(precip, precision=0)
        if precip <= 10 and "rain" not in snapshot.weather_condition:
            reasons.append("Dry conditions expected")
        elif precip <= 30:
            reasons.append(f"Low rain chance ({precip_text}%)")
        elif precip <= 60:
            reasons.append(f"Rain possible ({precip_text}% chance)")
        else:
            reasons.append(f"Rain likely ({precip_text}%)")

        temp = by_name["temperature"].value
        temp_text = format_number(temp, precision=0)
        if self._in_range(temp):
            reasons.append(f"Comfortable temperature ({temp_text}°C)")
        elif temp < self.temp_range[0]:
            reasons.append(f"Cool ({temp_text}°C) - dress warmly")
        else:
            reasons.append(f"Warm ({temp_text}°C) - stay hydrated")

        wind = by_name["wind"].value
        wind_text = format_number(wind, precision=0)
        if wind <= 15:
            reasons.append("Light winds")
        elif wind <= 30:
            reasons.append(f"Breezy ({wind_text} km/h)")
        elif wind <= 45:
            reasons.append(f"Windy ({wind_text} km/h)")
        else:
            reasons.append(f"Very windy ({wind_text} km/h) - caution advised")

        feels_like = by_name["feels_like"].value
        if abs(feels_like - temp) > 5:
            feels_text = format_number(feels_like, precision=0)
            if feels_like < temp:
                reasons.append(f"Feels colder ({feels_text}°C) due to wind chill")
            else:
                reasons.append(f"Feels warmer ({feels_text}°C) due to humidity")

        uv = by_name["uv_index"].value
        if uv >= 6:
            reasons.append(f"High UV ({format_number(uv)}) - sun protection needed")

        if by_name["visibility"].value < 2000:
            reasons.append("Poor visibility")

        return reasons

    def recommendation(self, score, snapshot, factors):
        activity = self.profile.name.lower()
        if score >= 85:
            return f"Excellent conditions for {activity}! Get outside and enjoy."
        if score >= 70:
            text = f"Good conditions for {activity}."
            if snapshot.precip_probability > 30:
                text += " Pack a rain jacket just in case."
            return text
        if score >= 55:
            if snapshot.precip_probability > 50:
                return "Rain likely - consider rescheduling or bring waterproof gear."
            if snapshot.wind_speed > 35:
                return "Quite windy - may be unpleasant for extended outdoor time."
            if not self._in_range(snapshot.temperature):
                return "Temperature outside comfort zone - dress appropriately."
            return f"Fair conditions. Possible but not ideal for {activity}."
        if score >= 40:
            return "Conditions are poor. Consider indoor alternatives."
        return "Not recommended for outdoor activities today."

    def details(self, score, snapshot, factors):
        return {
            "activity": self.profile.name,
            "temp_range": self.temp_range,
            "in_temp_range": self._in_range(snapshot.temperature),
            "uv_level": uv_level(snapshot.uv_index),
            "weather_condition": snapshot.weather_condition,
            "hour_summary": hour_summary(
                snapshot.temperature,
                snapshot.precip_probability,
                snapshot.wind_speed,
            ),
        }
