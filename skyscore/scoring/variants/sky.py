from skyscore.scoring.factors import (
    MS_TO_KMH,
    cloud_score,
    curve_factor,
    humidity_score,
    moon_score,
    visibility_score,
    wind_score,
)
from skyscore.scoring.moon import moon_phase_info
from skyscore.util.format import format_number, format_percent

from .base import RatingBand, ScoringVariant


class SkyVariant(ScoringVariant):
    """Stargazing conditions: cloud, moonlight, haze, wind and transparency."""

    name = "sky"
    defaults = {
        "cloud_cover": 50.0,
        "humidity": 70.0,
        "wind_speed": 5.0,
        "visibility": 10000.0,
        "moon_phase": 0.5,
    }
    weights = {
        "clouds": 40,
        "moon": 25,
        "humidity": 15,
        "wind": 10,
        "visibility": 10,
    }
    bands = (
        RatingBand(80, "Excellent"),
        RatingBand(65, "Good"),
        RatingBand(50, "Fair"),
        RatingBand(35, "Poor"),
    )
    floor_rating = "Bad"

    def factors(self, snapshot):
        w = self.weights
        return (
            curve_factor("clouds", snapshot.cloud_cover, cloud_score(snapshot.cloud_cover), w["clouds"]),
            curve_factor("moon", snapshot.moon_phase, moon_score(snapshot.moon_phase), w["moon"]),
            curve_factor("humidity", snapshot.humidity, humidity_score(snapshot.humidity), w["humidity"]),
            curve_factor("wind", snapshot.wind_speed, wind_score(snapshot.wind_speed), w["wind"]),
            curve_factor(
                "visibility",
                snapshot.visibility,
                visibility_score(snapshot.visibility),
                w["visibility"],
            ),
        )

    def reasons(self, snapshot, factors):
        by_name = {f.name: f for f in factors}
        reasons: list[str] = []

        clouds = by_name["clouds"].value
        if clouds <= 20:
            reasons.append(f"Clear skies ({format_percent(clouds)} cloud cover)")
        elif clouds <= 50:
            reasons.append(f"Partly cloudy ({format_percent(clouds)}) - gaps between clouds")
        else:
            reasons.append(f"Cloudy ({format_percent(clouds)}) - most stars hidden")

        moon = by_name["moon"]
        info = moon_phase_info(moon.value)
        lit = f"{info.name} ({info.illumination_percent}% illuminated)"
        if moon.sub_score >= 60:
            reasons.append(f"{lit} - dark skies")
        elif moon.sub_score >= 30:
            reasons.append(f"{lit} - some moonlight")
        else:
            reasons.append(f"{lit} - moonlight washes out faint stars")

        humidity = by_name["humidity"]
        if humidity.sub_score >= 100:
            reasons.append(f"Low humidity ({format_percent(humidity.value)}) - transparent air")
        elif humidity.sub_score < 50:
            reasons.append(f"High humidity ({format_percent(humidity.value)}) - expect haze")

        wind = by_name["wind"]
        if wind.sub_score < 50:
            kmh = format_number(wind.value * MS_TO_KMH, precision=0)
            reasons.append(f"Windy ({kmh} km/h) - telescope shake likely")

        visibility = by_name["visibility"]
        if visibility.sub_score < 50:
            km = format_number(visibility.value / 1000.0)
            reasons.append(f"Poor visibility ({km} km)")

        return reasons

    def recommendation(self, score, snapshot, factors):
        # is_dark is derived from the sun altitude when only the altitude is given.
        darkness_known = "is_dark" not in snapshot.substituted or "sun_altitude" not in snapshot.substituted
        if darkness_known and not snapshot.is_dark:
            return "Wait for darkness before heading out."
        if score >= 80:
            return "Excellent night for stargazing. Faint deep-sky objects should be visible."
        if score >= 65:
            return "Good conditions. Planets, bright clusters and constellations will show well."
        if score >= 50:
            return "Fair conditions. Stick to the Moon, planets and the brightest stars."
        if score >= 35:
            return "Poor conditions. Only the brightest objects are worth a look."
        return "Not a night for stargazing."

    def details(self, score, snapshot, factors):
        info = moon_phase_info(snapshot.moon_phase)
        return {
            "moon_phase_name": info.name,
            "moon_illumination": info.illumination_percent,
        }
