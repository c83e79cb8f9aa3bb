"""Aurora visibility: geomagnetic activity against the latitude threshold,
darkness and cloud cover.

The Kp factor compares the index with ``min_kp_for_latitude``; being at the
threshold still costs part of the weight since activity there is marginal.
Two caps bound the result regardless of the other factors: a Kp more than one
point short of the threshold, and a sun above civil twilight.
"""

from dataclasses import dataclass

from skyscore.scoring.factors import (
    CIVIL_TWILIGHT_DEG,
    NAUTICAL_TWILIGHT_DEG,
    aurora_cloud_penalty,
    darkness_penalty,
    kp_penalty,
    penalty_factor,
    twilight_phase,
)
from skyscore.scoring.latitude import kp_level, min_kp_for_latitude
from skyscore.scoring.types import ValidatedSnapshot
from skyscore.util.format import format_number, format_percent

from .base import RatingBand, ScoreCap, ScoringVariant

WEAK_KP_CAP = 30
DAYLIGHT_CAP = 25
STORM_KP = 7
ALERT_MAX_CLOUD_PCT = 50.0


@dataclass(frozen=True)
class AlertDecision:
    should_send: bool
    priority: str | None = None
    message: str | None = None


def should_alert(kp_index: float, min_kp: int, cloud_cover: float, is_dark: bool) -> AlertDecision:
    if kp_index >= min_kp and cloud_cover <= ALERT_MAX_CLOUD_PCT and is_dark:
        if kp_index >= min_kp + 2:
            return AlertDecision(
                should_send=True,
                priority="high",
                message="Strong aurora activity! Excellent chance of sighting!",
            )
        return AlertDecision(
            should_send=True,
            priority="normal",
            message="Aurora possible tonight - worth checking the sky",
        )
    if kp_index >= STORM_KP:
        return AlertDecision(
            should_send=True,
            priority="high",
            message=f"Rare strong geomagnetic storm (Kp {format_number(kp_index)})! Check for cloud breaks.",
        )
    return AlertDecision(should_send=False)


def _kp_clears_threshold(snapshot: ValidatedSnapshot) -> bool:
    return snapshot.kp_index >= min_kp_for_latitude(snapshot.latitude) + 1


def _kp_meets_threshold(snapshot: ValidatedSnapshot) -> bool:
    return snapshot.kp_index >= min_kp_for_latitude(snapshot.latitude)


class AuroraVariant(ScoringVariant):
    name = "aurora"
    defaults = {
        "kp_index": 0.0,
        "latitude": 53.3,
        "cloud_cover": 50.0,
        "sun_altitude": 0.0,
    }
    weights = {
        "kp": 40,
        "darkness": 25,
        "cloud": 25,
        "viewing": 10,
    }
    bands = (
        RatingBand(85, "Excellent", _kp_clears_threshold),
        RatingBand(70, "Good", _kp_meets_threshold),
        RatingBand(55, "Possible"),
        RatingBand(40, "Unlikely"),
    )
    floor_rating = "Not Visible"

    def factors(self, snapshot):
        w = self.weights
        min_kp = min_kp_for_latitude(snapshot.latitude)
        return (
            penalty_factor("kp", snapshot.kp_index, kp_penalty(snapshot.kp_index, min_kp), w["kp"]),
            penalty_factor(
                "darkness",
                snapshot.sun_altitude,
                darkness_penalty(snapshot.sun_altitude),
                w["darkness"],
            ),
            penalty_factor(
                "cloud",
                snapshot.cloud_cover,
                aurora_cloud_penalty(snapshot.cloud_cover),
                w["cloud"],
            ),
            # Light pollution and horizon clarity are not modelled; always zero penalty.
            penalty_factor("viewing", 0.0, 0.0, w["viewing"]),
        )

    def caps(self, snapshot, factors):
        caps = []
        min_kp = min_kp_for_latitude(snapshot.latitude)
        if snapshot.kp_index < min_kp - 1:
            caps.append(ScoreCap(WEAK_KP_CAP, f"Kp below {min_kp - 1} for this latitude"))
        if snapshot.sun_altitude > CIVIL_TWILIGHT_DEG:
            caps.append(ScoreCap(DAYLIGHT_CAP, "Sun above civil twilight"))
        return caps

    def reasons(self, snapshot, factors):
        by_name = {f.name: f for f in factors}
        min_kp = min_kp_for_latitude(snapshot.latitude)
        reasons: list[str] = []

        kp = by_name["kp"].value
        kp_text = format_number(kp)
        if kp >= min_kp + 1:
            reasons.append(f"Strong aurora activity (Kp {kp_text}) - excellent for your latitude")
        elif kp >= min_kp:
            reasons.append(f"Kp {kp_text} - aurora possible at your latitude")
        elif kp >= min_kp - 1:
            reasons.append(f"Kp {kp_text} - slightly below ideal (need Kp {min_kp}+)")
        else:
            reasons.append(f"Kp {kp_text} too low - need Kp {min_kp}+ for your latitude")

        phase = twilight_phase(by_name["darkness"].value)
        if phase == "astronomical":
            reasons.append("Astronomically dark - ideal for aurora viewing")
        elif phase == "nautical":
            reasons.append("Dark enough for aurora viewing")
        elif phase == "day":
            reasons.append("Too bright - wait for darkness")
        else:
            reasons.append(f"{phase.capitalize()} twilight - not dark enough yet")

        cloud = by_name["cloud"].value
        if cloud <= 20:
            reasons.append(f"Clear skies ({format_percent(cloud)} clouds)")
        elif cloud <= 50:
            reasons.append(f"Partly cloudy ({format_percent(cloud)}) - gaps may allow viewing")
        else:
            reasons.append(f"Cloudy ({format_percent(cloud)}) - may block aurora")

        return reasons

    def recommendation(self, score, snapshot, factors):
        min_kp = min_kp_for_latitude(snapshot.latitude)
        if not snapshot.is_dark:
            return "Wait for darkness. Aurora is only visible at night."
        if snapshot.kp_index < min_kp - 1:
            return (
                "Geomagnetic activity too low for your latitude. "
                f"Need Kp {min_kp}+ (currently Kp {format_number(snapshot.kp_index)})."
            )
        if snapshot.cloud_cover > 70:
            return "Too cloudy to see aurora even if it's active. Wait for clearer skies."
        if score >= 80:
            return "Excellent conditions! Head to a dark location with a clear northern horizon."
        if score >= 65:
            return "Good chance of aurora. Find a spot away from light pollution with a view north."
        if score >= 50:
            return "Aurora possible but not guaranteed. Worth checking if you're already in a dark area."
        return "Conditions not favorable for aurora viewing tonight."

    def details(self, score, snapshot, factors):
        min_kp = min_kp_for_latitude(snapshot.latitude)
        level = kp_level(snapshot.kp_index)
        return {
            "min_kp_needed": min_kp,
            "kp_difference": snapshot.kp_index - min_kp,
            "kp_level": level.level,
            "kp_description": level.description,
            "twilight_phase": twilight_phase(snapshot.sun_altitude),
            "dark_enough": snapshot.sun_altitude < NAUTICAL_TWILIGHT_DEG,
            "alert": should_alert(
                snapshot.kp_index,
                min_kp,
                snapshot.cloud_cover,
                snapshot.is_dark,
            ),
        }
