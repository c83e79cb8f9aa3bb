import datetime
import json
from dataclasses import asdict, is_dataclass

from skyscore.util.format import (
    format_clock,
    format_duration,
    format_number,
    format_percent,
)
from .types import ClearSkyResult, MoonPhaseInfo, ScoreResult, Window


def to_data(result):
    if result is None:
        return None
    if isinstance(result, (list, tuple)):
        return [to_data(item) for item in result]
    if is_dataclass(result):
        return asdict(result)
    return result


def format_json(result) -> str:
    return json.dumps(to_data(result), indent=2, default=str)


def format_score_text(result: ScoreResult, verbose: bool = False) -> str:
    title = f"{result.variant.capitalize()} score"
    lines = [title, "=" * len(title)]
    lines.append(f"Score: {result.score}/100 ({result.rating})")
    if result.recommendation:
        lines.append(result.recommendation)
    if result.reasons:
        lines.append("")
        for reason in result.reasons:
            lines.append(f"- {reason}")
    if verbose:
        lines.append("")
        name_w = max(len(f.name) for f in result.factors)
        for f in result.factors:
            lines.append(
                f"{f.name:<{name_w}}  value {format_number(f.value):>7}  "
                f"sub {f.sub_score:>3}  weight {f.weight:>2}  points {format_number(f.points):>5}"
            )
    return "\n".join(lines)


def format_window_text(window: Window, tz: datetime.tzinfo | None = None) -> str:
    text = (
        f"{format_clock(window.start, tz)} → {format_clock(window.end, tz)} "
        f"({format_duration(window.duration_minutes)}), "
        f"peak {window.peak_score} at {format_clock(window.peak_time, tz)}, avg {window.avg_score}"
    )
    extras = []
    if window.max_kp is not None:
        extras.append(f"max Kp {format_number(window.max_kp)}")
    if window.avg_cloud_cover is not None:
        extras.append(f"avg cloud {format_percent(window.avg_cloud_cover)}")
    if window.avg_temperature is not None:
        extras.append(f"avg {format_number(window.avg_temperature, precision=0)}°C")
    if extras:
        text += ", " + ", ".join(extras)
    return text


def format_windows_text(result, tz: datetime.tzinfo | None = None) -> str:
    if result is None:
        return "No hourly data."
    if isinstance(result, ClearSkyResult):
        if result.window is None:
            return result.message
        return "\n".join([result.message, format_window_text(result.window, tz)])
    if not result:
        return "No qualifying windows."
    return "\n".join(
        f"{idx:>2}. {format_window_text(window, tz)}" for idx, window in enumerate(result, start=1)
    )


def format_moon_text(info: MoonPhaseInfo) -> str:
    return f"{info.name}, {info.illumination_percent}% illuminated (phase {format_number(info.phase, precision=2)})"
