"""Viewing-window detection over ordered hourly samples.

Each finder makes one left-to-right pass, growing an open run while the
hour qualifies and closing it when the predicate fails or the input ends.
A run is kept only if it spans at least the configured minimum duration,
counting 60 minutes per hourly sample.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, replace
import logging
from typing import Any, Callable

from skyscore.config import Config
from skyscore.errors import ContractError
from skyscore.util.format import format_clock, format_duration, format_percent

from .engine import aggregate
from .factors import round_half_up
from .snapshot import as_flag, as_number, coerce_hour, with_defaults
from .types import ClearSkyResult, HourSample, ScoreResult, Window
from .variants import AuroraVariant, SkyVariant, get_variant

logger = logging.getLogger(__name__)

HOUR_MINUTES = 60
DEFAULT_AURORA_KP = 3.0
# The caller restricts aurora hours to the night; an hour without a sun
# altitude is treated as astronomically dark unless flagged as daylight.
NIGHT_SUN_ALTITUDE_DEG = -20.0
DAYLIGHT_SUN_ALTITUDE_DEG = 0.0


@dataclass(frozen=True)
class WindowConfig:
    threshold: float
    min_duration_min: float
    max_windows: int = 1

    @classmethod
    def default(cls, variant: str) -> "WindowConfig":
        try:
            return DEFAULT_WINDOW_CONFIGS[variant]
        except KeyError:
            return DEFAULT_WINDOW_CONFIGS["outdoor"]

    @classmethod
    def from_config(cls, config: Config, variant: str) -> "WindowConfig":
        if variant == "sky":
            return cls(
                threshold=float(config.sky_cloud_threshold),
                min_duration_min=float(config.sky_min_duration_min),
                max_windows=1,
            )
        if variant == "aurora":
            return cls(
                threshold=float(config.aurora_min_score),
                min_duration_min=float(config.aurora_min_duration_min),
                max_windows=int(config.aurora_max_windows),
            )
        return cls(
            threshold=float(config.outdoor_min_score),
            min_duration_min=float(config.outdoor_min_duration_min),
            max_windows=int(config.outdoor_max_windows),
        )


DEFAULT_WINDOW_CONFIGS = {
    "sky": WindowConfig(threshold=30.0, min_duration_min=120.0, max_windows=1),
    "aurora": WindowConfig(threshold=60.0, min_duration_min=30.0, max_windows=3),
    "outdoor": WindowConfig(threshold=65.0, min_duration_min=60.0, max_windows=3),
}


@dataclass
class _HourScore:
    hour: HourSample
    result: ScoreResult
    value: float
    dark: bool = True


_CONFIG_FIELDS = {"threshold": float, "min_duration_min": float, "max_windows": int}


def _resolve_config(variant: str, config: Any) -> WindowConfig:
    if config is None:
        return WindowConfig.default(variant)
    if isinstance(config, WindowConfig):
        return config
    if isinstance(config, Config):
        return WindowConfig.from_config(config, variant)
    if isinstance(config, Mapping):
        known = {}
        for key, convert in _CONFIG_FIELDS.items():
            if config.get(key) is None:
                continue
            try:
                known[key] = convert(config[key])
            except (TypeError, ValueError) as exc:
                raise ContractError(f"Invalid window {key}: {config[key]!r}") from exc
        return replace(WindowConfig.default(variant), **known)
    raise ContractError(f"config must be a WindowConfig or mapping, got {type(config).__name__}")


def _coerce_hours(hours: Any) -> list[HourSample]:
    if hours is None:
        return []
    if isinstance(hours, (str, bytes)) or not isinstance(hours, Sequence):
        raise ContractError(f"hours must be a sequence of samples, got {type(hours).__name__}")
    return [coerce_hour(h) for h in hours]


def _scan_runs(
    scored: Sequence[_HourScore],
    qualifies: Callable[[_HourScore], bool],
    min_duration_min: float,
) -> list[list[_HourScore]]:
    runs: list[list[_HourScore]] = []
    current: list[_HourScore] = []

    def close() -> None:
        if not current:
            return
        if len(current) * HOUR_MINUTES >= min_duration_min:
            runs.append(list(current))
        else:
            logger.debug(
                "Dropping %d-hour run starting %s: shorter than %s min",
                len(current),
                current[0].hour.timestamp,
                min_duration_min,
            )
        current.clear()

    for item in scored:
        if qualifies(item):
            current.append(item)
        else:
            close()
    close()
    return runs


def _summarize(run: Sequence[_HourScore], **extra) -> Window:
    scores = [item.result.score for item in run]
    peak = max(scores)
    peak_item = run[scores.index(peak)]
    return Window(
        start=run[0].hour.timestamp,
        end=run[-1].hour.timestamp,
        duration_minutes=len(run) * HOUR_MINUTES,
        peak_score=peak,
        avg_score=round_half_up(sum(scores) / len(scores)),
        peak_time=peak_item.hour.timestamp,
        **extra,
    )


def _mean(values: Sequence[float]) -> float:
    return sum(values) / len(values)


def _top_by_peak(windows: list[Window], max_windows: int) -> list[Window]:
    # sorted() is stable, so equal peaks keep chronological order.
    ranked = sorted(windows, key=lambda w: w.peak_score, reverse=True)
    return ranked[: max(0, max_windows)]


def find_clear_sky_window(hours, config: WindowConfig | None = None) -> ClearSkyResult | None:
    """Return the clearest run of hours at or under the cloud threshold.

    Among qualifying runs the lowest average cloud cover wins, and the first
    run wins a tie. When no run qualifies the result carries ``found=False``
    and the single clearest hour instead. Empty input returns None.
    """
    cfg = _resolve_config("sky", config)
    samples = _coerce_hours(hours)
    if not samples:
        return None

    variant = SkyVariant()
    scored = []
    for hour in samples:
        snapshot = with_defaults(hour.conditions, variant.defaults)
        scored.append(_HourScore(hour, aggregate(variant, snapshot), snapshot.cloud_cover))

    clearest = scored[0]
    for item in scored[1:]:
        if item.value < clearest.value:
            clearest = item

    best_run = None
    best_avg = None
    for run in _scan_runs(scored, lambda item: item.value <= cfg.threshold, cfg.min_duration_min):
        avg = _mean([item.value for item in run])
        if best_avg is None or avg < best_avg:
            best_run, best_avg = run, avg

    if best_run is None:
        logger.debug("No clear-sky window in %d hours", len(samples))
        message = (
            f"No {format_duration(cfg.min_duration_min)} stretch with cloud at or below "
            f"{format_percent(cfg.threshold)}. Clearest hour is {format_clock(clearest.hour.timestamp)} "
            f"with {format_percent(clearest.value)} cloud."
        )
        return ClearSkyResult(found=False, window=None, clearest_hour=clearest.hour, message=message)

    window = _summarize(best_run, avg_cloud_cover=round(best_avg, 1))
    message = (
        f"Clear skies from {format_clock(window.start)} to {format_clock(window.end)} "
        f"({format_duration(window.duration_minutes)}, avg {format_percent(best_avg)} cloud)."
    )
    return ClearSkyResult(found=True, window=window, clearest_hour=clearest.hour, message=message)


def _kp_for_hour(index: int, kp_forecast: Sequence[float] | None, kp: float | None) -> float:
    if kp_forecast:
        if index < len(kp_forecast):
            number = as_number(kp_forecast[index])
            if number is not None:
                return number
        number = as_number(kp_forecast[-1])
        if number is not None:
            return number
    number = as_number(kp)
    return DEFAULT_AURORA_KP if number is None else number


def find_aurora_windows(
    hours,
    config: WindowConfig | None = None,
    latitude: float | None = None,
    kp_forecast: Sequence[float] | None = None,
    kp: float | None = None,
) -> list[Window]:
    cfg = _resolve_config("aurora", config)
    samples = _coerce_hours(hours)
    variant = AuroraVariant()

    scored = []
    for index, hour in enumerate(samples):
        conditions = hour.conditions
        fill: dict[str, Any] = {}
        if as_number(conditions.kp_index) is None:
            fill["kp_index"] = _kp_for_hour(index, kp_forecast, kp)
        if as_number(conditions.latitude) is None and latitude is not None:
            fill["latitude"] = latitude
        if as_number(conditions.sun_altitude) is None:
            # An explicit daylight flag outranks the night assumption.
            daylight = as_flag(conditions.is_dark) is False
            fill["sun_altitude"] = DAYLIGHT_SUN_ALTITUDE_DEG if daylight else NIGHT_SUN_ALTITUDE_DEG
        snapshot = with_defaults(replace(conditions, **fill), variant.defaults)
        scored.append(_HourScore(hour, aggregate(variant, snapshot), snapshot.kp_index, snapshot.is_dark))

    def qualifies(item: _HourScore) -> bool:
        dark = item.dark and bool(item.result.details["dark_enough"])
        return dark and item.result.score >= cfg.threshold

    windows = [
        _summarize(run, max_kp=max(item.value for item in run))
        for run in _scan_runs(scored, qualifies, cfg.min_duration_min)
    ]
    logger.debug("Found %d aurora windows in %d hours", len(windows), len(samples))
    return _top_by_peak(windows, cfg.max_windows)


def find_score_windows(
    hours,
    variant: str = "outdoor",
    config: WindowConfig | None = None,
    **options,
) -> list[Window]:
    """Runs of hours whose composite score meets the threshold, best peak first."""
    scorer = get_variant(variant, **options)
    cfg = _resolve_config(scorer.name, config)
    samples = _coerce_hours(hours)

    scored = []
    for hour in samples:
        snapshot = with_defaults(hour.conditions, scorer.defaults)
        scored.append(_HourScore(hour, aggregate(scorer, snapshot), snapshot.temperature))

    windows = [
        _summarize(run, avg_temperature=float(round_half_up(_mean([item.value for item in run]))))
        for run in _scan_runs(scored, lambda item: item.result.score >= cfg.threshold, cfg.min_duration_min)
    ]
    logger.debug("Found %d %s windows in %d hours", len(windows), scorer.name, len(samples))
    return _top_by_peak(windows, cfg.max_windows)


def find_window(variant: str, hours, config=None, **options):
    """Dispatch to the window finder for ``variant``.

    ``sky`` returns a single ``ClearSkyResult`` (or None for empty input);
    the other variants return a list of windows ranked by peak score.
    """
    name = variant.strip().lower() if isinstance(variant, str) else variant
    if name == "sky":
        if options:
            raise ContractError(f"sky windows take no options, got: {', '.join(sorted(options))}")
        return find_clear_sky_window(hours, config)
    if name == "aurora":
        return find_aurora_windows(hours, config, **options)
    return find_score_windows(hours, name, config, **options)
