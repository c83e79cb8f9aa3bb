from dataclasses import dataclass, field
import datetime
from typing import Any, Optional, Sequence


@dataclass(frozen=True)
class ConditionsSnapshot:
    cloud_cover: float | None = None
    humidity: float | None = None
    wind_speed: float | None = None
    visibility: float | None = None
    kp_index: float | None = None
    sun_altitude: float | None = None
    moon_phase: float | None = None
    latitude: float | None = None
    is_dark: bool | None = None
    temperature: float | None = None
    feels_like: float | None = None
    precip_probability: float | None = None
    uv_index: float | None = None
    weather_condition: str | None = None


@dataclass(frozen=True)
class ValidatedSnapshot:
    cloud_cover: float
    humidity: float
    wind_speed: float
    visibility: float
    kp_index: float
    sun_altitude: float
    moon_phase: float
    latitude: float
    is_dark: bool
    temperature: float
    feels_like: float
    precip_probability: float
    uv_index: float
    weather_condition: str
    substituted: tuple[str, ...] = ()


@dataclass(frozen=True)
class FactorResult:
    name: str
    value: float
    sub_score: int
    weight: int
    points: float


@dataclass(frozen=True)
class ScoreResult:
    variant: str
    score: int
    rating: str
    factors: Sequence[FactorResult]
    reasons: Sequence[str]
    recommendation: Optional[str] = None
    details: dict[str, Any] = field(default_factory=dict)

    def factor(self, name: str) -> FactorResult:
        for item in self.factors:
            if item.name == name:
                return item
        raise KeyError(name)


@dataclass(frozen=True)
class HourSample:
    timestamp: datetime.datetime
    conditions: ConditionsSnapshot


@dataclass(frozen=True)
class Window:
    start: datetime.datetime
    end: datetime.datetime
    duration_minutes: int
    peak_score: int
    avg_score: int
    peak_time: datetime.datetime
    max_kp: float | None = None
    avg_cloud_cover: float | None = None
    avg_temperature: float | None = None


@dataclass(frozen=True)
class ClearSkyResult:
    found: bool
    window: Window | None
    clearest_hour: HourSample | None
    message: str


@dataclass(frozen=True)
class MoonPhaseInfo:
    phase: float
    name: str
    illumination_percent: int
