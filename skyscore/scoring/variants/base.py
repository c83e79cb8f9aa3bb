from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Sequence

from skyscore.scoring.types import FactorResult, ValidatedSnapshot


@dataclass(frozen=True)
class RatingBand:
    lower: float
    label: str
    requires: Callable[[ValidatedSnapshot], bool] | None = None


@dataclass(frozen=True)
class ScoreCap:
    limit: float
    reason: str


class ScoringVariant(ABC):
    name: str
    defaults: Mapping[str, Any] = {}
    weights: Mapping[str, int]
    bands: Sequence[RatingBand]
    floor_rating: str

    @abstractmethod
    def factors(self, snapshot: ValidatedSnapshot) -> Sequence[FactorResult]:
        raise NotImplementedError

    @abstractmethod
    def reasons(
        self,
        snapshot: ValidatedSnapshot,
        factors: Sequence[FactorResult],
    ) -> list[str]:
        raise NotImplementedError

    def caps(
        self,
        snapshot: ValidatedSnapshot,
        factors: Sequence[FactorResult],
    ) -> Sequence[ScoreCap]:
        return ()

    def rate(self, score: float, snapshot: ValidatedSnapshot) -> str:
        for band in self.bands:
            if score < band.lower:
                continue
            if band.requires is not None and not band.requires(snapshot):
                continue
            return band.label
        return self.floor_rating

    def recommendation(
        self,
        score: int,
        snapshot: ValidatedSnapshot,
        factors: Sequence[FactorResult],
    ) -> str | None:
        return None

    def details(
        self,
        score: int,
        snapshot: ValidatedSnapshot,
        factors: Sequence[FactorResult],
    ) -> dict[str, Any]:
        return {}
