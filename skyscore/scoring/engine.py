import logging
import math
from typing import Any, Mapping, Sequence

from .factors import round_half_up
from .snapshot import with_defaults
from .types import FactorResult, ScoreResult, ValidatedSnapshot
from .variants import ScoringVariant, get_variant

logger = logging.getLogger(__name__)

NEUTRAL_SCORE = 50
MAX_REASONS = 4


def weighted_total(factors: Sequence[FactorResult]) -> float:
    return sum(f.points for f in factors)


def aggregate(variant: ScoringVariant, snapshot: ValidatedSnapshot) -> ScoreResult:
    factors = tuple(variant.factors(snapshot))
    total = weighted_total(factors)
    if not math.isfinite(total):
        logger.warning("%s score total is not finite; using %d", variant.name, NEUTRAL_SCORE)
        total = float(NEUTRAL_SCORE)

    for cap in variant.caps(snapshot, factors):
        if total > cap.limit:
            logger.debug("%s score capped at %s: %s", variant.name, cap.limit, cap.reason)
            total = float(cap.limit)

    score = round_half_up(max(0.0, min(100.0, total)))
    reasons = list(variant.reasons(snapshot, factors))[:MAX_REASONS]
    return ScoreResult(
        variant=variant.name,
        score=score,
        rating=variant.rate(score, snapshot),
        factors=factors,
        reasons=reasons,
        recommendation=variant.recommendation(score, snapshot, factors),
        details=variant.details(score, snapshot, factors),
    )


def score_conditions(
    variant: str | ScoringVariant,
    conditions: Mapping[str, Any] | Any = None,
    **options,
) -> ScoreResult:
    """Score one set of conditions with the named variant.

    Missing, non-numeric or non-finite fields are replaced by the variant's
    defaults, so partial data always yields a result. Options are passed to
    the variant constructor (``activity`` and ``temp_range`` for outdoor).
    """
    scorer = get_variant(variant, **options)
    snapshot = with_defaults(conditions, scorer.defaults)
    return aggregate(scorer, snapshot)
