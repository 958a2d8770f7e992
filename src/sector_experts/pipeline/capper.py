"""
Completeness-based score capping.

An expert that saw little deal data must not hand out a high score. The
completeness tier comes from the model's explicit judgment when it gave a
valid one, otherwise from the share of key metrics that carry a value:

    ratio < 0.3  -> minimal  (score ceiling 50)
    ratio < 0.7  -> partial  (score ceiling 70)
    otherwise    -> complete (score ceiling 100)

An empty metric list means the model skipped the metrics section entirely,
which is treated as partial rather than minimal.

Every expert variant caps through apply_score_cap(), so the rule cannot drift
between experts.
"""

import math
from dataclasses import dataclass
from typing import Any, Iterable, Literal

from ..models import CompletenessTier, DataCompleteness, NormalizedResult

TIER_CEILINGS: dict[CompletenessTier, int] = {
    CompletenessTier.COMPLETE: 100,
    CompletenessTier.PARTIAL: 70,
    CompletenessTier.MINIMAL: 50,
}

MINIMAL_RATIO = 0.3
PARTIAL_RATIO = 0.7

AssessmentSource = Literal['explicit', 'computed', 'no_metrics']


@dataclass(frozen=True)
class CompletenessAssessment:
    """How complete the deal data was, and where that judgment came from."""

    tier: CompletenessTier
    available: int
    total: int
    source: AssessmentSource

    @property
    def ratio(self) -> float | None:
        if self.total == 0:
            return None
        return self.available / self.total

    @property
    def max_score(self) -> int:
        return TIER_CEILINGS[self.tier]


@dataclass(frozen=True)
class ScoreCap:
    raw_score: int
    capped_score: int
    tier: CompletenessTier

    @property
    def capped(self) -> bool:
        return self.capped_score < self.raw_score

    @property
    def note(self) -> str | None:
        if not self.capped:
            return None
        return (
            f'Score capped from {self.raw_score} to {self.capped_score} '
            f'due to {self.tier.value} data completeness'
        )


def parse_tier(level: Any) -> CompletenessTier | None:
    """Parse a completeness level, None if absent or not a known tier."""
    if isinstance(level, CompletenessTier):
        return level
    if not isinstance(level, str):
        return None
    try:
        return CompletenessTier(level.strip().lower())
    except ValueError:
        return None


def _parse_number(text: str) -> int | float | None:
    for parse in (int, float):
        try:
            return parse(text)
        except ValueError:
            continue
    return None


def coerce_score(value: Any, default: int = 0) -> int:
    """
    Coerce a model-provided score into an int in [0, 100].

    Non-numeric values (including booleans, NaN and infinity) become default.
    Integers of any size are clamped without a float conversion.
    """
    if isinstance(value, str):
        value = _parse_number(value.strip())
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    if isinstance(value, int):
        return max(0, min(100, value))
    if not math.isfinite(value):
        return default
    return max(0, min(100, int(round(value))))


def assess_completeness(
    metric_values: Iterable[Any],
    explicit_level: Any = None,
) -> CompletenessAssessment:
    """
    Decide the completeness tier for one analysis.

    Args:
        metric_values: The deal value of every key metric the model reported,
            None where the value was not available
        explicit_level: The model's own completeness level, if it gave one

    Returns:
        CompletenessAssessment with tier and counts
    """
    values = list(metric_values)
    total = len(values)
    available = sum(1 for v in values if v is not None)

    tier = parse_tier(explicit_level)
    if tier is not None:
        return CompletenessAssessment(tier=tier, available=available, total=total, source='explicit')

    if total == 0:
        return CompletenessAssessment(
            tier=CompletenessTier.PARTIAL, available=0, total=0, source='no_metrics'
        )

    ratio = available / total
    if ratio < MINIMAL_RATIO:
        tier = CompletenessTier.MINIMAL
    elif ratio < PARTIAL_RATIO:
        tier = CompletenessTier.PARTIAL
    else:
        tier = CompletenessTier.COMPLETE
    return CompletenessAssessment(tier=tier, available=available, total=total, source='computed')


def cap_score(raw: Any, assessment: CompletenessAssessment) -> ScoreCap:
    """Apply the tier ceiling to a raw score. The result never exceeds raw."""
    raw_score = coerce_score(raw)
    return ScoreCap(
        raw_score=raw_score,
        capped_score=min(raw_score, assessment.max_score),
        tier=assessment.tier,
    )


def apply_score_cap(
    result: NormalizedResult,
    assessment: CompletenessAssessment,
    raw_score: Any = None,
    extra_limitations: Iterable[str] = (),
) -> NormalizedResult:
    """
    Cap a normalized result's scores and record why.

    Args:
        result: Normalized result with uncapped scores
        assessment: Completeness assessment for the same analysis
        raw_score: Score to cap, defaults to result.sector_score
        extra_limitations: Limitations reported by the model, listed before
            the cap note

    Returns:
        A new NormalizedResult with capped sector_score and sector_fit.score,
        limitations and the data_completeness annotation
    """
    score_cap = cap_score(result.sector_score if raw_score is None else raw_score, assessment)
    fit_cap = cap_score(result.sector_fit.score, assessment)

    limitations = [*result.limitations, *extra_limitations]
    if score_cap.note:
        limitations.append(score_cap.note)

    completeness = DataCompleteness(
        level=assessment.tier,
        available_data_points=assessment.available,
        expected_data_points=assessment.total,
        raw_score=score_cap.raw_score,
        capped_score=score_cap.capped_score,
        score_capped=score_cap.capped,
    )

    return result.model_copy(
        update={
            'sector_score': score_cap.capped_score,
            'sector_fit': result.sector_fit.model_copy(update={'score': fit_cap.capped_score}),
            'limitations': limitations,
            'data_completeness': completeness,
        }
    )
