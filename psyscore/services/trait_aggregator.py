"""
PsyScore — Trait Aggregator

Combines weighted items into five 0-100 trait scores::

    mean  = Σ(adjusted × weight) / Σ(weight)
    score = round((mean - 1) × 25 × 0.95 + 2.5)

The 0.95 factor compresses extreme averages slightly toward the centre of
the scale; stored scores depend on it, so it must not change.
"""

from __future__ import annotations

import math

import structlog

from psyscore.schemas.responses import BIG_FIVE_TRAITS, WeightedItem
from psyscore.schemas.results import TraitScore, TraitScoreSet

logger = structlog.get_logger("psyscore.trait_aggregator")


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positives (``round`` uses banker's rounding)."""
    return math.floor(value + 0.5)


def clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(upper, value))


class TraitAggregator:
    """Aggregate weighted Big-Five items into a ``TraitScoreSet``."""

    DEFAULT_SCORE: int = 50
    SCALE_SPAN: float = 25.0
    COMPRESSION: float = 0.95
    OFFSET: float = 2.5

    LOW_LEVEL_BELOW: int = 33
    HIGH_LEVEL_FROM: int = 67

    def aggregate(self, buckets: dict[str, list[WeightedItem]]) -> TraitScoreSet:
        traits: dict[str, TraitScore] = {}
        for trait in BIG_FIVE_TRAITS:
            items = buckets.get(trait, [])
            if not items:
                logger.warning("trait_defaulted", trait=trait, score=self.DEFAULT_SCORE)
                traits[trait] = self._trait_score(trait, self.DEFAULT_SCORE, 0, defaulted=True)
                continue

            score = self.score_items(items)
            logger.debug("trait_scored", trait=trait, items=len(items), score=score)
            traits[trait] = self._trait_score(trait, score, len(items))
        return TraitScoreSet(traits=traits)

    def default_set(self) -> TraitScoreSet:
        """All five traits at the default score (empty or unusable input)."""
        return TraitScoreSet(
            traits={
                trait: self._trait_score(trait, self.DEFAULT_SCORE, 0, defaulted=True)
                for trait in BIG_FIVE_TRAITS
            }
        )

    def score_items(self, items: list[WeightedItem]) -> int:
        weighted_sum = sum(item.adjusted_score * item.combined_weight for item in items)
        total_weight = sum(item.combined_weight for item in items)
        if total_weight <= 0:
            return self.DEFAULT_SCORE
        mean = weighted_sum / total_weight
        raw = (mean - 1) * self.SCALE_SPAN * self.COMPRESSION + self.OFFSET
        return int(clamp(round_half_up(raw), 0, 100))

    @classmethod
    def level(cls, score: float) -> str:
        if score < cls.LOW_LEVEL_BELOW:
            return "low"
        if score < cls.HIGH_LEVEL_FROM:
            return "medium"
        return "high"

    def _trait_score(
        self, trait: str, score: int, item_count: int, defaulted: bool = False
    ) -> TraitScore:
        return TraitScore(
            trait=trait,
            score=score,
            item_count=item_count,
            level=self.level(score),
            defaulted=defaulted,
        )
