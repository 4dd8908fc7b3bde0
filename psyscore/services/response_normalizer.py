"""
PsyScore — Response Normalizer & Item Weighting

First two stages of the scoring pipeline:
  1. Validate each raw response, coercing unparseable values to defaults
     (missing score -> scale midpoint, missing time -> 5 s, weight -> 1).
  2. Weight every Big-Five item by reverse-coding and response time, then
     bucket the weighted items by trait.

Entries that cannot be read at all, or that carry no recognised trait, are
dropped with a log event; neither stage ever raises on bad input.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

import structlog
from pydantic import ValidationError

from psyscore.schemas.responses import (
    BIG_FIVE_TRAITS,
    LIKERT_MAX,
    RawResponse,
    WeightedItem,
)

logger = structlog.get_logger("psyscore.response_normalizer")


class ResponseNormalizer:
    """Validate raw answers and turn them into per-trait weighted items."""

    # Upper bounds (ms) and weights, evaluated in order.  The final entry is
    # the weight for anything slower than the last bound.
    TIME_WEIGHT_STEPS: tuple[tuple[float, float, bool], ...] = (
        # (bound, weight, inclusive)
        (2000.0, 0.70, False),    # too quick to have read the item
        (3000.0, 0.85, False),
        (15000.0, 1.00, True),    # optimal window
        (30000.0, 0.90, True),
    )
    SLOW_RESPONSE_WEIGHT: float = 0.80

    # ══════════════════════════════════════════════════════════════════════
    # 1. normalize — validate / default
    # ══════════════════════════════════════════════════════════════════════

    def normalize(self, items: Iterable[Any] | None) -> list[RawResponse]:
        """Return validated ``RawResponse`` records in their original order.

        ``items`` may mix ``RawResponse`` instances and plain mappings.
        Anything else, or a mapping that fails validation, is skipped.
        """
        if items is None:
            logger.info("normalize_no_input")
            return []

        valid: list[RawResponse] = []
        for index, item in enumerate(items):
            if isinstance(item, RawResponse):
                valid.append(item)
                continue
            if not isinstance(item, Mapping):
                logger.warning(
                    "response_ignored",
                    index=index,
                    reason="not_a_mapping",
                    type=type(item).__name__,
                )
                continue
            try:
                valid.append(RawResponse.model_validate(dict(item)))
            except ValidationError as exc:
                logger.warning(
                    "response_ignored",
                    index=index,
                    reason="validation_failed",
                    errors=exc.error_count(),
                )
        return valid

    # ══════════════════════════════════════════════════════════════════════
    # 2. weighting
    # ══════════════════════════════════════════════════════════════════════

    @classmethod
    def time_weight(cls, response_time_ms: float) -> float:
        """Step function of response time; 3-15 s carries full weight."""
        for bound, weight, inclusive in cls.TIME_WEIGHT_STEPS:
            if response_time_ms < bound or (inclusive and response_time_ms == bound):
                return weight
        return cls.SLOW_RESPONSE_WEIGHT

    @staticmethod
    def adjusted_score(response: RawResponse) -> int:
        """Likert score with reverse-coded items inverted (6 - score)."""
        score = response.likert_score
        return (LIKERT_MAX + 1 - score) if response.reverse_coded else score

    def weight_item(self, response: RawResponse) -> WeightedItem:
        time_weight = self.time_weight(response.response_time_ms)
        return WeightedItem(
            **response.model_dump(),
            adjusted_score=self.adjusted_score(response),
            time_weight=time_weight,
            combined_weight=response.item_weight * time_weight,
        )

    def weight_by_trait(
        self, responses: Iterable[RawResponse]
    ) -> dict[str, list[WeightedItem]]:
        """Bucket weighted Big-Five items into per-trait lists."""
        buckets: dict[str, list[WeightedItem]] = {trait: [] for trait in BIG_FIVE_TRAITS}
        ignored = 0
        for response in responses:
            if not response.has_big_five_trait:
                # Clinical / auxiliary items still feed screening and quality
                logger.debug(
                    "non_big_five_item_ignored",
                    question_id=response.question_id,
                    trait=response.trait,
                    instrument=response.instrument_tag,
                )
                ignored += 1
                continue
            buckets[response.trait].append(self.weight_item(response))

        logger.info(
            "weighting_complete",
            counts={trait: len(items) for trait, items in buckets.items()},
            ignored=ignored,
        )
        return buckets
