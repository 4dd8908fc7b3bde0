"""
PsyScore — Confidence / Reliability Engine

    analysis_confidence = min(0.95, 0.70 + 0.10·[n ≥ 30] + 0.10·[n ≥ 50])
    reliability         = 0.7 if the longest straight-line run > 8 else 1.0
                          (floored at 0.3)
    overall             = analysis_confidence × reliability × quality.confidence

Each trait gets an interval ``score ± round((1 - analysis_confidence) × 10)``
clamped to the 0-100 scale.  ``overall`` is reported alongside for callers
that want a single figure combining every signal.
"""

from __future__ import annotations

from typing import Optional

import structlog

from psyscore.schemas.results import (
    ConfidenceInterval,
    ConfidenceReport,
    QualityAssessment,
    TraitScoreSet,
)
from psyscore.services.trait_aggregator import clamp, round_half_up

logger = structlog.get_logger("psyscore.confidence_service")


class ConfidenceEngine:
    BASE_CONFIDENCE: float = 0.70
    CONFIDENCE_STEP: float = 0.10
    CONFIDENCE_STEPS_AT: tuple[int, ...] = (30, 50)
    MAX_CONFIDENCE: float = 0.95

    STRAIGHT_LINE_RUN: int = 8
    STRAIGHT_LINE_PENALTY: float = 0.7
    MIN_RELIABILITY: float = 0.3

    INTERVAL_SPAN: float = 10.0

    @classmethod
    def analysis_confidence(cls, response_count: int) -> float:
        steps = sum(1 for threshold in cls.CONFIDENCE_STEPS_AT if response_count >= threshold)
        return round(min(cls.MAX_CONFIDENCE, cls.BASE_CONFIDENCE + cls.CONFIDENCE_STEP * steps), 4)

    @classmethod
    def reliability(cls, longest_run: int) -> float:
        reliability = 1.0
        if longest_run > cls.STRAIGHT_LINE_RUN:
            reliability *= cls.STRAIGHT_LINE_PENALTY
        return max(cls.MIN_RELIABILITY, reliability)

    def interval(self, score: float, confidence: float) -> ConfidenceInterval:
        margin = round_half_up((1 - confidence) * self.INTERVAL_SPAN)
        return ConfidenceInterval(
            lower=int(clamp(score - margin, 0, 100)),
            upper=int(clamp(score + margin, 0, 100)),
            level_percent=round_half_up(confidence * 100),
        )

    def report(
        self,
        traits: TraitScoreSet,
        quality: QualityAssessment,
        response_count: int,
        instrument_coverage: Optional[dict[str, float]] = None,
    ) -> ConfidenceReport:
        analysis = self.analysis_confidence(response_count)
        run = int(quality.details.get("longest_identical_run", 0))
        reliability = self.reliability(run)
        overall = clamp(analysis * reliability * quality.confidence, 0.0, 1.0)

        if reliability < 1.0:
            logger.warning("reliability_reduced", longest_run=run, reliability=reliability)

        return ConfidenceReport(
            analysis_confidence=analysis,
            reliability=reliability,
            quality_confidence=quality.confidence,
            overall=round(overall, 4),
            intervals={
                name: self.interval(trait.score, analysis)
                for name, trait in traits.traits.items()
            },
            instrument_coverage=instrument_coverage or {},
        )
