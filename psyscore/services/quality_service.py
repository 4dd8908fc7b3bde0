"""
PsyScore — Response Quality Analyzer

Runs on the raw response list, independently of the trait scores, and
produces consistency / authenticity / confidence signals plus advisory
flags.  Nothing here rejects a session: anomalies only lower the quality
multipliers and add a flag.

Detection rules
---------------
- **Straight-lining**: longest run of identical consecutive raw scores > 5
  -> consistency × 0.8.
- **Extreme responding**: > 70 % of answers at 1 or 5 -> authenticity × 0.85.
- **Midpoint responding**: > 50 % of answers at 3 -> authenticity × 0.85.
- **Rushed responses**: > 30 % of answers below the rush threshold
  ``max(1500, 0.3 × mean)`` -> authenticity × 0.75.
- **Uniform timing**: response-time SD < 1000 ms -> consistency × 0.9.
- **Rushed completion**: mean response time < 2000 ms -> authenticity × 0.8.
"""

from __future__ import annotations

import statistics
from collections.abc import Sequence
from typing import Any, Optional

import structlog

from psyscore.schemas.responses import DEFAULT_RESPONSE_TIME_MS, RawResponse
from psyscore.schemas.results import QualityAssessment, TimingAnalysis
from psyscore.services.trait_aggregator import round_half_up

logger = structlog.get_logger("psyscore.quality_service")


class ResponseQualityAnalyzer:
    """Compute a ``QualityAssessment`` from raw responses."""

    STRAIGHT_LINE_RUN: int = 5
    EXTREME_RATE: float = 0.7
    MIDPOINT_RATE: float = 0.5
    RUSHED_FRACTION: float = 0.3
    UNIFORM_TIMING_SD_MS: float = 1000.0
    RUSHED_MEAN_MS: float = 2000.0

    MIN_RUSH_THRESHOLD_MS: float = 1500.0
    RUSH_FRACTION_OF_MEAN: float = 0.3

    FAST_STYLE_MEAN_MS: float = 2500.0
    DELIBERATE_MEAN_MS: float = 8000.0
    HIGH_VARIABILITY_SD_MS: float = 5000.0

    def analyze(self, responses: Sequence[RawResponse]) -> QualityAssessment:
        consistency = 1.0
        authenticity = 1.0
        patterns: list[str] = []

        run = self.longest_identical_run(responses)
        extreme_rate = self.extreme_response_rate(responses)
        midpoint_rate = self.midpoint_rate(responses)
        timing = self.analyze_timing(responses)

        if run > self.STRAIGHT_LINE_RUN:
            consistency *= 0.8
            patterns.append("straight_lining")

        if extreme_rate > self.EXTREME_RATE:
            authenticity *= 0.85
            patterns.append("extreme_responding")

        if midpoint_rate > self.MIDPOINT_RATE:
            authenticity *= 0.85
            patterns.append("midpoint_responding")

        # Timing penalties need at least one observed response time
        if timing.total_responses > 0:
            if timing.rushed_fraction > self.RUSHED_FRACTION:
                authenticity *= 0.75
                patterns.append("rushed_responses")

            if timing.variance_ms < self.UNIFORM_TIMING_SD_MS:
                consistency *= 0.9
                patterns.append("uniform_timing")

            if timing.average_ms < self.RUSHED_MEAN_MS:
                authenticity *= 0.8
                patterns.append("rushed_completion")

        confidence = (consistency + authenticity) / 2

        if patterns:
            logger.info("quality_flags_raised", flags=patterns, confidence=round(confidence, 4))

        return QualityAssessment(
            consistency=round(consistency, 4),
            authenticity=round(authenticity, 4),
            confidence=round(confidence, 4),
            patterns=patterns,
            timing=timing,
            details={
                "longest_identical_run": run,
                "extreme_rate": round(extreme_rate, 4),
                "midpoint_rate": round(midpoint_rate, 4),
            },
        )

    # ── Individual signals ────────────────────────────────────────────────

    @staticmethod
    def longest_identical_run(responses: Sequence[RawResponse]) -> int:
        """Length of the longest run of identical consecutive raw scores."""
        if not responses:
            return 0
        longest = current = 1
        for previous, item in zip(responses, responses[1:]):
            if item.raw_score == previous.raw_score:
                current += 1
                longest = max(longest, current)
            else:
                current = 1
        return longest

    @staticmethod
    def extreme_response_rate(responses: Sequence[RawResponse]) -> float:
        if not responses:
            return 0.0
        extreme = sum(1 for r in responses if r.raw_score in (1, 5))
        return extreme / len(responses)

    @staticmethod
    def midpoint_rate(responses: Sequence[RawResponse]) -> float:
        if not responses:
            return 0.0
        return sum(1 for r in responses if r.raw_score == 3) / len(responses)

    def analyze_timing(self, responses: Sequence[RawResponse]) -> TimingAnalysis:
        times = [r.response_time_ms for r in responses if r.response_time_ms > 0]
        if not times:
            return TimingAnalysis(
                average_ms=int(DEFAULT_RESPONSE_TIME_MS),
                rush_threshold_ms=int(self.MIN_RUSH_THRESHOLD_MS),
                rushed_fraction=0.0,
                variance_ms=0.0,
            )

        average = statistics.mean(times)
        rush_threshold = max(self.MIN_RUSH_THRESHOLD_MS, average * self.RUSH_FRACTION_OF_MEAN)
        rushed_fraction = sum(1 for t in times if t < rush_threshold) / len(times)
        spread = statistics.pstdev(times)

        return TimingAnalysis(
            average_ms=round_half_up(average),
            rush_threshold_ms=round_half_up(rush_threshold),
            rushed_fraction=round(rushed_fraction, 4),
            variance_ms=round(spread, 2),
            total_responses=len(times),
            fastest_ms=min(times),
            slowest_ms=max(times),
            patterns=self._timing_patterns(average, spread),
        )

    def _timing_patterns(self, average: float, spread: float) -> list[str]:
        patterns: list[str] = []
        if average < self.FAST_STYLE_MEAN_MS:
            patterns.append("fast_completion_style")
        elif average > self.DELIBERATE_MEAN_MS:
            patterns.append("deliberate_responding")
        if spread > self.HIGH_VARIABILITY_SD_MS:
            patterns.append("highly_variable_timing")
        return patterns


def summarize_quality(assessment: Optional[QualityAssessment]) -> dict[str, Any]:
    """Compact view used in log events and the CLI summary."""
    if assessment is None:
        return {}
    return {
        "confidence": assessment.confidence,
        "flags": list(assessment.patterns),
        "average_ms": assessment.timing.average_ms,
    }
