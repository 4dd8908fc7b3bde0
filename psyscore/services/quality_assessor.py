"""
PsyScore — Response Quality Assessor

A second, more detailed opinion on response quality than the built-in
``ResponseQualityAnalyzer``.  It is an optional collaborator: the engine only
runs it when one is injected.

Five weighted metrics feed an overall score:

    ┌───────────────┬────────┐
    │ response_time │  0.20  │
    │ consistency   │  0.30  │
    │ patterns      │  0.20  │
    │ completeness  │  0.15  │
    │ engagement    │  0.15  │
    └───────────────┴────────┘

Suspicious patterns (speed running, random clicking, social desirability)
then discount reliability and can mark the session invalid.
"""

from __future__ import annotations

import math
import statistics
from collections import Counter
from collections.abc import Sequence
from typing import Optional

import structlog

from psyscore.schemas.responses import RawResponse
from psyscore.schemas.results import QualityReview, QualityWarning, SuspiciousPattern

logger = structlog.get_logger("psyscore.quality_assessor")


class ResponseQualityAssessor:
    METRIC_WEIGHTS: dict[str, float] = {
        "response_time": 0.20,
        "consistency": 0.30,
        "patterns": 0.20,
        "completeness": 0.15,
        "engagement": 0.15,
    }

    OPTIMAL_MIN_MS: float = 2000.0
    SPEED_RUNNING_MS: float = 1500.0
    RANDOM_ENTROPY_BITS: float = 2.2

    # ══════════════════════════════════════════════════════════════════════
    # Entry point
    # ══════════════════════════════════════════════════════════════════════

    def review(self, responses: Sequence[RawResponse]) -> Optional[QualityReview]:
        if not responses:
            logger.info("quality_review_skipped", reason="no_responses")
            return None

        answers = [r.likert_score for r in responses]
        times = [r.response_time_ms for r in responses]

        pattern_score, response_patterns = self.response_pattern_score(answers)
        metrics = {
            "response_time": self.timing_score(times),
            "consistency": self.consistency_score(responses),
            "patterns": pattern_score,
            "completeness": self.completeness_score(responses),
            "engagement": self.engagement_score(answers, times),
        }
        overall = self.overall_score(metrics)
        suspicious = self.suspicious_patterns(responses, answers, times)
        warnings = self._warnings(overall, suspicious, metrics)
        reliability = self.reliability(overall, suspicious, metrics["engagement"])
        valid = self.is_valid(overall, suspicious, warnings)

        if not valid:
            logger.warning(
                "responses_invalid",
                overall=round(overall, 4),
                patterns=[p.type for p in suspicious],
            )

        return QualityReview(
            overall_score=round(overall, 4),
            metric_scores={name: round(score, 4) for name, score in metrics.items()},
            response_patterns=response_patterns,
            suspicious_patterns=suspicious,
            warnings=warnings,
            recommendations=self._recommendations(response_patterns, metrics),
            reliability=round(reliability, 4),
            valid=valid,
        )

    # ══════════════════════════════════════════════════════════════════════
    # Metrics
    # ══════════════════════════════════════════════════════════════════════

    @staticmethod
    def timing_score(times: Sequence[float]) -> float:
        average = statistics.mean(times)
        if average < 1000:
            score = 0.3
        elif average < 2000:
            score = 0.7
        elif average > 20000:
            score = 0.8
        else:
            score = 1.0

        # Near-identical timings suggest automation
        if statistics.pstdev(times) < 500:
            score *= 0.8
        return score

    def consistency_score(self, responses: Sequence[RawResponse]) -> float:
        by_trait: dict[str, list[int]] = {}
        for response in responses:
            if response.trait is not None:
                by_trait.setdefault(response.trait, []).append(response.likert_score)

        score = 1.0
        for scores in by_trait.values():
            if statistics.pstdev(scores) > 1.5:
                score *= 0.9
            if 1 in scores and 5 in scores:
                score *= 0.85
        return score * self.cross_trait_score(by_trait)

    @staticmethod
    def cross_trait_score(by_trait: dict[str, list[int]]) -> float:
        """Penalise trait averages that contradict well-known correlations."""
        score = 1.0
        expectations = (
            ("extraversion", "agreeableness", "positive"),
            ("conscientiousness", "neuroticism", "negative"),
            ("openness", "extraversion", "slight_positive"),
        )
        for first, second, direction in expectations:
            if not by_trait.get(first) or not by_trait.get(second):
                continue
            avg_first = statistics.mean(by_trait[first])
            avg_second = statistics.mean(by_trait[second])
            if direction == "positive" and avg_first > 3.5 and avg_second < 2.5:
                score *= 0.9
            elif direction == "negative" and avg_first > 3.5 and avg_second > 3.5:
                score *= 0.9
        return score

    @staticmethod
    def response_pattern_score(answers: Sequence[int]) -> tuple[float, list[str]]:
        score = 1.0
        detected: list[str] = []
        total = len(answers)

        if 1 - len(set(answers)) / total > 0.8:
            detected.append("straight_lining")
            score *= 0.5

        if total > 1:
            swings = sum(1 for a, b in zip(answers, answers[1:]) if abs(b - a) >= 3)
            if swings / (total - 1) > 0.8:
                detected.append("zigzagging")
                score *= 0.7

        if sum(1 for a in answers if a == 3) / total > 0.6:
            detected.append("middle_bias")
            score *= 0.85

        if sum(1 for a in answers if a >= 4) / total > 0.8:
            detected.append("acquiescence_bias")
            score *= 0.8

        return score, detected

    @staticmethod
    def completeness_score(responses: Sequence[RawResponse]) -> float:
        answered = sum(1 for r in responses if r.raw_score is not None)
        return answered / len(responses)

    @staticmethod
    def engagement_score(answers: Sequence[int], times: Sequence[float]) -> float:
        score = 1.0
        if statistics.pstdev(times) > 3000:
            score *= 1.1
        counts = Counter(answers).values()
        if max(counts) - min(counts) < len(answers) * 0.3:
            score *= 1.05
        return min(1.0, score)

    def overall_score(self, metrics: dict[str, float]) -> float:
        weighted = sum(metrics[name] * weight for name, weight in self.METRIC_WEIGHTS.items())
        return weighted / sum(self.METRIC_WEIGHTS.values())

    # ══════════════════════════════════════════════════════════════════════
    # Suspicious patterns, reliability and validity
    # ══════════════════════════════════════════════════════════════════════

    def suspicious_patterns(
        self,
        responses: Sequence[RawResponse],
        answers: Sequence[int],
        times: Sequence[float],
    ) -> list[SuspiciousPattern]:
        patterns: list[SuspiciousPattern] = []

        if statistics.mean(times) < self.SPEED_RUNNING_MS:
            patterns.append(SuspiciousPattern(
                type="speed_running",
                confidence=0.9,
                impact="high",
                description="Responses completed too quickly for thoughtful consideration",
            ))

        if self.entropy(answers) > self.RANDOM_ENTROPY_BITS:
            patterns.append(SuspiciousPattern(
                type="random_clicking",
                confidence=0.7,
                impact="high",
                description="Response pattern appears random",
            ))

        bias_confidence = self.social_desirability_confidence(responses)
        if bias_confidence > 0:
            patterns.append(SuspiciousPattern(
                type="social_desirability",
                confidence=bias_confidence,
                impact="medium",
                description="Responses show social desirability bias",
            ))

        return patterns

    @staticmethod
    def social_desirability_confidence(responses: Sequence[RawResponse]) -> float:
        def trait_mean(trait: str) -> Optional[float]:
            scores = [r.likert_score for r in responses if r.trait == trait]
            return statistics.mean(scores) if scores else None

        confidence = 0.0
        agreeableness = trait_mean("agreeableness")
        conscientiousness = trait_mean("conscientiousness")
        if (
            agreeableness is not None
            and conscientiousness is not None
            and agreeableness > 4.3
            and conscientiousness > 4.3
        ):
            confidence = 0.8

        neuroticism = trait_mean("neuroticism")
        if neuroticism is not None and neuroticism < 1.7:
            confidence = max(confidence, 0.7)
        return confidence

    @staticmethod
    def entropy(values: Sequence[int]) -> float:
        """Shannon entropy of the answer distribution, in bits."""
        total = len(values)
        return -sum(
            (count / total) * math.log2(count / total) for count in Counter(values).values()
        )

    @staticmethod
    def reliability(
        overall: float, suspicious: Sequence[SuspiciousPattern], engagement: float
    ) -> float:
        reliability = overall
        for pattern in suspicious:
            if pattern.impact == "high":
                reliability *= 0.7
            elif pattern.impact == "medium":
                reliability *= 0.85
        if engagement > 0.9:
            reliability *= 1.1
        return min(1.0, max(0.3, reliability))

    @staticmethod
    def is_valid(
        overall: float,
        suspicious: Sequence[SuspiciousPattern],
        warnings: Sequence[QualityWarning],
    ) -> bool:
        if overall < 0.4:
            return False
        if any(p.impact == "high" and p.confidence > 0.8 for p in suspicious):
            return False
        return sum(1 for w in warnings if w.level == "high") <= 2

    # ── Feedback ─────────────────────────────────────────────────────────

    @staticmethod
    def _warnings(
        overall: float, suspicious: Sequence[SuspiciousPattern], metrics: dict[str, float]
    ) -> list[QualityWarning]:
        warnings: list[QualityWarning] = []
        if overall < 0.6:
            warnings.append(QualityWarning(
                level="high",
                message="Response quality is below acceptable threshold",
                recommendation="Consider retaking the assessment with more thoughtful responses",
            ))
        for pattern in suspicious:
            if pattern.impact == "high":
                warnings.append(QualityWarning(
                    level="high",
                    message=f"Detected {pattern.type}: {pattern.description}",
                    recommendation="This may significantly affect result accuracy",
                ))
        if metrics["response_time"] < 0.5:
            warnings.append(QualityWarning(
                level="medium",
                message="Response timing suggests rushed or automated answers",
                recommendation="Take more time to consider each question",
            ))
        return warnings

    @staticmethod
    def _recommendations(response_patterns: Sequence[str], metrics: dict[str, float]) -> list[str]:
        recommendations: list[str] = []
        if "middle_bias" in response_patterns:
            recommendations.append("Try to avoid defaulting to neutral responses")
        if metrics["consistency"] < 0.8:
            recommendations.append("Try to answer similar questions in a consistent manner")
        if metrics["engagement"] < 0.7:
            recommendations.append("Consider being more engaged with the assessment")
        return recommendations
