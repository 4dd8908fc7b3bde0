"""
PsyScore — Trait Interaction Analyzer

Looks for named two-trait combinations in the score vector.  A condition
with a threshold above 50 requires the trait to be at or above it; 50 or
below requires the trait to be at or below it.  Pattern strength is how
close the profile sits to the thresholds:

    strength = max(0, 100 - mean |trait - threshold|)
"""

from __future__ import annotations

from collections.abc import Mapping

import structlog

from psyscore.schemas.results import InteractionPattern

logger = structlog.get_logger("psyscore.trait_pattern_service")


class TraitInteractionAnalyzer:
    PATTERNS: dict[str, dict] = {
        "creative_disciplined": {
            "name": "Strategic Innovator",
            "conditions": {"openness": 60, "conscientiousness": 60},
            "description": "Combines creativity with execution ability",
        },
        "social_caring": {
            "name": "People Champion",
            "conditions": {"extraversion": 60, "agreeableness": 60},
            "description": "Natural leader who genuinely cares about others",
        },
        "analytical_social": {
            "name": "Collaborative Thinker",
            "conditions": {"openness": 60, "extraversion": 60},
            "description": "Explores ideas through social interaction",
        },
        "stable_leader": {
            "name": "Steady Commander",
            "conditions": {"conscientiousness": 70, "neuroticism": 30},
            "description": "Reliable leadership under pressure",
        },
        "empathetic_introvert": {
            "name": "Quiet Supporter",
            "conditions": {"agreeableness": 70, "extraversion": 30},
            "description": "Provides deep, one-on-one support",
        },
    }

    def analyze(self, traits: Mapping[str, float]) -> list[InteractionPattern]:
        found: list[InteractionPattern] = []
        for key, pattern in self.PATTERNS.items():
            conditions: dict[str, float] = pattern["conditions"]
            if not all(self._meets(traits.get(t, 50.0), threshold) for t, threshold in conditions.items()):
                continue
            found.append(
                InteractionPattern(
                    pattern=key,
                    name=pattern["name"],
                    description=pattern["description"],
                    strength=self.strength(traits, conditions),
                )
            )

        if found:
            logger.debug("interaction_patterns_found", patterns=[p.pattern for p in found])
        return found

    @staticmethod
    def _meets(value: float, threshold: float) -> bool:
        return value >= threshold if threshold > 50 else value <= threshold

    @staticmethod
    def strength(traits: Mapping[str, float], conditions: Mapping[str, float]) -> float:
        distances = [abs(traits.get(t, 50.0) - threshold) for t, threshold in conditions.items()]
        return round(max(0.0, 100 - sum(distances) / len(distances)), 2)
