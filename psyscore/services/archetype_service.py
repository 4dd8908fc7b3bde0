"""
PsyScore — Archetype Classifier

Ordered rule cascade over the five trait scores.  Rules are evaluated
top-down and the first match wins, so both the thresholds and the order are
part of the contract: a vector satisfying several predicates is classified
by the earliest one.

  1. balanced profile (range over all five traits < 25)
  2-16. combination archetypes
  17-20. dominant single trait (highest of O/C/E/A, ties in that order, ≥ 55)
  21. Unique Individual
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass

import structlog

from psyscore.archetypes import ARCHETYPES
from psyscore.schemas.responses import BIG_FIVE_TRAITS
from psyscore.schemas.results import Archetype, TraitScoreSet

logger = structlog.get_logger("psyscore.archetype_service")

TraitVector = Mapping[str, float]

DOMINANT_CANDIDATES: tuple[str, ...] = (
    "openness",
    "conscientiousness",
    "extraversion",
    "agreeableness",
)
DOMINANT_MIN_SCORE: float = 55
BALANCED_RANGE_BELOW: float = 25


@dataclass(frozen=True)
class ArchetypeRule:
    """One step of the cascade: ``predicate(vector)`` selects ``archetype_key``."""

    key: str
    predicate: Callable[[TraitVector], bool]
    archetype_key: str

    def matches(self, vector: TraitVector) -> bool:
        return bool(self.predicate(vector))

    @property
    def archetype(self) -> Archetype:
        return ARCHETYPES[self.archetype_key]


def _trait(vector: TraitVector, name: str) -> float:
    return vector.get(name, 50.0)


def _is_balanced(vector: TraitVector) -> bool:
    scores = [_trait(vector, t) for t in BIG_FIVE_TRAITS]
    return max(scores) - min(scores) < BALANCED_RANGE_BELOW


def dominant_trait(vector: TraitVector) -> str:
    """Highest of O/C/E/A; earlier traits win ties."""
    # max() keeps the first of equal keys
    return max(DOMINANT_CANDIDATES, key=lambda t: _trait(vector, t))


def _dominant(trait: str) -> Callable[[TraitVector], bool]:
    def predicate(vector: TraitVector) -> bool:
        return dominant_trait(vector) == trait and _trait(vector, trait) >= DOMINANT_MIN_SCORE
    return predicate


def _all(**bounds: tuple[str, float]) -> Callable[[TraitVector], bool]:
    """Build a conjunction from ``trait=(">=" | "<=", threshold)`` bounds."""

    def predicate(vector: TraitVector) -> bool:
        for trait, (op, threshold) in bounds.items():
            value = _trait(vector, trait)
            if op == ">=" and not value >= threshold:
                return False
            if op == "<=" and not value <= threshold:
                return False
        return True

    return predicate


ARCHETYPE_RULES: tuple[ArchetypeRule, ...] = (
    ArchetypeRule("balanced", _is_balanced, "adaptive_generalist"),
    ArchetypeRule(
        "strategic_innovator",
        _all(openness=(">=", 60), conscientiousness=(">=", 60), neuroticism=("<=", 50)),
        "strategic_innovator",
    ),
    ArchetypeRule(
        "creative_catalyst",
        _all(openness=(">=", 60), extraversion=(">=", 60), neuroticism=("<=", 55)),
        "creative_catalyst",
    ),
    ArchetypeRule(
        "servant_leader",
        _all(conscientiousness=(">=", 60), agreeableness=(">=", 60), extraversion=(">=", 45)),
        "servant_leader",
    ),
    ArchetypeRule(
        "analytical_architect",
        _all(conscientiousness=(">=", 60), extraversion=("<=", 40), neuroticism=("<=", 50)),
        "analytical_architect",
    ),
    ArchetypeRule(
        "inspirational_connector",
        _all(agreeableness=(">=", 60), extraversion=(">=", 55), openness=(">=", 50)),
        "inspirational_connector",
    ),
    ArchetypeRule(
        "independent_thinker",
        _all(openness=(">=", 60), extraversion=("<=", 40), conscientiousness=("<=", 45)),
        "independent_thinker",
    ),
    ArchetypeRule(
        "results_driver",
        _all(conscientiousness=(">=", 60), agreeableness=("<=", 40), neuroticism=("<=", 50)),
        "results_driver",
    ),
    ArchetypeRule(
        "empathetic_energizer",
        _all(extraversion=(">=", 60), agreeableness=(">=", 60)),
        "empathetic_energizer",
    ),
    ArchetypeRule(
        "reliable_guardian",
        _all(conscientiousness=(">=", 55), agreeableness=(">=", 55), openness=("<=", 45)),
        "reliable_guardian",
    ),
    ArchetypeRule(
        "social_butterfly",
        _all(extraversion=(">=", 65), agreeableness=(">=", 50)),
        "social_butterfly",
    ),
    ArchetypeRule(
        "perfectionist",
        _all(conscientiousness=(">=", 65), neuroticism=(">=", 45)),
        "perfectionist",
    ),
    ArchetypeRule(
        "creative_explorer",
        _all(openness=(">=", 65), conscientiousness=("<=", 50)),
        "creative_explorer",
    ),
    ArchetypeRule(
        "harmonizer",
        _all(agreeableness=(">=", 65), neuroticism=("<=", 55)),
        "harmonizer",
    ),
    ArchetypeRule(
        "contemplative_scholar",
        _all(openness=(">=", 55), conscientiousness=(">=", 55), extraversion=("<=", 35)),
        "contemplative_scholar",
    ),
    ArchetypeRule(
        "dynamic_leader",
        _all(extraversion=(">=", 60), conscientiousness=(">=", 55), agreeableness=("<=", 50)),
        "dynamic_leader",
    ),
    *(
        ArchetypeRule(f"dominant_{trait}", _dominant(trait), f"dominant_{trait}")
        for trait in DOMINANT_CANDIDATES
    ),
    ArchetypeRule("unique", lambda vector: True, "unique_individual"),
)


class ArchetypeClassifier:
    """Pure function of the trait vector; holds no per-run state."""

    def __init__(self, rules: tuple[ArchetypeRule, ...] = ARCHETYPE_RULES):
        self.rules = rules

    def classify(self, traits: TraitScoreSet | TraitVector) -> Archetype:
        vector = traits.as_vector() if isinstance(traits, TraitScoreSet) else traits
        rule = self.matching_rule(vector)
        logger.debug("archetype_matched", rule=rule.key, archetype=rule.archetype.name)
        return rule.archetype.model_copy(update={"rule": rule.key})

    def matching_rule(self, vector: TraitVector) -> ArchetypeRule:
        for rule in self.rules:
            if rule.matches(vector):
                return rule
        # The cascade always ends in a catch-all; only a custom rule set lands here
        return ArchetypeRule("unique", lambda v: True, "unique_individual")
