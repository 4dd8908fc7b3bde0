"""
PsyScore — Neurodevelopmental Profiles

Derived, descriptive profiles built on top of the clinical screenings:

1. **Sensory profile** — Dunn's four quadrants (low registration, sensation
   seeking, sensory sensitivity, sensation avoiding).  Every quadrant starts
   at 50 and is shifted by the screening percentiles, by extreme
   neuroticism / extraversion and by the mean of sensory-tagged answers.
2. **Executive-function profile** — working memory, cognitive flexibility,
   inhibitory control and planning, plus organization and time management.
   With research norms each domain is lowered by its mean reduction scaled
   by screening severity; without them a trait / impairment formula is used.

Both profiles can add "natural variability" jitter.  The jitter source is an
injected ``random.Random``; without one the output is fully deterministic.
"""

from __future__ import annotations

import random
import statistics
from collections.abc import Mapping, Sequence
from typing import Optional

import structlog

from psyscore.schemas.norms import ResearchNorms
from psyscore.schemas.responses import RawResponse
from psyscore.schemas.results import (
    ClinicalScreeningResult,
    ExecutiveFunctionProfile,
    SensoryProfile,
)
from psyscore.services.trait_aggregator import clamp, round_half_up

logger = structlog.get_logger("psyscore.neuro_profile_service")

SENSORY_SUBCATEGORY = "sensory_processing"
SENSORY_TRAIT = "sensory"


class Jitter:
    """Bounded random perturbation; a no-op unless a generator is supplied."""

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng

    @property
    def enabled(self) -> bool:
        return self.rng is not None

    def __call__(self, half_width: float) -> float:
        if self.rng is None:
            return 0.0
        return (self.rng.random() - 0.5) * 2 * half_width


class SensoryProfiler:
    """Four-quadrant sensory-processing profile."""

    QUADRANT_START: float = 50.0
    JITTER: float = 5.0

    # (percentile above, quadrant values to set)
    AUTISM_PREVALENCE: tuple[tuple[float, dict[str, float]], ...] = (
        (60, {"low_registration": 65, "sensation_seeking": 35,
              "sensory_sensitivity": 75, "sensation_avoiding": 80}),
        (35, {"low_registration": 55, "sensory_sensitivity": 60,
              "sensation_avoiding": 65}),
    )
    ATTENTION_PREVALENCE: tuple[float, dict[str, float]] = (
        60, {"low_registration": 45, "sensation_seeking": 70,
             "sensory_sensitivity": 55, "sensation_avoiding": 40},
    )

    RESEARCH_LEVELS: tuple[tuple[float, str], ...] = (
        (84, "much more than most"),
        (70, "more than most"),
        (30, "similar to most"),
        (16, "less than most"),
    )
    RESEARCH_LOWEST: str = "much less than most"
    SIMPLE_LEVELS: tuple[tuple[float, str], ...] = (
        (80, "high"),
        (60, "moderate-high"),
        (40, "moderate"),
        (20, "moderate-low"),
    )
    SIMPLE_LOWEST: str = "low"

    SENSORY_ITEM_THRESHOLD: float = 3.5

    def __init__(self, norms: ResearchNorms, jitter: Optional[Jitter] = None):
        self.norms = norms
        self.jitter = jitter or Jitter()

    def profile(
        self,
        responses: Sequence[RawResponse],
        traits: Mapping[str, float],
        screenings: Mapping[str, ClinicalScreeningResult],
    ) -> SensoryProfile:
        research = self.norms.has_research_data
        quadrants = {
            "low_registration": self.QUADRANT_START,
            "sensation_seeking": self.QUADRANT_START,
            "sensory_sensitivity": self.QUADRANT_START,
            "sensation_avoiding": self.QUADRANT_START,
        }

        if research:
            autism = _percentile(screenings, "autism")
            # Autism-spectrum bands take precedence over the attention pattern
            for threshold, values in self.AUTISM_PREVALENCE:
                if autism > threshold:
                    quadrants.update(values)
                    break
            else:
                threshold, values = self.ATTENTION_PREVALENCE
                if _percentile(screenings, "attention") > threshold:
                    quadrants.update(values)

        neuroticism = traits.get("neuroticism", 50.0)
        if neuroticism > 70:
            quadrants["sensory_sensitivity"] += 15
            quadrants["sensation_avoiding"] += 20
        elif neuroticism < 30:
            quadrants["low_registration"] += 10

        extraversion = traits.get("extraversion", 50.0)
        if extraversion > 70:
            quadrants["sensation_seeking"] += 20
            quadrants["sensation_avoiding"] -= 15
        elif extraversion < 30:
            quadrants["sensation_seeking"] -= 15
            quadrants["sensation_avoiding"] += 10

        sensory_mean = self.sensory_item_mean(responses)
        if sensory_mean is not None and sensory_mean > self.SENSORY_ITEM_THRESHOLD:
            excess = sensory_mean - self.SENSORY_ITEM_THRESHOLD
            quadrants["sensory_sensitivity"] += excess * 15
            quadrants["sensation_seeking"] += excess * 10

        level = self.research_level if research else self.simple_level
        return SensoryProfile(
            sensitivity=level(self._vary(quadrants["sensory_sensitivity"])),
            avoidance=level(self._vary(quadrants["sensation_avoiding"])),
            seeking=level(self._vary(quadrants["sensation_seeking"])),
            registration=level(self._vary(quadrants["low_registration"])),
            raw_scores={
                name: int(clamp(round_half_up(value), 0, 100))
                for name, value in quadrants.items()
            },
        )

    @staticmethod
    def sensory_item_mean(responses: Sequence[RawResponse]) -> Optional[float]:
        values = [
            r.raw_score if r.raw_score is not None else 0.0
            for r in responses
            if r.subcategory_tag == SENSORY_SUBCATEGORY or r.trait == SENSORY_TRAIT
        ]
        return statistics.mean(values) if values else None

    def _vary(self, score: float) -> float:
        return clamp(score + self.jitter(self.JITTER), 0, 100)

    @classmethod
    def research_level(cls, score: float) -> str:
        for lower, label in cls.RESEARCH_LEVELS:
            if score >= lower:
                return label
        return cls.RESEARCH_LOWEST

    @classmethod
    def simple_level(cls, score: float) -> str:
        for lower, label in cls.SIMPLE_LEVELS:
            if score >= lower:
                return label
        return cls.SIMPLE_LOWEST


class ExecutiveFunctionProfiler:
    """Executive-function domain percentiles with strengths and challenges."""

    DOMAIN_START: float = 50.0
    DOMAIN_FLOOR: float = 16.0
    RESEARCH_JITTER: float = 5.0
    RESEARCH_BOUNDS: tuple[float, float] = (5.0, 95.0)

    # Trait nudges on the research path: domain -> (trait, slope)
    TRAIT_ADJUSTMENTS: dict[str, tuple[str, float]] = {
        "working_memory": ("openness", 0.2),
        "cognitive_flexibility": ("openness", 0.3),
        "inhibitory_control": ("conscientiousness", 0.4),
        "planning": ("conscientiousness", 0.35),
    }
    # Share of the autism mean reduction applied per domain
    AUTISM_WEIGHTS: dict[str, float] = {
        "cognitive_flexibility": 0.5,
        "planning": 0.3,
    }

    FALLBACK_JITTER: float = 10.0
    FALLBACK_TRAIT_SLOPE: float = 0.3
    FALLBACK_IMPAIRMENT_SLOPE: float = 5.0
    # domain -> (base offset, trait, sub-indicator)
    FALLBACK_DOMAINS: dict[str, tuple[float, str, str]] = {
        "planning": (0, "conscientiousness", "inattention"),
        "organization": (0, "conscientiousness", "inattention"),
        "time_management": (-10, "conscientiousness", "hyperactivity"),
        "working_memory": (5, "openness", "inattention"),
    }

    ELEVATED_INDICATOR: int = 5

    def __init__(self, norms: ResearchNorms, jitter: Optional[Jitter] = None):
        self.norms = norms
        self.jitter = jitter or Jitter()

    def profile(
        self,
        traits: Mapping[str, float],
        screenings: Mapping[str, ClinicalScreeningResult],
    ) -> ExecutiveFunctionProfile:
        attention = screenings.get("attention")
        indicators = attention.sub_indicator_scores if attention is not None else {}

        if self.norms.executive_function:
            domains = self._research_domains(traits, screenings)
            strengths = self._research_strengths(domains, traits, indicators, screenings)
            challenges = self._research_challenges(domains, traits, indicators)
            method = "research"
        else:
            domains = self._fallback_domains(traits, screenings, indicators)
            strengths, challenges = self._fallback_strengths_challenges(
                traits, indicators, screenings
            )
            method = "fallback"

        overall = statistics.mean(domains.values())
        logger.debug("executive_function_profiled", method=method, overall=round(overall, 1))
        return ExecutiveFunctionProfile(
            overall=round(overall, 1),
            domains={name: round(value, 1) for name, value in domains.items()},
            strengths=strengths or ["adaptive_thinking"],
            challenges=challenges,
            method=method,
        )

    # ── Research path ────────────────────────────────────────────────────

    def _research_domains(
        self,
        traits: Mapping[str, float],
        screenings: Mapping[str, ClinicalScreeningResult],
    ) -> dict[str, float]:
        attention_severity = _percentile(screenings, "attention") / 100
        autism_severity = _percentile(screenings, "autism") / 100

        domains: dict[str, float] = {}
        for name, impact in self.norms.executive_function.items():
            value = max(self.DOMAIN_FLOOR, self.DOMAIN_START - impact.adhd_mean_reduction * attention_severity)
            if name in self.TRAIT_ADJUSTMENTS:
                trait, slope = self.TRAIT_ADJUSTMENTS[name]
                value += (traits.get(trait, 50.0) - 50) * slope
            if autism_severity > 0 and name in self.AUTISM_WEIGHTS:
                value -= impact.autism_mean_reduction * autism_severity * self.AUTISM_WEIGHTS[name]
            lower, upper = self.RESEARCH_BOUNDS
            domains[name] = clamp(value + self.jitter(self.RESEARCH_JITTER), lower, upper)

        planning = domains.get("planning", self.DOMAIN_START)
        inhibitory = domains.get("inhibitory_control", self.DOMAIN_START)
        domains["organization"] = planning
        domains["time_management"] = (planning + inhibitory) / 2
        return domains

    def _research_strengths(self, domains, traits, indicators, screenings) -> list[str]:
        strengths: list[str] = []
        for domain, label in (
            ("working_memory", "strong_working_memory"),
            ("cognitive_flexibility", "cognitive_flexibility"),
            ("inhibitory_control", "impulse_control"),
            ("planning", "strategic_planning"),
        ):
            if domains.get(domain, 0) > 70:
                strengths.append(label)

        if traits.get("openness", 50) > 70:
            strengths.append("creative_problem_solving")
            if _percentile(screenings, "attention") > 50:
                strengths.append("divergent_thinking")
        if traits.get("conscientiousness", 50) > 70:
            strengths.extend(["systematic_approach", "attention_to_detail"])
        if indicators.get("hyperactivity", 0) >= self.ELEVATED_INDICATOR:
            strengths.extend(["high_energy", "crisis_management"])
        if indicators.get("inattention", 0) >= self.ELEVATED_INDICATOR and traits.get("openness", 50) > 60:
            strengths.append("hyperfocus_on_interests")
        if traits.get("extraversion", 50) < 30 and domains.get("inhibitory_control", 0) > 60:
            strengths.append("deep_focus")
        return strengths

    def _research_challenges(self, domains, traits, indicators) -> list[str]:
        challenges: list[str] = []
        for domain, label in (
            ("working_memory", "working_memory_difficulties"),
            ("cognitive_flexibility", "cognitive_rigidity"),
            ("inhibitory_control", "impulse_control"),
            ("planning", "planning_difficulties"),
        ):
            if domains.get(domain, 100) < 30:
                challenges.append(label)

        if traits.get("conscientiousness", 50) < 40:
            challenges.extend(["task_completion", "organization"])
        if indicators.get("inattention", 0) >= self.ELEVATED_INDICATOR:
            challenges.extend(["sustained_attention", "task_initiation"])
        if indicators.get("hyperactivity", 0) >= self.ELEVATED_INDICATOR:
            challenges.append("restlessness")
        if indicators.get("impulsivity", 0) >= self.ELEVATED_INDICATOR:
            challenges.append("decision_impulsivity")
        if domains.get("planning", 100) < 40 or domains.get("inhibitory_control", 100) < 40:
            challenges.append("time_management")
        return challenges

    # ── Fallback path ────────────────────────────────────────────────────

    def _fallback_domains(
        self,
        traits: Mapping[str, float],
        screenings: Mapping[str, ClinicalScreeningResult],
        indicators: Mapping[str, int],
    ) -> dict[str, float]:
        base = 100 - _percentile(screenings, "attention")
        domains: dict[str, float] = {}
        for name, (offset, trait, indicator) in self.FALLBACK_DOMAINS.items():
            score = (
                base
                + offset
                + (traits.get(trait, 50.0) - 50) * self.FALLBACK_TRAIT_SLOPE
                - indicators.get(indicator, 0) * self.FALLBACK_IMPAIRMENT_SLOPE
                + self.jitter(self.FALLBACK_JITTER)
            )
            domains[name] = float(clamp(round_half_up(score), 0, 100))
        return domains

    def _fallback_strengths_challenges(
        self,
        traits: Mapping[str, float],
        indicators: Mapping[str, int],
        screenings: Mapping[str, ClinicalScreeningResult],
    ) -> tuple[list[str], list[str]]:
        strengths: list[str] = []
        challenges: list[str] = []
        openness = traits.get("openness", 50)
        conscientiousness = traits.get("conscientiousness", 50)
        extraversion = traits.get("extraversion", 50)

        if openness > 70:
            strengths.append("creative_problem_solving")
            if _percentile(screenings, "attention") > 60:
                strengths.append("divergent_thinking")

        if conscientiousness > 70:
            strengths.extend(["systematic_approach", "attention_to_detail"])
        elif conscientiousness < 40:
            challenges.extend(["task_completion", "organization"])

        if indicators.get("hyperactivity", 0) >= self.ELEVATED_INDICATOR:
            strengths.extend(["high_energy", "crisis_management"])
            challenges.append("sustained_attention")

        if indicators.get("impulsivity", 0) >= self.ELEVATED_INDICATOR:
            strengths.append("quick_decision_making")
            challenges.extend(["impulse_control", "planning_ahead"])

        if indicators.get("inattention", 0) >= self.ELEVATED_INDICATOR:
            challenges.extend(["task_initiation", "prioritization"])
            if openness > 60:
                strengths.append("hyperfocus_on_interests")

        if extraversion < 30 and conscientiousness > 60:
            strengths.extend(["independent_work", "deep_focus"])

        if traits.get("agreeableness", 50) > 70 and extraversion > 60:
            strengths.append("team_coordination")

        return strengths, challenges


def _percentile(screenings: Mapping[str, ClinicalScreeningResult], key: str) -> float:
    result = screenings.get(key)
    return result.percentile if result is not None else 0.0
