"""
PsyScore — Scoring Engine

Orchestrates one assessment end to end:

  Step 1: Normalize  — validate raw answers, fill documented defaults
  Step 2: Weight     — reverse-coding and response-time weights per item
  Step 3: Aggregate  — five 0-100 Big-Five trait scores
  Step 4: Quality    — consistency / authenticity / confidence flags
  Step 5: Compare    — population percentiles and trait correlations
  Step 6: Classify   — archetype cascade and interaction patterns
  Step 7: Screen     — attention and autism-spectrum instruments
  Step 8: Profile    — sensory and executive-function profiles
  Step 9: Confidence — reliability, overall confidence, trait intervals

Every call recomputes everything from the response list; the engine holds
only read-only configuration and can be shared between threads.
"""

from __future__ import annotations

import random
import uuid
from collections.abc import Iterable, Mapping
from typing import Any

import structlog

from psyscore.config import Settings, get_settings
from psyscore.research_norms import BASELINE_NORMS, DEFAULT_RESEARCH_NORMS, load_research_norms
from psyscore.schemas.norms import ResearchNorms
from psyscore.schemas.responses import SessionMetadata
from psyscore.schemas.results import ScoringResult
from psyscore.services.archetype_service import ArchetypeClassifier
from psyscore.services.collaborators import (
    DeepTraitAnalyzer,
    NullQualityAssessor,
    NullTraitAnalyzer,
    QualityAssessor,
)
from psyscore.services.confidence_service import ConfidenceEngine
from psyscore.services.correlation_service import CorrelationEstimator
from psyscore.services.neuro_profile_service import (
    ExecutiveFunctionProfiler,
    Jitter,
    SensoryProfiler,
)
from psyscore.services.norms_service import PopulationNormalizer
from psyscore.services.quality_assessor import ResponseQualityAssessor
from psyscore.services.quality_service import ResponseQualityAnalyzer
from psyscore.services.response_normalizer import ResponseNormalizer
from psyscore.services.screening_service import ClinicalScreener
from psyscore.services.trait_aggregator import TraitAggregator
from psyscore.services.trait_pattern_service import TraitInteractionAnalyzer

logger = structlog.get_logger("psyscore.scoring_service")


class ScoringEngine:
    """Score one assessment session into a ``ScoringResult``.

    Parameters
    ----------
    norms:
        The research database.  ``None`` means it is unavailable: baseline
        population norms are used and clinical screening falls back to the
        average-based formulas.
    quality_assessor:
        Optional detailed quality reviewer; omitted -> no review.
    trait_analyzer:
        Optional interaction-pattern analyser; omitted -> no patterns.
    jitter:
        Random generator for profile variability; omitted -> deterministic.
    """

    def __init__(
        self,
        norms: ResearchNorms | None = None,
        quality_assessor: QualityAssessor | None = None,
        trait_analyzer: DeepTraitAnalyzer | None = None,
        jitter: random.Random | None = None,
    ) -> None:
        self.norms: ResearchNorms = norms if norms is not None else BASELINE_NORMS
        self.quality_assessor: QualityAssessor = quality_assessor or NullQualityAssessor()
        self.trait_analyzer: DeepTraitAnalyzer = trait_analyzer or NullTraitAnalyzer()
        variability = Jitter(jitter)

        self.normalizer = ResponseNormalizer()
        self.aggregator = TraitAggregator()
        self.quality_analyzer = ResponseQualityAnalyzer()
        self.population = PopulationNormalizer(self.norms)
        self.correlations = CorrelationEstimator(self.norms)
        self.classifier = ArchetypeClassifier()
        self.screener = ClinicalScreener(self.norms)
        self.sensory = SensoryProfiler(self.norms, variability)
        self.executive = ExecutiveFunctionProfiler(self.norms, variability)
        self.confidence = ConfidenceEngine()

        logger.info(
            "scoring_engine_initialised",
            norms_version=self.norms.version,
            research_data=self.norms.has_research_data,
            jitter=variability.enabled,
        )

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "ScoringEngine":
        """Build a fully equipped engine from configuration.

        Uses the bundled research norms unless ``RESEARCH_NORMS_PATH`` points
        at a JSON file.  Raises ``ResearchNormsError`` if that file is invalid.
        """
        settings = settings or get_settings()
        if settings.RESEARCH_NORMS_PATH:
            norms = load_research_norms(settings.RESEARCH_NORMS_PATH)
        else:
            norms = DEFAULT_RESEARCH_NORMS

        jitter = random.Random(settings.JITTER_SEED) if settings.JITTER_ENABLED else None
        return cls(
            norms=norms,
            quality_assessor=ResponseQualityAssessor(),
            trait_analyzer=TraitInteractionAnalyzer(),
            jitter=jitter,
        )

    # ── Public API ────────────────────────────────────────────────────────

    def score(
        self,
        responses: Iterable[Any] | None,
        metadata: SessionMetadata | Mapping[str, Any] | None = None,
    ) -> ScoringResult:
        """Run the full pipeline.  Never raises on malformed responses."""
        session = self._metadata(metadata)
        log = logger.bind(run_id=uuid.uuid4().hex[:12], tier=session.tier)

        # ── Steps 1-3: traits ─────────────────────────────────────────
        validated = self.normalizer.normalize(responses)
        log.info("scoring_start", responses=len(validated))

        buckets = self.normalizer.weight_by_trait(validated)
        traits = self.aggregator.aggregate(buckets)
        vector = traits.as_vector()
        log.info("traits_scored", scores={name: int(score) for name, score in vector.items()})

        # ── Step 4: quality ───────────────────────────────────────────
        quality = self.quality_analyzer.analyze(validated)
        quality_review = self.quality_assessor.review(validated)

        # ── Steps 5-6: comparison and classification ──────────────────
        percentiles = self.population.normalize(traits)
        correlations = self.correlations.estimate(traits)
        archetype = self.classifier.classify(traits)
        trait_patterns = self.trait_analyzer.analyze(vector)

        # ── Steps 7-8: screening and profiles ─────────────────────────
        screenings = self.screener.screen_all(validated)
        sensory_profile = self.sensory.profile(validated, vector, screenings)
        executive_function = self.executive.profile(vector, screenings)

        # ── Step 9: confidence ────────────────────────────────────────
        confidence = self.confidence.report(
            traits,
            quality,
            response_count=len(validated),
            instrument_coverage=self.screener.coverage(validated),
        )

        log.info(
            "scoring_complete",
            archetype=archetype.name,
            confidence=confidence.overall,
            quality_flags=quality.patterns,
        )

        return ScoringResult(
            metadata=session,
            response_count=len(validated),
            traits=traits,
            quality=quality,
            percentiles=percentiles,
            correlations=correlations,
            archetype=archetype,
            screenings=screenings,
            confidence=confidence,
            sensory_profile=sensory_profile,
            executive_function=executive_function,
            trait_patterns=trait_patterns,
            quality_review=quality_review,
            norms_version=self.norms.version,
        )

    @staticmethod
    def _metadata(metadata: SessionMetadata | Mapping[str, Any] | None) -> SessionMetadata:
        if isinstance(metadata, SessionMetadata):
            return metadata
        if isinstance(metadata, Mapping):
            return SessionMetadata.model_validate(dict(metadata))
        return SessionMetadata()
