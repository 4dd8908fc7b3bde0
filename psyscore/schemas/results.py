from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from psyscore.schemas.responses import SessionMetadata


class _ResultModel(BaseModel):
    model_config = ConfigDict(frozen=True)


# ── Traits ───────────────────────────────────────────────────────────────────

class TraitScore(_ResultModel):
    trait: str
    score: int = Field(ge=0, le=100)
    item_count: int = 0
    level: str
    defaulted: bool = False


class TraitScoreSet(_ResultModel):
    traits: dict[str, TraitScore]

    def as_vector(self) -> dict[str, float]:
        """Return ``{trait: score}`` for the classifier and estimators."""
        return {name: float(ts.score) for name, ts in self.traits.items()}

    def __getitem__(self, trait: str) -> TraitScore:
        return self.traits[trait]


# ── Response quality ─────────────────────────────────────────────────────────

class TimingAnalysis(_ResultModel):
    average_ms: int
    rush_threshold_ms: int
    rushed_fraction: float
    variance_ms: float
    total_responses: int = 0
    fastest_ms: Optional[float] = None
    slowest_ms: Optional[float] = None
    patterns: list[str] = []


class QualityAssessment(_ResultModel):
    consistency: float = Field(ge=0.0, le=1.0)
    authenticity: float = Field(ge=0.0, le=1.0)
    confidence: float = Field(ge=0.0, le=1.0)
    patterns: list[str] = []
    timing: TimingAnalysis
    details: dict[str, Any] = {}


# ── Population comparison ────────────────────────────────────────────────────

class PercentileResult(_ResultModel):
    trait: str
    score: float
    z_score: float
    percentile: int = Field(ge=1, le=99)
    band: str
    population_mean: Optional[float] = None


class CorrelationMatrix(_ResultModel):
    coefficients: dict[str, dict[str, float]]

    def coefficient(self, trait_a: str, trait_b: str) -> float:
        return self.coefficients[trait_a][trait_b]


# ── Classification ───────────────────────────────────────────────────────────

class Archetype(_ResultModel):
    key: str
    name: str
    description: str
    strengths: tuple[str, ...]
    ideal_environments: tuple[str, ...] = ()
    growth_edge: str
    population_share: str
    rule: Optional[str] = None


class InteractionPattern(_ResultModel):
    pattern: str
    name: str
    description: str
    strength: float


# ── Optional quality review ──────────────────────────────────────────────────

class SuspiciousPattern(_ResultModel):
    type: str
    confidence: float
    impact: str
    description: str


class QualityWarning(_ResultModel):
    level: str
    message: str
    recommendation: str


class QualityReview(_ResultModel):
    overall_score: float = Field(ge=0.0, le=1.0)
    metric_scores: dict[str, float]
    response_patterns: list[str] = []
    suspicious_patterns: list[SuspiciousPattern] = []
    warnings: list[QualityWarning] = []
    recommendations: list[str] = []
    reliability: float = Field(ge=0.0, le=1.0)
    valid: bool = True


# ── Clinical screening ───────────────────────────────────────────────────────

class ClinicalScreeningResult(_ResultModel):
    instrument: str
    raw_score: float = 0.0
    normalized_score: int = 0
    percentile: float = 0.0
    severity_band: str = "minimal"
    likelihood_label: str = "Low"
    sub_indicator_scores: dict[str, int] = {}
    markers: list[str] = []
    item_count: int = 0
    above_cutoff: bool = False
    method: str = "no_data"

    @property
    def has_data(self) -> bool:
        return self.method != "no_data"


# ── Confidence ───────────────────────────────────────────────────────────────

class ConfidenceInterval(_ResultModel):
    lower: int
    upper: int
    level_percent: int


class ConfidenceReport(_ResultModel):
    analysis_confidence: float = Field(ge=0.0, le=1.0)
    reliability: float = Field(ge=0.0, le=1.0)
    quality_confidence: float = Field(ge=0.0, le=1.0)
    overall: float = Field(ge=0.0, le=1.0)
    intervals: dict[str, ConfidenceInterval]
    instrument_coverage: dict[str, float] = {}


# ── Neurodevelopmental profiles ──────────────────────────────────────────────

class SensoryProfile(_ResultModel):
    sensitivity: str
    avoidance: str
    seeking: str
    registration: str
    raw_scores: dict[str, int]


class ExecutiveFunctionProfile(_ResultModel):
    overall: float
    domains: dict[str, float]
    strengths: list[str]
    challenges: list[str]
    method: str


# ── Aggregate output ─────────────────────────────────────────────────────────

class ScoringResult(_ResultModel):
    metadata: SessionMetadata
    response_count: int
    traits: TraitScoreSet
    quality: QualityAssessment
    percentiles: dict[str, PercentileResult]
    correlations: CorrelationMatrix
    archetype: Archetype
    screenings: dict[str, ClinicalScreeningResult]
    confidence: ConfidenceReport
    sensory_profile: SensoryProfile
    executive_function: ExecutiveFunctionProfile
    trait_patterns: list[InteractionPattern] = []
    quality_review: Optional[QualityReview] = None
    norms_version: str
