"""
PsyScore — schema registry.

Re-exports the input, configuration and result models so call-sites can
import them from one place.
"""

from psyscore.schemas.norms import (
    ClinicalInstrumentNorms,
    ExecutiveFunctionImpact,
    InterpretationBand,
    ResearchNorms,
    SubIndicatorFormula,
    TraitCorrelation,
    TraitNorm,
)
from psyscore.schemas.responses import (
    BIG_FIVE_TRAITS,
    RawResponse,
    SessionMetadata,
    WeightedItem,
)
from psyscore.schemas.results import (
    Archetype,
    ClinicalScreeningResult,
    ConfidenceInterval,
    ConfidenceReport,
    CorrelationMatrix,
    ExecutiveFunctionProfile,
    InteractionPattern,
    PercentileResult,
    QualityAssessment,
    QualityReview,
    QualityWarning,
    ScoringResult,
    SensoryProfile,
    SuspiciousPattern,
    TimingAnalysis,
    TraitScore,
    TraitScoreSet,
)

__all__ = [
    "BIG_FIVE_TRAITS",
    "RawResponse",
    "SessionMetadata",
    "WeightedItem",
    "ClinicalInstrumentNorms",
    "ExecutiveFunctionImpact",
    "InterpretationBand",
    "ResearchNorms",
    "SubIndicatorFormula",
    "TraitCorrelation",
    "TraitNorm",
    "Archetype",
    "ClinicalScreeningResult",
    "ConfidenceInterval",
    "ConfidenceReport",
    "CorrelationMatrix",
    "ExecutiveFunctionProfile",
    "InteractionPattern",
    "PercentileResult",
    "QualityAssessment",
    "QualityReview",
    "QualityWarning",
    "ScoringResult",
    "SensoryProfile",
    "SuspiciousPattern",
    "TimingAnalysis",
    "TraitScore",
    "TraitScoreSet",
]
