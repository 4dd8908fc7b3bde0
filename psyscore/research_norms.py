"""
PsyScore — Bundled research norms and loader.

Two configurations ship with the engine:

* ``BASELINE_NORMS`` — population norms and trait correlations only.  This is
  what the engine uses when no research database is available; clinical
  screening then runs its simplified fallback formulas.
* ``DEFAULT_RESEARCH_NORMS`` — the full research database: baseline plus the
  ASRS-5 / AQ-10 interpretation bands and the executive-function impact
  table.

``load_research_norms`` reads a JSON file with the same shape as
``ResearchNorms.model_dump()``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import structlog
from pydantic import ValidationError

from psyscore.exceptions import ResearchNormsError
from psyscore.schemas.norms import ResearchNorms

logger = structlog.get_logger("psyscore.research_norms")

# ── Population norms (0-100 trait scale) ─────────────────────────────────────

POPULATION_NORMS: dict[str, dict[str, float]] = {
    "openness": {"mean": 50, "std_dev": 15},
    "conscientiousness": {"mean": 52, "std_dev": 14},
    "extraversion": {"mean": 48, "std_dev": 16},
    "agreeableness": {"mean": 54, "std_dev": 13},
    "neuroticism": {"mean": 46, "std_dev": 17},
}

# Order-independent pairs
TRAIT_CORRELATIONS: list[dict[str, Any]] = [
    {"traits": ("openness", "extraversion"), "coefficient": 0.30},
    {"traits": ("conscientiousness", "neuroticism"), "coefficient": -0.35},
    {"traits": ("extraversion", "agreeableness"), "coefficient": 0.25},
    {"traits": ("agreeableness", "neuroticism"), "coefficient": -0.20},
    {"traits": ("openness", "conscientiousness"), "coefficient": 0.10},
]

# ── ASRS-5 (adult attention-deficit screener, 6 items scored 0-4) ────────────

ASRS5_NORMS: dict[str, Any] = {
    "name": "ASRS-5",
    "description": "Adult ADHD Self-Report Scale for DSM-5",
    "items": 6,
    "item_max": 4,
    "scale_min": 0,
    "scale_max": 24,
    "screening_cutoff": 14,
    "bands": [
        {
            "key": "minimal",
            "min": 0,
            "max": 9,
            "severity": "minimal",
            "label": "Low",
            "percentile_floor": 0,
            "percentile_ceiling": 40,
            "sub_indicators": {
                "inattention": {"base": 0, "slope": 1 / 3},
                "hyperactivity": {"base": 0, "slope": 1 / 4},
                "impulsivity": {"base": 0, "slope": 1 / 3.5},
            },
            "markers": ["Subclinical attention patterns"],
            "marker_min_score": 6,
        },
        {
            "key": "mild",
            "min": 10,
            "max": 13,
            "severity": "mild",
            "label": "Possible",
            "percentile_floor": 40,
            "percentile_ceiling": 65,
            "sub_indicators": {
                "inattention": {"base": 2, "slope": 1.0},
                "hyperactivity": {"base": 2, "slope": 0.8},
                "impulsivity": {"base": 2, "slope": 0.9},
            },
            "markers": [
                "Some attention difficulties",
                "Mild executive function challenges",
            ],
        },
        {
            "key": "moderate",
            "min": 14,
            "max": 18,
            "severity": "moderate",
            "label": "Probable",
            "percentile_floor": 65,
            "percentile_ceiling": 85,
            "sub_indicators": {
                "inattention": {"base": 5, "slope": 0.5},
                "hyperactivity": {"base": 4, "slope": 0.5},
                "impulsivity": {"base": 5, "slope": 0.5},
            },
            "markers": [
                "Executive function challenges",
                "Attention regulation difficulties",
                "Task management issues",
            ],
        },
        {
            "key": "severe",
            "min": 19,
            "max": 24,
            "severity": "severe",
            "label": "High",
            "percentile_floor": 85,
            "percentile_ceiling": 100,
            "sub_indicators": {
                "inattention": {"base": 7, "slope": 0.5},
                "hyperactivity": {"base": 6, "slope": 0.5},
                "impulsivity": {"base": 7, "slope": 0.5},
            },
            "markers": [
                "Significant executive dysfunction",
                "Severe attention difficulties",
                "High impulsivity",
            ],
        },
    ],
}

# ── AQ-10 (autism-spectrum quotient, 10 binary items) ────────────────────────

AQ10_NORMS: dict[str, Any] = {
    "name": "AQ-10",
    "description": "Autism Spectrum Quotient - 10 item version",
    "items": 10,
    "item_max": 1,
    "scale_min": 0,
    "scale_max": 10,
    "screening_cutoff": 6,
    "cronbach_alpha": 0.85,
    "bands": [
        {
            "key": "minimal",
            "min": 0,
            "max": 3,
            "severity": "minimal",
            "label": "Low",
            "percentile_floor": 0,
            "percentile_ceiling": 35,
            "sub_indicators": {
                "social": {"base": 0, "slope": 0.8},
                "sensory": {"base": 0, "slope": 0.7},
                "routine": {"base": 0, "slope": 1.0},
                "communication": {"base": 0, "slope": 0.6},
            },
            "markers": ["Subclinical autism traits"],
            "marker_min_score": 3,
        },
        {
            "key": "below_threshold",
            "min": 4,
            "max": 5,
            "severity": "below_threshold",
            "label": "Below clinical threshold",
            "percentile_floor": 35,
            "percentile_ceiling": 60,
            "sub_indicators": {
                "social": {"base": 2, "slope": 2.0},
                "sensory": {"base": 2, "slope": 1.5},
                "routine": {"base": 3, "slope": 2.0},
                "communication": {"base": 2, "slope": 1.0},
            },
            "markers": [
                "Some social processing differences",
                "Mild sensory sensitivities",
                "Structured thinking patterns",
            ],
        },
        {
            "key": "threshold",
            "min": 6,
            "max": 7,
            "severity": "threshold",
            "label": "Warrants assessment",
            "percentile_floor": 60,
            "percentile_ceiling": 80,
            "sub_indicators": {
                "social": {"base": 5, "slope": 2.0},
                "sensory": {"base": 4, "slope": 2.0},
                "routine": {"base": 6, "slope": 2.0},
                "communication": {"base": 4, "slope": 1.5},
            },
            "markers": [
                "Social communication differences",
                "Sensory processing patterns",
                "Preference for routine",
                "Detail-focused thinking",
            ],
        },
        {
            "key": "significant",
            "min": 8,
            "max": 10,
            "severity": "significant",
            "label": "High likelihood",
            "percentile_floor": 80,
            "percentile_ceiling": 100,
            "sub_indicators": {
                "social": {"base": 7, "slope": 1.0},
                "sensory": {"base": 6, "slope": 1.0},
                "routine": {"base": 8, "slope": 1.0},
                "communication": {"base": 6, "slope": 0.8},
            },
            "markers": [
                "Significant social communication differences",
                "Strong sensory processing patterns",
                "Clear routine preferences",
                "Systematic cognitive style",
            ],
        },
    ],
}

# ── Executive-function impact (mean percentile reduction) ────────────────────

EXECUTIVE_FUNCTION_IMPACT: dict[str, dict[str, float]] = {
    "working_memory": {"adhd_mean_reduction": 35, "autism_mean_reduction": 15},
    "cognitive_flexibility": {"adhd_mean_reduction": 40, "autism_mean_reduction": 45},
    "inhibitory_control": {"adhd_mean_reduction": 50, "autism_mean_reduction": 25},
    "planning": {"adhd_mean_reduction": 45, "autism_mean_reduction": 30},
}


BASELINE_NORMS: ResearchNorms = ResearchNorms.model_validate(
    {
        "version": "baseline",
        "traits": POPULATION_NORMS,
        "correlations": TRAIT_CORRELATIONS,
    }
)

DEFAULT_RESEARCH_NORMS: ResearchNorms = ResearchNorms.model_validate(
    {
        "version": "research-2024",
        "traits": POPULATION_NORMS,
        "correlations": TRAIT_CORRELATIONS,
        "instruments": {"attention": ASRS5_NORMS, "autism": AQ10_NORMS},
        "executive_function": EXECUTIVE_FUNCTION_IMPACT,
    }
)


def load_research_norms(path: str | Path) -> ResearchNorms:
    """Load and validate a research-norms JSON file.

    Raises
    ------
    ResearchNormsError
        If the file is missing, unreadable, or fails validation.
    """
    norms_path = Path(path)
    try:
        payload = norms_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ResearchNormsError(f"Cannot read research norms at {norms_path}: {exc}") from exc

    try:
        norms = ResearchNorms.model_validate_json(payload)
    except ValidationError as exc:
        raise ResearchNormsError(f"Invalid research norms in {norms_path}: {exc}") from exc

    logger.info(
        "research_norms_loaded",
        path=str(norms_path),
        version=norms.version,
        instruments=sorted(norms.instruments),
    )
    return norms
