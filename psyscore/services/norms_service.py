"""
PsyScore — Population Normalizer

Places each trait score against the population norms of the active research
configuration:

    z = (score - mean) / std_dev

The z-score is mapped to a percentile through a fixed step table (a coarse
approximation of the normal CDF) and then to a descriptive band.
"""

from __future__ import annotations

import math
from typing import Any, Optional

import structlog

from psyscore.schemas.norms import ResearchNorms, TraitNorm
from psyscore.schemas.responses import coerce_number
from psyscore.schemas.results import PercentileResult, TraitScoreSet

logger = structlog.get_logger("psyscore.norms_service")


class PopulationNormalizer:
    """Z-score / percentile / band for each trait."""

    # (upper z bound, percentile), evaluated in order
    PERCENTILE_STEPS: tuple[tuple[float, int], ...] = (
        (-2.5, 1),
        (-2.0, 2),
        (-1.5, 7),
        (-1.0, 16),
        (-0.5, 31),
        (0.0, 50),
        (0.5, 69),
        (1.0, 84),
        (1.5, 93),
        (2.0, 98),
    )
    TOP_PERCENTILE: int = 99
    NEUTRAL_PERCENTILE: int = 50

    # (lower percentile bound, band)
    BANDS: tuple[tuple[int, str], ...] = (
        (95, "exceptionally_high"),
        (85, "very_high"),
        (70, "above_average"),
        (30, "average"),
        (15, "below_average"),
        (5, "very_low"),
    )
    LOWEST_BAND: str = "exceptionally_low"

    def __init__(self, norms: ResearchNorms):
        self.norms = norms

    def normalize(self, traits: TraitScoreSet) -> dict[str, PercentileResult]:
        return {
            name: self.percentile_result(name, trait.score)
            for name, trait in traits.traits.items()
        }

    def percentile_result(self, trait: str, score: Any) -> PercentileResult:
        norm = self.norms.traits.get(trait)
        value = coerce_number(score)
        z = self.z_score(value, norm)

        if z is None:
            logger.debug("percentile_neutral", trait=trait, has_norm=norm is not None)
            percentile = self.NEUTRAL_PERCENTILE
            z = 0.0
        else:
            percentile = self.percentile_from_z(z)

        return PercentileResult(
            trait=trait,
            score=value if value is not None else 0.0,
            z_score=round(z, 4),
            percentile=percentile,
            band=self.band(percentile),
            population_mean=norm.mean if norm is not None else None,
        )

    @staticmethod
    def z_score(score: Optional[float], norm: Optional[TraitNorm]) -> Optional[float]:
        """``None`` when no meaningful z-score exists."""
        if score is None or norm is None or norm.std_dev <= 0:
            return None
        z = (score - norm.mean) / norm.std_dev
        return z if math.isfinite(z) else None

    @classmethod
    def percentile_from_z(cls, z: float) -> int:
        percentile = cls.TOP_PERCENTILE
        for bound, step in cls.PERCENTILE_STEPS:
            if z <= bound:
                percentile = step
                break
        return max(1, min(99, percentile))

    @classmethod
    def band(cls, percentile: float) -> str:
        for lower, label in cls.BANDS:
            if percentile >= lower:
                return label
        return cls.LOWEST_BAND
