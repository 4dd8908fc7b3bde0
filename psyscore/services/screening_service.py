"""
PsyScore — Clinical Screening Modules

Attention (ASRS-5) and autism-spectrum (AQ-10) screeners.  Only responses
explicitly tagged with the instrument (or one of its subcategories) are
scored; trait answers are never used to extrapolate a screening result.

Three paths, reported in ``ClinicalScreeningResult.method``:

* ``norms``    — the research database defines the instrument: the summed
                 item values are rescaled to the canonical scale and mapped
                 through its interpretation bands.
* ``fallback`` — no research database: a simple average-based formula.
* ``no_data``  — no tagged item carries a numeric answer.

These are screening signals, not diagnoses.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Optional

import structlog

from psyscore.schemas.norms import ClinicalInstrumentNorms, InterpretationBand, ResearchNorms
from psyscore.schemas.responses import RawResponse
from psyscore.schemas.results import ClinicalScreeningResult
from psyscore.services.trait_aggregator import clamp, round_half_up

logger = structlog.get_logger("psyscore.screening_service")


@dataclass(frozen=True)
class FallbackBand:
    """Average-score band used when no research norms are configured."""

    min_average: float
    severity: str
    percentile_base: float
    percentile_slope: float
    multipliers: dict[str, float]
    markers: tuple[str, ...]
    capped: bool
    likelihood: str
    # Average at or above which the likelihood reads "Significant"
    significant_from: Optional[float] = None


@dataclass(frozen=True)
class ScreeningInstrument:
    key: str
    name: str
    tags: frozenset[str]
    subcategories: frozenset[str]
    items: int
    scale_max: int
    screening_cutoff: int
    sub_indicators: tuple[str, ...]
    # Highest band first
    fallback_bands: tuple[FallbackBand, ...]

    def claims(self, response: RawResponse) -> bool:
        return (
            response.instrument_tag in self.tags
            or response.subcategory_tag in self.subcategories
        )


ATTENTION = ScreeningInstrument(
    key="attention",
    name="ASRS-5",
    tags=frozenset({"ASRS-5", "ADHD"}),
    subcategories=frozenset({"executive_function"}),
    items=6,
    scale_max=24,
    screening_cutoff=14,
    sub_indicators=("inattention", "hyperactivity", "impulsivity"),
    fallback_bands=(
        FallbackBand(
            min_average=3.5,
            severity="moderate",
            percentile_base=70,
            percentile_slope=20,
            multipliers={"inattention": 1.8, "hyperactivity": 1.5, "impulsivity": 1.6},
            markers=(
                "Executive function challenges",
                "Attention regulation difficulties",
                "Task management issues",
            ),
            capped=True,
            likelihood="Moderate",
            significant_from=4.0,
        ),
        FallbackBand(
            min_average=2.5,
            severity="mild",
            percentile_base=40,
            percentile_slope=30,
            multipliers={"inattention": 1.2, "hyperactivity": 1.0, "impulsivity": 1.1},
            markers=("Some attention difficulties", "Mild executive function challenges"),
            capped=False,
            likelihood="Mild",
        ),
    ),
)

AUTISM = ScreeningInstrument(
    key="autism",
    name="AQ-10",
    tags=frozenset({"AQ-10", "Autism"}),
    subcategories=frozenset({"sensory_processing", "social_communication"}),
    items=10,
    scale_max=10,
    screening_cutoff=6,
    sub_indicators=("social", "sensory", "routine", "communication"),
    fallback_bands=(
        FallbackBand(
            min_average=3.5,
            severity="threshold",
            percentile_base=65,
            percentile_slope=20,
            multipliers={"social": 1.7, "sensory": 1.5, "routine": 1.8, "communication": 1.4},
            markers=(
                "Social communication differences",
                "Sensory processing patterns",
                "Systematic thinking preference",
            ),
            capped=True,
            likelihood="Moderate",
            significant_from=4.0,
        ),
        FallbackBand(
            min_average=2.5,
            severity="below_threshold",
            percentile_base=35,
            percentile_slope=30,
            multipliers={"social": 1.2, "sensory": 1.0, "routine": 1.3, "communication": 0.9},
            markers=("Some social processing differences", "Mild sensory sensitivities"),
            capped=False,
            likelihood="Mild",
        ),
    ),
)

SCREENING_INSTRUMENTS: tuple[ScreeningInstrument, ...] = (ATTENTION, AUTISM)

FALLBACK_ITEM_MAX: int = 4
SUB_INDICATOR_CAP: int = 10
MAX_PERCENTILE: float = 99.0


class ClinicalScreener:
    """Run every registered screening instrument over a response list."""

    def __init__(
        self,
        norms: ResearchNorms,
        instruments: tuple[ScreeningInstrument, ...] = SCREENING_INSTRUMENTS,
    ):
        self.norms = norms
        self.instruments = instruments

    def screen_all(self, responses: Sequence[RawResponse]) -> dict[str, ClinicalScreeningResult]:
        return {
            instrument.key: self.screen(instrument, responses)
            for instrument in self.instruments
        }

    def screen(
        self, instrument: ScreeningInstrument, responses: Sequence[RawResponse]
    ) -> ClinicalScreeningResult:
        tagged = [r for r in responses if instrument.claims(r)]
        if not any(r.raw_score is not None for r in tagged):
            logger.debug("screening_no_data", instrument=instrument.key, tagged=len(tagged))
            return ClinicalScreeningResult(instrument=instrument.name)

        # Unanswered tagged items count as zero
        values = [r.raw_score if r.raw_score is not None else 0.0 for r in tagged]
        total = sum(values)

        configured = self.norms.instrument(instrument.key)
        if configured is not None:
            result = self._screen_with_norms(configured, total, len(values))
        else:
            result = self._screen_fallback(instrument, total, len(values))

        logger.info(
            "screening_complete",
            instrument=result.instrument,
            method=result.method,
            normalized=result.normalized_score,
            severity=result.severity_band,
        )
        return result

    def coverage(self, responses: Sequence[RawResponse]) -> dict[str, float]:
        """Fraction of each instrument's items that were answered, capped at 1."""
        coverage: dict[str, float] = {}
        for instrument in self.instruments:
            configured = self.norms.instrument(instrument.key)
            expected = configured.items if configured is not None else instrument.items
            answered = sum(
                1 for r in responses if instrument.claims(r) and r.raw_score is not None
            )
            coverage[instrument.key] = round(min(1.0, answered / expected), 4)
        return coverage

    # ══════════════════════════════════════════════════════════════════════
    # Research-norms path
    # ══════════════════════════════════════════════════════════════════════

    def _screen_with_norms(
        self, norms: ClinicalInstrumentNorms, total: float, count: int
    ) -> ClinicalScreeningResult:
        proportion = total / (count * norms.item_max)
        normalized = int(clamp(round_half_up(proportion * norms.scale_max), norms.scale_min, norms.scale_max))
        band = norms.band_for(normalized)

        show_markers = band.marker_min_score is None or normalized >= band.marker_min_score
        return ClinicalScreeningResult(
            instrument=norms.name,
            raw_score=total,
            normalized_score=normalized,
            percentile=self.band_percentile(band, normalized),
            severity_band=band.severity,
            likelihood_label=band.label,
            sub_indicator_scores=self.band_sub_indicators(band, normalized),
            markers=list(band.markers) if show_markers else [],
            item_count=count,
            above_cutoff=normalized >= norms.screening_cutoff,
            method="norms",
        )

    @staticmethod
    def band_percentile(band: InterpretationBand, score: int) -> float:
        if band.max == band.min:
            percentile = band.percentile_floor
        else:
            position = (score - band.min) / (band.max - band.min)
            percentile = band.percentile_floor + position * (
                band.percentile_ceiling - band.percentile_floor
            )
        return round(clamp(percentile, 0.0, MAX_PERCENTILE), 1)

    @staticmethod
    def band_sub_indicators(band: InterpretationBand, score: int) -> dict[str, int]:
        scores: dict[str, int] = {}
        for name, formula in band.sub_indicators.items():
            # round() first so 3 × (1/3) floors to 1, not 0
            increment = math.floor(round((score - band.min) * formula.slope, 9))
            scores[name] = min(formula.cap, formula.base + increment)
        return scores

    # ══════════════════════════════════════════════════════════════════════
    # Fallback path (no research database)
    # ══════════════════════════════════════════════════════════════════════

    def _screen_fallback(
        self, instrument: ScreeningInstrument, total: float, count: int
    ) -> ClinicalScreeningResult:
        average = total / count
        normalized = int(
            clamp(round_half_up(average * instrument.scale_max / FALLBACK_ITEM_MAX), 0, instrument.scale_max)
        )
        base = ClinicalScreeningResult(
            instrument=instrument.name,
            raw_score=total,
            normalized_score=normalized,
            sub_indicator_scores={name: 0 for name in instrument.sub_indicators},
            item_count=count,
            above_cutoff=normalized >= instrument.screening_cutoff,
            method="fallback",
        )

        for band in instrument.fallback_bands:
            if average < band.min_average:
                continue
            sub_scores = {}
            for name, multiplier in band.multipliers.items():
                value = math.floor(average * multiplier)
                sub_scores[name] = min(SUB_INDICATOR_CAP, value) if band.capped else value
            percentile = band.percentile_base + (average - band.min_average) * band.percentile_slope
            return base.model_copy(
                update={
                    "percentile": round(clamp(percentile, 0.0, MAX_PERCENTILE), 1),
                    "severity_band": band.severity,
                    "likelihood_label": self._fallback_likelihood(band, average),
                    "sub_indicator_scores": sub_scores,
                    "markers": list(band.markers),
                }
            )
        return base

    @staticmethod
    def _fallback_likelihood(band: FallbackBand, average: float) -> str:
        if band.significant_from is not None and average >= band.significant_from:
            return "Significant"
        return band.likelihood
