"""
PsyScore — Research norms configuration models.

The "research database" the engine consults: per-trait population norms,
known trait correlations, clinical instrument interpretation bands and the
executive-function impact table.  Every model is frozen and every mapping is
exposed read-only, so a loaded configuration cannot be altered at runtime.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator, model_validator


class _FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


def _read_only(value: Mapping[str, Any]) -> Mapping[str, Any]:
    return MappingProxyType(dict(value))


class TraitNorm(_FrozenModel):
    mean: float
    std_dev: float = Field(ge=0.0)


class TraitCorrelation(_FrozenModel):
    traits: tuple[str, str]
    coefficient: float = Field(ge=-1.0, le=1.0)

    @model_validator(mode="after")
    def _distinct_traits(self) -> "TraitCorrelation":
        if self.traits[0] == self.traits[1]:
            raise ValueError(f"Correlation pair must name two traits, got {self.traits}")
        return self


class SubIndicatorFormula(_FrozenModel):
    """``min(cap, base + floor((score - band.min) * slope))``."""

    base: int = 0
    slope: float = 0.0
    cap: int = 10


class InterpretationBand(_FrozenModel):
    key: str
    min: int
    max: int
    severity: str
    label: str
    percentile_floor: float = Field(ge=0.0, le=100.0)
    percentile_ceiling: float = Field(ge=0.0, le=100.0)
    sub_indicators: Mapping[str, SubIndicatorFormula] = Field(
        default_factory=dict, validate_default=True
    )
    markers: tuple[str, ...] = ()
    marker_min_score: Optional[int] = None

    @field_validator("sub_indicators", mode="after")
    @classmethod
    def _freeze_sub_indicators(
        cls, v: Mapping[str, SubIndicatorFormula]
    ) -> Mapping[str, SubIndicatorFormula]:
        return _read_only(v)

    @field_serializer("sub_indicators")
    def _dump_sub_indicators(self, v: Mapping[str, SubIndicatorFormula]) -> dict[str, Any]:
        return dict(v)

    @model_validator(mode="after")
    def _ordered_bounds(self) -> "InterpretationBand":
        if self.min > self.max:
            raise ValueError(f"Band {self.key!r} has min {self.min} > max {self.max}")
        if self.percentile_floor > self.percentile_ceiling:
            raise ValueError(f"Band {self.key!r} has an inverted percentile range")
        return self


class ClinicalInstrumentNorms(_FrozenModel):
    name: str
    description: str = ""
    items: int = Field(gt=0)
    item_max: int = Field(gt=0)
    scale_min: int = 0
    scale_max: int
    screening_cutoff: int
    cronbach_alpha: Optional[float] = None
    bands: tuple[InterpretationBand, ...]

    @model_validator(mode="after")
    def _bands_cover_scale(self) -> "ClinicalInstrumentNorms":
        if not self.bands:
            raise ValueError(f"Instrument {self.name!r} defines no interpretation bands")
        ordered = sorted(self.bands, key=lambda b: b.min)
        if ordered[0].min != self.scale_min or ordered[-1].max != self.scale_max:
            raise ValueError(
                f"Instrument {self.name!r} bands must span "
                f"{self.scale_min}-{self.scale_max}"
            )
        for lower, upper in zip(ordered, ordered[1:]):
            if upper.min != lower.max + 1:
                raise ValueError(
                    f"Instrument {self.name!r} bands {lower.key!r} and "
                    f"{upper.key!r} overlap or leave a gap"
                )
        if not self.scale_min <= self.screening_cutoff <= self.scale_max:
            raise ValueError(f"Instrument {self.name!r} cutoff lies outside its scale")
        return self

    def band_for(self, score: int) -> InterpretationBand:
        """Return the band containing ``score`` (clamped onto the scale)."""
        clamped = max(self.scale_min, min(self.scale_max, score))
        for band in self.bands:
            if band.min <= clamped <= band.max:
                return band
        raise LookupError(f"No band for score {score} on {self.name}")


class ExecutiveFunctionImpact(_FrozenModel):
    adhd_mean_reduction: float
    autism_mean_reduction: float


class ResearchNorms(_FrozenModel):
    version: str = "baseline"
    traits: Mapping[str, TraitNorm]
    correlations: tuple[TraitCorrelation, ...] = ()
    instruments: Mapping[str, ClinicalInstrumentNorms] = Field(default_factory=dict, validate_default=True)
    executive_function: Mapping[str, ExecutiveFunctionImpact] = Field(default_factory=dict, validate_default=True)

    @field_validator("traits", "instruments", "executive_function", mode="after")
    @classmethod
    def _freeze_tables(cls, v: Mapping[str, Any]) -> Mapping[str, Any]:
        return _read_only(v)

    @field_serializer("traits", "instruments", "executive_function")
    def _dump_tables(self, v: Mapping[str, Any]) -> dict[str, Any]:
        return dict(v)

    @property
    def has_research_data(self) -> bool:
        return bool(self.instruments)

    def instrument(self, key: str) -> Optional[ClinicalInstrumentNorms]:
        return self.instruments.get(key)
