"""
PsyScore — Response input records.

``RawResponse`` is deliberately lenient: scoring must never fail on a
malformed answer, so unparseable values are coerced to documented defaults
during validation instead of raising.
"""

from __future__ import annotations

import math
from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

BIG_FIVE_TRAITS: tuple[str, ...] = (
    "openness",
    "conscientiousness",
    "extraversion",
    "agreeableness",
    "neuroticism",
)

LIKERT_MIN: int = 1
LIKERT_MAX: int = 5
LIKERT_MIDPOINT: int = 3
DEFAULT_RESPONSE_TIME_MS: float = 5000.0
DEFAULT_ITEM_WEIGHT: float = 1.0


def coerce_number(value: Any) -> Optional[float]:
    """Return ``value`` as a finite float, or ``None`` when it is not one."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


class RawResponse(BaseModel):
    """One answered item, immutable for the lifetime of a session."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    question_id: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("question_id", "questionId", "id"),
    )
    trait: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("trait", "category"),
    )
    raw_score: Optional[float] = Field(
        default=None,
        validation_alias=AliasChoices("raw_score", "rawScore", "score", "answer", "value"),
    )
    reverse_coded: bool = Field(
        default=False,
        validation_alias=AliasChoices("reverse_coded", "reverseCoded", "reverse"),
    )
    response_time_ms: float = Field(
        default=DEFAULT_RESPONSE_TIME_MS,
        validation_alias=AliasChoices("response_time_ms", "responseTimeMs", "responseTime"),
    )
    item_weight: float = Field(
        default=DEFAULT_ITEM_WEIGHT,
        validation_alias=AliasChoices("item_weight", "itemWeight", "weight"),
    )
    instrument_tag: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("instrument_tag", "instrumentTag", "instrument"),
    )
    subcategory_tag: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("subcategory_tag", "subcategoryTag", "subcategory"),
    )

    # ── Lenient coercion ──────────────────────────────────────────────

    @field_validator("question_id", mode="before")
    @classmethod
    def _coerce_question_id(cls, v: Any) -> Optional[str]:
        if v is None:
            return None
        return str(v)

    @field_validator("trait", mode="before")
    @classmethod
    def _normalise_trait(cls, v: Any) -> Optional[str]:
        if not isinstance(v, str):
            return None
        normalised = v.strip().lower()
        return normalised or None

    @field_validator("raw_score", mode="before")
    @classmethod
    def _coerce_raw_score(cls, v: Any) -> Optional[float]:
        return coerce_number(v)

    @field_validator("reverse_coded", mode="before")
    @classmethod
    def _coerce_reverse(cls, v: Any) -> bool:
        if isinstance(v, str):
            return v.strip().lower() in {"true", "1", "yes", "y"}
        return bool(v)

    @field_validator("response_time_ms", mode="before")
    @classmethod
    def _coerce_response_time(cls, v: Any) -> float:
        number = coerce_number(v)
        if number is None or number <= 0:
            return DEFAULT_RESPONSE_TIME_MS
        return number

    @field_validator("item_weight", mode="before")
    @classmethod
    def _coerce_item_weight(cls, v: Any) -> float:
        number = coerce_number(v)
        if number is None or number <= 0:
            return DEFAULT_ITEM_WEIGHT
        return number

    @field_validator("instrument_tag", "subcategory_tag", mode="before")
    @classmethod
    def _coerce_tag(cls, v: Any) -> Optional[str]:
        if v is None:
            return None
        tag = str(v).strip()
        return tag or None

    # ── Derived values ────────────────────────────────────────────────

    @property
    def has_big_five_trait(self) -> bool:
        return self.trait in BIG_FIVE_TRAITS

    @property
    def likert_score(self) -> int:
        """Raw score on the 1-5 scale; missing or unparseable -> midpoint."""
        if self.raw_score is None:
            return LIKERT_MIDPOINT
        return max(LIKERT_MIN, min(LIKERT_MAX, int(self.raw_score)))


class WeightedItem(RawResponse):
    """A Big-Five response with its reverse-coded score and weights."""

    adjusted_score: int
    time_weight: float
    combined_weight: float


class SessionMetadata(BaseModel):
    """Optional context supplied alongside the responses."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    age: Optional[int] = None
    tier: str = "standard"

    @field_validator("age", mode="before")
    @classmethod
    def _coerce_age(cls, v: Any) -> Optional[int]:
        number = coerce_number(v)
        if number is None or number < 0:
            return None
        return int(number)

    @field_validator("tier", mode="before")
    @classmethod
    def _coerce_tier(cls, v: Any) -> str:
        if not isinstance(v, str) or not v.strip():
            return "standard"
        return v.strip().lower()
