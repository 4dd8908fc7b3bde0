"""
PsyScore — Optional collaborators.

The engine accepts two pluggable analysers at construction time.  When one
is not supplied a null object stands in, so the engine never has to check
whether a collaborator exists.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Optional, Protocol

from psyscore.schemas.responses import RawResponse
from psyscore.schemas.results import InteractionPattern, QualityReview


class QualityAssessor(Protocol):
    def review(self, responses: Sequence[RawResponse]) -> Optional[QualityReview]:
        ...


class DeepTraitAnalyzer(Protocol):
    def analyze(self, traits: Mapping[str, float]) -> list[InteractionPattern]:
        ...


class NullQualityAssessor:
    def review(self, responses: Sequence[RawResponse]) -> Optional[QualityReview]:
        return None


class NullTraitAnalyzer:
    def analyze(self, traits: Mapping[str, float]) -> list[InteractionPattern]:
        return []
