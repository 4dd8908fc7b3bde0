"""
PsyScore — Correlation Estimator

Builds a symmetric 5×5 trait correlation matrix from research priors,
attenuated by how far apart the two trait scores sit:

    r_ij = base_ij × (1 - 0.3 × |s_i - s_j| / 100)

Pairs without a prior are 0; the diagonal is 1.0.
"""

from __future__ import annotations

from itertools import combinations

from psyscore.schemas.norms import ResearchNorms
from psyscore.schemas.results import CorrelationMatrix, TraitScoreSet


class CorrelationEstimator:
    ATTENUATION: float = 0.3

    def __init__(self, norms: ResearchNorms):
        self._priors: dict[frozenset[str], float] = {
            frozenset(pair.traits): pair.coefficient for pair in norms.correlations
        }

    def prior(self, trait_a: str, trait_b: str) -> float:
        if trait_a == trait_b:
            return 1.0
        return self._priors.get(frozenset((trait_a, trait_b)), 0.0)

    def estimate(self, traits: TraitScoreSet) -> CorrelationMatrix:
        scores = traits.as_vector()
        names = list(scores)
        matrix: dict[str, dict[str, float]] = {name: {name: 1.0} for name in names}

        for trait_a, trait_b in combinations(names, 2):
            distance = abs(scores[trait_a] - scores[trait_b]) / 100
            r = self.prior(trait_a, trait_b) * (1 - self.ATTENUATION * distance)
            r = round(max(-1.0, min(1.0, r)), 4)
            matrix[trait_a][trait_b] = r
            matrix[trait_b][trait_a] = r

        return CorrelationMatrix(coefficients=matrix)
