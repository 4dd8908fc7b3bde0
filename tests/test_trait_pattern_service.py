"""Unit tests for TraitInteractionAnalyzer."""
import pytest

from psyscore.services.collaborators import NullTraitAnalyzer
from psyscore.services.trait_pattern_service import TraitInteractionAnalyzer


@pytest.fixture
def analyzer():
    return TraitInteractionAnalyzer()


def vector(**scores):
    base = dict.fromkeys(
        ["openness", "conscientiousness", "extraversion", "agreeableness", "neuroticism"], 50.0
    )
    base.update(scores)
    return base


class TestPatterns:
    """Tests for interaction pattern detection."""

    def test_creative_disciplined(self, analyzer):
        """High O and C yield creative_disciplined with mean-distance strength."""
        [pattern] = analyzer.analyze(vector(openness=65, conscientiousness=70))
        assert pattern.pattern == "creative_disciplined"
        assert pattern.strength == 92.5

    def test_stable_leader(self, analyzer):
        """High C with low N yields stable_leader."""
        [pattern] = analyzer.analyze(vector(conscientiousness=75, neuroticism=25))
        assert pattern.pattern == "stable_leader"
        assert pattern.strength == 95.0

    def test_low_threshold_is_inclusive(self, analyzer):
        """Extraversion exactly at 30 still counts as low."""
        patterns = analyzer.analyze(vector(agreeableness=70, extraversion=30))
        assert [p.pattern for p in patterns] == ["empathetic_introvert"]
        assert patterns[0].strength == 100.0

    def test_several_patterns(self, analyzer):
        """Every matching pattern is reported."""
        patterns = analyzer.analyze(vector(openness=80, extraversion=80, agreeableness=80))
        assert {p.pattern for p in patterns} == {
            "social_caring", "analytical_social",
        }

    def test_neutral_profile(self, analyzer):
        """All-50 profile matches nothing."""
        assert analyzer.analyze(vector()) == []


class TestNullAnalyzer:
    """Tests for the no-op analyzer."""

    def test_returns_nothing(self):
        """Null analyzer never reports patterns."""
        assert NullTraitAnalyzer().analyze(vector(openness=90, conscientiousness=90)) == []
