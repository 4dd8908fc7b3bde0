"""Unit tests for ResponseQualityAssessor — the optional detailed quality review."""
import pytest

from psyscore.schemas.responses import RawResponse
from psyscore.services.collaborators import NullQualityAssessor
from psyscore.services.quality_assessor import ResponseQualityAssessor

TRAIT_CYCLE = ["openness", "conscientiousness", "extraversion", "agreeableness", "neuroticism"]


@pytest.fixture
def assessor():
    return ResponseQualityAssessor()


def session(scores, times, traits=None):
    traits = traits or TRAIT_CYCLE
    return [
        RawResponse(
            question_id=f"q{i}",
            trait=traits[i % len(traits)],
            raw_score=score,
            response_time_ms=times[i % len(times)],
        )
        for i, score in enumerate(scores)
    ]


GOOD_SCORES = [2, 3, 4, 3, 2, 4, 3, 4, 2, 3]
GOOD_TIMES = [3000, 6000, 4500, 9000, 2500, 7000, 5000, 12000, 3500, 8000]


class TestReview:
    """Tests for the full quality review."""

    def test_empty_input(self, assessor):
        """No responses, no review."""
        assert assessor.review([]) is None

    def test_thoughtful_session(self, assessor):
        """Varied, well-timed answers are valid."""
        review = assessor.review(session(GOOD_SCORES, GOOD_TIMES))
        assert review.valid
        assert review.overall_score == 1.0
        assert review.suspicious_patterns == []
        assert review.warnings == []
        assert review.reliability == 1.0
        assert set(review.metric_scores) == {
            "response_time", "consistency", "patterns", "completeness", "engagement",
        }

    def test_speed_running_invalidates(self, assessor):
        """Uniformly fast answers invalidate the session."""
        review = assessor.review(session(GOOD_SCORES, [1000]))
        types = [p.type for p in review.suspicious_patterns]
        assert "speed_running" in types
        assert not review.valid
        assert any(w.level == "high" for w in review.warnings)

    def test_random_clicking(self, assessor):
        """Cycling through the scale is flagged as random clicking."""
        review = assessor.review(session([1, 2, 3, 4, 5] * 2, GOOD_TIMES))
        assert "random_clicking" in [p.type for p in review.suspicious_patterns]

    def test_social_desirability(self, assessor):
        """Maximal A and C answers flag social desirability."""
        responses = session(
            [5] * 6, GOOD_TIMES, traits=["agreeableness", "conscientiousness"]
        )
        review = assessor.review(responses)
        [pattern] = [p for p in review.suspicious_patterns if p.type == "social_desirability"]
        assert pattern.confidence == 0.8
        assert pattern.impact == "medium"

    def test_middle_bias_recommendation(self, assessor):
        """Middle bias adds a recommendation."""
        review = assessor.review(session([3] * 8 + [2, 4], GOOD_TIMES))
        assert "middle_bias" in review.response_patterns
        assert "Try to avoid defaulting to neutral responses" in review.recommendations


class TestMetrics:
    """Tests for the individual quality metrics."""

    def test_timing_score_penalises_fast_uniform_answers(self):
        """Fast uniform times score low."""
        assert ResponseQualityAssessor.timing_score([500, 500, 500]) == pytest.approx(0.24)

    def test_timing_score_optimal(self):
        """Well-spread times score 1.0."""
        assert ResponseQualityAssessor.timing_score(GOOD_TIMES) == 1.0

    def test_completeness(self):
        """Completeness is answered over total."""
        responses = session([4, None, 2, 3], GOOD_TIMES)
        assert ResponseQualityAssessor.completeness_score(responses) == 0.75

    def test_entropy(self):
        """Entropy is zero for constant answers."""
        assert ResponseQualityAssessor.entropy([4, 4, 4, 4]) == 0.0
        assert ResponseQualityAssessor.entropy([1, 2, 3, 4, 5]) > 2.2

    def test_zigzagging(self):
        """Alternating extremes flag zigzagging."""
        score, patterns = ResponseQualityAssessor.response_pattern_score([1, 5, 1, 5, 1, 5])
        assert "zigzagging" in patterns
        assert score < 1.0


class TestNullAssessor:
    """Tests for the no-op assessor."""

    def test_returns_none(self):
        """Null assessor never reviews."""
        assert NullQualityAssessor().review(session(GOOD_SCORES, GOOD_TIMES)) is None
