"""Unit tests for TraitAggregator — weighted means onto the 0-100 scale."""
import pytest
from structlog.testing import capture_logs

from psyscore.schemas.responses import RawResponse
from psyscore.services.response_normalizer import ResponseNormalizer
from psyscore.services.trait_aggregator import TraitAggregator, clamp, round_half_up


@pytest.fixture
def aggregator():
    return TraitAggregator()


def weighted(trait, scores, time_ms=5000, reverse=False):
    normalizer = ResponseNormalizer()
    return [
        normalizer.weight_item(
            RawResponse(trait=trait, raw_score=s, response_time_ms=time_ms, reverse_coded=reverse)
        )
        for s in scores
    ]


class TestRounding:
    """Tests for round_half_up and clamp."""

    def test_half_rounds_up(self):
        """Exact halves round upwards."""
        assert round_half_up(2.5) == 3
        assert round_half_up(0.5) == 1
        assert round_half_up(97.5) == 98

    def test_below_half_rounds_down(self):
        """Fractions under .5 round down."""
        assert round_half_up(26.25) == 26

    def test_clamp(self):
        """clamp bounds values on both sides."""
        assert clamp(120, 0, 100) == 100
        assert clamp(-4, 0, 100) == 0
        assert clamp(42, 0, 100) == 42


class TestScoreFormula:
    """round((mean - 1) × 25 × 0.95 + 2.5)."""

    @pytest.mark.parametrize("likert,expected", [(1, 3), (2, 26), (3, 50), (4, 74), (5, 98)])
    def test_uniform_answers(self, aggregator, likert, expected):
        """Uniform answers map through the score formula."""
        assert aggregator.score_items(weighted("openness", [likert] * 4)) == expected

    def test_time_weights_shift_mean(self, aggregator):
        """Rushed answers count for less."""
        # (5×1.0 + 1×0.7) / 1.7 = 3.353 -> 58.38
        items = weighted("openness", [5]) + weighted("openness", [1], time_ms=1000)
        assert aggregator.score_items(items) == 58

    def test_reverse_coded_items(self, aggregator):
        """Reverse-coded 1s score like forward 5s."""
        assert aggregator.score_items(weighted("neuroticism", [1, 1], reverse=True)) == 98

    def test_scores_stay_in_range(self, aggregator):
        """Scores stay within 0-100 for any Likert value."""
        for likert in range(-5, 12):
            score = aggregator.score_items(weighted("openness", [likert]))
            assert 0 <= score <= 100


class TestAggregate:
    """Tests for per-trait aggregation."""

    def test_empty_trait_defaults_to_50(self, aggregator):
        """Traits without items default to 50."""
        result = aggregator.aggregate({"openness": weighted("openness", [5, 5])})
        assert result["openness"].score == 98
        assert result["openness"].item_count == 2
        assert result["conscientiousness"].score == 50
        assert result["conscientiousness"].defaulted is True

    def test_defaulted_trait_logged(self, aggregator):
        """Each defaulted trait logs a warning."""
        with capture_logs() as logs:
            aggregator.aggregate({})
        events = [entry for entry in logs if entry["event"] == "trait_defaulted"]
        assert len(events) == 5

    def test_default_set(self, aggregator):
        """default_set puts every trait at 50."""
        result = aggregator.default_set()
        assert result.as_vector() == {
            "openness": 50.0,
            "conscientiousness": 50.0,
            "extraversion": 50.0,
            "agreeableness": 50.0,
            "neuroticism": 50.0,
        }

    @pytest.mark.parametrize(
        "score,level", [(0, "low"), (32, "low"), (33, "medium"), (66, "medium"), (67, "high")]
    )
    def test_levels(self, score, level):
        """Scores map onto the five level labels."""
        assert TraitAggregator.level(score) == level
