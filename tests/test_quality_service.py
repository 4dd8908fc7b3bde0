"""Unit tests for ResponseQualityAnalyzer — response-style and timing flags."""
import pytest

from psyscore.schemas.responses import RawResponse
from psyscore.services.quality_service import ResponseQualityAnalyzer, summarize_quality


@pytest.fixture
def analyzer():
    return ResponseQualityAnalyzer()


def answers(scores, times=None):
    times = times or [3000, 5000, 7000, 9000, 4000, 6000, 8000, 3500, 5500, 7500]
    return [
        RawResponse(
            question_id=f"q{i}",
            trait="openness",
            raw_score=score,
            response_time_ms=times[i % len(times)],
        )
        for i, score in enumerate(scores)
    ]


class TestCleanSessions:
    """Tests for sessions that should raise no flags."""

    def test_empty_input_is_neutral(self, analyzer):
        """No responses: full scores and fallback timing."""
        result = analyzer.analyze([])
        assert result.consistency == 1.0
        assert result.authenticity == 1.0
        assert result.confidence == 1.0
        assert result.patterns == []
        assert result.timing.average_ms == 5000
        assert result.timing.rush_threshold_ms == 1500
        assert result.timing.total_responses == 0

    def test_varied_session_raises_no_flags(self, analyzer):
        """Varied answers and times stay clean."""
        result = analyzer.analyze(answers([2, 4, 3, 2, 4, 5, 1, 3, 4, 2]))
        assert result.patterns == []
        assert result.confidence == 1.0


class TestResponseStyle:
    """Tests for straight-lining, extreme and midpoint responding."""

    def test_longest_identical_run(self):
        """Longest run of equal consecutive answers."""
        assert ResponseQualityAnalyzer.longest_identical_run(answers([1, 1, 2, 2, 2, 3])) == 3
        assert ResponseQualityAnalyzer.longest_identical_run(answers([4])) == 1
        assert ResponseQualityAnalyzer.longest_identical_run([]) == 0

    def test_run_of_five_not_flagged(self, analyzer):
        """Five identical answers are below the flag threshold."""
        result = analyzer.analyze(answers([4, 4, 4, 4, 4, 2]))
        assert "straight_lining" not in result.patterns

    def test_straight_lining(self, analyzer):
        """Six identical answers cost 0.2 consistency."""
        result = analyzer.analyze(answers([4] * 6, [3000, 5000, 7000, 9000, 4000, 6000]))
        assert result.patterns == ["straight_lining"]
        assert result.consistency == pytest.approx(0.8)
        assert result.authenticity == 1.0
        assert result.confidence == pytest.approx(0.9)
        assert result.details["longest_identical_run"] == 6

    def test_extreme_responding(self, analyzer):
        """Only 1s and 5s flags extreme responding."""
        result = analyzer.analyze(answers([1, 5] * 5))
        assert result.patterns == ["extreme_responding"]
        assert result.authenticity == pytest.approx(0.85)
        assert result.details["extreme_rate"] == 1.0

    def test_midpoint_responding(self, analyzer):
        """Mostly 3s flags midpoint responding."""
        result = analyzer.analyze(answers([3, 3, 2, 3, 3, 4, 3, 3, 2, 3]))
        assert result.patterns == ["midpoint_responding"]
        assert result.authenticity == pytest.approx(0.85)


class TestTiming:
    """Tests for response-time analysis."""

    def test_rushed_responses(self, analyzer):
        """40% of answers under the rush threshold flags rushing."""
        result = analyzer.analyze(answers([2, 4] * 5, [500] * 4 + [5000] * 6))
        assert result.timing.average_ms == 3200
        assert result.timing.rush_threshold_ms == 1500
        assert result.timing.rushed_fraction == pytest.approx(0.4)
        assert result.patterns == ["rushed_responses"]
        assert result.authenticity == pytest.approx(0.75)

    def test_average_rounds_half_up(self, analyzer):
        """A .5 ms mean rounds upwards."""
        result = analyzer.analyze(answers([2, 4], [1000, 2001]))
        assert result.timing.average_ms == 1501

    def test_uniform_timing(self, analyzer):
        """Identical times flag uniform timing."""
        result = analyzer.analyze(answers([2, 4] * 5, [4000]))
        assert result.patterns == ["uniform_timing"]
        assert result.consistency == pytest.approx(0.9)

    def test_rushed_completion(self, analyzer):
        """Average under 2 s flags rushed completion."""
        result = analyzer.analyze(answers([2, 4] * 5, [1800]))
        assert result.patterns == ["uniform_timing", "rushed_completion"]
        assert result.authenticity == pytest.approx(0.8)
        assert result.consistency == pytest.approx(0.9)

    def test_deliberate_pattern(self, analyzer):
        """Slow answers are noted but not penalised."""
        result = analyzer.analyze(answers([2, 4] * 5, [8000, 10000]))
        assert result.timing.average_ms == 9000
        assert result.timing.patterns == ["deliberate_responding"]
        assert result.patterns == []

    def test_fastest_and_slowest(self, analyzer):
        """Extremes of the response times are reported."""
        result = analyzer.analyze(answers([2, 4, 3], [3000, 12000, 6000]))
        assert result.timing.fastest_ms == 3000
        assert result.timing.slowest_ms == 12000


class TestSummary:
    """Tests for summarize_quality."""

    def test_summary_fields(self, analyzer):
        """Summary lists flags and average time."""
        summary = summarize_quality(analyzer.analyze(answers([2, 4] * 5, [1800])))
        assert summary["flags"] == ["uniform_timing", "rushed_completion"]
        assert summary["average_ms"] == 1800

    def test_summary_of_none(self):
        """No assessment summarizes to an empty dict."""
        assert summarize_quality(None) == {}
