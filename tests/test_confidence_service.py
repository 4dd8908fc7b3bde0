"""Unit tests for ConfidenceEngine."""
import pytest
from structlog.testing import capture_logs

from factories import make_trait_set
from psyscore.schemas.responses import RawResponse
from psyscore.services.confidence_service import ConfidenceEngine
from psyscore.services.quality_service import ResponseQualityAnalyzer


@pytest.fixture
def engine():
    return ConfidenceEngine()


def quality_for(scores, times=(3000, 6000, 4500, 9000, 7000)):
    responses = [
        RawResponse(trait="openness", raw_score=s, response_time_ms=times[i % len(times)])
        for i, s in enumerate(scores)
    ]
    return ResponseQualityAnalyzer().analyze(responses)


class TestAnalysisConfidence:
    """Tests for the response-count confidence steps."""

    @pytest.mark.parametrize("count,expected", [(0, 0.7), (29, 0.7), (30, 0.8), (49, 0.8), (50, 0.9), (500, 0.9)])
    def test_steps(self, count, expected):
        """+0.10 at 30 and at 50 responses."""
        assert ConfidenceEngine.analysis_confidence(count) == expected


class TestReliability:
    """Tests for the straight-lining reliability penalty."""

    def test_run_of_eight_is_fine(self):
        """A run of exactly 8 is not penalised."""
        assert ConfidenceEngine.reliability(8) == 1.0

    def test_longer_run_penalised(self):
        """Runs over 8 multiply reliability by 0.7."""
        assert ConfidenceEngine.reliability(9) == 0.7


class TestIntervals:
    """Tests for per-trait confidence intervals."""

    def test_margin_from_confidence(self, engine):
        """Margin is round((1 - confidence) × 10)."""
        interval = engine.interval(50, 0.7)
        assert (interval.lower, interval.upper) == (47, 53)
        assert interval.level_percent == 70

    def test_halves_round_up(self, engine):
        """Level and margin both round .5 upwards."""
        interval = engine.interval(50, 0.125)
        assert interval.level_percent == 13
        assert (interval.lower, interval.upper) == (41, 59)

    def test_clamped_at_top(self, engine):
        """Upper bound never exceeds 100."""
        interval = engine.interval(98, 0.5)
        assert (interval.lower, interval.upper) == (93, 100)

    def test_clamped_at_bottom(self, engine):
        """Lower bound never drops below 0."""
        interval = engine.interval(2, 0.5)
        assert (interval.lower, interval.upper) == (0, 7)

    def test_full_confidence_is_a_point(self, engine):
        """Confidence 1.0 collapses the interval to the score."""
        interval = engine.interval(64, 1.0)
        assert interval.lower == interval.upper == 64


class TestReport:
    """Tests for the assembled confidence report."""

    def test_clean_session(self, engine):
        """Clean 30-response session keeps full reliability."""
        quality = quality_for([2, 4, 3, 5, 1] * 6)
        report = engine.report(make_trait_set({}), quality, 30)
        assert report.analysis_confidence == 0.8
        assert report.reliability == 1.0
        assert report.overall == pytest.approx(0.8 * quality.confidence, abs=1e-4)
        assert set(report.intervals) == set(make_trait_set({}).traits)

    def test_straight_lining_reduces_reliability(self, engine):
        """Long identical run lowers reliability and overall, and logs it."""
        quality = quality_for([4] * 12)
        with capture_logs() as logs:
            report = engine.report(make_trait_set({}), quality, 12)
        assert report.reliability == 0.7
        assert report.overall == pytest.approx(0.7 * 0.7 * quality.confidence, abs=1e-4)
        assert any(entry["event"] == "reliability_reduced" for entry in logs)

    def test_intervals_use_analysis_confidence(self, engine):
        """Reduced reliability does not widen the trait intervals."""
        quality = quality_for([4] * 12)
        report = engine.report(make_trait_set({}), quality, 12)
        assert report.overall < report.analysis_confidence
        for interval in report.intervals.values():
            assert (interval.lower, interval.upper) == (47, 53)
            assert interval.level_percent == 70

    def test_values_in_unit_range(self, engine):
        """Every confidence figure stays within [0, 1]."""
        quality = quality_for([4] * 12, times=(900,))
        report = engine.report(make_trait_set({"openness": 100}), quality, 12)
        for value in (report.analysis_confidence, report.reliability, report.overall):
            assert 0.0 <= value <= 1.0
        assert report.intervals["openness"].upper == 100

    def test_coverage_carried(self, engine):
        """Instrument coverage is passed through unchanged."""
        report = engine.report(make_trait_set({}), quality_for([]), 0, {"attention": 0.5})
        assert report.instrument_coverage == {"attention": 0.5}
