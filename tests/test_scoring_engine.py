"""Integration tests for ScoringEngine — the full scoring pipeline."""
import json
import random

import pytest

from factories import make_response, make_session
from psyscore.archetypes import ARCHETYPES
from psyscore.config import Settings
from psyscore.exceptions import ResearchNormsError
from psyscore.schemas.results import InteractionPattern
from psyscore.services.scoring_service import ScoringEngine


def clinical_items(instrument, value, count):
    return [
        make_response("neurodiversity", value, 6000, instrument=instrument, questionId=f"{instrument}-{i}")
        for i in range(count)
    ]


class TestEmptyInput:
    """Tests for empty and malformed input."""

    @pytest.mark.parametrize("responses", [[], None])
    def test_defaults(self, baseline_engine, responses):
        """No responses yields the all-default result."""
        result = baseline_engine.score(responses)
        assert result.response_count == 0
        assert set(result.traits.as_vector().values()) == {50.0}
        assert result.archetype.name == "Adaptive Generalist"
        assert result.confidence.overall == pytest.approx(0.7)
        for screening in result.screenings.values():
            assert screening.likelihood_label == "Low"
            assert screening.method == "no_data"

    def test_garbage_does_not_raise(self, baseline_engine):
        """Malformed items are skipped, never raised."""
        result = baseline_engine.score([42, "x", None, {"score": "abc"}, {"trait": 5}])
        assert result.response_count == 2
        assert result.traits["openness"].defaulted


class TestPipeline:
    """Tests for the nine-step pipeline end to end."""

    def test_strategic_innovator(self, baseline_engine, strategic_session):
        """High O and C session scores as Strategic Innovator."""
        result = baseline_engine.score(strategic_session)
        assert result.traits["openness"].score == 98
        assert result.traits["conscientiousness"].score == 98
        assert result.traits["neuroticism"].score == 26
        assert result.archetype.name == "Strategic Innovator"
        assert result.response_count == 30
        assert result.confidence.analysis_confidence == 0.8

    def test_percentiles_and_correlations(self, baseline_engine, strategic_session):
        """Every trait gets a percentile and a unit diagonal."""
        result = baseline_engine.score(strategic_session)
        assert set(result.percentiles) == set(result.traits.traits)
        assert result.percentiles["openness"].percentile == 99
        assert result.correlations.coefficient("openness", "openness") == 1.0

    def test_intervals_follow_response_count(self, baseline_engine):
        """60 responses give a ±1 interval at the 90% level."""
        session = make_session(
            {trait: 4 for trait in (
                "openness", "conscientiousness", "extraversion", "agreeableness", "neuroticism",
            )},
            per_trait=12,
        )
        result = baseline_engine.score(session)
        interval = result.confidence.intervals["openness"]
        assert result.response_count == 60
        assert result.traits["openness"].score == 74
        assert (interval.lower, interval.upper) == (73, 75)
        assert interval.level_percent == 90
        assert result.confidence.overall < result.confidence.analysis_confidence

    def test_metadata_echoed(self, baseline_engine):
        """Age and tier are normalized and echoed back."""
        result = baseline_engine.score([], {"age": "34", "tier": "Premium"})
        assert result.metadata.age == 34
        assert result.metadata.tier == "premium"

    def test_fallback_screening_without_research_data(self, baseline_engine, strategic_session):
        """Baseline norms fall back to the raw-mean screening."""
        result = baseline_engine.score(strategic_session + clinical_items("ASRS-5", 4, 6))
        assert result.norms_version == "baseline"
        assert result.screenings["attention"].method == "fallback"
        assert result.screenings["attention"].likelihood_label == "Significant"
        assert result.executive_function.method == "fallback"

    def test_research_screening(self, research_engine, strategic_session):
        """Research norms band both instruments and drive the profiles."""
        responses = strategic_session + clinical_items("ASRS-5", 3, 6) + clinical_items("AQ-10", 1, 10)
        result = research_engine.score(responses)
        assert result.norms_version == "research-2024"
        assert result.screenings["attention"].severity_band == "moderate"
        assert result.screenings["autism"].severity_band == "significant"
        assert result.confidence.instrument_coverage == {"attention": 1.0, "autism": 1.0}
        assert result.executive_function.method == "research"
        assert result.sensory_profile.avoidance == "more than most"

    def test_clinical_items_do_not_move_traits(self, research_engine, strategic_session):
        """Clinical items never feed the Big-Five aggregation."""
        plain = research_engine.score(strategic_session)
        mixed = research_engine.score(strategic_session + clinical_items("ADHD", 4, 6))
        assert plain.traits == mixed.traits

    def test_result_is_json_serialisable(self, research_engine, strategic_session):
        """The result dumps to JSON."""
        payload = json.loads(research_engine.score(strategic_session).model_dump_json())
        assert payload["archetype"]["name"] == "Strategic Innovator"


class TestResultIsolation:
    """Tests that results do not share state with the catalog."""

    def test_archetype_strengths_cannot_be_mutated(self, baseline_engine):
        """Result archetype collections are immutable; the catalog is unchanged."""
        catalog_strengths = tuple(ARCHETYPES["adaptive_generalist"].strengths)
        result = baseline_engine.score([])
        with pytest.raises(AttributeError):
            result.archetype.strengths.append("Injected")
        assert ARCHETYPES["adaptive_generalist"].strengths == catalog_strengths
        assert baseline_engine.score([]).archetype.strengths == catalog_strengths


class TestDeterminism:
    """Tests for reproducible output."""

    def test_default_engine_is_deterministic(self, strategic_session):
        """Without jitter two runs are identical."""
        first = ScoringEngine().score(strategic_session)
        second = ScoringEngine().score(strategic_session)
        assert first.model_dump() == second.model_dump()

    def test_seeded_jitter_is_reproducible(self, research_norms, strategic_session):
        """Same seed, same jittered result."""
        first = ScoringEngine(norms=research_norms, jitter=random.Random(42)).score(strategic_session)
        second = ScoringEngine(norms=research_norms, jitter=random.Random(42)).score(strategic_session)
        assert first.model_dump() == second.model_dump()


class TestCollaborators:
    """Tests for injected collaborators."""

    def test_defaults_are_null(self, baseline_engine, strategic_session):
        """Without collaborators the optional sections are empty."""
        result = baseline_engine.score(strategic_session)
        assert result.quality_review is None
        assert result.trait_patterns == []

    def test_injected_analyzer_sees_vector(self, strategic_session):
        """The analyzer receives the plain trait vector."""
        seen = {}

        class RecordingAnalyzer:
            def analyze(self, traits):
                seen.update(traits)
                return [InteractionPattern(pattern="p", name="P", description="d", strength=1.0)]

        result = ScoringEngine(trait_analyzer=RecordingAnalyzer()).score(strategic_session)
        assert seen["openness"] == 98.0
        assert [p.pattern for p in result.trait_patterns] == ["p"]


class TestFromSettings:
    """Tests for building the engine from Settings."""

    def test_fully_equipped(self, strategic_session):
        """Settings engine uses research norms and both collaborators."""
        engine = ScoringEngine.from_settings(Settings())
        result = engine.score(strategic_session)
        assert engine.norms.version == "research-2024"
        assert result.quality_review is not None
        assert "creative_disciplined" in [p.pattern for p in result.trait_patterns]

    def test_norms_file(self, tmp_path, research_norms):
        """RESEARCH_NORMS_PATH loads a norms document."""
        path = tmp_path / "norms.json"
        path.write_text(
            research_norms.model_copy(update={"version": "site-local"}).model_dump_json(),
            encoding="utf-8",
        )
        engine = ScoringEngine.from_settings(Settings(RESEARCH_NORMS_PATH=str(path)))
        assert engine.norms.version == "site-local"

    def test_invalid_norms_path(self, tmp_path):
        """A missing norms file is a deployment error."""
        with pytest.raises(ResearchNormsError):
            ScoringEngine.from_settings(Settings(RESEARCH_NORMS_PATH=str(tmp_path / "missing.json")))

    def test_seeded_settings(self):
        """JITTER_SEED makes jittered runs repeatable."""
        session = make_session({"openness": 4, "neuroticism": 5})
        settings = Settings(JITTER_ENABLED=True, JITTER_SEED=7)
        first = ScoringEngine.from_settings(settings).score(session)
        second = ScoringEngine.from_settings(settings).score(session)
        assert first.executive_function == second.executive_function
