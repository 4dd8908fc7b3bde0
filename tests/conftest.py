"""Shared pytest fixtures for PsyScore tests."""
import pytest
import structlog

from factories import make_session
from psyscore.research_norms import BASELINE_NORMS, DEFAULT_RESEARCH_NORMS
from psyscore.services.scoring_service import ScoringEngine


@pytest.fixture(autouse=True, scope="session")
def _quiet_structlog():
    """Keep log events out of captured stdout; capture_logs() still works."""
    structlog.configure(
        processors=[structlog.processors.KeyValueRenderer()],
        logger_factory=structlog.ReturnLoggerFactory(),
        cache_logger_on_first_use=False,
    )
    yield
    structlog.reset_defaults()


@pytest.fixture
def baseline_norms():
    return BASELINE_NORMS


@pytest.fixture
def research_norms():
    return DEFAULT_RESEARCH_NORMS


@pytest.fixture
def baseline_engine():
    """Engine without a research database (fallback screening)."""
    return ScoringEngine()


@pytest.fixture
def research_engine():
    return ScoringEngine(norms=DEFAULT_RESEARCH_NORMS)


@pytest.fixture
def strategic_session():
    """High openness and conscientiousness, low neuroticism."""
    return make_session({
        "openness": 5,
        "conscientiousness": 5,
        "extraversion": 3,
        "agreeableness": 3,
        "neuroticism": 2,
    })
