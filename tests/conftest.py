"""Shared fixtures for dupfinder tests."""

import pytest

from dupfinder.config import MatchConfiguration, MatchType, SearchScope
from dupfinder.domain import CandidateRecord
from dupfinder.logging.context import clear_log_context


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep developer environment variables out of the tests."""
    for name in ("LOG_LEVEL", "ENVIRONMENT", "DUPFINDER_CONFIG"):
        monkeypatch.delenv(name, raising=False)
    clear_log_context()
    yield
    clear_log_context()


@pytest.fixture
def default_config():
    """Default matching policy: every tier, threshold 70."""
    return MatchConfiguration()


@pytest.fixture
def brake_config():
    """Configuration from the brake pad scenario."""
    return MatchConfiguration(
        search_scope=SearchScope.JOBS,
        match_types={MatchType.EXACT, MatchType.SIMILAR},
        similarity_threshold=70,
        ignore_case=True,
        ignore_punctuation=True,
        min_word_length=2,
    )


def make_record(record_id, name, description=None, **metadata):
    return CandidateRecord(id=record_id, name=name, description=description, metadata=metadata)


@pytest.fixture
def job_lines():
    """A small catalog of job lines with sector/category metadata."""
    return [
        make_record(
            "jl-1",
            "Brake Pad Replacement",
            "Replace front brake pads and inspect rotors",
            sector_name="Automotive",
            category_name="Brakes",
            estimated_time=1.5,
        ),
        make_record(
            "jl-2",
            "Oil Change",
            "Drain and refill engine oil, replace filter",
            sector_name="Automotive",
            category_name="Engine",
            estimated_time=0.5,
        ),
        make_record(
            "jl-3",
            "Replace Brake Pads",
            None,
            sector_name="Automotive",
            category_name="Brakes",
            estimated_time=1.0,
        ),
        make_record(
            "jl-4",
            "Septic Tank Pumping",
            "Pump and inspect residential septic tank",
            sector_name="Septic",
            category_name="Pumping",
        ),
    ]


class SpyCandidates(list):
    """List that records whether anything iterated over it."""

    def __init__(self, *args):
        super().__init__(*args)
        self.iterated = False

    def __iter__(self):
        self.iterated = True
        return super().__iter__()


@pytest.fixture
def spy_candidates(job_lines):
    return SpyCandidates(job_lines)


@pytest.fixture
def record_factory():
    """Build CandidateRecord instances with keyword metadata."""
    return make_record
