"""Data models for the matching engine."""

from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from dupfinder.config.models import MatchType, SearchScope
from dupfinder.domain.models import CandidateRecord

TMetadata = TypeVar("TMetadata")

# How sure the engine is that a tier means "same record"
CONFIDENCE_BY_TYPE = {
    MatchType.EXACT: "exact",
    MatchType.EXACT_WORDS: "exact",
    MatchType.SIMILAR: "high",
    MatchType.PARTIAL: "medium",
}


@dataclass(frozen=True)
class MatchResult(Generic[TMetadata]):
    """One candidate the query may duplicate.

    Built fresh for every search and never mutated.

    Attributes:
        candidate: The matched record, unchanged
        match_type: Tier the candidate was reported at
        similarity_score: 0.0-1.0; always 1.0 for exact and exact_words
        metadata: The candidate's pass-through metadata, for UI grouping
        search_scope: Scope the caller searched, for display
    """

    candidate: CandidateRecord[TMetadata]
    match_type: MatchType
    similarity_score: float
    metadata: Any = field(default=None)
    search_scope: SearchScope = SearchScope.ALL

    @property
    def candidate_id(self) -> str:
        return self.candidate.id

    @property
    def name(self) -> str:
        return self.candidate.name

    @property
    def confidence(self) -> str:
        """Confidence label: "exact", "high" or "medium"."""
        return CONFIDENCE_BY_TYPE[self.match_type]

    @property
    def similarity_percent(self) -> int:
        """Score rounded to a whole percentage, for display."""
        return int(round(self.similarity_score * 100))


@dataclass(frozen=True)
class DuplicatePair(Generic[TMetadata]):
    """Two records in one collection that look like duplicates of each other.

    ``first`` precedes ``second`` in the scanned collection.
    """

    first: CandidateRecord[TMetadata]
    second: CandidateRecord[TMetadata]
    match_type: MatchType
    similarity_score: float

    @property
    def confidence(self) -> str:
        return CONFIDENCE_BY_TYPE[self.match_type]
