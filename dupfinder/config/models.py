"""Configuration schema models using Pydantic."""

from enum import Enum
from typing import FrozenSet, Optional

from pydantic import BaseModel, Field, field_validator


class SearchScope(str, Enum):
    """Which candidate subset the caller searched.

    The engine never filters on scope; it is carried through for display.
    """

    ALL = "all"
    CATEGORIES = "categories"
    SUBCATEGORIES = "subcategories"
    JOBS = "jobs"


class MatchType(str, Enum):
    """Match tiers, declared from highest to lowest confidence."""

    EXACT = "exact"
    EXACT_WORDS = "exact_words"
    SIMILAR = "similar"
    PARTIAL = "partial"

    @property
    def precedence(self) -> int:
        """Position in the evaluation order (0 is checked first)."""
        return list(MatchType).index(self)

    @property
    def is_threshold_gated(self) -> bool:
        """Whether similarity_threshold applies to this tier."""
        return self in (MatchType.SIMILAR, MatchType.PARTIAL)


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log output formats."""

    JSON = "json"
    KEY_VALUE = "key-value"


class MatchConfiguration(BaseModel):
    """Immutable matching policy for one duplicate search.

    Instances are always fully valid when built through the normal
    constructor; `model_construct` bypasses that, which is why the engine
    re-validates on every call.
    """

    search_scope: SearchScope = Field(
        SearchScope.ALL, description="Candidate subset the caller filtered to"
    )
    match_types: FrozenSet[MatchType] = Field(
        default_factory=lambda: frozenset(MatchType),
        description="Tiers that may be reported",
    )
    similarity_threshold: int = Field(
        70,
        ge=0,
        le=100,
        description="Minimum score (percent) for similar and partial matches",
    )
    ignore_case: bool = Field(True, description="Fold case before comparison")
    ignore_punctuation: bool = Field(
        True, description="Treat non-alphanumeric characters as whitespace"
    )
    min_word_length: int = Field(
        2, ge=1, description="Tokens shorter than this are ignored for word tiers"
    )
    include_description: bool = Field(
        False, description="Let the partial tier also search candidate descriptions"
    )

    model_config = {"frozen": True}

    @field_validator("match_types")
    @classmethod
    def require_match_types(cls, v: FrozenSet[MatchType]) -> FrozenSet[MatchType]:
        """Reject an empty tier set."""
        if not v:
            raise ValueError("At least one match type must be enabled")
        return v

    @property
    def threshold_ratio(self) -> float:
        """similarity_threshold expressed on the 0.0-1.0 score scale."""
        return self.similarity_threshold / 100.0

    def enabled(self, match_type: MatchType) -> bool:
        """Return True if the given tier may be reported."""
        return match_type in self.match_types

    def ordered_match_types(self) -> list:
        """Enabled tiers in precedence order."""
        return sorted(self.match_types, key=lambda t: t.precedence)


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(LogLevel.INFO, description="Log level")
    format: LogFormat = Field(
        LogFormat.KEY_VALUE, description="Log output format (json or key-value)"
    )

    model_config = {"use_enum_values": True}


class SearchConfig(BaseModel):
    """Caller-side limits applied around the engine."""

    max_results: Optional[int] = Field(
        None, ge=1, description="Keep only the top N ranked matches"
    )
    max_candidates: Optional[int] = Field(
        None, ge=1, description="Cap on candidates scored per search"
    )


class AppConfig(BaseModel):
    """Root configuration object loaded from dupfinder.yaml."""

    matching: MatchConfiguration = Field(
        default_factory=MatchConfiguration, description="Matching policy"
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )
    search: SearchConfig = Field(
        default_factory=SearchConfig, description="Search limits"
    )
