"""Text match engine for duplicate detection.

This module provides:
- TextMatchEngine: ranks the records a query may duplicate
- MatchResult / DuplicatePair: output values
- classify / token_overlap_score: the scoring primitives
- Presentation helpers for the duplicate dialog
"""

from .engine import (
    TextMatchEngine,
    classify,
    find_duplicate_pairs,
    find_matches,
    token_overlap_score,
)
from .models import DuplicatePair, MatchResult
from .utils import (
    build_dialog_payload,
    build_rationale_dict,
    format_pairs_text,
    format_results_text,
    group_results,
)

__all__ = [
    "TextMatchEngine",
    "find_matches",
    "find_duplicate_pairs",
    "classify",
    "token_overlap_score",
    "MatchResult",
    "DuplicatePair",
    "build_dialog_payload",
    "build_rationale_dict",
    "format_pairs_text",
    "format_results_text",
    "group_results",
]
