"""Data models for the normalization layer."""

from dataclasses import dataclass, field
from typing import FrozenSet, Tuple


@dataclass(frozen=True)
class NormalizedText:
    """Original text alongside its normalized form and word tokens.

    Attributes:
        original: Text as supplied by the caller
        normalized: Case-folded / punctuation-stripped / whitespace-collapsed text
        tokens: Whitespace-split words of ``normalized`` in order, with words
            shorter than min_word_length removed
        token_set: ``tokens`` as a set, for order-insensitive comparison
    """

    original: str
    normalized: str
    tokens: Tuple[str, ...] = ()
    token_set: FrozenSet[str] = field(default_factory=frozenset)

    @property
    def is_empty(self) -> bool:
        """True if nothing is left after normalization."""
        return not self.normalized

    def __len__(self) -> int:
        return len(self.normalized)
