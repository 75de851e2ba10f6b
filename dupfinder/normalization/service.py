"""Text normalization and tokenization applied before any comparison.

The same TextNormalizer instance must be used for the query and for every
candidate in a search, otherwise normalized forms are not comparable.
"""

import re
from typing import Optional, Tuple

from dupfinder.config.models import MatchConfiguration

from .models import NormalizedText

# Anything that is not a letter, digit or whitespace. \w admits "_", so it is
# listed explicitly.
PUNCTUATION_RE = re.compile(r"[^\w\s]|_")
WHITESPACE_RE = re.compile(r"\s+")


class TextNormalizer:
    """Applies a MatchConfiguration's normalization options to text."""

    def __init__(self, config: MatchConfiguration):
        self.ignore_case = config.ignore_case
        self.ignore_punctuation = config.ignore_punctuation
        self.min_word_length = config.min_word_length

    def normalize(self, text: Optional[str]) -> str:
        """Normalize text for comparison.

        Steps:
        1. Lowercase (if ignore_case)
        2. Replace punctuation with spaces (if ignore_punctuation), so
           "Oil-Change!" reads as "oil change" rather than "oilchange"
        3. Collapse whitespace runs to one space and trim

        Args:
            text: Text to normalize (None is treated as empty)

        Returns:
            Normalized text, possibly empty
        """
        if not text:
            return ""

        normalized = text
        if self.ignore_case:
            normalized = normalized.lower()
        if self.ignore_punctuation:
            normalized = PUNCTUATION_RE.sub(" ", normalized)

        return WHITESPACE_RE.sub(" ", normalized).strip()

    def tokenize(self, normalized: str) -> Tuple[str, ...]:
        """Split normalized text into words of at least min_word_length."""
        if not normalized:
            return ()
        return tuple(
            token for token in normalized.split(" ") if len(token) >= self.min_word_length
        )

    def prepare(self, text: Optional[str]) -> NormalizedText:
        """Normalize and tokenize text in one step."""
        normalized = self.normalize(text)
        tokens = self.tokenize(normalized)
        return NormalizedText(
            original=text or "",
            normalized=normalized,
            tokens=tokens,
            token_set=frozenset(tokens),
        )
