"""Normalization layer: case folding, punctuation stripping and tokenization.

- NormalizedText: original text with its normalized form and word tokens
- TextNormalizer: applies a MatchConfiguration's normalization options
"""

from .models import NormalizedText
from .service import TextNormalizer

__all__ = ["NormalizedText", "TextNormalizer"]
