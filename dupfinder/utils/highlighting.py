"""Highlighting helpers for presenting matches.

Used to mark the query words inside matched record names so a person picking
from the duplicate dialog can see why a record was offered.
"""

import re
from typing import Iterable


def highlight_keywords(
    text: str,
    keywords: Iterable[str],
    marker_start: str = "**",
    marker_end: str = "**",
    whole_words: bool = True,
) -> str:
    """Wrap keyword occurrences in text with markers.

    Matching is case-insensitive and the original casing is preserved. With
    ``whole_words=False`` a keyword also matches the start of a longer word,
    so "pad" marks the "Pad" in "Pads".

    Args:
        text: Text to highlight keywords in
        keywords: Keywords/phrases to highlight
        marker_start: Marker to insert before a matched keyword
        marker_end: Marker to insert after a matched keyword
        whole_words: Require a word boundary after the keyword

    Returns:
        Text with keywords wrapped in markers

    Example:
        >>> highlight_keywords("Replace Brake Pads", ["brake", "pad"], whole_words=False)
        'Replace **Brake** **Pad**s'
    """
    if not text:
        return text

    unique = sorted({k.strip() for k in keywords if k and k.strip()}, key=len, reverse=True)
    if not unique:
        return text

    # One alternation pass so a shorter keyword cannot match inside markers
    # inserted for a longer one
    alternation = "|".join(re.escape(k) for k in unique)
    tail = r"\b" if whole_words else ""
    pattern = re.compile(rf"\b({alternation}){tail}", re.IGNORECASE)

    return pattern.sub(lambda m: f"{marker_start}{m.group(1)}{marker_end}", text)


def truncate_text(text: str, max_length: int = 200, suffix: str = "...") -> str:
    """Truncate text to max_length, preferring to cut at a word boundary.

    Example:
        >>> truncate_text("Replace front and rear brake pads on light trucks", max_length=30)
        'Replace front and rear...'
    """
    if not text or len(text) <= max_length:
        return text

    truncate_at = max_length - len(suffix)
    if truncate_at <= 0:
        return suffix[:max_length]

    truncated = text[:truncate_at]

    last_space = truncated.rfind(" ")
    if last_space > truncate_at * 0.8:
        truncated = truncated[:last_space]

    return truncated.rstrip() + suffix
