"""Additional validation utilities for configuration."""

import warnings
from typing import Any, Dict, List

FUZZY_TIERS = {"similar", "partial"}


def check_for_warnings(config_dict: Dict[str, Any]) -> List[str]:
    """
    Check configuration for settings that are valid but likely unintended.

    Args:
        config_dict: Raw configuration dictionary

    Returns:
        List of warning messages
    """
    warning_messages = []

    matching = config_dict.get("matching", {})
    if not isinstance(matching, dict):
        return warning_messages

    threshold = matching.get("similarity_threshold", 70)
    match_types = matching.get("match_types")
    if isinstance(match_types, list):
        enabled = {str(t).strip().lower() for t in match_types}
    else:
        enabled = {"exact", "exact_words", "similar", "partial"}

    if isinstance(threshold, int) and not isinstance(threshold, bool):
        if threshold == 0 and enabled & FUZZY_TIERS:
            warning_messages.append(
                "similarity_threshold is 0: every similar or partial match will be reported"
            )
        if threshold == 100 and enabled and enabled <= FUZZY_TIERS:
            warning_messages.append(
                "similarity_threshold is 100 with only similar/partial enabled: "
                "only perfect token overlaps or whole-name substrings will match"
            )
        if threshold < 20 and "partial" in enabled:
            warning_messages.append(
                f"Low similarity_threshold ({threshold}) with partial matching enabled "
                "may flood results with short substring hits"
            )

    min_word_length = matching.get("min_word_length", 2)
    if isinstance(min_word_length, int) and min_word_length > 5:
        warning_messages.append(
            f"Large min_word_length ({min_word_length}) drops most words from "
            "exact_words and similar comparisons"
        )

    if isinstance(match_types, list):
        normalized = [str(t).strip().lower() for t in match_types]
        if len(normalized) != len(set(normalized)):
            duplicates = {t for t in normalized if normalized.count(t) > 1}
            warning_messages.append(
                f"Duplicate entries in match_types will be ignored: {', '.join(sorted(duplicates))}"
            )

    return warning_messages


def emit_warnings(warning_messages: List[str]) -> None:
    """
    Emit warning messages using Python's warnings module.

    Args:
        warning_messages: List of warning messages to emit
    """
    for message in warning_messages:
        warnings.warn(message, UserWarning, stacklevel=2)
