"""Utility helpers for dupfinder."""

from .highlighting import highlight_keywords, truncate_text

__all__ = ["highlight_keywords", "truncate_text"]
