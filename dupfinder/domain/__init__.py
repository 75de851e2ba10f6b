"""Domain models shared by the matching engine and its callers."""

from .models import CandidateRecord

__all__ = ["CandidateRecord"]
