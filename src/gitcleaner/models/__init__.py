"""gitcleaner data models."""

from gitcleaner.models.junk_entry import JunkEntry
from gitcleaner.models.clean_result import CleanResult
from gitcleaner.models.pattern_set import PatternSet

__all__ = [
    "CleanResult",
    "JunkEntry",
    "PatternSet",
]
