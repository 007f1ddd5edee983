"""Cleaning result dataclass."""

from __future__ import annotations

from dataclasses import dataclass, field

from gitcleaner.models.junk_entry import JunkEntry


@dataclass(slots=True)
class CleanResult:
    """Result of a clean or dry-run pass over a catalog."""

    dry_run: bool = False
    deleted_count: int = 0
    freed_bytes: int = 0
    deleted: list[JunkEntry] = field(default_factory=list)
    errors: list[tuple[JunkEntry, str]] = field(default_factory=list)
