"""Junk entry dataclass."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class JunkEntry:
    """Single matched file or directory found during a scan.

    ``size_bytes`` of a directory is the sum of every regular file
    beneath it; symlinks and unreadable children count as zero.
    """

    path: Path
    size_bytes: int
    is_directory: bool = False

    @property
    def display_path(self) -> str:
        """Path as shown to the user, with a trailing ``/`` for directories."""
        return f"{self.path}/" if self.is_directory else str(self.path)
