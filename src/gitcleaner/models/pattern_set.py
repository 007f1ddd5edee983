"""Resolved junk pattern list."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class PatternSet:
    """Patterns to match plus the config file they came from.

    ``source`` is None when the built-in defaults are in use.
    """

    patterns: tuple[str, ...]
    source: Path | None = None

    @property
    def is_custom(self) -> bool:
        return self.source is not None
