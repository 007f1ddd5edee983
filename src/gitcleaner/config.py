"""Junk pattern resolution from ``.gitcleaner.json``."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from gitcleaner.models.pattern_set import PatternSet

log = logging.getLogger(__name__)

CONFIG_FILE_NAME = ".gitcleaner.json"

DEFAULT_PATTERNS: tuple[str, ...] = (
    "node_modules",
    "dist",
    "build",
    ".DS_Store",
    "__pycache__",
    "*.log",
    "coverage",
    ".nyc_output",
    "*.tmp",
    "*.temp",
    ".cache",
    "tmp",
)


class ConfigError(Exception):
    """Raised when the config file cannot be read or has the wrong shape."""


def load_config(path: Path) -> list[str]:
    """Read the ``patterns`` list from a config file.

    Raises:
        ConfigError: The file is unreadable, is not valid JSON, or does
            not hold an object with a list of strings under ``patterns``.
    """
    try:
        data: Any = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError, OSError) as e:
        raise ConfigError(f"Could not parse {path.name}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"{path.name} must contain a JSON object")
    patterns = data.get("patterns")
    if not isinstance(patterns, list):
        raise ConfigError(f"{path.name} has no 'patterns' list")
    if not all(isinstance(p, str) for p in patterns):
        raise ConfigError(f"{path.name}: every pattern must be a string")
    return patterns


def resolve_patterns(cwd: Path | None = None) -> PatternSet:
    """Return the patterns to scan for.

    Uses ``.gitcleaner.json`` in *cwd* (default: the working directory)
    when it holds a valid ``patterns`` list, verbatim.  Anything else falls
    back to :data:`DEFAULT_PATTERNS`; problems are logged, never raised.
    """
    config_path = (cwd or Path.cwd()) / CONFIG_FILE_NAME
    if not config_path.exists():
        return PatternSet(DEFAULT_PATTERNS)

    try:
        patterns = load_config(config_path)
    except ConfigError as e:
        log.warning("%s, using default patterns", e)
        return PatternSet(DEFAULT_PATTERNS)

    log.info("Loaded %d custom patterns from %s", len(patterns), config_path)
    return PatternSet(tuple(patterns), source=config_path)
