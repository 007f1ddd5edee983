"""Pattern matching over a directory tree."""

from __future__ import annotations

import fnmatch
import logging
import os
import re
from pathlib import Path, PurePosixPath
from typing import Callable, Iterable

log = logging.getLogger(__name__)

# Never descended into; the directories themselves can still match.
EXCLUDED_DIRS = frozenset({".git", "node_modules"})

_WILDCARD_CHARS = frozenset("*?[")

Matcher = Callable[[str, str], bool]  # (basename, relative posix path)


class MatchError(Exception):
    """Raised when matching cannot start at all."""


def _compile(pattern: str) -> Matcher:
    if not isinstance(pattern, str):
        raise MatchError(f"Invalid pattern {pattern!r}: patterns must be strings")
    anchored = pattern.startswith("/")
    body = pattern.strip("/")
    if not body:
        raise MatchError(f"Invalid pattern {pattern!r}: empty")

    if anchored or "/" in body:
        # Matched from the right against the relative path, one part per
        # segment, so "*" never crosses "/".
        depth = len(PurePosixPath(body).parts)

        def match_path(name: str, rel: str) -> bool:
            path = PurePosixPath(rel)
            if anchored and len(path.parts) != depth:
                return False
            return path.match(body)

        return match_path

    if not _WILDCARD_CHARS.intersection(body):
        return lambda name, rel: name == body

    try:
        regex = re.compile(fnmatch.translate(body))
    except re.error as e:
        raise MatchError(f"Invalid pattern {pattern!r}: {e}") from e
    return lambda name, rel: regex.match(name) is not None


def find_matches(patterns: Iterable[str], root: Path | None = None) -> list[Path]:
    """Find every file and directory under *root* matching any pattern.

    Plain names match that exact basename at any depth; patterns with
    ``*``, ``?`` or ``[...]`` use shell-glob semantics, also at any depth.
    A pattern with an inner ``/`` such as ``web/dist`` matches the
    trailing parts of the relative path, again at any depth, and ``*``
    stops at ``/``.  A leading ``/`` anchors the pattern to *root*; a
    trailing ``/`` is ignored.  Dotfiles match like any other name.

    The walk never follows symlinks, never enters ``.git`` or
    ``node_modules``, and does not descend into a directory that already
    matched, so no result is nested inside another.  Each path is visited
    once, so results are unique.

    Args:
        patterns: Junk patterns to look for.
        root: Directory to search. Defaults to the working directory.

    Returns:
        Matched paths relative to *root*, in walk order (names sorted
        within each directory).

    Raises:
        MatchError: A pattern is invalid or *root* cannot be listed.
    """
    matchers = [_compile(p) for p in patterns]
    if not matchers:
        return []

    root_str = os.fspath(root) if root is not None else os.curdir
    if not os.path.isdir(root_str):
        raise MatchError(f"Cannot scan {root_str}: not a directory")

    def on_error(err: OSError) -> None:
        if err.filename == root_str:
            raise MatchError(f"Cannot scan {root_str}: {err.strerror or err}") from err
        log.warning("Skipping unreadable directory %s: %s", err.filename, err.strerror or err)

    def matches(name: str, rel: str) -> bool:
        return any(m(name, rel) for m in matchers)

    found: list[Path] = []
    for dirpath, dirnames, filenames in os.walk(root_str, onerror=on_error, followlinks=False):
        rel_dir = os.path.relpath(dirpath, root_str)
        rel_parent = PurePosixPath() if rel_dir == os.curdir else PurePosixPath(Path(rel_dir).as_posix())

        descend: list[str] = []
        for name in sorted(dirnames):
            rel = rel_parent / name
            if matches(name, str(rel)):
                found.append(Path(rel))
            elif name not in EXCLUDED_DIRS:
                descend.append(name)
        dirnames[:] = descend

        for name in sorted(filenames):
            rel = rel_parent / name
            if matches(name, str(rel)):
                found.append(Path(rel))

    log.debug("Matched %d paths under %s", len(found), root_str)
    return found
