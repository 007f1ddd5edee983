"""Catalog building and cleaning."""

from __future__ import annotations

import logging
import os
import stat
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Callable, Iterable, Sequence, TypeVar

from gitcleaner.core.matcher import find_matches
from gitcleaner.models.clean_result import CleanResult
from gitcleaner.models.junk_entry import JunkEntry
from gitcleaner.utils import remove_path, size_of

log = logging.getLogger(__name__)

EntryCallback = Callable[[JunkEntry, str | None], None]  # (entry, error message)

_MAX_WORKERS = 4

_T = TypeVar("_T")
_R = TypeVar("_R")


def _map(func: Callable[[_T], _R], items: Sequence[_T]) -> list[_R]:
    """Apply *func* to every item, fanning out over a small thread pool.

    Results come back in input order whatever order the workers finish in.
    A single item (or a single-core machine) skips the pool.
    """
    if len(items) < 2 or (os.cpu_count() or 1) < 2:
        return [func(item) for item in items]
    with ThreadPoolExecutor(max_workers=min(_MAX_WORKERS, len(items))) as executor:
        return list(executor.map(func, items))


def _resolve(path: Path, root: Path | None) -> Path:
    return path if root is None or path.is_absolute() else root / path


def _build_entry(path: Path, root: Path | None) -> JunkEntry | None:
    target = _resolve(path, root)
    try:
        st = os.lstat(target)
    except OSError as e:
        log.debug("Dropping %s: %s", path, e.strerror or e)
        return None

    is_directory = stat.S_ISDIR(st.st_mode)
    size = size_of(target)
    return JunkEntry(path=path, size_bytes=size, is_directory=is_directory)


def build_catalog(paths: Iterable[Path], root: Path | None = None) -> list[JunkEntry]:
    """Turn matched paths into catalog entries, largest first.

    Paths that can no longer be stat'd are dropped.  Relative paths are
    resolved against *root* (default: the working directory) but kept
    relative in the entries.
    """
    entries = _map(lambda p: _build_entry(p, root), list(paths))
    catalog = [e for e in entries if e is not None]
    catalog.sort(key=lambda e: e.size_bytes, reverse=True)
    return catalog


def scan_catalog(patterns: Iterable[str], root: Path | None = None) -> list[JunkEntry]:
    """Match *patterns* under *root* and build the sorted catalog.

    Raises:
        MatchError: Matching could not start.
    """
    paths = find_matches(patterns, root)
    catalog = build_catalog(paths, root)
    log.info(
        "Found %d junk entries totaling %d bytes",
        len(catalog),
        sum(e.size_bytes for e in catalog),
    )
    return catalog


def _remove_entry(entry: JunkEntry, root: Path | None) -> str | None:
    try:
        remove_path(_resolve(entry.path, root), entry.is_directory)
    except OSError as e:
        log.debug("Failed to delete %s", entry.path, exc_info=True)
        return e.strerror or str(e)
    return None


def clean_catalog(
    catalog: Sequence[JunkEntry],
    dry_run: bool = False,
    root: Path | None = None,
    on_entry: EntryCallback | None = None,
) -> CleanResult:
    """Delete every catalog entry, or pretend to in dry-run mode.

    Entries are removed concurrently.  A failed removal is recorded in
    ``errors`` and counts toward neither ``deleted_count`` nor
    ``freed_bytes``; the remaining entries are still processed.

    Args:
        catalog: Entries from :func:`build_catalog`.
        dry_run: Report what would be deleted without touching the disk.
        root: Directory relative entry paths are resolved against.
        on_entry: Optional callback fired once per entry, in catalog
            order, with the error message or None on success.

    Returns:
        Aggregated counters plus the deleted and failed entries.
    """
    if dry_run:
        outcomes: list[str | None] = [None] * len(catalog)
    else:
        outcomes = _map(lambda e: _remove_entry(e, root), list(catalog))

    result = CleanResult(dry_run=dry_run)
    for entry, error in zip(catalog, outcomes):
        if error is None:
            result.deleted.append(entry)
            result.deleted_count += 1
            result.freed_bytes += entry.size_bytes
        else:
            result.errors.append((entry, error))
        if on_entry:
            on_entry(entry, error)

    return result
