"""Shared utility functions."""

from __future__ import annotations

import logging
import os
import shutil
import stat
from pathlib import Path

log = logging.getLogger(__name__)

_UNITS = ("kB", "MB", "GB", "TB", "PB")


def size_of(path: Path | str) -> int:
    """Return the size of a file, or the total size of a directory tree.

    Directories are walked with ``os.scandir`` using an explicit stack.
    Only regular files count; symlinks are never followed and contribute
    nothing.  Entries that cannot be stat'd or listed are logged and
    counted as zero so one unreadable child never hides its siblings.
    """
    try:
        st = os.lstat(path)
    except OSError as e:
        log.warning("Failed to access %s: %s", path, e.strerror or e)
        return 0

    if stat.S_ISREG(st.st_mode):
        return st.st_size
    if not stat.S_ISDIR(st.st_mode):
        return 0

    total = 0
    stack: list[Path | str] = [path]
    while stack:
        current = stack.pop()
        try:
            with os.scandir(current) as it:
                for entry in it:
                    try:
                        if entry.is_dir(follow_symlinks=False):
                            stack.append(entry.path)
                        elif entry.is_file(follow_symlinks=False):
                            total += entry.stat(follow_symlinks=False).st_size
                    except OSError as e:
                        log.warning("Failed to access %s: %s", entry.path, e.strerror or e)
        except OSError as e:
            log.warning("Failed to access %s: %s", current, e.strerror or e)
    return total


def remove_path(path: Path, is_directory: bool) -> None:
    """Remove a file or a whole directory tree.

    Raises OSError when removal fails, including when the path is
    already gone.
    """
    if is_directory:
        shutil.rmtree(path)
    else:
        path.unlink()


def bytes_to_human(size_bytes: int) -> str:
    """Convert a byte count to a decimal human-readable string.

    Three significant digits, SI units: ``512 B``, ``2.05 kB``, ``550 MB``.
    """
    if size_bytes < 0:
        return f"-{bytes_to_human(-size_bytes)}"
    if size_bytes < 1000:
        return f"{size_bytes} B"

    value = size_bytes / 1000
    for unit in _UNITS[:-1]:
        rounded = float(f"{value:.3g}")
        if rounded < 1000:
            return f"{rounded:g} {unit}"
        value /= 1000
    return f"{float(f'{value:.3g}'):g} {_UNITS[-1]}"
