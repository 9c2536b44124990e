"""Test file discovery.

Walks the project tree once per run with an explicit queue. Excluded
directories (dependency and VCS dirs) are never descended into, and each
directory is entered at most once by its (device, inode) identity so
symlinked cycles terminate.
"""

from __future__ import annotations

import logging
import os
from collections import deque
from pathlib import Path

from requiretest.core.fallbacks import warn_skipped
from requiretest.utils import DEFAULT_EXCLUSIONS

logger = logging.getLogger(__name__)

DEFAULT_TEST_SUFFIXES: tuple[str, ...] = (
    ".test.ts", ".test.tsx", ".test.mts", ".test.cts",
    ".test.js", ".test.jsx", ".test.mjs", ".test.cjs",
)


def is_test_file(filepath: str, suffixes=DEFAULT_TEST_SUFFIXES) -> bool:
    return os.path.basename(filepath).endswith(tuple(suffixes))


def is_excluded_dir(name: str, exclusions=DEFAULT_EXCLUSIONS) -> bool:
    return name in exclusions


def _dir_identity(path: str) -> tuple[int, int]:
    st = os.stat(path)
    return st.st_dev, st.st_ino


def find_test_files(
    root: str | Path,
    *,
    suffixes=DEFAULT_TEST_SUFFIXES,
    exclusions=DEFAULT_EXCLUSIONS,
) -> tuple[str, ...]:
    """Return canonical (symlink-resolved) paths of every test file under *root*.

    The root itself is always scanned, even when its own name is excluded;
    exclusions apply to the directories below it. Order follows the walk
    (breadth-first, entries sorted by name within a directory).
    """
    suffix_tuple = tuple(suffixes)
    found: list[str] = []
    visited: set[tuple[int, int]] = set()
    queue: deque[str] = deque([os.path.abspath(root)])

    while queue:
        directory = queue.popleft()
        try:
            identity = _dir_identity(directory)
        except OSError as exc:
            warn_skipped(logger, f"stat directory {directory}", exc)
            continue
        if identity in visited:
            logger.debug("Already visited %s (symlink cycle or alias); skipping", directory)
            continue
        visited.add(identity)

        try:
            with os.scandir(directory) as it:
                entries = sorted(it, key=lambda entry: entry.name)
        except OSError as exc:
            warn_skipped(logger, f"list directory {directory}", exc)
            continue

        for entry in entries:
            try:
                if entry.is_dir():
                    if not is_excluded_dir(entry.name, exclusions):
                        queue.append(entry.path)
                elif entry.name.endswith(suffix_tuple) and entry.is_file():
                    found.append(os.path.realpath(entry.path))
            except OSError as exc:
                warn_skipped(logger, f"inspect {entry.path}", exc)

    logger.debug("Found %d test file(s) under %s", len(found), root)
    return tuple(found)


__all__ = ["DEFAULT_TEST_SUFFIXES", "find_test_files", "is_excluded_dir", "is_test_file"]
