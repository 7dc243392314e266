"""Staleness detection for protobuild.

Freshness is the latest modification time found at a path:
- missing path: NEVER (0)
- file: its own modification time
- directory: the latest modification time of any entry beneath it,
  subdirectories as well as files (the directory itself excluded),
  NEVER if it is empty

Deleting a schema file from a subdirectory therefore also makes the
tree fresher, since it updates that subdirectory's mtime.

Timestamps are integer nanoseconds since the epoch and are recomputed
on every call; nothing is persisted.
"""

from __future__ import annotations

import os
from pathlib import Path

# Freshness of a missing path or an empty directory
NEVER = 0


def freshness(path: Path | str) -> int:
    """Return the latest modification time at ``path``.

    Args:
        path: File or directory.

    Returns:
        Modification time in nanoseconds, or NEVER.

    Example:
        >>> freshness(Path("does/not/exist"))
        0
    """
    path = Path(path)
    if path.is_dir():
        return _directory_freshness(path)
    if path.exists():
        return path.stat().st_mtime_ns
    return NEVER


def _directory_freshness(directory: Path) -> int:
    latest = NEVER
    for dirpath, dirnames, filenames in os.walk(directory):
        for name in (*dirnames, *filenames):
            entry = Path(dirpath) / name
            # lstat: dangling symlinks still count
            latest = max(latest, entry.lstat().st_mtime_ns)
    return latest


def is_stale(source: Path | str, *outputs: Path | str) -> bool:
    """Check whether ``source`` is newer than any of ``outputs``.

    Args:
        source: Input tree (e.g. the schema root).
        *outputs: Output trees that must all be at least as fresh.

    Returns:
        True if regeneration is needed.

    Example:
        >>> is_stale(Path("resources/proto"), Path("target/protosrc"), Path("target/classes"))
        True
    """
    source_time = freshness(source)
    return any(source_time > freshness(output) for output in outputs)
