"""Schema discovery for protobuild.

Finds the .proto files a build compiles when no explicit list is given.
"""

from __future__ import annotations

import os
from pathlib import Path

# Extension identifying schema files
PROTO_EXTENSION = ".proto"


def is_proto_file(name: str) -> bool:
    """Identify a .proto file by name.

    Hidden files (leading ".") are never schema files.

    Args:
        name: File name (not a path).

    Returns:
        True for visible files ending in ".proto".
    """
    return name.endswith(PROTO_EXTENSION) and not name.startswith(".")


def discover(root: Path | str) -> list[str]:
    """List the .proto files below ``root``.

    Paths are relative to ``root`` in POSIX form, in filesystem traversal
    order (not sorted). A missing root yields an empty list.

    Args:
        root: Schema root directory.

    Returns:
        Root-relative schema file paths.

    Example:
        >>> discover(Path("resources/proto"))
        ['addressbook.proto', 'tutorial/person.proto']
    """
    root = Path(root)
    found: list[str] = []
    for dirpath, _dirnames, filenames in os.walk(root):
        directory = Path(dirpath)
        for name in filenames:
            if is_proto_file(name):
                found.append((directory / name).relative_to(root).as_posix())
    return found
