"""Read-only catalog of known .proto files.

The catalog is the fallback source for imports that a project references
but does not ship itself. It is keyed by root-relative path (the string
inside an ``import "..."`` statement) and searches, in order:

1. Extra directories configured by the project (``resource_paths``)
2. The protobuf well-known types bundled with protobuild_core
"""

from __future__ import annotations

from collections.abc import Sequence
from importlib import resources
from importlib.resources.abc import Traversable
from pathlib import Path, PurePosixPath

import structlog

logger = structlog.get_logger(__name__)

# Package holding bundled catalog files
BUNDLED_PACKAGE = "protobuild_core"


def bundled_root() -> Traversable:
    """Return the root of the bundled .proto files."""
    return resources.files(BUNDLED_PACKAGE) / "resources" / "proto"


def is_safe_reference(ref: str) -> bool:
    """Check that a root-relative reference stays inside its root.

    Args:
        ref: Reference as written in an import statement.

    Returns:
        False for empty, absolute, or ".."-containing references.
    """
    if not ref or "\\" in ref:
        return False
    path = PurePosixPath(ref)
    return not path.is_absolute() and ".." not in path.parts


class ResourceCatalog:
    """Lookup of .proto content by root-relative path.

    Attributes:
        roots: Extra directories searched before the bundled files.
        include_bundled: Whether the bundled well-known types are searched.

    Example:
        >>> catalog = ResourceCatalog()
        >>> catalog.lookup("google/protobuf/timestamp.proto") is not None
        True
        >>> catalog.lookup("no/such.proto") is None
        True
    """

    def __init__(
        self,
        roots: Sequence[Path] = (),
        *,
        include_bundled: bool = True,
    ) -> None:
        """Initialize the catalog.

        Args:
            roots: Extra directories searched first, in order.
            include_bundled: Search the bundled files after ``roots``.
        """
        self.roots: tuple[Path, ...] = tuple(roots)
        self.include_bundled = include_bundled

    def _candidates(self) -> list[Traversable]:
        candidates: list[Traversable] = list(self.roots)
        if self.include_bundled:
            candidates.append(bundled_root())
        return candidates

    def lookup(self, ref: str) -> bytes | None:
        """Return the content stored under ``ref``.

        Args:
            ref: Root-relative path, e.g. "google/protobuf/any.proto".

        Returns:
            File content, or None if no root holds it.
        """
        if not is_safe_reference(ref):
            logger.warning("catalog_reference_rejected", ref=ref)
            return None

        parts = PurePosixPath(ref).parts
        for root in self._candidates():
            entry = root
            for part in parts:
                entry = entry / part
            if entry.is_file():
                logger.debug("catalog_hit", ref=ref, root=str(root))
                return entry.read_bytes()

        return None
