"""Dependency materialization for protobuild.

Before protoc runs, every file imported (transitively) by the requested
schema files must exist under the schema root or the staging directory.
Imports that exist in neither place are copied from the ResourceCatalog
into the staging directory, then scanned for their own imports.

Unresolvable imports are tolerated: protoc reports them with its own
diagnostic when the file is actually needed.
"""

from __future__ import annotations

import re
from collections import deque
from collections.abc import Iterable, Iterator
from pathlib import Path

import structlog
from pydantic import BaseModel, ConfigDict, Field

from protobuild_core.catalog import ResourceCatalog, is_safe_reference

logger = structlog.get_logger(__name__)

# Lines starting with this token declare a dependency
IMPORT_TOKEN = "import"

# Quoted path argument of an import line
_QUOTED = re.compile(r'"([^"]*)"')


class MaterializationResult(BaseModel):
    """Outcome of one materialization run.

    Every distinct dependency reference lands in exactly one list, in the
    order it was processed.

    Attributes:
        materialized: References copied from the catalog into the destination.
        satisfied: References already present under the schema root or destination.
        unresolved: References the catalog does not hold (left to protoc).
        rejected: References that would escape their root.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    materialized: list[str] = Field(default_factory=list, description="Copied from catalog")
    satisfied: list[str] = Field(default_factory=list, description="Already present")
    unresolved: list[str] = Field(default_factory=list, description="Missing from catalog")
    rejected: list[str] = Field(default_factory=list, description="Escaping references")

    @property
    def processed(self) -> list[str]:
        """All references, in processing order per category."""
        return [*self.materialized, *self.satisfied, *self.unresolved, *self.rejected]


def parse_imports(lines: Iterable[str]) -> Iterator[str]:
    """Yield the import references declared by schema source lines.

    A line declares a dependency when it begins with the literal ``import``;
    the reference is the text between its first pair of double quotes.
    ``import public`` and ``import weak`` lines count too.

    Args:
        lines: Lines of a .proto file.

    Yields:
        Referenced root-relative paths.

    Example:
        >>> list(parse_imports(['import "a.proto";', 'message A {}']))
        ['a.proto']
    """
    for line in lines:
        if not line.startswith(IMPORT_TOKEN):
            continue
        match = _QUOTED.search(line)
        if match is not None:
            yield match.group(1)


def dependencies(proto_file: Path) -> list[str]:
    """Return the imports of a schema file.

    Args:
        proto_file: Path to a .proto file.

    Returns:
        Referenced paths; empty when the file does not exist.
    """
    if not proto_file.is_file():
        return []
    with proto_file.open("r", encoding="utf-8", errors="replace") as f:
        return list(parse_imports(f))


def materialize(
    schema_root: Path,
    protos: Iterable[str],
    destination: Path,
    catalog: ResourceCatalog | None = None,
) -> MaterializationResult:
    """Ensure every import of ``protos`` exists under schema_root or destination.

    Works through an explicit queue of pending references and a set of
    references already seen. A reference present under ``schema_root`` or
    ``destination`` is satisfied as-is and not scanned further; otherwise it
    is copied from ``catalog`` into ``destination`` and its own imports are
    queued. Existing files are never overwritten.

    Args:
        schema_root: The project's schema root.
        protos: Requested schema files, relative to schema_root.
        destination: Staging directory for materialized files.
        catalog: Fallback source; defaults to the bundled catalog.

    Returns:
        MaterializationResult describing what happened to each reference.

    Example:
        >>> result = materialize(Path("resources/proto"), ["foo.proto"], Path("target/proto"))
        >>> result.materialized
        ['bar.proto']
    """
    catalog = catalog if catalog is not None else ResourceCatalog()
    log = logger.bind(schema_root=str(schema_root), destination=str(destination))

    pending: deque[str] = deque()
    for proto in protos:
        pending.extend(dependencies(schema_root / proto))

    seen: set[str] = set()
    materialized: list[str] = []
    satisfied: list[str] = []
    unresolved: list[str] = []
    rejected: list[str] = []

    while pending:
        dep = pending.popleft()
        if dep in seen:
            continue
        seen.add(dep)

        if not is_safe_reference(dep):
            log.warning("dependency_rejected", dependency=dep)
            rejected.append(dep)
            continue

        target = destination / dep
        if (schema_root / dep).exists() or target.exists():
            satisfied.append(dep)
            continue

        target.parent.mkdir(parents=True, exist_ok=True)
        content = catalog.lookup(dep)
        if content is None:
            log.debug("dependency_unresolved", dependency=dep)
            unresolved.append(dep)
            continue

        target.write_bytes(content)
        materialized.append(dep)
        log.debug("dependency_materialized", dependency=dep)
        pending.extend(dependencies(target))

    return MaterializationResult(
        materialized=materialized,
        satisfied=satisfied,
        unresolved=unresolved,
        rejected=rejected,
    )
