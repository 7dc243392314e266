"""Build orchestration for protobuild.

ProtobufBuilder turns a project's .proto files into Java classes:

1. Resolve the schema files (explicit list, or everything discovered)
2. Make sure a protoc binary exists, bootstrapping the toolchain if not
3. Skip everything if the schema root is not newer than the outputs
4. Materialize missing imports into the staging directory
5. Run protoc once per schema file, stopping at the first failure
6. Hand the generated sources to javac

Running a build twice without touching the schema root does the
expensive work once: the second run is skipped by the staleness check.
"""

from __future__ import annotations

import shutil
from collections.abc import Sequence
from enum import Enum
from pathlib import Path

import structlog
from pydantic import BaseModel, ConfigDict, Field

from protobuild_core.catalog import ResourceCatalog
from protobuild_core.compilers import GENERATED_SOURCE_OPTIONS, JavaCompiler, ProtocInvoker
from protobuild_core.dependencies import MaterializationResult, materialize
from protobuild_core.discovery import discover
from protobuild_core.freshness import freshness, is_stale
from protobuild_core.paths import ProjectPaths
from protobuild_core.process import ProcessRunner, run_process
from protobuild_core.toolchain import Toolchain

logger = structlog.get_logger(__name__)

# Project name that also compiles the protobuf runtime's own descriptor
PROTOBUF_PROJECT_NAME = "protobuf"

# Descriptor schema shipped with the toolchain sources
DESCRIPTOR_PROTO = "google/protobuf/descriptor.proto"


class BuildStatus(str, Enum):
    """Outcome of a build.

    Attributes:
        SKIPPED: Outputs were already up to date; nothing ran
        COMPILED: protoc (and javac) ran for every requested file
    """

    SKIPPED = "skipped"
    COMPILED = "compiled"


class BuildResult(BaseModel):
    """Result of one compile step.

    Attributes:
        status: Whether the step ran or was skipped
        protos: Schema files requested
        destination: Generated source directory
        compiled: Schema files passed to protoc, in order
        materialization: Dependency materialization outcome (None when skipped)
        java_sources: Number of Java files handed to javac
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    status: BuildStatus = Field(..., description="Build outcome")
    protos: list[str] = Field(default_factory=list, description="Requested schema files")
    destination: Path = Field(..., description="Generated source directory")
    compiled: list[str] = Field(default_factory=list, description="Schema files compiled")
    materialization: MaterializationResult | None = Field(
        default=None, description="Dependency materialization outcome"
    )
    java_sources: int = Field(default=0, ge=0, description="Java files compiled")

    @property
    def skipped(self) -> bool:
        """Check if the step was skipped as up to date."""
        return self.status == BuildStatus.SKIPPED


class ProtobufBuilder:
    """Compiles a project's .proto files into Java classes.

    Attributes:
        paths: Resolved project and toolchain locations
        catalog: Fallback source for missing imports
        toolchain: Fetches and builds protoc when no binary exists

    Example:
        >>> project = ProjectConfig.from_yaml("protobuild.yaml")
        >>> builder = ProtobufBuilder(ProjectPaths.for_project(project, get_cache_root()))
        >>> result = builder.run()
        >>> result.status
        <BuildStatus.COMPILED: 'compiled'>
    """

    def __init__(
        self,
        paths: ProjectPaths,
        *,
        catalog: ResourceCatalog | None = None,
        toolchain: Toolchain | None = None,
        java_compiler: JavaCompiler | None = None,
        runner: ProcessRunner = run_process,
    ) -> None:
        """Initialize the builder.

        Args:
            paths: Resolved project and toolchain locations.
            catalog: Fallback catalog; defaults to the project's resource
                paths followed by the bundled well-known types.
            toolchain: Toolchain bootstrapper; defaults to one for ``paths``.
            java_compiler: javac delegate; defaults to one using ``runner``.
            runner: Process runner used for protoc (and the default javac).
        """
        project = paths.project
        self.paths = paths
        self.catalog = catalog or ResourceCatalog(
            [project.resolve(path) for path in project.resource_paths]
        )
        self.toolchain = toolchain or Toolchain(paths.toolchain)
        self.java_compiler = java_compiler or JavaCompiler(runner=runner)
        self._runner = runner
        self._protoc = paths.toolchain.protoc
        self._log = logger.bind(component="protobuf_builder", project=project.name)

    def run(self, files: Sequence[str] | None = None, dest: Path | None = None) -> BuildResult:
        """Build the project.

        Args:
            files: Schema files relative to the schema root; all discovered
                files when None or empty.
            dest: Generated source directory; defaults to ``<target>/protosrc``.

        Returns:
            BuildResult of the project's compile step.

        Raises:
            ProtocError: If protoc fails on any schema file.
            JavacError: If javac fails on the generated sources.
        """
        protos = list(files) if files else discover(self.paths.proto_path)
        self._log.info("build_started", protos=len(protos))

        self.ensure_protoc()

        if self.paths.project.name == PROTOBUF_PROJECT_NAME:
            self.compile_google_protobuf()

        return self.compile(protos, dest)

    def ensure_protoc(self) -> Path:
        """Return the protoc binary, bootstrapping the toolchain if it is missing."""
        if not self._protoc.exists():
            self._protoc = self.toolchain.build_protoc()
        self._log.info("toolchain_ready", protoc=str(self._protoc))
        return self._protoc

    def compile(self, protos: Sequence[str], dest: Path | None = None) -> BuildResult:
        """Compile schema files into ``dest`` unless the outputs are current.

        Args:
            protos: Schema files relative to the schema root.
            dest: Generated source directory; defaults to ``<target>/protosrc``.

        Returns:
            BuildResult; status SKIPPED when the schema root is not newer than
            both ``dest`` and the classes directory.

        Raises:
            ProtocError: On the first schema file protoc rejects.
            JavacError: If javac fails on the generated sources.
        """
        target = self.paths.target()
        dest = dest if dest is not None else self.paths.generated_sources
        classes = self.paths.classes
        staging = self.paths.staging
        proto_path = self.paths.proto_path
        protos = list(protos)

        if not is_stale(proto_path, dest, classes):
            self._log.info("build_skipped", reason="outputs up to date", dest=str(dest))
            return BuildResult(status=BuildStatus.SKIPPED, protos=protos, destination=dest)

        for directory in (target, classes, staging, dest):
            directory.mkdir(parents=True, exist_ok=True)

        materialization = materialize(proto_path, protos, staging, self.catalog)
        self._log.info(
            "dependencies_materialized",
            materialized=len(materialization.materialized),
            unresolved=len(materialization.unresolved),
        )

        invoker = ProtocInvoker(
            self.ensure_protoc(),
            proto_path,
            include_paths=[staging, proto_path],
            runner=self._runner,
        )
        compiled: list[str] = []
        for proto in protos:
            invoker.compile(proto, dest)
            compiled.append(proto)

        project = self.paths.project
        sources = self.java_compiler.compile(
            [*(project.resolve(path) for path in project.java_source_paths), dest],
            classes,
            options=[*project.javac_options, *GENERATED_SOURCE_OPTIONS],
            classpath=[project.resolve(path) for path in project.classpath],
        )

        self._log.info("build_completed", compiled=len(compiled), java_sources=len(sources))
        return BuildResult(
            status=BuildStatus.COMPILED,
            protos=protos,
            destination=dest,
            compiled=compiled,
            materialization=materialization,
            java_sources=len(sources),
        )

    def compile_google_protobuf(self) -> BuildResult:
        """Compile the toolchain's descriptor.proto into its Java source tree.

        Used when building the protobuf runtime itself: the descriptor is
        copied into the schema root (when the toolchain copy is newer) and
        compiled into ``<srcdir>/java/src/main/java``.

        Returns:
            BuildResult of the descriptor compile step.
        """
        srcdir = self.toolchain.fetch()
        src = srcdir / "src" / DESCRIPTOR_PROTO
        dest = self.paths.proto_path / DESCRIPTOR_PROTO

        dest.parent.mkdir(parents=True, exist_ok=True)
        if freshness(src) > freshness(dest):
            shutil.copyfile(src, dest)

        return self.compile([DESCRIPTOR_PROTO], srcdir / "java" / "src" / "main" / "java")
