"""Path resolution for protobuild.

This module maps (cache root, project configuration) to concrete locations:
- The toolchain archive and unpacked source directory under the cache root
- The protoc binary (project override or built from source)
- The project's schema root and build output directories

Everything here is string/path composition. The only filesystem side
effect is ``ProjectPaths.target()``, which creates the build output root.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from protobuild_core.schemas.project import ProjectConfig

# Environment variable overriding the protobuild home directory
HOME_ENV_VAR = "PROTOBUILD_HOME"

# Default protobuild home directory
DEFAULT_HOME = Path.home() / ".protobuild"

# Prefix of the toolchain archive and its unpacked directory
TOOLCHAIN_PREFIX = "protobuf"

# Release archive location, keyed by version
TOOLCHAIN_URL_TEMPLATE = (
    "https://github.com/google/protobuf/releases/download/v{version}/protobuf-{version}.zip"
)


def get_cache_root() -> Path:
    """Resolve the toolchain cache root from the environment.

    Resolved once at startup and passed explicitly from there on.

    Returns:
        Absolute ``$PROTOBUILD_HOME/cache/protobuild`` (home defaults to
        ~/.protobuild; a relative home is taken from the working directory).
    """
    home = os.environ.get(HOME_ENV_VAR)
    base = Path(home).expanduser() if home else DEFAULT_HOME
    return (base / "cache" / "protobuild").absolute()


@dataclass(frozen=True)
class ToolchainPaths:
    """Locations of the protobuf toolchain for one version.

    Attributes:
        cache_root: Directory holding downloaded archives and sources.
        version: Toolchain version.
        protoc_override: Explicit protoc binary, if configured.

    Example:
        >>> paths = ToolchainPaths(Path("/cache"), "2.6.1")
        >>> paths.zipfile
        PosixPath('/cache/protobuf-2.6.1.zip')
        >>> paths.protoc
        PosixPath('/cache/protobuf-2.6.1/src/protoc')
    """

    cache_root: Path
    version: str
    protoc_override: Path | None = None

    @property
    def zipfile(self) -> Path:
        """Downloaded toolchain archive."""
        return self.cache_root / f"{TOOLCHAIN_PREFIX}-{self.version}.zip"

    @property
    def srcdir(self) -> Path:
        """Unpacked toolchain source directory."""
        return self.cache_root / f"{TOOLCHAIN_PREFIX}-{self.version}"

    @property
    def built_protoc(self) -> Path:
        """protoc binary produced by building the toolchain sources."""
        return self.srcdir / "src" / "protoc"

    @property
    def protoc(self) -> Path:
        """protoc binary: the override if set, else the one built in srcdir."""
        if self.protoc_override is not None:
            return self.protoc_override
        return self.built_protoc

    @property
    def url(self) -> str:
        """Where the toolchain archive is downloaded from."""
        return TOOLCHAIN_URL_TEMPLATE.format(version=self.version)


@dataclass(frozen=True)
class ProjectPaths:
    """Locations derived from a project configuration.

    Attributes:
        project: Project configuration.
        toolchain: Toolchain locations for the project's protobuf version.
    """

    project: ProjectConfig
    toolchain: ToolchainPaths

    @classmethod
    def for_project(cls, project: ProjectConfig, cache_root: Path) -> ProjectPaths:
        """Build project paths for a cache root.

        Args:
            project: Project configuration.
            cache_root: Toolchain cache root (see get_cache_root()).

        Returns:
            ProjectPaths instance.
        """
        toolchain = ToolchainPaths(
            cache_root=cache_root,
            version=project.protobuf_version,
            protoc_override=project.protoc_override,
        )
        return cls(project=project, toolchain=toolchain)

    @property
    def proto_path(self) -> Path:
        """Schema root holding the project's .proto files."""
        return self.project.proto_dir

    @property
    def target_path(self) -> Path:
        """Build output root (not created)."""
        return self.project.target_dir

    def target(self) -> Path:
        """Return the build output root, creating it if absent."""
        path = self.target_path
        path.mkdir(parents=True, exist_ok=True)
        return path

    @property
    def generated_sources(self) -> Path:
        """Default destination for generated Java sources."""
        return self.target_path / "protosrc"

    @property
    def classes(self) -> Path:
        """Compiled class output directory."""
        return self.target_path / "classes"

    @property
    def staging(self) -> Path:
        """Staging directory for materialized .proto dependencies."""
        return self.target_path / "proto"

    def as_dict(self) -> dict[str, str]:
        """Return every resolved location keyed by name."""
        return {
            "cache": str(self.toolchain.cache_root),
            "zipfile": str(self.toolchain.zipfile),
            "srcdir": str(self.toolchain.srcdir),
            "protoc": str(self.toolchain.protoc),
            "url": self.toolchain.url,
            "proto_path": str(self.proto_path),
            "target": str(self.target_path),
            "protosrc": str(self.generated_sources),
            "classes": str(self.classes),
            "staging": str(self.staging),
        }
