"""ProjectConfig root model for protobuild.

This module defines the ProjectConfig model that represents a complete
protobuild.yaml definition: which protobuf toolchain to use, where the
project's .proto files live, where build output goes, and the options
handed to javac once sources are generated.

Relative paths in protobuild.yaml are resolved against the directory
containing the file (the project root).
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field

from protobuild_core.errors import ConfigurationError

# Standard project file name
PROJECT_FILE_NAME = "protobuild.yaml"

# Version of the protobuf toolchain when protobuf_version is not specified
DEFAULT_PROTOBUF_VERSION = "2.6.1"

# Default location for a project's .proto files
DEFAULT_PROTO_PATH = "resources/proto"

# Default build output root
DEFAULT_TARGET_PATH = "target"

# Project name pattern (alphanumeric with dots, hyphens, underscores)
PROJECT_NAME_PATTERN = r"^[a-zA-Z0-9][a-zA-Z0-9._-]*$"


class ProjectConfig(BaseModel):
    """Root configuration model for protobuild.yaml.

    Attributes:
        name: Project name. A project named "protobuf" also compiles
            google/protobuf/descriptor.proto from the toolchain sources.
        root: Project directory. Relative paths resolve against it.
        protobuf_version: Version of the protobuf toolchain to fetch and build.
        protoc: Explicit protoc binary. Skips fetching the toolchain.
        proto_path: Directory holding the project's .proto files.
        target_path: Build output root.
        java_source_paths: Extra Java source directories compiled with the
            generated sources.
        javac_options: Extra options passed to javac.
        classpath: Classpath entries for javac (e.g. the protobuf-java jar).
        resource_paths: Extra read-only directories searched for imported
            .proto files before the bundled catalog.

    Example:
        >>> config = ProjectConfig(name="addressbook")
        >>> config.protobuf_version
        '2.6.1'

        >>> config = ProjectConfig.from_yaml("protobuild.yaml")
        >>> config.proto_dir
        PosixPath('/work/addressbook/resources/proto')
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(
        ...,
        min_length=1,
        max_length=100,
        pattern=PROJECT_NAME_PATTERN,
        description="Project name",
    )
    root: Path = Field(
        default_factory=Path.cwd,
        description="Project directory; relative paths resolve against it",
    )
    protobuf_version: str = Field(
        default=DEFAULT_PROTOBUF_VERSION,
        min_length=1,
        pattern=r"^[0-9A-Za-z][0-9A-Za-z.-]*$",
        description="Version of the protobuf toolchain",
    )
    protoc: Path | None = Field(
        default=None,
        description="Explicit protoc binary (skips toolchain bootstrap)",
    )
    proto_path: Path = Field(
        default=Path(DEFAULT_PROTO_PATH),
        description="Directory holding the project's .proto files",
    )
    target_path: Path = Field(
        default=Path(DEFAULT_TARGET_PATH),
        description="Build output root",
    )
    java_source_paths: list[Path] = Field(
        default_factory=list,
        description="Extra Java source directories",
    )
    javac_options: list[str] = Field(
        default_factory=list,
        description="Extra options passed to javac",
    )
    classpath: list[Path] = Field(
        default_factory=list,
        description="Classpath entries for javac",
    )
    resource_paths: list[Path] = Field(
        default_factory=list,
        description="Extra directories searched for imported .proto files",
    )

    def resolve(self, path: Path) -> Path:
        """Resolve a configured path against the project root.

        Args:
            path: Absolute or project-relative path.

        Returns:
            Absolute path.
        """
        if path.is_absolute():
            return path
        return self.root / path

    @property
    def proto_dir(self) -> Path:
        """Absolute schema root."""
        return self.resolve(self.proto_path)

    @property
    def target_dir(self) -> Path:
        """Absolute build output root."""
        return self.resolve(self.target_path)

    @property
    def protoc_override(self) -> Path | None:
        """Absolute protoc override, if one is configured."""
        if self.protoc is None:
            return None
        return self.resolve(self.protoc)

    def with_overrides(self, **overrides: Any) -> ProjectConfig:
        """Return a copy with the given non-None fields replaced.

        Args:
            **overrides: Field values; None means "keep the configured value".

        Returns:
            New validated ProjectConfig.
        """
        data = self.model_dump()
        data.update({key: value for key, value in overrides.items() if value is not None})
        return ProjectConfig.model_validate(data)

    @classmethod
    def from_yaml(cls, path: str | Path) -> ProjectConfig:
        """Load and validate ProjectConfig from a YAML file.

        The project root defaults to the directory containing the file.

        Args:
            path: Path to protobuild.yaml.

        Returns:
            Validated ProjectConfig instance.

        Raises:
            FileNotFoundError: If file doesn't exist.
            yaml.YAMLError: If YAML syntax is invalid.
            ConfigurationError: If the document is not a mapping.
            pydantic.ValidationError: If schema validation fails.

        Example:
            >>> config = ProjectConfig.from_yaml("protobuild.yaml")
            >>> config.name
            'addressbook'
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")

        with path.open("r") as f:
            data: Any = yaml.safe_load(f)

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigurationError(
                "Project configuration must be a mapping",
                file_path=str(path),
            )

        data.setdefault("root", path.resolve().parent)
        root = Path(data["root"])
        if not root.is_absolute():
            data["root"] = path.resolve().parent / root

        return cls.model_validate(data)
