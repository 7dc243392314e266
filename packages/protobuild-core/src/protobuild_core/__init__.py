"""protobuild-core: Incremental .proto compilation engine.

This package provides:
- ProjectConfig: Pydantic schema for protobuild.yaml
- ProjectPaths / ToolchainPaths: Resolved build and toolchain locations
- ProtobufBuilder: Staleness-checked protoc + javac build
- materialize: Copy missing imported .proto files from the ResourceCatalog
- discover / freshness: Schema discovery and staleness timestamps
"""

from __future__ import annotations

__version__ = "0.1.0"

from protobuild_core.builder import BuildResult, BuildStatus, ProtobufBuilder
from protobuild_core.catalog import ResourceCatalog
from protobuild_core.dependencies import MaterializationResult, materialize, parse_imports
from protobuild_core.discovery import discover, is_proto_file
from protobuild_core.errors import (
    CompilationError,
    ConfigurationError,
    JavacError,
    ProtobuildError,
    ProtocError,
)
from protobuild_core.freshness import NEVER, freshness, is_stale
from protobuild_core.paths import ProjectPaths, ToolchainPaths, get_cache_root
from protobuild_core.process import ProcessFailure, ProcessResult, ProcessSuccess, run_process
from protobuild_core.schemas import PROJECT_FILE_NAME, ProjectConfig
from protobuild_core.toolchain import Toolchain

__all__ = [
    "__version__",
    # Build
    "ProtobufBuilder",
    "BuildResult",
    "BuildStatus",
    # Dependencies
    "ResourceCatalog",
    "MaterializationResult",
    "materialize",
    "parse_imports",
    # Discovery and staleness
    "discover",
    "is_proto_file",
    "freshness",
    "is_stale",
    "NEVER",
    # Paths and toolchain
    "ProjectPaths",
    "ToolchainPaths",
    "get_cache_root",
    "Toolchain",
    # Processes
    "run_process",
    "ProcessResult",
    "ProcessSuccess",
    "ProcessFailure",
    # Configuration
    "ProjectConfig",
    "PROJECT_FILE_NAME",
    # Errors
    "ProtobuildError",
    "ConfigurationError",
    "CompilationError",
    "ProtocError",
    "JavacError",
]
