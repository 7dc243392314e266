"""Shared pytest fixtures for protobuild-core tests.

This module provides project layouts, a fake process runner, and a
structlog configuration that capsys can capture.
"""

from __future__ import annotations

import os
import sys
from collections.abc import Callable, Sequence
from pathlib import Path

import pytest
import structlog

from protobuild_core.catalog import ResourceCatalog
from protobuild_core.paths import ProjectPaths
from protobuild_core.process import ProcessResult, ProcessSuccess
from protobuild_core.schemas import ProjectConfig


@pytest.fixture(autouse=True)
def configure_structlog_for_tests() -> None:
    """Configure structlog to output to stdout for test capture."""
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=False,  # Important for test isolation
    )


class FakeRunner:
    """Process runner double that records calls instead of spawning processes.

    Each call pops the next scripted result; once the script is exhausted
    every call succeeds. Successful calls leave outputs behind the way the
    real compilers would: protoc writes a .java file into its --java_out
    directory and javac writes a .class file into its -d directory.
    """

    def __init__(self, results: Sequence[ProcessResult] = ()) -> None:
        self.calls: list[tuple[list[str], Path]] = []
        self._results = list(results)

    def __call__(self, args: Sequence[str], cwd: Path) -> ProcessResult:
        argv = [str(arg) for arg in args]
        self.calls.append((argv, cwd))
        result = self._results.pop(0) if self._results else ProcessSuccess(args=argv)
        if result.ok:
            self._write_outputs(argv)
        return result

    def _write_outputs(self, argv: list[str]) -> None:
        for arg in argv:
            if arg.startswith("--java_out="):
                out = Path(arg.removeprefix("--java_out="))
                name = Path(argv[1]).stem.title().replace("_", "") + ".java"
                (out / name).write_text(f"// generated from {argv[1]}\n")
        if "-d" in argv:
            classes = Path(argv[argv.index("-d") + 1])
            (classes / "Generated.class").write_bytes(b"\xca\xfe\xba\xbe")

    @property
    def protoc_calls(self) -> list[list[str]]:
        """Recorded calls whose command line targets Java output."""
        return [argv for argv, _ in self.calls if any(a.startswith("--java_out=") for a in argv)]

    @property
    def javac_calls(self) -> list[list[str]]:
        """Recorded javac calls."""
        return [argv for argv, _ in self.calls if "-d" in argv]

    @property
    def compiled(self) -> list[str]:
        """Schema files passed to protoc, in call order."""
        return [argv[1] for argv in self.protoc_calls]


@pytest.fixture
def make_runner() -> Callable[..., FakeRunner]:
    """Return a factory for runners with scripted results.

    Example:
        >>> runner = make_runner(ProcessFailure(args=["protoc"], exit_code=1, stderr="boom"))
    """

    def _make(*results: ProcessResult) -> FakeRunner:
        return FakeRunner(results)

    return _make


@pytest.fixture
def set_mtime() -> Callable[[Path, int], None]:
    """Return a helper setting a path's modification time in whole seconds."""

    def _set(path: Path, seconds: int) -> None:
        os.utime(path, ns=(seconds * 1_000_000_000, seconds * 1_000_000_000))

    return _set


@pytest.fixture
def fake_runner() -> FakeRunner:
    """Return a runner where every process succeeds."""
    return FakeRunner()


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """Create an empty project with a schema root and a stand-in protoc."""
    root = tmp_path / "project"
    (root / "resources" / "proto").mkdir(parents=True)
    protoc = root / "bin" / "protoc"
    protoc.parent.mkdir()
    protoc.write_text("#!/bin/sh\nexit 0\n")
    protoc.chmod(0o755)
    return root


@pytest.fixture
def project(project_dir: Path) -> ProjectConfig:
    """Return a project configuration rooted at project_dir."""
    return ProjectConfig(name="test-project", root=project_dir, protoc=Path("bin/protoc"))


@pytest.fixture
def project_paths(project: ProjectConfig, tmp_path: Path) -> ProjectPaths:
    """Return resolved paths with a cache root inside tmp_path."""
    return ProjectPaths.for_project(project, tmp_path / "cache")


@pytest.fixture
def schema_root(project_paths: ProjectPaths) -> Path:
    """Return the project's schema root."""
    return project_paths.proto_path


@pytest.fixture
def catalog_dir(tmp_path: Path) -> Path:
    """Return an empty directory used as an extra catalog root."""
    root = tmp_path / "catalog"
    root.mkdir()
    return root


@pytest.fixture
def catalog(catalog_dir: Path) -> ResourceCatalog:
    """Return a catalog backed only by catalog_dir."""
    return ResourceCatalog([catalog_dir], include_bundled=False)
