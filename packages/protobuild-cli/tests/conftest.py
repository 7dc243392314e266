"""Shared test fixtures for protobuild-cli tests.

Provides CliRunner fixtures and a project directory wired to stand-in
protoc and javac scripts, with the toolchain cache inside tmp_path.
"""

from __future__ import annotations

import os
from collections.abc import Generator
from pathlib import Path

import pytest
from click.testing import CliRunner

from protobuild_core.observability import configure_logging

# File name constants
PROJECT_YAML_FILENAME = "protobuild.yaml"

FAKE_PROTOC = """#!/bin/sh
proto="$1"
shift
for arg in "$@"; do
  case "$arg" in
    --java_out=*) out="${arg#--java_out=}" ;;
  esac
done
if grep -q SYNTAX_ERROR "$proto"; then
  echo "$proto:1:1: Expected top-level statement." >&2
  exit 1
fi
name=$(basename "$proto" .proto)
echo "// generated from $proto" > "$out/$name.java"
"""

FAKE_JAVAC = """#!/bin/sh
while [ $# -gt 0 ]; do
  if [ "$1" = "-d" ]; then
    touch "$2/Generated.class"
  fi
  shift
done
"""


def write_script(path: Path, text: str) -> Path:
    """Write an executable shell script."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text)
    path.chmod(0o755)
    return path


@pytest.fixture(autouse=True)
def quiet_logging() -> None:
    """Route build events to stderr at WARNING, as the CLI does by default."""
    configure_logging(log_level="WARNING")


@pytest.fixture(autouse=True)
def cache_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point PROTOBUILD_HOME at a temporary directory."""
    home = tmp_path / "home"
    monkeypatch.setenv("PROTOBUILD_HOME", str(home))
    return home


@pytest.fixture
def cli_runner() -> CliRunner:
    """Create a Click test runner.

    Returns:
        CliRunner instance for testing CLI commands.
    """
    return CliRunner()


@pytest.fixture
def isolated_runner(cli_runner: CliRunner) -> Generator[CliRunner, None, None]:
    """Create a Click test runner with an isolated filesystem.

    Yields:
        CliRunner instance with isolated filesystem.
    """
    with cli_runner.isolated_filesystem():
        yield cli_runner


@pytest.fixture
def java_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Put a stand-in javac first on PATH."""
    bin_dir = tmp_path / "jdk" / "bin"
    write_script(bin_dir / "javac", FAKE_JAVAC)
    monkeypatch.setenv("PATH", f"{bin_dir}{os.pathsep}{os.environ.get('PATH', '')}")
    return bin_dir


@pytest.fixture
def project_dir(tmp_path: Path, java_path: Path) -> Path:
    """Create a project with a stand-in protoc and an empty schema root."""
    root = tmp_path / "project"
    (root / "resources" / "proto").mkdir(parents=True)
    write_script(root / "bin" / "protoc", FAKE_PROTOC)
    (root / PROJECT_YAML_FILENAME).write_text("name: addressbook\nprotoc: bin/protoc\n")
    return root


@pytest.fixture
def project_yaml(project_dir: Path) -> Path:
    """Return the project's protobuild.yaml."""
    return project_dir / PROJECT_YAML_FILENAME


@pytest.fixture
def schema_root(project_dir: Path) -> Path:
    """Return the project's schema root."""
    return project_dir / "resources" / "proto"


@pytest.fixture
def invalid_project_yaml(tmp_path: Path) -> Path:
    """Return a protobuild.yaml that fails validation."""
    path = tmp_path / "invalid" / PROJECT_YAML_FILENAME
    path.parent.mkdir()
    path.write_text("name: addressbook\nprotobuf_version: ''\nproto_dirs: [a]\n")
    return path
