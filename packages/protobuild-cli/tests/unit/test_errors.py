"""Unit tests for protobuild_cli.errors module."""

from __future__ import annotations

import re
import subprocess

import httpx
import pytest
import yaml
from pydantic import BaseModel, ConfigDict, ValidationError

from protobuild_cli.errors import (
    EXIT_BUILD_FAILED,
    EXIT_ENVIRONMENT,
    CLIError,
    build_errors,
    describe_invalid_keys,
    project_file_error,
)
from protobuild_core import ConfigurationError, JavacError, ProtocError


class _Sample(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str
    count: int


def _validation_error(data: dict[str, object]) -> ValidationError:
    try:
        _Sample.model_validate(data)
    except ValidationError as e:
        return e
    raise AssertionError("validation should fail")


def _yaml_error(text: str) -> yaml.YAMLError:
    try:
        yaml.safe_load(text)
    except yaml.YAMLError as e:
        return e
    raise AssertionError("YAML should not parse")


class TestCLIError:
    """Tests for CLIError."""

    def test_default_exit_code(self) -> None:
        """CLIError defaults to the build-failed exit code."""
        assert CLIError("bad").exit_code == EXIT_BUILD_FAILED == 1

    def test_custom_exit_code(self) -> None:
        """The exit code can be overridden."""
        assert CLIError("bad", exit_code=EXIT_ENVIRONMENT).exit_code == 2


class TestDescribeInvalidKeys:
    """Tests for describe_invalid_keys()."""

    def test_unknown_key(self) -> None:
        """Keys the project schema does not know are called out as such."""
        message = describe_invalid_keys(
            _validation_error({"name": "x", "count": 1, "proto_dirs": ["a"]})
        )
        assert message == "  proto_dirs: unknown key"

    def test_one_line_per_key(self) -> None:
        """Each failing key gets its own line with pydantic's message."""
        lines = describe_invalid_keys(_validation_error({"count": "many"})).splitlines()
        assert len(lines) == 2
        assert lines[0].startswith("  name: ")
        assert lines[1].startswith("  count: ")


class TestProjectFileError:
    """Tests for project_file_error()."""

    def test_missing_file(self) -> None:
        """A missing project file is an environment problem."""
        err = project_file_error(FileNotFoundError("protobuild.yaml"), "protobuild.yaml")
        assert err.exit_code == EXIT_ENVIRONMENT
        assert err.message.startswith("No project file at protobuild.yaml")
        assert "--file" in err.message

    def test_yaml_error_has_position(self) -> None:
        """YAML syntax errors are reported as file:line:column."""
        err = project_file_error(_yaml_error("name: [unclosed\n"), "protobuild.yaml")
        assert err.exit_code == EXIT_BUILD_FAILED
        assert re.match(r"protobuild\.yaml:\d+:\d+: YAML syntax error: ", err.message)

    def test_yaml_error_without_position(self) -> None:
        """A YAML error with no mark still names the file."""
        err = project_file_error(yaml.YAMLError("bad stream"), "protobuild.yaml")
        assert err.message == "protobuild.yaml: YAML syntax error: bad stream"

    def test_validation_error_lists_keys(self) -> None:
        """Schema violations name the file and each offending key."""
        err = project_file_error(
            _validation_error({"name": "x", "count": 1, "extra": True}), "protobuild.yaml"
        )
        assert err.exit_code == EXIT_BUILD_FAILED
        assert err.message == "Invalid project in protobuild.yaml:\n  extra: unknown key"

    def test_configuration_error_uses_user_message(self) -> None:
        """ConfigurationError keeps its own user-facing message."""
        cause = ConfigurationError("Project file must be a mapping")
        err = project_file_error(cause, "protobuild.yaml")
        assert err.message == cause.user_message


class TestBuildErrors:
    """Tests for the build_errors() context manager."""

    def test_passes_through_success(self) -> None:
        """Nothing is raised when the block succeeds."""
        with build_errors():
            pass

    def test_protoc_error(self) -> None:
        """protoc failures name the schema and keep stderr verbatim."""
        with pytest.raises(CLIError) as exc_info, build_errors():
            raise ProtocError("broken.proto", 1, "broken.proto:1:1: Expected top-level statement")

        assert exc_info.value.exit_code == EXIT_BUILD_FAILED
        assert exc_info.value.message == (
            "protoc failed on broken.proto (exit code 1):\n"
            "broken.proto:1:1: Expected top-level statement"
        )

    def test_javac_error(self) -> None:
        """javac failures keep the compiler output."""
        with pytest.raises(CLIError, match="javac failed \\(exit code 1\\)") as exc_info:
            with build_errors():
                raise JavacError(1, "Person.java:3: error: ';' expected")

        assert "';' expected" in exc_info.value.message

    def test_http_error_with_request(self) -> None:
        """Download failures name the URL that was requested."""
        request = httpx.Request("GET", "https://example.invalid/protobuf-2.6.1.zip")
        with pytest.raises(CLIError) as exc_info, build_errors():
            raise httpx.ConnectError("connection refused", request=request)

        assert exc_info.value.exit_code == EXIT_BUILD_FAILED
        assert "https://example.invalid/protobuf-2.6.1.zip" in exc_info.value.message
        assert "connection refused" in exc_info.value.message

    def test_http_error_without_request(self) -> None:
        """An HTTP error raised before any request still reads sensibly."""
        with pytest.raises(CLIError, match="from the release archive"), build_errors():
            raise httpx.ConnectError("connection refused")

    def test_failed_toolchain_step(self) -> None:
        """A failing bootstrap step is shown with its command line."""
        with pytest.raises(CLIError) as exc_info, build_errors():
            raise subprocess.CalledProcessError(2, ["./configure", "--prefix=/x"])

        assert exc_info.value.message == (
            "Toolchain build step failed: ./configure --prefix=/x (exit code 2)"
        )

    def test_permission_error(self) -> None:
        """Unwritable outputs are an environment problem."""
        with pytest.raises(CLIError, match="Permission denied writing target") as exc_info:
            with build_errors():
                raise PermissionError(13, "Permission denied", "target")

        assert exc_info.value.exit_code == EXIT_ENVIRONMENT

    def test_other_errors_propagate(self) -> None:
        """Unexpected exceptions are not translated."""
        with pytest.raises(ValueError), build_errors():
            raise ValueError("boom")
