"""Unit tests for the protobuild-core exception hierarchy."""

from __future__ import annotations

from structlog.testing import capture_logs

from protobuild_core.errors import (
    CompilationError,
    ConfigurationError,
    JavacError,
    ProtobuildError,
    ProtocError,
)


class TestProtobuildError:
    """Tests for ProtobuildError."""

    def test_user_message(self) -> None:
        """The user message is the exception message."""
        error = ProtobuildError("Build failed")
        assert str(error) == "Build failed"
        assert error.user_message == "Build failed"

    def test_internal_details_logged_not_shown(self) -> None:
        """Internal details go to the log, never into the message."""
        with capture_logs() as logs:
            error = ProtobuildError("Build failed", internal_details="disk full at /tmp/x")
        assert "disk full" not in str(error)
        assert logs[0]["event"] == "protobuild_error"
        assert logs[0]["internal_details"] == "disk full at /tmp/x"


class TestConfigurationError:
    """Tests for ConfigurationError."""

    def test_context_in_message(self) -> None:
        """File and field context are appended to the message."""
        error = ConfigurationError(
            "Invalid value", file_path="protobuild.yaml", field_path="proto_path"
        )
        assert str(error) == "Invalid value (in protobuild.yaml, field 'proto_path')"
        assert error.file_path == "protobuild.yaml"
        assert error.field_path == "proto_path"

    def test_without_context(self) -> None:
        """Without context the message is unchanged."""
        assert str(ConfigurationError("Invalid value")) == "Invalid value"

    def test_is_protobuild_error(self) -> None:
        """ConfigurationError derives from ProtobuildError."""
        assert issubclass(ConfigurationError, ProtobuildError)


class TestCompilationErrors:
    """Tests for ProtocError and JavacError."""

    def test_protoc_error_carries_stderr(self) -> None:
        """The protoc error stream is part of the message."""
        error = ProtocError("foo.proto", 1, "foo.proto:3:1: Expected top-level statement")
        message = str(error)
        assert message.startswith("ERROR:")
        assert "foo.proto" in message
        assert "Expected top-level statement" in message
        assert error.exit_code == 1
        assert isinstance(error, CompilationError)

    def test_javac_error_carries_stderr(self) -> None:
        """The javac error stream is part of the message."""
        error = JavacError(2, "Foo.java:1: error: cannot find symbol")
        assert str(error).startswith("ERROR:")
        assert "cannot find symbol" in error.user_message
        assert isinstance(error, CompilationError)
