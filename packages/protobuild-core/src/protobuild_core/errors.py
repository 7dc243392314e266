"""Custom exception hierarchy for protobuild-core.

This module defines the exception classes raised by the build engine:
- ProtobuildError: Base exception for all protobuild errors
- ConfigurationError: Raised when protobuild.yaml cannot be loaded
- CompilationError: Raised when a compilation step fails
- ProtocError: Raised when protoc exits non-zero for a schema file
- JavacError: Raised when the Java compiler delegate fails

Missing imports are deliberately NOT errors here: the materializer
tolerates them and protoc reports the missing file itself.
"""

from __future__ import annotations

import structlog

logger = structlog.get_logger(__name__)


class ProtobuildError(Exception):
    """Base exception for protobuild.

    Args:
        user_message: Message to display to the user.
        internal_details: Optional technical details, logged but not
            part of the exception message.

    Example:
        >>> raise ProtobuildError(
        ...     "Build failed",
        ...     internal_details="staging dir not writable: /tmp/target/proto"
        ... )
    """

    def __init__(
        self,
        user_message: str,
        *,
        internal_details: str | None = None,
    ) -> None:
        """Initialize ProtobuildError with user message and optional internal details.

        Args:
            user_message: Message to display to the user.
            internal_details: Technical details for internal logging only.
        """
        super().__init__(user_message)
        self.user_message = user_message

        if internal_details:
            logger.error(
                "protobuild_error",
                error_type=self.__class__.__name__,
                user_message=user_message,
                internal_details=internal_details,
            )


class ConfigurationError(ProtobuildError):
    """Raised when project configuration parsing or validation fails.

    Attributes:
        file_path: Path to the configuration file (if known).
        field_path: Dot-separated path to the invalid field (e.g., "proto_path").

    Example:
        >>> raise ConfigurationError(
        ...     "Invalid project configuration",
        ...     file_path="protobuild.yaml",
        ...     field_path="protobuf_version",
        ... )
    """

    def __init__(
        self,
        user_message: str,
        *,
        file_path: str | None = None,
        field_path: str | None = None,
        internal_details: str | None = None,
    ) -> None:
        """Initialize ConfigurationError with context.

        Args:
            user_message: Message to display to the user.
            file_path: Path to the configuration file (optional).
            field_path: Dot-separated path to the field (optional).
            internal_details: Technical details for internal logging only.
        """
        context_parts: list[str] = []
        if file_path:
            context_parts.append(f"in {file_path}")
        if field_path:
            context_parts.append(f"field '{field_path}'")

        if context_parts:
            full_message = f"{user_message} ({', '.join(context_parts)})"
        else:
            full_message = user_message

        super().__init__(full_message, internal_details=internal_details)

        self.file_path = file_path
        self.field_path = field_path


class CompilationError(ProtobuildError):
    """Raised when a compilation step fails.

    Use the subclasses for failures of a specific external compiler.
    """

    pass


class ProtocError(CompilationError):
    """Raised when protoc exits non-zero for a schema file.

    The captured error stream is carried verbatim in the message, since it
    is the only diagnostic the user gets.

    Attributes:
        proto: Schema file that failed to compile.
        exit_code: protoc exit code.
        stderr: Captured error stream.

    Example:
        >>> raise ProtocError("foo.proto", 1, "foo.proto:4:1: Expected top-level statement")
    """

    def __init__(self, proto: str, exit_code: int, stderr: str) -> None:
        """Initialize ProtocError.

        Args:
            proto: Schema file that failed to compile.
            exit_code: protoc exit code.
            stderr: Captured error stream.
        """
        super().__init__(f"ERROR: protoc failed on {proto} (exit code {exit_code}):\n{stderr}")
        self.proto = proto
        self.exit_code = exit_code
        self.stderr = stderr


class JavacError(CompilationError):
    """Raised when javac exits non-zero on the generated sources.

    Attributes:
        exit_code: javac exit code.
        stderr: Captured error stream.
    """

    def __init__(self, exit_code: int, stderr: str) -> None:
        """Initialize JavacError.

        Args:
            exit_code: javac exit code.
            stderr: Captured error stream.
        """
        super().__init__(f"ERROR: javac failed (exit code {exit_code}):\n{stderr}")
        self.exit_code = exit_code
        self.stderr = stderr
