"""Error translation for protobuild-cli.

Every failure a command can hit ends up as a CLIError carrying the
message to print and the exit code:

- EXIT_BUILD_FAILED (1): protobuild.yaml is invalid, protoc or javac
  rejected the sources, or the toolchain could not be fetched or built
- EXIT_ENVIRONMENT (2): protobuild.yaml is missing or an output
  directory is not writable
"""

from __future__ import annotations

import subprocess
from collections.abc import Iterator
from contextlib import contextmanager

import click
import httpx
import yaml
from pydantic import ValidationError as PydanticValidationError

from protobuild_cli.output import error
from protobuild_core import ConfigurationError, JavacError, ProtocError

EXIT_BUILD_FAILED = 1
EXIT_ENVIRONMENT = 2


class CLIError(click.ClickException):
    """A failure reported to the user, then exit.

    Attributes:
        message: Text printed after the error marker.
        exit_code: Process exit status.
    """

    def __init__(self, message: str, exit_code: int = EXIT_BUILD_FAILED) -> None:
        super().__init__(message)
        self.exit_code = exit_code

    def show(self, file: object = None) -> None:
        """Print the message through the Rich console (``file`` is ignored)."""
        error(self.format_message())


def describe_invalid_keys(err: PydanticValidationError) -> str:
    """List the protobuild.yaml keys that failed validation.

    Args:
        err: Validation error raised while building ProjectConfig.

    Returns:
        One line per offending key, e.g. ``"  protobuf_version: String should ..."``.
    """
    lines = []
    for detail in err.errors():
        key = ".".join(str(part) for part in detail["loc"]) or "(document)"
        if detail["type"] == "extra_forbidden":
            lines.append(f"  {key}: unknown key")
        else:
            lines.append(f"  {key}: {detail['msg']}")
    return "\n".join(lines)


def project_file_error(
    err: FileNotFoundError | yaml.YAMLError | PydanticValidationError | ConfigurationError,
    file_path: str,
) -> CLIError:
    """Translate a failure to load protobuild.yaml.

    Args:
        err: Exception raised by ProjectConfig.from_yaml().
        file_path: Project file as given on the command line.

    Returns:
        CLIError to raise.
    """
    if isinstance(err, FileNotFoundError):
        return CLIError(
            f"No project file at {file_path}\n\n"
            "Create protobuild.yaml with at least a 'name' key, or pass --file.",
            exit_code=EXIT_ENVIRONMENT,
        )
    if isinstance(err, yaml.MarkedYAMLError) and err.problem_mark is not None:
        mark = err.problem_mark
        return CLIError(
            f"{file_path}:{mark.line + 1}:{mark.column + 1}: YAML syntax error: {err.problem}"
        )
    if isinstance(err, yaml.YAMLError):
        return CLIError(f"{file_path}: YAML syntax error: {err}")
    if isinstance(err, PydanticValidationError):
        return CLIError(f"Invalid project in {file_path}:\n{describe_invalid_keys(err)}")
    return CLIError(err.user_message)


def _command_line(cmd: object) -> str:
    if isinstance(cmd, (list, tuple)):
        return " ".join(str(part) for part in cmd)
    return str(cmd)


def _has_request(err: httpx.HTTPError) -> bool:
    try:
        err.request
    except RuntimeError:
        return False
    return True


@contextmanager
def build_errors() -> Iterator[None]:
    """Turn build and toolchain failures raised inside the block into CLIError.

    protoc and javac diagnostics are passed through verbatim.

    Example:
        >>> with build_errors():
        ...     ProtobufBuilder(paths).run()
    """
    try:
        yield
    except ProtocError as e:
        message = f"protoc failed on {e.proto} (exit code {e.exit_code}):\n{e.stderr}"
        raise CLIError(message) from None
    except JavacError as e:
        raise CLIError(f"javac failed (exit code {e.exit_code}):\n{e.stderr}") from None
    except httpx.HTTPError as e:
        url = e.request.url if _has_request(e) else "the release archive"
        raise CLIError(f"Could not download the protobuf toolchain from {url}: {e}") from None
    except subprocess.CalledProcessError as e:
        raise CLIError(
            f"Toolchain build step failed: {_command_line(e.cmd)} (exit code {e.returncode})"
        ) from None
    except PermissionError as e:
        raise CLIError(
            f"Permission denied writing {e.filename or 'build output'}",
            exit_code=EXIT_ENVIRONMENT,
        ) from None
