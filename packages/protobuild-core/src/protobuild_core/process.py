"""External process invocation with tagged results.

``run_process`` blocks until the child exits (no timeout) and returns
either a ProcessSuccess carrying stdout or a ProcessFailure carrying the
exit code and stderr. Callers branch on the result type instead of
inspecting raw exit codes.
"""

from __future__ import annotations

import subprocess
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Literal

import structlog
from pydantic import BaseModel, ConfigDict, Field

logger = structlog.get_logger(__name__)


class ProcessSuccess(BaseModel):
    """A process that exited with code 0.

    Attributes:
        args: Command line that was run.
        stdout: Captured standard output.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["success"] = "success"
    args: list[str] = Field(..., min_length=1, description="Command line")
    stdout: str = Field(default="", description="Captured standard output")

    @property
    def ok(self) -> bool:
        """Always True."""
        return True


class ProcessFailure(BaseModel):
    """A process that exited non-zero.

    Attributes:
        args: Command line that was run.
        exit_code: Non-zero exit code.
        stderr: Captured error stream.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["failure"] = "failure"
    args: list[str] = Field(..., min_length=1, description="Command line")
    exit_code: int = Field(..., description="Non-zero exit code")
    stderr: str = Field(default="", description="Captured error stream")

    @property
    def ok(self) -> bool:
        """Always False."""
        return False


ProcessResult = ProcessSuccess | ProcessFailure

# Signature shared by run_process and test doubles
ProcessRunner = Callable[[Sequence[str], Path], ProcessResult]


def run_process(args: Sequence[str], cwd: Path) -> ProcessResult:
    """Run a command to completion and capture its output.

    Args:
        args: Command line; the first element is the executable.
        cwd: Working directory for the child process.

    Returns:
        ProcessSuccess on exit code 0, ProcessFailure otherwise.

    Raises:
        OSError: If the executable cannot be started.

    Example:
        >>> result = run_process(["protoc", "--version"], Path("."))
        >>> result.ok
        True
    """
    argv = [str(arg) for arg in args]
    logger.debug("process_started", args=argv, cwd=str(cwd))
    completed = subprocess.run(argv, cwd=cwd, capture_output=True, text=True)

    if completed.returncode == 0:
        return ProcessSuccess(args=argv, stdout=completed.stdout)

    logger.debug("process_failed", args=argv, exit_code=completed.returncode)
    return ProcessFailure(args=argv, exit_code=completed.returncode, stderr=completed.stderr)
