"""protoc invocation for a single schema file."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

import structlog

from protobuild_core.errors import ProtocError
from protobuild_core.process import ProcessFailure, ProcessRunner, run_process

logger = structlog.get_logger(__name__)


def protoc_args(
    protoc: Path,
    proto: str,
    dest: Path,
    include_paths: Sequence[Path],
) -> list[str]:
    """Build the protoc command line for one schema file.

    The schema root is the working directory, so ``-I.`` comes first and
    every other path, protoc included, is made absolute.

    Args:
        protoc: protoc binary.
        proto: Schema file, relative to the schema root.
        dest: Output directory for generated Java sources.
        include_paths: Extra import directories, searched in order.

    Returns:
        Command line.

    Example:
        >>> protoc_args(Path("/usr/bin/protoc"), "foo.proto", Path("/p/out"), [Path("/p/staging")])
        ['/usr/bin/protoc', 'foo.proto', '--java_out=/p/out', '-I.', '-I/p/staging']
    """
    args = [str(protoc.absolute()), proto, f"--java_out={dest.absolute()}", "-I."]
    args.extend(f"-I{path.absolute()}" for path in include_paths)
    return args


class ProtocInvoker:
    """Runs protoc on schema files, one call per file.

    Attributes:
        protoc: protoc binary.
        schema_root: Working directory for every call.
        include_paths: Import directories after ``-I.``.
    """

    def __init__(
        self,
        protoc: Path,
        schema_root: Path,
        include_paths: Sequence[Path],
        runner: ProcessRunner = run_process,
    ) -> None:
        self.protoc = protoc
        self.schema_root = schema_root
        self.include_paths = tuple(include_paths)
        self._runner = runner

    def compile(self, proto: str, dest: Path) -> None:
        """Compile one schema file into ``dest``.

        Args:
            proto: Schema file, relative to the schema root.
            dest: Output directory for generated Java sources.

        Raises:
            ProtocError: If protoc exits non-zero.
        """
        args = protoc_args(self.protoc, proto, dest, self.include_paths)
        logger.info("protoc_invoked", proto=proto, args=" ".join(args))

        result = self._runner(args, self.schema_root)
        if isinstance(result, ProcessFailure):
            raise ProtocError(proto, result.exit_code, result.stderr)
