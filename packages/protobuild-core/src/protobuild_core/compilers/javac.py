"""Java compiler delegate for generated sources.

Generated sources are compiled together with the project's own Java
source paths into the classes directory.
"""

from __future__ import annotations

import os
from collections.abc import Sequence
from pathlib import Path

import structlog

from protobuild_core.errors import JavacError
from protobuild_core.process import ProcessFailure, ProcessRunner, run_process

logger = structlog.get_logger(__name__)

# javac executable
JAVAC = "javac"

# Options always added when compiling generated sources
GENERATED_SOURCE_OPTIONS = ("-Xlint:none",)


def java_sources(source_paths: Sequence[Path]) -> list[Path]:
    """Collect .java files below the given directories.

    Args:
        source_paths: Source directories; missing ones are skipped.

    Returns:
        Sorted list of source files.
    """
    found: list[Path] = []
    for source_path in source_paths:
        if source_path.is_dir():
            found.extend(source_path.rglob("*.java"))
    return sorted(found)


class JavaCompiler:
    """Compiles Java sources with javac.

    Example:
        >>> JavaCompiler().compile([Path("target/protosrc")], Path("target/classes"))
    """

    def __init__(self, javac: str = JAVAC, runner: ProcessRunner = run_process) -> None:
        self.javac = javac
        self._runner = runner

    def compile(
        self,
        source_paths: Sequence[Path],
        classes_dir: Path,
        options: Sequence[str] = (),
        classpath: Sequence[Path] = (),
    ) -> list[Path]:
        """Compile every .java file under ``source_paths``.

        Args:
            source_paths: Source directories.
            classes_dir: Output directory for .class files.
            options: Extra javac options.
            classpath: Classpath entries.

        Returns:
            The compiled source files (empty if there was nothing to compile).

        Raises:
            JavacError: If javac exits non-zero.
        """
        sources = java_sources(source_paths)
        if not sources:
            logger.info("javac_skipped", reason="no sources")
            return []

        classes_dir.mkdir(parents=True, exist_ok=True)
        args = [self.javac, "-d", str(classes_dir.absolute())]
        if classpath:
            args.extend(["-cp", os.pathsep.join(str(entry.absolute()) for entry in classpath)])
        args.extend(options)
        args.extend(str(source.absolute()) for source in sources)

        logger.info("javac_invoked", sources=len(sources), classes=str(classes_dir))
        result = self._runner(args, classes_dir)
        if isinstance(result, ProcessFailure):
            raise JavacError(result.exit_code, result.stderr)
        return sources
