"""Protobuf toolchain fetch and bootstrap.

When a project does not point at an existing protoc binary, the toolchain
is downloaded as a release archive into the cache root, unpacked, and
built from source with its autogen/configure/make scripts.

Nothing here is retried or caught: a failed download raises
httpx.HTTPError and a failed build step raises
subprocess.CalledProcessError, aborting the build.
"""

from __future__ import annotations

import stat
import subprocess
import zipfile
from pathlib import Path

import httpx
import structlog

from protobuild_core.paths import ToolchainPaths

logger = structlog.get_logger(__name__)

# Seconds to wait on the download connection (the transfer itself is unbounded)
DOWNLOAD_CONNECT_TIMEOUT = 30.0

# Bootstrap steps, run in order inside the source directory
BOOTSTRAP_STEPS: tuple[tuple[str, ...], ...] = (
    ("./autogen.sh",),
    ("./configure",),
    ("make",),
)


def make_executable(path: Path) -> None:
    """Add execute permission for user, group and others (chmod +x)."""
    mode = path.stat().st_mode
    path.chmod(mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)


class Toolchain:
    """Fetches and builds one version of the protobuf toolchain.

    Attributes:
        paths: Toolchain locations under the cache root.

    Example:
        >>> toolchain = Toolchain(ToolchainPaths(get_cache_root(), "2.6.1"))
        >>> protoc = toolchain.build_protoc()
    """

    def __init__(self, paths: ToolchainPaths) -> None:
        """Initialize the toolchain.

        Args:
            paths: Toolchain locations under the cache root.
        """
        self.paths = paths
        self._log = logger.bind(component="toolchain", version=paths.version)

    def download(self) -> Path:
        """Download the release archive unless it is already cached.

        Returns:
            Path to the archive.

        Raises:
            httpx.HTTPError: If the download fails.
        """
        zip_path = self.paths.zipfile
        if zip_path.exists():
            return zip_path

        self.paths.cache_root.mkdir(parents=True, exist_ok=True)
        self._log.info("toolchain_download_started", url=self.paths.url, dest=str(zip_path))

        partial = zip_path.with_name(zip_path.name + ".part")
        timeout = httpx.Timeout(None, connect=DOWNLOAD_CONNECT_TIMEOUT)
        with httpx.stream("GET", self.paths.url, follow_redirects=True, timeout=timeout) as response:
            response.raise_for_status()
            with partial.open("wb") as f:
                for chunk in response.iter_bytes():
                    f.write(chunk)
        partial.replace(zip_path)

        self._log.info("toolchain_download_completed", dest=str(zip_path))
        return zip_path

    def unpack(self) -> Path:
        """Unpack the archive into the cache root unless already unpacked.

        Returns:
            Path to the toolchain source directory.
        """
        srcdir = self.paths.srcdir
        if srcdir.exists():
            return srcdir

        self._log.info("toolchain_unpack_started", archive=str(self.paths.zipfile))
        with zipfile.ZipFile(self.paths.zipfile) as archive:
            archive.extractall(self.paths.cache_root)
        return srcdir

    def fetch(self) -> Path:
        """Download and unpack the toolchain sources.

        Returns:
            Path to the toolchain source directory.
        """
        self.download()
        return self.unpack()

    def build_protoc(self) -> Path:
        """Build protoc from source unless the binary already exists.

        Runs autogen.sh, configure and make in the source directory, each
        blocking until it exits, with output going straight to the terminal.

        Returns:
            Path to the protoc binary: the configured one if it exists,
            else the one built in the source directory (built now only
            if no earlier bootstrap left one behind).

        Raises:
            subprocess.CalledProcessError: If a bootstrap step fails.
        """
        for protoc in (self.paths.protoc, self.paths.built_protoc):
            if protoc.exists():
                return protoc

        srcdir = self.fetch()
        for step in BOOTSTRAP_STEPS:
            script = srcdir / step[0]
            if step[0].startswith("./"):
                # zip archives drop the execute bit
                make_executable(script)
            self._log.info("toolchain_step_started", step=" ".join(step), srcdir=str(srcdir))
            subprocess.run(list(step), cwd=srcdir, check=True)

        built = self.paths.built_protoc
        self._log.info("toolchain_built", protoc=str(built))
        return built
