"""protobuild fetch / build-protoc commands - Manage the protobuf toolchain."""

from __future__ import annotations

import click

from protobuild_cli.errors import build_errors
from protobuild_cli.output import info, success
from protobuild_cli.project import DEFAULT_PROJECT_FILE, load_project

file_option = click.option(
    "-f",
    "--file",
    "file_path",
    type=click.Path(exists=False),
    default=DEFAULT_PROJECT_FILE,
    help="Path to protobuild.yaml [default: ./protobuild.yaml]",
)


@click.command("fetch")
@file_option
def fetch(file_path: str) -> None:
    """Download and unpack the protobuf toolchain sources.

    The archive for the project's protobuf_version is cached and only
    downloaded once.

    Examples:

        protobuild fetch
    """
    from protobuild_core import Toolchain

    paths = load_project(file_path)
    info(f"Fetching protobuf {paths.toolchain.version}")

    with build_errors():
        srcdir = Toolchain(paths.toolchain).fetch()

    success(f"Toolchain sources in {srcdir}")


@click.command("build-protoc")
@file_option
def build_protoc(file_path: str) -> None:
    """Build protoc from source unless it already exists.

    Runs autogen.sh, configure and make in the toolchain source
    directory, fetching the sources first if needed.

    Examples:

        protobuild build-protoc
    """
    from protobuild_core import Toolchain

    paths = load_project(file_path)

    with build_errors():
        protoc = Toolchain(paths.toolchain).build_protoc()

    success(f"protoc ready at {protoc}")
