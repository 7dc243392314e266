"""protobuild compile command - Compile .proto files to Java classes."""

from __future__ import annotations

from pathlib import Path

import click

from protobuild_cli.errors import build_errors
from protobuild_cli.output import info, success, warning
from protobuild_cli.project import DEFAULT_PROJECT_FILE, load_project


@click.command("compile")
@click.argument("protos", nargs=-1)
@click.option(
    "-f",
    "--file",
    "file_path",
    type=click.Path(exists=False),
    default=DEFAULT_PROJECT_FILE,
    help="Path to protobuild.yaml [default: ./protobuild.yaml]",
)
@click.option(
    "-o",
    "--output",
    "output_path",
    type=click.Path(),
    default=None,
    help="Generated source directory [default: <target>/protosrc]",
)
@click.option(
    "--protoc",
    "protoc",
    type=click.Path(),
    default=None,
    help="protoc binary to use instead of building the toolchain",
)
@click.option(
    "--proto-path",
    "proto_path",
    type=click.Path(),
    default=None,
    help="Directory holding the .proto files [default: from protobuild.yaml]",
)
def compile_cmd(
    protos: tuple[str, ...],
    file_path: str,
    output_path: str | None,
    protoc: str | None,
    proto_path: str | None,
) -> None:
    """Compile .proto files into Java sources and classes.

    With no PROTOS, every .proto file under the project's proto path
    is compiled. Nothing runs when the outputs are newer than every
    .proto file.

    Examples:

        protobuild compile

        protobuild compile addressbook.proto

        protobuild compile --protoc /usr/local/bin/protoc
    """
    paths = load_project(
        file_path,
        protoc=Path(protoc).absolute() if protoc else None,
        proto_path=Path(proto_path).absolute() if proto_path else None,
    )
    dest = Path(output_path).absolute() if output_path else None

    # Import here to avoid heavy imports at CLI startup
    from protobuild_core import ProtobufBuilder

    with build_errors():
        result = ProtobufBuilder(paths).run(list(protos), dest)

    if result.skipped:
        info("Generated sources are up to date")
        return

    if result.materialization is not None:
        for dep in result.materialization.unresolved:
            warning(f"Import not found in catalog: {dep}")

    success(f"Compiled {len(result.compiled)} schema file(s) to {result.destination}")
