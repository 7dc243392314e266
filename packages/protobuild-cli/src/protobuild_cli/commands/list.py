"""protobuild list command - List the .proto files a build would compile."""

from __future__ import annotations

import click

from protobuild_cli.output import info, print_json
from protobuild_cli.project import DEFAULT_PROJECT_FILE, load_project


@click.command("list")
@click.option(
    "-f",
    "--file",
    "file_path",
    type=click.Path(exists=False),
    default=DEFAULT_PROJECT_FILE,
    help="Path to protobuild.yaml [default: ./protobuild.yaml]",
)
@click.option(
    "--json",
    "as_json",
    is_flag=True,
    default=False,
    help="Output as JSON",
)
def list_cmd(file_path: str, as_json: bool) -> None:
    """List the .proto files found under the project's proto path.

    Hidden files are skipped.

    Examples:

        protobuild list

        protobuild list --json
    """
    from protobuild_core import discover

    paths = load_project(file_path)
    protos = discover(paths.proto_path)

    if as_json:
        print_json(protos)
        return

    if not protos:
        info(f"No .proto files under {paths.proto_path}")
        return

    for proto in protos:
        click.echo(proto)
