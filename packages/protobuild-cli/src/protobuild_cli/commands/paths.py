"""protobuild paths command - Show resolved build and toolchain locations."""

from __future__ import annotations

import click

from protobuild_cli.output import print_json
from protobuild_cli.project import DEFAULT_PROJECT_FILE, load_project


@click.command("paths")
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
def paths(file_path: str, as_json: bool) -> None:
    """Show where the toolchain, sources and outputs live.

    The toolchain cache is under $PROTOBUILD_HOME (default ~/.protobuild).

    Examples:

        protobuild paths

        protobuild paths --json
    """
    resolved = load_project(file_path).as_dict()

    if as_json:
        print_json(resolved)
        return

    width = max(len(name) for name in resolved)
    for name, location in resolved.items():
        click.echo(f"{name.ljust(width)}  {location}")
