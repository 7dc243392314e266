"""CLI entry point for protobuild.

This module defines the main CLI group using the LazyGroup pattern
so that --help stays fast: command modules (and protobuild-core) are
only imported when a command is invoked.
"""

from __future__ import annotations

import importlib
from typing import Any

import click
import rich_click as rclick

from protobuild_cli import __version__
from protobuild_cli.output import set_no_color

# Configure rich-click for better help formatting
rclick.rich_click.TEXT_MARKUP = "markdown"
rclick.rich_click.SHOW_ARGUMENTS = True
rclick.rich_click.GROUP_ARGUMENTS_OPTIONS = True


class LazyGroup(rclick.RichGroup):
    """Click group that loads commands lazily.

    Attributes:
        lazy_subcommands: Mapping of command names to module paths.
    """

    def __init__(
        self,
        *args: Any,
        lazy_subcommands: dict[str, str] | None = None,
        **kwargs: Any,
    ) -> None:
        """Initialize LazyGroup.

        Args:
            *args: Positional arguments for parent class.
            lazy_subcommands: Mapping of command name to module path.
                Format: {"compile": "protobuild_cli.commands.compile.compile_cmd"}
            **kwargs: Keyword arguments for parent class.
        """
        super().__init__(*args, **kwargs)
        self.lazy_subcommands: dict[str, str] = lazy_subcommands or {}

    def list_commands(self, ctx: click.Context) -> list[str]:
        """Return list of available command names.

        Args:
            ctx: Click context.

        Returns:
            Sorted list of command names.
        """
        commands = set(super().list_commands(ctx))
        commands.update(self.lazy_subcommands.keys())
        return sorted(commands)

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        """Get a command by name, loading lazily if needed.

        Args:
            ctx: Click context.
            cmd_name: Name of the command to get.

        Returns:
            Click Command instance, or None if not found.
        """
        cmd = super().get_command(ctx, cmd_name)  # type: ignore[arg-type]
        if cmd is not None:
            return cmd

        if cmd_name not in self.lazy_subcommands:
            return None

        module_path = self.lazy_subcommands[cmd_name]
        module_name, attr_name = module_path.rsplit(".", 1)
        mod = importlib.import_module(module_name)
        return getattr(mod, attr_name)  # type: ignore[no-any-return]


LAZY_COMMANDS = {
    "compile": "protobuild_cli.commands.compile.compile_cmd",
    "list": "protobuild_cli.commands.list.list_cmd",
    "paths": "protobuild_cli.commands.paths.paths",
    "fetch": "protobuild_cli.commands.toolchain.fetch",
    "build-protoc": "protobuild_cli.commands.toolchain.build_protoc",
}


def _configure_logging(ctx: click.Context, param: click.Parameter, verbose: bool) -> None:
    from protobuild_core.observability import configure_logging

    configure_logging(log_level="DEBUG" if verbose else "WARNING")


@click.command(cls=LazyGroup, lazy_subcommands=LAZY_COMMANDS)
@click.version_option(version=__version__, prog_name="protobuild")
@click.option(
    "--no-color",
    is_flag=True,
    default=False,
    help="Disable colored output.",
    is_eager=True,
    expose_value=False,
    callback=lambda ctx, param, value: set_no_color(value) if value else None,
)
@click.option(
    "-v",
    "--verbose",
    is_flag=True,
    default=False,
    help="Log build events to stderr.",
    expose_value=False,
    callback=_configure_logging,
)
def cli() -> None:
    """protobuild - Incremental protobuf compilation for Java projects.

    Compiles the `.proto` files of a project described by `protobuild.yaml`,
    fetching missing imports and the protoc toolchain as needed.

    **Getting Started:**

    - `protobuild compile` - Compile every `.proto` file in the project
    - `protobuild list` - Show which `.proto` files would be compiled
    - `protobuild paths` - Show where the toolchain and outputs live
    """
    pass


if __name__ == "__main__":
    cli()
