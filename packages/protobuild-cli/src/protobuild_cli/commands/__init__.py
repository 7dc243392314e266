"""protobuild CLI commands.

Commands are loaded lazily by protobuild_cli.main.LazyGroup.
"""

from __future__ import annotations
