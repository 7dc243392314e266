"""protobuild-cli: Command-line interface for protobuild.

This package provides the ``protobuild`` command:
- protobuild compile - Compile .proto files to Java classes
- protobuild list - List discovered .proto files
- protobuild paths - Show resolved build and toolchain locations
- protobuild fetch - Download and unpack the protobuf toolchain
- protobuild build-protoc - Build protoc from the toolchain sources
"""

from __future__ import annotations

__version__ = "0.1.0"

__all__ = ["__version__"]
