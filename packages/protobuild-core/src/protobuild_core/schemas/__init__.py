"""Configuration schemas for protobuild.

This module exports the project configuration model and its defaults.
"""

from __future__ import annotations

from protobuild_core.schemas.project import (
    DEFAULT_PROTO_PATH,
    DEFAULT_PROTOBUF_VERSION,
    DEFAULT_TARGET_PATH,
    PROJECT_FILE_NAME,
    ProjectConfig,
)

__all__: list[str] = [
    "ProjectConfig",
    "PROJECT_FILE_NAME",
    "DEFAULT_PROTOBUF_VERSION",
    "DEFAULT_PROTO_PATH",
    "DEFAULT_TARGET_PATH",
]
