"""Project loading shared by protobuild commands."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError as PydanticValidationError

from protobuild_cli.errors import project_file_error
from protobuild_core import ConfigurationError, ProjectConfig, ProjectPaths, get_cache_root

# Default project file, relative to the working directory
DEFAULT_PROJECT_FILE = "./protobuild.yaml"


def load_project(file_path: str, **overrides: Any) -> ProjectPaths:
    """Load protobuild.yaml and resolve its build locations.

    Args:
        file_path: Path to protobuild.yaml.
        **overrides: Project fields to replace (None values are ignored).

    Returns:
        ProjectPaths for the project and the environment's cache root.

    Raises:
        CLIError: If the file is missing, unparsable, or invalid.
    """
    try:
        project = ProjectConfig.from_yaml(Path(file_path)).with_overrides(**overrides)
    except (
        FileNotFoundError,
        yaml.YAMLError,
        PydanticValidationError,
        ConfigurationError,
    ) as e:
        raise project_file_error(e, file_path) from None

    return ProjectPaths.for_project(project, get_cache_root())
