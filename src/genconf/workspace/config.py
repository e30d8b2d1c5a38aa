# Copyright 2026 genconf Contributors
# SPDX-License-Identifier: Apache-2.0

"""Data model and YAML loader for the genconf project file."""

from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

# ###############
# Public Interface
# ###############

PROJECT_FILE_NAME = ".genconf.yaml"


class ProjectConfigError(Exception):
    """Raised when a project file cannot be read or is invalid."""


class ProjectConfig(BaseModel):
    """The parsed ``.genconf.yaml`` of a project.

    Attributes:
        spec: Path of the specification file, relative to the project root.
        configs: Paths of the configuration files to verify, relative to the
            project root.
    """

    model_config = ConfigDict(extra="forbid")

    spec: str
    configs: list[str] = Field(default_factory=list)

    def spec_path(self, root: Path) -> Path:
        """Resolve the spec path against the project root."""
        return root / self.spec

    def config_paths(self, root: Path) -> list[Path]:
        """Resolve the configuration paths against the project root."""
        return [root / config for config in self.configs]


def load_project_config(path: Path) -> ProjectConfig:
    """Load and validate a project file.

    Args:
        path: Path to the ``.genconf.yaml`` file.

    Returns:
        A validated ProjectConfig instance.

    Raises:
        ProjectConfigError: If the file cannot be read, contains invalid YAML,
            or does not conform to the expected schema.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ProjectConfigError(f"Project file not found: {path}") from None
    except (OSError, UnicodeDecodeError) as exc:
        raise ProjectConfigError(f"Cannot read project file: {exc}") from exc

    return _parse_project_config(text, source_label=str(path))


# ################
# Implementation
# ################


def _parse_project_config(text: str, source_label: str = "<string>") -> ProjectConfig:
    """Parse project file YAML text into a ProjectConfig."""
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ProjectConfigError(f"Invalid YAML in {source_label}: {exc}") from exc

    if not isinstance(data, dict):
        raise ProjectConfigError(f"{source_label}: project file must be a YAML mapping")

    try:
        return ProjectConfig.model_validate(data)
    except ValidationError as exc:
        raise ProjectConfigError(f"{source_label}: invalid project file: {exc}") from exc
