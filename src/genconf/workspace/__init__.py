# Copyright 2026 genconf Contributors
# SPDX-License-Identifier: Apache-2.0

"""Project configuration for genconf."""

from genconf.workspace.config import (
    PROJECT_FILE_NAME,
    ProjectConfig,
    ProjectConfigError,
    load_project_config,
)

__all__ = [
    "PROJECT_FILE_NAME",
    "ProjectConfig",
    "ProjectConfigError",
    "load_project_config",
]
