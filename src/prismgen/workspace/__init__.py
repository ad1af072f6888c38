# Copyright 2026 prismgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Project configuration for prismgen."""

from prismgen.workspace.config import (
    DEFAULT_SCHEMA_PATH,
    PROJECT_CONFIG_NAME,
    ProjectConfig,
    ProjectConfigError,
    load_project_config,
)

__all__ = [
    "DEFAULT_SCHEMA_PATH",
    "PROJECT_CONFIG_NAME",
    "ProjectConfig",
    "ProjectConfigError",
    "load_project_config",
]
