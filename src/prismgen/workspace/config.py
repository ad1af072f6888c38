# Copyright 2026 prismgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Data model and YAML parser for the prismgen project configuration file."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import yaml

# ###############
# Public Interface
# ###############

PROJECT_CONFIG_NAME = ".prismgen.yaml"
DEFAULT_SCHEMA_PATH = "prisma/schema.prisma"


class ProjectConfigError(Exception):
    """Raised when a project configuration file is invalid or cannot be loaded."""


@dataclass
class ProjectConfig:
    """The parsed configuration for a prismgen project.

    Attributes:
        schema_path: Path of the schema file, relative to the project root.
        strict: Whether ``validate`` runs the strict checks by default.
        artifact: Optional output path for ``dump``, relative to the project root.
    """

    schema_path: str = DEFAULT_SCHEMA_PATH
    strict: bool = False
    artifact: str | None = None


def load_project_config(path: Path) -> ProjectConfig:
    """Load and parse a prismgen project configuration file.

    Args:
        path: Path to the `.prismgen.yaml` file.

    Returns:
        A ProjectConfig instance populated from the file.

    Raises:
        ProjectConfigError: If the file cannot be read or the configuration is invalid.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ProjectConfigError(f"Project config file not found: {path}") from None
    except OSError as exc:
        raise ProjectConfigError(f"Cannot read project config file: {exc}") from exc

    return _parse_project_config(text, source_label=str(path))


# ################
# Implementation
# ################


def _parse_project_config(text: str, source_label: str = "<string>") -> ProjectConfig:
    """Parse project config YAML text into a ProjectConfig.

    An empty document yields the defaults. Unknown keys are rejected so that
    typos do not silently fall back to a default.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ProjectConfigError(f"Invalid YAML in {source_label}: {exc}") from exc

    if data is None:
        return ProjectConfig()
    if not isinstance(data, dict):
        raise ProjectConfigError(f"{source_label}: project config must be a YAML mapping")

    unknown = sorted(str(k) for k in data if k not in _KNOWN_KEYS)
    if unknown:
        raise ProjectConfigError(f"{source_label}: unknown field(s): {', '.join(unknown)}")

    config = ProjectConfig()
    if "schema" in data:
        config.schema_path = _require_string(data, "schema", source_label)
    if "strict" in data:
        strict = data["strict"]
        if not isinstance(strict, bool):
            raise ProjectConfigError(f"{source_label}: 'strict' must be a boolean")
        config.strict = strict
    if "artifact" in data:
        config.artifact = _require_string(data, "artifact", source_label)
    return config


_KNOWN_KEYS = frozenset({"schema", "strict", "artifact"})


def _require_string(mapping: dict[str, object], key: str, source_label: str) -> str:
    value = mapping[key]
    if not isinstance(value, str) or not value:
        raise ProjectConfigError(f"{source_label}: '{key}' must be a non-empty string")
    return value
