# Copyright 2026 prismgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Serialization and deserialization of parsed Schema artifacts.

Artifacts are compact JSON files that hand the AST to downstream code
generators. The format is versioned so future schema changes can be detected.
"""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import ValidationError

from prismgen.model.schema import Schema

# ###############
# Public Interface
# ###############

ARTIFACT_FORMAT_VERSION = "1"


def serialize(schema: Schema) -> str:
    """Serialize a Schema to a compact JSON string."""
    payload = {"v": ARTIFACT_FORMAT_VERSION, "schema": schema.model_dump(mode="json")}
    return json.dumps(payload, separators=(",", ":"))


def deserialize(data: str) -> Schema:
    """Deserialize a Schema from a JSON string.

    Args:
        data: JSON string produced by :func:`serialize`.

    Returns:
        The reconstructed :class:`Schema`.

    Raises:
        ValueError: If the data is not valid JSON, the artifact format version
            is not recognised, or the payload does not describe a Schema.
    """
    obj = json.loads(data)
    if not isinstance(obj, dict):
        raise ValueError("Artifact must be a JSON object")
    version = obj.get("v")
    if version != ARTIFACT_FORMAT_VERSION:
        raise ValueError(f"Unsupported artifact format version: {version!r}")
    try:
        return Schema.model_validate(obj.get("schema", {}))
    except ValidationError as exc:
        raise ValueError(f"Invalid schema artifact: {exc}") from exc


def write_artifact(schema: Schema, path: Path) -> None:
    """Write an artifact to *path*, creating parent directories as needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(serialize(schema), encoding="utf-8")


def read_artifact(path: Path) -> Schema:
    """Read and deserialize an artifact from *path*."""
    return deserialize(path.read_text(encoding="utf-8"))
