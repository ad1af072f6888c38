# Copyright 2026 prismgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Schema pipeline: parsing, semantic analysis, and JSON artifacts."""

from prismgen.compiler.artifact import deserialize, read_artifact, serialize, write_artifact
from prismgen.compiler.pipeline import ParseResult, SchemaError, format_errors, parse, parse_and_validate, parse_file
from prismgen.compiler.semantic_analysis import VALID_PROVIDERS, SemanticError, validate

__all__ = [
    "parse",
    "parse_file",
    "parse_and_validate",
    "format_errors",
    "ParseResult",
    "SchemaError",
    "validate",
    "SemanticError",
    "VALID_PROVIDERS",
    "serialize",
    "deserialize",
    "write_artifact",
    "read_artifact",
]
