# Copyright 2026 prismgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Entry points that run the full pipeline: lexing, parsing, and semantic analysis.

Syntax errors and semantic errors are merged into one flat list of messages.
The schema is always returned, even when errors were found, so callers can
present diagnostics alongside the best-effort AST.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from prismgen.compiler.semantic_analysis import validate
from prismgen.model.schema import Schema
from prismgen.parser.parser import parse_schema

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


class SchemaError(Exception):
    """Raised when a schema cannot be read or contains errors.

    Attributes:
        errors: The individual error messages, if any.
    """

    def __init__(self, message: str, errors: list[str] | None = None) -> None:
        super().__init__(message)
        self.errors: list[str] = list(errors or [])


@dataclass
class ParseResult:
    """Result of running the pipeline over one schema text.

    Attributes:
        schema: The parsed schema. Blocks with syntax errors are left out.
        errors: Syntax errors followed by semantic errors, as messages.
    """

    schema: Schema
    errors: list[str] = field(default_factory=list)

    @property
    def error(self) -> SchemaError | None:
        """A generic error if any were found, else None."""
        if not self.errors:
            return None
        return SchemaError("errors found while parsing schema", self.errors)

    @property
    def ok(self) -> bool:
        return not self.errors


def parse(source: str) -> ParseResult:
    """Lex, parse, and validate schema text.

    Args:
        source: The full text of a schema file.

    Returns:
        A :class:`ParseResult` with the schema and every error message.
    """
    schema, syntax_errors = parse_schema(source)
    semantic_errors = validate(schema)
    errors = [str(e) for e in syntax_errors] + [e.message for e in semantic_errors]
    logger.debug(
        "Parsed schema: %d datasource(s), %d generator(s), %d model(s), %d enum(s); "
        "%d syntax error(s), %d semantic error(s)",
        len(schema.datasources),
        len(schema.generators),
        len(schema.models),
        len(schema.enums),
        len(syntax_errors),
        len(semantic_errors),
    )
    return ParseResult(schema=schema, errors=errors)


def parse_file(path: Path) -> ParseResult:
    """Read a schema file and run :func:`parse` over its contents.

    Raises:
        SchemaError: If the file cannot be read.
    """
    try:
        source = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise SchemaError(f"Schema file not found: {path}") from None
    except (OSError, UnicodeDecodeError) as exc:
        raise SchemaError(f"Cannot read schema file '{path}': {exc}") from exc
    logger.debug("Loaded schema file %s (%d bytes)", path, len(source))
    return parse(source)


def parse_and_validate(source: str) -> Schema:
    """Parse and validate schema text, raising on any error.

    Returns:
        The parsed Schema.

    Raises:
        SchemaError: If any syntax or semantic error was found. The message
            lists every error on its own numbered line.
    """
    result = parse(source)
    if result.errors:
        raise SchemaError(f"schema validation errors:\n{format_errors(result.errors)}", result.errors)
    return result.schema


def format_errors(errors: list[str]) -> str:
    """Render error messages as an indented, numbered list."""
    return "".join(f"  {i}. {e}\n" for i, e in enumerate(errors, start=1))
