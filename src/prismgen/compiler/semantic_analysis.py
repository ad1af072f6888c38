# Copyright 2026 prismgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Semantic analysis for parsed schemas.

Checks structural correctness of the parsed AST: required provider fields,
duplicate names, field types, attribute argument shapes, and relation
targets. This is distinct from the strict checks in
:mod:`prismgen.validation.checks`, which need every type reference resolved.
"""

from __future__ import annotations

from dataclasses import dataclass

from prismgen.model.schema import (
    Attribute,
    Datasource,
    Enum,
    FieldType,
    Generator,
    Model,
    ModelField,
    Schema,
)
from prismgen.model.values import StringValue, is_scalar_type, symbol_name, symbol_names

# ###############
# Public Interface
# ###############

VALID_PROVIDERS: frozenset[str] = frozenset({"postgresql", "mysql", "sqlite"})


@dataclass(frozen=True)
class SemanticError:
    """A structural error detected during semantic analysis.

    Attributes:
        message: Human-readable description of the error.
    """

    message: str

    def __str__(self) -> str:
        return self.message


def validate(schema: Schema) -> list[SemanticError]:
    """Perform semantic analysis on a parsed Schema.

    Checks performed, in order:
    - Every datasource defines ``provider``; a plain string provider must be
      one of ``postgresql``, ``mysql`` or ``sqlite``. Other values such as
      ``env("PROVIDER")`` are accepted unchecked.
    - Every generator defines ``provider``.
    - Duplicate model names, duplicate enum names, and names used for both a
      model and an enum.
    - Within each model: duplicate field names, missing or empty field
      types, ``@default`` without a value, and ``@relation`` carrying only
      one of ``fields`` / ``references``.
    - Within each enum: a name, at least one value, unique value names.
    - Every ``@relation`` targets a declared model (the ``model:`` argument,
      or else the field's type) and has as many ``fields`` as ``references``.

    Type names that are neither scalars nor declared anywhere are accepted
    here as forward references.

    Args:
        schema: The parsed Schema to analyze.

    Returns:
        A list of :class:`SemanticError` instances. An empty list means no
        semantic errors were found.
    """
    return _SemanticAnalyzer(schema).analyze()


# ################
# Implementation
# ################


class _SemanticAnalyzer:
    """Performs semantic analysis on a single Schema."""

    def __init__(self, schema: Schema) -> None:
        self._schema = schema
        self._model_names: set[str] = {m.name for m in schema.models}

    def analyze(self) -> list[SemanticError]:
        """Run all semantic checks and return collected errors."""
        errors: list[SemanticError] = []

        # 1. Datasources and generators.
        for datasource in self._schema.datasources:
            errors.extend(_check_datasource(datasource))
        for generator in self._schema.generators:
            errors.extend(_check_generator(generator))

        # 2. Duplicate block names.
        errors.extend(_check_top_level_duplicates(self._schema))

        # 3. Internals of each model.
        for model in self._schema.models:
            errors.extend(_check_model(model))

        # 4. Internals of each enum.
        for enum_def in self._schema.enums:
            errors.extend(_check_enum(enum_def))

        # 5. Relations, once every model name is known.
        for model in self._schema.models:
            for model_field in model.fields:
                for attr in model_field.attributes:
                    if attr.name == "relation":
                        errors.extend(self._check_relation(model, model_field, attr))

        return errors

    def _check_relation(self, model: Model, model_field: ModelField, attr: Attribute) -> list[SemanticError]:
        """Check that a @relation targets a known model and has matching key lists."""
        errors: list[SemanticError] = []
        ctx = f"field '{model_field.name}' of model '{model.name}'"

        target: str | None = None
        model_arg = attr.argument("model")
        if model_arg is not None:
            target = symbol_name(model_arg.value)
        if not target and model_field.type is not None and not model_field.type.is_unsupported:
            target = model_field.type.name

        if target and target not in self._model_names:
            errors.append(SemanticError(f"relation on {ctx} references unknown model '{target}'"))

        fields_arg = attr.argument("fields")
        references_arg = attr.argument("references")
        fields = symbol_names(fields_arg.value) if fields_arg is not None else []
        references = symbol_names(references_arg.value) if references_arg is not None else []
        if fields and references and len(fields) != len(references):
            errors.append(
                SemanticError(
                    f"@relation on {ctx} must have the same number of 'fields' and 'references'"
                    f" ({len(fields)} != {len(references)})"
                )
            )
        return errors


# ------------------------------------------------------------------
# Module-level helper functions
# ------------------------------------------------------------------


def _check_duplicate_names(names: list[str], fmt: str) -> list[SemanticError]:
    """Return a SemanticError for each name that appears more than once.

    Only one error per unique duplicate name is emitted (even if it appears
    three or more times).  *fmt* must contain a single ``{}`` placeholder
    that will be filled with the duplicate name.
    """
    seen: set[str] = set()
    reported: set[str] = set()
    errors: list[SemanticError] = []
    for name in names:
        if name in seen:
            if name not in reported:
                errors.append(SemanticError(fmt.format(name)))
                reported.add(name)
        else:
            seen.add(name)
    return errors


def _check_datasource(datasource: Datasource) -> list[SemanticError]:
    provider = datasource.field("provider")
    if provider is None:
        return [SemanticError(f"datasource '{datasource.name}' must define a 'provider' field")]
    if isinstance(provider.value, StringValue) and provider.value.value not in VALID_PROVIDERS:
        return [
            SemanticError(
                f"invalid provider '{provider.value.value}' in datasource '{datasource.name}'"
                f" (expected one of: {', '.join(sorted(VALID_PROVIDERS))})"
            )
        ]
    return []


def _check_generator(generator: Generator) -> list[SemanticError]:
    if generator.field("provider") is None:
        return [SemanticError(f"generator '{generator.name}' must define a 'provider' field")]
    return []


def _check_top_level_duplicates(schema: Schema) -> list[SemanticError]:
    """Check for duplicate names among models and enums."""
    errors: list[SemanticError] = []
    errors.extend(_check_duplicate_names([m.name for m in schema.models], "duplicate model '{}'"))
    errors.extend(_check_duplicate_names([e.name for e in schema.enums], "duplicate enum '{}'"))

    # A model and an enum with the same name make field types ambiguous.
    model_names = {m.name for m in schema.models}
    enum_names = {e.name for e in schema.enums}
    for name in sorted(model_names & enum_names):
        errors.append(SemanticError(f"name '{name}' is defined as both a model and an enum"))
    return errors


def _check_model(model: Model) -> list[SemanticError]:
    """Check field names, field types, and field attribute shapes of one model."""
    if not model.name:
        return [SemanticError("model without a name")]

    errors: list[SemanticError] = []
    errors.extend(
        _check_duplicate_names(
            [f.name for f in model.fields],
            f"duplicate field '{{}}' in model '{model.name}'",
        )
    )
    for model_field in model.fields:
        ctx = f"field '{model_field.name}' of model '{model.name}'"
        errors.extend(_check_field_type(ctx, model_field.type))
        for attr in model_field.attributes:
            errors.extend(_check_field_attribute(ctx, attr))
    return errors


def _check_field_type(ctx: str, field_type: FieldType | None) -> list[SemanticError]:
    if field_type is None:
        return [SemanticError(f"{ctx} has no type")]
    if field_type.is_unsupported or is_scalar_type(field_type.name):
        return []
    # Anything else is assumed to name an enum or a model.
    if not field_type.name:
        return [SemanticError(f"invalid type for {ctx}")]
    return []


def _check_field_attribute(ctx: str, attr: Attribute) -> list[SemanticError]:
    """Check argument shapes of known field attributes. Unknown attributes pass."""
    if attr.name == "default" and not attr.arguments:
        return [SemanticError(f"@default on {ctx} must have a value")]
    if attr.name == "relation":
        has_fields = attr.argument("fields") is not None
        has_references = attr.argument("references") is not None
        if has_fields != has_references:
            return [SemanticError(f"@relation on {ctx} must have both 'fields' and 'references' or neither")]
    return []


def _check_enum(enum_def: Enum) -> list[SemanticError]:
    if not enum_def.name:
        return [SemanticError("enum without a name")]

    errors: list[SemanticError] = []
    if not enum_def.values:
        errors.append(SemanticError(f"enum '{enum_def.name}' has no values"))
    errors.extend(
        _check_duplicate_names(
            [v.name for v in enum_def.values],
            f"duplicate value '{{}}' in enum '{enum_def.name}'",
        )
    )
    return errors
