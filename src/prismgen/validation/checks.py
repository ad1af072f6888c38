# Copyright 2026 prismgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Strict checks for schemas that passed semantic analysis.

These checks resolve every type and field reference across the schema, which
semantic analysis deliberately leaves open, and add non-fatal warnings for
incomplete but legal schemas.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from prismgen.model.schema import Attribute, Model, ModelField, Schema
from prismgen.model.values import is_scalar_type, symbol_name, symbol_names

# ###############
# Public Interface
# ###############


@dataclass(frozen=True)
class CheckWarning:
    """A non-fatal issue: the schema is usable but probably incomplete.

    Attributes:
        message: Human-readable description of the warning.
    """

    message: str


@dataclass(frozen=True)
class CheckError:
    """A fatal issue: code generation would produce a broken client.

    Attributes:
        message: Human-readable description of the error.
    """

    message: str


@dataclass
class CheckResult:
    """Result of running strict checks.

    Attributes:
        warnings: Non-fatal issues found.
        errors: Fatal issues found.
    """

    warnings: list[CheckWarning] = field(default_factory=list)
    errors: list[CheckError] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        """Return True if any fatal errors were found."""
        return len(self.errors) > 0


def check(schema: Schema) -> CheckResult:
    """Run all strict checks on a parsed Schema.

    Checks performed:

    1. **Datasource present** (error): a schema needs at least one
       datasource block.

    2. **Generator present** (warning): schemas without a generator block
       parse fine but produce no client.

    3. **Field types resolve** (error): every field type that is not a
       built-in scalar must name a declared model or enum.

    4. **Relation keys resolve** (error): the ``fields`` of a ``@relation``
       must exist on the declaring model, and its ``references`` must exist
       on the related model.

    5. **Block attribute keys resolve** (error): the field lists of
       ``@@id``, ``@@unique`` and ``@@index`` must name fields of the model.

    6. **Primary key present** (warning): models without ``@id`` or
       ``@@id`` cannot be addressed by the generated client's unique finders.

    Args:
        schema: A Schema that semantic analysis reported no errors for.

    Returns:
        A :class:`CheckResult` with any warnings and errors found.
    """
    warnings: list[CheckWarning] = []
    errors: list[CheckError] = []

    if not schema.datasources:
        errors.append(CheckError("schema must define at least one datasource"))
    if not schema.generators:
        warnings.append(CheckWarning("schema defines no generator; no client will be generated"))

    models: dict[str, Model] = {m.name: m for m in schema.models}
    enum_names: set[str] = {e.name for e in schema.enums}

    for model in schema.models:
        errors.extend(_check_field_types(model, models, enum_names))
        errors.extend(_check_relation_keys(model, models))
        errors.extend(_check_block_attribute_keys(model))
        warnings.extend(_check_primary_key(model))

    return CheckResult(warnings=warnings, errors=errors)


# ################
# Implementation
# ################

_KEYED_BLOCK_ATTRIBUTES: frozenset[str] = frozenset({"id", "unique", "index"})


def _check_field_types(model: Model, models: dict[str, Model], enum_names: set[str]) -> list[CheckError]:
    """Return errors for field types that name neither a scalar, a model, nor an enum."""
    errors: list[CheckError] = []
    for model_field in model.fields:
        field_type = model_field.type
        if field_type is None or field_type.is_unsupported or is_scalar_type(field_type.name):
            continue
        if field_type.name not in models and field_type.name not in enum_names:
            errors.append(
                CheckError(
                    f"field '{model_field.name}' in model '{model.name}' references unknown type"
                    f" '{field_type.name}'; expected a built-in type, model, or enum"
                )
            )
    return errors


def _relation_target(model_field: ModelField, attr: Attribute, models: dict[str, Model]) -> Model | None:
    model_arg = attr.argument("model")
    if model_arg is not None:
        name = symbol_name(model_arg.value)
        if name:
            return models.get(name)
    if model_field.type is None or model_field.type.is_unsupported:
        return None
    return models.get(model_field.type.name)


def _check_relation_keys(model: Model, models: dict[str, Model]) -> list[CheckError]:
    """Return errors for relation fields/references that name missing fields."""
    errors: list[CheckError] = []
    for model_field in model.fields:
        attr = model_field.attribute("relation")
        if attr is None:
            continue
        ctx = f"relation on field '{model_field.name}' of model '{model.name}'"

        fields_arg = attr.argument("fields")
        for name in symbol_names(fields_arg.value) if fields_arg is not None else []:
            if model.field(name) is None:
                errors.append(CheckError(f"{ctx} references non-existent field '{name}'"))

        # An unknown target model is already reported by semantic analysis.
        target = _relation_target(model_field, attr, models)
        references_arg = attr.argument("references")
        if target is None or references_arg is None:
            continue
        for name in symbol_names(references_arg.value):
            if target.field(name) is None:
                errors.append(
                    CheckError(f"{ctx} references non-existent field '{name}' in model '{target.name}'")
                )
    return errors


def _check_block_attribute_keys(model: Model) -> list[CheckError]:
    """Return errors for @@id/@@unique/@@index field lists naming missing fields."""
    errors: list[CheckError] = []
    for attr in model.attributes:
        if attr.name not in _KEYED_BLOCK_ATTRIBUTES:
            continue
        fields_arg = attr.argument("fields")
        if fields_arg is None:
            # The field list may be the first positional argument.
            positional = [a for a in attr.arguments if a.name is None]
            fields_arg = positional[0] if positional else None
        if fields_arg is None:
            continue
        for name in symbol_names(fields_arg.value):
            if model.field(name) is None:
                errors.append(
                    CheckError(f"@@{attr.name} in model '{model.name}' references non-existent field '{name}'")
                )
    return errors


def _check_primary_key(model: Model) -> list[CheckWarning]:
    if any(a.name == "id" for a in model.attributes):
        return []
    if any(f.attribute("id") is not None for f in model.fields):
        return []
    return [CheckWarning(f"model '{model.name}' has no @id or @@id")]
