# Copyright 2026 prismgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""AST for schema files (datasources, generators, models, enums, values)."""

from prismgen.model.schema import (
    Attribute,
    AttributeArgument,
    ConfigField,
    Datasource,
    Enum,
    EnumValue,
    FieldType,
    Generator,
    Model,
    ModelField,
    Schema,
)
from prismgen.model.values import (
    SCALAR_TYPES,
    BoolValue,
    CallValue,
    FloatValue,
    IdentValue,
    IntValue,
    ListValue,
    StringValue,
    Value,
    is_scalar_type,
    symbol_name,
    symbol_names,
)

__all__ = [
    # Values
    "SCALAR_TYPES",
    "is_scalar_type",
    "StringValue",
    "IntValue",
    "FloatValue",
    "BoolValue",
    "IdentValue",
    "ListValue",
    "CallValue",
    "Value",
    "symbol_name",
    "symbol_names",
    # Entities
    "AttributeArgument",
    "Attribute",
    "ConfigField",
    "Datasource",
    "Generator",
    "FieldType",
    "ModelField",
    "Model",
    "EnumValue",
    "Enum",
    "Schema",
]
