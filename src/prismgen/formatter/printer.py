# Copyright 2026 prismgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Render a parsed Schema back to canonical schema text.

Blocks are emitted datasources first, then generators, models and enums,
each group in declaration order. Re-parsing the output yields an AST equal
to the input, except that config fields without a value are dropped.
"""

from __future__ import annotations

from prismgen.model.schema import (
    Attribute,
    AttributeArgument,
    Datasource,
    Enum,
    Generator,
    Model,
    Schema,
)
from prismgen.model.values import (
    BoolValue,
    CallValue,
    FloatValue,
    IdentValue,
    IntValue,
    ListValue,
    StringValue,
    Value,
)

# ###############
# Public Interface
# ###############

INDENT = "  "


def format_schema(schema: Schema) -> str:
    """Return the canonical text of *schema*, ending with a single newline."""
    blocks: list[str] = []
    blocks.extend(_format_config_block("datasource", ds) for ds in schema.datasources)
    blocks.extend(_format_config_block("generator", gen) for gen in schema.generators)
    blocks.extend(_format_model(model) for model in schema.models)
    blocks.extend(_format_enum(enum_def) for enum_def in schema.enums)
    if not blocks:
        return ""
    return "\n\n".join(blocks) + "\n"


def format_value(value: Value) -> str:
    """Render one attribute argument or config field value."""
    if isinstance(value, StringValue):
        # Escape sequences were kept verbatim by the lexer.
        return f'"{value.value}"'
    if isinstance(value, (IntValue, FloatValue)):
        return value.literal
    if isinstance(value, BoolValue):
        return "true" if value.value else "false"
    if isinstance(value, IdentValue):
        return value.name
    if isinstance(value, ListValue):
        return "[" + ", ".join(format_value(item) for item in value.items) + "]"
    if isinstance(value, CallValue):
        return f"{value.function}(" + ", ".join(format_value(arg) for arg in value.args) + ")"
    raise TypeError(f"Unknown value type: {type(value).__name__}")


def format_attribute(attr: Attribute, prefix: str = "@") -> str:
    """Render ``@name(args)``; *prefix* is ``@@`` for block attributes."""
    if not attr.arguments:
        return f"{prefix}{attr.name}"
    return f"{prefix}{attr.name}(" + ", ".join(_format_argument(a) for a in attr.arguments) + ")"


# ################
# Implementation
# ################


def _format_argument(arg: AttributeArgument) -> str:
    if arg.name is None:
        return format_value(arg.value)
    return f"{arg.name}: {format_value(arg.value)}"


def _format_config_field(name: str, value: Value, width: int) -> str:
    return f"{INDENT}{name.ljust(width)} = {format_value(value)}"


def _format_config_block(keyword: str, block: Datasource | Generator) -> str:
    # A field written as `url = ;` parses without a value and is left out.
    entries = [(f.name, f.value) for f in block.fields if f.value is not None]
    width = max((len(name) for name, _ in entries), default=0)
    lines = [f"{keyword} {block.name} {{"]
    lines.extend(_format_config_field(name, value, width) for name, value in entries)
    lines.append("}")
    return "\n".join(lines)


def _format_model(model: Model) -> str:
    rows: list[tuple[str, str, str]] = []
    for model_field in model.fields:
        type_text = str(model_field.type) if model_field.type is not None else ""
        attrs_text = " ".join(format_attribute(a) for a in model_field.attributes)
        rows.append((model_field.name, type_text, attrs_text))

    name_width = max((len(r[0]) for r in rows), default=0)
    type_width = max((len(r[1]) for r in rows), default=0)

    lines = [f"model {model.name} {{"]
    for name, type_text, attrs_text in rows:
        line = f"{INDENT}{name.ljust(name_width)} {type_text.ljust(type_width)} {attrs_text}"
        lines.append(line.rstrip())
    if model.attributes:
        if rows:
            lines.append("")
        lines.extend(f"{INDENT}{format_attribute(a, '@@')}" for a in model.attributes)
    lines.append("}")
    return "\n".join(lines)


def _format_enum(enum_def: Enum) -> str:
    width = max((len(v.name) for v in enum_def.values), default=0)
    lines = [f"enum {enum_def.name} {{"]
    for enum_value in enum_def.values:
        attrs_text = " ".join(format_attribute(a) for a in enum_value.attributes)
        lines.append(f"{INDENT}{enum_value.name.ljust(width)} {attrs_text}".rstrip())
    if enum_def.attributes:
        if enum_def.values:
            lines.append("")
        lines.extend(f"{INDENT}{format_attribute(a, '@@')}" for a in enum_def.attributes)
    lines.append("}")
    return "\n".join(lines)
