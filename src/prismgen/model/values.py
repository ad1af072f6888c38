# Copyright 2026 prismgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Attribute argument values and built-in scalar types of the schema language."""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict
from pydantic import Field as _Field

# ###############
# Public Interface
# ###############

SCALAR_TYPES: frozenset[str] = frozenset(
    {
        "String",
        "Int",
        "BigInt",
        "Float",
        "Decimal",
        "Boolean",
        "DateTime",
        "Json",
        "Bytes",
    }
)


def is_scalar_type(name: str) -> bool:
    """Return True if *name* is one of the built-in scalar field types."""
    return name in SCALAR_TYPES


class StringValue(BaseModel):
    """A double-quoted string literal. Escape sequences are kept verbatim."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["string"] = "string"
    value: str


class IntValue(BaseModel):
    """An integer literal, kept as its source text."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["int"] = "int"
    literal: str


class FloatValue(BaseModel):
    """A floating-point literal, kept as its source text."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["float"] = "float"
    literal: str


class BoolValue(BaseModel):
    """A ``true`` or ``false`` literal."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["bool"] = "bool"
    value: bool


class IdentValue(BaseModel):
    """A bare identifier such as an enum value or a field name."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["ident"] = "ident"
    name: str


class ListValue(BaseModel):
    """An ordered ``[a, b, ...]`` list of values."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["list"] = "list"
    items: list[Value] = _Field(default_factory=list)


class CallValue(BaseModel):
    """A function call such as ``now()`` or ``env("DATABASE_URL")``."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["call"] = "call"
    function: str
    args: list[Value] = _Field(default_factory=list)


# An attribute argument or config field value. The `kind` discriminator keeps
# JSON artifacts unambiguous when they are read back.
Value = Annotated[
    StringValue | IntValue | FloatValue | BoolValue | IdentValue | ListValue | CallValue,
    _Field(discriminator="kind"),
]


def symbol_name(value: Value | None) -> str | None:
    """Return the name carried by a string or identifier value, else None.

    Relation arguments may reference fields and models either as bare
    identifiers (``fields: [authorId]``) or as strings (``model: "User"``).
    """
    if isinstance(value, IdentValue):
        return value.name
    if isinstance(value, StringValue):
        return value.value
    return None


def symbol_names(value: Value | None) -> list[str]:
    """Return the names in a list value, skipping entries that are not names."""
    if not isinstance(value, ListValue):
        return []
    names: list[str] = []
    for item in value.items:
        name = symbol_name(item)
        if name is not None:
            names.append(name)
    return names


# Resolve forward references for the recursive value types.
ListValue.model_rebuild()
CallValue.model_rebuild()
