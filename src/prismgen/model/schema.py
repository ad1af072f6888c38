# Copyright 2026 prismgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""AST entities for a parsed schema (datasources, generators, models, enums)."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic import Field as _Field

from prismgen.model.values import Value

# ###############
# Public Interface
# ###############


class AttributeArgument(BaseModel):
    """A positional or named (``name: value`` / ``name = value``) argument."""

    model_config = ConfigDict(frozen=True)

    name: str | None = None
    value: Value


class Attribute(BaseModel):
    """A field-level ``@name(...)`` or block-level ``@@name(...)`` attribute.

    Compound names such as ``db.Uuid`` are stored dot-joined.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    arguments: list[AttributeArgument] = _Field(default_factory=list)

    def argument(self, name: str) -> AttributeArgument | None:
        """Return the first named argument called *name*, if any."""
        for arg in self.arguments:
            if arg.name == name:
                return arg
        return None

    def __str__(self) -> str:
        return f"Attribute({self.name})"


class ConfigField(BaseModel):
    """A ``key = value`` entry inside a datasource or generator block."""

    model_config = ConfigDict(frozen=True)

    name: str
    value: Value | None = None


class Datasource(BaseModel):
    """A ``datasource <name> { ... }`` block."""

    model_config = ConfigDict(frozen=True)

    name: str
    fields: list[ConfigField] = _Field(default_factory=list)

    def field(self, name: str) -> ConfigField | None:
        for f in self.fields:
            if f.name == name:
                return f
        return None

    def __str__(self) -> str:
        return f"Datasource({self.name})"


class Generator(BaseModel):
    """A ``generator <name> { ... }`` block."""

    model_config = ConfigDict(frozen=True)

    name: str
    fields: list[ConfigField] = _Field(default_factory=list)

    def field(self, name: str) -> ConfigField | None:
        for f in self.fields:
            if f.name == name:
                return f
        return None

    def __str__(self) -> str:
        return f"Generator({self.name})"


class FieldType(BaseModel):
    """The declared type of a model field.

    Attributes:
        name: A scalar type, an enum name, or a model name (relation).
            ``Unsupported`` for the native-type escape hatch.
        is_array: Set by the ``Type[]`` suffix.
        is_optional: Set by the ``Type?`` suffix.
        is_unsupported: Set for ``Unsupported("raw")`` types.
        unsupported_value: The raw native column type of an unsupported type.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    is_array: bool = False
    is_optional: bool = False
    is_unsupported: bool = False
    unsupported_value: str = ""

    def __str__(self) -> str:
        if self.is_unsupported:
            base = f'Unsupported("{self.unsupported_value}")'
        else:
            base = self.name
        return base + ("[]" if self.is_array else "") + ("?" if self.is_optional else "")


class ModelField(BaseModel):
    """A field declaration inside a model. ``type`` is None if it failed to parse."""

    model_config = ConfigDict(frozen=True)

    name: str
    type: FieldType | None = None
    attributes: list[Attribute] = _Field(default_factory=list)

    def attribute(self, name: str) -> Attribute | None:
        for attr in self.attributes:
            if attr.name == name:
                return attr
        return None


class Model(BaseModel):
    """A ``model <Name> { ... }`` block."""

    model_config = ConfigDict(frozen=True)

    name: str
    fields: list[ModelField] = _Field(default_factory=list)
    attributes: list[Attribute] = _Field(default_factory=list)

    def field(self, name: str) -> ModelField | None:
        for f in self.fields:
            if f.name == name:
                return f
        return None

    def __str__(self) -> str:
        return f"Model({self.name})"


class EnumValue(BaseModel):
    """A single value of an enum, with its optional ``@`` attributes."""

    model_config = ConfigDict(frozen=True)

    name: str
    attributes: list[Attribute] = _Field(default_factory=list)


class Enum(BaseModel):
    """An ``enum <Name> { ... }`` block."""

    model_config = ConfigDict(frozen=True)

    name: str
    values: list[EnumValue] = _Field(default_factory=list)
    attributes: list[Attribute] = _Field(default_factory=list)

    def __str__(self) -> str:
        return f"Enum({self.name})"


class Schema(BaseModel):
    """Root node for one parsed schema file, in declaration order."""

    model_config = ConfigDict(frozen=True)

    datasources: list[Datasource] = _Field(default_factory=list)
    generators: list[Generator] = _Field(default_factory=list)
    models: list[Model] = _Field(default_factory=list)
    enums: list[Enum] = _Field(default_factory=list)

    def model(self, name: str) -> Model | None:
        for m in self.models:
            if m.name == name:
                return m
        return None

    def enum(self, name: str) -> Enum | None:
        for e in self.enums:
            if e.name == name:
                return e
        return None

    def __str__(self) -> str:
        lines = ["Schema{"]
        for block in (*self.datasources, *self.generators, *self.models, *self.enums):
            lines.append(f"  {block}")
        lines.append("}")
        return "\n".join(lines)
