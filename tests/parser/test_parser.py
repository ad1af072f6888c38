# Copyright 2026 prismgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the schema recursive-descent parser."""

from prismgen.model.schema import Attribute, AttributeArgument, FieldType, Model, Schema
from prismgen.model.values import (
    BoolValue,
    CallValue,
    FloatValue,
    IdentValue,
    IntValue,
    ListValue,
    StringValue,
)
from prismgen.parser.lexer import Lexer
from prismgen.parser.parser import ParseError, Parser, parse_schema

# ###############
# Test Helpers
# ###############


def _parse(source: str) -> Schema:
    """Parse *source* and assert that it is syntactically valid."""
    schema, errors = parse_schema(source)
    assert errors == [], [str(e) for e in errors]
    return schema


def _messages(source: str) -> list[str]:
    """Return the rendered syntax errors for *source*."""
    _, errors = parse_schema(source)
    return [str(e) for e in errors]


def _model(source: str) -> Model:
    """Parse a single model and return it."""
    schema = _parse(source)
    assert len(schema.models) == 1
    return schema.models[0]


def _attr(source: str) -> Attribute:
    """Parse ``model M { f Int <source> }`` and return the field's only attribute."""
    model = _model(f"model M {{ f Int {source} }}")
    assert len(model.fields[0].attributes) == 1
    return model.fields[0].attributes[0]


# ###############
# Empty and Trivial Input
# ###############


class TestEmptyInput:
    def test_empty_source(self) -> None:
        schema = _parse("")
        assert schema == Schema()

    def test_comments_only(self) -> None:
        schema = _parse("// nothing here\n/* or here */\n")
        assert schema == Schema()

    def test_illegal_tokens_are_skipped_at_top_level(self) -> None:
        assert _parse("# $ %") == Schema()


# ###############
# Datasources and Generators
# ###############


class TestConfigBlocks:
    def test_datasource_with_fields(self) -> None:
        schema = _parse('datasource db {\n  provider = "postgresql"\n  url = env("DATABASE_URL")\n}')
        assert len(schema.datasources) == 1
        ds = schema.datasources[0]
        assert ds.name == "db"
        assert [f.name for f in ds.fields] == ["provider", "url"]
        assert ds.fields[0].value == StringValue(value="postgresql")
        assert ds.fields[1].value == CallValue(function="env", args=[StringValue(value="DATABASE_URL")])

    def test_generator(self) -> None:
        schema = _parse('generator client { provider = "prismgen-client" output = "./gen" }')
        assert len(schema.generators) == 1
        gen = schema.generators[0]
        assert gen.name == "client"
        assert gen.field("output") is not None
        assert gen.field("output").value == StringValue(value="./gen")
        assert gen.field("missing") is None

    def test_config_values_of_every_kind(self) -> None:
        schema = _parse("generator g { a = 1 b = 2.5 c = true d = [\"x\", \"y\"] e = native }")
        values = {f.name: f.value for f in schema.generators[0].fields}
        assert values["a"] == IntValue(literal="1")
        assert values["b"] == FloatValue(literal="2.5")
        assert values["c"] == BoolValue(value=True)
        assert values["d"] == ListValue(items=[StringValue(value="x"), StringValue(value="y")])
        assert values["e"] == IdentValue(name="native")

    def test_config_field_missing_equals(self) -> None:
        schema, errors = parse_schema('datasource db { provider "sqlite" }')
        assert [e.message for e in errors] == ["expected =, found STRING 'sqlite'"]
        # The field is dropped but the block survives.
        assert schema.datasources[0].fields == []


# ###############
# Models
# ###############


class TestModels:
    def test_end_to_end_scenario(self) -> None:
        schema = _parse(
            'datasource db { provider = "postgresql" }\n'
            "model User {\n"
            "  id    Int    @id @default(autoincrement())\n"
            "  email String @unique\n"
            "  name  String?\n"
            "}\n"
        )
        assert len(schema.datasources) == 1
        assert schema.datasources[0].field("provider").value == StringValue(value="postgresql")
        user = schema.model("User")
        assert user is not None
        assert [f.name for f in user.fields] == ["id", "email", "name"]

        id_field = user.field("id")
        assert [a.name for a in id_field.attributes] == ["id", "default"]
        default = id_field.attribute("default")
        assert default.arguments == [AttributeArgument(value=CallValue(function="autoincrement"))]

        assert user.field("name").type == FieldType(name="String", is_optional=True)

    def test_field_type_modifiers(self) -> None:
        model = _model("model M { a Post[] b Int? c Tag[]? d String }")
        types = {f.name: f.type for f in model.fields}
        assert types["a"] == FieldType(name="Post", is_array=True)
        assert types["b"] == FieldType(name="Int", is_optional=True)
        assert types["c"] == FieldType(name="Tag", is_array=True, is_optional=True)
        assert types["d"] == FieldType(name="String")

    def test_array_marker_requires_closing_bracket(self) -> None:
        schema, errors = parse_schema("model M { x Int[ }")
        assert errors == []
        assert schema.models[0].field("x").type == FieldType(name="Int")

    def test_unsupported_type(self) -> None:
        model = _model('model M { loc Unsupported("circle")? }')
        field_type = model.field("loc").type
        assert field_type.name == "Unsupported"
        assert field_type.is_unsupported
        assert field_type.unsupported_value == "circle"
        assert field_type.is_optional

    def test_type_keyword_as_field_name(self) -> None:
        model = _model("model M { type String }")
        assert model.field("type") is not None

    def test_block_attributes(self) -> None:
        model = _model("model M {\n  a Int\n  b Int\n\n  @@id([a, b])\n  @@map(\"m_table\")\n}")
        assert [a.name for a in model.attributes] == ["id", "map"]
        assert model.attributes[0].arguments[0].value == ListValue(
            items=[IdentValue(name="a"), IdentValue(name="b")]
        )

    def test_brace_on_next_line(self) -> None:
        model = _model("model User\n{\n  id Int\n}")
        assert model.name == "User"

    def test_invalid_field_type_keeps_field_without_type(self) -> None:
        schema, errors = parse_schema("model M { id 123 }")
        assert [str(e) for e in errors] == ["invalid field type INT '123' at line 1, column 14"]
        assert schema.models[0].field("id").type is None

    def test_multiple_blocks_keep_declaration_order(self) -> None:
        schema = _parse("model B { id Int } enum E { X } model A { id Int }")
        assert [m.name for m in schema.models] == ["B", "A"]
        assert [e.name for e in schema.enums] == ["E"]


# ###############
# Enums
# ###############


class TestEnums:
    def test_enum_values(self) -> None:
        schema = _parse("enum Role {\n  USER\n  ADMIN\n}")
        assert [v.name for v in schema.enums[0].values] == ["USER", "ADMIN"]

    def test_enum_value_and_block_attributes(self) -> None:
        schema = _parse('enum Role { USER ADMIN @map("admin") @@map("roles") }')
        role = schema.enum("Role")
        assert role.values[0].attributes == []
        assert role.values[1].attributes == [
            Attribute(name="map", arguments=[AttributeArgument(value=StringValue(value="admin"))])
        ]
        assert [a.name for a in role.attributes] == ["map"]

    def test_empty_enum_parses(self) -> None:
        schema = _parse("enum Empty {}")
        assert schema.enums[0].values == []


# ###############
# Attributes and Values
# ###############


class TestAttributes:
    def test_attribute_without_arguments(self) -> None:
        assert _attr("@id") == Attribute(name="id")

    def test_compound_name(self) -> None:
        attr = _attr("@db.VarChar(255)")
        assert attr.name == "db.VarChar"
        assert attr.arguments == [AttributeArgument(value=IntValue(literal="255"))]

    def test_named_arguments_with_colon_and_equals(self) -> None:
        model = _model('model M { a Int b Int @@unique(fields = [a, b], map: "ab") }')
        attr = model.attributes[0]
        assert [arg.name for arg in attr.arguments] == ["fields", "map"]
        assert attr.argument("map").value == StringValue(value="ab")

    def test_positional_and_named_arguments_mix(self) -> None:
        attr = _attr('@relation("Posts", fields: [authorId], references: [id])')
        assert [arg.name for arg in attr.arguments] == [None, "fields", "references"]

    def test_keyword_as_argument_name(self) -> None:
        model = _model("model M { a Int @@index([a], type: Hash) }")
        attr = model.attributes[0]
        assert [arg.name for arg in attr.arguments] == [None, "type"]
        assert attr.argument("type").value == IdentValue(name="Hash")

    def test_model_keyword_as_argument_name(self) -> None:
        attr = _attr('@relation(model: "User", fields: [uid])')
        assert [arg.name for arg in attr.arguments] == ["model", "fields"]
        assert attr.argument("model").value == StringValue(value="User")

    def test_function_call_argument(self) -> None:
        attr = _attr("@default(now())")
        assert attr.arguments == [AttributeArgument(value=CallValue(function="now", args=[]))]

    def test_nested_call_arguments(self) -> None:
        attr = _attr("@default(dbgenerated(uuid(4)))")
        assert attr.arguments[0].value == CallValue(
            function="dbgenerated",
            args=[CallValue(function="uuid", args=[IntValue(literal="4")])],
        )

    def test_boolean_and_float_values(self) -> None:
        assert _attr("@default(false)").arguments[0].value == BoolValue(value=False)
        assert _attr("@default(0.5)").arguments[0].value == FloatValue(literal="0.5")

    def test_trailing_comma_is_tolerated(self) -> None:
        model = _model("model M { a Int b Int @@index([a, b,],) }")
        attr = model.attributes[0]
        assert len(attr.arguments) == 1
        assert attr.arguments[0].value == ListValue(items=[IdentValue(name="a"), IdentValue(name="b")])

    def test_token_that_cannot_start_a_value_is_skipped_silently(self) -> None:
        schema, errors = parse_schema("model M { a Int @map(;) }")
        assert errors == []
        assert schema.models[0].field("a").attributes == [Attribute(name="map")]

    def test_missing_closing_paren_drops_attribute(self) -> None:
        schema, errors = parse_schema("model M { a Int @default(now( }")
        assert errors
        assert all(e.message.startswith("expected") for e in errors)


# ###############
# Error Recovery
# ###############


class TestErrorRecovery:
    def test_missing_model_name(self) -> None:
        schema, errors = parse_schema("model { id Int }")
        assert [str(e) for e in errors] == ["expected identifier for model name, found { at line 1, column 7"]
        assert schema.models == []

    def test_missing_open_brace(self) -> None:
        schema, errors = parse_schema("model User id Int }")
        assert [e.message for e in errors] == ["expected {, found IDENT 'id'"]
        assert schema.models == []

    def test_eof_before_closing_brace_drops_block(self) -> None:
        schema, errors = parse_schema("model User {\n  id Int\n")
        assert [e.message for e in errors] == ["expected }, found EOF"]
        assert schema.models == []

    def test_unexpected_top_level_token(self) -> None:
        schema, errors = parse_schema("foo\nmodel A { id Int }")
        assert [str(e) for e in errors] == ["unexpected token IDENT 'foo' at line 1, column 1"]
        assert [m.name for m in schema.models] == ["A"]

    def test_independent_errors_surface_in_one_run(self) -> None:
        messages = _messages("foo\nmodel { }\nbar\nenum E { A }")
        assert len(messages) == 3
        assert messages[0].startswith("unexpected token IDENT 'foo'")
        assert messages[1].startswith("expected identifier for model name")
        assert messages[2].startswith("unexpected token IDENT 'bar'")

    def test_broken_block_does_not_swallow_next_block(self) -> None:
        schema, errors = parse_schema("datasource { provider = \"sqlite\" }\nmodel A { id Int }")
        assert len(errors) == 1
        assert schema.datasources == []
        assert [m.name for m in schema.models] == ["A"]

    def test_parse_error_str(self) -> None:
        assert str(ParseError("expected =, found }", 3, 9)) == "expected =, found } at line 3, column 9"


# ###############
# Parser Object
# ###############


class TestParserObject:
    def test_errors_empty_after_valid_parse(self) -> None:
        parser = Parser(Lexer("model A { id Int }"))
        schema = parser.parse_schema()
        assert parser.errors == []
        assert schema.model("A") is not None

    def test_errors_property_returns_copy(self) -> None:
        parser = Parser(Lexer("model { }"))
        parser.parse_schema()
        parser.errors.clear()
        assert len(parser.errors) == 1


# ###############
# Determinism and Comments
# ###############


class TestDeterminism:
    _SOURCE = (
        'datasource db { provider = "mysql" }\n'
        "model Post {\n"
        "  id       Int  @id\n"
        "  author   User @relation(fields: [authorId], references: [id])\n"
        "  authorId Int\n"
        "}\n"
        "model User { id Int @id posts Post[] }\n"
    )

    def test_same_input_same_result(self) -> None:
        assert parse_schema(self._SOURCE) == parse_schema(self._SOURCE)

    def test_comments_do_not_change_the_ast(self) -> None:
        commented = (
            "// header\n"
            'datasource /* name */ db { provider = "mysql" // inline\n }\n'
            "model Post { /* fields */\n"
            "  id       Int  @id // primary key\n"
            "  author   User @relation(/* a */ fields: [authorId], references: [id])\n"
            "  authorId Int\n"
            "}\n"
            "/* between */ model User { id Int @id posts Post[] }\n"
        )
        assert parse_schema(commented) == parse_schema(self._SOURCE)
