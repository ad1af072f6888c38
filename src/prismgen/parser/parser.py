# Copyright 2026 prismgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Recursive-descent parser for schema files.

Pulls tokens from the lexer through a cursor with one token of lookahead and
builds a :class:`~prismgen.model.schema.Schema`. Syntax errors do not abort
the parse: every production returns its node (or None) together with the
diagnostics it produced, the broken construct is dropped, and parsing resumes
at the next construct so that independent errors surface in a single run.
"""

from __future__ import annotations

from dataclasses import dataclass

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
    BoolValue,
    CallValue,
    FloatValue,
    IdentValue,
    IntValue,
    ListValue,
    StringValue,
    Value,
)
from prismgen.parser.lexer import Lexer, Token, TokenType

# ###############
# Public Interface
# ###############


@dataclass(frozen=True)
class ParseError:
    """A syntax error recorded while parsing.

    Attributes:
        message: Human-readable description of the error.
        line: 1-based line number of the offending token.
        column: 1-based column number of the offending token.
    """

    message: str
    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.message} at line {self.line}, column {self.column}"


class Parser:
    """Parses the token stream of one lexer into a Schema.

    The first two tokens are fetched on construction. After
    :meth:`parse_schema` has run, :attr:`errors` holds the syntax errors.
    """

    def __init__(self, lexer: Lexer) -> None:
        self._cursor = _Cursor(lexer)
        self._errors: list[ParseError] = []

    @property
    def errors(self) -> list[ParseError]:
        """Syntax errors found by :meth:`parse_schema` (empty if none)."""
        return list(self._errors)

    def parse_schema(self) -> Schema:
        """Parse the whole input and return the Schema."""
        schema, errors = _parse_schema(self._cursor)
        self._errors.extend(errors)
        return schema


def parse_schema(source: str) -> tuple[Schema, list[ParseError]]:
    """Parse schema text without semantic validation.

    Args:
        source: The full text of a schema file.

    Returns:
        The parsed Schema, possibly missing broken blocks, and the syntax
        errors found. An empty error list means the text is syntactically valid.
    """
    parser = Parser(Lexer(source))
    schema = parser.parse_schema()
    return schema, parser.errors


# ################
# Implementation
# ################

_BLOCK_KEYWORDS: frozenset[TokenType] = frozenset(
    {
        TokenType.DATASOURCE,
        TokenType.GENERATOR,
        TokenType.MODEL,
        TokenType.ENUM,
    }
)

_LITERAL_TYPES: frozenset[TokenType] = frozenset(
    {
        TokenType.IDENT,
        TokenType.STRING,
        TokenType.INT,
        TokenType.FLOAT,
        TokenType.BOOLEAN,
        TokenType.ILLEGAL,
    }
)

# Keywords are valid argument names, as in `@relation(model: User)` or `@@index([a], type: Hash)`.
_ARGUMENT_NAME_TYPES: frozenset[TokenType] = _BLOCK_KEYWORDS | {TokenType.IDENT, TokenType.TYPE}


class _Cursor:
    """Position in the token stream: the current token plus one of lookahead.

    NEWLINE tokens are treated as whitespace and never surface here.
    """

    def __init__(self, lexer: Lexer) -> None:
        self._lexer = lexer
        self.current: Token = self._pull()
        self.peek: Token = self._pull()

    def advance(self) -> Token:
        """Consume and return the current token. At EOF the cursor stays put."""
        tok = self.current
        self.current = self.peek
        self.peek = self._pull()
        return tok

    def check(self, *types: TokenType) -> bool:
        """Return True if the current token matches any of the given types."""
        return self.current.type in types

    def at_end(self) -> bool:
        return self.current.type == TokenType.EOF

    def expect(self, token_type: TokenType) -> ParseError | None:
        """Return an error if the current token is not *token_type*.

        The cursor is never advanced here; callers consume the token themselves.
        """
        if self.current.type == token_type:
            return None
        return self.error(f"expected {token_type.value}, found {_describe(self.current)}")

    def error(self, message: str) -> ParseError:
        """Build an error located at the current token."""
        return ParseError(message, self.current.line, self.current.column)

    def _pull(self) -> Token:
        tok = self._lexer.next_token()
        while tok.type == TokenType.NEWLINE:
            tok = self._lexer.next_token()
        return tok


def _describe(tok: Token) -> str:
    """Describe a token for error messages, e.g. ``IDENT 'User'`` or ``{``."""
    if tok.type in _LITERAL_TYPES:
        return f"{tok.type.value} {tok.literal!r}"
    return tok.type.value


# ------------------------------------------------------------------
# Top level
# ------------------------------------------------------------------


def _parse_schema(cursor: _Cursor) -> tuple[Schema, list[ParseError]]:
    """Dispatch on each top-level block keyword until EOF."""
    errors: list[ParseError] = []
    datasources: list[Datasource] = []
    generators: list[Generator] = []
    models: list[Model] = []
    enums: list[Enum] = []

    while not cursor.at_end():
        tok = cursor.current
        if tok.type == TokenType.DATASOURCE:
            datasource, errs = _parse_config_block(cursor, TokenType.DATASOURCE, Datasource)
            _collect(datasource, datasources, errs, errors, cursor)
        elif tok.type == TokenType.GENERATOR:
            generator, errs = _parse_config_block(cursor, TokenType.GENERATOR, Generator)
            _collect(generator, generators, errs, errors, cursor)
        elif tok.type == TokenType.MODEL:
            model, errs = _parse_model(cursor)
            _collect(model, models, errs, errors, cursor)
        elif tok.type == TokenType.ENUM:
            enum_def, errs = _parse_enum(cursor)
            _collect(enum_def, enums, errs, errors, cursor)
        elif tok.type == TokenType.ILLEGAL:
            cursor.advance()
        else:
            errors.append(cursor.error(f"unexpected token {_describe(tok)}"))
            cursor.advance()

    schema = Schema(
        datasources=datasources,
        generators=generators,
        models=models,
        enums=enums,
    )
    return schema, errors


def _collect(
    node: object | None,
    nodes: list,
    errs: list[ParseError],
    errors: list[ParseError],
    cursor: _Cursor,
) -> None:
    """Keep a parsed block, or skip the remains of a block that failed to parse."""
    errors.extend(errs)
    if node is not None:
        nodes.append(node)
    else:
        _synchronize(cursor)


def _synchronize(cursor: _Cursor) -> None:
    """Skip the rest of a broken block.

    Stops after the ``}`` that closes the block, or before the next block
    keyword found outside any braces.
    """
    depth = 0
    while not cursor.at_end():
        tok = cursor.current
        if depth == 0 and tok.type in _BLOCK_KEYWORDS:
            return
        cursor.advance()
        if tok.type == TokenType.LBRACE:
            depth += 1
        elif tok.type == TokenType.RBRACE:
            depth -= 1
            if depth <= 0:
                return


def _parse_block_header(cursor: _Cursor, keyword: TokenType) -> tuple[str | None, list[ParseError]]:
    """Parse ``<keyword> <Name> {`` and return the block name."""
    cursor.advance()  # keyword
    if not cursor.check(TokenType.IDENT):
        return None, [
            cursor.error(f"expected identifier for {keyword.value} name, found {_describe(cursor.current)}")
        ]
    name = cursor.advance().literal
    err = cursor.expect(TokenType.LBRACE)
    if err is not None:
        return None, [err]
    cursor.advance()  # {
    return name, []


def _close_block(cursor: _Cursor) -> ParseError | None:
    """Consume the closing ``}`` of a block body."""
    err = cursor.expect(TokenType.RBRACE)
    if err is None:
        cursor.advance()
    return err


# ------------------------------------------------------------------
# Datasource and generator blocks
# ------------------------------------------------------------------


def _parse_config_block(
    cursor: _Cursor,
    keyword: TokenType,
    node_type: type[Datasource] | type[Generator],
) -> tuple[Datasource | Generator | None, list[ParseError]]:
    """Parse: datasource|generator <name> { <key> = <value> ... }"""
    name, errors = _parse_block_header(cursor, keyword)
    if name is None:
        return None, errors

    fields: list[ConfigField] = []
    while not cursor.check(TokenType.RBRACE, TokenType.EOF):
        if cursor.check(TokenType.IDENT):
            config_field, errs = _parse_config_field(cursor)
            errors.extend(errs)
            if config_field is not None:
                fields.append(config_field)
        else:
            cursor.advance()

    err = _close_block(cursor)
    if err is not None:
        errors.append(err)
        return None, errors
    return node_type(name=name, fields=fields), errors


def _parse_config_field(cursor: _Cursor) -> tuple[ConfigField | None, list[ParseError]]:
    """Parse: <key> = <value>"""
    name = cursor.advance().literal
    err = cursor.expect(TokenType.EQUALS)
    if err is not None:
        return None, [err]
    cursor.advance()  # =
    value, errors = _parse_value(cursor)
    return ConfigField(name=name, value=value), errors


# ------------------------------------------------------------------
# Model blocks
# ------------------------------------------------------------------


def _parse_model(cursor: _Cursor) -> tuple[Model | None, list[ParseError]]:
    """Parse: model <Name> { (<field> | @@<attribute>)* }"""
    name, errors = _parse_block_header(cursor, TokenType.MODEL)
    if name is None:
        return None, errors

    fields: list[ModelField] = []
    attributes: list[Attribute] = []
    while not cursor.check(TokenType.RBRACE, TokenType.EOF):
        if cursor.check(TokenType.ATAT):
            cursor.advance()  # @@
            attr, errs = _parse_attribute(cursor)
            errors.extend(errs)
            if attr is not None:
                attributes.append(attr)
        elif cursor.check(TokenType.IDENT, TokenType.TYPE):
            # 'type' is a keyword but also a common field name.
            model_field, errs = _parse_model_field(cursor)
            errors.extend(errs)
            fields.append(model_field)
        else:
            cursor.advance()

    err = _close_block(cursor)
    if err is not None:
        errors.append(err)
        return None, errors
    return Model(name=name, fields=fields, attributes=attributes), errors


def _parse_model_field(cursor: _Cursor) -> tuple[ModelField, list[ParseError]]:
    """Parse: <name> <Type>[[]][?] (@<attribute>)*

    The field is returned even when its type is malformed; its ``type`` is
    then None.
    """
    name = cursor.advance().literal
    field_type, errors = _parse_field_type(cursor)
    attributes, errs = _parse_field_attributes(cursor)
    errors.extend(errs)
    return ModelField(name=name, type=field_type, attributes=attributes), errors


def _parse_field_type(cursor: _Cursor) -> tuple[FieldType | None, list[ParseError]]:
    """Parse a field type such as ``String``, ``Post[]``, ``Int?`` or ``Unsupported("circle")``."""
    if not cursor.check(TokenType.IDENT):
        return None, [cursor.error(f"invalid field type {_describe(cursor.current)}")]

    name = cursor.advance().literal
    is_unsupported = False
    unsupported_value = ""
    if name == "Unsupported":
        is_unsupported = True
        if cursor.check(TokenType.LPAREN):
            cursor.advance()  # (
            if cursor.check(TokenType.STRING):
                unsupported_value = cursor.advance().literal
            err = cursor.expect(TokenType.RPAREN)
            if err is not None:
                return None, [err]
            cursor.advance()  # )

    is_array = False
    if cursor.check(TokenType.LBRACKET) and cursor.peek.type == TokenType.RBRACKET:
        cursor.advance()  # [
        cursor.advance()  # ]
        is_array = True

    is_optional = False
    if cursor.check(TokenType.QUESTION):
        cursor.advance()
        is_optional = True

    field_type = FieldType(
        name=name,
        is_array=is_array,
        is_optional=is_optional,
        is_unsupported=is_unsupported,
        unsupported_value=unsupported_value,
    )
    return field_type, []


def _parse_field_attributes(cursor: _Cursor) -> tuple[list[Attribute], list[ParseError]]:
    """Parse a run of ``@attribute`` markers."""
    attributes: list[Attribute] = []
    errors: list[ParseError] = []
    while cursor.check(TokenType.AT):
        cursor.advance()  # @
        attr, errs = _parse_attribute(cursor)
        errors.extend(errs)
        if attr is not None:
            attributes.append(attr)
    return attributes, errors


# ------------------------------------------------------------------
# Enum blocks
# ------------------------------------------------------------------


def _parse_enum(cursor: _Cursor) -> tuple[Enum | None, list[ParseError]]:
    """Parse: enum <Name> { (<Value> (@<attribute>)* | @@<attribute>)* }"""
    name, errors = _parse_block_header(cursor, TokenType.ENUM)
    if name is None:
        return None, errors

    values: list[EnumValue] = []
    attributes: list[Attribute] = []
    while not cursor.check(TokenType.RBRACE, TokenType.EOF):
        if cursor.check(TokenType.IDENT):
            value_name = cursor.advance().literal
            value_attrs, errs = _parse_field_attributes(cursor)
            errors.extend(errs)
            values.append(EnumValue(name=value_name, attributes=value_attrs))
        elif cursor.check(TokenType.ATAT):
            cursor.advance()  # @@
            attr, errs = _parse_attribute(cursor)
            errors.extend(errs)
            if attr is not None:
                attributes.append(attr)
        else:
            cursor.advance()

    err = _close_block(cursor)
    if err is not None:
        errors.append(err)
        return None, errors
    return Enum(name=name, values=values, attributes=attributes), errors


# ------------------------------------------------------------------
# Attributes and values
# ------------------------------------------------------------------


def _parse_attribute(cursor: _Cursor) -> tuple[Attribute | None, list[ParseError]]:
    """Parse an attribute after its ``@``/``@@`` marker: <name>(.<name>)* [( <args> )]"""
    if not cursor.check(TokenType.IDENT):
        return None, [cursor.error(f"expected identifier for attribute name, found {_describe(cursor.current)}")]
    name = cursor.advance().literal

    # Compound names such as db.Uuid or db.VarChar.
    while cursor.check(TokenType.DOT):
        cursor.advance()  # .
        if cursor.check(TokenType.IDENT):
            name = f"{name}.{cursor.advance().literal}"

    errors: list[ParseError] = []
    arguments: list[AttributeArgument] = []
    if cursor.check(TokenType.LPAREN):
        cursor.advance()  # (
        while not cursor.check(TokenType.RPAREN, TokenType.EOF):
            arg, errs = _parse_argument(cursor)
            errors.extend(errs)
            if arg is not None:
                arguments.append(arg)
            if cursor.check(TokenType.COMMA):
                cursor.advance()
        err = cursor.expect(TokenType.RPAREN)
        if err is not None:
            errors.append(err)
            return None, errors
        cursor.advance()  # )

    return Attribute(name=name, arguments=arguments), errors


def _parse_argument(cursor: _Cursor) -> tuple[AttributeArgument | None, list[ParseError]]:
    """Parse a positional value or a named ``name: value`` / ``name = value`` argument."""
    arg_name: str | None = None
    if cursor.current.type in _ARGUMENT_NAME_TYPES and cursor.peek.type in (TokenType.COLON, TokenType.EQUALS):
        arg_name = cursor.advance().literal
        cursor.advance()  # : or =

    value, errors = _parse_value(cursor)
    if value is None:
        return None, errors
    return AttributeArgument(name=arg_name, value=value), errors


def _parse_value(cursor: _Cursor) -> tuple[Value | None, list[ParseError]]:
    """Parse a literal, a ``[...]`` list, an identifier, or a ``name(...)`` call.

    A token that cannot start a value is skipped and yields None without a
    diagnostic.
    """
    tok = cursor.current
    if tok.type == TokenType.STRING:
        cursor.advance()
        return StringValue(value=tok.literal), []
    if tok.type == TokenType.INT:
        cursor.advance()
        return IntValue(literal=tok.literal), []
    if tok.type == TokenType.FLOAT:
        cursor.advance()
        return FloatValue(literal=tok.literal), []
    if tok.type == TokenType.BOOLEAN:
        cursor.advance()
        return BoolValue(value=tok.literal == "true"), []
    if tok.type == TokenType.LBRACKET:
        return _parse_list(cursor)
    if tok.type == TokenType.IDENT:
        cursor.advance()
        if cursor.check(TokenType.LPAREN):
            return _parse_call(cursor, tok.literal)
        return IdentValue(name=tok.literal), []

    cursor.advance()
    return None, []


def _parse_list(cursor: _Cursor) -> tuple[Value | None, list[ParseError]]:
    """Parse: [ <value> (, <value>)* ]"""
    cursor.advance()  # [
    errors: list[ParseError] = []
    items: list[Value] = []
    while not cursor.check(TokenType.RBRACKET, TokenType.EOF):
        value, errs = _parse_value(cursor)
        errors.extend(errs)
        if value is not None:
            items.append(value)
        if cursor.check(TokenType.COMMA):
            cursor.advance()
    if cursor.check(TokenType.RBRACKET):
        cursor.advance()
    return ListValue(items=items), errors


def _parse_call(cursor: _Cursor, function: str) -> tuple[Value | None, list[ParseError]]:
    """Parse the argument list of a call whose name has already been consumed."""
    cursor.advance()  # (
    errors: list[ParseError] = []
    args: list[Value] = []
    while not cursor.check(TokenType.RPAREN, TokenType.EOF):
        value, errs = _parse_value(cursor)
        errors.extend(errs)
        if value is not None:
            args.append(value)
        if cursor.check(TokenType.COMMA):
            cursor.advance()
    err = cursor.expect(TokenType.RPAREN)
    if err is not None:
        errors.append(err)
        return None, errors
    cursor.advance()  # )
    return CallValue(function=function, args=args), errors
