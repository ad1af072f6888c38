# Copyright 2026 prismgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Lexer and parser for schema files."""

from prismgen.parser.lexer import Lexer, Token, TokenType, tokenize
from prismgen.parser.parser import ParseError, Parser, parse_schema

__all__ = [
    "Lexer",
    "Token",
    "TokenType",
    "tokenize",
    "Parser",
    "ParseError",
    "parse_schema",
]
