# Copyright 2026 prismgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the schema lexical scanner."""

import pytest

from prismgen.parser.lexer import Lexer, Token, TokenType, tokenize

# ###############
# Test Helpers
# ###############


def _tokens_no_eof(source: str) -> list[Token]:
    """Return all tokens except the terminal EOF token."""
    result = tokenize(source)
    assert result[-1].type == TokenType.EOF
    return result[:-1]


def _types(source: str) -> list[TokenType]:
    """Return the token types for all tokens except EOF."""
    return [tok.type for tok in _tokens_no_eof(source)]


def _literals(source: str) -> list[str]:
    """Return the token literals for all tokens except EOF."""
    return [tok.literal for tok in _tokens_no_eof(source)]


# ###############
# EOF Handling
# ###############


class TestEof:
    def test_empty_string_produces_eof(self) -> None:
        tokens = tokenize("")
        assert len(tokens) == 1
        assert tokens[0].type == TokenType.EOF
        assert tokens[0].literal == ""

    def test_eof_at_line_1_column_1_for_empty_input(self) -> None:
        tok = tokenize("")[0]
        assert (tok.line, tok.column) == (1, 1)

    def test_blanks_only_produce_eof(self) -> None:
        assert _types("   \t\r  ") == []

    def test_next_token_is_idempotent_at_end(self) -> None:
        lexer = Lexer("model")
        assert lexer.next_token().type == TokenType.MODEL
        for _ in range(3):
            tok = lexer.next_token()
            assert tok.type == TokenType.EOF
            assert (tok.line, tok.column) == (1, 6)

    def test_iteration_stops_after_first_eof(self) -> None:
        tokens = list(Lexer("a b"))
        assert [t.type for t in tokens] == [TokenType.IDENT, TokenType.IDENT, TokenType.EOF]


# ###############
# Keywords and Identifiers
# ###############


class TestKeywords:
    @pytest.mark.parametrize(
        ("source", "expected_type"),
        [
            ("model", TokenType.MODEL),
            ("enum", TokenType.ENUM),
            ("datasource", TokenType.DATASOURCE),
            ("generator", TokenType.GENERATOR),
            ("type", TokenType.TYPE),
            ("true", TokenType.BOOLEAN),
            ("false", TokenType.BOOLEAN),
        ],
    )
    def test_keyword(self, source: str, expected_type: TokenType) -> None:
        assert _types(source) == [expected_type]
        assert _literals(source) == [source]

    def test_keywords_are_case_sensitive(self) -> None:
        assert _types("Model ENUM True") == [TokenType.IDENT] * 3

    def test_keyword_prefix_is_identifier(self) -> None:
        assert _types("models enumeration") == [TokenType.IDENT, TokenType.IDENT]


class TestIdentifiers:
    @pytest.mark.parametrize("name", ["User", "_private", "created_at", "field2", "a_1_b"])
    def test_identifier(self, name: str) -> None:
        assert _types(name) == [TokenType.IDENT]
        assert _literals(name) == [name]

    def test_unicode_letters_allowed(self) -> None:
        assert _literals("nomeçãoÜ") == ["nomeçãoÜ"]
        assert _types("nomeçãoÜ") == [TokenType.IDENT]

    def test_identifier_cannot_start_with_digit(self) -> None:
        assert _types("2abc") == [TokenType.INT, TokenType.IDENT]


# ###############
# Symbols
# ###############


class TestSymbols:
    @pytest.mark.parametrize(
        ("source", "expected_type"),
        [
            ("(", TokenType.LPAREN),
            (")", TokenType.RPAREN),
            ("{", TokenType.LBRACE),
            ("}", TokenType.RBRACE),
            ("[", TokenType.LBRACKET),
            ("]", TokenType.RBRACKET),
            ("=", TokenType.EQUALS),
            (":", TokenType.COLON),
            ("?", TokenType.QUESTION),
            (",", TokenType.COMMA),
            (";", TokenType.SEMICOLON),
            (".", TokenType.DOT),
            ("@", TokenType.AT),
            ("@@", TokenType.ATAT),
        ],
    )
    def test_symbol(self, source: str, expected_type: TokenType) -> None:
        assert _types(source) == [expected_type]

    def test_three_at_signs(self) -> None:
        assert _types("@@@") == [TokenType.ATAT, TokenType.AT]

    def test_separated_at_signs_are_two_markers(self) -> None:
        assert _types("@ @") == [TokenType.AT, TokenType.AT]

    def test_newline_is_a_token(self) -> None:
        assert _types("a\nb") == [TokenType.IDENT, TokenType.NEWLINE, TokenType.IDENT]

    def test_illegal_character(self) -> None:
        tokens = _tokens_no_eof("a # b")
        assert [t.type for t in tokens] == [TokenType.IDENT, TokenType.ILLEGAL, TokenType.IDENT]
        assert tokens[1].literal == "#"

    def test_field_declaration(self) -> None:
        assert _types("posts Post[]?") == [
            TokenType.IDENT,
            TokenType.IDENT,
            TokenType.LBRACKET,
            TokenType.RBRACKET,
            TokenType.QUESTION,
        ]


# ###############
# Numbers
# ###############


class TestNumbers:
    def test_integer(self) -> None:
        tokens = _tokens_no_eof("123")
        assert [(t.type, t.literal) for t in tokens] == [(TokenType.INT, "123")]

    def test_float(self) -> None:
        tokens = _tokens_no_eof("1.5")
        assert [(t.type, t.literal) for t in tokens] == [(TokenType.FLOAT, "1.5")]

    def test_trailing_dot_is_not_part_of_number(self) -> None:
        tokens = _tokens_no_eof("1.")
        assert [(t.type, t.literal) for t in tokens] == [(TokenType.INT, "1"), (TokenType.DOT, ".")]

    def test_dot_then_identifier(self) -> None:
        assert _types("1.a") == [TokenType.INT, TokenType.DOT, TokenType.IDENT]

    def test_two_dots(self) -> None:
        assert _literals("1.2.3") == ["1.2", ".", "3"]


# ###############
# Strings
# ###############


class TestStrings:
    def test_simple_string(self) -> None:
        tokens = _tokens_no_eof('"postgresql"')
        assert [(t.type, t.literal) for t in tokens] == [(TokenType.STRING, "postgresql")]

    def test_empty_string(self) -> None:
        assert _literals('""') == [""]

    def test_escape_is_kept_raw(self) -> None:
        assert _literals(r'"a\"b"') == [r"a\"b"]

    def test_escaped_backslash(self) -> None:
        assert _literals(r'"a\\" b') == ["a\\\\", "b"]

    def test_unterminated_string_stops_at_newline(self) -> None:
        tokens = _tokens_no_eof('"abc\nx')
        assert [(t.type, t.literal) for t in tokens] == [
            (TokenType.STRING, "abc"),
            (TokenType.NEWLINE, "\n"),
            (TokenType.IDENT, "x"),
        ]

    def test_unterminated_string_stops_at_eof(self) -> None:
        assert _literals('"abc') == ["abc"]

    def test_comment_markers_inside_string(self) -> None:
        assert _literals('"a // b /* c */"') == ["a // b /* c */"]


# ###############
# Comments
# ###############


class TestComments:
    def test_line_comment_is_skipped(self) -> None:
        assert _types("a // comment\nb") == [TokenType.IDENT, TokenType.NEWLINE, TokenType.IDENT]

    def test_line_comment_at_eof(self) -> None:
        assert _types("a // trailing") == [TokenType.IDENT]

    def test_block_comment_is_skipped(self) -> None:
        assert _literals("a /* x\ny */ b") == ["a", "b"]

    def test_unterminated_block_comment_runs_to_eof(self) -> None:
        assert _literals("a /* never closed\nb c") == ["a"]

    def test_interleaved_blanks_and_comments(self) -> None:
        assert _literals("a /* 1 */ /* 2 */\t// 3\n  /**/b") == ["a", "\n", "b"]

    def test_single_slash_is_illegal(self) -> None:
        assert _types("/") == [TokenType.ILLEGAL]


# ###############
# Positions
# ###############


class TestPositions:
    def test_columns_on_one_line(self) -> None:
        tokens = _tokens_no_eof("id  Int")
        assert [(t.line, t.column) for t in tokens] == [(1, 1), (1, 5)]

    def test_lines_advance_after_newline(self) -> None:
        tokens = _tokens_no_eof("model\n  User")
        assert [(t.type, t.line, t.column) for t in tokens] == [
            (TokenType.MODEL, 1, 1),
            (TokenType.NEWLINE, 1, 6),
            (TokenType.IDENT, 2, 3),
        ]

    def test_position_after_block_comment_spanning_lines(self) -> None:
        tok = _tokens_no_eof("/* a\nbc */ x")[0]
        assert (tok.line, tok.column) == (2, 7)


# ###############
# Token Completeness
# ###############


class TestTokenCompleteness:
    def test_literals_rebuild_significant_content(self) -> None:
        source = 'model User {\n  id Int @id @default(autoincrement())\n  tags String[] @db.VarChar(255)\n}'
        rebuilt = "".join(t.literal for t in _tokens_no_eof(source) if t.type != TokenType.NEWLINE)
        expected = "".join(source.split())
        assert rebuilt == expected

    def test_tokenize_is_deterministic(self) -> None:
        source = 'datasource db { provider = "sqlite" }'
        assert tokenize(source) == tokenize(source)
