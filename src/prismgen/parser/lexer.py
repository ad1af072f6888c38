# Copyright 2026 prismgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Lexical scanner for schema files.

Converts raw schema text into tokens, one at a time, for the parser to pull.
The scanner never raises: unknown characters become ILLEGAL tokens and
unterminated literals or comments end at the end of the line or input.
"""

import enum
from collections.abc import Iterator
from dataclasses import dataclass

# ###############
# Public Interface
# ###############


class TokenType(enum.Enum):
    """All token types produced by the schema lexer."""

    # Special
    EOF = "EOF"
    ILLEGAL = "ILLEGAL"
    NEWLINE = "NEWLINE"

    # Identifiers and literals
    IDENT = "IDENT"
    STRING = "STRING"
    INT = "INT"
    FLOAT = "FLOAT"
    BOOLEAN = "BOOLEAN"

    # Symbols
    AT = "@"
    ATAT = "@@"
    LPAREN = "("
    RPAREN = ")"
    LBRACE = "{"
    RBRACE = "}"
    LBRACKET = "["
    RBRACKET = "]"
    EQUALS = "="
    COLON = ":"
    QUESTION = "?"
    COMMA = ","
    SEMICOLON = ";"
    DOT = "."

    # Keywords
    MODEL = "model"
    ENUM = "enum"
    DATASOURCE = "datasource"
    GENERATOR = "generator"
    TYPE = "type"


@dataclass(frozen=True)
class Token:
    """A lexical token with its source location.

    Attributes:
        type: The kind of token.
        literal: The raw source text of the token. For STRING tokens this is
            the text between the quotes, with escape sequences left as written.
        line: 1-based line number where the token starts.
        column: 1-based column number where the token starts.
    """

    type: TokenType
    literal: str
    line: int
    column: int


class Lexer:
    """Pull-based scanner: call :meth:`next_token` until it returns EOF.

    Once the input is exhausted every further call returns another EOF token
    at the end-of-input position.
    """

    def __init__(self, source: str) -> None:
        self._source = source
        self._pos = 0
        self._line = 1
        self._column = 1

    def next_token(self) -> Token:
        """Scan and return the next token."""
        self._skip_whitespace_and_comments()
        line = self._line
        col = self._column

        if self._pos >= len(self._source):
            return Token(TokenType.EOF, "", line, col)

        ch = self._current()
        if ch == "@":
            self._advance()
            if self._current() == "@":
                self._advance()
                return Token(TokenType.ATAT, "@@", line, col)
            return Token(TokenType.AT, "@", line, col)
        if ch in _SINGLE_CHAR_TOKENS:
            self._advance()
            return Token(_SINGLE_CHAR_TOKENS[ch], ch, line, col)
        if ch == '"':
            return self._scan_string(line, col)
        if _is_digit(ch):
            return self._scan_number(line, col)
        if ch.isalpha() or ch == "_":
            return self._scan_identifier_or_keyword(line, col)

        self._advance()
        return Token(TokenType.ILLEGAL, ch, line, col)

    def __iter__(self) -> Iterator[Token]:
        """Yield tokens up to and including the first EOF token."""
        while True:
            tok = self.next_token()
            yield tok
            if tok.type == TokenType.EOF:
                return

    # ------------------------------------------------------------------
    # Low-level character access helpers
    # ------------------------------------------------------------------

    def _current(self) -> str:
        """Return the character at the current position, or '' at end of input."""
        if self._pos < len(self._source):
            return self._source[self._pos]
        return ""

    def _peek(self) -> str:
        """Return the character one position ahead, or '' at end of input."""
        if self._pos + 1 < len(self._source):
            return self._source[self._pos + 1]
        return ""

    def _advance(self) -> str:
        """Consume the current character, update position tracking, and return it."""
        ch = self._source[self._pos]
        self._pos += 1
        if ch == "\n":
            self._line += 1
            self._column = 1
        else:
            self._column += 1
        return ch

    # ------------------------------------------------------------------
    # Whitespace and comment skipping
    # ------------------------------------------------------------------

    def _skip_whitespace_and_comments(self) -> None:
        """Skip blanks and comments. Newlines are tokens and are not skipped."""
        while self._pos < len(self._source):
            ch = self._current()
            if ch in " \t\r":
                self._advance()
            elif ch == "/" and self._peek() == "/":
                self._skip_line_comment()
            elif ch == "/" and self._peek() == "*":
                self._skip_block_comment()
            else:
                break

    def _skip_line_comment(self) -> None:
        """Consume from '//' up to, but not including, the newline."""
        while self._pos < len(self._source) and self._current() != "\n":
            self._advance()

    def _skip_block_comment(self) -> None:
        """Consume from '/*' through the matching '*/', or to end of input."""
        self._advance()  # /
        self._advance()  # *
        while self._pos < len(self._source):
            if self._current() == "*" and self._peek() == "/":
                self._advance()  # *
                self._advance()  # /
                return
            self._advance()

    # ------------------------------------------------------------------
    # Literal scanners
    # ------------------------------------------------------------------

    def _scan_string(self, line: int, col: int) -> Token:
        """Scan a double-quoted string literal.

        A backslash takes the next character along with it uninterpreted. The
        literal ends early, without the closing quote, at a newline or at end
        of input.
        """
        self._advance()  # opening "
        start = self._pos
        while self._pos < len(self._source):
            ch = self._current()
            if ch == '"':
                value = self._source[start : self._pos]
                self._advance()  # closing "
                return Token(TokenType.STRING, value, line, col)
            if ch == "\n":
                break
            self._advance()
            if ch == "\\" and self._pos < len(self._source):
                self._advance()
        return Token(TokenType.STRING, self._source[start : self._pos], line, col)

    def _scan_number(self, line: int, col: int) -> Token:
        """Scan an integer or floating-point literal.

        A float requires at least one digit on both sides of the decimal point,
        so ``1.`` scans as INT ``1`` followed by a DOT.
        """
        start = self._pos
        while _is_digit(self._current()):
            self._advance()

        if self._current() == "." and _is_digit(self._peek()):
            self._advance()  # consume the '.'
            while _is_digit(self._current()):
                self._advance()
            return Token(TokenType.FLOAT, self._source[start : self._pos], line, col)
        return Token(TokenType.INT, self._source[start : self._pos], line, col)

    def _scan_identifier_or_keyword(self, line: int, col: int) -> Token:
        """Scan an identifier and map it to a keyword or boolean if applicable."""
        start = self._pos
        while True:
            ch = self._current()
            if not ch or not (ch.isalpha() or _is_digit(ch) or ch == "_"):
                break
            self._advance()
        value = self._source[start : self._pos]
        token_type = _KEYWORDS.get(value, TokenType.IDENT)
        return Token(token_type, value, line, col)


def tokenize(source: str) -> list[Token]:
    """Tokenize schema text into a list of tokens.

    Returns:
        All tokens in source order, NEWLINE tokens included, ending with a
        single EOF token.
    """
    return list(Lexer(source))


# ################
# Implementation
# ################

_KEYWORDS: dict[str, TokenType] = {
    "model": TokenType.MODEL,
    "enum": TokenType.ENUM,
    "datasource": TokenType.DATASOURCE,
    "generator": TokenType.GENERATOR,
    "type": TokenType.TYPE,
    "true": TokenType.BOOLEAN,
    "false": TokenType.BOOLEAN,
}

_SINGLE_CHAR_TOKENS: dict[str, TokenType] = {
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
    "[": TokenType.LBRACKET,
    "]": TokenType.RBRACKET,
    "=": TokenType.EQUALS,
    ":": TokenType.COLON,
    "?": TokenType.QUESTION,
    ",": TokenType.COMMA,
    ";": TokenType.SEMICOLON,
    ".": TokenType.DOT,
    "\n": TokenType.NEWLINE,
}


def _is_digit(ch: str) -> bool:
    return "0" <= ch <= "9"
