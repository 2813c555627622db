# Copyright 2026 SQL Compiler Contributors
# SPDX-License-Identifier: Apache-2.0

"""Lexical scanner for SQL-like source text.

Converts raw source text into a sequence of positioned tokens. Malformed input
never raises: invalid characters, unclosed comments and unclosed string
literals are reported as ERROR tokens inside the returned sequence.
"""

import enum
import logging
from collections.abc import Iterable
from dataclasses import dataclass

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


class TokenType(enum.Enum):
    """All token types produced by the SQL lexer."""

    # Keywords
    SELECT = "SELECT"
    FROM = "FROM"
    WHERE = "WHERE"
    INSERT = "INSERT"
    INTO = "INTO"
    VALUES = "VALUES"
    UPDATE = "UPDATE"
    SET = "SET"
    DELETE = "DELETE"
    CREATE = "CREATE"
    TABLE = "TABLE"
    AND = "AND"
    OR = "OR"
    NOT = "NOT"

    # Column types
    TYPE = "TYPE"

    # Identifiers and literals
    IDENTIFIER = "IDENTIFIER"
    NUMBER = "NUMBER"
    STRING = "STRING"

    # Operators
    EQUAL = "EQUAL"
    GREATER_THAN = "GREATER_THAN"
    GREATER_EQUAL = "GREATER_EQUAL"
    LESS_THAN = "LESS_THAN"
    LESS_EQUAL = "LESS_EQUAL"
    NOT_EQUAL = "NOT_EQUAL"
    PLUS = "PLUS"
    MINUS = "MINUS"
    MULTIPLY = "MULTIPLY"
    DIVIDE = "DIVIDE"

    # Delimiters
    LEFT_PAREN = "LEFT_PAREN"
    RIGHT_PAREN = "RIGHT_PAREN"
    COMMA = "COMMA"
    SEMICOLON = "SEMICOLON"

    # Malformed input
    ERROR = "ERROR"


@dataclass(frozen=True)
class Token:
    """A lexical token with its source location.

    Attributes:
        type: The kind of token.
        lexeme: The exact source text of the token. STRING tokens keep their
            surrounding quotes. ERROR tokens carry a diagnostic message instead.
        line: 1-based line number where the token starts.
        column: 1-based column number where the token starts.
    """

    type: TokenType
    lexeme: str
    line: int
    column: int

    @property
    def is_error(self) -> bool:
        return self.type is TokenType.ERROR


def tokenize(source: str, *, case_sensitive_keywords: bool = True) -> list[Token]:
    """Tokenize SQL-like source text into a list of tokens.

    Whitespace and comments are consumed and not included in the output.
    Empty or whitespace-only input yields an empty list.

    Args:
        source: The full source text.
        case_sensitive_keywords: When False, words are upper-cased before
            keyword and type lookup so that ``select`` is a SELECT keyword.

    Returns:
        The tokens in source order. Lexical errors appear as ERROR tokens;
        an unclosed string literal is always the last token.

    Raises:
        TypeError: If *source* is not a string.
    """
    if not isinstance(source, str):
        raise TypeError(f"tokenize() expects a str, got {type(source).__name__}")
    tokens = _Lexer(source, case_sensitive_keywords).tokenize()
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            "Tokenized %d character(s) into %d token(s), %d error(s)",
            len(source),
            len(tokens),
            sum(1 for tok in tokens if tok.is_error),
        )
    return tokens


def has_errors(tokens: Iterable[Token]) -> bool:
    """Return True if any token in *tokens* is an ERROR token."""
    return any(tok.is_error for tok in tokens)


# ################
# Implementation
# ################

_KEYWORDS: dict[str, TokenType] = {
    "SELECT": TokenType.SELECT,
    "FROM": TokenType.FROM,
    "WHERE": TokenType.WHERE,
    "INSERT": TokenType.INSERT,
    "INTO": TokenType.INTO,
    "VALUES": TokenType.VALUES,
    "UPDATE": TokenType.UPDATE,
    "SET": TokenType.SET,
    "DELETE": TokenType.DELETE,
    "CREATE": TokenType.CREATE,
    "TABLE": TokenType.TABLE,
    "AND": TokenType.AND,
    "OR": TokenType.OR,
    "NOT": TokenType.NOT,
}

_TYPE_NAMES: frozenset[str] = frozenset({"INT", "FLOAT", "TEXT"})

# Operators whose meaning does not depend on the following character.
_SINGLE_CHAR_OPERATORS: dict[str, TokenType] = {
    "=": TokenType.EQUAL,
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.MULTIPLY,
    "/": TokenType.DIVIDE,
}

# Keyed by (first, second) character.
_TWO_CHAR_OPERATORS: dict[tuple[str, str], TokenType] = {
    (">", "="): TokenType.GREATER_EQUAL,
    ("<", "="): TokenType.LESS_EQUAL,
    ("<", ">"): TokenType.NOT_EQUAL,
    ("!", "="): TokenType.NOT_EQUAL,
}

# Fallback for a first character when no two-character form matches.
_ONE_CHAR_FALLBACKS: dict[str, TokenType] = {
    ">": TokenType.GREATER_THAN,
    "<": TokenType.LESS_THAN,
}

_DELIMITERS: dict[str, TokenType] = {
    "(": TokenType.LEFT_PAREN,
    ")": TokenType.RIGHT_PAREN,
    ",": TokenType.COMMA,
    ";": TokenType.SEMICOLON,
}


class _Lexer:
    """Internal scanner state machine."""

    def __init__(self, source: str, case_sensitive_keywords: bool) -> None:
        self._source = source
        self._case_sensitive_keywords = case_sensitive_keywords
        self._pos = 0
        self._line = 1
        self._column = 1
        self._tokens: list[Token] = []
        self._halted = False

    def tokenize(self) -> list[Token]:
        """Run the scanner until end of input or an unrecoverable error."""
        while not self._at_end() and not self._halted:
            self._scan_next()
        return self._tokens

    # ------------------------------------------------------------------
    # Low-level character access helpers
    # ------------------------------------------------------------------

    def _at_end(self) -> bool:
        return self._pos >= len(self._source)

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

    def _emit(self, token_type: TokenType, lexeme: str, line: int, col: int) -> None:
        self._tokens.append(Token(token_type, lexeme, line, col))

    # ------------------------------------------------------------------
    # Dispatcher
    # ------------------------------------------------------------------

    def _scan_next(self) -> None:
        """Handle whatever starts at the current position.

        Rules are tried in priority order: whitespace, line comment, block
        comment, word, number, string, operator, delimiter, invalid character.
        """
        ch = self._current()
        nxt = self._peek()
        line = self._line
        col = self._column

        if ch.isspace():
            self._advance()
        elif ch == "-" and nxt == "-":
            self._skip_line_comment()
        elif ch == "#":
            self._skip_block_comment(line, col)
        elif ch.isalpha():
            self._scan_word(line, col)
        elif ch.isdigit():
            self._scan_number(line, col)
        elif ch == "'":
            self._scan_string(line, col)
        elif (ch, nxt) in _TWO_CHAR_OPERATORS:
            self._advance()
            self._advance()
            self._emit(_TWO_CHAR_OPERATORS[(ch, nxt)], ch + nxt, line, col)
        elif ch in _ONE_CHAR_FALLBACKS:
            self._advance()
            self._emit(_ONE_CHAR_FALLBACKS[ch], ch, line, col)
        elif ch in _SINGLE_CHAR_OPERATORS:
            self._advance()
            self._emit(_SINGLE_CHAR_OPERATORS[ch], ch, line, col)
        elif ch in _DELIMITERS:
            self._advance()
            self._emit(_DELIMITERS[ch], ch, line, col)
        else:
            self._advance()
            self._emit(
                TokenType.ERROR,
                f"Invalid character {ch!r} at line {line}, column {col}",
                line,
                col,
            )

    # ------------------------------------------------------------------
    # Comments
    # ------------------------------------------------------------------

    def _skip_line_comment(self) -> None:
        """Consume from '--' through end-of-line (exclusive of the newline itself)."""
        while not self._at_end() and self._current() != "\n":
            self._advance()

    def _skip_block_comment(self, line: int, col: int) -> None:
        """Consume from '#' through the closing '#'."""
        self._advance()  # opening #
        while not self._at_end():
            if self._advance() == "#":
                return
        self._emit(
            TokenType.ERROR,
            f"Unclosed comment starting at line {line}, column {col}",
            line,
            col,
        )

    # ------------------------------------------------------------------
    # Words and literals
    # ------------------------------------------------------------------

    def _scan_word(self, line: int, col: int) -> None:
        """Scan an identifier and classify it as keyword, type or identifier."""
        start = self._pos
        while not self._at_end() and (self._current().isalnum() or self._current() == "_"):
            self._advance()
        word = self._source[start : self._pos]
        key = word if self._case_sensitive_keywords else word.upper()

        if key in _KEYWORDS:
            token_type = _KEYWORDS[key]
        elif key in _TYPE_NAMES:
            token_type = TokenType.TYPE
        else:
            token_type = TokenType.IDENTIFIER
        self._emit(token_type, word, line, col)

    def _scan_number(self, line: int, col: int) -> None:
        """Scan a run of digits and dots. The shape is not validated."""
        start = self._pos
        while not self._at_end() and (self._current().isdigit() or self._current() == "."):
            self._advance()
        self._emit(TokenType.NUMBER, self._source[start : self._pos], line, col)

    def _scan_string(self, line: int, col: int) -> None:
        """Scan a single-quoted string literal.

        A doubled quote ('') inside the literal stands for one quote character
        and does not close it, so 'a''b' is one STRING token rather than two.
        Reaching end of input halts the whole scan.
        """
        start = self._pos
        self._advance()  # opening '
        while not self._at_end():
            if self._current() == "'":
                if self._peek() == "'":
                    self._advance()
                    self._advance()
                    continue
                self._advance()  # closing '
                self._emit(TokenType.STRING, self._source[start : self._pos], line, col)
                return
            self._advance()
        self._emit(
            TokenType.ERROR,
            f"Unclosed string literal starting at line {line}, column {col}",
            line,
            col,
        )
        self._halted = True
