# Copyright 2026 SQL Compiler Contributors
# SPDX-License-Identifier: Apache-2.0

"""Conversion of token sequences into transport records.

Each token becomes a flat record with the fields ``type``, ``lexeme``,
``line`` and ``column``. ERROR tokens are serialized like any other token.
"""

import json
from collections.abc import Iterable
from typing import Any

from sqlcompiler.lexer.tokenizer import Token

# ###############
# Public Interface
# ###############


def token_to_record(token: Token) -> dict[str, Any]:
    """Convert a single token to its transport record."""
    return {
        "type": token.type.name,
        "lexeme": token.lexeme,
        "line": token.line,
        "column": token.column,
    }


def tokens_to_records(tokens: Iterable[Token]) -> list[dict[str, Any]]:
    """Convert tokens to transport records, preserving order."""
    return [token_to_record(tok) for tok in tokens]


def serialize_tokens(tokens: Iterable[Token], *, indent: int | None = None) -> str:
    """Serialize tokens to a JSON array of records.

    Args:
        tokens: The tokens to serialize.
        indent: Optional indentation passed to :func:`json.dumps`. The default
            produces compact output.

    Returns:
        The JSON text.
    """
    separators = (",", ":") if indent is None else None
    return json.dumps(tokens_to_records(tokens), indent=indent, separators=separators)


def format_token(token: Token) -> str:
    """Render a token as a single human-readable line."""
    return f"Token: {token.type.name}, Lexeme: {token.lexeme}, (line {token.line}, col {token.column})"
