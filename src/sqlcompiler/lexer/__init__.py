# Copyright 2026 SQL Compiler Contributors
# SPDX-License-Identifier: Apache-2.0

"""Lexical analysis of SQL-like source text."""

from sqlcompiler.lexer.serialization import format_token, serialize_tokens, token_to_record, tokens_to_records
from sqlcompiler.lexer.tokenizer import Token, TokenType, has_errors, tokenize

__all__ = [
    "Token",
    "TokenType",
    "format_token",
    "has_errors",
    "serialize_tokens",
    "token_to_record",
    "tokenize",
    "tokens_to_records",
]
