# Copyright 2026 SQL Compiler Contributors
# SPDX-License-Identifier: Apache-2.0

"""Dash-based web UI and JSON endpoint for the SQL lexer."""

import logging
from typing import Any

import dash
from dash import Input, Output, State, dcc, html
from flask import jsonify, request

from sqlcompiler.lexer.serialization import tokens_to_records
from sqlcompiler.lexer.tokenizer import Token, tokenize
from sqlcompiler.settings.config import AppConfig

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############

APP_TITLE = "SQL Compiler Lexer"
ANALYZE_ROUTE = "/api/lexer/analyze"
EMPTY_INPUT_MESSAGE = "Please enter SQL-like code."


def create_app(config: AppConfig | None = None) -> dash.Dash:
    """Create and configure the lexer web UI application.

    Besides the interactive page, the underlying Flask server exposes
    ``POST /api/lexer/analyze`` which returns the tokens as a JSON array.
    """
    config = config or AppConfig()
    app = dash.Dash(
        __name__,
        title=APP_TITLE,
    )
    app.layout = _build_layout()
    _register_callbacks(app, config.case_sensitive_keywords)
    _register_api(app, config.case_sensitive_keywords)
    return app


# ################
# Implementation
# ################

_ROW_STYLE = {"backgroundColor": "#fff"}
_ERROR_ROW_STYLE = {"backgroundColor": "#fde2e2", "color": "#a00"}
_CELL_STYLE = {"border": "1px solid #ccc", "padding": "0.25rem 0.5rem"}


class _BadRequest(Exception):
    """Raised when the analyze request body has an unsupported shape."""


def _build_layout() -> html.Div:
    """Build the application layout."""
    return html.Div(
        [
            html.H1(APP_TITLE),
            html.P("Enter SQL-like code and press Analyze to see its tokens."),
            dcc.Textarea(
                id="source-input",
                placeholder="SELECT name FROM users WHERE age >= 18;",
                style={"width": "100%", "height": "12rem", "fontFamily": "monospace"},
            ),
            html.Button("Analyze", id="analyze-button", n_clicks=0),
            html.Hr(),
            html.Div(id="token-output"),
        ],
        style={"fontFamily": "sans-serif", "padding": "2rem"},
    )


def _register_callbacks(app: dash.Dash, case_sensitive_keywords: bool) -> None:
    @app.callback(
        Output("token-output", "children"),
        Input("analyze-button", "n_clicks"),
        State("source-input", "value"),
        prevent_initial_call=True,
    )
    def _on_analyze(n_clicks: int, source: str | None) -> html.Div:
        return _build_token_view(source, case_sensitive_keywords)


def _build_token_view(source: str | None, case_sensitive_keywords: bool = True) -> html.Div:
    """Tokenize *source* and render the result, or a prompt for blank input."""
    if source is None or not source.strip():
        return html.Div(html.P(EMPTY_INPUT_MESSAGE, style={"color": "#666"}))

    tokens = tokenize(source, case_sensitive_keywords=case_sensitive_keywords)
    error_count = sum(1 for tok in tokens if tok.is_error)
    summary = f"{len(tokens)} token(s), {error_count} error(s)"
    return html.Div([html.P(summary), _build_token_table(tokens)])


def _build_token_table(tokens: list[Token]) -> html.Table:
    header = html.Tr([html.Th(name, style=_CELL_STYLE) for name in ("Type", "Lexeme", "Line", "Column")])
    rows = [
        html.Tr(
            [
                html.Td(tok.type.name, style=_CELL_STYLE),
                html.Td(html.Code(tok.lexeme), style=_CELL_STYLE),
                html.Td(str(tok.line), style=_CELL_STYLE),
                html.Td(str(tok.column), style=_CELL_STYLE),
            ],
            style=_ERROR_ROW_STYLE if tok.is_error else _ROW_STYLE,
        )
        for tok in tokens
    ]
    return html.Table([html.Thead(header), html.Tbody(rows)], style={"borderCollapse": "collapse"})


def _register_api(app: dash.Dash, case_sensitive_keywords: bool) -> None:
    def analyze() -> Any:
        try:
            source = _read_source()
        except _BadRequest as exc:
            logger.info("Rejected analyze request: %s", exc)
            return jsonify({"error": str(exc)}), 400

        if not source.strip():
            logger.info("Rejected analyze request with blank source")
            return jsonify({"error": EMPTY_INPUT_MESSAGE}), 400

        tokens = tokenize(source, case_sensitive_keywords=case_sensitive_keywords)
        logger.info(
            "Analyzed %d character(s): %d token(s), %d error(s)",
            len(source),
            len(tokens),
            sum(1 for tok in tokens if tok.is_error),
        )
        return jsonify(tokens_to_records(tokens))

    def analyze_wrong_method() -> Any:
        # Takes precedence over the catch-all page route Dash registers for GET.
        response = jsonify({"error": "Use POST to submit source code."})
        response.status_code = 405
        response.headers["Allow"] = "POST"
        return response

    app.server.add_url_rule(ANALYZE_ROUTE, "analyze", analyze, methods=["POST"])
    app.server.add_url_rule(ANALYZE_ROUTE, "analyze_wrong_method", analyze_wrong_method, methods=["GET"])


def _read_source() -> str:
    """Extract the source text from the current request.

    Accepts a JSON string body, a JSON object with a ``source`` string, or a
    plain-text body.
    """
    if not request.is_json:
        return request.get_data(as_text=True)

    payload = request.get_json(silent=True)
    if isinstance(payload, str):
        return payload
    if isinstance(payload, dict) and isinstance(payload.get("source"), str):
        return payload["source"]
    raise _BadRequest("Request body must be a JSON string or an object with a 'source' string.")
