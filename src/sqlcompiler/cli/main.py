# Copyright 2026 SQL Compiler Contributors
# SPDX-License-Identifier: Apache-2.0

"""Entry point for the SQL compiler command-line interface."""

import argparse
import logging
import sys
from pathlib import Path

from sqlcompiler.lexer.serialization import format_token, serialize_tokens
from sqlcompiler.lexer.tokenizer import has_errors, tokenize
from sqlcompiler.settings.config import AppConfig, ConfigError, find_config, load_config

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


def main() -> None:
    """Run the SQL compiler CLI."""
    parser = argparse.ArgumentParser(
        prog="sqlcompiler",
        description="SQL compiler front end: lexical analysis of SQL-like code",
    )
    parser.add_argument(
        "--log-level",
        choices=_LOG_LEVELS,
        default=None,
        help="Logging level (default: taken from the config file, else WARNING)",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    # tokenize subcommand
    tokenize_parser = subparsers.add_parser(
        "tokenize",
        help="Print the tokens of a SQL-like source file",
        description="Tokenize a SQL-like source file and print one token per line.",
    )
    tokenize_parser.add_argument(
        "file",
        nargs="?",
        default="-",
        help="Source file to tokenize, '-' reads from standard input (default: '-')",
    )
    tokenize_parser.add_argument(
        "--json",
        action="store_true",
        help="Print the tokens as a JSON array of records",
    )
    tokenize_parser.add_argument(
        "--keyword-case",
        choices=["sensitive", "insensitive"],
        default=None,
        help="Keyword matching policy (default: taken from the config file, else sensitive)",
    )
    _add_config_argument(tokenize_parser)

    # serve subcommand
    serve_parser = subparsers.add_parser(
        "serve",
        help="Launch the interactive lexer web UI",
        description="Launch a web UI and JSON endpoint for tokenizing SQL-like code.",
    )
    serve_parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to run the server on (default: from the config file, else 8050)",
    )
    serve_parser.add_argument(
        "--host",
        default=None,
        help="Host to bind the server to (default: from the config file, else 127.0.0.1)",
    )
    _add_config_argument(serve_parser)

    args = parser.parse_args()
    if args.command is None:
        parser.print_help()
        sys.exit(0)

    sys.exit(_dispatch(args))


# ################
# Implementation
# ################

_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def _add_config_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to a .sqlcompiler.yaml file (default: look in the current directory)",
    )


def _dispatch(args: argparse.Namespace) -> int:
    """Load the configuration, set up logging and run the subcommand handler."""
    try:
        config = _load_config(args.config)
    except ConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    _configure_logging(args.log_level or config.log_level)

    if args.command == "tokenize":
        return _cmd_tokenize(args, config)
    if args.command == "serve":
        return _cmd_serve(args, config)
    return 0


def _load_config(path: Path | None) -> AppConfig:
    """Load the explicit config file, the one in the working directory, or defaults."""
    if path is None:
        path = find_config(Path.cwd())
        if path is None:
            return AppConfig()
    logger.debug("Loading configuration from %s", path)
    return load_config(path)


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        force=True,
    )


def _cmd_tokenize(args: argparse.Namespace, config: AppConfig) -> int:
    """Handle the tokenize subcommand."""
    if args.file == "-":
        try:
            source = sys.stdin.read()
        except (OSError, UnicodeDecodeError) as exc:
            print(f"Error: cannot read standard input: {exc}", file=sys.stderr)
            return 1
    else:
        path = Path(args.file)
        if not path.is_file():
            print(f"Error: file '{path}' does not exist.", file=sys.stderr)
            return 1
        try:
            source = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            print(f"Error: cannot read '{path}': {exc}", file=sys.stderr)
            return 1

    if not source.strip():
        print("Error: please enter SQL-like code.", file=sys.stderr)
        return 1

    if args.keyword_case is not None:
        case_sensitive = args.keyword_case == "sensitive"
    else:
        case_sensitive = config.case_sensitive_keywords

    tokens = tokenize(source, case_sensitive_keywords=case_sensitive)

    if args.json:
        print(serialize_tokens(tokens, indent=2))
    else:
        for tok in tokens:
            print(format_token(tok))

    return 1 if has_errors(tokens) else 0


def _cmd_serve(args: argparse.Namespace, config: AppConfig) -> int:
    """Handle the serve subcommand."""
    from sqlcompiler.webui.app import create_app

    host = args.host if args.host is not None else config.host
    port = args.port if args.port is not None else config.port

    print(f"Serving lexer UI at http://{host}:{port}/")
    app = create_app(config)
    app.run(host=host, port=port, debug=config.debug)
    return 0
