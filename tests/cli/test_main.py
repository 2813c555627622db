# Copyright 2026 SQL Compiler Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the SQL compiler CLI entry point."""

import io
import json
import logging
import sys
from collections.abc import Iterator
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from sqlcompiler.cli.main import main

# ###############
# Helpers
# ###############


@pytest.fixture(autouse=True)
def _isolate(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Run every test in an empty directory and restore the root logger afterwards."""
    monkeypatch.chdir(tmp_path)
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def _run(monkeypatch: pytest.MonkeyPatch, *argv: str) -> int:
    """Invoke main() with the given arguments and return the exit code."""
    monkeypatch.setattr(sys, "argv", ["sqlcompiler", *argv])
    with pytest.raises(SystemExit) as exc_info:
        main()
    return exc_info.value.code


def _write_source(tmp_path: Path, content: str, name: str = "query.sql") -> Path:
    path = tmp_path / name
    path.write_text(content, encoding="utf-8")
    return path


# ###############
# General
# ###############


def test_main_no_args_prints_help_and_exits(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    """main() with no subcommand prints help and exits with code 0."""
    assert _run(monkeypatch) == 0
    assert "usage: sqlcompiler" in capsys.readouterr().out


# -------- tokenize tests --------


def test_tokenize_file_prints_tokens(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    """tokenize prints one line per token and exits with code 0."""
    source = _write_source(tmp_path, "SELECT a FROM t;")
    assert _run(monkeypatch, "tokenize", str(source)) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "Token: SELECT, Lexeme: SELECT, (line 1, col 1)"
    assert lines[-1] == "Token: SEMICOLON, Lexeme: ;, (line 1, col 16)"
    assert len(lines) == 5


def test_tokenize_json_output(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    """tokenize --json prints the tokens as a JSON array of records."""
    source = _write_source(tmp_path, "a >= 5")
    assert _run(monkeypatch, "tokenize", "--json", str(source)) == 0
    data = json.loads(capsys.readouterr().out)
    assert [r["type"] for r in data] == ["IDENTIFIER", "GREATER_EQUAL", "NUMBER"]
    assert data[1] == {"type": "GREATER_EQUAL", "lexeme": ">=", "line": 1, "column": 3}


def test_tokenize_reads_stdin(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    """tokenize without a file argument reads standard input."""
    monkeypatch.setattr(sys, "stdin", io.StringIO("x = 1"))
    assert _run(monkeypatch, "tokenize") == 0
    assert len(capsys.readouterr().out.splitlines()) == 3


def test_tokenize_dash_reads_stdin(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    """tokenize - reads standard input."""
    monkeypatch.setattr(sys, "stdin", io.StringIO("DELETE"))
    assert _run(monkeypatch, "tokenize", "-") == 0
    assert "Token: DELETE" in capsys.readouterr().out


def test_tokenize_stdin_invalid_utf8(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    """Undecodable standard input is reported with code 1 instead of a traceback."""
    monkeypatch.setattr(sys, "stdin", io.TextIOWrapper(io.BytesIO(b"SELECT \xff\xfe"), encoding="utf-8"))
    assert _run(monkeypatch, "tokenize") == 1
    assert "Error: cannot read standard input" in capsys.readouterr().err


def test_tokenize_with_errors_exits_1(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    """tokenize exits with code 1 when the output contains ERROR tokens."""
    source = _write_source(tmp_path, "5 & 3")
    assert _run(monkeypatch, "tokenize", str(source)) == 1
    out = capsys.readouterr().out
    assert "Token: ERROR, Lexeme: Invalid character '&' at line 1, column 3" in out
    assert len(out.splitlines()) == 3


def test_tokenize_missing_file(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    """tokenize exits with code 1 when the file does not exist."""
    assert _run(monkeypatch, "tokenize", str(tmp_path / "missing.sql")) == 1
    assert "does not exist" in capsys.readouterr().err


@pytest.mark.parametrize("content", ["", "   \n\t"])
def test_tokenize_blank_source(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str], content: str
) -> None:
    """tokenize rejects blank input with code 1."""
    source = _write_source(tmp_path, content)
    assert _run(monkeypatch, "tokenize", str(source)) == 1
    assert "please enter SQL-like code" in capsys.readouterr().err


def test_tokenize_keyword_case_flag(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    """--keyword-case insensitive matches lower-case keywords."""
    source = _write_source(tmp_path, "select")
    assert _run(monkeypatch, "tokenize", "--keyword-case", "insensitive", str(source)) == 0
    assert "Token: SELECT, Lexeme: select" in capsys.readouterr().out


def test_tokenize_keyword_case_from_config(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    """The config file in the working directory sets the keyword policy."""
    (tmp_path / ".sqlcompiler.yaml").write_text("keyword-case: insensitive\n", encoding="utf-8")
    source = _write_source(tmp_path, "from")
    assert _run(monkeypatch, "tokenize", str(source)) == 0
    assert "Token: FROM, Lexeme: from" in capsys.readouterr().out


def test_tokenize_flag_overrides_config(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    """--keyword-case takes precedence over the config file."""
    (tmp_path / ".sqlcompiler.yaml").write_text("keyword-case: insensitive\n", encoding="utf-8")
    source = _write_source(tmp_path, "from")
    assert _run(monkeypatch, "tokenize", "--keyword-case", "sensitive", str(source)) == 0
    assert "Token: IDENTIFIER, Lexeme: from" in capsys.readouterr().out


def test_tokenize_explicit_config(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    """--config loads the given file."""
    config = tmp_path / "custom.yaml"
    config.write_text("keyword-case: insensitive\n", encoding="utf-8")
    source = _write_source(tmp_path, "where")
    assert _run(monkeypatch, "tokenize", "--config", str(config), str(source)) == 0
    assert "Token: WHERE" in capsys.readouterr().out


def test_tokenize_invalid_config(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    """An invalid config file is reported with code 1."""
    (tmp_path / ".sqlcompiler.yaml").write_text("port: nope\n", encoding="utf-8")
    source = _write_source(tmp_path, "a")
    assert _run(monkeypatch, "tokenize", str(source)) == 1
    assert "Error: Invalid config file" in capsys.readouterr().err


def test_tokenize_missing_explicit_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """A --config path that does not exist is reported with code 1."""
    source = _write_source(tmp_path, "a")
    assert _run(monkeypatch, "tokenize", "--config", str(tmp_path / "none.yaml"), str(source)) == 1


def test_log_level_flag_configures_root_logger(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """--log-level sets the root logger level."""
    source = _write_source(tmp_path, "a")
    assert _run(monkeypatch, "--log-level", "DEBUG", "tokenize", str(source)) == 0
    assert logging.getLogger().level == logging.DEBUG


def test_log_level_from_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """The config file's log-level is used when no flag is given."""
    (tmp_path / ".sqlcompiler.yaml").write_text("log-level: ERROR\n", encoding="utf-8")
    source = _write_source(tmp_path, "a")
    assert _run(monkeypatch, "tokenize", str(source)) == 0
    assert logging.getLogger().level == logging.ERROR


# -------- serve tests --------


def test_serve_runs_app_with_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    """serve creates the app and runs it on the default host and port."""
    mock_app = MagicMock()
    with patch("sqlcompiler.webui.app.create_app", return_value=mock_app) as mock_create:
        assert _run(monkeypatch, "serve") == 0
    mock_create.assert_called_once()
    mock_app.run.assert_called_once_with(host="127.0.0.1", port=8050, debug=False)


def test_serve_uses_config_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """serve reads host, port and debug from the config file."""
    (tmp_path / ".sqlcompiler.yaml").write_text("host: 0.0.0.0\nport: 9000\ndebug: true\n", encoding="utf-8")
    mock_app = MagicMock()
    with patch("sqlcompiler.webui.app.create_app", return_value=mock_app):
        assert _run(monkeypatch, "serve") == 0
    mock_app.run.assert_called_once_with(host="0.0.0.0", port=9000, debug=True)


def test_serve_flags_override_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """--host and --port take precedence over the config file."""
    (tmp_path / ".sqlcompiler.yaml").write_text("host: 0.0.0.0\nport: 9000\n", encoding="utf-8")
    mock_app = MagicMock()
    with patch("sqlcompiler.webui.app.create_app", return_value=mock_app):
        assert _run(monkeypatch, "serve", "--host", "localhost", "--port", "8123") == 0
    mock_app.run.assert_called_once_with(host="localhost", port=8123, debug=False)


def test_serve_passes_config_to_app(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """The loaded configuration is handed to create_app."""
    (tmp_path / ".sqlcompiler.yaml").write_text("keyword-case: insensitive\n", encoding="utf-8")
    with patch("sqlcompiler.webui.app.create_app", return_value=MagicMock()) as mock_create:
        assert _run(monkeypatch, "serve") == 0
    (config,), _ = mock_create.call_args
    assert config.case_sensitive_keywords is False


def test_serve_explicit_empty_values_are_not_replaced(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """An explicit --port 0 or --host '' is passed through rather than replaced by the config."""
    (tmp_path / ".sqlcompiler.yaml").write_text("host: 0.0.0.0\nport: 9000\n", encoding="utf-8")
    mock_app = MagicMock()
    with patch("sqlcompiler.webui.app.create_app", return_value=mock_app):
        assert _run(monkeypatch, "serve", "--host", "", "--port", "0") == 0
    mock_app.run.assert_called_once_with(host="", port=0, debug=False)
