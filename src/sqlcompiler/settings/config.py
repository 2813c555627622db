# Copyright 2026 SQL Compiler Contributors
# SPDX-License-Identifier: Apache-2.0

"""Configuration file model for the SQL compiler tools."""

from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

# ###############
# Public Interface
# ###############

CONFIG_FILE_NAME = ".sqlcompiler.yaml"

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class ConfigError(Exception):
    """Raised when the configuration file cannot be read or is invalid."""


class AppConfig(BaseModel):
    """Settings shared by the command-line tool and the web UI.

    Attributes:
        host: Host the web UI binds to.
        port: Port the web UI listens on.
        debug: Run the web server in debug mode.
        log_level: Level for the root logger.
        keyword_case: ``sensitive`` matches keywords exactly as written,
            ``insensitive`` upper-cases words before the lookup.
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    host: str = "127.0.0.1"
    port: int = Field(default=8050, ge=1, le=65535)
    debug: bool = False
    log_level: LogLevel = Field(alias="log-level", default="WARNING")
    keyword_case: Literal["sensitive", "insensitive"] = Field(alias="keyword-case", default="sensitive")

    @property
    def case_sensitive_keywords(self) -> bool:
        return self.keyword_case == "sensitive"


def load_config(path: Path) -> AppConfig:
    """Load and validate a configuration file.

    An empty file yields the default configuration.

    Args:
        path: Path to the `.sqlcompiler.yaml` file.

    Returns:
        A validated AppConfig instance.

    Raises:
        ConfigError: If the file cannot be read, contains invalid YAML,
            or does not conform to the expected schema.
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ConfigError(f"Config file not found: {path}") from None
    except OSError as exc:
        raise ConfigError(f"Cannot read config file '{path}': {exc}") from exc

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in config file '{path}': {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: configuration must be a YAML mapping")

    try:
        return AppConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid config file '{path}': {exc}") from exc


def find_config(directory: Path) -> Path | None:
    """Return the configuration file inside *directory*, or None if there is none."""
    candidate = directory / CONFIG_FILE_NAME
    if candidate.is_file():
        return candidate
    return None
