# Copyright 2026 SQL Compiler Contributors
# SPDX-License-Identifier: Apache-2.0

"""Configuration for the SQL compiler tools."""

from sqlcompiler.settings.config import (
    CONFIG_FILE_NAME,
    AppConfig,
    ConfigError,
    find_config,
    load_config,
)

__all__ = [
    "AppConfig",
    "CONFIG_FILE_NAME",
    "ConfigError",
    "find_config",
    "load_config",
]
