"""Shared constants for configuration modules.

This module provides constants used across config submodules to avoid
duplication and circular import issues. File and directory names are
defined next to the path helpers and re-exported here.
"""

from shell_ai.core.paths import APP_DIR_NAME, JSON_CONFIG_NAME, TOML_CONFIG_NAME

MAX_CONFIG_SIZE: int = 1_048_576  # 1MB

# Placeholder shown for unset values in reports
NOT_SET: str = "(not set)"

__all__ = [
    "APP_DIR_NAME",
    "JSON_CONFIG_NAME",
    "MAX_CONFIG_SIZE",
    "NOT_SET",
    "TOML_CONFIG_NAME",
]
