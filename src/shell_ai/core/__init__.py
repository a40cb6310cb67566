"""Core module for shell-ai configuration and utilities.

This module provides:
- Layered configuration loading via shell_ai.core.config
- Platform configuration paths via shell_ai.core.paths
- Custom exception hierarchy with ShellAiError as base
"""

from shell_ai.core.exceptions import (
    ConfigConflictError,
    ConfigDecodeError,
    ConfigError,
    ConfigParseError,
    ConfigValidationError,
    FieldValidationError,
    NoProviderError,
    ShellAiError,
)

__all__ = [
    "ConfigConflictError",
    "ConfigDecodeError",
    "ConfigError",
    "ConfigParseError",
    "ConfigValidationError",
    "FieldValidationError",
    "NoProviderError",
    "ShellAiError",
]
