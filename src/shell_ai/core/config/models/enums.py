"""Enumerations for configuration values.

Values are the lowercase strings accepted in config files, environment
variables and CLI flags.
"""

import logging
from enum import Enum


class ConfigSource(str, Enum):
    """Layer that supplied a configuration value, lowest precedence first."""

    DEFAULT = "default"
    TOML_FILE = "toml"
    JSON_FILE = "json"
    ENVIRONMENT = "env"
    CLI = "cli"

    def __str__(self) -> str:
        return self.value


# Fixed merge order; each layer strictly overrides the previous ones
LAYER_ORDER: tuple[ConfigSource, ...] = (
    ConfigSource.DEFAULT,
    ConfigSource.TOML_FILE,
    ConfigSource.JSON_FILE,
    ConfigSource.ENVIRONMENT,
    ConfigSource.CLI,
)


class Provider(str, Enum):
    """Supported providers."""

    OPENAI = "openai"
    GROQ = "groq"
    AZURE = "azure"
    OLLAMA = "ollama"
    MISTRAL = "mistral"

    def __str__(self) -> str:
        return self.value


class Frontend(str, Enum):
    """Frontend interaction mode."""

    DIALOG = "dialog"
    READLINE = "readline"
    NONINTERACTIVE = "noninteractive"

    def __str__(self) -> str:
        return self.value


class OutputFormat(str, Enum):
    """Output format for reports."""

    HUMAN = "human"
    JSON = "json"

    def __str__(self) -> str:
        return self.value


class DebugLevel(str, Enum):
    """Debug/logging level."""

    ERROR = "error"
    WARN = "warn"
    INFO = "info"
    DEBUG = "debug"
    TRACE = "trace"

    def __str__(self) -> str:
        return self.value

    @property
    def logging_level(self) -> int:
        """Equivalent stdlib logging level (trace maps to DEBUG)."""
        return _LOGGING_LEVELS[self]


_LOGGING_LEVELS: dict[DebugLevel, int] = {
    DebugLevel.ERROR: logging.ERROR,
    DebugLevel.WARN: logging.WARNING,
    DebugLevel.INFO: logging.INFO,
    DebugLevel.DEBUG: logging.DEBUG,
    DebugLevel.TRACE: logging.DEBUG,
}
