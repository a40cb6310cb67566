"""Pydantic configuration models for shell-ai.

All models are re-exported here for convenient imports.
"""

from shell_ai.core.config.models.enums import (
    LAYER_ORDER,
    ConfigSource,
    DebugLevel,
    Frontend,
    OutputFormat,
    Provider,
)
from shell_ai.core.config.models.main import FileConfig
from shell_ai.core.config.models.providers import ProviderCredentials, parse_flexible
from shell_ai.core.config.models.values import ConfigValue

__all__ = [
    # enums.py
    "LAYER_ORDER",
    "ConfigSource",
    "DebugLevel",
    "Frontend",
    "OutputFormat",
    "Provider",
    # main.py
    "FileConfig",
    # providers.py
    "ProviderCredentials",
    "parse_flexible",
    # values.py
    "ConfigValue",
]
