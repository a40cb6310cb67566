"""Resolved configuration values with provenance."""

from dataclasses import dataclass
from typing import Generic, TypeVar

from shell_ai.core.config.models.enums import ConfigSource

T = TypeVar("T")


@dataclass(frozen=True)
class ConfigValue(Generic[T]):
    """A configuration value together with the layer that supplied it."""

    value: T
    source: ConfigSource = ConfigSource.DEFAULT
