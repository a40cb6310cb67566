"""Merge configuration layers while tracking where each value came from.

Layers are nested mappings of the same shape as config.toml. They are merged
in LAYER_ORDER (default, toml, json, env, cli); for every leaf written, the
builder records which layer wrote it last.

Merge rules:
- Non-empty mappings are merged recursively
- Empty mappings are skipped, never erasing what lower layers set
- None values are skipped (absent, not an override to null)
- Scalars and lists replace the existing value and its provenance
"""

import copy
import logging
from collections.abc import Mapping
from typing import Any

from shell_ai.core.config.models import ConfigSource

logger = logging.getLogger(__name__)


def _set_nested_value(d: dict[str, Any], path: str, value: Any) -> bool:
    """Set value at dot-notation path, creating intermediate dicts.

    Returns:
        False if an intermediate value exists and is not a dict (the write is
        skipped so the structural error surfaces when the tree is decoded).

    """
    keys = path.split(".")
    current = d
    for key in keys[:-1]:
        if key not in current:
            current[key] = {}
        elif not isinstance(current[key], dict):
            return False
        current = current[key]

    current[keys[-1]] = value
    return True


class ConfigBuilder:
    """Accumulates merged layers plus per-path provenance.

    Attributes:
        tree: Merged configuration tree.
        sources: Dotted leaf path -> layer that supplied it.
        env_vars_used: Dotted leaf path -> environment variable that supplied
            it (needed because one field can have several variable names).

    """

    def __init__(self) -> None:
        self.tree: dict[str, Any] = {}
        self.sources: dict[str, ConfigSource] = {}
        self.env_vars_used: dict[str, str] = {}

    def record_env_var(self, path: str, env_var: str) -> None:
        """Record which environment variable supplied a config path."""
        self.env_vars_used[path] = env_var

    def get_env_var_used(self, path: str) -> str | None:
        return self.env_vars_used.get(path)

    def get_source(self, path: str) -> ConfigSource:
        """Layer that last wrote the path (DEFAULT if none did)."""
        return self.sources.get(path, ConfigSource.DEFAULT)

    def merge_layer(self, layer: Mapping[str, Any], source: ConfigSource) -> None:
        """Merge one normalized layer into the accumulated tree.

        Args:
            layer: Nested mapping produced by a layer normalizer.
            source: Layer tag recorded for every leaf written.

        """
        self._merge_recursive(layer, source, "")

    def _merge_recursive(self, layer: Mapping[str, Any], source: ConfigSource, prefix: str) -> None:
        for key, value in layer.items():
            path = f"{prefix}.{key}" if prefix else str(key)

            if isinstance(value, Mapping):
                if value:
                    self._merge_recursive(value, source, path)
                continue

            if value is None:
                continue

            if not _set_nested_value(self.tree, path, copy.deepcopy(value)):
                logger.debug("Skipping %s from %s layer: parent is not a table", path, source)
                continue
            self.sources[path] = source
