"""Layer normalizers: turn each configuration source into a merge tree.

Every function here returns a nested dict shaped like config.toml (global
settings at top level, one table per provider). The builder merges the
results in LAYER_ORDER.
"""

import datetime as dt
import json
import logging
import tomllib
from collections.abc import Iterator, Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict

from shell_ai.core.config import env
from shell_ai.core.config.constants import MAX_CONFIG_SIZE
from shell_ai.core.config.metadata import (
    GLOBAL_SETTINGS_METADATA,
    PROVIDER_METADATA,
    FieldMeta,
)
from shell_ai.core.config.models import DebugLevel, Frontend
from shell_ai.core.exceptions import ConfigParseError

logger = logging.getLogger(__name__)


def _iter_fields() -> Iterator[tuple[str, FieldMeta]]:
    """Yield (dotted path, field) for every setting in declared order."""
    for field in GLOBAL_SETTINGS_METADATA:
        yield field.name, field
    for meta in PROVIDER_METADATA:
        for field in meta.all_fields():
            yield f"{meta.name}.{field.name}", field


def _put(tree: dict[str, Any], path: str, value: Any) -> None:
    head, _, tail = path.partition(".")
    if tail:
        tree.setdefault(head, {})[tail] = value
    else:
        tree[head] = value


# =============================================================================
# Defaults
# =============================================================================


def defaults_to_tree() -> dict[str, Any]:
    """Build the default layer from the metadata tables.

    Virtual settings are runtime-only and never appear in the tree.
    """
    tree: dict[str, Any] = {}
    for path, field in _iter_fields():
        if field.virtual or field.default is None:
            continue
        _put(tree, path, field.default)
    return tree


# =============================================================================
# Files
# =============================================================================


def _read_limited(path: Path) -> str | None:
    """Read a config file, returning None if it does not exist.

    Raises:
        ConfigParseError: If the file exists but cannot be read or exceeds
            MAX_CONFIG_SIZE.

    """
    try:
        # Read with size limit instead of stat-then-read
        with path.open("r", encoding="utf-8") as f:
            content = f.read(MAX_CONFIG_SIZE + 1)
    except FileNotFoundError:
        return None
    except IsADirectoryError as e:
        raise ConfigParseError(path, f"{path} is a directory, not a config file.") from e
    except PermissionError as e:
        raise ConfigParseError(path, f"Permission denied: {e}") from e
    except UnicodeDecodeError as e:
        raise ConfigParseError(path, f"File is not valid UTF-8: {e}") from e
    except OSError as e:
        raise ConfigParseError(path, f"Cannot read file: {e}") from e

    if len(content) > MAX_CONFIG_SIZE:
        raise ConfigParseError(
            path,
            f"File exceeds 1MB limit (read {len(content):,} characters before stopping).",
        )
    return content


def _normalize_toml_value(value: Any) -> Any:
    # TOML dates and times become strings; the schema has no date fields
    if isinstance(value, dict):
        return {k: _normalize_toml_value(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_normalize_toml_value(v) for v in value]
    if isinstance(value, (dt.datetime, dt.date, dt.time)):
        return value.isoformat()
    return value


def load_toml_layer(path: Path) -> dict[str, Any] | None:
    """Load config.toml as a merge tree.

    Args:
        path: Path to the TOML file.

    Returns:
        Parsed document, or None if the file does not exist.

    Raises:
        ConfigParseError: If the file exists but cannot be read or parsed.

    """
    content = _read_limited(path)
    if content is None:
        return None
    try:
        parsed = tomllib.loads(content)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(path, str(e)) from e
    result: dict[str, Any] = _normalize_toml_value(parsed)
    return result


def load_json_layer(path: Path) -> dict[str, Any] | None:
    """Load the legacy config.json as a merge tree.

    Args:
        path: Path to the JSON file.

    Returns:
        Parsed document, or None if the file does not exist.

    Raises:
        ConfigParseError: If the file exists but cannot be read, is not valid
            JSON, or its top level is not an object.

    """
    content = _read_limited(path)
    if content is None:
        return None
    try:
        parsed = json.loads(content)
    except json.JSONDecodeError as e:
        raise ConfigParseError(path, str(e)) from e
    if not isinstance(parsed, dict):
        raise ConfigParseError(path, f"Expected a JSON object, got {type(parsed).__name__}.")
    return parsed


# =============================================================================
# Environment
# =============================================================================


def env_to_tree(environ: Mapping[str, str]) -> tuple[dict[str, Any], dict[str, str]]:
    """Build the environment layer.

    Each field's variables are checked primary first, then aliases; the first
    non-empty one wins and its value is written as a string leaf. A variable
    name supplies at most one path: the first field declaring it.

    SHAI_SKIP_CONFIRM=true injects frontend="noninteractive" when SHAI_FRONTEND
    is not set, attributed to SHAI_SKIP_CONFIRM.

    Args:
        environ: Environment mapping (usually os.environ).

    Returns:
        Tuple of (tree, env_vars_used) where env_vars_used maps dotted paths
        to the variable that supplied them.

    """
    tree: dict[str, Any] = {}
    used: dict[str, str] = {}
    claimed: set[str] = set()

    for path, field in _iter_fields():
        if field.virtual:
            continue
        for name in field.env_vars:
            if name in claimed:
                continue
            claimed.add(name)
            value = environ.get(name, "")
            if value:
                _put(tree, path, value)
                used[path] = name
                break

    if env.env_flag_is_true(environ, env.SHAI_SKIP_CONFIRM) and not environ.get(env.SHAI_FRONTEND):
        tree["frontend"] = Frontend.NONINTERACTIVE.value
        used["frontend"] = env.SHAI_SKIP_CONFIRM

    return tree, used


# =============================================================================
# CLI
# =============================================================================


class CliOverrides(BaseModel):
    """Flat record of values given as global CLI options.

    Unset options stay None and are left out of the CLI layer entirely.
    Choice-like options are plain strings so bad values are reported by the
    decoder with their flag name.
    """

    model_config = ConfigDict(frozen=True)

    provider: str | None = None
    model: str | None = None
    max_tokens: int | None = None
    temperature: float | None = None
    frontend: str | None = None
    output_format: str | None = None
    debug: DebugLevel | None = None
    locale: str | None = None


def cli_to_tree(cli: CliOverrides | None) -> dict[str, Any]:
    """Serialize CLI overrides, omitting every unset option."""
    if cli is None:
        return {}
    return cli.model_dump(mode="json", exclude_none=True)
