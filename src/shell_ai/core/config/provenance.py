"""Human-readable origins for configuration values.

Turns a (layer, dotted path) pair into the thing a user would edit to change
the value: a CLI flag, an environment variable, a config file or "default".
"""

import re
from collections.abc import Mapping

from pydantic import ValidationError

from shell_ai.core.config.constants import JSON_CONFIG_NAME, TOML_CONFIG_NAME
from shell_ai.core.config.metadata import env_var_for_field
from shell_ai.core.config.models import LAYER_ORDER, ConfigSource
from shell_ai.core.exceptions import ConfigDecodeError

# "... at line 3 column 7" / "... (at line 3, column 7)"
_LOCATION_SUFFIX = re.compile(r"\s*\(?\bat line \d+.*$", re.DOTALL)
_PYDANTIC_PREFIXES = ("Value error, ", "Assertion failed, ")


def format_origin(source: ConfigSource, path: str, actual_env_var: str | None = None) -> str:
    """Describe where a value at ``path`` came from.

    Args:
        source: Layer that supplied the value.
        path: Dotted field path (e.g. "openai.api_key").
        actual_env_var: Environment variable that actually supplied the value,
            if recorded. Takes priority over metadata because of aliases.

    Returns:
        "--flag-name", an environment variable name, a config file name, or
        "default". Flag names replace both dots and underscores with hyphens
        to match the options the CLI actually accepts ("max_tokens" gives
        "--max-tokens", not "--max_tokens").

    """
    if source is ConfigSource.CLI:
        return "--" + path.replace(".", "-").replace("_", "-")
    if source is ConfigSource.ENVIRONMENT:
        return actual_env_var or env_var_for_field(path) or path.upper()
    if source is ConfigSource.TOML_FILE:
        return TOML_CONFIG_NAME
    if source is ConfigSource.JSON_FILE:
        return JSON_CONFIG_NAME
    return "default"


def strip_location(message: str) -> str:
    """Remove decoder location suffixes and validator prefixes from a message."""
    for prefix in _PYDANTIC_PREFIXES:
        if message.startswith(prefix):
            message = message[len(prefix) :]
            break
    return _LOCATION_SUFFIX.sub("", message).strip()


def _origin_for(
    path: str,
    sources: Mapping[str, ConfigSource],
    env_vars_used: Mapping[str, str],
) -> str | None:
    """Find the origin of ``path``, or of the leaves beneath it for a table."""
    if path in sources:
        return format_origin(sources[path], path, env_vars_used.get(path))

    prefix = path + "."
    children = [key for key in sources if key.startswith(prefix)]
    if not children:
        return None
    # Highest-precedence layer wins; ties keep the first leaf written
    child = max(children, key=lambda key: LAYER_ORDER.index(sources[key]))
    return format_origin(sources[child], child, env_vars_used.get(child))


def decode_error_from_validation(
    error: ValidationError,
    sources: Mapping[str, ConfigSource],
    env_vars_used: Mapping[str, str],
) -> ConfigDecodeError:
    """Convert the first decoding failure into a provenance-qualified error.

    A table written where a single value belongs has no provenance of its
    own; its origin is taken from the leaves beneath it.

    Args:
        error: Pydantic error raised while decoding the merged tree.
        sources: Provenance map from the builder.
        env_vars_used: Variable names recorded by the environment layer.

    Returns:
        ConfigDecodeError naming the dotted path and the flag, variable, file
        or default that supplied the bad value.

    """
    first = error.errors()[0]
    path = ".".join(str(part) for part in first["loc"])
    message = first["msg"]
    value = first.get("input")

    if first["type"] == "value_error":
        detail = strip_location(message)
    elif isinstance(value, Mapping):
        # Never echo table contents; they may hold credentials
        detail = "expected a single value, found a table"
    else:
        detail = f'invalid value "{value}": {strip_location(message)}'

    return ConfigDecodeError(path, _origin_for(path, sources, env_vars_used), detail)
