"""Configuration loading for shell-ai.

Runs the five layers (default, config.toml, config.json, environment, CLI)
through the builder in precedence order and decodes the result.
"""

import logging
import os
from collections.abc import Mapping
from pathlib import Path

from pydantic import ValidationError

from shell_ai.core.config.app_config import AppConfig, ConfigFile
from shell_ai.core.config.builder import ConfigBuilder
from shell_ai.core.config.layers import (
    CliOverrides,
    cli_to_tree,
    defaults_to_tree,
    env_to_tree,
    load_json_layer,
    load_toml_layer,
)
from shell_ai.core.config.models import ConfigSource, FileConfig
from shell_ai.core.config.provenance import decode_error_from_validation
from shell_ai.core.paths import json_config_path, toml_config_path

logger = logging.getLogger(__name__)


def load_app_config(
    cli: CliOverrides | None = None,
    *,
    toml_path: Path | None = None,
    json_path: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> AppConfig:
    """Resolve the configuration from all sources.

    Args:
        cli: Values given as global CLI options (highest precedence).
        toml_path: config.toml to read. Defaults to the platform path.
        json_path: Legacy config.json to read. Defaults to the platform path.
        environ: Environment to read. Defaults to os.environ.

    Returns:
        Immutable AppConfig with per-field provenance.

    Raises:
        ConfigParseError: If a present file cannot be read or parsed.
        ConfigDecodeError: If a merged value has the wrong type.

    """
    environ = os.environ if environ is None else environ
    toml_path = toml_config_path(environ) if toml_path is None else toml_path
    json_path = json_config_path(environ) if json_path is None else json_path

    builder = ConfigBuilder()
    builder.merge_layer(defaults_to_tree(), ConfigSource.DEFAULT)

    toml_tree = load_toml_layer(toml_path)
    if toml_tree is None:
        logger.debug("No TOML config at %s", toml_path)
    else:
        logger.debug("Loaded TOML config from %s", toml_path)
        builder.merge_layer(toml_tree, ConfigSource.TOML_FILE)

    json_tree = load_json_layer(json_path)
    if json_tree is None:
        logger.debug("No JSON config at %s", json_path)
    else:
        logger.debug("Loaded JSON config from %s", json_path)
        builder.merge_layer(json_tree, ConfigSource.JSON_FILE)

    env_tree, env_vars_used = env_to_tree(environ)
    for path, name in env_vars_used.items():
        logger.debug("Using %s for %s", name, path)
        builder.record_env_var(path, name)
    builder.merge_layer(env_tree, ConfigSource.ENVIRONMENT)

    cli_tree = cli_to_tree(cli)
    if cli_tree:
        logger.debug("CLI overrides: %s", ", ".join(sorted(cli_tree)))
    builder.merge_layer(cli_tree, ConfigSource.CLI)

    try:
        parsed = FileConfig.model_validate(builder.tree)
    except ValidationError as e:
        raise decode_error_from_validation(e, builder.sources, builder.env_vars_used) from e

    return AppConfig.from_parsed(
        parsed,
        builder,
        environ=environ,
        toml_file=ConfigFile(toml_path, loaded=toml_tree is not None),
        json_file=ConfigFile(json_path, loaded=json_tree is not None),
    )
