"""Layered configuration for shell-ai.

Settings are merged from five layers, lowest precedence first: built-in
defaults, config.toml, the legacy config.json, environment variables and CLI
options. Every resolved value records the layer that supplied it.

Usage:
    from shell_ai.core.config import CliOverrides, load_app_config

    config = load_app_config(CliOverrides(model="gpt-5-mini"))
    print(config.effective_model())      # ConfigValue(value='gpt-5-mini', source=<ConfigSource.CLI: 'cli'>)
    validated = config.validate()        # raises ConfigError subclasses
"""

from shell_ai.core.config.app_config import AppConfig, ConfigFile, ValidatedConfig
from shell_ai.core.config.builder import ConfigBuilder
from shell_ai.core.config.constants import (
    APP_DIR_NAME,
    JSON_CONFIG_NAME,
    MAX_CONFIG_SIZE,
    NOT_SET,
    TOML_CONFIG_NAME,
)
from shell_ai.core.config.env import env_flag_is_true, mask_value, resolve_locale
from shell_ai.core.config.layers import (
    CliOverrides,
    cli_to_tree,
    defaults_to_tree,
    env_to_tree,
    load_json_layer,
    load_toml_layer,
)
from shell_ai.core.config.loaders import load_app_config
from shell_ai.core.config.metadata import (
    COMMON_PROVIDER_FIELDS,
    GLOBAL_SETTINGS_METADATA,
    PROVIDER_METADATA,
    CommonFieldMeta,
    FieldMeta,
    FieldOverride,
    ProviderMeta,
    Section,
    env_var_for_field,
    global_field,
    provider_meta,
    provider_names,
)
from shell_ai.core.config.models import (
    LAYER_ORDER,
    ConfigSource,
    ConfigValue,
    DebugLevel,
    FileConfig,
    Frontend,
    OutputFormat,
    Provider,
    ProviderCredentials,
)
from shell_ai.core.config.provenance import format_origin, strip_location

__all__ = [
    # app_config.py
    "AppConfig",
    "ConfigFile",
    "ValidatedConfig",
    # builder.py
    "ConfigBuilder",
    # constants.py
    "APP_DIR_NAME",
    "JSON_CONFIG_NAME",
    "MAX_CONFIG_SIZE",
    "NOT_SET",
    "TOML_CONFIG_NAME",
    # env.py
    "env_flag_is_true",
    "mask_value",
    "resolve_locale",
    # layers.py
    "CliOverrides",
    "cli_to_tree",
    "defaults_to_tree",
    "env_to_tree",
    "load_json_layer",
    "load_toml_layer",
    # loaders.py
    "load_app_config",
    # metadata.py
    "COMMON_PROVIDER_FIELDS",
    "GLOBAL_SETTINGS_METADATA",
    "PROVIDER_METADATA",
    "CommonFieldMeta",
    "FieldMeta",
    "FieldOverride",
    "ProviderMeta",
    "Section",
    "env_var_for_field",
    "global_field",
    "provider_meta",
    "provider_names",
    # models/
    "LAYER_ORDER",
    "ConfigSource",
    "ConfigValue",
    "DebugLevel",
    "FileConfig",
    "Frontend",
    "OutputFormat",
    "Provider",
    "ProviderCredentials",
    # provenance.py
    "format_origin",
    "strip_location",
]
