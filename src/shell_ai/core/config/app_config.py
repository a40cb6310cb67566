"""Resolved shell-ai configuration with per-field provenance.

AppConfig is built once per invocation from the merged layers and never
mutated. ValidatedConfig is the only form request-making code may consume:
it can only be obtained through AppConfig.validate().
"""

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any

from shell_ai.core.config import env
from shell_ai.core.config.builder import ConfigBuilder
from shell_ai.core.config.metadata import global_field, provider_meta, provider_names
from shell_ai.core.config.models import (
    ConfigSource,
    ConfigValue,
    DebugLevel,
    FileConfig,
    Frontend,
    OutputFormat,
    Provider,
    ProviderCredentials,
)
from shell_ai.core.exceptions import (
    ConfigConflictError,
    ConfigValidationError,
    FieldValidationError,
    NoProviderError,
)


@dataclass(frozen=True)
class ConfigFile:
    """A configuration file candidate and whether it was loaded."""

    path: Path
    loaded: bool = False


@dataclass(frozen=True)
class AppConfig:
    """Typed configuration decoded from the merged layers.

    Every global setting is a ConfigValue so callers can report its origin.
    ``providers`` always holds an entry for every known provider.
    """

    provider: ConfigValue[Provider | None]
    model: ConfigValue[str]
    temperature: ConfigValue[float]
    frontend: ConfigValue[Frontend]
    output_format: ConfigValue[OutputFormat]
    suggestion_count: ConfigValue[int]
    max_reference_chars: ConfigValue[int]
    max_tokens: ConfigValue[int | None]
    debug: ConfigValue[DebugLevel | None]
    locale: ConfigValue[str | None]
    skip_confirm: ConfigValue[bool]
    providers: Mapping[Provider, ProviderCredentials]
    sources: Mapping[str, ConfigSource]
    env_vars_used: Mapping[str, str]
    toml_file: ConfigFile | None = None
    json_file: ConfigFile | None = None
    # Raw SHAI_FRONTEND, kept for the skip_confirm conflict check
    frontend_env: str | None = None

    @classmethod
    def from_parsed(
        cls,
        parsed: FileConfig,
        builder: ConfigBuilder,
        *,
        environ: Mapping[str, str],
        toml_file: ConfigFile | None = None,
        json_file: ConfigFile | None = None,
    ) -> "AppConfig":
        """Assemble an AppConfig from a decoded tree and its provenance.

        Args:
            parsed: Merged tree decoded into FileConfig.
            builder: Builder holding the provenance and env-var-used maps.
            environ: Environment the layers were read from.
            toml_file: config.toml candidate, if one was considered.
            json_file: config.json candidate, if one was considered.

        """

        def value(name: str, parsed_value: Any, fallback: Any = None) -> ConfigValue[Any]:
            if parsed_value is None:
                parsed_value = fallback
            return ConfigValue(parsed_value, builder.get_source(name))

        def default_of(name: str) -> Any:
            meta = global_field(name)
            return meta.default if meta else None

        providers = {
            provider: parsed.credentials_for(provider) or ProviderCredentials() for provider in Provider
        }

        if env.env_flag_is_true(environ, env.SHAI_SKIP_CONFIRM):
            skip_confirm = ConfigValue(True, ConfigSource.ENVIRONMENT)
        else:
            skip_confirm = ConfigValue(False)

        return cls(
            provider=value("provider", parsed.provider),
            model=value("model", parsed.model, ""),
            temperature=value("temperature", parsed.temperature, default_of("temperature")),
            frontend=value("frontend", parsed.frontend, Frontend(default_of("frontend"))),
            output_format=value("output_format", parsed.output_format, OutputFormat(default_of("output_format"))),
            suggestion_count=value("suggestion_count", parsed.suggestion_count, default_of("suggestion_count")),
            max_reference_chars=value(
                "max_reference_chars", parsed.max_reference_chars, default_of("max_reference_chars")
            ),
            max_tokens=value("max_tokens", parsed.max_tokens),
            debug=value("debug", parsed.debug),
            locale=value("locale", parsed.locale),
            skip_confirm=skip_confirm,
            providers=MappingProxyType(providers),
            sources=MappingProxyType(dict(builder.sources)),
            env_vars_used=MappingProxyType(dict(builder.env_vars_used)),
            toml_file=toml_file,
            json_file=json_file,
            frontend_env=environ.get(env.SHAI_FRONTEND) or None,
        )

    # =========================================================================
    # Lookups
    # =========================================================================

    def get_source(self, path: str) -> ConfigSource:
        """Layer that supplied a dotted path (DEFAULT if none did)."""
        return self.sources.get(path, ConfigSource.DEFAULT)

    def current_provider_credentials(self) -> ProviderCredentials | None:
        """Credentials of the selected provider, or None if none is selected."""
        if self.provider.value is None:
            return None
        return self.providers[self.provider.value]

    def get_credentials_for(self, provider: Provider) -> ProviderCredentials:
        return self.providers[provider]

    # =========================================================================
    # Effective values
    # =========================================================================

    def effective_model(self) -> ConfigValue[str]:
        """Resolve the model to use.

        Order: global model, selected provider's model, provider default,
        empty string. The source is that of the level that supplied it.
        """
        if self.model.value:
            return self.model

        provider = self.provider.value
        if provider is None:
            return ConfigValue("")

        creds = self.providers[provider]
        if creds.model:
            return ConfigValue(creds.model, self.get_source(f"{provider.value}.model"))

        field = provider_meta(provider.value).resolved_field("model")
        if field is not None and field.default is not None:
            return ConfigValue(str(field.default))

        return ConfigValue("")

    def effective_max_tokens(self) -> ConfigValue[int | None]:
        """Resolve max_tokens: global, then selected provider, then None."""
        if self.max_tokens.value is not None:
            return self.max_tokens

        provider = self.provider.value
        if provider is not None:
            creds = self.providers[provider]
            if creds.max_tokens is not None:
                return ConfigValue(creds.max_tokens, self.get_source(f"{provider.value}.max_tokens"))

            field = provider_meta(provider.value).resolved_field("max_tokens")
            if field is not None and field.default is not None:
                return ConfigValue(int(field.default))

        return ConfigValue(None)

    # =========================================================================
    # Validation
    # =========================================================================

    def validate_provider(self) -> list[FieldValidationError]:
        """Check that every required field of the selected provider is set.

        Returns:
            One FieldValidationError per missing or empty required field
            (empty if no provider is selected).

        """
        provider = self.provider.value
        if provider is None:
            return []

        meta = provider_meta(provider.value)
        creds = self.providers[provider]
        errors: list[FieldValidationError] = []

        for field in meta.all_fields():
            if not field.required:
                continue
            if creds.get_field(field.name):
                continue

            if field.env_var:
                hint = f"Set {field.env_var} or add [{meta.name}].{field.name} to config.toml"
            else:
                hint = f"Add [{meta.name}].{field.name} to config.toml"
            errors.append(FieldValidationError(field.name, field.description, hint))

        return errors

    def validate(self) -> "ValidatedConfig":
        """Validate the configuration for making requests.

        Raises:
            ConfigConflictError: If SHAI_SKIP_CONFIRM=true is combined with an
                SHAI_FRONTEND other than noninteractive.
            NoProviderError: If no provider was configured.
            ConfigValidationError: If the provider lacks required fields.

        """
        frontend_env = self.frontend_env
        if (
            self.skip_confirm.value
            and frontend_env
            and frontend_env.lower() != Frontend.NONINTERACTIVE.value
        ):
            raise ConfigConflictError(env.SHAI_SKIP_CONFIRM, "true", env.SHAI_FRONTEND, frontend_env)

        provider = self.provider.value
        if provider is None:
            raise NoProviderError(env.SHAI_API_PROVIDER, provider_names())

        errors = self.validate_provider()
        if errors:
            raise ConfigValidationError(provider_meta(provider.value).display_name, errors)

        return ValidatedConfig(config=self, provider=provider, credentials=self.providers[provider])


@dataclass(frozen=True)
class ValidatedConfig:
    """AppConfig proven to have a provider with all required fields."""

    config: AppConfig
    provider: Provider
    credentials: ProviderCredentials

    @property
    def display_name(self) -> str:
        return provider_meta(self.provider.value).display_name

    def effective_model(self) -> str:
        return self.config.effective_model().value

    def effective_max_tokens(self) -> int | None:
        return self.config.effective_max_tokens().value

    @property
    def temperature(self) -> float:
        return self.config.temperature.value

    def locale(self, environ: Mapping[str, str]) -> str | None:
        """Locale for AI responses (configured, detected, or None)."""
        return env.resolve_locale(self.config.locale.value, environ)
