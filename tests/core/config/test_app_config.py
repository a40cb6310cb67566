"""Tests for AppConfig resolution, effective values and validation."""

from collections.abc import Callable
from pathlib import Path

import pytest

from shell_ai.core.config import (
    AppConfig,
    CliOverrides,
    ConfigSource,
    DebugLevel,
    Frontend,
    OutputFormat,
    Provider,
    load_app_config,
)
from shell_ai.core.config.metadata import GLOBAL_SETTINGS_METADATA
from shell_ai.core.exceptions import (
    ConfigConflictError,
    ConfigValidationError,
    NoProviderError,
)


@pytest.fixture
def load(missing_files: dict[str, Path]) -> Callable[..., AppConfig]:
    """load_app_config() with absent files unless paths are given."""

    def _load(
        environ: dict[str, str] | None = None, cli: CliOverrides | None = None, **paths: Path
    ) -> AppConfig:
        kwargs = {**missing_files, **paths}
        return load_app_config(cli, environ=environ or {}, **kwargs)

    return _load


class TestDefaults:
    """Tests for values supplied only by the default layer."""

    def test_every_default_has_default_source(self, load) -> None:
        """Declared defaults resolve with DEFAULT provenance."""
        config = load()
        for field in GLOBAL_SETTINGS_METADATA:
            if field.default is None or field.virtual:
                continue
            value = getattr(config, field.name)
            assert value.source is ConfigSource.DEFAULT, field.name
            assert str(value.value) == str(field.default), field.name

    def test_typed_defaults(self, load) -> None:
        """Defaults are decoded into their types."""
        config = load()
        assert config.temperature.value == 0.05
        assert config.frontend.value is Frontend.DIALOG
        assert config.output_format.value is OutputFormat.HUMAN
        assert config.suggestion_count.value == 3
        assert config.max_reference_chars.value == 262144

    def test_optional_settings_unset(self, load) -> None:
        """Settings without defaults are absent, not errors."""
        config = load()
        assert config.provider.value is None
        assert config.model.value == ""
        assert config.max_tokens.value is None
        assert config.debug.value is None
        assert config.locale.value is None
        assert config.skip_confirm.value is False

    def test_every_provider_has_credentials(self, load) -> None:
        """All providers get credentials even when unconfigured."""
        config = load()
        assert set(config.providers) == set(Provider)
        assert config.get_credentials_for(Provider.OPENAI).model == "gpt-5"
        assert config.get_source("openai.model") is ConfigSource.DEFAULT

    def test_config_is_immutable(self, load) -> None:
        """Resolved configuration cannot be mutated."""
        config = load()
        with pytest.raises(AttributeError):
            config.model = config.temperature  # type: ignore[misc]
        with pytest.raises(TypeError):
            config.providers[Provider.OPENAI] = None  # type: ignore[index]


class TestPrecedence:
    """Tests for layer precedence through the full loader."""

    def test_env_beats_toml(self, load, write_toml) -> None:
        """Environment overrides the TOML file."""
        toml = write_toml("temperature = 0.3\n")
        config = load({"SHAI_TEMPERATURE": "0.9"}, toml_path=toml)
        assert config.temperature.value == 0.9
        assert config.temperature.source is ConfigSource.ENVIRONMENT

    def test_json_beats_toml(self, load, write_toml, write_json) -> None:
        """The legacy JSON file overrides the TOML file."""
        toml = write_toml("suggestion_count = 2\n")
        json_path = write_json('{"suggestion_count": 5}')
        config = load(toml_path=toml, json_path=json_path)
        assert config.suggestion_count.value == 5
        assert config.suggestion_count.source is ConfigSource.JSON_FILE

    def test_cli_beats_env(self, load) -> None:
        """CLI options override everything."""
        config = load({"SHAI_MODEL": "env-model"}, CliOverrides(model="cli-model"))
        assert config.model.value == "cli-model"
        assert config.model.source is ConfigSource.CLI

    def test_empty_json_table_keeps_toml_values(self, load, write_toml, write_json) -> None:
        """An empty provider table in JSON does not erase TOML values."""
        toml = write_toml('[openai]\napi_key = "sk-toml"\n')
        json_path = write_json('{"openai": {}}')
        config = load(toml_path=toml, json_path=json_path)
        assert config.get_credentials_for(Provider.OPENAI).api_key == "sk-toml"
        assert config.get_source("openai.api_key") is ConfigSource.TOML_FILE

    def test_primary_env_beats_alias(self, load) -> None:
        """SHAI_API_PROVIDER wins over SHAI_PROVIDER and is recorded."""
        config = load({"SHAI_API_PROVIDER": "groq", "SHAI_PROVIDER": "openai"})
        assert config.provider.value is Provider.GROQ
        assert config.env_vars_used["provider"] == "SHAI_API_PROVIDER"

    def test_string_numbers_in_files(self, load, write_toml) -> None:
        """Numbers written as strings in files are accepted."""
        toml = write_toml('max_tokens = "512"\n[groq]\nmax_tokens = 64\n')
        config = load(toml_path=toml)
        assert config.max_tokens.value == 512
        assert config.get_credentials_for(Provider.GROQ).max_tokens == 64

    def test_files_recorded(self, load, write_toml, missing_files) -> None:
        """Loaded and absent files are recorded for reports."""
        toml = write_toml("")
        config = load(toml_path=toml)
        assert config.toml_file is not None
        assert config.toml_file.loaded
        assert config.json_file is not None
        assert not config.json_file.loaded
        assert config.json_file.path == missing_files["json_path"]


class TestEffectiveModel:
    """Tests for effective_model() fallback order."""

    def test_no_provider_no_model(self, load) -> None:
        """Without provider or global model the result is empty."""
        assert load().effective_model().value == ""

    def test_provider_default(self, load) -> None:
        """The provider's default is used last."""
        result = load({"SHAI_API_PROVIDER": "mistral"}).effective_model()
        assert result.value == "codestral-2508"
        assert result.source is ConfigSource.DEFAULT

    def test_provider_credential_model(self, load) -> None:
        """A provider-specific model beats the default."""
        result = load({"SHAI_API_PROVIDER": "ollama", "OLLAMA_MODEL": "llama3"}).effective_model()
        assert result.value == "llama3"
        assert result.source is ConfigSource.ENVIRONMENT

    def test_global_model_beats_provider_model(self, load) -> None:
        """SHAI_MODEL beats the provider-specific model."""
        environ = {"SHAI_API_PROVIDER": "ollama", "OLLAMA_MODEL": "llama3", "SHAI_MODEL": "qwen"}
        result = load(environ).effective_model()
        assert result.value == "qwen"
        assert result.source is ConfigSource.ENVIRONMENT

    def test_empty_global_model_is_ignored(self, load, write_toml) -> None:
        """An empty global model falls through to the provider."""
        toml = write_toml('model = ""\nprovider = "groq"\n')
        result = load(toml_path=toml).effective_model()
        assert result.value == "openai/gpt-oss-120b"

    def test_azure_without_model_is_empty(self, load) -> None:
        """Azure has no model default."""
        assert load({"SHAI_API_PROVIDER": "azure"}).effective_model().value == ""

    def test_cli_model_beats_toml_provider_model(self, load, write_toml) -> None:
        """A CLI model overrides [openai] model from the TOML file."""
        toml = write_toml('[openai]\nmodel = "gpt-5"\n')
        config = load(
            {"SHAI_API_PROVIDER": "openai", "OPENAI_API_KEY": "sk"},
            CliOverrides(model="gpt-5-mini"),
            toml_path=toml,
        )
        result = config.effective_model()
        assert result.value == "gpt-5-mini"
        assert result.source is ConfigSource.CLI
        assert config.validate().effective_model() == "gpt-5-mini"


class TestEffectiveMaxTokens:
    """Tests for effective_max_tokens()."""

    def test_unset(self, load) -> None:
        """No max_tokens anywhere is None."""
        assert load({"SHAI_API_PROVIDER": "groq"}).effective_max_tokens().value is None

    def test_provider_value(self, load) -> None:
        """Provider max_tokens is used when no global is set."""
        result = load({"SHAI_API_PROVIDER": "groq", "GROQ_MAX_TOKENS": "256"}).effective_max_tokens()
        assert result.value == 256
        assert result.source is ConfigSource.ENVIRONMENT

    def test_global_beats_provider(self, load) -> None:
        """The global max_tokens wins."""
        config = load(
            {"SHAI_API_PROVIDER": "groq", "GROQ_MAX_TOKENS": "256"},
            CliOverrides(max_tokens=1024),
        )
        result = config.effective_max_tokens()
        assert result.value == 1024
        assert result.source is ConfigSource.CLI


class TestValidation:
    """Tests for validate_provider() and validate()."""

    def test_groq_from_env(self, load) -> None:
        """Provider plus key from env validates; provider source is ENVIRONMENT."""
        config = load({"SHAI_API_PROVIDER": "groq", "GROQ_API_KEY": "gsk-1"})
        validated = config.validate()
        assert validated.provider is Provider.GROQ
        assert validated.effective_model() == "openai/gpt-oss-120b"
        assert config.provider.source is ConfigSource.ENVIRONMENT

    def test_missing_provider(self, load) -> None:
        """No provider raises NoProviderError with quick-start help."""
        with pytest.raises(NoProviderError) as exc_info:
            load().validate()
        message = str(exc_info.value)
        assert "export SHAI_API_PROVIDER=groq" in message
        assert "shell-ai config init" in message
        assert "openai, groq, azure, ollama, mistral" in message

    def test_no_provider_means_no_field_errors(self, load) -> None:
        """validate_provider() is empty without a provider."""
        assert load().validate_provider() == []

    def test_missing_api_key(self, load) -> None:
        """A missing key is reported with an env and file hint."""
        config = load({"SHAI_API_PROVIDER": "openai"})
        errors = config.validate_provider()
        assert [e.field for e in errors] == ["api_key"]
        assert errors[0].hint == "Set OPENAI_API_KEY or add [openai].api_key to config.toml"
        with pytest.raises(ConfigValidationError, match="Configuration incomplete for OpenAI provider"):
            config.validate()

    def test_empty_value_counts_as_missing(self, load, write_toml) -> None:
        """An empty string does not satisfy a required field."""
        toml = write_toml('provider = "mistral"\n[mistral]\napi_key = ""\n')
        errors = load(toml_path=toml).validate_provider()
        assert [e.field for e in errors] == ["api_key"]

    def test_azure_missing_deployment_only(self, load, write_toml) -> None:
        """Azure with base and key set reports only deployment_name."""
        toml = write_toml('[azure]\napi_base = "https://x"\n')
        config = load({"SHAI_API_PROVIDER": "azure", "AZURE_API_KEY": "k"}, toml_path=toml)
        with pytest.raises(ConfigValidationError) as exc_info:
            config.validate()
        errors = exc_info.value.errors
        assert len(errors) == 1
        assert errors[0].field == "deployment_name"
        assert errors[0].hint == "Set AZURE_DEPLOYMENT_NAME or add [azure].deployment_name to config.toml"

    def test_azure_reports_every_missing_field(self, load, write_toml) -> None:
        """Each missing required field gets its own error and hint."""
        toml = write_toml('provider = "azure"\n')
        errors = {e.field: e for e in load(toml_path=toml).validate_provider()}
        assert set(errors) == {"api_key", "api_base", "deployment_name"}
        assert errors["api_base"].hint == "Set AZURE_API_BASE or add [azure].api_base to config.toml"

    def test_ollama_needs_nothing(self, load) -> None:
        """Ollama validates with only the provider set."""
        validated = load({"SHAI_API_PROVIDER": "ollama"}).validate()
        assert validated.credentials.api_key is None
        assert validated.display_name == "Ollama"

    def test_skip_confirm_conflicts_with_frontend(self, load) -> None:
        """SHAI_SKIP_CONFIRM=true with SHAI_FRONTEND=readline is a conflict."""
        config = load(
            {"SHAI_SKIP_CONFIRM": "true", "SHAI_FRONTEND": "readline", "SHAI_API_PROVIDER": "ollama"}
        )
        with pytest.raises(ConfigConflictError) as exc_info:
            config.validate()
        assert exc_info.value.variables == ("SHAI_SKIP_CONFIRM", "SHAI_FRONTEND")
        assert "SHAI_SKIP_CONFIRM" in str(exc_info.value)
        assert "SHAI_FRONTEND=readline" in str(exc_info.value)

    def test_conflict_checked_before_provider(self, load) -> None:
        """The conflict is reported even without a provider."""
        with pytest.raises(ConfigConflictError):
            load({"SHAI_SKIP_CONFIRM": "true", "SHAI_FRONTEND": "dialog"}).validate()

    def test_skip_confirm_with_noninteractive_frontend_is_fine(self, load) -> None:
        """Agreeing settings do not conflict."""
        config = load(
            {"SHAI_SKIP_CONFIRM": "true", "SHAI_FRONTEND": "noninteractive", "SHAI_API_PROVIDER": "ollama"}
        )
        config.validate()

    def test_skip_confirm_alone_implies_noninteractive(self, load) -> None:
        """The legacy flag alone sets frontend, attributed to itself."""
        config = load({"SHAI_SKIP_CONFIRM": "true"})
        assert config.frontend.value is Frontend.NONINTERACTIVE
        assert config.frontend.source is ConfigSource.ENVIRONMENT
        assert config.env_vars_used["frontend"] == "SHAI_SKIP_CONFIRM"
        assert config.skip_confirm.value is True
        assert config.skip_confirm.source is ConfigSource.ENVIRONMENT


class TestValidatedConfig:
    """Tests for ValidatedConfig accessors."""

    def test_accessors(self, load) -> None:
        """ValidatedConfig exposes the resolved request settings."""
        config = load(
            {"SHAI_API_PROVIDER": "groq", "GROQ_API_KEY": "k", "SHAI_TEMPERATURE": "0.4"},
            CliOverrides(debug=DebugLevel.DEBUG, locale=""),
        )
        validated = config.validate()
        assert validated.temperature == 0.4
        assert validated.effective_max_tokens() is None
        assert validated.locale({"LANG": "de_DE.UTF-8"}) is None
        assert config.debug.value is DebugLevel.DEBUG

    def test_locale_detected_when_unset(self, load) -> None:
        """Without a configured locale, the environment is used."""
        validated = load({"SHAI_API_PROVIDER": "ollama"}).validate()
        assert validated.locale({"LANG": "fr_FR.UTF-8"}) == "fr_FR"
