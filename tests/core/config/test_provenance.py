"""Tests for provenance formatting and decode error conversion."""

import pytest
from pydantic import ValidationError

from shell_ai.core.config.models import ConfigSource, FileConfig
from shell_ai.core.config.provenance import (
    decode_error_from_validation,
    format_origin,
    strip_location,
)


class TestFormatOrigin:
    """Tests for format_origin()."""

    def test_cli_flag(self) -> None:
        """CLI values name the flag."""
        assert format_origin(ConfigSource.CLI, "model") == "--model"

    def test_cli_flag_uses_hyphens(self) -> None:
        """Dots and underscores become hyphens so the flag is real."""
        assert format_origin(ConfigSource.CLI, "max_tokens") == "--max-tokens"
        assert format_origin(ConfigSource.CLI, "openai.api_key") == "--openai-api-key"

    def test_env_prefers_recorded_variable(self) -> None:
        """The variable that actually supplied the value wins."""
        assert format_origin(ConfigSource.ENVIRONMENT, "provider", "SHAI_PROVIDER") == "SHAI_PROVIDER"

    def test_env_falls_back_to_metadata(self) -> None:
        """Without a recorded name, the primary variable is used."""
        assert format_origin(ConfigSource.ENVIRONMENT, "openai.api_key") == "OPENAI_API_KEY"

    def test_env_last_resort_is_upper_path(self) -> None:
        """Unknown paths fall back to the upper-cased path."""
        assert format_origin(ConfigSource.ENVIRONMENT, "locale") == "LOCALE"

    def test_files_and_default(self) -> None:
        """Files use their label, defaults the literal word."""
        assert format_origin(ConfigSource.TOML_FILE, "model") == "config.toml"
        assert format_origin(ConfigSource.JSON_FILE, "model") == "config.json"
        assert format_origin(ConfigSource.DEFAULT, "model") == "default"


class TestStripLocation:
    """Tests for strip_location()."""

    @pytest.mark.parametrize(
        ("message", "expected"),
        [
            ("Invalid value (at line 3, column 7)", "Invalid value"),
            ("expected a number at line 2 column 5", "expected a number"),
            ("Value error, invalid value", "invalid value"),
            ("plain message", "plain message"),
        ],
    )
    def test_strips_noise(self, message: str, expected: str) -> None:
        """Location suffixes and validator prefixes are removed."""
        assert strip_location(message) == expected


def _validation_error(tree: dict) -> ValidationError:
    with pytest.raises(ValidationError) as exc_info:
        FileConfig.model_validate(tree)
    return exc_info.value


class TestDecodeErrorFromValidation:
    """Tests for decode_error_from_validation()."""

    def test_flexible_parse_failure_from_env(self) -> None:
        """A bad env number names the variable and the literal."""
        error = _validation_error({"temperature": "hot"})
        result = decode_error_from_validation(
            error, {"temperature": ConfigSource.ENVIRONMENT}, {"temperature": "SHAI_TEMPERATURE"}
        )
        assert result.path == "temperature"
        assert result.origin == "SHAI_TEMPERATURE"
        assert result.detail.startswith('invalid value "hot"')
        assert "Value error" not in str(result)
        assert str(result).startswith("Configuration error:\n\nSHAI_TEMPERATURE: ")

    def test_nested_path_from_toml(self) -> None:
        """Nested failures report the dotted path and the file."""
        error = _validation_error({"openai": {"max_tokens": "lots"}})
        result = decode_error_from_validation(error, {"openai.max_tokens": ConfigSource.TOML_FILE}, {})
        assert result.path == "openai.max_tokens"
        assert result.origin == "config.toml"

    def test_enum_failure_from_cli(self) -> None:
        """Choice failures quote the offending value and name the flag."""
        error = _validation_error({"frontend": "tui"})
        result = decode_error_from_validation(error, {"frontend": ConfigSource.CLI}, {})
        assert result.origin == "--frontend"
        assert result.detail.startswith('invalid value "tui": ')

    def test_boolean_for_number(self) -> None:
        """Booleans are rejected for numeric settings."""
        error = _validation_error({"suggestion_count": True})
        result = decode_error_from_validation(error, {"suggestion_count": ConfigSource.JSON_FILE}, {})
        assert result.origin == "config.json"
        assert result.detail == "invalid type: boolean `true`, expected a number"

    def test_unknown_source_still_names_path(self) -> None:
        """Paths without provenance still report the dotted path."""
        error = _validation_error({"temperature": "hot"})
        result = decode_error_from_validation(error, {}, {})
        assert result.origin is None
        assert str(result) == f"Configuration error:\n\ntemperature: {result.detail}"

    def test_message_names_origin_and_path(self) -> None:
        """Origin and dotted path both appear before the detail."""
        error = _validation_error({"openai": {"max_tokens": "lots"}})
        result = decode_error_from_validation(error, {"openai.max_tokens": ConfigSource.TOML_FILE}, {})
        assert str(result).startswith("Configuration error:\n\nconfig.toml: openai.max_tokens: ")

    def test_table_origin_from_leaves(self) -> None:
        """A table in place of a value takes its origin from its leaves."""
        error = _validation_error({"model": {"name": "gpt-5"}})
        result = decode_error_from_validation(error, {"model.name": ConfigSource.TOML_FILE}, {})
        assert result.path == "model"
        assert result.origin == "config.toml"
        assert result.detail == "expected a single value, found a table"

    def test_table_origin_prefers_highest_layer(self) -> None:
        """The highest-precedence leaf names the origin."""
        error = _validation_error({"openai": {"api_key": {"a": "x", "b": "y"}}})
        sources = {
            "openai.api_key.a": ConfigSource.TOML_FILE,
            "openai.api_key.b": ConfigSource.JSON_FILE,
            "openai.api_keyring": ConfigSource.CLI,
        }
        result = decode_error_from_validation(error, sources, {})
        assert result.origin == "config.json"
