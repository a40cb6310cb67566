"""Custom exception hierarchy for shell-ai.

All configuration failures derive from ConfigError so the CLI can turn any of
them into a single error line and a non-zero exit code. The core never exits
the process itself.
"""

from dataclasses import dataclass
from pathlib import Path


class ShellAiError(Exception):
    """Base exception for all shell-ai errors."""


class ConfigError(ShellAiError):
    """Configuration could not be loaded, decoded or validated."""


class ConfigParseError(ConfigError):
    """A present configuration file could not be read or parsed.

    Attributes:
        path: Path of the offending file.
        message: Underlying reader/parser message.

    """

    def __init__(self, path: Path, message: str) -> None:
        self.path = path
        self.message = message
        super().__init__(
            f"Failed to parse config file: {path}\n\n{message}\n\n"
            "Hint: Fix the syntax error above, or delete the file to use defaults."
        )


class ConfigDecodeError(ConfigError):
    """A merged value cannot be coerced to the type its field expects.

    Attributes:
        path: Dotted field path that failed (empty if unknown).
        origin: Provenance of the bad value (flag, env var, file or "default").
        detail: Decoder message with location noise removed.

    """

    def __init__(self, path: str, origin: str | None, detail: str) -> None:
        self.path = path
        self.origin = origin
        self.detail = detail
        message = ": ".join(part for part in (origin, path, detail) if part)
        super().__init__(f"Configuration error:\n\n{message}")


@dataclass(frozen=True)
class FieldValidationError:
    """A required provider field that is missing or empty."""

    field: str
    description: str
    hint: str


class ConfigValidationError(ConfigError):
    """The selected provider is missing one or more required fields."""

    def __init__(self, provider_display_name: str, errors: list[FieldValidationError]) -> None:
        self.provider_display_name = provider_display_name
        self.errors = errors
        lines = [f"Configuration incomplete for {provider_display_name} provider:"]
        for err in errors:
            lines.append(f"  - {err.field}: {err.description}")
            lines.append(f"    Hint: {err.hint}")
        super().__init__("\n".join(lines))


class NoProviderError(ConfigError):
    """No provider was resolved from any configuration layer."""

    def __init__(self, env_var: str, provider_names: list[str]) -> None:
        self.provider_names = provider_names
        super().__init__(
            "No provider configured.\n\n"
            "Quick start (choose one):\n"
            f"  1. Set environment variable:  export {env_var}=groq\n"
            "  2. Generate config file:      shell-ai config init\n"
            "  3. View all options:          shell-ai config schema\n\n"
            f"Supported providers: {', '.join(provider_names)}"
        )


class ConfigConflictError(ConfigError):
    """Two mutually exclusive settings are active at the same time."""

    def __init__(self, first: str, first_value: str, second: str, second_value: str) -> None:
        self.variables = (first, second)
        super().__init__(
            f"Configuration conflict: {first}={first_value} and {second}={second_value} "
            "are mutually exclusive.\n"
            f"Either unset {first} or set {second}=noninteractive."
        )
