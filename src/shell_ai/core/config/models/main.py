"""Structured configuration schema decoded from the merged layers."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from shell_ai.core.config.models.enums import DebugLevel, Frontend, OutputFormat, Provider
from shell_ai.core.config.models.providers import ProviderCredentials, parse_flexible


class FileConfig(BaseModel):
    """Schema shared by config.toml, config.json and the merged tree.

    Global settings live at top level; each provider has its own section.
    Unknown keys are ignored. Every field is optional here: defaults are
    applied by the defaults layer, not by this model.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    provider: Provider | None = None
    model: str | None = None
    temperature: float | None = None
    suggestion_count: int | None = Field(default=None, ge=0)
    frontend: Frontend | None = None
    output_format: OutputFormat | None = None
    locale: str | None = None
    max_reference_chars: int | None = Field(default=None, ge=0)
    max_tokens: int | None = Field(default=None, ge=0)
    debug: DebugLevel | None = None

    openai: ProviderCredentials | None = None
    groq: ProviderCredentials | None = None
    azure: ProviderCredentials | None = None
    ollama: ProviderCredentials | None = None
    mistral: ProviderCredentials | None = None

    @field_validator("temperature", mode="before")
    @classmethod
    def parse_temperature(cls, value: Any) -> Any:
        return parse_flexible(value, float)

    @field_validator("suggestion_count", "max_reference_chars", "max_tokens", mode="before")
    @classmethod
    def parse_counts(cls, value: Any) -> Any:
        return parse_flexible(value, int)

    def credentials_for(self, provider: Provider) -> ProviderCredentials | None:
        """Return the decoded section for a provider, if present."""
        section: ProviderCredentials | None = getattr(self, provider.value)
        return section
