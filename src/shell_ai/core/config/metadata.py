"""Static metadata for every shell-ai setting.

The tables in this module are the single source of truth for field names,
environment variables, defaults, required-ness and display grouping. The
defaults layer, the environment layer, validation, reports, the schema and
the generated config.toml are all derived from them.

Provider fields are described in two parts: COMMON_PROVIDER_FIELDS holds the
fields every provider shares (api_key, api_base, model, max_tokens), and each
ProviderMeta overrides, skips or extends them.
"""

from collections.abc import Iterator
from dataclasses import dataclass
from enum import IntEnum

from shell_ai.core.config import env

DefaultLiteral = int | float | bool | str


class Section(IntEnum):
    """Display sections for grouping fields in config output."""

    PROVIDER = 1
    UI = 2
    SUGGEST = 3
    EXPLAIN = 4
    PROVIDER_SPECIFIC = 5

    @property
    def title(self) -> str:
        return _SECTION_TITLES[self]


_SECTION_TITLES: dict[Section, str] = {
    Section.PROVIDER: "Provider Settings",
    Section.UI: "UI Settings",
    Section.SUGGEST: "Suggest Settings",
    Section.EXPLAIN: "Explain Settings",
    Section.PROVIDER_SPECIFIC: "",
}


@dataclass(frozen=True)
class FieldMeta:
    """Metadata for a configuration field.

    Attributes:
        name: Logical field name (key in config files).
        env_var: Primary environment variable, checked before aliases.
        env_aliases: Alternative environment variables, in priority order.
        description: Human description.
        default: Default as a loose literal (int, float, bool or str).
        required: Whether the field must be set for the owning provider.
        section: Display section.
        deprecated: Shown with a deprecation marker.
        sensitive: Masked when displayed.
        virtual: Runtime-only setting, not part of the file schema.

    """

    name: str
    description: str
    env_var: str | None = None
    env_aliases: tuple[str, ...] = ()
    default: DefaultLiteral | None = None
    required: bool = False
    section: Section = Section.PROVIDER_SPECIFIC
    deprecated: bool = False
    sensitive: bool = False
    virtual: bool = False

    @property
    def env_vars(self) -> tuple[str, ...]:
        """Primary variable followed by aliases."""
        primary = (self.env_var,) if self.env_var else ()
        return primary + self.env_aliases

    @property
    def default_display(self) -> str | None:
        """Default rendered as text (booleans lowercase), or None."""
        if self.default is None:
            return None
        if isinstance(self.default, bool):
            return "true" if self.default else "false"
        return str(self.default)


@dataclass(frozen=True)
class CommonFieldMeta:
    """Field shared by all providers, before provider-specific overrides."""

    name: str
    description: str
    required: bool = False
    sensitive: bool = False


@dataclass(frozen=True)
class FieldOverride:
    """Per-provider override of a common field.

    None for any attribute means "inherit from the common field".
    """

    name: str
    env_var: str | None = None
    default: DefaultLiteral | None = None
    required: bool | None = None


@dataclass(frozen=True)
class ProviderMeta:
    """Metadata for one provider."""

    name: str
    display_name: str
    description: str
    field_overrides: tuple[FieldOverride, ...] = ()
    extra_fields: tuple[FieldMeta, ...] = ()
    skip_common: tuple[str, ...] = ()

    def _override_for(self, name: str) -> FieldOverride | None:
        return next((o for o in self.field_overrides if o.name == name), None)

    def resolve_common_field(self, common: CommonFieldMeta) -> FieldMeta:
        """Apply this provider's override (if any) to a common field."""
        override = self._override_for(common.name)
        if override is not None and override.required is not None:
            required = override.required
        else:
            required = common.required and common.name not in self.skip_common

        return FieldMeta(
            name=common.name,
            description=common.description,
            env_var=override.env_var if override else None,
            default=override.default if override else None,
            required=required,
            section=Section.PROVIDER_SPECIFIC,
            sensitive=common.sensitive,
        )

    def all_fields(self) -> Iterator[FieldMeta]:
        """Yield resolved common fields (minus skipped) then extra fields.

        The order is stable: it drives report and generated-file ordering.
        """
        for common in COMMON_PROVIDER_FIELDS:
            if common.name in self.skip_common:
                continue
            yield self.resolve_common_field(common)
        yield from self.extra_fields

    def resolved_field(self, name: str) -> FieldMeta | None:
        """Return a single resolved field by name, or None."""
        for common in COMMON_PROVIDER_FIELDS:
            if common.name == name:
                if common.name in self.skip_common:
                    break
                return self.resolve_common_field(common)
        return next((f for f in self.extra_fields if f.name == name), None)


COMMON_PROVIDER_FIELDS: tuple[CommonFieldMeta, ...] = (
    CommonFieldMeta(
        name="api_key",
        description="API key for authentication",
        required=True,
        sensitive=True,
    ),
    CommonFieldMeta(name="api_base", description="API base URL"),
    CommonFieldMeta(name="model", description="Model to use"),
    CommonFieldMeta(name="max_tokens", description="Max tokens for AI completion"),
)


GLOBAL_SETTINGS_METADATA: tuple[FieldMeta, ...] = (
    FieldMeta(
        name="provider",
        env_var=env.SHAI_API_PROVIDER,
        env_aliases=(env.SHAI_PROVIDER,),
        description="Provider to use",
        required=True,
        section=Section.PROVIDER,
    ),
    FieldMeta(
        name="model",
        env_var=env.SHAI_MODEL,
        description="Override model (takes precedence over provider-specific)",
        section=Section.PROVIDER,
    ),
    FieldMeta(
        name="temperature",
        env_var=env.SHAI_TEMPERATURE,
        description="Sampling temperature (0.0 = deterministic, 1.0 = creative)",
        default=0.05,
        section=Section.PROVIDER,
    ),
    FieldMeta(
        name="suggestion_count",
        env_var=env.SHAI_SUGGESTION_COUNT,
        description="Number of suggestions to generate",
        default=3,
        section=Section.SUGGEST,
    ),
    FieldMeta(
        name="skip_confirm",
        env_var=env.SHAI_SKIP_CONFIRM,
        description="Legacy: skip confirmation (implies frontend=noninteractive)",
        default=False,
        section=Section.UI,
        deprecated=True,
        virtual=True,
    ),
    FieldMeta(
        name="frontend",
        env_var=env.SHAI_FRONTEND,
        description="UI mode: dialog, readline, or noninteractive",
        default="dialog",
        section=Section.UI,
    ),
    FieldMeta(
        name="output_format",
        env_var=env.SHAI_OUTPUT_FORMAT,
        description="Output format: human or json",
        default="human",
        section=Section.UI,
    ),
    FieldMeta(
        name="locale",
        description="Language/locale for AI responses (auto-detected when unset, empty to disable)",
        section=Section.UI,
    ),
    FieldMeta(
        name="max_reference_chars",
        env_var=env.SHAI_MAX_REFERENCE_CHARS,
        description="Max characters for man page references in explain",
        default=262144,
        section=Section.EXPLAIN,
    ),
    FieldMeta(
        name="max_tokens",
        env_var=env.SHAI_MAX_TOKENS,
        description="Max tokens for an AI completion (optional, API auto-calculates when omitted)",
        section=Section.PROVIDER,
    ),
    FieldMeta(
        name="debug",
        env_var=env.SHAI_DEBUG,
        description="Debug log level",
        section=Section.UI,
    ),
)


PROVIDER_METADATA: tuple[ProviderMeta, ...] = (
    ProviderMeta(
        name="openai",
        display_name="OpenAI",
        description="OpenAI API (GPT-3.5, GPT-4, etc.)",
        field_overrides=(
            FieldOverride("api_key", env_var=env.OPENAI_API_KEY),
            FieldOverride("api_base", env_var=env.OPENAI_API_BASE, default="https://api.openai.com"),
            FieldOverride("model", env_var=env.OPENAI_MODEL, default="gpt-5"),
            FieldOverride("max_tokens", env_var=env.OPENAI_MAX_TOKENS),
        ),
        extra_fields=(
            FieldMeta(
                name="organization",
                env_var=env.OPENAI_ORGANIZATION,
                description="Organization ID for API billing (for multi-org accounts)",
            ),
        ),
    ),
    ProviderMeta(
        name="groq",
        display_name="Groq",
        description="Groq API (fast inference)",
        field_overrides=(
            FieldOverride("api_key", env_var=env.GROQ_API_KEY),
            FieldOverride("api_base", default="https://api.groq.com/openai"),
            FieldOverride("model", env_var=env.GROQ_MODEL, default="openai/gpt-oss-120b"),
            FieldOverride("max_tokens", env_var=env.GROQ_MAX_TOKENS),
        ),
    ),
    ProviderMeta(
        name="azure",
        display_name="Azure OpenAI",
        description="Azure OpenAI Service",
        field_overrides=(
            FieldOverride("api_key", env_var=env.AZURE_API_KEY),
            FieldOverride("api_base", env_var=env.AZURE_API_BASE, required=True),
            FieldOverride("model"),
            FieldOverride("max_tokens", env_var=env.AZURE_MAX_TOKENS),
        ),
        extra_fields=(
            FieldMeta(
                name="deployment_name",
                env_var=env.AZURE_DEPLOYMENT_NAME,
                description="Deployment name for your model",
                required=True,
            ),
            FieldMeta(
                name="api_version",
                env_var=env.OPENAI_API_VERSION,
                description="Azure API version",
                default="2023-05-15",
            ),
        ),
        # Azure addresses models by deployment_name
        skip_common=("model",),
    ),
    ProviderMeta(
        name="ollama",
        display_name="Ollama",
        description="Local Ollama instance (no API key required)",
        field_overrides=(
            FieldOverride("api_key"),
            FieldOverride("api_base", env_var=env.OLLAMA_API_BASE, default="http://localhost:11434"),
            FieldOverride("model", env_var=env.OLLAMA_MODEL, default="gpt-oss:120b-cloud"),
            FieldOverride("max_tokens", env_var=env.OLLAMA_MAX_TOKENS),
        ),
        skip_common=("api_key",),
    ),
    ProviderMeta(
        name="mistral",
        display_name="Mistral AI",
        description="Mistral AI API",
        field_overrides=(
            FieldOverride("api_key", env_var=env.MISTRAL_API_KEY),
            FieldOverride("api_base", env_var=env.MISTRAL_API_BASE, default="https://api.mistral.ai"),
            FieldOverride("model", env_var=env.MISTRAL_MODEL, default="codestral-2508"),
            FieldOverride("max_tokens", env_var=env.MISTRAL_MAX_TOKENS),
        ),
    ),
)


def provider_meta(name: str) -> ProviderMeta:
    """Look up provider metadata by name.

    Raises:
        KeyError: If no provider has that name.

    """
    for meta in PROVIDER_METADATA:
        if meta.name == name:
            return meta
    raise KeyError(f"Unknown provider '{name}'")


def provider_names() -> list[str]:
    """Names of all known providers in table order."""
    return [meta.name for meta in PROVIDER_METADATA]


def global_field(name: str) -> FieldMeta | None:
    """Return the global field with this name, or None."""
    return next((f for f in GLOBAL_SETTINGS_METADATA if f.name == name), None)


def env_var_for_field(field_path: str) -> str | None:
    """Return the primary environment variable for a dotted field path.

    Args:
        field_path: "temperature" for global fields or "<provider>.<field>".

    Returns:
        Variable name, or None if the field has none or is unknown.

    """
    glob = global_field(field_path)
    if glob is not None:
        return glob.env_var

    provider_name, _, field_name = field_path.partition(".")
    if not field_name:
        return None
    try:
        meta = provider_meta(provider_name)
    except KeyError:
        return None
    resolved = meta.resolved_field(field_name)
    return resolved.env_var if resolved else None

