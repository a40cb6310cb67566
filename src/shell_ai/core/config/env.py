"""Environment variable names and credential masking for shell-ai.

Every environment variable shell-ai reads is listed here. Nothing scans the
environment by prefix; the metadata tables refer to these names.
"""

from collections.abc import Mapping

from shell_ai.core.config.constants import NOT_SET

# Global settings
SHAI_API_PROVIDER = "SHAI_API_PROVIDER"
SHAI_PROVIDER = "SHAI_PROVIDER"  # alias of SHAI_API_PROVIDER
SHAI_MODEL = "SHAI_MODEL"
SHAI_TEMPERATURE = "SHAI_TEMPERATURE"
SHAI_SUGGESTION_COUNT = "SHAI_SUGGESTION_COUNT"
SHAI_SKIP_CONFIRM = "SHAI_SKIP_CONFIRM"  # legacy, implies frontend=noninteractive
SHAI_FRONTEND = "SHAI_FRONTEND"
SHAI_OUTPUT_FORMAT = "SHAI_OUTPUT_FORMAT"
SHAI_MAX_REFERENCE_CHARS = "SHAI_MAX_REFERENCE_CHARS"
SHAI_MAX_TOKENS = "SHAI_MAX_TOKENS"
SHAI_DEBUG = "SHAI_DEBUG"

# OpenAI
OPENAI_API_KEY = "OPENAI_API_KEY"
OPENAI_API_BASE = "OPENAI_API_BASE"
OPENAI_MODEL = "OPENAI_MODEL"
OPENAI_ORGANIZATION = "OPENAI_ORGANIZATION"
OPENAI_MAX_TOKENS = "OPENAI_MAX_TOKENS"
OPENAI_API_VERSION = "OPENAI_API_VERSION"  # read for azure.api_version

# Groq
GROQ_API_KEY = "GROQ_API_KEY"
GROQ_MODEL = "GROQ_MODEL"
GROQ_MAX_TOKENS = "GROQ_MAX_TOKENS"

# Azure
AZURE_API_KEY = "AZURE_API_KEY"
AZURE_API_BASE = "AZURE_API_BASE"
AZURE_DEPLOYMENT_NAME = "AZURE_DEPLOYMENT_NAME"
AZURE_MAX_TOKENS = "AZURE_MAX_TOKENS"

# Ollama
OLLAMA_API_BASE = "OLLAMA_API_BASE"
OLLAMA_MODEL = "OLLAMA_MODEL"
OLLAMA_MAX_TOKENS = "OLLAMA_MAX_TOKENS"

# Mistral
MISTRAL_API_KEY = "MISTRAL_API_KEY"
MISTRAL_API_BASE = "MISTRAL_API_BASE"
MISTRAL_MODEL = "MISTRAL_MODEL"
MISTRAL_MAX_TOKENS = "MISTRAL_MAX_TOKENS"

# Locale detection (read only when no locale is configured)
LOCALE_ENV_VARS: tuple[str, ...] = ("LC_ALL", "LC_MESSAGES", "LANG")


def env_flag_is_true(environ: Mapping[str, str], name: str) -> bool:
    """Return True if the variable is set to "true" (case-insensitive)."""
    return environ.get(name, "").lower() == "true"


def mask_value(value: str) -> str:
    """Mask a sensitive value for display.

    Args:
        value: Value to mask. Empty strings and the "(not set)" placeholder
            are returned unchanged.

    Returns:
        "****" followed by the last 6 characters, or "****" if the value is
        6 characters or shorter.

    """
    if not value or value == NOT_SET:
        return value
    if len(value) > 6:
        return "****" + value[-6:]
    return "****"


def resolve_locale(
    configured: str | None,
    environ: Mapping[str, str],
) -> str | None:
    """Resolve the locale used for AI responses.

    Args:
        configured: Locale from config/CLI. An empty string disables locale
            hints, None means auto-detect.
        environ: Environment to auto-detect from.

    Returns:
        Locale string such as "de_DE", or None if disabled or undetectable.

    """
    if configured is not None:
        return configured or None

    for name in LOCALE_ENV_VARS:
        raw = environ.get(name, "")
        if not raw:
            continue
        locale = raw.split(".", 1)[0].split("@", 1)[0]
        if locale and locale not in ("C", "POSIX"):
            return locale
    return None
