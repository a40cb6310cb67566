"""Chat-completions endpoint settings for each provider.

Endpoint is built only from a ValidatedConfig, so the provider and its
required credentials are guaranteed to be present.
"""

from dataclasses import dataclass
from typing import Final

from shell_ai.core.config import Provider, ValidatedConfig, provider_meta

OLLAMA_DUMMY_API_KEY: Final[str] = "ollama"
AZURE_DEFAULT_API_VERSION: Final[str] = "2023-05-15"


def _default_base(provider: Provider) -> str:
    resolved = provider_meta(provider.value).resolved_field("api_base")
    if resolved is None or resolved.default is None:
        return ""
    return str(resolved.default)


@dataclass(frozen=True)
class Endpoint:
    """Everything needed to send a chat-completions request.

    Attributes:
        base_url: API base URL (for Azure, the full deployment URL).
        model: Model name; empty for Azure, which addresses deployments.
        api_key: Bearer token, if any.
        temperature: Sampling temperature.
        max_tokens: Completion token limit, None to let the API decide.
        extra_headers: Provider-specific headers.

    """

    base_url: str
    model: str
    api_key: str | None
    temperature: float
    max_tokens: int | None = None
    extra_headers: tuple[tuple[str, str], ...] = ()

    @classmethod
    def from_validated(cls, validated: ValidatedConfig) -> "Endpoint":
        """Build the endpoint for the validated provider."""
        provider = validated.provider
        creds = validated.credentials
        common = {
            "temperature": validated.temperature,
            "max_tokens": validated.effective_max_tokens(),
        }

        if provider is Provider.AZURE:
            base = (creds.api_base or "").rstrip("/")
            api_version = creds.api_version or AZURE_DEFAULT_API_VERSION
            api_key = creds.api_key or validated.config.get_credentials_for(Provider.OPENAI).api_key
            deployment = creds.deployment_name or ""
            url = f"{base}/openai/deployments/{deployment}/chat/completions?api-version={api_version}"
            return cls(
                base_url=url,
                model="",
                api_key=api_key,
                extra_headers=(("api-key", api_key or ""),),
                **common,
            )

        base = creds.api_base or _default_base(provider)
        model = validated.effective_model()

        if provider is Provider.OLLAMA:
            return cls(base_url=base, model=model, api_key=OLLAMA_DUMMY_API_KEY, **common)

        headers: tuple[tuple[str, str], ...] = ()
        if provider is Provider.OPENAI and creds.organization:
            headers = (("OpenAI-Organization", creds.organization),)
        return cls(base_url=base, model=model, api_key=creds.api_key, extra_headers=headers, **common)

    def chat_completions_url(self) -> str:
        """Full chat-completions URL.

        A base URL that already contains /chat/completions is used as is;
        otherwise /v1/chat/completions is appended.
        """
        if "/chat/completions" in self.base_url:
            return self.base_url
        return f"{self.base_url.rstrip('/')}/v1/chat/completions"
