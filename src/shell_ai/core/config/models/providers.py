"""Provider credential model and loose scalar parsing."""

from collections.abc import Callable
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


def parse_flexible(value: Any, target: Callable[[str], Any]) -> Any:
    """Parse a value that may arrive natively or as a string.

    Native values pass through for Pydantic to validate. Strings are parsed
    with ``target``; booleans are rejected for numeric targets so ``true``
    never silently becomes ``1``.

    Args:
        value: Raw merged value.
        target: Type constructor (int or float).

    Returns:
        Parsed value, or the original non-string value.

    Raises:
        ValueError: If the value cannot be interpreted as ``target``.

    """
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError(f"invalid type: boolean `{str(value).lower()}`, expected a number")
    if not isinstance(value, str):
        return value
    try:
        return target(value.strip())
    except ValueError as e:
        raise ValueError(f'invalid value "{value}": {e}') from e


class ProviderCredentials(BaseModel):
    """Credentials and per-provider settings.

    One instance exists for every known provider; fields a provider does not
    use simply stay None.
    """

    model_config = ConfigDict(frozen=True)

    api_key: str | None = None
    api_base: str | None = None
    model: str | None = None
    max_tokens: int | None = Field(default=None, ge=0)
    # openai
    organization: str | None = None
    # azure
    deployment_name: str | None = None
    api_version: str | None = None

    @field_validator("max_tokens", mode="before")
    @classmethod
    def parse_max_tokens(cls, value: Any) -> Any:
        return parse_flexible(value, int)

    def get_field(self, name: str) -> str | None:
        """Return a field value as a string, or None if unset or unknown."""
        if name not in type(self).model_fields:
            return None
        value = getattr(self, name)
        if value is None:
            return None
        return str(value)
