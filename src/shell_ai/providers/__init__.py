"""Provider request settings derived from a validated configuration."""

from shell_ai.providers.endpoint import Endpoint

__all__ = ["Endpoint"]
