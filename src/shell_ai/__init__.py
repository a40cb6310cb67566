"""shell-ai: AI-assisted shell command suggestions and explanations."""

__version__ = "0.1.0"
