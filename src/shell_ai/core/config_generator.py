"""Documented config.toml generation for `shell-ai config init`.

The template is derived from the metadata tables: every setting appears as a
commented-out line with its description, environment variable and default,
so the generated file is a no-op until the user uncomments something.

Usage:
    from shell_ai.core.config_generator import write_init_config

    path = write_init_config()  # ~/.config/shell-ai/config.toml
"""

import contextlib
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Final

from shell_ai.core.config.metadata import (
    GLOBAL_SETTINGS_METADATA,
    PROVIDER_METADATA,
    FieldMeta,
)
from shell_ai.core.exceptions import ConfigError
from shell_ai.core.paths import toml_config_path

logger = logging.getLogger(__name__)

API_KEY_PLACEHOLDER: Final[str] = "your-api-key-here"
CONFIG_FILE_MODE: Final[int] = 0o600

_RULE = "# " + "=" * 75
_THIN_RULE = "# " + "-" * 75

_HEADER = """\
# Shell-AI Configuration
# Generated by: shell-ai config init
#
# Configuration precedence (highest to lowest):
#   1. CLI flags (--provider, --model, etc.)
#   2. Environment variables
#   3. This config file
#   4. Built-in defaults
"""


def _toml_literal(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    return json.dumps(str(value))


def _field_lines(field: FieldMeta, placeholder: str | None = None) -> list[str]:
    if field.env_var:
        lines = [f"# {field.description} (env: {field.env_var})"]
    else:
        lines = [f"# {field.description}"]
    if field.required:
        lines.append("# REQUIRED")

    value = placeholder if placeholder is not None else field.default
    lines.append(f"# {field.name} = {_toml_literal('' if value is None else value)}")
    return lines


def generate_init_config() -> str:
    """Render the documented config.toml template.

    Returns:
        TOML text in which every setting is commented out.

    """
    lines = [_HEADER, _RULE, "# Global Settings", _RULE, ""]
    for field in GLOBAL_SETTINGS_METADATA:
        if field.virtual:
            continue
        lines.extend(_field_lines(field))
        lines.append("")

    lines.extend(
        [
            _RULE,
            "# Provider Configurations",
            _RULE,
            "# Uncomment and configure the provider(s) you want to use.",
            "",
        ]
    )
    for meta in PROVIDER_METADATA:
        lines.extend([_THIN_RULE, f"# {meta.display_name} - {meta.description}", _THIN_RULE])
        lines.append(f"[{meta.name}]")
        for field in meta.all_fields():
            lines.extend(_field_lines(field, API_KEY_PLACEHOLDER if field.sensitive else None))
            lines.append("")
        lines.append("")

    return "\n".join(lines)


def write_init_config(path: Path | None = None) -> Path:
    """Write the template to config.toml with owner-only permissions.

    Writes a temp file and publishes it with os.link(), which fails if the
    target exists, so a partially written config never exists and a file
    created concurrently is never replaced.

    Args:
        path: Target file. Defaults to the platform config.toml path.

    Returns:
        Path of the written file.

    Raises:
        ConfigError: If the file already exists.
        OSError: If the directory or file cannot be written.

    """
    config_path = toml_config_path() if path is None else path
    if config_path.exists():
        raise _already_exists(config_path)

    config_path.parent.mkdir(parents=True, exist_ok=True)
    content = generate_init_config()

    fd: int | None = None
    tmp_path_str: str | None = None

    try:
        # mkstemp creates the file with mode 0600
        fd, tmp_path_str = tempfile.mkstemp(
            dir=config_path.parent,
            prefix=".shell-ai-",
            suffix=".toml.tmp",
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                fd = None  # os.fdopen takes ownership
                f.write(content)
        finally:
            if fd is not None:
                os.close(fd)

        os.chmod(tmp_path_str, CONFIG_FILE_MODE)
        try:
            os.link(tmp_path_str, config_path)
        except FileExistsError:
            raise _already_exists(config_path) from None
        logger.debug("Atomic write completed: %s -> %s", tmp_path_str, config_path)

    finally:
        if tmp_path_str is not None and os.path.exists(tmp_path_str):
            with contextlib.suppress(OSError):
                os.unlink(tmp_path_str)

    return config_path


def _already_exists(config_path: Path) -> ConfigError:
    return ConfigError(
        f"Config file already exists at: {config_path}\nUse --stdout to print to stdout instead."
    )
