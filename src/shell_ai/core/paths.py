"""Platform configuration paths for shell-ai.

Usage:
    from shell_ai.core.paths import toml_config_path, json_config_path

    path = toml_config_path()  # e.g. ~/.config/shell-ai/config.toml
"""

import errno
import os
import sys
from collections.abc import Mapping
from pathlib import Path

# Directory name under the platform configuration directory
APP_DIR_NAME: str = "shell-ai"

# Config file names (also used as provenance labels for file layers)
TOML_CONFIG_NAME: str = "config.toml"
JSON_CONFIG_NAME: str = "config.json"


def config_dir(environ: Mapping[str, str] | None = None) -> Path:
    """Return the shell-ai configuration directory.

    Resolution order:
    1. $XDG_CONFIG_HOME/shell-ai (any platform, if set)
    2. %APPDATA%/shell-ai on Windows
    3. ~/Library/Application Support/shell-ai on macOS
    4. ~/.config/shell-ai elsewhere
    """
    env = os.environ if environ is None else environ

    xdg = env.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg).expanduser() / APP_DIR_NAME

    if sys.platform == "win32" and env.get("APPDATA"):
        return Path(env["APPDATA"]) / APP_DIR_NAME

    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / APP_DIR_NAME

    return Path.home() / ".config" / APP_DIR_NAME


def toml_config_path(environ: Mapping[str, str] | None = None) -> Path:
    """Return the path of config.toml."""
    return config_dir(environ) / TOML_CONFIG_NAME


def json_config_path(environ: Mapping[str, str] | None = None) -> Path:
    """Return the path of the legacy config.json."""
    return config_dir(environ) / JSON_CONFIG_NAME


def file_status(path: Path) -> str:
    """Describe why a config file was not loaded, for reports."""
    try:
        path.stat()
    except FileNotFoundError:
        return "(not found)"
    except PermissionError:
        return "(permission denied)"
    except OSError as e:
        return f"({errno.errorcode.get(e.errno or 0, 'error').lower()})"
    return "(exists but unreadable)"
