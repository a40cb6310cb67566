"""Pytest configuration and fixtures for shell-ai tests."""

from collections.abc import Callable
from pathlib import Path

import pytest

from shell_ai.core.config.env import LOCALE_ENV_VARS
from shell_ai.core.config.metadata import GLOBAL_SETTINGS_METADATA, PROVIDER_METADATA


def _recognized_env_vars() -> set[str]:
    names = set(LOCALE_ENV_VARS)
    for field in GLOBAL_SETTINGS_METADATA:
        names.update(field.env_vars)
    for meta in PROVIDER_METADATA:
        for field in meta.all_fields():
            names.update(field.env_vars)
    return names


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Clear every variable shell-ai reads and point config at a temp dir.

    Tests never see the developer's real environment or config files.

    Returns:
        The temporary XDG_CONFIG_HOME.

    """
    for name in _recognized_env_vars():
        monkeypatch.delenv(name, raising=False)
    xdg = tmp_path / "xdg"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(xdg))
    return xdg


@pytest.fixture
def config_dir(isolated_environment: Path) -> Path:
    """Created shell-ai config directory inside the temp XDG_CONFIG_HOME."""
    path = isolated_environment / "shell-ai"
    path.mkdir(parents=True)
    return path


@pytest.fixture
def write_toml(tmp_path: Path) -> Callable[[str], Path]:
    """Write a config.toml under tmp_path and return its path."""

    def _write(content: str) -> Path:
        path = tmp_path / "config.toml"
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def write_json(tmp_path: Path) -> Callable[[str], Path]:
    """Write a config.json under tmp_path and return its path."""

    def _write(content: str) -> Path:
        path = tmp_path / "config.json"
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def missing_files(tmp_path: Path) -> dict[str, Path]:
    """Paths for load_app_config() that do not exist."""
    return {
        "toml_path": tmp_path / "absent" / "config.toml",
        "json_path": tmp_path / "absent" / "config.json",
    }
