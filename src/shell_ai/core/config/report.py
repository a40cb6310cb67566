"""Configuration report for `shell-ai config`.

The report is a read-only view of an AppConfig: every setting with its value
and the layer that supplied it, sensitive values masked. It renders either as
rich tables or as a JSON-ready dict.
"""

from dataclasses import dataclass
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from shell_ai.core.config.app_config import AppConfig, ConfigFile
from shell_ai.core.config.constants import NOT_SET
from shell_ai.core.config.env import mask_value
from shell_ai.core.config.metadata import (
    GLOBAL_SETTINGS_METADATA,
    PROVIDER_METADATA,
    ProviderMeta,
    Section,
)
from shell_ai.core.config.models import ConfigSource, Provider
from shell_ai.core.paths import file_status

_GLOBAL_SECTIONS = (Section.PROVIDER, Section.UI, Section.SUGGEST, Section.EXPLAIN)

_SOURCE_STYLES: dict[ConfigSource, str] = {
    ConfigSource.DEFAULT: "dim",
    ConfigSource.TOML_FILE: "blue",
    ConfigSource.JSON_FILE: "blue",
    ConfigSource.ENVIRONMENT: "yellow",
    ConfigSource.CLI: "magenta",
}


@dataclass(frozen=True)
class ReportRow:
    """One displayed setting."""

    name: str
    value: str
    source: ConfigSource
    deprecated: bool = False


def _global_row(config: AppConfig, name: str) -> tuple[str, ConfigSource]:
    """Display value and source for a global setting."""
    if name == "model":
        model = config.effective_model()
        return model.value or NOT_SET, model.source
    if name == "max_tokens":
        max_tokens = config.effective_max_tokens()
        return (NOT_SET if max_tokens.value is None else str(max_tokens.value)), max_tokens.source
    if name == "temperature":
        return f"{config.temperature.value:.2f}", config.temperature.source
    if name == "skip_confirm":
        return ("true" if config.skip_confirm.value else "false"), config.skip_confirm.source
    if name == "locale" and config.locale.value == "":
        return "(disabled)", config.locale.source

    value = getattr(config, name)
    return (NOT_SET if value.value is None else str(value.value)), value.source


def global_rows(config: AppConfig, section: Section | None = None) -> list[ReportRow]:
    """Rows for global settings, optionally limited to one section.

    Deprecated settings are only listed when set to something other than
    their default.
    """
    rows = []
    for field in GLOBAL_SETTINGS_METADATA:
        if section is not None and field.section != section:
            continue
        value, source = _global_row(config, field.name)
        if field.deprecated and source == ConfigSource.DEFAULT:
            continue
        if field.sensitive:
            value = mask_value(value)
        rows.append(ReportRow(field.name, value, source, field.deprecated))
    return rows


def provider_rows(config: AppConfig, meta: ProviderMeta) -> list[ReportRow]:
    """Rows for one provider's resolved fields."""
    creds = config.get_credentials_for(Provider(meta.name))
    rows = []
    for field in meta.all_fields():
        raw = creds.get_field(field.name)
        if raw:
            value, source = raw, config.get_source(f"{meta.name}.{field.name}")
        else:
            value, source = NOT_SET, ConfigSource.DEFAULT
        if field.sensitive:
            value = mask_value(value)
        rows.append(ReportRow(field.name, value, source))
    return rows


def _has_non_default_credentials(config: AppConfig, meta: ProviderMeta) -> bool:
    creds = config.get_credentials_for(Provider(meta.name))
    for field in meta.all_fields():
        current = creds.get_field(field.name)
        if not current:
            continue
        if field.default is None or current != field.default_display:
            return True
    return False


def providers_to_display(config: AppConfig) -> list[ProviderMeta]:
    """Active provider first, then others with non-default credentials."""
    active = config.provider.value
    result = [meta for meta in PROVIDER_METADATA if active is not None and meta.name == active.value]
    for meta in PROVIDER_METADATA:
        if active is not None and meta.name == active.value:
            continue
        if _has_non_default_credentials(config, meta):
            result.append(meta)
    return result


def _file_line(config_file: ConfigFile | None, legacy: bool = False) -> str:
    if config_file is None:
        return "(path unavailable)"
    if config_file.loaded:
        path = escape(str(config_file.path))
        return f"{path} (loaded, legacy)" if legacy else f"{path} (loaded)"
    return f"{escape(str(config_file.path))} [dim]{file_status(config_file.path)}[/dim]"


def _table(title: str, rows: list[ReportRow]) -> Table:
    table = Table(title=title, title_justify="left", show_header=True)
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")
    table.add_column("Source")
    for row in rows:
        name = escape(row.name)
        if row.deprecated:
            name += " [dim](deprecated)[/dim]"
        table.add_row(name, escape(row.value), f"[{_SOURCE_STYLES[row.source]}]{row.source}[/]")
    return table


def print_report(config: AppConfig, console: Console) -> None:
    """Render the configuration as rich tables."""
    console.print("[bold]Shell-AI Configuration[/bold]")
    console.print()

    for section in _GLOBAL_SECTIONS:
        console.print(_table(section.title, global_rows(config, section)))
        console.print()

    for meta in providers_to_display(config):
        console.print(_table(f"{meta.display_name} Settings", provider_rows(config, meta)))
        console.print()

    console.print("[cyan]Config Files[/cyan]")
    console.print(f"  TOML: {_file_line(config.toml_file)}")
    console.print(f"  JSON: {_file_line(config.json_file, legacy=True)}")


def _file_dict(config_file: ConfigFile | None) -> dict[str, Any]:
    return {
        "path": str(config_file.path) if config_file else None,
        "exists": bool(config_file and config_file.loaded),
    }


def report_to_dict(config: AppConfig) -> dict[str, Any]:
    """Structured form of the report, suitable for json.dumps()."""
    global_settings: dict[str, Any] = {}
    for row in global_rows(config):
        entry: dict[str, Any] = {"value": row.value, "source": str(row.source)}
        if row.deprecated:
            entry["deprecated"] = True
        global_settings[row.name] = entry

    providers: dict[str, Any] = {}
    for meta in providers_to_display(config):
        providers[meta.name] = {
            row.name: {"value": row.value, "source": str(row.source)} for row in provider_rows(config, meta)
        }

    return {
        "global": global_settings,
        "providers": providers,
        "config_files": {
            "toml": _file_dict(config.toml_file),
            "json": _file_dict(config.json_file),
        },
    }
