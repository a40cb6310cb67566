"""Schema export for `shell-ai config schema`.

Describes every setting shell-ai understands, derived from the metadata
tables: global settings, the valid values of choice settings, and each
provider's resolved fields.
"""

import copy
from functools import lru_cache
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from shell_ai.core.config.metadata import GLOBAL_SETTINGS_METADATA, PROVIDER_METADATA, FieldMeta
from shell_ai.core.config.models import Frontend, OutputFormat, Provider


def _field_entry(field: FieldMeta) -> dict[str, Any]:
    entry: dict[str, Any] = {
        "description": field.description,
        "env": list(field.env_vars),
        "default": field.default,
    }
    if field.required:
        entry["required"] = True
    if field.sensitive:
        entry["sensitive"] = True
    return entry


@lru_cache(maxsize=1)
def _schema() -> dict[str, Any]:
    return {
        "global": {field.name: _field_entry(field) for field in GLOBAL_SETTINGS_METADATA if not field.virtual},
        "valid_values": {
            "provider": [p.value for p in Provider],
            "frontend": [f.value for f in Frontend],
            "output_format": [o.value for o in OutputFormat],
        },
        "providers": {
            meta.name: {
                "display_name": meta.display_name,
                "description": meta.description,
                "fields": {field.name: _field_entry(field) for field in meta.all_fields()},
            }
            for meta in PROVIDER_METADATA
        },
    }


def build_schema() -> dict[str, Any]:
    """Return the schema as a JSON-ready dict.

    Returns:
        Dict with "global", "valid_values" and "providers" keys. The caller
        owns the returned copy.

    """
    return copy.deepcopy(_schema())


def _env_display(field: FieldMeta) -> str:
    return ", ".join(field.env_vars) or "-"


def print_schema(console: Console) -> None:
    """Render the schema as rich tables."""
    table = Table(title="Global Settings", title_justify="left")
    table.add_column("Setting", style="cyan")
    table.add_column("Env")
    table.add_column("Default", style="green")
    table.add_column("Description")
    for field in GLOBAL_SETTINGS_METADATA:
        if field.virtual:
            continue
        table.add_row(field.name, _env_display(field), escape(field.default_display or "-"), escape(field.description))
    console.print(table)
    console.print()

    console.print("[cyan]Valid values[/cyan]")
    console.print(f"  provider:      {', '.join(p.value for p in Provider)}")
    console.print(f"  frontend:      {', '.join(f.value for f in Frontend)}")
    console.print(f"  output_format: {', '.join(o.value for o in OutputFormat)}")
    console.print()

    for meta in PROVIDER_METADATA:
        table = Table(title=escape(f"[{meta.name}] {meta.display_name}"), title_justify="left")
        table.add_column("Field", style="cyan")
        table.add_column("Env")
        table.add_column("Default", style="green")
        table.add_column("Description")
        for field in meta.all_fields():
            name = f"{field.name} [red]*[/red]" if field.required else field.name
            table.add_row(name, _env_display(field), escape(field.default_display or "-"), escape(field.description))
        console.print(table)
        console.print()

    console.print("[red]*[/red] required when the provider is selected")
