"""Typer CLI entry point for shell-ai.

Global options are collected into CliOverrides, the highest-precedence
configuration layer. Commands only parse arguments and delegate to
shell_ai.core; no resolution logic lives here.
"""

import json
import logging
from typing import Any

import typer

from shell_ai.cli_utils import (
    EXIT_CONFIG_ERROR,
    EXIT_ERROR,
    _error,
    _info,
    _setup_logging,
    _success,
    console,
)
from shell_ai.core.config import (
    AppConfig,
    CliOverrides,
    DebugLevel,
    OutputFormat,
    load_app_config,
)
from shell_ai.core.config.report import print_report, report_to_dict
from shell_ai.core.config.schema import build_schema, print_schema
from shell_ai.core.config_generator import generate_init_config, write_init_config
from shell_ai.core.exceptions import ConfigError

logger = logging.getLogger(__name__)


app = typer.Typer(
    name="shell-ai",
    help="Turn natural language into shell commands",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

config_app = typer.Typer(
    name="config",
    help="Show, initialize or describe the configuration",
)
app.add_typer(config_app)


@app.callback()
def main(
    ctx: typer.Context,
    provider: str | None = typer.Option(None, "--provider", help="Provider to use"),
    model: str | None = typer.Option(None, "--model", help="Override model"),
    max_tokens: int | None = typer.Option(None, "--max-tokens", help="Max tokens for AI completion"),
    temperature: float | None = typer.Option(None, "--temperature", help="Sampling temperature"),
    frontend: str | None = typer.Option(
        None, "--frontend", help="UI mode: dialog, readline, or noninteractive"
    ),
    output_format: str | None = typer.Option(
        None, "--output-format", help="Output format: human or json"
    ),
    debug: DebugLevel | None = typer.Option(None, "--debug", help="Debug log level", case_sensitive=False),
    locale: str | None = typer.Option(
        None, "--locale", help="Language for AI responses (empty string disables)"
    ),
) -> None:
    """Turn natural language into shell commands."""
    ctx.obj = CliOverrides(
        provider=provider,
        model=model,
        max_tokens=max_tokens,
        temperature=temperature,
        frontend=frontend,
        output_format=output_format,
        debug=debug,
        locale=locale,
    )


def _load_config(ctx: typer.Context) -> AppConfig:
    """Resolve configuration for a command, exiting on configuration errors.

    Raises:
        typer.Exit: EXIT_CONFIG_ERROR for configuration errors, EXIT_ERROR for
            anything unexpected.

    """
    _setup_logging()
    overrides = ctx.find_root().obj
    try:
        config = load_app_config(overrides if isinstance(overrides, CliOverrides) else None)
    except ConfigError as e:
        _error(str(e))
        raise typer.Exit(code=EXIT_CONFIG_ERROR) from None
    except Exception as e:
        _error(f"Unexpected error: {e}")
        raise typer.Exit(code=EXIT_ERROR) from None

    _setup_logging(config.debug.value)
    logger.debug("Configuration resolved (provider source: %s)", config.provider.source)
    return config


def _print_json(data: dict[str, Any]) -> None:
    typer.echo(json.dumps(data, indent=2))


@config_app.callback(invoke_without_command=True)
def config_show(ctx: typer.Context) -> None:
    """Show the resolved configuration and where each value came from."""
    if ctx.invoked_subcommand is not None:
        return

    config = _load_config(ctx)
    if config.output_format.value is OutputFormat.JSON:
        _print_json(report_to_dict(config))
    else:
        print_report(config, console)


@config_app.command("init")
def config_init(
    stdout: bool = typer.Option(False, "--stdout", help="Print the template instead of writing it"),
) -> None:
    """Generate a documented config.toml."""
    if stdout:
        typer.echo(generate_init_config(), nl=False)
        return

    try:
        path = write_init_config()
    except ConfigError as e:
        _error(str(e))
        raise typer.Exit(code=EXIT_CONFIG_ERROR) from None
    except OSError as e:
        _error(f"Could not write config file: {e}")
        raise typer.Exit(code=EXIT_ERROR) from None

    _success(f"Created config file at: {path}")
    _info("Edit this file to configure your providers.")


@config_app.command("schema")
def config_schema(ctx: typer.Context) -> None:
    """Describe every setting, its environment variable and default."""
    config = _load_config(ctx)
    if config.output_format.value is OutputFormat.JSON:
        _print_json(build_schema())
    else:
        print_schema(console)


if __name__ == "__main__":
    app()
