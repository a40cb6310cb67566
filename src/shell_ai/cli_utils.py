"""Shared CLI helpers: console, message styling, exit codes and logging."""

import logging

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from shell_ai.core.config import DebugLevel

# Exit codes
EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_CONFIG_ERROR = 2

console = Console()
err_console = Console(stderr=True)


def _error(message: str) -> None:
    """Print an error message in red."""
    console.print(f"[red]Error:[/red] {escape(message)}")


def _warning(message: str) -> None:
    """Print a warning message in yellow."""
    console.print(f"[yellow]Warning:[/yellow] {escape(message)}")


def _success(message: str) -> None:
    """Print a success message in green."""
    console.print(f"[green]{escape(message)}[/green]")


def _info(message: str) -> None:
    console.print(f"[cyan]{escape(message)}[/cyan]")


def _log_level(debug: DebugLevel | None) -> int:
    """Map the configured debug level to a logging level (unset is INFO)."""
    return logging.INFO if debug is None else debug.logging_level


def _setup_logging(debug: DebugLevel | None = None) -> None:
    """Configure the root logger to write through rich on stderr.

    Safe to call more than once: the CLI configures INFO before loading the
    configuration and reconfigures from the resolved debug level afterwards.

    Args:
        debug: Resolved debug level, or None for the INFO default.

    """
    logging.basicConfig(
        level=_log_level(debug),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False, rich_tracebacks=False)],
        force=True,
    )
