"""Console utilities for rich output."""

import os
from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

# Global console instance
_console: Optional[Console] = None


def get_console() -> Console:
    """Get or create the global console instance."""
    global _console
    if _console is None:
        quiet = os.environ.get("DI_CONTAINER_CLI_QUIET", "0") == "1"
        _console = Console(quiet=quiet)
    return _console


def reset_console() -> None:
    """Drop the global console so the next call creates a fresh one."""
    global _console
    _console = None


_verbose = False


def set_verbose(value: bool) -> None:
    """Toggle detailed error output."""
    global _verbose
    _verbose = value


def is_verbose() -> bool:
    return _verbose


def print_error(message: str, title: str = "Error"):
    """Print an error message."""
    get_console().print(Panel(
        message,
        title=f"[bold red]{title}[/bold red]",
        border_style="red"
    ))


def print_success(message: str, title: str = "Success"):
    """Print a success message."""
    get_console().print(Panel(
        f"[bold green]{message}[/bold green]",
        title=f"[bold green]{title}[/bold green]",
        border_style="green"
    ))


def create_table(title: str, columns: list[str]) -> Table:
    """Create a formatted table."""
    table = Table(title=title, show_header=True, header_style="bold magenta")
    for column in columns:
        table.add_column(column)
    return table
