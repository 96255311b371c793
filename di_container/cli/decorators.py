"""Decorators for CLI commands."""

import functools
from typing import Callable

import typer

from ..errors import ContainerError
from .console import get_console, is_verbose, print_error


def handle_errors(func: Callable) -> Callable:
    """Decorator to turn container errors into a formatted message and exit code 1."""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except KeyboardInterrupt:
            print_error("Operation cancelled by user", title="Cancelled")
            raise typer.Exit(130)  # Standard SIGINT exit code
        except ContainerError as e:
            get_console().print(e.format_for_cli(verbose=is_verbose()))
            raise typer.Exit(1)

    return wrapper
