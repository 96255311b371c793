"""Main CLI application: inspect and check service manifests."""

from pathlib import Path
from typing import List, Optional

import typer
from loguru import logger
from rich.markup import escape

from .. import __version__
from ..config import ContainerSettings, apply_manifest, load_manifest
from ..container import DIContainer
from ..lazy import unwrap
from ..logging_utils import configure_logging
from .console import create_table, get_console, print_error, print_success, set_verbose
from .decorators import handle_errors

app = typer.Typer(
    name="di-container",
    help="Inspect service manifests and check that every service resolves",
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
    pretty_exceptions_enable=False,
)


def version_callback(value: bool):
    if value:
        get_console().print(f"[bold cyan]di-container[/bold cyan] version [green]{__version__}[/green]")
        raise typer.Exit()


@app.callback()
@handle_errors
def callback(
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version",
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-V", help="Enable debug logging and detailed errors"
    ),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only log errors"),
):
    """Inspect service manifests and check that every service resolves."""
    settings = ContainerSettings.from_env()
    if verbose:
        level = "DEBUG"
    elif quiet:
        level = "ERROR"
    else:
        level = settings.log_level
    configure_logging(level, settings.log_format)
    set_verbose(verbose)


@app.command("show")
@handle_errors
def show_command(
    manifests: List[Path] = typer.Argument(..., help="Manifest files (.yaml, .yml or .json)"),
):
    """List the services declared by one or more manifests.

    Examples:
        di-container show services.yaml
        di-container show base.yaml overrides.yaml
    """
    manifest = load_manifest(*manifests)
    table = create_table("Services", ["Identifier", "Kind", "Implementation", "Arguments"])
    for entry in manifest.services:
        if entry.factory is not None:
            implementation = f"{entry.factory}()"
            arguments = "-"
        else:
            implementation = entry.implementation
            arguments = ", ".join(a if a is not None else "None" for a in entry.arguments or []) or "-"
        table.add_row(
            escape(entry.identifier),
            entry.kind.value,
            escape(implementation),
            escape(arguments),
        )
    get_console().print(table)


@app.command("check")
@handle_errors
def check_command(
    manifests: List[Path] = typer.Argument(..., help="Manifest files (.yaml, .yml or .json)"),
    service: Optional[List[str]] = typer.Option(
        None, "--service", "-s", help="Only resolve these identifiers (repeatable)"
    ),
):
    """Register manifests into a fresh container and resolve every service.

    Exits with code 1 if any service fails to resolve.

    Examples:
        di-container check services.yaml
        di-container check services.yaml --service ILogger
    """
    container = apply_manifest(DIContainer(), load_manifest(*manifests))
    targets = service or container.identifiers()

    table = create_table("Resolution", ["Service", "Status", "Result"])
    failures = 0
    for identifier in targets:
        try:
            instance = container.get(identifier)
        except Exception as e:
            failures += 1
            logger.debug(f"Resolving '{identifier}' failed: {type(e).__name__}")
            message = getattr(e, "message", None) or str(e)
            table.add_row(escape(identifier), "[red]FAILED[/red]", escape(f"{type(e).__name__}: {message}"))
        else:
            table.add_row(escape(identifier), "[green]OK[/green]", escape(type(unwrap(instance)).__name__))

    get_console().print(table)

    if failures:
        print_error(f"{failures} of {len(targets)} services failed to resolve")
        raise typer.Exit(1)
    print_success(f"All {len(targets)} services resolved")


def main():
    """Entry point for the ``di-container`` command."""
    app()
