"""CLI entry point for ideplugin-config.

Invoked as::

    ideplugin [OPTIONS] COMMAND [ARGS]...

or, during development::

    python -m ideplugin.cli.main

Commands
--------
version         Show version information
parse-version   Split a composite platform version
show            Show the effective settings of a configuration file
repositories    List the effective plugin repositories
plugins         List the declared plugin dependencies
validate        Validate a configuration file
"""
from __future__ import annotations

import sys
from typing import TYPE_CHECKING

import click

if TYPE_CHECKING:
    from ideplugin.extension import PlatformPluginExtension
from rich.console import Console
from rich.table import Table

console = Console()
err_console = Console(stderr=True)


def _load_or_exit(path: str) -> "PlatformPluginExtension":
    """Load a configuration file, printing the error and exiting on failure."""
    from ideplugin.config import load_extension
    from ideplugin.errors import ConfigFileError

    try:
        return load_extension(path)
    except ConfigFileError as exc:
        err_console.print(f"[red]Error:[/red] {exc}")
        sys.exit(1)


def _severity_color(severity_name: str) -> str:
    """Map a DiagnosticSeverity name to a Rich color string."""
    colors = {
        "ERROR": "red",
        "WARNING": "yellow",
        "INFORMATION": "blue",
        "HINT": "dim",
    }
    return colors.get(severity_name, "white")


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(package_name="ideplugin-config")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """Configuration toolkit for platform plugin builds."""
    if verbose:
        import logging

        from rich.logging import RichHandler

        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=err_console, show_path=False)],
        )


# ---------------------------------------------------------------------------
# version command
# ---------------------------------------------------------------------------


@cli.command(name="version")
def version_command() -> None:
    """Show detailed version information."""
    from ideplugin import __version__

    table = Table(show_header=False, box=None)
    table.add_row("[bold]ideplugin-config[/bold]", f"v{__version__}")
    table.add_row("Python", f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}")
    table.add_row("Platform", sys.platform)
    console.print(table)


# ---------------------------------------------------------------------------
# parse-version command
# ---------------------------------------------------------------------------


@cli.command(name="parse-version")
@click.argument("raw")
@click.option("--type", "declared_type", default=None, help="Type used when RAW has no prefix")
def parse_version_command(raw: str, declared_type: str | None) -> None:
    """Split a composite platform version into type and number.

    RAW is a version such as IU-2022.1.1 or 221-EAP-SNAPSHOT.
    """
    from ideplugin.version import parse_version

    descriptor = parse_version(raw, declared_type)
    table = Table(show_header=False, box=None)
    table.add_row("[bold]Type[/bold]", descriptor.platform_type)
    table.add_row("[bold]Version[/bold]", descriptor.version_number)
    if descriptor.product_name:
        table.add_row("[bold]Product[/bold]", descriptor.product_name)
    console.print(table)


# ---------------------------------------------------------------------------
# show command
# ---------------------------------------------------------------------------


@cli.command(name="show")
@click.argument("file", type=click.Path(exists=False))
def show_command(file: str) -> None:
    """Show the effective settings of a configuration file.

    FILE is the path to a YAML or JSON configuration document.
    """
    from ideplugin.errors import MissingPropertyError

    ext = _load_or_exit(file)

    table = Table(title=f"Settings: {ext.project_name}", show_lines=False)
    table.add_column("Setting", style="bold")
    table.add_column("Value")
    for name, value in ext.effective_settings().items():
        table.add_row(name, "[dim]unset[/dim]" if value is None else str(value))

    try:
        descriptor = ext.get_version()
    except MissingPropertyError:
        table.add_row("platform", "[red]version is not set[/red]")
    else:
        table.add_row("platform", f"{descriptor.platform_type} {descriptor.version_number}")
    console.print(table)


# ---------------------------------------------------------------------------
# repositories command
# ---------------------------------------------------------------------------


@cli.command(name="repositories")
@click.argument("file", type=click.Path(exists=False))
def repositories_command(file: str) -> None:
    """List the plugin repositories in lookup order.

    FILE is the path to a YAML or JSON configuration document.
    """
    ext = _load_or_exit(file)

    table = Table(title="Plugin repositories")
    table.add_column("#", justify="right")
    table.add_column("Kind", style="bold")
    table.add_column("URL")
    for index, repository in enumerate(ext.get_plugins_repositories(), start=1):
        table.add_row(str(index), repository.kind, repository.url)
    console.print(table)


# ---------------------------------------------------------------------------
# plugins command
# ---------------------------------------------------------------------------


@cli.command(name="plugins")
@click.argument("file", type=click.Path(exists=False))
def plugins_command(file: str) -> None:
    """List the declared plugin dependencies.

    FILE is the path to a YAML or JSON configuration document.
    """
    from ideplugin.errors import InvalidPluginNotationError

    ext = _load_or_exit(file)
    try:
        descriptors = ext.declare_plugin_dependencies()
    except InvalidPluginNotationError as exc:
        err_console.print(f"[red]Error:[/red] {exc}")
        sys.exit(1)

    if not descriptors:
        console.print("  (No plugin dependencies declared.)")
        return

    table = Table(title="Plugin dependencies")
    table.add_column("Kind", style="bold")
    table.add_column("Dependency")
    for descriptor in ext.plugin_dependencies:
        table.add_row(descriptor.kind, str(descriptor))
    console.print(table)


# ---------------------------------------------------------------------------
# validate command
# ---------------------------------------------------------------------------


@cli.command(name="validate")
@click.argument("file", type=click.Path(exists=False))
@click.option("--strict", is_flag=True, default=False, help="Treat warnings as errors")
def validate_command(file: str, strict: bool) -> None:
    """Validate a configuration file.

    FILE is the path to a YAML or JSON configuration document.
    """
    from ideplugin.validator import Validator

    ext = _load_or_exit(file)
    diagnostics = Validator(strict=strict).validate(ext)

    if not diagnostics:
        console.print(f"[green]OK[/green] {file}: no issues found")
        sys.exit(0)

    errors = [d for d in diagnostics if d.is_error]
    warnings = [d for d in diagnostics if not d.is_error]

    table = Table(title=f"Validation: {file}", show_lines=True)
    table.add_column("Severity", style="bold", min_width=10)
    table.add_column("Code", min_width=8)
    table.add_column("Setting", min_width=10)
    table.add_column("Message")

    for d in diagnostics:
        color = _severity_color(d.severity.name)
        table.add_row(
            f"[{color}]{d.severity.name}[/{color}]",
            d.code,
            d.setting,
            d.message + (f"\n[dim]hint: {d.suggestion}[/dim]" if d.suggestion else ""),
        )

    console.print(table)
    console.print(
        f"\n[bold]Summary:[/bold] {len(errors)} error(s), {len(warnings)} warning(s)"
    )

    if errors:
        sys.exit(1)


if __name__ == "__main__":
    cli()
