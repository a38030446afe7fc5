"""CLI entry point for yaml-reference.

Invoked as::

    yaml-reference [OPTIONS] COMMAND [ARGS]...

or, during development::

    python -m yamlref.cli.main

Commands
--------
resolve     Resolve every reference in a YAML file and print the result
parse       Print a YAML file's markers without resolving them
version     Show version information

Examples
--------
::

    yaml-reference resolve config.yaml
    yaml-reference resolve config.yaml --allow ../shared | yq -P
    yaml-reference resolve config.yaml --format yaml -o .compiled/config.yaml
"""
from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

console = Console()
err_console = Console(stderr=True, soft_wrap=True)


def _configure_logging(verbose: bool) -> None:
    """Send library debug logs to stderr when ``--verbose`` is given."""
    if not verbose:
        return
    logger = logging.getLogger("yamlref")
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        logger.addHandler(RichHandler(console=err_console, show_path=False))
    logger.setLevel(logging.DEBUG)


def _check_entry_or_exit(path: str) -> None:
    """Exit with an error unless ``path`` is an existing file."""
    if not os.path.isfile(path):
        err_console.print(f"[red]Error:[/red] File not found: {path}", highlight=False)
        sys.exit(1)


def _write_output(text: str, output: str | None) -> None:
    if output:
        Path(output).parent.mkdir(parents=True, exist_ok=True)
        Path(output).write_text(text, encoding="utf-8")
        err_console.print(f"[green]Written:[/green] {output}", highlight=False)
    else:
        click.echo(text, nl=not text.endswith("\n"))


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(package_name="yaml-reference")
def cli() -> None:
    """Resolve !reference, !reference-all, !flatten and !merge tags in YAML files."""


# ---------------------------------------------------------------------------
# version command
# ---------------------------------------------------------------------------


@cli.command(name="version")
def version_command() -> None:
    """Show detailed version information."""
    from yamlref import __version__

    table = Table(show_header=False, box=None)
    table.add_row("[bold]yaml-reference[/bold]", f"v{__version__}")
    table.add_row("Python", f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}")
    table.add_row("Platform", sys.platform)
    console.print(table)


# ---------------------------------------------------------------------------
# resolve command
# ---------------------------------------------------------------------------


@cli.command(name="resolve")
@click.argument("file", type=click.Path(exists=False))
@click.option(
    "--allow",
    "allow_paths",
    multiple=True,
    type=click.Path(exists=False),
    help="Extra directory references may read from (repeatable)",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["json", "yaml"], case_sensitive=False),
    default="json",
    help="Output format (default: json, keys sorted, 2-space indent)",
)
@click.option("--output", "-o", default=None, help="Output file path (defaults to stdout)")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log resolution steps to stderr")
def resolve_command(
    file: str,
    allow_paths: tuple[str, ...],
    output_format: str,
    output: str | None,
    verbose: bool,
) -> None:
    """Resolve all references in a YAML file.

    FILE is the path to the YAML file containing references.

    \b
    Exit codes:
        0  success
        1  file not found or not allowed, invalid YAML, circular reference, ...
    """
    from yamlref import YamlRefError, load
    from yamlref.output import DocumentSerializer

    _configure_logging(verbose)
    _check_entry_or_exit(file)

    serializer = DocumentSerializer()
    try:
        resolved = load(file, list(allow_paths) or None)
        if output_format.lower() == "json":
            text = serializer.to_json(resolved, indent=2)
        else:
            text = serializer.to_yaml(resolved)
    except YamlRefError as exc:
        err_console.print(f"[red]Error:[/red] {escape(str(exc))}", highlight=False)
        sys.exit(1)

    _write_output(text, output)


# ---------------------------------------------------------------------------
# parse command
# ---------------------------------------------------------------------------


@cli.command(name="parse")
@click.argument("file", type=click.Path(exists=False))
@click.option("--output", "-o", default=None, help="Output file path (defaults to stdout)")
def parse_command(file: str, output: str | None) -> None:
    """Parse a YAML file and print it with its markers left unresolved.

    FILE is the path to the YAML file to parse.
    """
    from yamlref import YamlRefError, parse_file
    from yamlref.output import DocumentSerializer

    _check_entry_or_exit(file)

    try:
        tree = parse_file(file)
    except YamlRefError as exc:
        err_console.print(f"[red]Error:[/red] {escape(str(exc))}", highlight=False)
        sys.exit(1)

    _write_output(DocumentSerializer().to_yaml(tree), output)


if __name__ == "__main__":
    cli()
