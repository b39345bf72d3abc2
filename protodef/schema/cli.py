"""Command-line interface for inspecting protocol documents."""

from __future__ import annotations

import json
import logging
import sys
from collections import Counter
from typing import TYPE_CHECKING

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from protodef.schema import SchemaError, load

if TYPE_CHECKING:
    from protodef.schema.types import DataType, Protocol


@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log decoding details")
def cli(verbose: bool) -> None:
    """ProtoDef protocol document tools."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        )


def _read(input_file: str) -> Protocol:
    with open(input_file, "rb") as f:
        try:
            return load(f)
        except SchemaError as err:
            click.echo(f"Error: {err}", err=True)
            sys.exit(1)


def kind_of(data_type: DataType) -> str:
    """Name the variant of a data type, e.g. ``container`` or ``numeric``."""
    return type(data_type).__name__.lower()


@cli.command()
@click.option("--input", "-i", "input_file", required=True, help="Input protocol document")
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
def info(input_file: str, output_json: bool) -> None:
    """Display the declarations of a protocol document."""
    protocol = _read(input_file)
    declarations = [(".".join(path), kind_of(t)) for path, t in protocol.declarations()]
    counts = Counter(kind for _, kind in declarations)

    if output_json:
        data = {
            "declarations": dict(declarations),
            "kinds": dict(sorted(counts.items())),
        }
        click.echo(json.dumps(data, indent=2))
        return

    console = Console()

    console.print("[bold cyan]Declarations[/bold cyan]")
    table = Table(show_header=True, box=None, padding=(0, 2, 0, 0))
    table.add_column("Path", style="white")
    table.add_column("Kind", style="yellow")
    for path, kind in declarations:
        table.add_row(path, kind)
    console.print(table)
    console.print()

    console.print("[bold cyan]Kinds[/bold cyan]")
    kind_table = Table(show_header=False, box=None, padding=(0, 2, 0, 2))
    kind_table.add_column("Kind", style="dim")
    kind_table.add_column("Count", style="white", justify="right")
    for kind, count in sorted(counts.items()):
        kind_table.add_row(kind, str(count))
    console.print(kind_table)


@cli.command()
@click.option("--input", "-i", "input_file", required=True, help="Input protocol document")
@click.option("--output", "-o", "output_file", default=None, help="Output file (default stdout)")
@click.option("--ast", "as_ast", is_flag=True, help="Write the decoded tree instead of the document")
def dump(input_file: str, output_file: str | None, as_ast: bool) -> None:
    """Write a normalized protocol document."""
    protocol = _read(input_file)

    if as_ast:
        generated = protocol.to_json(indent=2)
    else:
        generated = json.dumps(protocol.to_protodef(), indent=2)

    if output_file is None:
        click.echo(generated)
        return

    with open(output_file, "w", encoding="utf-8") as f:
        f.write(generated + "\n")


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
