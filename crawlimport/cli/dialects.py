"""Dialects command implementation."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from ..config import Config
from ..errors import CrawlImportError
from ..ingestion import available_dialects

console = Console()


def dialects_command(
    config_path: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Config file (default: ~/.config/crawlimport/config.yaml)",
    ),
) -> None:
    """List the CSV dialects available for import."""
    try:
        custom = Config(config_path).config.dialects
    except CrawlImportError as e:
        console.print(f"{e}", style="red", markup=False)
        raise typer.Exit(1)

    table = Table(title="CSV Dialects")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Columns", style="magenta")
    table.add_column("Header", style="yellow")
    table.add_column("Ignored", style="dim")
    table.add_column("Description", style="green")

    for name, dialect in sorted(available_dialects(custom).items()):
        columns = ", ".join(
            field if field == column else f"{field}<-{column}"
            for field, column in dialect.columns.items()
        )
        if dialect.header is None:
            header = "from file"
        elif dialect.skip_header:
            header = "explicit, file header skipped"
        else:
            header = "explicit, no file header"
        table.add_row(name, columns, header, ", ".join(dialect.ignored), dialect.description)

    console.print(table)
