"""Platform management commands."""

from pathlib import Path
from typing import Optional

import psycopg
import typer
from rich.console import Console
from rich.table import Table

from ..config import Config
from ..db import PlatformManager, close_connection_pools, get_connection
from ..errors import CrawlImportError

console = Console()
platforms_app = typer.Typer(help="Manage platforms")

ConfigOption = typer.Option(
    None,
    "--config",
    "-c",
    help="Config file (default: ~/.config/crawlimport/config.yaml)",
)


@platforms_app.command("list")
def platforms_list(config_path: Optional[Path] = ConfigOption) -> None:
    """List platforms with their article counts."""
    try:
        database_url = Config(config_path).get_database_url()
        with get_connection(database_url) as conn:
            platforms = PlatformManager().get_platforms(conn)
    except (CrawlImportError, psycopg.Error) as e:
        console.print(f"{e}", style="red", markup=False)
        raise typer.Exit(1)
    finally:
        close_connection_pools()

    if not platforms:
        console.print("[yellow]No platforms configured.[/yellow]")
        return

    table = Table(title="Platforms")
    table.add_column("ID", style="cyan", justify="right")
    table.add_column("Name", style="magenta")
    table.add_column("Articles", style="green", justify="right")

    for platform in platforms:
        table.add_row(str(platform["id"]), platform["name"], str(platform["article_count"]))

    console.print(table)


@platforms_app.command("add")
def platforms_add(
    name: str = typer.Argument(..., help="Platform name, e.g. bisnis.com"),
    config_path: Optional[Path] = ConfigOption,
) -> None:
    """Add a platform."""
    try:
        database_url = Config(config_path).get_database_url()
        with get_connection(database_url) as conn:
            platform_id = PlatformManager().add_platform(conn, name)
    except (CrawlImportError, psycopg.Error) as e:
        console.print(f"{e}", style="red", markup=False)
        raise typer.Exit(1)
    finally:
        close_connection_pools()

    console.print(f"[green]✅ Added platform {platform_id}: {name}[/green]")
