"""Init command implementation."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel

from ..config import Config, ConfigModel, save_config
from ..config.loader import DEFAULT_CONFIG_PATH
from ..db import close_connection_pools, init_database, validate_connection
from ..errors import CrawlImportError

console = Console()


def init_command(
    config_path: Path = typer.Option(
        DEFAULT_CONFIG_PATH,
        "--config",
        "-c",
        help="Config file to create",
    ),
    platform_id: Optional[int] = typer.Option(
        None,
        "--platform-id",
        "-p",
        help="Default platform id written to the config",
    ),
    dialect: str = typer.Option("canonical", "--dialect", "-d", help="Default CSV dialect"),
    force: bool = typer.Option(False, "--force", help="Overwrite an existing config file"),
    create_schema: bool = typer.Option(
        True,
        "--create-schema/--no-create-schema",
        help="Create the platforms and articles tables if absent",
    ),
) -> None:
    """Write a config file and bootstrap the database tables."""
    console.print(Panel.fit("crawlimport - Initialization", style="bold blue"))

    if config_path.exists() and not force:
        console.print(f"[yellow]Config exists, keeping it: {config_path}[/yellow]")
    else:
        config = ConfigModel(defaults={"platform_id": platform_id, "dialect": dialect})
        save_config(config, config_path)
        console.print(f"✅ Created config: {config_path}")

    if not create_schema:
        return

    try:
        config = Config(config_path)
        database_url = config.get_database_url()
        connect_timeout = config.config.database.connect_timeout

        console.print("\n[bold]Testing database connection...[/bold]")
        if not validate_connection(database_url, connect_timeout):
            console.print(
                "[red]❌ Database connection failed![/red]\n"
                f"Check the connection string in {config.config.database.url_env}."
            )
            raise typer.Exit(1)
        console.print("✅ Database connection successful")

        console.print("\n[bold]Initializing database schema...[/bold]")
        init_database(database_url, connect_timeout)
        console.print("✅ Database schema initialized")
    except CrawlImportError as e:
        console.print(f"❌ {e}", style="red", markup=False)
        raise typer.Exit(1)
    finally:
        close_connection_pools()
