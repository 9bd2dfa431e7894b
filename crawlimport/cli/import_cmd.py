"""Import command implementation."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from ..config import Config, FileErrorPolicy
from ..db import close_connection_pools
from ..errors import CrawlImportError
from ..pipeline import ImportOrchestrator

console = Console()


def import_command(
    source: Path = typer.Argument(..., help="CSV file, or directory of CSV files"),
    platform_id: Optional[int] = typer.Option(
        None,
        "--platform-id",
        "-p",
        help="Platform id stamped on every imported article",
    ),
    dialect: Optional[str] = typer.Option(
        None,
        "--dialect",
        "-d",
        help="CSV dialect name (see 'crawlimport dialects')",
    ),
    chunk_size: Optional[int] = typer.Option(
        None,
        "--chunk-size",
        help="Rows per upsert statement",
        min=1,
    ),
    extension: Optional[str] = typer.Option(
        None,
        "--extension",
        help="File suffix selected in directory mode",
    ),
    on_file_error: Optional[FileErrorPolicy] = typer.Option(
        None,
        "--on-file-error",
        help="Directory mode: halt at the first failing file, or skip it",
        case_sensitive=False,
    ),
    collect_all: bool = typer.Option(
        False,
        "--collect-all",
        help="Report every invalid row instead of stopping at the first",
    ),
    config_path: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Config file (default: ~/.config/crawlimport/config.yaml)",
    ),
) -> None:
    """Import crawled articles from CSV into the articles table."""
    try:
        config = Config(config_path)
        import_config = config.build_import_config(
            source_path=source,
            platform_id=platform_id,
            dialect=dialect,
            chunk_size=chunk_size,
            file_extension=extension,
            on_file_error=on_file_error,
            collect_all=collect_all,
        )

        orchestrator = ImportOrchestrator(import_config)
        summary = orchestrator.run()

        if summary.exit_code != 0:
            raise typer.Exit(summary.exit_code)

    except CrawlImportError as e:
        console.print(f"Import failed: {e}", style="red", markup=False)
        raise typer.Exit(1)
    except KeyboardInterrupt:
        console.print("\n[yellow]Import interrupted by user[/yellow]")
        raise typer.Exit(1)
    finally:
        close_connection_pools()
