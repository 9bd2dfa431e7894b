"""Import orchestrator that drives CSV files through the ingestion pipeline."""

import time
from enum import Enum
from pathlib import Path
from typing import Callable, ContextManager, List, Optional

import psycopg
from pydantic import BaseModel, Field
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
from rich.table import Table

from ..config import FileErrorPolicy, ImportConfig
from ..db import ArticleStorage, PlatformManager, get_connection
from ..errors import (
    ConfigurationError,
    CrawlImportError,
    RecordValidationError,
    StorageError,
)
from ..ingestion import deduplicate_by_url, list_source_files, read_rows, validate_rows

console = Console()


class FileStatus(str, Enum):
    """Outcome of importing one file."""

    SUCCESS = "success"
    FAILED = "failed"
    NOT_RUN = "not_run"


class FileResult(BaseModel):
    """Counts and outcome for one source file."""

    path: Path = Field(..., description="Source file")
    status: FileStatus = Field(FileStatus.NOT_RUN, description="Import outcome")
    rows_read: int = Field(0, description="Data rows read from the file")
    records_validated: int = Field(0, description="Rows that passed validation")
    duplicates: int = Field(0, description="Rows collapsed by URL deduplication")
    records_written: int = Field(0, description="Records sent to storage")
    duration: float = Field(0.0, description="Seconds spent on the file")
    error: Optional[str] = Field(None, description="Error message if failed")
    error_kind: Optional[str] = Field(None, description="Error class name if failed")


class ImportSummary(BaseModel):
    """Result of one import invocation."""

    source_path: Path = Field(..., description="File or directory imported")
    files: List[FileResult] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        """True when every file imported successfully."""
        return all(f.status == FileStatus.SUCCESS for f in self.files)

    @property
    def exit_code(self) -> int:
        """Process exit code; there is no partial success."""
        return 0 if self.ok else 1

    @property
    def records_written(self) -> int:
        """Total records written across files."""
        return sum(f.records_written for f in self.files)


class ImportOrchestrator:
    """Orchestrates read, validate, dedup and upsert for each source file."""

    def __init__(
        self,
        config: ImportConfig,
        storage: Optional[ArticleStorage] = None,
        platforms: Optional[PlatformManager] = None,
        connect: Optional[Callable[[], ContextManager]] = None,
    ) -> None:
        """
        Initialize import orchestrator.

        Args:
            config: Resolved import settings
            storage: Article writer (defaults to a chunked ArticleStorage)
            platforms: Platform lookup used to check the target platform
            connect: Factory returning a connection context manager
        """
        self.config = config
        self.storage = storage or ArticleStorage(
            chunk_size=config.chunk_size,
            statement_timeout_ms=config.statement_timeout_ms,
        )
        self.platforms = platforms or PlatformManager()
        self._connect = connect or (
            lambda: get_connection(config.database_url, config.connect_timeout)
        )

    def collect_files(self) -> List[Path]:
        """Resolve the source path into the ordered list of files to import."""
        source = self.config.source_path
        if source.is_file():
            return [source]
        if source.is_dir():
            return list_source_files(source, self.config.file_extension)
        raise ConfigurationError(f"Source path not found: {source}")

    def check_platform(self) -> None:
        """Fail before any work when the target platform does not exist."""
        try:
            with self._connect() as conn:
                platform = self.platforms.get_platform(conn, self.config.platform_id)
        except psycopg.Error as e:
            raise StorageError(f"cannot reach database: {e}") from e
        if platform is None:
            raise ConfigurationError(f"Platform {self.config.platform_id} does not exist")

    def run(self) -> ImportSummary:
        """
        Import every source file, each in its own transaction.

        With the halt policy the first failing file stops the run and the
        remaining files are reported as not run.

        Returns:
            Summary of every file considered
        """
        files = self.collect_files()
        summary = ImportSummary(source_path=self.config.source_path)

        if not files:
            console.print(
                f"[yellow]No {self.config.file_extension} files found in "
                f"{self.config.source_path}[/yellow]"
            )
            return summary

        self.check_platform()

        console.print(Panel.fit(
            f"Importing {len(files)} file(s) • dialect {self.config.dialect.name} • "
            f"platform {self.config.platform_id} • chunk size {self.config.chunk_size}",
            style="bold blue",
        ))

        halted = False
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            TimeElapsedColumn(),
            console=console,
        ) as progress:
            for path in files:
                if halted:
                    summary.files.append(FileResult(path=path))
                    continue

                task = progress.add_task(f"Importing {path.name}", total=1)
                result = self.import_file(path)
                progress.advance(task, 1)
                progress.remove_task(task)

                summary.files.append(result)
                if (
                    result.status == FileStatus.FAILED
                    and self.config.on_file_error == FileErrorPolicy.HALT
                ):
                    halted = True

        print_summary(summary)
        return summary

    def import_file(self, path: Path) -> FileResult:
        """Import one file; errors are recorded on the result, not raised."""
        result = FileResult(path=path)
        start_time = time.time()

        try:
            self._import_file(path, result)
            result.status = FileStatus.SUCCESS
        except CrawlImportError as e:
            result.status = FileStatus.FAILED
            result.error = str(e)
            result.error_kind = type(e).__name__
            console.print(f"✗ {type(e).__name__}: {e}", style="red", markup=False)
        finally:
            result.duration = time.time() - start_time

        return result

    def _import_file(self, path: Path, result: FileResult) -> None:
        outcome = validate_rows(
            read_rows(path, self.config.dialect),
            self.config.dialect,
            collect_all=self.config.collect_all,
        )
        result.rows_read = outcome.rows_seen
        result.records_validated = len(outcome.records)

        if not outcome.ok:
            for failure in outcome.failures[1:]:
                console.print(
                    f"  row {failure.row_index}: {'; '.join(failure.errors)}",
                    style="red",
                    markup=False,
                )
            first = outcome.failures[0]
            raise RecordValidationError(
                path, first.row_index, first.row, first.errors, first.validated_count
            )

        deduped = deduplicate_by_url(outcome.records)
        result.duplicates = deduped.duplicates

        try:
            with self._connect() as conn:
                result.records_written = self.storage.upsert_articles(
                    conn, deduped.records, self.config.platform_id
                )
        except StorageError as e:
            raise StorageError(e.reason, path, e.record_count) from e
        except psycopg.Error as e:
            raise StorageError(str(e), path, len(deduped.records)) from e


def print_summary(summary: ImportSummary) -> None:
    """Print per-file import results."""
    table = Table(title="Import Summary")
    table.add_column("File", style="cyan")
    table.add_column("Status", style="bold")
    table.add_column("Rows", style="yellow", justify="right")
    table.add_column("Duplicates", style="yellow", justify="right")
    table.add_column("Written", style="green", justify="right")
    table.add_column("Duration", style="yellow")
    table.add_column("Details", style="dim")

    for f in summary.files:
        if f.status == FileStatus.SUCCESS:
            status = "[green]✓[/green]"
        elif f.status == FileStatus.FAILED:
            status = "[red]✗[/red]"
        else:
            status = "[dim]-[/dim]"
        duration = f"{f.duration:.1f}s" if f.duration > 0 else "-"
        details = f.error_kind or ("not run" if f.status == FileStatus.NOT_RUN else "")
        table.add_row(
            f.path.name,
            status,
            str(f.rows_read),
            str(f.duplicates),
            str(f.records_written),
            duration,
            details,
        )

    console.print("\n")
    console.print(table)

    if summary.ok:
        console.print(Panel(
            f"[green]✅ Import completed[/green]\n\n"
            f"Files: {len(summary.files)}\n"
            f"Articles written: {summary.records_written}",
            style="green",
        ))
    else:
        failed = [f.path.name for f in summary.files if f.status == FileStatus.FAILED]
        skipped = [f.path.name for f in summary.files if f.status == FileStatus.NOT_RUN]
        lines = [
            "[red]❌ Import failed[/red]\n",
            f"Failed files: {', '.join(failed)}",
        ]
        if skipped:
            lines.append(f"Not run: {', '.join(skipped)}")
        lines.append(f"Articles written: {summary.records_written}")
        console.print(Panel("\n".join(lines), style="red"))
