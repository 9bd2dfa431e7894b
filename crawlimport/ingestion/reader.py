"""CSV reading for crawler output files."""

import csv
from pathlib import Path
from typing import Dict, Iterable, Iterator, List

from ..errors import CsvParseError
from .dialects import Dialect

# Article bodies routinely exceed the csv module's 128 KiB default.
csv.field_size_limit(2**31 - 1)


def list_source_files(directory: Path, extension: str = ".csv") -> List[Path]:
    """List files in a directory whose suffix matches, in name order."""
    extension = extension.lower()
    return sorted(
        p for p in directory.iterdir() if p.is_file() and p.suffix.lower() == extension
    )


def read_rows(path: Path, dialect: Dialect) -> Iterator[Dict[str, str]]:
    """
    Stream the data rows of a CSV file keyed by header.

    Rows whose field count differs from the header raise CsvParseError,
    as do undecodable bytes and headers lacking a mapped column. A file
    with no lines at all yields nothing.

    Yields:
        Mapping of column name to cell text for each data row
    """
    try:
        with open(path, newline="", encoding="utf-8-sig") as f:
            reader = csv.reader(f, strict=True)
            first_line = next(reader, None)
            if first_line is None:
                return

            if dialect.header is None:
                header = [name.strip() for name in first_line]
                pending = []
            else:
                header = list(dialect.header)
                pending = [] if dialect.skip_header else [first_line]

            missing = dialect.missing_columns(header)
            if missing:
                raise CsvParseError(
                    f"header lacks columns required by dialect '{dialect.name}': "
                    f"{', '.join(missing)}",
                    path,
                    1,
                )

            unexpected = dialect.unexpected_columns(header)
            if unexpected:
                raise CsvParseError(
                    f"header has columns not mapped or ignored by dialect '{dialect.name}': "
                    f"{', '.join(unexpected)}",
                    path,
                    1,
                )

            yield from _keyed_rows(path, header, pending, lambda: 1)
            yield from _keyed_rows(path, header, reader, lambda: reader.line_num)
    except UnicodeDecodeError as e:
        raise CsvParseError(f"file is not valid UTF-8: {e}", path) from e
    except csv.Error as e:
        raise CsvParseError(f"malformed CSV: {e}", path) from e
    except OSError as e:
        raise CsvParseError(f"cannot read file: {e}", path) from e


def _keyed_rows(
    path: Path,
    header: List[str],
    rows: Iterable[List[str]],
    line_number,
) -> Iterator[Dict[str, str]]:
    for values in rows:
        if not values:
            continue
        if len(values) != len(header):
            raise CsvParseError(
                f"expected {len(header)} columns, found {len(values)}", path, line_number()
            )
        yield dict(zip(header, values))
