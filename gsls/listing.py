"""Table rendering for one directory's entries.

Each call prints a header row and one row per entry in the order supplied.
Repository subdirectories get their git state in the last column.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import TextIO

from .ansi import display_width, pad_ansi
from .config import ListingOptions
from .entries import DirectoryEntry
from .formatting import format_date, render_mode, render_status
from .status import RepositoryStatus, inspect_repository

logger = logging.getLogger(__name__)

HEADERS = ("Mode", "Name", "Size", "Date", "Git State")
MODE_WIDTH = 10
SIZE_WIDTH = 5
DATE_WIDTH = 12


@dataclass(frozen=True)
class ListingRow:
    """One printable table row: an entry plus its repository status."""

    entry: DirectoryEntry
    status: RepositoryStatus


def name_column_width(entries: Sequence[DirectoryEntry]) -> int:
    """Return the widest entry name, or ``0`` when there are no entries."""
    return max((display_width(entry.name) for entry in entries), default=0)


def _join_cells(mode: str, name: str, size: str, date: str, state: str, width: int) -> str:
    return "\t".join(
        (
            pad_ansi(mode, MODE_WIDTH),
            pad_ansi(name, width),
            pad_ansi(size, SIZE_WIDTH),
            pad_ansi(date, DATE_WIDTH),
            state,
        )
    )


def format_header(width: int) -> str:
    return _join_cells(*HEADERS, width=width)


def format_row(row: ListingRow, width: int, options: ListingOptions) -> str:
    """Render ``row`` as a tab-separated line without the trailing newline."""
    entry = row.entry
    return _join_cells(
        render_mode(entry.mode, options.theme),
        entry.name,
        str(entry.size),
        format_date(entry.modified),
        render_status(row.status.result, options.theme),
        width=width,
    )


def build_rows(entries: Sequence[DirectoryEntry], options: ListingOptions) -> Iterator[ListingRow]:
    """Yield rows lazily so a failed status query happens after earlier rows print."""
    for entry in entries:
        if entry.is_dir:
            status = inspect_repository(entry.path, options)
        else:
            status = RepositoryStatus.not_repository()
        yield ListingRow(entry=entry, status=status)


def list_directory(
    entries: Sequence[DirectoryEntry],
    directory: Path,
    options: ListingOptions | None = None,
    out: TextIO | None = None,
) -> int:
    """Print the table for ``entries`` of ``directory``.

    Returns how many repository states could not be determined. Unless
    ``options.keep_going`` is set, the first such failure is raised instead,
    after the rows before it have been written.
    """
    if options is None:
        options = ListingOptions()
    if out is None:
        out = sys.stdout

    logger.debug("listing %d entries of %s", len(entries), directory)
    width = name_column_width(entries)
    out.write(format_header(width) + "\n")

    failures = 0
    for row in build_rows(entries, options):
        if row.status.failed:
            if not options.keep_going:
                raise row.status.error
            failures += 1
            logger.warning("%s", row.status.error)
        out.write(format_row(row, width, options) + "\n")
    return failures


__all__ = [
    "HEADERS",
    "ListingRow",
    "name_column_width",
    "format_header",
    "format_row",
    "build_rows",
    "list_directory",
]
