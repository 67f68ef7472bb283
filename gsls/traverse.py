"""Flat and recursive listing drivers.

Flat mode prints one table for a single directory. Recursive mode walks the
tree depth-first and prints a table for every directory it visits, so a
subdirectory shows up as a row of its parent and again under its own
heading, like ``ls -R``.
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import TextIO

from .config import ListingOptions
from .entries import read_directory
from .errors import FilesystemError
from .listing import list_directory

logger = logging.getLogger(__name__)


def _child_directories(directory: Path) -> list[Path]:
    """Return subdirectories of ``directory`` sorted by name, symlinks excluded."""
    try:
        with os.scandir(directory) as entries:
            names = sorted(entry.name for entry in entries if entry.is_dir(follow_symlinks=False))
    except OSError as exc:
        raise FilesystemError(f"Error walking the path ({exc.strerror})", directory) from exc
    return [directory / name for name in names]


def walk_directories(
    root: Path,
    max_depth: int | None = None,
    on_error: Callable[[FilesystemError], None] | None = None,
) -> Iterator[Path]:
    """Yield ``root`` and every directory below it, depth-first in name order.

    Each directory is yielded before its children are scanned. ``max_depth``
    bounds how many levels below ``root`` are visited (``None`` is unlimited).
    A directory that cannot be scanned raises ``FilesystemError`` unless
    ``on_error`` is given, in which case the error is reported to it and only
    that subtree is skipped.
    """
    stack: list[tuple[Path, int]] = [(root, 0)]
    while stack:
        directory, depth = stack.pop()
        yield directory
        if max_depth is not None and depth >= max_depth:
            continue
        try:
            children = _child_directories(directory)
        except FilesystemError as exc:
            if on_error is None:
                raise
            on_error(exc)
            continue
        stack.extend((child, depth + 1) for child in reversed(children))


def list_flat(path: Path, options: ListingOptions, out: TextIO) -> int:
    """List the immediate children of ``path``; returns tolerated failure count."""
    entries = read_directory(path)
    return list_directory(entries, path, options, out)


def list_recursive(path: Path, options: ListingOptions, out: TextIO) -> int:
    """Print a headed table for every directory under ``path``, root included.

    Returns how many failures were tolerated under ``options.keep_going``;
    without it the first failure propagates and ends the walk.
    """
    failures = 0
    reported: set[Path | None] = set()

    def report(error: FilesystemError) -> None:
        nonlocal failures
        # An unreadable directory fails both the listing read and the walk scan.
        if error.path in reported:
            return
        reported.add(error.path)
        failures += 1
        logger.warning("skipping %s", error)

    on_error = report if options.keep_going else None
    for directory in walk_directories(path, options.max_depth, on_error):
        logger.debug("visiting %s", directory)
        out.write("\n")
        out.write(f"{directory}:\n")
        try:
            entries = read_directory(directory)
        except FilesystemError as exc:
            if on_error is None:
                raise
            on_error(exc)
            continue
        failures += list_directory(entries, directory, options, out)
    return failures


def run(
    path: Path,
    recursive: bool = False,
    options: ListingOptions | None = None,
    out: TextIO | None = None,
) -> int:
    """List ``path`` flat or recursively and return the process exit code.

    ``0`` means everything was listed. ``1`` means some failures were
    tolerated under keep-going. Untolerated failures propagate as
    ``GslsError``.
    """
    if options is None:
        options = ListingOptions()
    if out is None:
        out = sys.stdout

    if recursive:
        failures = list_recursive(path, options, out)
    else:
        failures = list_flat(path, options, out)
    return 1 if failures else 0


__all__ = [
    "walk_directories",
    "list_flat",
    "list_recursive",
    "run",
]
