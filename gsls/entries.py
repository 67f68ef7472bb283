"""Directory-entry snapshots read from the filesystem."""

from __future__ import annotations

import os
import stat
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from .errors import FilesystemError


@dataclass(frozen=True)
class DirectoryEntry:
    """One directory child with the metadata shown in a listing row."""

    name: str
    path: Path
    mode: str
    size: int
    modified: datetime
    is_dir: bool

    @classmethod
    def from_stat(cls, path: Path, st: os.stat_result, name: str | None = None) -> "DirectoryEntry":
        """Build an entry from an ``lstat`` result (symlinks are not followed)."""
        return cls(
            name=path.name if name is None else name,
            path=path,
            mode=stat.filemode(st.st_mode),
            size=max(0, int(st.st_size)),
            modified=datetime.fromtimestamp(st.st_mtime),
            is_dir=stat.S_ISDIR(st.st_mode),
        )


def read_directory(directory: Path) -> list[DirectoryEntry]:
    """Return the immediate children of ``directory`` in enumeration order.

    No sorting is applied: the order is whatever the OS directory read yields.
    Raises ``FilesystemError`` when the directory cannot be opened or read, or
    when a child cannot be statted.
    """
    entries: list[DirectoryEntry] = []
    try:
        scanner = os.scandir(directory)
    except OSError as exc:
        raise FilesystemError(f"Error opening directory ({exc.strerror})", directory) from exc

    with scanner:
        try:
            for child in scanner:
                child_path = Path(child.path)
                try:
                    st = child.stat(follow_symlinks=False)
                except OSError as exc:
                    raise FilesystemError(f"Error reading directory contents ({exc.strerror})", child_path) from exc
                entries.append(DirectoryEntry.from_stat(child_path, st, name=child.name))
        except OSError as exc:
            raise FilesystemError(f"Error reading directory contents ({exc.strerror})", directory) from exc
    return entries


__all__ = [
    "DirectoryEntry",
    "read_directory",
]
