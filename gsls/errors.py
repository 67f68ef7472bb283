"""Error types raised while reading directories and querying git."""

from __future__ import annotations

import subprocess
from pathlib import Path


class GslsError(Exception):
    """Base class for failures that abort (or degrade) a listing."""

    def __init__(self, message: str, path: Path | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.path = path

    def __str__(self) -> str:
        if self.path is None:
            return self.message
        return f"{self.message}: {self.path}"


class FilesystemError(GslsError):
    """A directory could not be opened, read, or a child could not be statted."""


class StatusQueryError(GslsError, subprocess.SubprocessError):
    """The git status command is missing or exited with a failure."""


__all__ = [
    "GslsError",
    "FilesystemError",
    "StatusQueryError",
]
