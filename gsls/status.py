"""Git repository detection, status query, and state classification.

A repository's state is reduced to one label from porcelain status output:
the first line matching the priority table decides, later lines are ignored.
Querying git is kept apart from classification so the classifier stays a
pure function over text.
"""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from .config import ListingOptions
from .errors import FilesystemError, GslsError, StatusQueryError
from .theme import BLUE, CYAN, GREEN, PURPLE, RED, YELLOW

logger = logging.getLogger(__name__)

BEHIND_REMOTE = "Branch is Behind Remote"
AHEAD_OF_REMOTE = "Branch is Ahead of Remote"
UP_TO_DATE = "Branch is Up-to-date with Remote"
UNTRACKED_FILES = "Untracked Files"
MODIFIED_FILES = "Modified Files"
ADDED_FILES = "Added Files"
DELETED_FILES = "Deleted Files"
RENAMED_FILES = "Renamed Files"
COPIED_FILES = "Copied Files"
UNMERGED_FILES = "Unmerged Files"
DIRTY = "Dirty"
STATUS_UNAVAILABLE = "Status Unavailable"

STATUS_CLASSIFIED = "classified"
STATUS_NOT_REPOSITORY = "not-repository"
STATUS_FAILED = "failed"


@dataclass(frozen=True)
class StatusResult:
    """Human-readable repository state plus its display color token."""

    label: str
    color: str

    def __bool__(self) -> bool:
        return bool(self.label)


EMPTY_STATUS = StatusResult("", "")
UNAVAILABLE_STATUS = StatusResult(STATUS_UNAVAILABLE, RED)

_BRANCH_PREFIX = "##"

# Ordered: the first matching prefix wins.
_FILE_STATE_PREFIXES: tuple[tuple[str, StatusResult], ...] = (
    ("??", StatusResult(UNTRACKED_FILES, BLUE)),
    (" M", StatusResult(MODIFIED_FILES, PURPLE)),
    ("A ", StatusResult(ADDED_FILES, CYAN)),
    ("D ", StatusResult(DELETED_FILES, RED)),
    ("R ", StatusResult(RENAMED_FILES, GREEN)),
    ("C ", StatusResult(COPIED_FILES, YELLOW)),
    ("U ", StatusResult(UNMERGED_FILES, RED)),
)


def _classify_branch_line(line: str) -> StatusResult:
    if "behind" in line:
        return StatusResult(BEHIND_REMOTE, RED)
    if "ahead" in line:
        return StatusResult(AHEAD_OF_REMOTE, GREEN)
    return StatusResult(UP_TO_DATE, YELLOW)


def classify_status_line(line: str) -> StatusResult:
    """Classify one porcelain line; ``EMPTY_STATUS`` means "no match"."""
    if line.startswith(_BRANCH_PREFIX):
        return _classify_branch_line(line)
    for prefix, result in _FILE_STATE_PREFIXES:
        if line.startswith(prefix):
            return result
    if line:
        return StatusResult(DIRTY, PURPLE)
    return EMPTY_STATUS


def classify_status_lines(lines: Iterable[str]) -> StatusResult:
    """Return the state of the first classifiable line, or ``EMPTY_STATUS``.

    Only empty lines are skipped, so a clean repository (no output, or only a
    trailing newline) classifies as empty.
    """
    for line in lines:
        result = classify_status_line(line)
        if result:
            return result
    return EMPTY_STATUS


def classify_status_output(output: str) -> StatusResult:
    """Classify raw ``git status --porcelain`` stdout."""
    return classify_status_lines(output.split("\n"))


def status_command(directory: Path, git_executable: str = "git", branch: bool = False) -> list[str]:
    """Build the git argv that reports porcelain status for ``directory``."""
    command = [git_executable, "-C", str(directory), "status", "--porcelain"]
    if branch:
        command.append("--branch")
    return command


def query_porcelain_status(
    directory: Path,
    *,
    git_executable: str = "git",
    branch: bool = False,
) -> list[str]:
    """Run git status inside ``directory`` and return its output lines.

    The target is passed to git via ``-C``; the current working directory of
    this process is left alone. Raises ``StatusQueryError`` when git cannot be
    launched or exits non-zero.
    """
    command = status_command(directory, git_executable, branch)
    logger.debug("running %s", command)
    try:
        proc = subprocess.run(
            command,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
        )
    except OSError as exc:
        raise StatusQueryError(f"Error running `git status` command ({exc})", directory) from exc

    if proc.returncode != 0:
        detail = proc.stderr.strip() or f"exit status {proc.returncode}"
        raise StatusQueryError(f"Error running `git status` command ({detail})", directory)
    return proc.stdout.splitlines()


def is_repository(directory: Path, marker: str = ".git") -> bool:
    """Return whether ``directory`` contains the repository ``marker`` entry.

    The marker may be a directory or a file (worktrees and submodules use a
    ``.git`` file). Stat failures other than "not found" raise
    ``FilesystemError``.
    """
    marker_path = directory / marker
    try:
        marker_path.lstat()
    except FileNotFoundError:
        return False
    except NotADirectoryError:
        return False
    except OSError as exc:
        raise FilesystemError(f"Error checking for repository marker ({exc.strerror})", marker_path) from exc
    return True


@dataclass(frozen=True)
class RepositoryStatus:
    """Outcome of inspecting one directory entry for repository state."""

    kind: str
    result: StatusResult = EMPTY_STATUS
    error: GslsError | None = None

    @property
    def failed(self) -> bool:
        return self.kind == STATUS_FAILED

    @classmethod
    def not_repository(cls) -> "RepositoryStatus":
        return cls(STATUS_NOT_REPOSITORY)

    @classmethod
    def classified(cls, result: StatusResult) -> "RepositoryStatus":
        return cls(STATUS_CLASSIFIED, result)

    @classmethod
    def from_error(cls, error: GslsError) -> "RepositoryStatus":
        return cls(STATUS_FAILED, UNAVAILABLE_STATUS, error)


def inspect_repository(directory: Path, options: ListingOptions | None = None) -> RepositoryStatus:
    """Classify ``directory`` if it is a repository root.

    Errors are captured in the returned status rather than raised, so the
    caller decides between aborting and rendering the entry as unavailable.
    """
    if options is None:
        options = ListingOptions()
    try:
        if not is_repository(directory, options.repo_marker):
            return RepositoryStatus.not_repository()
        lines = query_porcelain_status(
            directory,
            git_executable=options.git_executable,
            branch=options.branch_status,
        )
    except (FilesystemError, StatusQueryError) as exc:
        return RepositoryStatus.from_error(exc)
    return RepositoryStatus.classified(classify_status_lines(lines))


__all__ = [
    "BEHIND_REMOTE",
    "AHEAD_OF_REMOTE",
    "UP_TO_DATE",
    "UNTRACKED_FILES",
    "MODIFIED_FILES",
    "ADDED_FILES",
    "DELETED_FILES",
    "RENAMED_FILES",
    "COPIED_FILES",
    "UNMERGED_FILES",
    "DIRTY",
    "STATUS_UNAVAILABLE",
    "STATUS_CLASSIFIED",
    "STATUS_NOT_REPOSITORY",
    "STATUS_FAILED",
    "StatusResult",
    "EMPTY_STATUS",
    "UNAVAILABLE_STATUS",
    "classify_status_line",
    "classify_status_lines",
    "classify_status_output",
    "status_command",
    "query_porcelain_status",
    "is_repository",
    "RepositoryStatus",
    "inspect_repository",
]
