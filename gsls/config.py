"""Runtime listing options assembled from the environment and CLI flags.

There is no config file: defaults can be set through ``GSLS_*`` environment
variables and every value can be overridden on the command line.
All environment access is defensive: blank or malformed values fall back.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, replace

from .theme import Theme, resolve_theme

GIT_ENV_VAR = "GSLS_GIT"
THEME_ENV_VAR = "GSLS_THEME"
DEFAULT_GIT_EXECUTABLE = "git"
DEFAULT_REPO_MARKER = ".git"


def _env_text(environ: Mapping[str, str], key: str) -> str | None:
    """Return a stripped environment value, or ``None`` when unset/blank."""
    value = environ.get(key)
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


@dataclass(frozen=True)
class ListingOptions:
    """Settings shared by every directory listed during one run."""

    git_executable: str = DEFAULT_GIT_EXECUTABLE
    repo_marker: str = DEFAULT_REPO_MARKER
    branch_status: bool = False
    keep_going: bool = False
    theme: Theme = resolve_theme(None)
    max_depth: int | None = None

    @classmethod
    def from_environ(cls, environ: Mapping[str, str] | None = None) -> "ListingOptions":
        """Build defaults from ``GSLS_GIT`` and ``GSLS_THEME``."""
        if environ is None:
            environ = os.environ
        return cls(
            git_executable=_env_text(environ, GIT_ENV_VAR) or DEFAULT_GIT_EXECUTABLE,
            theme=resolve_theme(_env_text(environ, THEME_ENV_VAR)),
        )

    def with_overrides(self, **changes: object) -> "ListingOptions":
        """Return a copy with every non-``None`` keyword applied."""
        applied = {key: value for key, value in changes.items() if value is not None}
        return replace(self, **applied)


__all__ = [
    "GIT_ENV_VAR",
    "THEME_ENV_VAR",
    "DEFAULT_GIT_EXECUTABLE",
    "DEFAULT_REPO_MARKER",
    "ListingOptions",
]
