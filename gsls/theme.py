"""Color palettes mapping color tokens to ANSI SGR sequences.

Classifiers and formatters only speak in color tokens (``"red"``,
``"blue"``...). A theme turns those tokens into raw escape codes at render
time, so the plain theme can drop color without touching listing logic.
"""

from __future__ import annotations

from dataclasses import dataclass

RED = "red"
GREEN = "green"
YELLOW = "yellow"
BLUE = "blue"
PURPLE = "purple"
CYAN = "cyan"
GRAY = "gray"


@dataclass(frozen=True)
class Theme:
    """Semantic ANSI palette used by the table renderer."""

    name: str
    reset: str
    mode_blue: str
    mode_gray: str
    mode_green: str
    mode_red: str
    mode_yellow: str
    red: str
    green: str
    yellow: str
    blue: str
    purple: str
    cyan: str

    def mode_sgr(self, token: str | None) -> str:
        """Return the SGR sequence for a permission-mode color token."""
        palette = {
            BLUE: self.mode_blue,
            GRAY: self.mode_gray,
            GREEN: self.mode_green,
            RED: self.mode_red,
            YELLOW: self.mode_yellow,
        }
        return palette.get(token, "") if token else ""

    def status_sgr(self, token: str | None) -> str:
        """Return the SGR sequence for a git-state color token."""
        palette = {
            RED: self.red,
            GREEN: self.green,
            YELLOW: self.yellow,
            BLUE: self.blue,
            PURPLE: self.purple,
            CYAN: self.cyan,
        }
        return palette.get(token, "") if token else ""

DEFAULT_THEME = Theme(
    name="default",
    reset="\033[0m",
    mode_blue="\033[1;34m",
    mode_gray="\033[0;37m",
    mode_green="\033[1;32m",
    mode_red="\033[1;31m",
    mode_yellow="\033[1;33m",
    red="\033[31m",
    green="\033[32m",
    yellow="\033[33m",
    blue="\033[34m",
    purple="\033[35m",
    cyan="\033[36m",
)

BRIGHT_THEME = Theme(
    name="bright",
    reset="\033[0m",
    mode_blue="\033[1;94m",
    mode_gray="\033[2;37m",
    mode_green="\033[1;92m",
    mode_red="\033[1;91m",
    mode_yellow="\033[1;93m",
    red="\033[91m",
    green="\033[92m",
    yellow="\033[93m",
    blue="\033[94m",
    purple="\033[95m",
    cyan="\033[96m",
)

PLAIN_THEME = Theme(
    name="plain",
    reset="",
    mode_blue="",
    mode_gray="",
    mode_green="",
    mode_red="",
    mode_yellow="",
    red="",
    green="",
    yellow="",
    blue="",
    purple="",
    cyan="",
)

_THEMES: dict[str, Theme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    BRIGHT_THEME.name: BRIGHT_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES.keys()))


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    if not name:
        return DEFAULT_THEME.name
    candidate = str(name).strip().lower()
    if candidate == PLAIN_THEME.name:
        return PLAIN_THEME.name
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> Theme:
    """Return concrete theme for requested name and color mode."""
    if no_color:
        return PLAIN_THEME
    normalized = normalize_theme_name(name)
    if normalized == PLAIN_THEME.name:
        return PLAIN_THEME
    return _THEMES.get(normalized, DEFAULT_THEME)


__all__ = [
    "RED",
    "GREEN",
    "YELLOW",
    "BLUE",
    "PURPLE",
    "CYAN",
    "GRAY",
    "Theme",
    "DEFAULT_THEME",
    "BRIGHT_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_theme",
]
