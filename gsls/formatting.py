"""Cell formatting for listing rows: colored permission modes, dates, states."""

from __future__ import annotations

from datetime import datetime

from .ansi import wrap_sgr
from .status import StatusResult
from .theme import BLUE, GRAY, GREEN, RED, YELLOW, Theme

MODE_CHAR_COLORS: dict[str, str] = {
    "d": BLUE,
    "-": GRAY,
    "r": GREEN,
    "w": RED,
    "x": YELLOW,
}
DATE_FORMAT = "%Y-%m-%d"


def format_mode(mode: str) -> list[tuple[str, str | None]]:
    """Pair every character of ``mode`` with its color token.

    Characters outside the color table map to ``None``. Never fails, and the
    result always has one pair per input character.
    """
    return [(ch, MODE_CHAR_COLORS.get(ch)) for ch in mode]


def render_mode(mode: str, theme: Theme) -> str:
    """Return ``mode`` with each colored character wrapped in its SGR code."""
    return "".join(
        wrap_sgr(ch, theme.mode_sgr(token), theme.reset)
        for ch, token in format_mode(mode)
    )


def render_status(result: StatusResult, theme: Theme) -> str:
    """Return a colored git-state label, or ``""`` for non-repositories."""
    if not result:
        return ""
    return wrap_sgr(result.label, theme.status_sgr(result.color), theme.reset)


def format_date(value: datetime) -> str:
    return value.strftime(DATE_FORMAT)


__all__ = [
    "MODE_CHAR_COLORS",
    "DATE_FORMAT",
    "format_mode",
    "render_mode",
    "render_status",
    "format_date",
]
