"""ANSI-aware text measurement and padding utilities.

Table columns are padded by visible width so embedded color codes and wide
characters do not push later columns out of alignment.
"""

from __future__ import annotations

import re
import unicodedata

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")
RESET = "\033[0m"


def char_display_width(ch: str) -> int:
    """Return terminal column width for one character.

    Combining marks consume no columns, East Asian wide/fullwidth characters
    consume two, everything else one.
    """
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def strip_ansi(text: str) -> str:
    """Remove escape sequences from ``text``."""
    return ANSI_ESCAPE_RE.sub("", text)


def display_width(text: str) -> int:
    """Return the number of terminal columns ``text`` occupies when printed."""
    return sum(char_display_width(ch) for ch in strip_ansi(text))


def pad_ansi(text: str, width: int) -> str:
    """Left-align ``text`` in a field of ``width`` visible columns.

    Escape sequences are kept verbatim and do not count toward the width.
    Text already wider than ``width`` is returned unchanged.
    """
    missing = width - display_width(text)
    if missing <= 0:
        return text
    return text + " " * missing


def wrap_sgr(text: str, sgr: str, reset: str = RESET) -> str:
    """Wrap ``text`` in ``sgr`` and ``reset``; empty ``sgr`` leaves it untouched."""
    if not sgr:
        return text
    return f"{sgr}{text}{reset}"


__all__ = [
    "ANSI_ESCAPE_RE",
    "RESET",
    "char_display_width",
    "strip_ansi",
    "display_width",
    "pad_ansi",
    "wrap_sgr",
]
