"""Command-line front door for gsls.

Parses CLI options, resolves the target directory, and configures logging.
Then dispatches into flat or recursive listing.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from . import __version__
from .config import ListingOptions
from .errors import FilesystemError, GslsError
from .theme import available_theme_names, resolve_theme
from .traverse import run

LOG_FORMAT = "%(levelname)s: %(name)s: %(message)s"


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gsls",
        description="List directory contents with git repository state for subdirectories.",
    )
    parser.add_argument("path", nargs="?", default=None, help="Directory to list. Defaults to current directory.")
    parser.add_argument("-r", "--recursive", action="store_true", help="List directories recursively.")
    parser.add_argument("--version", action="version", version=f"%(prog)s version {__version__}")
    parser.add_argument(
        "--max-depth",
        type=_positive_int,
        default=None,
        help="Limit how many levels below PATH are listed in --recursive mode.",
    )
    parser.add_argument(
        "--branch",
        action="store_true",
        help="Ask git for the branch header so ahead/behind state is reported.",
    )
    parser.add_argument(
        "--keep-going",
        action="store_true",
        help="Show 'Status Unavailable' and skip unreadable directories instead of aborting.",
    )
    parser.add_argument("--git", metavar="PATH", default=None, help="git executable (default: $GSLS_GIT or git).")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"Color theme name ({', '.join(available_theme_names())}, plain).",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log git invocations and visited directories.")
    return parser


def configure_logging(verbose: bool) -> None:
    """Send diagnostics to stderr so they never mix with the listing tables."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
        stream=sys.stderr,
    )


def options_from_args(args: argparse.Namespace, base: ListingOptions | None = None) -> ListingOptions:
    """Overlay parsed CLI flags on environment-derived defaults."""
    if base is None:
        base = ListingOptions.from_environ()
    theme = None
    if args.theme is not None or args.no_color:
        theme = resolve_theme(args.theme, no_color=args.no_color)
    return base.with_overrides(
        git_executable=args.git,
        branch_status=args.branch or None,
        keep_going=args.keep_going or None,
        theme=theme,
        max_depth=args.max_depth,
    )


def main(argv: list[str] | None = None, default_path: Path | None = None) -> None:
    """Parse CLI arguments and print the listing for a directory.

    ``default_path`` is primarily for tests; when omitted the current working
    directory is used. Filesystem and git failures exit with status 1 and a
    message on stderr.
    """
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    if default_path is None:
        default_path = Path.cwd()
    path = Path(args.path) if args.path else default_path
    try:
        path.stat()
    except FileNotFoundError:
        raise SystemExit(f"Path not found: {path}") from None
    except OSError as exc:
        raise SystemExit(str(FilesystemError(f"Error opening directory ({exc.strerror})", path))) from exc

    # Undecodable file names come back from os.scandir as lone surrogates.
    reconfigure = getattr(sys.stdout, "reconfigure", None)
    if reconfigure is not None:
        reconfigure(errors="surrogateescape")

    options = options_from_args(args)
    try:
        exit_code = run(path, recursive=args.recursive, options=options, out=sys.stdout)
    except GslsError as exc:
        sys.stdout.flush()
        raise SystemExit(str(exc)) from exc
    if exit_code:
        raise SystemExit(exit_code)


if __name__ == "__main__":
    main()
