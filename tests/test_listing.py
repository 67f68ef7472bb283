"""Tests for directory reading and per-directory table rendering.

Git is stubbed at ``gsls.status.query_porcelain_status`` so rows are
deterministic; repository detection still uses real ``.git`` markers.
"""

from __future__ import annotations

import io
import os
import tempfile
import unittest
from datetime import datetime
from pathlib import Path
from unittest import mock

from gsls.config import ListingOptions
from gsls.entries import DirectoryEntry, read_directory
from gsls.errors import FilesystemError, StatusQueryError
from gsls.listing import format_header, list_directory, name_column_width
from gsls.theme import PLAIN_THEME


def _entry(name: str, is_dir: bool = False, size: int = 0) -> DirectoryEntry:
    return DirectoryEntry(
        name=name,
        path=Path("/listing") / name,
        mode="drwxr-xr-x" if is_dir else "-rw-r--r--",
        size=size,
        modified=datetime(2024, 1, 2, 3, 4, 5),
        is_dir=is_dir,
    )


def _row_cells(output: str, name: str) -> list[str]:
    for line in output.splitlines():
        cells = line.split("\t")
        if len(cells) == 5 and cells[1].strip() == name:
            return cells
    raise AssertionError(f"no row for {name!r} in:\n{output}")


class ReadDirectoryTests(unittest.TestCase):
    def test_reads_children_with_metadata(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "a.txt").write_bytes(b"0123456789")
            (root / "sub").mkdir()

            entries = {entry.name: entry for entry in read_directory(root)}

        self.assertEqual(set(entries), {"a.txt", "sub"})
        self.assertEqual(entries["a.txt"].size, 10)
        self.assertFalse(entries["a.txt"].is_dir)
        self.assertTrue(entries["a.txt"].mode.startswith("-"))
        self.assertTrue(entries["sub"].is_dir)
        self.assertTrue(entries["sub"].mode.startswith("d"))
        self.assertEqual(entries["sub"].path, root / "sub")

    def test_symlink_to_directory_is_not_a_directory_entry(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "real").mkdir()
            os.symlink(root / "real", root / "link")
            entries = {entry.name: entry for entry in read_directory(root)}
        self.assertFalse(entries["link"].is_dir)
        self.assertTrue(entries["link"].mode.startswith("l"))

    def test_missing_directory_raises_filesystem_error(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            missing = Path(tmp) / "missing"
            with self.assertRaises(FilesystemError) as ctx:
                read_directory(missing)
        self.assertEqual(ctx.exception.path, missing)
        self.assertIn("Error opening directory", str(ctx.exception))


class ColumnLayoutTests(unittest.TestCase):
    def test_name_width_is_longest_name(self) -> None:
        entries = [_entry("a"), _entry("longest-name.txt"), _entry("mid.md")]
        self.assertEqual(name_column_width(entries), len("longest-name.txt"))

    def test_name_width_of_no_entries_is_zero(self) -> None:
        self.assertEqual(name_column_width([]), 0)

    def test_header_pads_name_column(self) -> None:
        self.assertEqual(format_header(6), "Mode      \tName  \tSize \tDate        \tGit State")

    def test_empty_listing_prints_header_only(self) -> None:
        out = io.StringIO()
        failures = list_directory([], Path("/listing"), ListingOptions(), out)
        self.assertEqual(failures, 0)
        self.assertEqual(out.getvalue(), "Mode      \tName\tSize \tDate        \tGit State\n")


class ListDirectoryTests(unittest.TestCase):
    def test_file_and_repository_rows(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "a.txt").write_bytes(b"x" * 10)
            (root / "repo" / ".git").mkdir(parents=True)

            out = io.StringIO()
            with mock.patch(
                "gsls.status.query_porcelain_status",
                return_value=["## main...origin/main [ahead 1]"],
            ) as query:
                failures = list_directory(read_directory(root), root, ListingOptions(), out)

        self.assertEqual(failures, 0)
        query.assert_called_once()
        self.assertEqual(query.call_args.args[0], root / "repo")
        output = out.getvalue()

        file_cells = _row_cells(output, "a.txt")
        self.assertEqual(file_cells[2].strip(), "10")
        self.assertEqual(file_cells[4], "")

        repo_cells = _row_cells(output, "repo")
        self.assertEqual(repo_cells[4], "\033[32mBranch is Ahead of Remote\033[0m")

    def test_rows_follow_supplied_order(self) -> None:
        entries = [_entry("zeta"), _entry("alpha"), _entry("mid")]
        out = io.StringIO()
        list_directory(entries, Path("/listing"), ListingOptions(theme=PLAIN_THEME), out)
        names = [line.split("\t")[1].strip() for line in out.getvalue().splitlines()[1:]]
        self.assertEqual(names, ["zeta", "alpha", "mid"])

    def test_plain_row_layout(self) -> None:
        out = io.StringIO()
        list_directory([_entry("notes.md", size=42)], Path("/listing"), ListingOptions(theme=PLAIN_THEME), out)
        self.assertEqual(
            out.getvalue().splitlines()[1],
            "-rw-r--r--\tnotes.md\t42   \t2024-01-02  \t",
        )

    def test_repository_status_uses_entry_path(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            repo = Path(tmp) / "checkout"
            (repo / ".git").mkdir(parents=True)
            entry = DirectoryEntry(
                name="alias",
                path=repo,
                mode="drwxr-xr-x",
                size=0,
                modified=datetime(2024, 1, 2),
                is_dir=True,
            )
            with mock.patch("gsls.status.query_porcelain_status", return_value=["?? new.txt"]) as query:
                list_directory([entry], Path(tmp) / "elsewhere", ListingOptions(theme=PLAIN_THEME), io.StringIO())
        self.assertEqual(query.call_args.args[0], repo)

    def test_directory_without_marker_is_not_queried(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "plain").mkdir()
            with mock.patch("gsls.status.query_porcelain_status") as query:
                list_directory(read_directory(root), root, ListingOptions(), io.StringIO())
        query.assert_not_called()

    def _two_repo_root(self, root: Path) -> list[DirectoryEntry]:
        (root / "first" / ".git").mkdir(parents=True)
        (root / "second" / ".git").mkdir(parents=True)
        entries = {entry.name: entry for entry in read_directory(root)}
        return [entries["first"], entries["second"]]

    def _query_failing_for_second(self, directory: Path, **_kwargs: object) -> list[str]:
        if directory.name == "second":
            raise StatusQueryError("Error running `git status` command (boom)", directory)
        return ["?? new.txt"]

    def test_status_failure_aborts_after_earlier_rows(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            entries = self._two_repo_root(root)
            out = io.StringIO()
            with mock.patch("gsls.status.query_porcelain_status", side_effect=self._query_failing_for_second):
                with self.assertRaises(StatusQueryError):
                    list_directory(entries, root, ListingOptions(theme=PLAIN_THEME), out)

        output = out.getvalue()
        self.assertIn("Untracked Files", _row_cells(output, "first")[4])
        self.assertNotIn("second", output)

    def test_keep_going_marks_failed_entry_unavailable(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            entries = self._two_repo_root(root)
            out = io.StringIO()
            options = ListingOptions(theme=PLAIN_THEME, keep_going=True)
            with mock.patch("gsls.status.query_porcelain_status", side_effect=self._query_failing_for_second):
                with self.assertLogs("gsls.listing", level="WARNING"):
                    failures = list_directory(entries, root, options, out)

        self.assertEqual(failures, 1)
        self.assertEqual(_row_cells(out.getvalue(), "second")[4], "Status Unavailable")


if __name__ == "__main__":
    unittest.main()
