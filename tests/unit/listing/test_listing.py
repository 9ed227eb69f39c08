"""Tests for the directory listing provider."""

from __future__ import annotations

import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from shellfm.effects import LoadDirectory
from shellfm.errors import ListingError, ListingErrorKind
from shellfm.listing import load_directory, read_directory


class ReadDirectoryTests(unittest.TestCase):
    def test_lists_immediate_children_with_metadata(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "sub").mkdir()
            (root / "sub" / "nested.txt").write_text("x", encoding="utf-8")
            (root / "a.txt").write_bytes(b"hello")
            os.utime(root / "a.txt", ns=(1_000_000_000, 2_000_000_000))

            entries = {entry.name: entry for entry in read_directory(root)}

            self.assertEqual(set(entries), {"sub", "a.txt"})
            self.assertTrue(entries["sub"].is_dir)
            self.assertFalse(entries["a.txt"].is_dir)
            self.assertEqual(entries["a.txt"].size, 5)
            self.assertEqual(entries["a.txt"].modified_ns, 2_000_000_000)

    def test_hidden_entries_are_listed(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / ".hidden").write_text("", encoding="utf-8")

            names = [entry.name for entry in read_directory(root)]

            self.assertEqual(names, [".hidden"])

    def test_missing_directory_raises_not_found(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            missing = Path(tmp) / "nope"
            with self.assertRaises(ListingError) as ctx:
                read_directory(missing)

        self.assertIs(ctx.exception.kind, ListingErrorKind.NOT_FOUND)
        self.assertEqual(ctx.exception.path, missing)
        self.assertIn("no such file or directory", str(ctx.exception))

    def test_file_path_raises_not_a_directory(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "file.txt"
            target.write_text("data", encoding="utf-8")
            with self.assertRaises(ListingError) as ctx:
                read_directory(target)

        self.assertIs(ctx.exception.kind, ListingErrorKind.NOT_A_DIRECTORY)

    def test_permission_error_is_classified(self) -> None:
        with mock.patch("shellfm.listing.os.scandir", side_effect=PermissionError(13, "Permission denied")):
            with self.assertRaises(ListingError) as ctx:
                read_directory(Path("/locked"))

        self.assertIs(ctx.exception.kind, ListingErrorKind.PERMISSION_DENIED)
        self.assertEqual(str(ctx.exception), "open /locked: permission denied")

    def test_unreadable_entry_metadata_degrades_to_sentinels(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "ok.txt").write_bytes(b"12")
            (root / "broken.txt").write_bytes(b"1234")

            real_scandir = os.scandir

            class _BrokenStatEntry:
                def __init__(self, inner) -> None:
                    self._inner = inner
                    self.name = inner.name
                    self.path = inner.path

                def is_dir(self, follow_symlinks: bool = True) -> bool:
                    return self._inner.is_dir(follow_symlinks=follow_symlinks)

                def stat(self, follow_symlinks: bool = True):
                    if self.name == "broken.txt":
                        raise OSError(5, "I/O error")
                    return self._inner.stat(follow_symlinks=follow_symlinks)

            class _Scanner:
                def __init__(self, path) -> None:
                    self._scan = real_scandir(path)

                def __enter__(self):
                    return (_BrokenStatEntry(child) for child in self._scan)

                def __exit__(self, *exc_info) -> None:
                    self._scan.close()

            with mock.patch("shellfm.listing.os.scandir", side_effect=_Scanner):
                entries = {entry.name: entry for entry in read_directory(root)}

        self.assertEqual(entries["ok.txt"].size, 2)
        self.assertIsNone(entries["broken.txt"].size)
        self.assertIsNone(entries["broken.txt"].modified_ns)
        self.assertFalse(entries["broken.txt"].is_dir)

    def test_symlink_to_directory_is_listed_as_directory(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "real").mkdir()
            try:
                (root / "link").symlink_to(root / "real", target_is_directory=True)
            except (OSError, NotImplementedError):
                self.skipTest("symlinks unavailable")

            entries = {entry.name: entry for entry in read_directory(root)}

        self.assertTrue(entries["link"].is_dir)


class LoadDirectoryTests(unittest.TestCase):
    def test_success_packages_entries_with_request(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "a").write_text("", encoding="utf-8")
            request = LoadDirectory(request_id=7, path=root, return_name="x")

            result = load_directory(request)

        self.assertIs(result.request, request)
        self.assertIsNone(result.error)
        self.assertEqual([entry.name for entry in result.entries], ["a"])

    def test_failure_is_returned_not_raised(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            request = LoadDirectory(request_id=1, path=Path(tmp) / "gone")

            result = load_directory(request)

        self.assertEqual(result.entries, ())
        self.assertIsInstance(result.error, ListingError)
        self.assertIs(result.error.kind, ListingErrorKind.NOT_FOUND)


if __name__ == "__main__":
    unittest.main()
