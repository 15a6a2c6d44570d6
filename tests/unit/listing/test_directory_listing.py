"""Filesystem lister tests using temporary directories."""

from __future__ import annotations

import os
import tempfile
import unittest
from pathlib import Path

from multipane.listing import entry_extension, list_directory, make_lister


class DirectoryListingTests(unittest.TestCase):
    def test_lists_files_and_directories_with_metadata(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "notes.txt").write_text("hello", encoding="utf-8")
            (root / "src").mkdir()
            os.utime(root / "notes.txt", (1_700_000_000, 1_700_000_000))

            entries = {entry.name: entry for entry in list_directory(tmp)}

            self.assertEqual(set(entries), {"notes.txt", "src"})
            notes = entries["notes.txt"]
            self.assertFalse(notes.is_directory)
            self.assertEqual(notes.size_bytes, 5)
            self.assertEqual(notes.extension, ".txt")
            self.assertEqual(notes.modified_at_epoch_ms, 1_700_000_000_000)
            self.assertEqual(notes.absolute_path, os.path.abspath(os.path.join(tmp, "notes.txt")))
            self.assertTrue(entries["src"].is_directory)
            self.assertEqual(entries["src"].size_bytes, 0)
            self.assertEqual(entries["src"].extension, "")

    def test_hidden_entries_need_opt_in(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            Path(tmp, ".env").write_text("x", encoding="utf-8")

            self.assertEqual(list_directory(tmp), [])
            self.assertEqual([entry.name for entry in make_lister(show_hidden=True)(tmp)], [".env"])

    def test_missing_directory_lists_as_empty(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            missing = os.path.join(tmp, "gone")

            with self.assertLogs("multipane.listing", level="DEBUG"):
                self.assertEqual(list_directory(missing), [])

    def test_entry_extension(self) -> None:
        self.assertEqual(entry_extension("archive.tar.gz", False), ".gz")
        self.assertEqual(entry_extension(".bashrc", False), "")
        self.assertEqual(entry_extension("pkg.d", True), "")


if __name__ == "__main__":
    unittest.main()
