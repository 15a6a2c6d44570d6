"""Filename filter and search history tests."""

from __future__ import annotations

import unittest

from multipane.model import FileEntry
from multipane.search import SearchHistory, filter_files, fuzzy_match, score_match


def _files(*names: str) -> list[FileEntry]:
    return [FileEntry(name=name, absolute_path=f"/p/{name}") for name in names]


class FilterTests(unittest.TestCase):
    def test_substring_match_is_case_insensitive_by_default(self) -> None:
        self.assertTrue(fuzzy_match("READ", "readme.md"))
        self.assertFalse(fuzzy_match("READ", "readme.md", case_sensitive=True))
        self.assertTrue(fuzzy_match("", "anything"))

    def test_filter_trims_pattern_and_keeps_order(self) -> None:
        files = _files("main.py", "README.md", "domain.txt")

        self.assertEqual([entry.name for entry in filter_files(files, "  MAIN ")], ["main.py", "domain.txt"])
        self.assertEqual(filter_files(files, "   "), files)

    def test_score_ranks_exact_prefix_and_substring(self) -> None:
        self.assertEqual(score_match("main", "MAIN"), 1.0)
        self.assertEqual(score_match("ma", "main.py"), 0.9)
        self.assertEqual(score_match("in", "main.py"), 0.5)
        self.assertEqual(score_match("zz", "main.py"), 0.0)


class SearchHistoryTests(unittest.TestCase):
    def test_history_is_most_recent_first_deduplicated_and_capped(self) -> None:
        history = SearchHistory(max_entries=3, clock=lambda: 0)
        for pattern in ("a", "b", "a", "c", "d", " "):
            history.add(pattern)

        self.assertEqual(history.patterns(), ["d", "c", "a"])
        self.assertEqual(history.patterns(limit=1), ["d"])
        history.clear()
        self.assertEqual(history.entries(), [])


if __name__ == "__main__":
    unittest.main()
