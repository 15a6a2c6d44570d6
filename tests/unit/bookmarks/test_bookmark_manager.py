"""Bookmark manager tests."""

from __future__ import annotations

import itertools
import unittest

from multipane.bookmarks import BookmarkManager


def _manager(changes: list) -> BookmarkManager:
    counter = itertools.count(1)
    return BookmarkManager(
        on_change=changes.append,
        id_factory=lambda: f"bm-{next(counter)}",
        clock=lambda: 1_000,
    )


class BookmarkManagerTests(unittest.TestCase):
    def test_add_update_remove_notify_listener(self) -> None:
        changes: list = []
        manager = _manager(changes)

        bookmark = manager.add_bookmark("/srv", "Server")
        self.assertEqual((bookmark.id, bookmark.created_ms), ("bm-1", 1_000))
        self.assertTrue(manager.update_bookmark("bm-1", "Web"))
        self.assertEqual(manager.all_bookmarks()[0].label, "Web")
        self.assertTrue(manager.remove_bookmark("bm-1"))

        self.assertEqual([len(items) for items in changes], [1, 1, 0])

    def test_unknown_ids_report_false_without_notifying(self) -> None:
        changes: list = []
        manager = _manager(changes)

        self.assertFalse(manager.remove_bookmark("missing"))
        self.assertFalse(manager.update_bookmark("missing", "x"))
        self.assertEqual(changes, [])

    def test_is_bookmarked_and_clear(self) -> None:
        changes: list = []
        manager = _manager(changes)
        manager.add_bookmark("/a", "A")

        self.assertTrue(manager.is_bookmarked("/a"))
        self.assertFalse(manager.is_bookmarked("/b"))
        manager.clear()
        self.assertEqual(manager.all_bookmarks(), [])


if __name__ == "__main__":
    unittest.main()
