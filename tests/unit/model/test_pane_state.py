from __future__ import annotations

import unittest

from multipane.model import NO_SELECTION, CompareState, FileEntry, LayoutRect, PaneState


class PaneStateTests(unittest.TestCase):
    def test_cursor_helpers_respect_the_no_selection_sentinel(self) -> None:
        pane = PaneState(
            pane_id=0,
            current_path="/p",
            files=[FileEntry("a", "/p/a"), FileEntry("b", "/p/b")],
            cursor_index=NO_SELECTION,
        )

        self.assertFalse(pane.has_cursor())
        self.assertIsNone(pane.cursor_entry())
        pane.cursor_index = 1
        self.assertEqual(pane.cursor_entry().name, "b")
        self.assertEqual(pane.filenames(), ["a", "b"])
        self.assertEqual(pane.index_of("b"), 1)
        self.assertEqual(pane.index_of("zzz"), NO_SELECTION)

    def test_marks_default_to_a_fresh_set_per_pane(self) -> None:
        first = PaneState(pane_id=0, current_path="/a")
        second = PaneState(pane_id=1, current_path="/b")
        first.marked_filenames.add("x")

        self.assertEqual(second.marked_filenames, set())

    def test_rect_area_and_member_position(self) -> None:
        self.assertEqual(LayoutRect(0, 0, 4, 3).area, 12)
        state = CompareState((0, 2), (1, 2), (0, 0))
        self.assertEqual(state.member_position(2), 1)
        self.assertIsNone(state.member_position(1))


if __name__ == "__main__":
    unittest.main()
