"""Pane layout geometry tests.

Covers exact tiling for split layouts and degenerate container handling.
"""

from __future__ import annotations

import unittest

from multipane.layout import (
    LayoutConfigError,
    calculate_layout,
    next_layout_mode,
    parse_layout_mode,
    rects_overlap,
    total_area,
)
from multipane.model import LayoutRect


class LayoutGeometryTests(unittest.TestCase):
    def test_tile_puts_first_pane_left_and_stacks_the_rest_on_the_right(self) -> None:
        rects = calculate_layout(100, 50, 3, "tile")

        self.assertEqual(
            rects,
            [
                LayoutRect(0, 0, 50, 50),
                LayoutRect(50, 0, 50, 25),
                LayoutRect(50, 25, 50, 25),
            ],
        )

    def test_tile_gives_rounding_remainder_to_right_column_and_last_row(self) -> None:
        rects = calculate_layout(101, 51, 3, "tile")

        self.assertEqual(rects[0], LayoutRect(0, 0, 50, 51))
        self.assertEqual(rects[1], LayoutRect(50, 0, 51, 25))
        self.assertEqual(rects[2], LayoutRect(50, 25, 51, 26))

    def test_one_row_and_one_column_split_evenly_with_last_absorbing_remainder(self) -> None:
        self.assertEqual(
            calculate_layout(10, 4, 3, "one-row"),
            [LayoutRect(0, 0, 3, 4), LayoutRect(3, 0, 3, 4), LayoutRect(6, 0, 4, 4)],
        )
        self.assertEqual(
            calculate_layout(8, 7, 2, "one-column"),
            [LayoutRect(0, 0, 8, 3), LayoutRect(0, 3, 8, 4)],
        )

    def test_split_layouts_tile_the_container_exactly(self) -> None:
        for mode in ("tile", "one-row", "one-column"):
            for width in (1, 7, 80, 101):
                for height in (1, 5, 24, 51):
                    for pane_count in range(1, 6):
                        with self.subTest(mode=mode, width=width, height=height, panes=pane_count):
                            rects = calculate_layout(width, height, pane_count, mode)
                            self.assertEqual(len(rects), pane_count)
                            self.assertEqual(total_area(rects), width * height)
                            visible = [rect for rect in rects if rect.area > 0]
                            for i, a in enumerate(visible):
                                for b in visible[i + 1 :]:
                                    self.assertFalse(rects_overlap(a, b))

    def test_fullscreen_gives_every_pane_the_whole_container(self) -> None:
        rects = calculate_layout(80, 24, 3, "fullscreen")

        self.assertEqual(rects, [LayoutRect(0, 0, 80, 24)] * 3)

    def test_degenerate_input_never_raises(self) -> None:
        self.assertEqual(calculate_layout(80, 24, 0, "tile"), [])
        self.assertEqual(calculate_layout(0, 24, 2, "tile"), [LayoutRect(0, 0, 0, 0)] * 2)
        self.assertEqual(calculate_layout(80, -1, 1, "one-row"), [LayoutRect(0, 0, 0, 0)])

    def test_single_pane_fills_container_in_every_mode(self) -> None:
        for mode in ("tile", "one-row", "one-column", "fullscreen"):
            self.assertEqual(calculate_layout(30, 10, 1, mode), [LayoutRect(0, 0, 30, 10)])

    def test_unknown_mode_falls_back_to_tile(self) -> None:
        self.assertEqual(calculate_layout(100, 50, 3, "spiral"), calculate_layout(100, 50, 3, "tile"))


class LayoutModeParsingTests(unittest.TestCase):
    def test_parse_accepts_canonical_names_and_aliases(self) -> None:
        self.assertEqual(parse_layout_mode("tile"), "tile")
        self.assertEqual(parse_layout_mode("OneRow"), "one-row")
        self.assertEqual(parse_layout_mode(" OneColumn "), "one-column")
        self.assertEqual(parse_layout_mode("Fullscreen"), "fullscreen")

    def test_parse_rejects_unknown_mode_with_value_error_subclass(self) -> None:
        with self.assertRaises(LayoutConfigError) as ctx:
            parse_layout_mode("grid")
        self.assertIsInstance(ctx.exception, ValueError)
        self.assertIn("grid", str(ctx.exception))

    def test_next_layout_mode_cycles_through_all_modes(self) -> None:
        mode = "tile"
        seen = []
        for _ in range(4):
            mode = next_layout_mode(mode)
            seen.append(mode)
        self.assertEqual(seen, ["one-row", "one-column", "fullscreen", "tile"])


if __name__ == "__main__":
    unittest.main()
