"""Pane layout geometry.

Maps a container size, a pane count, and a layout mode to one rectangle per
pane. Every function here is pure and total: degenerate input produces empty
or zero-sized rectangles instead of raising, so the renderer can call it on
every resize without guarding.

Split layouts hand the rounding remainder to the last segment, which keeps the
rectangles tiling the container exactly.
"""

from __future__ import annotations

from .model import LayoutMode, LayoutRect

LAYOUT_MODES: tuple[LayoutMode, ...] = ("tile", "one-row", "one-column", "fullscreen")

_MODE_ALIASES: dict[str, LayoutMode] = {
    "tile": "tile",
    "onerow": "one-row",
    "one-row": "one-row",
    "one_row": "one-row",
    "onecolumn": "one-column",
    "one-column": "one-column",
    "one_column": "one-column",
    "fullscreen": "fullscreen",
}


class LayoutConfigError(ValueError):
    """Raised when a configured layout mode is not recognized."""


def normalize_layout_mode(value: str) -> LayoutMode | None:
    """Return canonical layout mode for ``value`` or ``None`` if unknown."""
    return _MODE_ALIASES.get(str(value).strip().lower())


def parse_layout_mode(value: str) -> LayoutMode:
    """Validate a configured layout mode, raising ``LayoutConfigError``."""
    mode = normalize_layout_mode(value)
    if mode is None:
        raise LayoutConfigError(
            f"unknown layout mode {value!r}; expected one of: {', '.join(LAYOUT_MODES)}"
        )
    return mode


def next_layout_mode(mode: str) -> LayoutMode:
    """Return the mode after ``mode`` in the layout cycle."""
    current = normalize_layout_mode(mode) or "tile"
    idx = LAYOUT_MODES.index(current)
    return LAYOUT_MODES[(idx + 1) % len(LAYOUT_MODES)]


def _split(total: int, count: int) -> list[tuple[int, int]]:
    """Return ``(offset, length)`` segments; the last absorbs the remainder."""
    segment = total // count
    segments: list[tuple[int, int]] = []
    for idx in range(count):
        offset = idx * segment
        length = total - offset if idx == count - 1 else segment
        segments.append((offset, length))
    return segments


def _tile(width: int, height: int, pane_count: int) -> list[LayoutRect]:
    half_width = width // 2
    right_width = width - half_width
    rects = [LayoutRect(0, 0, half_width, height)]
    for y, h in _split(height, pane_count - 1):
        rects.append(LayoutRect(half_width, y, right_width, h))
    return rects


def _one_row(width: int, height: int, pane_count: int) -> list[LayoutRect]:
    return [LayoutRect(x, 0, w, height) for x, w in _split(width, pane_count)]


def _one_column(width: int, height: int, pane_count: int) -> list[LayoutRect]:
    return [LayoutRect(0, y, width, h) for y, h in _split(height, pane_count)]


def _fullscreen(width: int, height: int, pane_count: int) -> list[LayoutRect]:
    return [LayoutRect(0, 0, width, height) for _ in range(pane_count)]


_LAYOUT_BUILDERS = {
    "tile": _tile,
    "one-row": _one_row,
    "one-column": _one_column,
    "fullscreen": _fullscreen,
}


def calculate_layout(width: int, height: int, pane_count: int, mode: str) -> list[LayoutRect]:
    """Return one rectangle per pane for the requested layout mode.

    ``pane_count < 1`` yields ``[]`` and a non-positive container yields
    ``pane_count`` zero-sized rectangles. Unknown modes fall back to tile.
    In fullscreen mode every pane receives the whole container; the caller
    renders only the focused one.
    """
    if pane_count < 1:
        return []
    if width <= 0 or height <= 0:
        return [LayoutRect(0, 0, 0, 0) for _ in range(pane_count)]
    if pane_count == 1:
        return [LayoutRect(0, 0, width, height)]
    builder = _LAYOUT_BUILDERS[normalize_layout_mode(mode) or "tile"]
    return builder(width, height, pane_count)


def total_area(rects: list[LayoutRect]) -> int:
    """Return summed rectangle area."""
    return sum(rect.area for rect in rects)


def rects_overlap(a: LayoutRect, b: LayoutRect) -> bool:
    """Return whether two rectangles share any interior area."""
    if a.x + a.width <= b.x or b.x + b.width <= a.x:
        return False
    if a.y + a.height <= b.y or b.y + b.height <= a.y:
        return False
    return True
