"""Plain-text rendering of a workspace onto a character canvas.

Each pane is rendered into its layout rectangle as fixed-width rows; rows of
side-by-side panes are then concatenated left to right. Rendering is
presentation-only and never mutates workspace state.
"""

from __future__ import annotations

from .comparison import EnhancedComparisonIndex
from .model import LayoutRect, PaneState
from .sorting import direction_symbol, format_size, sort_label

ANSI_RESET = "\033[0m"
ANSI_HEADER = "\033[1;38;5;81m"
ANSI_CURSOR = "\033[7m"
ANSI_DIRECTORY = "\033[38;5;81m"
ANSI_MARKED = "\033[38;5;229m"

SIZE_RANK_MARKERS = {"equal": "=", "smallest": "-", "largest": "+"}
TIME_RANK_MARKERS = {"equal": "=", "earliest": "<", "latest": ">"}
SHARED_MARKER = "~"


def fit(text: str, width: int) -> str:
    """Clip or pad ``text`` to exactly ``width`` characters."""
    if width <= 0:
        return ""
    if len(text) > width:
        if width == 1:
            return text[:1]
        return text[: width - 1] + "…"
    return text.ljust(width)


def visible_start(cursor: int, scroll_offset: int, rows: int, total: int) -> int:
    """Return the first visible row index so that ``cursor`` is in view."""
    if rows <= 0 or total <= rows:
        return 0
    start = max(0, min(scroll_offset, total - rows))
    if cursor < 0:
        return start
    if cursor < start:
        return cursor
    if cursor >= start + rows:
        return cursor - rows + 1
    return start


def compare_marker(
    index: EnhancedComparisonIndex | None,
    mode: str,
    pane_index: int,
    filename: str,
) -> str:
    """Return the one-character comparison marker for a pane row."""
    if index is None or mode == "off":
        return " "
    if index.get(pane_index, filename) is None:
        return " "
    size_rank, time_rank = index.ranks_for(pane_index, filename)
    if mode == "size":
        return SIZE_RANK_MARKERS.get(size_rank or "", SHARED_MARKER)
    if mode == "time":
        return TIME_RANK_MARKERS.get(time_rank or "", SHARED_MARKER)
    return SHARED_MARKER


def pane_header(pane: PaneState, focused: bool, linked: bool, filter_pattern: str = "") -> str:
    flags = "linked " if linked else ""
    if filter_pattern:
        flags += f"/{filter_pattern} "
    sort_tag = f"[{flags}{sort_label(pane.sort_criterion)} {direction_symbol(pane.sort_direction)}]"
    prefix = "▶ " if focused else "  "
    return f"{prefix}{pane.current_path} {sort_tag}"


def render_pane(
    pane: PaneState,
    pane_index: int,
    rect: LayoutRect,
    *,
    focused: bool = False,
    linked: bool = False,
    index: EnhancedComparisonIndex | None = None,
    compare_mode: str = "off",
    filter_pattern: str = "",
    color: bool = False,
) -> list[str]:
    """Render one pane into ``rect.height`` rows of ``rect.width`` characters."""
    if rect.width <= 0 or rect.height <= 0:
        return []
    # Column 0 of every pane after the first is a separator.
    separator = "│" if rect.x > 0 else ""
    width = rect.width - len(separator)

    header = fit(pane_header(pane, focused, linked, filter_pattern), width)
    if color:
        header = f"{ANSI_HEADER}{header}{ANSI_RESET}"
    rows = [separator + header]

    body_rows = rect.height - 1
    start = visible_start(pane.cursor_index, pane.scroll_offset, body_rows, len(pane.files))
    for idx in range(start, min(len(pane.files), start + body_rows)):
        entry = pane.files[idx]
        cursor_mark = ">" if idx == pane.cursor_index else " "
        mark = "*" if entry.name in pane.marked_filenames else " "
        marker = compare_marker(index, compare_mode, pane_index, entry.name)
        label = entry.name + "/" if entry.is_directory else entry.name
        size = "" if entry.is_directory else format_size(entry.size_bytes)
        prefix = f"{cursor_mark}{mark}{marker} "
        name_width = max(0, width - len(prefix) - len(size) - 1)
        text = fit(f"{prefix}{fit(label, name_width)} {size}", width)
        if color:
            if idx == pane.cursor_index and focused:
                text = f"{ANSI_CURSOR}{text}{ANSI_RESET}"
            elif entry.name in pane.marked_filenames:
                text = f"{ANSI_MARKED}{text}{ANSI_RESET}"
            elif entry.is_directory:
                text = f"{ANSI_DIRECTORY}{text}{ANSI_RESET}"
        rows.append(separator + text)

    blank = separator + " " * width
    while len(rows) < rect.height:
        rows.append(blank)
    return rows


def render_workspace(workspace, width: int, height: int, color: bool = False) -> list[str]:
    """Render every visible pane of ``workspace`` and a one-line status bar.

    ``height`` includes the status bar row. In fullscreen mode only the
    focused pane is drawn since every rectangle covers the whole canvas.
    """
    if width <= 0 or height <= 0:
        return []
    rects = workspace.layout(width, height - 1)
    index = workspace.comparison_index()
    linked = workspace.linked_indicator_visible()

    visible = list(enumerate(zip(workspace.panes, rects)))
    if workspace.layout_mode == "fullscreen":
        visible = [visible[workspace.focus_index]]

    segments: dict[int, list[tuple[int, str]]] = {}
    for pane_index, (pane, rect) in visible:
        pane_rows = render_pane(
            pane,
            pane_index,
            rect,
            focused=pane_index == workspace.focus_index,
            linked=linked,
            index=index,
            compare_mode=workspace.comparison_mode,
            filter_pattern=workspace.filter_pattern(pane_index),
            color=color,
        )
        for offset, text in enumerate(pane_rows):
            segments.setdefault(rect.y + offset, []).append((rect.x, text))

    lines = []
    for row in range(height - 1):
        parts = sorted(segments.get(row, []))
        lines.append("".join(text for _, text in parts))
    lines.append(fit(status_line(workspace), width))
    return lines


def status_line(workspace) -> str:
    pane = workspace.focused_pane
    parts = [
        f"pane {workspace.focus_index + 1}/{len(workspace.panes)}",
        f"layout: {workspace.layout_mode}",
        f"compare: {workspace.comparison_mode}",
    ]
    if workspace.linked_indicator_visible():
        parts.append("linked")
    if pane.marked_filenames:
        parts.append(f"{len(pane.marked_filenames)} marked")
    return " | ".join(parts)


def render_key_help(sections: list[tuple[str, list[tuple[str, str]]]], color: bool = False) -> str:
    """Format registry help sections as aligned text."""
    out: list[str] = []
    for label, rows in sections:
        out.append(f"{ANSI_HEADER}{label}{ANSI_RESET}" if color else label)
        combo_width = max((len(combo) for combo, _ in rows), default=0)
        for combo, description in rows:
            key_text = combo.ljust(combo_width)
            if color:
                key_text = f"{ANSI_MARKED}{key_text}{ANSI_RESET}"
            out.append(f"  {key_text}  {description}")
        out.append("")
    return "\n".join(out)
