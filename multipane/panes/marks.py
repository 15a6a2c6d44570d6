"""Per-pane mark-set operations.

Marks are keyed by filename so they survive re-sorting the same listing.
"""

from __future__ import annotations

from ..model import FileEntry, PaneState


def toggle_mark(pane: PaneState, filename: str) -> bool:
    """Flip membership of ``filename`` and return whether it is now marked."""
    if filename in pane.marked_filenames:
        pane.marked_filenames.discard(filename)
        return False
    pane.marked_filenames.add(filename)
    return True


def mark_all(pane: PaneState) -> None:
    pane.marked_filenames = set(pane.filenames())


def invert_marks(pane: PaneState) -> None:
    """Replace marks with their complement within the current listing.

    Marks for names no longer listed are dropped.
    """
    pane.marked_filenames = set(pane.filenames()) - pane.marked_filenames


def clear_marks(pane: PaneState) -> None:
    pane.marked_filenames = set()


def toggle_mark_and_advance(pane: PaneState) -> bool:
    """Toggle the cursor row, then move down unless already on the last row.

    Returns ``False`` when the pane has no cursor row to toggle.
    """
    entry = pane.cursor_entry()
    if entry is None:
        return False
    toggle_mark(pane, entry.name)
    if pane.cursor_index < len(pane.files) - 1:
        pane.cursor_index += 1
    return True


def marked_entries(pane: PaneState) -> list[FileEntry]:
    """Return listed entries whose filename is marked, in listing order."""
    return [entry for entry in pane.files if entry.name in pane.marked_filenames]


def operation_targets(pane: PaneState) -> list[FileEntry]:
    """Return marked entries, or the cursor entry when nothing is marked."""
    marked = marked_entries(pane)
    if marked:
        return marked
    entry = pane.cursor_entry()
    return [entry] if entry is not None else []
