"""Domain datatypes shared by the workspace core.

``FileEntry`` snapshots come from the directory lister and are never mutated.
``PaneState`` is the mutable per-pane record owned by the workspace.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Literal

NO_SELECTION = -1

SortCriterion = Literal["name", "size", "mtime", "extension"]
SortDirection = Literal["asc", "desc"]
LayoutMode = Literal["tile", "one-row", "one-column", "fullscreen"]
SizeRank = Literal["equal", "smallest", "largest"] | None
TimeRank = Literal["equal", "earliest", "latest"] | None

Timestamp = int | float | str | datetime


@dataclass(frozen=True)
class FileEntry:
    """Immutable metadata for one directory listing row."""

    name: str
    absolute_path: str
    is_directory: bool = False
    size_bytes: int = 0
    modified_at_epoch_ms: Timestamp = 0
    extension: str = ""


@dataclass(frozen=True)
class LayoutRect:
    """Pixel rectangle assigned to one pane."""

    x: int
    y: int
    width: int
    height: int

    @property
    def area(self) -> int:
        return self.width * self.height


@dataclass
class PaneState:
    """Navigation, sort, and mark state for one pane."""

    pane_id: int
    current_path: str
    files: list[FileEntry] = field(default_factory=list)
    cursor_index: int = 0
    scroll_offset: int = 0
    sort_criterion: SortCriterion = "name"
    sort_direction: SortDirection = "asc"
    directories_first: bool = True
    marked_filenames: set[str] = field(default_factory=set)

    def has_cursor(self) -> bool:
        """Return whether the cursor points at a listed entry."""
        return 0 <= self.cursor_index < len(self.files)

    def cursor_entry(self) -> FileEntry | None:
        if not self.has_cursor():
            return None
        return self.files[self.cursor_index]

    def filenames(self) -> list[str]:
        return [entry.name for entry in self.files]

    def index_of(self, filename: str) -> int:
        """Return the first index listing ``filename`` or ``NO_SELECTION``."""
        for idx, entry in enumerate(self.files):
            if entry.name == filename:
                return idx
        return NO_SELECTION


@dataclass(frozen=True)
class CompareState:
    """Cross-pane record for one filename present in two or more panes.

    All tuples are parallel to ``member_pane_indices``.
    """

    member_pane_indices: tuple[int, ...]
    sizes_by_member: tuple[int, ...]
    mod_times_by_member: tuple[Timestamp, ...]

    def member_position(self, pane_index: int) -> int | None:
        try:
            return self.member_pane_indices.index(pane_index)
        except ValueError:
            return None


@dataclass(frozen=True)
class EnhancedCompareState(CompareState):
    """Compare state plus per-member size and time classification."""

    size_rank: tuple[SizeRank, ...] = ()
    time_rank: tuple[TimeRank, ...] = ()


__all__ = [
    "NO_SELECTION",
    "SortCriterion",
    "SortDirection",
    "LayoutMode",
    "SizeRank",
    "TimeRank",
    "Timestamp",
    "FileEntry",
    "LayoutRect",
    "PaneState",
    "CompareState",
    "EnhancedCompareState",
]
