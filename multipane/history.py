"""Per-pane directory history: cursor memory, recent directories, back/forward.

Three independent structures are kept per pane:
- visit records keyed by path, used to restore the cursor on revisit
- a most-recently-used list of recent directories (for "recent locations")
- a browser-style back/forward stack that only moves on explicit navigation

This module has no I/O; ``to_dict``/``from_dict`` let a persistence
collaborator store it.
"""

from __future__ import annotations

import posixpath
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Protocol

MAX_RECENT_DIRECTORIES = 20
MAX_NAVIGATION_HISTORY = 256


class _NamedEntry(Protocol):
    name: str
    is_directory: bool


@dataclass(frozen=True)
class DirectoryVisit:
    """Cursor state captured when a pane leaves a directory."""

    filename_at_cursor: str
    cursor_index: int
    scroll_offset: int
    timestamp_ms: int


@dataclass(frozen=True)
class RecentDirectory:
    path: str
    last_visit_ms: int


@dataclass(frozen=True)
class RestoredCursor:
    cursor: int
    scroll_offset: int


def _wall_clock_ms() -> int:
    return int(time.time() * 1000)


class NavigationStack:
    """Bounded back/forward stacks for directory jumps.

    Adjacent duplicate paths are suppressed to avoid no-op navigation steps.
    """

    def __init__(self, max_entries: int = MAX_NAVIGATION_HISTORY) -> None:
        self.max_entries = max(1, max_entries)
        self.back: list[str] = []
        self.forward: list[str] = []

    def _append_unique(self, stack: list[str], path: str) -> None:
        if stack and stack[-1] == path:
            return
        stack.append(path)
        overflow = len(stack) - self.max_entries
        if overflow > 0:
            del stack[:overflow]

    def record(self, origin: str) -> None:
        """Push a new origin onto the back stack and drop the forward branch."""
        self._append_unique(self.back, origin)
        self.forward.clear()

    def go_back(self, current: str) -> str | None:
        """Pop the next back target and push ``current`` onto the forward stack."""
        while self.back and self.back[-1] == current:
            self.back.pop()
        if not self.back:
            return None
        target = self.back.pop()
        self._append_unique(self.forward, current)
        return target

    def go_forward(self, current: str) -> str | None:
        """Pop the next forward target and push ``current`` onto the back stack."""
        while self.forward and self.forward[-1] == current:
            self.forward.pop()
        if not self.forward:
            return None
        target = self.forward.pop()
        self._append_unique(self.back, current)
        return target


class DirectoryHistory:
    """Cursor memory and navigation history for every pane of one workspace."""

    def __init__(
        self,
        max_recent: int = MAX_RECENT_DIRECTORIES,
        clock: Callable[[], int] = _wall_clock_ms,
    ) -> None:
        self.max_recent = max(1, max_recent)
        self._clock = clock
        self._visits: dict[int, dict[str, DirectoryVisit]] = {}
        self._recent: dict[int, list[RecentDirectory]] = {}
        self._stacks: dict[int, NavigationStack] = {}

    def save_cursor_position(
        self,
        pane_id: int,
        path: str,
        filename_at_cursor: str,
        cursor_index: int,
        scroll_offset: int = 0,
    ) -> None:
        """Overwrite the visit record for ``path`` and bump it in the recent list."""
        now = self._clock()
        self._visits.setdefault(pane_id, {})[path] = DirectoryVisit(
            filename_at_cursor=filename_at_cursor,
            cursor_index=cursor_index,
            scroll_offset=scroll_offset,
            timestamp_ms=now,
        )
        self._add_recent_directory(pane_id, path, now)

    def visit_for(self, pane_id: int, path: str) -> DirectoryVisit | None:
        return self._visits.get(pane_id, {}).get(path)

    def restore_cursor_position(
        self,
        pane_id: int,
        path: str,
        current_filenames: Sequence[str],
    ) -> RestoredCursor:
        """Return the cursor to use when ``pane_id`` re-enters ``path``.

        The stored filename is looked up in the current listing first, which
        survives insertions, deletions, and re-sorts. If it is gone, the stored
        index is clamped into the current listing. Unknown paths start at the
        top.
        """
        visit = self.visit_for(pane_id, path)
        if visit is None:
            return RestoredCursor(cursor=0, scroll_offset=0)
        try:
            return RestoredCursor(
                cursor=list(current_filenames).index(visit.filename_at_cursor),
                scroll_offset=visit.scroll_offset,
            )
        except ValueError:
            pass
        fallback = min(visit.cursor_index, len(current_filenames) - 1)
        return RestoredCursor(cursor=max(0, fallback), scroll_offset=visit.scroll_offset)

    @staticmethod
    def find_subdirectory_in_parent(child_path: str, parent_entries: Sequence[_NamedEntry]) -> int:
        """Return the index of ``child_path``'s directory row in its parent listing.

        Only directory rows match; a same-named file is skipped. Returns ``0``
        when nothing matches or ``child_path`` is the filesystem root.
        """
        child_name = posixpath.basename(posixpath.normpath(child_path)) if child_path else ""
        if not child_name or child_name in {"/", "."}:
            return 0
        for idx, entry in enumerate(parent_entries):
            if entry.is_directory and entry.name == child_name:
                return idx
        return 0

    def _add_recent_directory(self, pane_id: int, path: str, now: int) -> None:
        recents = [item for item in self._recent.get(pane_id, []) if item.path != path]
        recents.insert(0, RecentDirectory(path=path, last_visit_ms=now))
        self._recent[pane_id] = recents[: self.max_recent]

    def recent_directories(self, pane_id: int) -> list[RecentDirectory]:
        """Return recent directories for ``pane_id``, most recent first."""
        return list(self._recent.get(pane_id, []))

    def _stack(self, pane_id: int) -> NavigationStack:
        stack = self._stacks.get(pane_id)
        if stack is None:
            stack = NavigationStack()
            self._stacks[pane_id] = stack
        return stack

    def record_navigation(self, pane_id: int, origin_path: str) -> None:
        """Remember ``origin_path`` as the back target of a new navigation."""
        self._stack(pane_id).record(origin_path)

    def navigate_back(self, pane_id: int, current_path: str) -> str | None:
        return self._stack(pane_id).go_back(current_path)

    def navigate_forward(self, pane_id: int, current_path: str) -> str | None:
        return self._stack(pane_id).go_forward(current_path)

    def clear_history(self, pane_id: int) -> None:
        self._visits.pop(pane_id, None)
        self._recent.pop(pane_id, None)
        self._stacks.pop(pane_id, None)

    def to_dict(self) -> dict[str, object]:
        """Serialize visits and recent directories to JSON-compatible data.

        Back/forward stacks are session state and are not serialized.
        """
        visits: dict[str, dict[str, dict[str, object]]] = {}
        for pane_id, by_path in self._visits.items():
            visits[str(pane_id)] = {
                path: {
                    "filename": visit.filename_at_cursor,
                    "cursor": visit.cursor_index,
                    "scroll": visit.scroll_offset,
                    "timestamp": visit.timestamp_ms,
                }
                for path, visit in by_path.items()
            }
        recent = {
            str(pane_id): [{"path": item.path, "last_visit": item.last_visit_ms} for item in items]
            for pane_id, items in self._recent.items()
        }
        return {"visits": visits, "recent": recent}

    @classmethod
    def from_dict(
        cls,
        data: object,
        max_recent: int = MAX_RECENT_DIRECTORIES,
        clock: Callable[[], int] = _wall_clock_ms,
    ) -> DirectoryHistory:
        """Rebuild history from ``to_dict`` output, dropping malformed records."""
        history = cls(max_recent=max_recent, clock=clock)
        if not isinstance(data, dict):
            return history

        raw_visits = data.get("visits")
        if isinstance(raw_visits, dict):
            for raw_pane, by_path in raw_visits.items():
                pane_id = _coerce_pane_id(raw_pane)
                if pane_id is None or not isinstance(by_path, dict):
                    continue
                for path, raw_visit in by_path.items():
                    if not isinstance(path, str) or not isinstance(raw_visit, dict):
                        continue
                    filename = raw_visit.get("filename")
                    if not isinstance(filename, str):
                        continue
                    history._visits.setdefault(pane_id, {})[path] = DirectoryVisit(
                        filename_at_cursor=filename,
                        cursor_index=_coerce_nonnegative_int(raw_visit.get("cursor")),
                        scroll_offset=_coerce_nonnegative_int(raw_visit.get("scroll")),
                        timestamp_ms=_coerce_nonnegative_int(raw_visit.get("timestamp")),
                    )

        raw_recent = data.get("recent")
        if isinstance(raw_recent, dict):
            for raw_pane, items in raw_recent.items():
                pane_id = _coerce_pane_id(raw_pane)
                if pane_id is None or not isinstance(items, list):
                    continue
                recents: list[RecentDirectory] = []
                seen: set[str] = set()
                for item in items:
                    if not isinstance(item, dict):
                        continue
                    path = item.get("path")
                    if not isinstance(path, str) or not path or path in seen:
                        continue
                    seen.add(path)
                    recents.append(
                        RecentDirectory(path=path, last_visit_ms=_coerce_nonnegative_int(item.get("last_visit")))
                    )
                history._recent[pane_id] = recents[: history.max_recent]
        return history


def _coerce_pane_id(value: object) -> int | None:
    try:
        return int(str(value))
    except ValueError:
        return None


def _coerce_nonnegative_int(value: object) -> int:
    """Booleans and non-integers are treated as invalid and coerced to ``0``."""
    if isinstance(value, bool) or not isinstance(value, int):
        return 0
    return max(0, value)
