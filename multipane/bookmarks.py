"""Named directory bookmarks.

The manager holds bookmarks in memory and reports every mutation through an
``on_change`` callback, which the CLI wires to config persistence.
"""

from __future__ import annotations

import time
import uuid
from collections.abc import Callable, Iterable
from dataclasses import dataclass, replace


@dataclass(frozen=True)
class Bookmark:
    id: str
    path: str
    label: str
    created_ms: int


def _new_bookmark_id() -> str:
    return f"bm-{uuid.uuid4().hex[:12]}"


class BookmarkManager:
    """Ordered bookmark list with add/remove/relabel operations."""

    def __init__(
        self,
        bookmarks: Iterable[Bookmark] | None = None,
        on_change: Callable[[list[Bookmark]], None] | None = None,
        id_factory: Callable[[], str] = _new_bookmark_id,
        clock: Callable[[], int] = lambda: int(time.time() * 1000),
    ) -> None:
        self._bookmarks = list(bookmarks or ())
        self._on_change = on_change
        self._id_factory = id_factory
        self._clock = clock

    def _changed(self) -> None:
        if self._on_change is not None:
            self._on_change(self.all_bookmarks())

    def add_bookmark(self, path: str, label: str) -> Bookmark:
        bookmark = Bookmark(id=self._id_factory(), path=path, label=label, created_ms=self._clock())
        self._bookmarks.append(bookmark)
        self._changed()
        return bookmark

    def remove_bookmark(self, bookmark_id: str) -> bool:
        for idx, bookmark in enumerate(self._bookmarks):
            if bookmark.id == bookmark_id:
                del self._bookmarks[idx]
                self._changed()
                return True
        return False

    def update_bookmark(self, bookmark_id: str, label: str) -> bool:
        for idx, bookmark in enumerate(self._bookmarks):
            if bookmark.id == bookmark_id:
                self._bookmarks[idx] = replace(bookmark, label=label)
                self._changed()
                return True
        return False

    def all_bookmarks(self) -> list[Bookmark]:
        return list(self._bookmarks)

    def is_bookmarked(self, path: str) -> bool:
        return any(bookmark.path == path for bookmark in self._bookmarks)

    def clear(self) -> None:
        self._bookmarks = []
        self._changed()
