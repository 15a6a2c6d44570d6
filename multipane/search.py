"""Filename filtering, match scoring, and search-pattern history."""

from __future__ import annotations

import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from .model import FileEntry

MAX_SEARCH_HISTORY = 20


def fuzzy_match(pattern: str, target: str, case_sensitive: bool = False) -> bool:
    """Return whether ``pattern`` occurs in ``target``; empty patterns match."""
    if not pattern:
        return True
    if case_sensitive:
        return pattern in target
    return pattern.lower() in target.lower()


def filter_files(files: Sequence[FileEntry], pattern: str, case_sensitive: bool = False) -> list[FileEntry]:
    """Return entries whose name contains the trimmed ``pattern``."""
    needle = pattern.strip()
    if not needle:
        return list(files)
    return [entry for entry in files if fuzzy_match(needle, entry.name, case_sensitive)]


def score_match(pattern: str, target: str) -> float:
    """Rank a match: 1.0 exact, 0.9 prefix, 0.5 substring, 0.0 otherwise."""
    p = pattern.lower()
    t = target.lower()
    if t == p:
        return 1.0
    if t.startswith(p):
        return 0.9
    if p in t:
        return 0.5
    return 0.0


@dataclass(frozen=True)
class SearchHistoryEntry:
    pattern: str
    timestamp_ms: int
    options: dict[str, object] = field(default_factory=dict)


class SearchHistory:
    """Most-recent-first search patterns, deduplicated by pattern."""

    def __init__(
        self,
        max_entries: int = MAX_SEARCH_HISTORY,
        clock: Callable[[], int] = lambda: int(time.time() * 1000),
    ) -> None:
        self.max_entries = max(1, max_entries)
        self._clock = clock
        self._entries: list[SearchHistoryEntry] = []

    def add(self, pattern: str, options: dict[str, object] | None = None) -> None:
        if not pattern.strip():
            return
        entries = [entry for entry in self._entries if entry.pattern != pattern]
        entries.insert(0, SearchHistoryEntry(pattern, self._clock(), dict(options or {})))
        self._entries = entries[: self.max_entries]

    def entries(self) -> list[SearchHistoryEntry]:
        return list(self._entries)

    def patterns(self, limit: int = 10) -> list[str]:
        return [entry.pattern for entry in self._entries[:limit]]

    def clear(self) -> None:
        self._entries = []
