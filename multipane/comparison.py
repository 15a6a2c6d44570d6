"""Cross-pane comparison indexing.

The index groups listing rows by filename across panes. Only filenames that
appear in at least two panes are kept, and lookups are scoped to member panes
so an unrelated same-named file never borrows another pane's state.

The enhanced index additionally ranks each member's size and mtime against
the other members for comparison highlighting.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from .model import CompareState, EnhancedCompareState, FileEntry, SizeRank, Timestamp, TimeRank
from .sorting import timestamp_ms

COMPARISON_MODES = ("off", "name", "size", "time")
MTIME_TOLERANCE_MS = 1000.0


def next_comparison_mode(mode: str) -> str:
    """Return the comparison mode after ``mode`` (unknown modes turn off)."""
    if mode not in COMPARISON_MODES:
        return "off"
    idx = COMPARISON_MODES.index(mode)
    return COMPARISON_MODES[(idx + 1) % len(COMPARISON_MODES)]


@dataclass
class _Accumulator:
    panes: list[int] = field(default_factory=list)
    sizes: list[int] = field(default_factory=list)
    mtimes: list[Timestamp] = field(default_factory=list)


def _accumulate(pane_file_lists: Sequence[Sequence[FileEntry]]) -> dict[str, _Accumulator]:
    """Collect per-filename membership in pane order.

    A filename listed twice within one pane is recorded once (first row wins).
    """
    by_name: dict[str, _Accumulator] = {}
    for pane_index, files in enumerate(pane_file_lists):
        for entry in files:
            acc = by_name.get(entry.name)
            if acc is None:
                acc = _Accumulator()
                by_name[entry.name] = acc
            elif acc.panes and acc.panes[-1] == pane_index:
                continue
            acc.panes.append(pane_index)
            acc.sizes.append(entry.size_bytes)
            acc.mtimes.append(entry.modified_at_epoch_ms)
    return by_name


class ComparisonIndex:
    """Filename -> ``CompareState`` for names shared by two or more panes."""

    def __init__(self, states: dict[str, CompareState]) -> None:
        self._states = states

    def get(self, pane_index: int, filename: str) -> CompareState | None:
        """Return the state for ``filename`` only when ``pane_index`` is a member."""
        state = self._states.get(filename)
        if state is None or pane_index not in state.member_pane_indices:
            return None
        return state

    def shared_filenames(self) -> list[str]:
        return sorted(self._states)

    def __contains__(self, filename: object) -> bool:
        return filename in self._states

    def __len__(self) -> int:
        return len(self._states)


class EnhancedComparisonIndex(ComparisonIndex):
    """Comparison index whose states carry size and time ranks."""

    def ranks_for(self, pane_index: int, filename: str) -> tuple[SizeRank, TimeRank]:
        """Return ``(size_rank, time_rank)`` for one member, ``(None, None)`` otherwise."""
        state = self.get(pane_index, filename)
        if not isinstance(state, EnhancedCompareState):
            return None, None
        position = state.member_position(pane_index)
        if position is None:
            return None, None
        return state.size_rank[position], state.time_rank[position]


def build_comparison_index(pane_file_lists: Sequence[Sequence[FileEntry]]) -> ComparisonIndex:
    """Build the basic filename index in one pass over all entries."""
    states: dict[str, CompareState] = {}
    for name, acc in _accumulate(pane_file_lists).items():
        if len(acc.panes) < 2:
            continue
        states[name] = CompareState(tuple(acc.panes), tuple(acc.sizes), tuple(acc.mtimes))
    return ComparisonIndex(states)


def rank_sizes(sizes: Sequence[int]) -> tuple[SizeRank, ...]:
    """Classify each size as equal, smallest, largest, or ``None`` (in between)."""
    if len(sizes) < 2:
        return tuple(None for _ in sizes)
    smallest = min(sizes)
    largest = max(sizes)
    if smallest == largest:
        return tuple("equal" for _ in sizes)
    ranks: list[SizeRank] = []
    for size in sizes:
        if size == smallest:
            ranks.append("smallest")
        elif size == largest:
            ranks.append("largest")
        else:
            ranks.append(None)
    return tuple(ranks)


def rank_times(mtimes: Sequence[Timestamp], tolerance_ms: float = MTIME_TOLERANCE_MS) -> tuple[TimeRank, ...]:
    """Classify each mtime as equal, earliest, latest, or ``None``.

    A total spread below ``tolerance_ms`` counts as equal. Otherwise only the
    exact minimum is earliest and the exact maximum is latest.
    """
    if len(mtimes) < 2:
        return tuple(None for _ in mtimes)
    stamps = [timestamp_ms(value) for value in mtimes]
    earliest = min(stamps)
    latest = max(stamps)
    if latest - earliest < tolerance_ms:
        return tuple("equal" for _ in stamps)
    ranks: list[TimeRank] = []
    for stamp in stamps:
        if stamp == earliest:
            ranks.append("earliest")
        elif stamp == latest:
            ranks.append("latest")
        else:
            ranks.append(None)
    return tuple(ranks)


def build_enhanced_comparison_index(
    pane_file_lists: Sequence[Sequence[FileEntry]],
) -> EnhancedComparisonIndex:
    """Build the filename index with per-member size/time ranks."""
    states: dict[str, EnhancedCompareState] = {}
    for name, acc in _accumulate(pane_file_lists).items():
        if len(acc.panes) < 2:
            continue
        states[name] = EnhancedCompareState(
            member_pane_indices=tuple(acc.panes),
            sizes_by_member=tuple(acc.sizes),
            mod_times_by_member=tuple(acc.mtimes),
            size_rank=rank_sizes(acc.sizes),
            time_rank=rank_times(acc.mtimes),
        )
    return EnhancedComparisonIndex(states)  # type: ignore[arg-type]
