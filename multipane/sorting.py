"""Composable, stable sort pipeline for directory listings.

The pipeline has two layers. An optional directory-priority layer places
directories before files and is never affected by direction. The criterion
layer orders by name, size, mtime, or extension and is inverted for
descending sorts. Both layers run as stable key sorts, so ties keep their
original relative order.

Criteria and directions are validated when a ``SortSpec`` is built; an unknown
value raises ``SortConfigError`` instead of degrading into a no-op ordering.
"""

from __future__ import annotations

import math
import re
import unicodedata
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import datetime, timezone

from .model import NO_SELECTION, FileEntry, PaneState, SortCriterion, SortDirection, Timestamp

SORT_CRITERIA: tuple[SortCriterion, ...] = ("name", "size", "mtime", "extension")
SORT_DIRECTIONS: tuple[SortDirection, ...] = ("asc", "desc")

_SORT_LABELS: dict[str, str] = {
    "name": "Name",
    "size": "Size",
    "mtime": "Time",
    "extension": "Extension",
}
_SIZE_UNITS = ("B", "KB", "MB", "GB", "TB")
_DIGIT_RUN = re.compile(r"(\d+)")


class SortConfigError(ValueError):
    """Raised when a sort criterion or direction is not recognized."""


@dataclass(frozen=True)
class SortSpec:
    """Validated sort configuration for one pane."""

    criterion: SortCriterion = "name"
    direction: SortDirection = "asc"
    directories_first: bool = True

    def __post_init__(self) -> None:
        if self.criterion not in SORT_CRITERIA:
            raise SortConfigError(
                f"unknown sort criterion {self.criterion!r}; expected one of: {', '.join(SORT_CRITERIA)}"
            )
        if self.direction not in SORT_DIRECTIONS:
            raise SortConfigError(f"unknown sort direction {self.direction!r}; expected 'asc' or 'desc'")

    @classmethod
    def for_pane(cls, pane: PaneState) -> SortSpec:
        return cls(pane.sort_criterion, pane.sort_direction, pane.directories_first)


def parse_sort_spec(
    criterion: str = "name",
    direction: str = "asc",
    directories_first: bool = True,
) -> SortSpec:
    """Normalize loosely-typed config values into a ``SortSpec``.

    Leading/trailing whitespace and case are ignored; anything else that is
    not a known criterion or direction raises ``SortConfigError``.
    """
    return SortSpec(
        criterion=str(criterion).strip().lower(),  # type: ignore[arg-type]
        direction=str(direction).strip().lower(),  # type: ignore[arg-type]
        directories_first=bool(directories_first),
    )


def _fold(text: str) -> str:
    """Case- and accent-insensitive form used for name comparisons."""
    decomposed = unicodedata.normalize("NFKD", text)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return stripped.casefold()


def natural_key(name: str) -> tuple[str | int, ...]:
    """Return a natural-ordering key so ``file2`` sorts before ``file10``.

    ``re.split`` with a capture group alternates text and digit runs, so text
    parts always compare against text and numbers against numbers.
    """
    parts = _DIGIT_RUN.split(_fold(name))
    return tuple(int(part) if idx % 2 else part for idx, part in enumerate(parts))


def timestamp_ms(value: Timestamp | None) -> float:
    """Normalize an mtime value to epoch milliseconds.

    Accepts numbers (already milliseconds), ``datetime`` objects, and ISO-8601
    strings such as the ones produced by JSON serialization. Naive datetimes
    are read as UTC. Unparseable values normalize to ``0.0``.
    """
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        number = float(value)
        return number if math.isfinite(number) else 0.0
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0.0
        try:
            return float(text)
        except ValueError:
            pass
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            value = datetime.fromisoformat(text)
        except ValueError:
            return 0.0
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.timestamp() * 1000.0
    return 0.0


def _name_key(entry: FileEntry) -> tuple:
    return natural_key(entry.name)


def _size_key(entry: FileEntry) -> int:
    return entry.size_bytes


def _mtime_key(entry: FileEntry) -> float:
    return timestamp_ms(entry.modified_at_epoch_ms)


def _extension_key(entry: FileEntry) -> tuple:
    extension = entry.extension
    return (bool(extension), _fold(extension), natural_key(entry.name))


_CRITERION_KEYS: dict[str, Callable[[FileEntry], object]] = {
    "name": _name_key,
    "size": _size_key,
    "mtime": _mtime_key,
    "extension": _extension_key,
}


def sort_files(
    files: Iterable[FileEntry],
    criterion: str = "name",
    direction: str = "asc",
    directories_first: bool = True,
) -> list[FileEntry]:
    """Return a new, stably sorted list of ``files``.

    Raises ``SortConfigError`` for unknown criteria or directions.
    """
    spec = SortSpec(criterion, direction, directories_first)  # type: ignore[arg-type]
    return sort_with_spec(files, spec)


def sort_with_spec(files: Iterable[FileEntry], spec: SortSpec) -> list[FileEntry]:
    """Apply a validated ``SortSpec`` and return a new list."""
    ordered = sorted(files, key=_CRITERION_KEYS[spec.criterion], reverse=spec.direction == "desc")
    if spec.directories_first:
        ordered.sort(key=lambda entry: not entry.is_directory)
    return ordered


def resort_preserving_cursor(pane: PaneState, spec: SortSpec) -> None:
    """Re-sort a pane in place, keeping the cursor on the same filename.

    When the previous cursor entry cannot be found the cursor falls back to
    the first row. A pane without a cursor row keeps ``NO_SELECTION``.
    """
    current = pane.cursor_entry()
    pane.files = sort_with_spec(pane.files, spec)
    pane.sort_criterion = spec.criterion
    pane.sort_direction = spec.direction
    pane.directories_first = spec.directories_first
    if current is None:
        pane.cursor_index = NO_SELECTION
        return
    new_index = pane.index_of(current.name)
    pane.cursor_index = new_index if new_index >= 0 else 0


def format_size(size_bytes: int) -> str:
    """Return a human-readable size using 1024-based units."""
    if size_bytes <= 0:
        return "0 B"
    exponent = 0
    while size_bytes >= 1024 ** (exponent + 1) and exponent < len(_SIZE_UNITS) - 1:
        exponent += 1
    if exponent == 0:
        return f"{size_bytes} B"
    return f"{size_bytes / (1024 ** exponent):.1f} {_SIZE_UNITS[exponent]}"


def sort_label(criterion: str) -> str:
    return _SORT_LABELS.get(criterion, criterion)


def direction_symbol(direction: str) -> str:
    return "↑" if direction == "asc" else "↓"
