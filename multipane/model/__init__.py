"""Domain model for the multi-pane workspace.

This package contains non-UI primitives only:
- immutable file entries as produced by a directory lister
- mutable per-pane navigation state
- layout rectangles and cross-pane comparison records
"""

from __future__ import annotations

from .types import (
    NO_SELECTION,
    CompareState,
    EnhancedCompareState,
    FileEntry,
    LayoutMode,
    LayoutRect,
    PaneState,
    SizeRank,
    SortCriterion,
    SortDirection,
    TimeRank,
    Timestamp,
)

__all__ = [
    "NO_SELECTION",
    "CompareState",
    "EnhancedCompareState",
    "FileEntry",
    "LayoutMode",
    "LayoutRect",
    "PaneState",
    "SizeRank",
    "SortCriterion",
    "SortDirection",
    "TimeRank",
    "Timestamp",
]
