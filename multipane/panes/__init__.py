"""Cross-pane coordination: linked navigation and mark sets."""

from __future__ import annotations

from .linked import (
    LinkedNavigationPlan,
    LinkedNavigationSynchronizer,
    child_path,
    parent_path,
)
from .marks import (
    clear_marks,
    invert_marks,
    mark_all,
    marked_entries,
    operation_targets,
    toggle_mark,
    toggle_mark_and_advance,
)

__all__ = [
    "LinkedNavigationPlan",
    "LinkedNavigationSynchronizer",
    "child_path",
    "parent_path",
    "clear_marks",
    "invert_marks",
    "mark_all",
    "marked_entries",
    "operation_targets",
    "toggle_mark",
    "toggle_mark_and_advance",
]
