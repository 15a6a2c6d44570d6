"""Workspace: the owner of pane state and the action dispatcher.

The workspace holds the panes, focus, directory history, keybinding registry,
linked-mode synchronizer, and comparison/layout modes. User events arrive as
``KeyChord`` values or symbolic action names; every handler is synchronous
and only calls out to the injected directory lister.

Actions that need a UI surface (dialogs, previews) are not handled here;
``handle_chord`` still returns their action name so the caller can open them.
"""

from __future__ import annotations

import logging
import os
import posixpath
from collections.abc import Callable, Sequence

from .bookmarks import BookmarkManager
from .comparison import EnhancedComparisonIndex, build_enhanced_comparison_index, next_comparison_mode
from .history import DirectoryHistory
from .input import DEFAULT_KEYBINDINGS, KeybindingRegistry, KeyChord
from .layout import calculate_layout, next_layout_mode, parse_layout_mode
from .listing import DirectoryLister
from .model import NO_SELECTION, FileEntry, LayoutRect, PaneState
from .panes import (
    LinkedNavigationPlan,
    LinkedNavigationSynchronizer,
    clear_marks,
    invert_marks,
    mark_all,
    toggle_mark,
    toggle_mark_and_advance,
)
from .search import SearchHistory, filter_files
from .sorting import SortSpec, resort_preserving_cursor, sort_with_spec

logger = logging.getLogger(__name__)

DEFAULT_MAX_PANES = 4


class Workspace:
    """Several independently navigable panes plus their coordination state."""

    def __init__(
        self,
        paths: Sequence[str],
        lister: DirectoryLister,
        *,
        registry: KeybindingRegistry | None = None,
        history: DirectoryHistory | None = None,
        bookmarks: BookmarkManager | None = None,
        sort_spec: SortSpec | None = None,
        layout_mode: str = "tile",
        linked: bool = True,
        show_hidden: bool = False,
        max_panes: int = DEFAULT_MAX_PANES,
        allow_pane_management: bool = True,
        home_path: str | None = None,
    ) -> None:
        if not paths:
            raise ValueError("a workspace needs at least one pane path")
        self.lister = lister
        self.registry = registry if registry is not None else KeybindingRegistry(DEFAULT_KEYBINDINGS)
        self.history = history if history is not None else DirectoryHistory()
        self.bookmarks = bookmarks
        self.search_history = SearchHistory()
        self.linked = LinkedNavigationSynchronizer(enabled=linked)
        self.layout_mode = parse_layout_mode(layout_mode)
        self.comparison_mode = "off"
        self.show_hidden = show_hidden
        self.max_panes = max(1, max_panes)
        self.allow_pane_management = allow_pane_management
        self.home_path = home_path if home_path is not None else os.path.expanduser("~")
        self.focus_index = 0
        self.scroll_requests: dict[int, int] = {}
        self._next_pane_id = 0
        self._filters: dict[int, str] = {}

        spec = sort_spec if sort_spec is not None else SortSpec()
        self.panes: list[PaneState] = []
        for path in paths[: self.max_panes]:
            pane = self._new_pane(path, spec)
            self._load_into(pane, pane.current_path)
            self.panes.append(pane)
        self._handlers = self._build_action_handlers()

    # -- pane loading ---------------------------------------------------------

    def _new_pane(self, path: str, spec: SortSpec) -> PaneState:
        pane = PaneState(
            pane_id=self._next_pane_id,
            current_path=posixpath.normpath(path),
            sort_criterion=spec.criterion,
            sort_direction=spec.direction,
            directories_first=spec.directories_first,
        )
        self._next_pane_id += 1
        return pane

    def _list(self, pane: PaneState, path: str) -> list[FileEntry]:
        entries = self.lister(path)
        if not self.show_hidden:
            entries = [entry for entry in entries if not entry.name.startswith(".")]
        return filter_files(entries, self._filters.get(pane.pane_id, ""))

    def _load_into(self, pane: PaneState, path: str) -> None:
        """List ``path`` into ``pane``, sort it, and restore the remembered cursor."""
        files = sort_with_spec(self._list(pane, path), SortSpec.for_pane(pane))
        restored = self.history.restore_cursor_position(pane.pane_id, path, [entry.name for entry in files])
        pane.current_path = path
        pane.files = files
        pane.cursor_index = restored.cursor if files else NO_SELECTION
        pane.scroll_offset = restored.scroll_offset
        pane.marked_filenames = set()

    def _remember_cursor(self, pane: PaneState) -> None:
        """Write the visit record for the pane's current directory.

        A pane without a cursor row records an empty filename at index 0.
        """
        entry = pane.cursor_entry()
        self.history.save_cursor_position(
            pane.pane_id,
            pane.current_path,
            entry.name if entry is not None else "",
            pane.cursor_index if entry is not None else 0,
            pane.scroll_offset,
        )

    def remember_cursors(self) -> None:
        for pane in self.panes:
            self._remember_cursor(pane)

    @property
    def focused_pane(self) -> PaneState:
        return self.panes[self.focus_index]

    # -- navigation -----------------------------------------------------------

    def navigate(self, pane_index: int, path: str, record: bool = True) -> None:
        """Move one pane to ``path`` without linked synchronization.

        The cursor state of the directory being left is saved first. ``record``
        controls whether the origin becomes a back-history entry.
        """
        pane = self.panes[pane_index]
        target = posixpath.normpath(path)
        self._remember_cursor(pane)
        if record and target != pane.current_path:
            self.history.record_navigation(pane.pane_id, pane.current_path)
        self._filters.pop(pane.pane_id, None)
        self._load_into(pane, target)

    def _execute_plan(self, plan: LinkedNavigationPlan, land_on_child: bool = False) -> None:
        for idx, target in plan.targets.items():
            previous_path = self.panes[idx].current_path
            self.navigate(idx, target)
            pane = self.panes[idx]
            if land_on_child and pane.files:
                pane.cursor_index = self.history.find_subdirectory_in_parent(previous_path, pane.files)
        self.linked.complete(plan)

    def enter_directory(self) -> bool:
        """Enter the focused cursor directory (in every linked pane)."""
        entry = self.focused_pane.cursor_entry()
        if entry is None or not entry.is_directory:
            return False
        plan = self.linked.plan_enter_directory(self.panes, self.focus_index, entry.name)
        self._execute_plan(plan)
        return True

    def go_parent(self) -> bool:
        """Go to the parent directory with the cursor on the directory just left."""
        plan = self.linked.plan_parent(self.panes, self.focus_index)
        if not plan.targets:
            return False
        self._execute_plan(plan, land_on_child=True)
        return True

    def navigate_home(self) -> None:
        self.navigate(self.focus_index, self.home_path)

    def history_back(self) -> bool:
        pane = self.focused_pane
        target = self.history.navigate_back(pane.pane_id, pane.current_path)
        if target is None:
            return False
        self.navigate(self.focus_index, target, record=False)
        return True

    def history_forward(self) -> bool:
        pane = self.focused_pane
        target = self.history.navigate_forward(pane.pane_id, pane.current_path)
        if target is None:
            return False
        self.navigate(self.focus_index, target, record=False)
        return True

    def refresh_pane(self, pane_index: int) -> None:
        """Re-list a pane in place, keeping cursor (by filename) and marks."""
        pane = self.panes[pane_index]
        marks = set(pane.marked_filenames)
        self._remember_cursor(pane)
        self._load_into(pane, pane.current_path)
        pane.marked_filenames = marks & set(pane.filenames())

    def refresh_all(self) -> None:
        for idx in range(len(self.panes)):
            self.refresh_pane(idx)

    # -- filtering ------------------------------------------------------------

    def set_filter(self, pattern: str, pane_index: int | None = None) -> None:
        """Show only entries whose name contains ``pattern``.

        The filter lasts until the pane navigates elsewhere. A blank pattern
        clears it.
        """
        idx = self.focus_index if pane_index is None else pane_index
        pane = self.panes[idx]
        needle = pattern.strip()
        if needle:
            self._filters[pane.pane_id] = needle
            self.search_history.add(needle)
        else:
            self._filters.pop(pane.pane_id, None)
        self.refresh_pane(idx)

    def clear_filter(self, pane_index: int | None = None) -> None:
        self.set_filter("", pane_index)

    def filter_pattern(self, pane_index: int) -> str:
        return self._filters.get(self.panes[pane_index].pane_id, "")

    # -- cursor, sort, marks --------------------------------------------------

    def move_cursor(self, pane_index: int, new_cursor: int) -> bool:
        """Clamp and set a pane cursor, then mirror it into linked panes."""
        pane = self.panes[pane_index]
        if not pane.files:
            return False
        pane.cursor_index = max(0, min(new_cursor, len(pane.files) - 1))
        self.scroll_requests = self.linked.sync_cursor(self.panes, pane_index)
        return True

    def change_sort(self, spec: SortSpec) -> None:
        """Apply ``spec`` to the focused pane, or to every pane when linked."""
        if self.linked.is_active(len(self.panes)):
            targets = list(self.panes)
        else:
            targets = [self.focused_pane]
        for pane in targets:
            resort_preserving_cursor(pane, spec)

    def toggle_mark_and_advance(self) -> bool:
        pane = self.focused_pane
        previous = pane.cursor_index
        if not toggle_mark_and_advance(pane):
            return False
        if pane.cursor_index != previous:
            self.scroll_requests = self.linked.sync_cursor(self.panes, self.focus_index)
        return True

    def toggle_mark_at_cursor(self) -> bool:
        entry = self.focused_pane.cursor_entry()
        if entry is None:
            return False
        toggle_mark(self.focused_pane, entry.name)
        return True

    # -- panes, modes, layout -------------------------------------------------

    def add_pane(self) -> bool:
        """Clone the focused pane's directory and sort into a new focused pane."""
        if not self.allow_pane_management:
            logger.warning("Pane management is disabled in configuration")
            return False
        if len(self.panes) >= self.max_panes:
            logger.warning("Cannot add pane: maximum of %d panes reached", self.max_panes)
            return False
        source = self.focused_pane
        pane = self._new_pane(source.current_path, SortSpec.for_pane(source))
        self._load_into(pane, pane.current_path)
        self.panes.append(pane)
        self.focus_index = len(self.panes) - 1
        return True

    def remove_pane(self, pane_index: int | None = None) -> bool:
        if not self.allow_pane_management:
            logger.warning("Pane management is disabled in configuration")
            return False
        if len(self.panes) <= 1:
            logger.warning("Cannot remove pane: at least one pane must remain")
            return False
        idx = self.focus_index if pane_index is None else pane_index
        if not 0 <= idx < len(self.panes):
            return False
        removed = self.panes.pop(idx)
        self.history.clear_history(removed.pane_id)
        self._filters.pop(removed.pane_id, None)
        if idx < self.focus_index or (idx == self.focus_index and self.focus_index > 0):
            self.focus_index -= 1
        self.focus_index = min(self.focus_index, len(self.panes) - 1)
        return True

    def focus_next(self) -> None:
        self.focus_index = (self.focus_index + 1) % len(self.panes)

    def toggle_linked(self) -> bool:
        return self.linked.toggle(len(self.panes))

    def linked_indicator_visible(self) -> bool:
        return self.linked.indicator_visible(len(self.panes))

    def toggle_hidden(self) -> None:
        self.show_hidden = not self.show_hidden
        self.refresh_all()

    def cycle_comparison_mode(self) -> str:
        """Advance off -> name -> size -> time; needs at least two panes."""
        if len(self.panes) >= 2:
            self.comparison_mode = next_comparison_mode(self.comparison_mode)
        return self.comparison_mode

    def cycle_layout_mode(self) -> str:
        self.layout_mode = next_layout_mode(self.layout_mode)
        return self.layout_mode

    def layout(self, width: int, height: int) -> list[LayoutRect]:
        return calculate_layout(width, height, len(self.panes), self.layout_mode)

    def comparison_index(self) -> EnhancedComparisonIndex | None:
        """Return the cross-pane index while comparison mode is on."""
        if self.comparison_mode == "off" or len(self.panes) < 2:
            return None
        return build_enhanced_comparison_index([pane.files for pane in self.panes])

    def add_bookmark(self, label: str | None = None) -> bool:
        if self.bookmarks is None:
            return False
        path = self.focused_pane.current_path
        self.bookmarks.add_bookmark(path, label or posixpath.basename(path) or "Root")
        return True

    # -- keyboard dispatch ----------------------------------------------------

    def _move_relative(self, delta: int) -> None:
        pane = self.focused_pane
        target = pane.cursor_index + delta
        if pane.files and 0 <= target < len(pane.files):
            self.move_cursor(self.focus_index, target)

    def _build_action_handlers(self) -> dict[str, Callable[[], object]]:
        return {
            "navigate.up": lambda: self._move_relative(-1),
            "navigate.down": lambda: self._move_relative(1),
            "navigate.first": lambda: self.move_cursor(self.focus_index, 0),
            "navigate.last": lambda: self.move_cursor(self.focus_index, len(self.focused_pane.files) - 1),
            "navigate.enter": self.enter_directory,
            "navigate.parent": self.go_parent,
            "navigate.tab": self.focus_next,
            "navigate.home": self.navigate_home,
            "mark.toggle": self.toggle_mark_and_advance,
            "mark.toggle-cursor": self.toggle_mark_at_cursor,
            "mark.all": lambda: mark_all(self.focused_pane),
            "mark.invert": lambda: invert_marks(self.focused_pane),
            "mark.clear": lambda: clear_marks(self.focused_pane),
            "view.comparison": self.cycle_comparison_mode,
            "view.layout": self.cycle_layout_mode,
            "view.hidden": self.toggle_hidden,
            "link.toggle": self.toggle_linked,
            "bookmark.add": self.add_bookmark,
            "history.back": self.history_back,
            "history.forward": self.history_forward,
            "pane.add": self.add_pane,
            "pane.remove": self.remove_pane,
            "pane.refresh": lambda: self.refresh_pane(self.focus_index),
            "pane.refresh-all": self.refresh_all,
        }

    def dispatch(self, action: str) -> bool:
        """Run the workspace handler for ``action``; ``False`` if it has none."""
        handler = self._handlers.get(action)
        if handler is None:
            return False
        self.scroll_requests = {}
        handler()
        return True

    def handle_chord(self, chord: KeyChord) -> str | None:
        """Match ``chord`` and dispatch its action, returning the action name."""
        action = self.registry.match(chord)
        if action is not None:
            self.dispatch(action)
        return action
