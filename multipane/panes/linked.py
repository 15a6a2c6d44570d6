"""Linked navigation across panes.

When linked mode is on, the focused pane drives the others:
- cursor moves are mirrored by filename; a pane without that filename gets
  the ``NO_SELECTION`` cursor instead of keeping a stale one
- entering a child directory or going to the parent is replayed in every
  pane relative to that pane's own current path

Targets are derived with ``posixpath`` join-and-normalize from each pane's own
path. Paths from different panes are never compared as strings. If any pane
cannot follow, linked mode switches itself off.
"""

from __future__ import annotations

import logging
import posixpath
from collections.abc import Sequence
from dataclasses import dataclass

from ..model import NO_SELECTION, PaneState

logger = logging.getLogger(__name__)


def child_path(path: str, child_name: str) -> str:
    """Join ``child_name`` onto ``path`` and normalize the result."""
    return posixpath.normpath(posixpath.join(path or "/", child_name))


def parent_path(path: str) -> str | None:
    """Return the normalized parent of ``path``, or ``None`` at the root."""
    normalized = posixpath.normpath(path or "/")
    parent = posixpath.dirname(normalized)
    if parent == normalized:
        return None
    return parent


@dataclass(frozen=True)
class LinkedNavigationPlan:
    """Per-pane navigation targets for one linked enter/parent step."""

    source_index: int
    targets: dict[int, str]
    failed: tuple[int, ...] = ()

    @property
    def consistent(self) -> bool:
        return not self.failed


class LinkedNavigationSynchronizer:
    """Linked-mode flag plus the cursor and directory synchronization rules."""

    def __init__(self, enabled: bool = True) -> None:
        self.enabled = enabled

    def is_active(self, pane_count: int) -> bool:
        return self.enabled and pane_count >= 2

    def indicator_visible(self, pane_count: int) -> bool:
        """The linked indicator is only shown for active multi-pane workspaces."""
        return self.is_active(pane_count)

    def toggle(self, pane_count: int) -> bool:
        """Flip linked mode; a single-pane workspace leaves it unchanged."""
        if pane_count < 2:
            return self.enabled
        self.enabled = not self.enabled
        return self.enabled

    def sync_cursor(self, panes: Sequence[PaneState], source_index: int) -> dict[int, int]:
        """Mirror the source cursor filename into every other pane.

        Returns ``{pane_index: cursor}`` for panes that found the filename and
        should scroll it into view.
        """
        scroll_requests: dict[int, int] = {}
        if not self.is_active(len(panes)) or not 0 <= source_index < len(panes):
            return scroll_requests
        entry = panes[source_index].cursor_entry()
        if entry is None:
            return scroll_requests
        for idx, pane in enumerate(panes):
            if idx == source_index:
                continue
            match_index = pane.index_of(entry.name)
            pane.cursor_index = match_index
            if match_index != NO_SELECTION:
                scroll_requests[idx] = match_index
        return scroll_requests

    def plan_enter_directory(
        self,
        panes: Sequence[PaneState],
        source_index: int,
        child_name: str,
    ) -> LinkedNavigationPlan:
        """Plan entering ``child_name`` in the source pane and, when linked, all others.

        A linked pane follows only when its own listing has a directory named
        ``child_name``.
        """
        source = panes[source_index]
        targets = {source_index: child_path(source.current_path, child_name)}
        failed: list[int] = []
        if self.is_active(len(panes)):
            for idx, pane in enumerate(panes):
                if idx == source_index:
                    continue
                if any(entry.is_directory and entry.name == child_name for entry in pane.files):
                    targets[idx] = child_path(pane.current_path, child_name)
                else:
                    failed.append(idx)
        return LinkedNavigationPlan(source_index, targets, tuple(failed))

    def plan_parent(self, panes: Sequence[PaneState], source_index: int) -> LinkedNavigationPlan:
        """Plan moving to the parent directory; panes already at the root fail."""
        targets: dict[int, str] = {}
        failed: list[int] = []
        source_parent = parent_path(panes[source_index].current_path)
        if source_parent is None:
            return LinkedNavigationPlan(source_index, targets)
        targets[source_index] = source_parent
        if self.is_active(len(panes)):
            for idx, pane in enumerate(panes):
                if idx == source_index:
                    continue
                target = parent_path(pane.current_path)
                if target is None:
                    failed.append(idx)
                else:
                    targets[idx] = target
        return LinkedNavigationPlan(source_index, targets, tuple(failed))

    def complete(self, plan: LinkedNavigationPlan) -> bool:
        """Turn linked mode off when ``plan`` could not follow in every pane.

        Returns whether linked mode is still enabled.
        """
        if plan.failed and self.enabled:
            self.enabled = False
            logger.warning(
                "Linked navigation disabled: panes %s could not follow pane %d",
                ", ".join(str(idx) for idx in plan.failed),
                plan.source_index,
            )
        return self.enabled
