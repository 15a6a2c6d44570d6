"""Built-in keymap used when the config file does not define one."""

from __future__ import annotations

from .keys import Keybinding, KeyModifiers

_CTRL = KeyModifiers(ctrl=True)
_SHIFT = KeyModifiers(shift=True)
_ALT = KeyModifiers(alt=True)

DEFAULT_KEYBINDINGS: tuple[Keybinding, ...] = (
    Keybinding("?", "help.show", "Show keyboard shortcuts", "system"),
    Keybinding("p", "command.palette", "Open command palette", "system", _CTRL),
    Keybinding("ArrowUp", "navigate.up", "Move cursor up", "navigation"),
    Keybinding("ArrowDown", "navigate.down", "Move cursor down", "navigation"),
    Keybinding("Enter", "navigate.enter", "Open directory", "navigation"),
    Keybinding("Backspace", "navigate.parent", "Go to parent directory", "navigation"),
    Keybinding("Tab", "navigate.tab", "Focus next pane", "navigation"),
    Keybinding("Home", "navigate.first", "Jump to first entry", "navigation"),
    Keybinding("End", "navigate.last", "Jump to last entry", "navigation"),
    Keybinding("~", "navigate.home", "Go to home directory", "navigation"),
    Keybinding(" ", "mark.toggle", "Mark and move down", "marking"),
    Keybinding("m", "mark.toggle-cursor", "Toggle mark", "marking"),
    Keybinding("a", "mark.all", "Mark all entries", "marking", _CTRL),
    Keybinding("i", "mark.invert", "Invert marks", "marking", _CTRL),
    Keybinding("Escape", "mark.clear", "Clear marks", "marking"),
    Keybinding("s", "view.sort", "Change sort order", "view-sort"),
    Keybinding("c", "view.comparison", "Cycle comparison mode", "view-sort", _SHIFT),
    Keybinding("l", "view.layout", "Cycle pane layout", "view-sort", _SHIFT),
    Keybinding("l", "link.toggle", "Toggle linked navigation", "view-sort"),
    Keybinding(".", "view.hidden", "Toggle hidden files", "view-sort"),
    Keybinding("i", "preview.info", "Show file info", "preview"),
    Keybinding("v", "preview.content", "Preview file", "preview"),
    Keybinding("g", "bookmark.goto", "Go to path", "advanced"),
    Keybinding("b", "bookmark.add", "Bookmark current directory", "advanced", _CTRL),
    Keybinding("b", "bookmark.list", "List bookmarks", "advanced"),
    Keybinding("ArrowLeft", "history.back", "Back in history", "advanced", _ALT),
    Keybinding("ArrowRight", "history.forward", "Forward in history", "advanced", _ALT),
    Keybinding("n", "pane.add", "Add pane", "pane-management", _CTRL),
    Keybinding("w", "pane.remove", "Remove pane", "pane-management", _CTRL),
    Keybinding("r", "pane.refresh", "Refresh pane", "pane-management"),
    Keybinding("r", "pane.refresh-all", "Refresh all panes", "pane-management", _SHIFT),
)
