"""Keyboard input: chord datatypes, keybinding registry, and default keymap."""

from __future__ import annotations

from .defaults import DEFAULT_KEYBINDINGS
from .key_registry import KeybindingRegistry, chord_matches
from .keys import (
    KEYBINDING_CATEGORIES,
    KeyChord,
    Keybinding,
    KeyModifiers,
    category_label,
    format_key_combo,
)

__all__ = [
    "DEFAULT_KEYBINDINGS",
    "KEYBINDING_CATEGORIES",
    "KeyChord",
    "Keybinding",
    "KeyModifiers",
    "KeybindingRegistry",
    "category_label",
    "chord_matches",
    "format_key_combo",
]
