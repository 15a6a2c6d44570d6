"""Keybinding registry: validation, lookup tables, and chord matching.

A registry is an explicit object built from an ordered list of definitions and
handed to whatever needs it, so several independent keymaps can coexist.
Validation problems never abort construction. Errors make an entry
unmatchable; warnings only get reported.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import replace

from .keys import KEYBINDING_CATEGORIES, KeyChord, Keybinding, category_label, format_key_combo

logger = logging.getLogger(__name__)


def _matches_key(event_key: str, binding_key: str) -> bool:
    """Single characters match case-insensitively, named keys exactly."""
    if len(event_key) == 1:
        return event_key.lower() == binding_key.lower()
    return event_key == binding_key


def _combo_identity(binding: Keybinding) -> str:
    """Return the label used to detect bindings that ``match`` cannot tell apart."""
    if len(binding.key) == 1:
        binding = replace(binding, key=binding.key.lower())
    return format_key_combo(binding)


def chord_matches(chord: KeyChord, binding: Keybinding) -> bool:
    """Return whether ``chord`` satisfies ``binding``.

    Modifier matching is exact: every flag must equal the binding's flag, so an
    undeclared modifier that is held rejects the match.
    """
    if not _matches_key(chord.key, binding.key):
        return False
    return chord.modifiers == binding.modifiers


class KeybindingRegistry:
    """Ordered keybinding table with action and category lookups."""

    def __init__(self, definitions: Iterable[Keybinding | Mapping[str, object]] = ()) -> None:
        self.errors: list[str] = []
        self.warnings: list[str] = []
        self._bindings: list[Keybinding] = []
        self._matchable: list[Keybinding] = []
        self._by_action: dict[str, Keybinding] = {}
        self._by_category: dict[str, list[Keybinding]] = {}

        for definition in definitions:
            binding = definition if isinstance(definition, Keybinding) else Keybinding.from_mapping(definition)
            self._bindings.append(binding)
        self._validate_and_index()

    def _validate_and_index(self) -> None:
        seen_actions: set[str] = set()
        seen_combos: dict[str, int] = {}

        for index, binding in enumerate(self._bindings):
            valid = True
            if not binding.key:
                self.errors.append(f"Keybinding {index}: missing 'key' field")
                valid = False
            if not binding.action:
                self.errors.append(f"Keybinding {index}: missing 'action' field")
                valid = False
            if not binding.description:
                self.warnings.append(f"Keybinding {index}: missing 'description' field")
            if not binding.category:
                self.errors.append(f"Keybinding {index}: missing 'category' field")
                valid = False
            elif binding.category not in KEYBINDING_CATEGORIES:
                self.errors.append(
                    f"Keybinding {index}: invalid category {binding.category!r}. "
                    f"Must be one of: {', '.join(KEYBINDING_CATEGORIES)}"
                )
                valid = False

            if binding.action:
                if binding.action in seen_actions:
                    self.warnings.append(
                        f"Duplicate action {binding.action!r} in keybinding {index} (last definition wins)"
                    )
                seen_actions.add(binding.action)
                self._by_action[binding.action] = binding

            if binding.key:
                combo = _combo_identity(binding)
                first_index = seen_combos.get(combo)
                if first_index is not None:
                    self.warnings.append(
                        f"Duplicate key combo {combo!r} in keybinding {index} "
                        f"(first seen at index {first_index}, first match wins)"
                    )
                else:
                    seen_combos[combo] = index

            if binding.category:
                self._by_category.setdefault(binding.category, []).append(binding)
            if valid:
                self._matchable.append(binding)

        for message in self.errors:
            logger.error("Keybinding validation error: %s", message)
        for message in self.warnings:
            logger.warning("Keybinding validation warning: %s", message)
        logger.debug(
            "Loaded %d keybindings across %d categories",
            len(self._bindings),
            len(self._by_category),
        )

    def match(self, chord: KeyChord) -> str | None:
        """Return the action of the first binding satisfied by ``chord``."""
        for binding in self._matchable:
            if chord_matches(chord, binding):
                return binding.action
        return None

    def binding_for_action(self, action: str) -> Keybinding | None:
        return self._by_action.get(action)

    def bindings_in_category(self, category: str) -> list[Keybinding]:
        return list(self._by_category.get(category, []))

    def categories(self) -> list[str]:
        """Return categories in first-registration order."""
        return list(self._by_category)

    def all_bindings(self) -> list[Keybinding]:
        return list(self._bindings)

    def help_sections(self) -> list[tuple[str, list[tuple[str, str]]]]:
        """Return ``(category label, [(combo, description), ...])`` for help rendering."""
        sections: list[tuple[str, list[tuple[str, str]]]] = []
        for category in KEYBINDING_CATEGORIES:
            bindings = self._by_category.get(category)
            if not bindings:
                continue
            rows = [(format_key_combo(binding), binding.description or binding.action) for binding in bindings]
            sections.append((category_label(category), rows))
        return sections

    def __len__(self) -> int:
        return len(self._bindings)
