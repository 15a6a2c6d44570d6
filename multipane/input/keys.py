"""Key chord and keybinding datatypes plus label formatting."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

KEYBINDING_CATEGORIES: tuple[str, ...] = (
    "navigation",
    "file-operations",
    "marking",
    "view-sort",
    "preview",
    "advanced",
    "pane-management",
    "system",
)

_CATEGORY_LABELS: dict[str, str] = {
    "navigation": "Navigation",
    "file-operations": "File Operations",
    "marking": "File Marking",
    "view-sort": "View & Sort",
    "preview": "Preview",
    "advanced": "Advanced",
    "pane-management": "Pane Management",
    "system": "System",
}

_KEY_SYMBOLS: dict[str, str] = {
    " ": "Space",
    "ArrowUp": "↑",
    "ArrowDown": "↓",
    "ArrowLeft": "←",
    "ArrowRight": "→",
    "Enter": "↵",
    "Escape": "Esc",
    "Backspace": "⌫",
    "Tab": "⇥",
}

_MODIFIER_NAMES: dict[str, str] = {
    "ctrl": "ctrl",
    "control": "ctrl",
    "shift": "shift",
    "alt": "alt",
    "option": "alt",
    "meta": "meta",
    "cmd": "meta",
    "super": "meta",
    "win": "meta",
}

MODIFIER_ORDER: tuple[tuple[str, str], ...] = (
    ("ctrl", "Ctrl"),
    ("alt", "Alt"),
    ("shift", "Shift"),
    ("meta", "Cmd"),
)


@dataclass(frozen=True)
class KeyModifiers:
    ctrl: bool = False
    shift: bool = False
    alt: bool = False
    meta: bool = False

    @classmethod
    def from_mapping(cls, value: object) -> KeyModifiers:
        """Build modifiers from a config mapping; unknown keys are ignored."""
        if isinstance(value, KeyModifiers):
            return value
        if not isinstance(value, Mapping):
            return cls()
        return cls(
            ctrl=value.get("ctrl") is True,
            shift=value.get("shift") is True,
            alt=value.get("alt") is True,
            meta=value.get("meta") is True,
        )


@dataclass(frozen=True)
class KeyChord:
    """One normalized key event: key value plus modifier flags."""

    key: str
    ctrl: bool = False
    shift: bool = False
    alt: bool = False
    meta: bool = False

    @property
    def modifiers(self) -> KeyModifiers:
        return KeyModifiers(ctrl=self.ctrl, shift=self.shift, alt=self.alt, meta=self.meta)

    @classmethod
    def parse(cls, text: str) -> KeyChord:
        """Parse labels such as ``"Ctrl+Shift+m"`` or ``"Space"``.

        The final ``+``-separated token is the key; a lone ``"+"`` is the plus
        key itself. ``"Space"`` maps to ``" "``.
        """
        if text in {"+", " "}:
            return cls(key=text)
        if text.endswith("++"):
            tokens = text[:-2].split("+") + ["+"]
        else:
            tokens = text.split("+")
        flags = {"ctrl": False, "shift": False, "alt": False, "meta": False}
        for token in tokens[:-1]:
            name = _MODIFIER_NAMES.get(token.strip().lower())
            if name is None:
                raise ValueError(f"unknown modifier {token!r} in key chord {text!r}")
            flags[name] = True
        key = tokens[-1]
        if key.lower() == "space":
            key = " "
        if not key:
            raise ValueError(f"missing key in key chord {text!r}")
        return cls(key=key, **flags)


@dataclass(frozen=True)
class Keybinding:
    """Declarative chord -> action definition."""

    key: str
    action: str
    description: str = ""
    category: str = ""
    modifiers: KeyModifiers = field(default_factory=KeyModifiers)

    @classmethod
    def from_mapping(cls, value: Mapping[str, object]) -> Keybinding:
        """Build from a config record; missing fields become empty strings."""
        return cls(
            key=_str_or_empty(value.get("key")),
            action=_str_or_empty(value.get("action")),
            description=_str_or_empty(value.get("description")),
            category=_str_or_empty(value.get("category")),
            modifiers=KeyModifiers.from_mapping(value.get("modifiers")),
        )


def _str_or_empty(value: object) -> str:
    return value if isinstance(value, str) else ""


def format_key_combo(binding: Keybinding | KeyChord) -> str:
    """Return a canonical label such as ``"Ctrl+Shift+p"`` or ``"↑"``."""
    modifiers = binding.modifiers
    parts = [label for name, label in MODIFIER_ORDER if getattr(modifiers, name)]
    parts.append(_KEY_SYMBOLS.get(binding.key, binding.key))
    return "+".join(parts)


def category_label(category: str) -> str:
    return _CATEGORY_LABELS.get(category, category)
