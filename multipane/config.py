"""Persistent JSON config helpers.

Stores layout and sort preferences, an optional keymap, bookmarks, and
directory history. Malformed or missing config falls back to defaults.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

from .bookmarks import Bookmark
from .history import DirectoryHistory
from .layout import LayoutConfigError, parse_layout_mode
from .model import LayoutMode
from .sorting import SortConfigError, SortSpec, parse_sort_spec

logger = logging.getLogger(__name__)

APP_NAME = "multipane"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME

DEFAULT_PANE_COUNT = 2
DEFAULT_MAX_PANES = 4


@dataclass(frozen=True)
class LayoutPreferences:
    mode: LayoutMode = "tile"
    pane_count: int = DEFAULT_PANE_COUNT
    max_panes: int = DEFAULT_MAX_PANES
    allow_pane_management: bool = True
    linked_by_default: bool = True


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.warning("Ignoring unreadable config %s: %s", CONFIG_PATH, exc)
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Filesystem/serialization errors are logged and otherwise ignored so a
    read-only config directory never breaks the workspace.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except (OSError, TypeError, ValueError) as exc:
        logger.debug("Cannot write config %s: %s", CONFIG_PATH, exc)


def _section(data: dict[str, object], key: str) -> dict[str, object]:
    value = data.get(key)
    return value if isinstance(value, dict) else {}


def _positive_int(value: object, default: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        return default
    return value


def _bool(value: object, default: bool) -> bool:
    return value if isinstance(value, bool) else default


def load_layout_preferences() -> LayoutPreferences:
    """Read the ``layout`` section; invalid values fall back to defaults."""
    section = _section(load_config(), "layout")
    mode: LayoutMode = "tile"
    raw_mode = section.get("default")
    if isinstance(raw_mode, str):
        try:
            mode = parse_layout_mode(raw_mode)
        except LayoutConfigError as exc:
            logger.warning("%s; using 'tile'", exc)

    max_panes = _positive_int(section.get("max_panes"), DEFAULT_MAX_PANES)
    pane_count = min(_positive_int(section.get("pane_count"), DEFAULT_PANE_COUNT), max_panes)
    return LayoutPreferences(
        mode=mode,
        pane_count=pane_count,
        max_panes=max_panes,
        allow_pane_management=_bool(section.get("allow_pane_management"), True),
        linked_by_default=_bool(section.get("linked"), True),
    )


def load_sort_preferences() -> SortSpec:
    """Read the ``sort`` section, rejecting unknown criteria with a warning."""
    section = _section(load_config(), "sort")
    try:
        return parse_sort_spec(
            criterion=str(section.get("criterion", "name")),
            direction=str(section.get("direction", "asc")),
            directories_first=_bool(section.get("directories_first"), True),
        )
    except SortConfigError as exc:
        logger.warning("%s; using default sort", exc)
        return SortSpec()


def save_sort_preferences(spec: SortSpec) -> None:
    config = load_config()
    config["sort"] = {
        "criterion": spec.criterion,
        "direction": spec.direction,
        "directories_first": spec.directories_first,
    }
    save_config(config)


def load_keybindings() -> list[dict[str, object]] | None:
    """Return configured keybinding records, or ``None`` to use the defaults."""
    value = load_config().get("keybindings")
    if not isinstance(value, list):
        return None
    return [item for item in value if isinstance(item, dict)]


def load_bookmarks() -> list[Bookmark]:
    """Load bookmarks, dropping records without an id or a path."""
    value = load_config().get("bookmarks")
    if not isinstance(value, list):
        return []
    bookmarks: list[Bookmark] = []
    for raw in value:
        if not isinstance(raw, dict):
            continue
        bookmark_id = raw.get("id")
        path = raw.get("path")
        if not isinstance(bookmark_id, str) or not isinstance(path, str) or not path:
            continue
        label = raw.get("label")
        created = raw.get("created")
        bookmarks.append(
            Bookmark(
                id=bookmark_id,
                path=path,
                label=label if isinstance(label, str) else path,
                created_ms=created if isinstance(created, int) and not isinstance(created, bool) else 0,
            )
        )
    return bookmarks


def save_bookmarks(bookmarks: list[Bookmark]) -> None:
    config = load_config()
    config["bookmarks"] = [
        {"id": bookmark.id, "path": bookmark.path, "label": bookmark.label, "created": bookmark.created_ms}
        for bookmark in bookmarks
    ]
    save_config(config)


def load_directory_history() -> DirectoryHistory:
    return DirectoryHistory.from_dict(load_config().get("history"))


def save_directory_history(history: DirectoryHistory) -> None:
    config = load_config()
    config["history"] = history.to_dict()
    save_config(config)
