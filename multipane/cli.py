"""Command-line front door for multipane.

Parses CLI options, merges them over persisted config, lists each path into a
pane, and prints the rendered workspace (or the keybinding help). The visited
directories are written back to the config history afterwards.
"""

from __future__ import annotations

import argparse
import logging
import shutil
import sys
from pathlib import Path

from .bookmarks import BookmarkManager
from .comparison import COMPARISON_MODES
from .config import (
    load_bookmarks,
    load_directory_history,
    load_keybindings,
    load_layout_preferences,
    load_sort_preferences,
    save_bookmarks,
    save_directory_history,
    save_sort_preferences,
)
from .input import DEFAULT_KEYBINDINGS, KeybindingRegistry
from .layout import LAYOUT_MODES, LayoutConfigError, parse_layout_mode
from .listing import make_lister
from .render import render_key_help, render_workspace
from .sorting import SORT_CRITERIA, SortConfigError, parse_sort_spec
from .workspace import Workspace

logger = logging.getLogger(__name__)


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="multipane",
        description="Show several directories side by side and compare their entries.",
    )
    parser.add_argument("paths", nargs="*", metavar="PATH", help="Directories to open, one per pane.")
    parser.add_argument("--layout", default=None, help=f"Layout mode ({', '.join(LAYOUT_MODES)}).")
    parser.add_argument("--sort", default=None, choices=SORT_CRITERIA, help="Sort criterion.")
    parser.add_argument("--desc", action="store_true", help="Sort in descending order.")
    parser.add_argument("--files-first", action="store_true", help="Do not group directories first.")
    parser.add_argument("--save-sort", action="store_true", help="Store the sort options as the new default.")
    parser.add_argument("--filter", default=None, metavar="PATTERN", help="Only show entries whose name contains PATTERN.")
    parser.add_argument("--compare", default="off", choices=COMPARISON_MODES, help="Comparison markers.")
    parser.add_argument("--width", type=_positive_int, default=None, help="Canvas width (default: terminal).")
    parser.add_argument("--height", type=_positive_int, default=None, help="Canvas height (default: terminal).")
    parser.add_argument("--show-hidden", action="store_true", help="Include dotfiles.")
    parser.add_argument("--keys", action="store_true", help="Print keybindings and exit.")
    parser.add_argument("--no-color", action="store_true", help="Disable color output even on TTY.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    return parser


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _build_registry() -> KeybindingRegistry:
    configured = load_keybindings()
    registry = KeybindingRegistry(configured if configured is not None else DEFAULT_KEYBINDINGS)
    if registry.errors:
        logger.warning("%d keybinding(s) ignored due to configuration errors", len(registry.errors))
    return registry


def _resolve_paths(raw_paths: list[str], pane_count: int, max_panes: int) -> list[str]:
    if not raw_paths:
        return [str(Path.cwd())] * pane_count
    if len(raw_paths) > max_panes:
        raise SystemExit(f"Too many paths: at most {max_panes} panes are allowed.")
    resolved: list[str] = []
    for raw in raw_paths:
        path = Path(raw).expanduser()
        if not path.exists():
            raise SystemExit(f"Path not found: {path}")
        if not path.is_dir():
            raise SystemExit(f"Not a directory: {path}")
        resolved.append(str(path.resolve()))
    return resolved


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and print the workspace for the given directories.

    Command-line options take precedence over the persisted config.
    """
    args = build_parser().parse_args(argv)
    _configure_logging(args.verbose)

    registry = _build_registry()
    color = sys.stdout.isatty() and not args.no_color
    if args.keys:
        sys.stdout.write(render_key_help(registry.help_sections(), color=color) + "\n")
        return

    prefs = load_layout_preferences()
    try:
        layout_mode = parse_layout_mode(args.layout) if args.layout is not None else prefs.mode
    except LayoutConfigError as exc:
        raise SystemExit(str(exc)) from exc

    base_sort = load_sort_preferences()
    try:
        sort_spec = parse_sort_spec(
            criterion=args.sort or base_sort.criterion,
            direction="desc" if args.desc else base_sort.direction,
            directories_first=base_sort.directories_first and not args.files_first,
        )
    except SortConfigError as exc:
        raise SystemExit(str(exc)) from exc
    if args.save_sort:
        save_sort_preferences(sort_spec)

    paths = _resolve_paths(args.paths, prefs.pane_count, prefs.max_panes)
    workspace = Workspace(
        paths,
        make_lister(show_hidden=True),
        registry=registry,
        history=load_directory_history(),
        bookmarks=BookmarkManager(load_bookmarks(), on_change=save_bookmarks),
        sort_spec=sort_spec,
        layout_mode=layout_mode,
        linked=prefs.linked_by_default,
        show_hidden=args.show_hidden,
        max_panes=prefs.max_panes,
        allow_pane_management=prefs.allow_pane_management,
    )
    if len(workspace.panes) >= 2:
        workspace.comparison_mode = args.compare
    elif args.compare != "off":
        logger.warning("Comparison needs at least two panes; ignoring --compare %s", args.compare)
    if args.filter:
        for pane_index in range(len(workspace.panes)):
            workspace.set_filter(args.filter, pane_index)

    term = shutil.get_terminal_size((80, 24))
    width = args.width if args.width is not None else max(1, term.columns)
    height = args.height if args.height is not None else max(2, term.lines - 1)
    lines = render_workspace(workspace, width, height, color=color)
    sys.stdout.write("\n".join(lines) + "\n")

    workspace.remember_cursors()
    save_directory_history(workspace.history)


if __name__ == "__main__":
    main()
