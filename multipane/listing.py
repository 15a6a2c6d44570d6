"""Read-only directory listing that produces ``FileEntry`` snapshots.

Listing failures never reach the workspace core: an unreadable or missing
directory lists as empty.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable

from .model import FileEntry

logger = logging.getLogger(__name__)

DirectoryLister = Callable[[str], list[FileEntry]]


def entry_extension(name: str, is_directory: bool) -> str:
    """Return the dotted suffix for files, ``""`` for directories and dotfiles."""
    if is_directory:
        return ""
    return os.path.splitext(name)[1]


def list_directory(path: str, show_hidden: bool = False) -> list[FileEntry]:
    """Return a snapshot of ``path``'s children in scan order.

    Symlinks are not followed when classifying entries. Entries whose stat
    fails are kept with zero size and mtime.
    """
    entries: list[FileEntry] = []
    try:
        with os.scandir(path) as children:
            for child in children:
                name = child.name
                if not show_hidden and name.startswith("."):
                    continue
                try:
                    is_directory = child.is_dir(follow_symlinks=False)
                except OSError:
                    is_directory = False

                size_bytes = 0
                mtime_ms = 0
                try:
                    stat = child.stat(follow_symlinks=False)
                    mtime_ms = stat.st_mtime_ns // 1_000_000
                    if not is_directory:
                        size_bytes = int(stat.st_size)
                except OSError:
                    pass

                entries.append(
                    FileEntry(
                        name=name,
                        absolute_path=os.path.abspath(child.path),
                        is_directory=is_directory,
                        size_bytes=size_bytes,
                        modified_at_epoch_ms=mtime_ms,
                        extension=entry_extension(name, is_directory),
                    )
                )
    except OSError as exc:
        logger.debug("Cannot list %s: %s", path, exc)
        return []
    return entries


def make_lister(show_hidden: bool = False) -> DirectoryLister:
    """Bind ``list_directory`` to a hidden-file preference."""

    def lister(path: str) -> list[FileEntry]:
        return list_directory(path, show_hidden=show_hidden)

    return lister
