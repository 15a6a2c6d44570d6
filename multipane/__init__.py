"""Public package surface for multipane.

Exports ``main`` for programmatic CLI invocation and the ``Workspace`` core.
Most implementation lives in submodules under ``multipane``.
"""

from __future__ import annotations


def main(*args, **kwargs):
    """Lazily import the CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)


def __getattr__(name: str):
    if name == "Workspace":
        from .workspace import Workspace

        return Workspace
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = ["Workspace", "main"]
