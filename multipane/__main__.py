"""Module entrypoint for ``python -m multipane``.

All argument parsing and rendering happen in ``multipane.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
