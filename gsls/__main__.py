"""Module entrypoint for ``python -m gsls``.

This keeps module-mode execution behavior identical to the console script.
All argument parsing and listing setup happen in ``gsls.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
