"""Module entrypoint for ``python -m httpedit``.

All argument parsing and runtime setup happen in ``httpedit.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
