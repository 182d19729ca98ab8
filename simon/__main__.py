"""Module entrypoint for ``python -m simon``.

All argument parsing and runtime setup happen in ``simon.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
