"""Module entrypoint for ``python -m lazyreel``."""

from .cli import main


if __name__ == "__main__":
    main()
