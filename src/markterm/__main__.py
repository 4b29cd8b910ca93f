"""Module entrypoint for ``python -m markterm``."""

from markterm.cli.main import main


if __name__ == "__main__":
    main()
