"""Module wrapper so running ``python -m logrando.cli`` matches the console script."""

from logrando.cli import main


if __name__ == "__main__":  # pragma: no cover
    main()
