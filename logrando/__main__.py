"""
Module entry-point that makes the package runnable with

    python -m logrando
    python -m logrando.cli

The behaviour is identical to the *logrando-cli* console script because the
Click **group** imported below performs all dispatching.
"""

from logrando.cli import main

if __name__ == "__main__":  # pragma: no cover
    main()
