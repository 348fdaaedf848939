"""CLI entrypoint for the crossword placement engine."""

import sys

from korsord.cli import main


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
