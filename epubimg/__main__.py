"""Module entrypoint for running epubimg as ``python -m epubimg``."""

from __future__ import annotations

from epubimg.cli import main


if __name__ == "__main__":
    main()
