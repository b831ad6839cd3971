"""Module entry point for the content providers CLI."""
from __future__ import annotations

from .presentation.cli.main import main


if __name__ == "__main__":
    raise SystemExit(main())
