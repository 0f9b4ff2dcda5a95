"""Allow ``python -m solpack``."""

from __future__ import annotations

from solpack.cli.main import cli

if __name__ == "__main__":
    cli()
