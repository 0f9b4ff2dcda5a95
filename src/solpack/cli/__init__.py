"""Command-line interface for solpack."""

from __future__ import annotations

from solpack.cli.main import cli

__all__ = ["cli"]
