"""CLI command modules.

Commands are loaded lazily by ``solpack.cli.main.LazyGroup``.
"""

from __future__ import annotations

__all__: list[str] = []
