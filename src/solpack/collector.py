"""Source discovery for solpack.

Finds source files under a root directory and reads them into
``SourceFile`` records keyed by their POSIX path relative to the root.
"""

from __future__ import annotations

from pathlib import Path

import structlog

from solpack.errors import SourceReadError
from solpack.models import SourceFile

logger = structlog.get_logger(__name__)

DEFAULT_SOURCE_PATTERN = "**/*.sol"


def collect_sources(
    root: Path | str,
    pattern: str = DEFAULT_SOURCE_PATTERN,
) -> dict[str, SourceFile]:
    """Read every file under ``root`` matching ``pattern``.

    Args:
        root: Directory to scan recursively.
        pattern: Glob relative to ``root``.

    Returns:
        Mapping of relative POSIX path to SourceFile, sorted by path. Empty
        when ``root`` does not exist or nothing matches.

    Raises:
        SourceReadError: If a matched file cannot be read as UTF-8 text.

    Example:
        >>> sources = collect_sources("contracts")
        >>> sorted(sources)
        ['A.sol', 'tokens/ERC20.sol']
    """
    root = Path(root)
    if not root.is_dir():
        logger.warning("no_sources_found", root=str(root), reason="missing_directory")
        return {}

    sources: dict[str, SourceFile] = {}
    for path in sorted(p for p in root.glob(pattern) if p.is_file()):
        key = path.relative_to(root).as_posix()
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise SourceReadError(str(path), internal_details=repr(e)) from e
        sources[key] = SourceFile(content=content)

    if not sources:
        logger.warning("no_sources_found", root=str(root), pattern=pattern)
    else:
        logger.info("sources_collected", root=str(root), count=len(sources))
    return sources
