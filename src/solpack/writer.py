"""Write artifacts to the output directory."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

import structlog

from solpack.errors import ArtifactWriteError
from solpack.models import Artifact

logger = structlog.get_logger(__name__)

ARTIFACT_EXTENSION = ".json"


def artifact_path(output_dir: Path, artifact: Artifact) -> Path:
    """Return ``<output_dir>/<contractName>.json``."""
    return output_dir / f"{artifact.contract_name}{ARTIFACT_EXTENSION}"


def ensure_output_dir(output_dir: Path | str) -> Path:
    """Create the output directory and its parents if needed.

    Raises:
        ArtifactWriteError: If the directory cannot be created, e.g. a regular
            file already occupies the path.
    """
    output_dir = Path(output_dir)
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ArtifactWriteError(str(output_dir), internal_details=repr(e)) from e
    return output_dir


def write_artifacts(artifacts: Sequence[Artifact], output_dir: Path | str) -> list[Path]:
    """Write each artifact as pretty-printed JSON.

    Contracts with the same name overwrite each other; the last one written
    wins and a warning names both source paths. A failed write aborts the
    remaining writes and leaves earlier files in place.

    Args:
        artifacts: Artifacts to write, in order.
        output_dir: Target directory, created if missing.

    Returns:
        Paths written, one per artifact.

    Raises:
        ArtifactWriteError: If the directory or a file cannot be written.
    """
    output_dir = ensure_output_dir(output_dir)

    written: list[Path] = []
    seen: dict[str, str] = {}
    for artifact in artifacts:
        previous = seen.get(artifact.contract_name)
        if previous is not None:
            logger.warning(
                "artifact_name_collision",
                contract=artifact.contract_name,
                overwritten_source=previous,
                source=artifact.source_path,
            )
        seen[artifact.contract_name] = artifact.source_path

        path = artifact_path(output_dir, artifact)
        try:
            path.write_text(artifact.to_json(), encoding="utf-8")
        except OSError as e:
            raise ArtifactWriteError(str(path), internal_details=repr(e)) from e

        logger.debug("artifact_written", contract=artifact.contract_name, path=str(path))
        written.append(path)

    return written
