"""JSON Schema export for the artifact record.

Lets consumers of ``build/contracts/*.json`` (deploy scripts, TypeScript
tooling) validate artifacts without importing solpack.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from solpack.models import Artifact

SCHEMA_DRAFT = "https://json-schema.org/draft/2020-12/schema"
ARTIFACT_SCHEMA_ID = "https://solpack.dev/schemas/artifact.schema.json"


def export_artifact_schema(output_path: Path | str | None = None) -> dict[str, Any]:
    """Export the Artifact JSON Schema (camelCase field names).

    Args:
        output_path: Optional path to write the schema to. Parent directories
            are created as needed.

    Returns:
        Dictionary containing the JSON Schema.

    Example:
        >>> schema = export_artifact_schema()
        >>> schema["required"][:2]
        ['contractName', 'fileName']
    """
    schema = Artifact.model_json_schema(by_alias=True)
    schema["$schema"] = SCHEMA_DRAFT
    schema["$id"] = ARTIFACT_SCHEMA_ID

    if output_path is not None:
        path = Path(output_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(schema, indent=2) + "\n", encoding="utf-8")

    return schema
