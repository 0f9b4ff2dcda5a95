"""Unit tests for solpack.export."""

from __future__ import annotations

import json
from pathlib import Path

from solpack.export import ARTIFACT_SCHEMA_ID, SCHEMA_DRAFT, export_artifact_schema


class TestExportArtifactSchema:
    """Tests for export_artifact_schema()."""

    def test_schema_metadata(self) -> None:
        schema = export_artifact_schema()

        assert schema["$schema"] == SCHEMA_DRAFT
        assert schema["$id"] == ARTIFACT_SCHEMA_ID
        assert schema["title"] == "Artifact"

    def test_uses_camel_case_properties(self) -> None:
        """Property names match the keys of the artifact files."""
        schema = export_artifact_schema()

        assert set(schema["properties"]) == {
            "contractName",
            "fileName",
            "sourcePath",
            "source",
            "bytecode",
            "deployedBytecode",
            "sourceMap",
            "deployedSourceMap",
            "abi",
            "ast",
        }
        assert "contractName" in schema["required"]

    def test_writes_file(self, tmp_path: Path) -> None:
        """The schema is written as JSON, creating parent directories."""
        target = tmp_path / "schemas" / "artifact.schema.json"

        schema = export_artifact_schema(target)

        assert json.loads(target.read_text()) == schema
