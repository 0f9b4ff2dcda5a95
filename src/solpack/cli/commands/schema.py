"""solpack schema command - Export JSON Schema."""

from __future__ import annotations

import click

from solpack.cli.errors import EXIT_SYSTEM_ERROR, CLIError
from solpack.cli.output import success


@click.group()
def schema() -> None:
    """Manage JSON Schema for artifact consumers.

    **Commands:**

    - `solpack schema export` - Export the artifact JSON Schema
    """
    pass


@schema.command("export")
@click.option(
    "-o",
    "--output",
    "output_path",
    type=click.Path(dir_okay=False),
    default="./schemas/artifact.schema.json",
    help="Output path [default: ./schemas/artifact.schema.json]",
)
def export_schema(output_path: str) -> None:
    """Export the artifact JSON Schema.

    Describes the `<ContractName>.json` files written by `solpack build`.

    Examples:

        solpack schema export

        solpack schema export --output build/artifact.schema.json
    """
    from solpack.export import export_artifact_schema

    try:
        export_artifact_schema(output_path)
    except OSError:
        raise CLIError(f"Cannot write to: {output_path}", exit_code=EXIT_SYSTEM_ERROR) from None

    success(f"Schema exported to {output_path}")
