"""solpack build command - Compile contracts into artifact files."""

from __future__ import annotations

import click

from solpack.cli.errors import to_cli_error
from solpack.cli.output import success


@click.command("build")
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Path to solpack.yaml [default: <project-dir>/solpack.yaml if present]",
)
@click.option(
    "-p",
    "--project-dir",
    "project_dir",
    type=click.Path(file_okay=False),
    default=None,
    help="Project directory [default: .]",
)
@click.option(
    "-s",
    "--sources",
    "sources_dir",
    type=click.Path(),
    default=None,
    help="Source directory, relative to the project [default: contracts]",
)
@click.option(
    "-o",
    "--output",
    "output_dir",
    type=click.Path(),
    default=None,
    help="Artifact directory, relative to the project [default: build/contracts]",
)
@click.option(
    "--evm-version",
    "evm_version",
    type=str,
    default=None,
    help="Target EVM version [default: byzantium]",
)
@click.option(
    "--optimize/--no-optimize",
    "optimize",
    default=None,
    help="Enable the solc optimizer [default: disabled]",
)
@click.option(
    "--solc",
    "solc",
    type=str,
    default=None,
    help="solc binary name or path [default: solc]",
)
@click.option(
    "-v",
    "--verbose",
    is_flag=True,
    default=False,
    help="Log every pipeline stage.",
)
def build_cmd(
    config_path: str | None,
    project_dir: str | None,
    sources_dir: str | None,
    output_dir: str | None,
    evm_version: str | None,
    optimize: bool | None,
    solc: str | None,
    verbose: bool,
) -> None:
    """Compile Solidity sources into one JSON artifact per contract.

    Collects every `.sol` file under the source directory, compiles them
    with solc in standard-json mode and writes `<ContractName>.json` files
    containing bytecode, source maps, ABI and AST.

    Examples:

        solpack build

        solpack build --evm-version london --optimize

        solpack build --project-dir my-dapp --output out/artifacts
    """
    # Import here to avoid heavy imports at CLI startup
    from solpack.config import load_config
    from solpack.errors import SolpackError
    from solpack.observability import configure_logging
    from solpack.pipeline import build

    configure_logging(log_level="DEBUG" if verbose else "WARNING")

    try:
        config = load_config(
            project_dir,
            config_path,
            sources_dir=sources_dir,
            output_dir=output_dir,
            evm_version=evm_version,
            solc=solc,
        )
        if optimize is not None:
            config = config.with_overrides(
                optimizer={**config.optimizer.model_dump(), "enabled": optimize}
            )

        report = build(config)

    except SolpackError as e:
        raise to_cli_error(e) from None

    success(
        f"Compiled {len(report.artifacts)} artifacts in {report.elapsed_seconds:.3f} seconds"
    )
