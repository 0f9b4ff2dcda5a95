"""Build pipeline for solpack.

Runs the stages in order, each consuming the complete output of the
previous one:

    collect_sources -> build_compile_request -> compiler.compile
        -> parse/check/decompose -> write_artifacts

Any stage failure aborts the run. Files written before the failure stay on
disk.
"""

from __future__ import annotations

import time

import structlog

from solpack.assembler import build_compile_request
from solpack.collector import collect_sources
from solpack.config import BuildConfig
from solpack.decomposer import (
    build_artifacts,
    ensure_no_errors,
    parse_compile_result,
    report_diagnostics,
)
from solpack.invoker import CompilerBackend, SolcCompiler
from solpack.models import BuildReport
from solpack.observability import stage
from solpack.writer import write_artifacts

logger = structlog.get_logger(__name__)


def build(config: BuildConfig, compiler: CompilerBackend | None = None) -> BuildReport:
    """Compile the project described by ``config`` and write its artifacts.

    Args:
        config: Build configuration.
        compiler: Compiler backend. Defaults to SolcCompiler using
            ``config.solc``.

    Returns:
        BuildReport with the artifacts, written paths, diagnostics and
        elapsed wall-clock time.

    Raises:
        SourceReadError: A source file cannot be read.
        ExternalCompilerError: The compiler could not be invoked.
        MalformedCompilerResponseError: The response cannot be used.
        CompilerDiagnosticsError: The compiler reported errors.
        ArtifactWriteError: The output cannot be written.

    Example:
        >>> report = build(BuildConfig(project_dir=Path("my-project")))
        >>> len(report.artifacts)
        3
    """
    started = time.perf_counter()
    if compiler is None:
        compiler = SolcCompiler(config.solc, timeout_seconds=config.solc_timeout_seconds)

    sources_dir = config.resolved_sources_dir
    output_dir = config.resolved_output_dir

    with stage("collect_sources", root=str(sources_dir), pattern=config.source_pattern):
        sources = collect_sources(sources_dir, config.source_pattern)

    if sources:
        with stage("invoke_compiler", source_count=len(sources)):
            request = build_compile_request(
                sources, config.compiler_settings(), language=config.language
            )
            raw = compiler.compile(request.to_json())

        with stage("decompose_output"):
            result = parse_compile_result(raw)
            diagnostics = report_diagnostics(result)
            ensure_no_errors(result)
            artifacts = build_artifacts(result, sources)
    else:
        # solc rejects an empty source set
        diagnostics = []
        artifacts = []

    with stage("write_artifacts", output_dir=str(output_dir), count=len(artifacts)):
        written = write_artifacts(artifacts, output_dir)

    elapsed = time.perf_counter() - started
    logger.info(
        "build_completed",
        artifacts=len(artifacts),
        diagnostics=len(diagnostics),
        elapsed_seconds=round(elapsed, 3),
    )
    return BuildReport(
        artifacts=artifacts,
        written=written,
        diagnostics=diagnostics,
        elapsed_seconds=elapsed,
    )
