"""solpack: Solidity build artifacts from solc standard-json output.

This package provides:
- collect_sources / build_compile_request: Assemble the compiler input
- CompilerBackend / SolcCompiler: Invoke the external compiler
- parse_compile_result / build_artifacts: Decompose the compiler output
- write_artifacts: One JSON file per compiled contract
- build: The whole pipeline driven by a BuildConfig
"""

from __future__ import annotations

__version__ = "0.1.0"

from solpack.assembler import build_compile_request
from solpack.collector import collect_sources
from solpack.config import BuildConfig, load_config
from solpack.decomposer import (
    build_artifacts,
    ensure_no_errors,
    parse_compile_result,
    report_diagnostics,
)
from solpack.errors import (
    ArtifactIOError,
    ArtifactWriteError,
    CompilerDiagnosticsError,
    ConfigurationError,
    ExternalCompilerError,
    MalformedCompilerResponseError,
    MissingSourceFileError,
    MissingSourceMetaError,
    SolpackError,
    SourceReadError,
)
from solpack.export import export_artifact_schema
from solpack.invoker import CompilerBackend, SolcCompiler
from solpack.models import (
    Artifact,
    BuildReport,
    CompileRequest,
    CompileResult,
    CompilerSettings,
    ContractOutput,
    Diagnostic,
    OptimizerSettings,
    SourceFile,
    SourceMeta,
)
from solpack.pipeline import build
from solpack.writer import write_artifacts

__all__ = [
    "__version__",
    # Pipeline
    "build",
    "BuildConfig",
    "load_config",
    "collect_sources",
    "build_compile_request",
    "CompilerBackend",
    "SolcCompiler",
    "parse_compile_result",
    "report_diagnostics",
    "ensure_no_errors",
    "build_artifacts",
    "write_artifacts",
    "export_artifact_schema",
    # Models
    "Artifact",
    "BuildReport",
    "CompileRequest",
    "CompileResult",
    "CompilerSettings",
    "ContractOutput",
    "Diagnostic",
    "OptimizerSettings",
    "SourceFile",
    "SourceMeta",
    # Errors
    "SolpackError",
    "ConfigurationError",
    "ArtifactIOError",
    "SourceReadError",
    "ArtifactWriteError",
    "ExternalCompilerError",
    "MalformedCompilerResponseError",
    "MissingSourceMetaError",
    "MissingSourceFileError",
    "CompilerDiagnosticsError",
]
