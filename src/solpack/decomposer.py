"""Turn the compiler's response into Artifact records.

The response nests contracts as ``path -> name -> output``. Decomposition
walks the outer mapping once, resolves the per-file data (source metadata
and original text) once per path, and flat-maps every contract under that
path into an Artifact.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from pathlib import PurePosixPath

from pydantic import ValidationError as PydanticValidationError
import structlog

from solpack.errors import (
    CompilerDiagnosticsError,
    MalformedCompilerResponseError,
    MissingSourceFileError,
    MissingSourceMetaError,
)
from solpack.models import (
    Artifact,
    CompileResult,
    ContractOutput,
    Diagnostic,
    SourceFile,
    SourceMeta,
)

logger = structlog.get_logger(__name__)


def parse_compile_result(raw: str) -> CompileResult:
    """Parse the compiler's JSON response.

    Raises:
        MalformedCompilerResponseError: If ``raw`` is not JSON or does not
            match the standard-json output schema.
    """
    try:
        return CompileResult.model_validate_json(raw)
    except PydanticValidationError as e:
        raise MalformedCompilerResponseError(
            "Compiler returned a malformed response",
            internal_details=str(e),
        ) from e


def report_diagnostics(result: CompileResult) -> list[Diagnostic]:
    """Log every diagnostic in the response and return them."""
    for diagnostic in result.errors:
        log = logger.error if diagnostic.is_error else logger.warning
        log(
            "compiler_diagnostic",
            severity=diagnostic.severity,
            type=diagnostic.type or None,
            message=diagnostic.text,
        )
    return list(result.errors)


def ensure_no_errors(result: CompileResult) -> None:
    """Abort when the compiler reported any error-severity diagnostic.

    Raises:
        CompilerDiagnosticsError: Carrying the error diagnostics.
    """
    errors = result.error_diagnostics
    if errors:
        raise CompilerDiagnosticsError(errors)


def iter_contracts(
    result: CompileResult,
    sources: Mapping[str, SourceFile],
) -> Iterator[tuple[str, str, SourceMeta, SourceFile, ContractOutput]]:
    """Flatten ``contracts`` into ``(path, name, meta, source, contract)`` tuples.

    Raises:
        MissingSourceMetaError: A path has no entry in ``result.sources``.
        MissingSourceFileError: A path was not part of the request.
    """
    for path, contracts in result.contracts.items():
        meta = result.sources.get(path)
        if meta is None:
            raise MissingSourceMetaError(path)
        source = sources.get(path)
        if source is None:
            raise MissingSourceFileError(path)
        for name, contract in contracts.items():
            yield path, name, meta, source, contract


def build_artifact(
    path: str,
    name: str,
    meta: SourceMeta,
    source: SourceFile,
    contract: ContractOutput,
) -> Artifact:
    """Merge contract-level and file-level output into one Artifact.

    Raises:
        MalformedCompilerResponseError: The contract name cannot be used as a
            file name, or the merged values do not form a valid Artifact.
    """
    # The name becomes <output_dir>/<name>.json
    if name in (".", "..") or "/" in name or "\\" in name:
        raise MalformedCompilerResponseError(
            f"Compiler response has an invalid contract name '{name}' in '{path}'"
        )

    evm = contract.evm
    try:
        return Artifact(
            contract_name=name,
            file_name=PurePosixPath(path).name,
            source_path=path,
            source=source.content,
            bytecode=evm.bytecode.object,
            deployed_bytecode=evm.deployed_bytecode.object,
            source_map=evm.bytecode.source_map,
            deployed_source_map=evm.deployed_bytecode.source_map,
            abi=contract.abi,
            ast=meta.ast,
        )
    except PydanticValidationError as e:
        raise MalformedCompilerResponseError(
            f"Compiler response has an unusable contract entry '{name}' in '{path}'",
            internal_details=str(e),
        ) from e


def build_artifacts(
    result: CompileResult,
    sources: Mapping[str, SourceFile],
) -> list[Artifact]:
    """Build one Artifact per ``(path, contract name)`` in the response.

    Every artifact is built before any is returned, so an inconsistent
    response fails before anything reaches the disk.

    Args:
        result: Parsed compiler response.
        sources: The source mapping sent in the request.

    Returns:
        Artifacts in the response's iteration order.

    Raises:
        MissingSourceMetaError: A path in ``contracts`` is absent from ``sources``
            of the response.
        MissingSourceFileError: A path in ``contracts`` was not in the request.
        MalformedCompilerResponseError: A contract entry cannot become an
            Artifact, e.g. an empty name or one containing a path separator.

    Example:
        >>> artifacts = build_artifacts(result, {"A.sol": SourceFile(content="...")})
        >>> [a.contract_name for a in artifacts]
        ['Foo']
    """
    artifacts = [build_artifact(*entry) for entry in iter_contracts(result, sources)]
    logger.info("artifacts_built", count=len(artifacts))
    return artifacts
