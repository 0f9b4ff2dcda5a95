"""Assemble the standard-json compile request."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Literal

from solpack.models import CompilerSettings, CompileRequest, SourceFile


def build_compile_request(
    sources: Mapping[str, SourceFile],
    settings: CompilerSettings,
    language: Literal["Solidity", "Yul"] = "Solidity",
) -> CompileRequest:
    """Combine sources and compiler settings into a single request.

    Args:
        sources: Source files keyed by path. The keys are sent verbatim and
            come back as the keys of the compiler's response.
        settings: Target EVM version, optimizer and output selection.
        language: Language tag of the request.

    Returns:
        Immutable CompileRequest; call ``to_json()`` for the wire format.

    Example:
        >>> request = build_compile_request(
        ...     {"A.sol": SourceFile(content="contract Foo {}")},
        ...     CompilerSettings(evm_version="london"),
        ... )
        >>> request.settings.evm_version
        'london'
    """
    return CompileRequest(
        language=language,
        settings=settings,
        sources=dict(sources),
    )
