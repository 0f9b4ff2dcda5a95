"""Data models for the solpack build pipeline.

Two families of models live here:

- Request/response models mirroring solc's standard-json descriptor. Field
  names on the wire are camelCase; Python attributes are snake_case and the
  mapping is handled by pydantic aliases.
- The Artifact record written to disk, one per compiled contract.

Compiler response models ignore unknown fields (solc emits more than we
request in some versions). Models produced by solpack forbid them.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

DEFAULT_OUTPUT_SELECTION: dict[str, dict[str, list[str]]] = {
    "*": {
        "": ["ast"],
        "*": [
            "abi",
            "evm.bytecode.object",
            "evm.bytecode.sourceMap",
            "evm.deployedBytecode.object",
            "evm.deployedBytecode.sourceMap",
        ],
    },
}

SEVERITY_ERROR = "error"


def default_output_selection() -> dict[str, dict[str, list[str]]]:
    return {
        pattern: {name: list(fields) for name, fields in selectors.items()}
        for pattern, selectors in DEFAULT_OUTPUT_SELECTION.items()
    }


class _SolpackModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
    )


class _CompilerModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        alias_generator=to_camel,
        populate_by_name=True,
    )


# Request side


class SourceFile(_SolpackModel):
    """A source file as sent to the compiler.

    The path is not stored here; it is the key of the mapping that holds
    the SourceFile.
    """

    content: str


class OptimizerSettings(_SolpackModel):
    """solc optimizer settings."""

    enabled: bool = Field(default=False, description="Enable the bytecode optimizer")
    runs: int = Field(
        default=200,
        ge=1,
        description="Expected number of executions of each opcode",
    )


class CompilerSettings(_SolpackModel):
    """The ``settings`` block of a standard-json request.

    Attributes:
        evm_version: Target EVM version (e.g. "byzantium", "london").
        optimizer: Optimizer settings.
        output_selection: Output selectors, per file then per contract.
    """

    evm_version: str = Field(default="byzantium", min_length=1)
    optimizer: OptimizerSettings = Field(default_factory=OptimizerSettings)
    output_selection: dict[str, dict[str, list[str]]] = Field(
        default_factory=default_output_selection,
    )


class CompileRequest(_SolpackModel):
    """Complete standard-json input descriptor.

    Example:
        >>> request = CompileRequest(
        ...     settings=CompilerSettings(),
        ...     sources={"A.sol": SourceFile(content="contract Foo {}")},
        ... )
        >>> request.to_json()[:24]
        '{"language":"Solidity","'
    """

    language: Literal["Solidity", "Yul"] = "Solidity"
    settings: CompilerSettings = Field(default_factory=CompilerSettings)
    sources: dict[str, SourceFile] = Field(default_factory=dict)

    def to_json(self) -> str:
        """Serialize to the JSON string passed to the compiler."""
        return self.model_dump_json(by_alias=True)


# Response side


class BytecodeOutput(_CompilerModel):
    object: str = ""
    source_map: str = ""


class EvmOutput(_CompilerModel):
    bytecode: BytecodeOutput = Field(default_factory=BytecodeOutput)
    deployed_bytecode: BytecodeOutput = Field(default_factory=BytecodeOutput)


class ContractOutput(_CompilerModel):
    """Compiled output for a single contract."""

    evm: EvmOutput = Field(default_factory=EvmOutput)
    abi: Any = Field(default_factory=list)


class SourceMeta(_CompilerModel):
    """Per-file compiler output, shared by every contract in the file."""

    id: int | None = None
    ast: Any = None


class Diagnostic(_CompilerModel):
    """A message reported by the compiler about the compilation."""

    severity: str
    formatted_message: str = ""
    message: str = ""
    type: str = ""

    @property
    def is_error(self) -> bool:
        return self.severity == SEVERITY_ERROR

    @property
    def text(self) -> str:
        """Best available human-readable text for the diagnostic."""
        return (self.formatted_message or self.message).rstrip()


class CompileResult(_CompilerModel):
    """Parsed standard-json output.

    solc leaves out ``contracts`` and ``errors`` when there is nothing to
    report, so every section defaults to empty.
    """

    contracts: dict[str, dict[str, ContractOutput]] = Field(default_factory=dict)
    sources: dict[str, SourceMeta] = Field(default_factory=dict)
    errors: list[Diagnostic] = Field(default_factory=list)

    @property
    def error_diagnostics(self) -> list[Diagnostic]:
        return [d for d in self.errors if d.is_error]


# Artifacts


class Artifact(_SolpackModel):
    """Flattened, self-contained output record for one contract.

    Serialized with camelCase keys (``contractName``, ``deployedBytecode``,
    ...) to ``<contractName>.json``.
    """

    contract_name: str = Field(..., min_length=1)
    file_name: str = Field(..., min_length=1)
    source_path: str = Field(..., min_length=1)
    source: str
    bytecode: str
    deployed_bytecode: str
    source_map: str
    deployed_source_map: str
    abi: Any
    ast: Any

    def to_json(self) -> str:
        """Pretty-printed JSON document for the artifact file."""
        return self.model_dump_json(by_alias=True, indent=2) + "\n"


class BuildReport(BaseModel):
    """Outcome of a successful build.

    Attributes:
        artifacts: Artifacts produced, in decomposition order.
        written: Files written, one per artifact (duplicates on collision).
        diagnostics: Every diagnostic reported by the compiler.
        elapsed_seconds: Wall-clock duration of the build.
    """

    model_config = ConfigDict(frozen=True)

    artifacts: list[Artifact] = Field(default_factory=list)
    written: list[Path] = Field(default_factory=list)
    diagnostics: list[Diagnostic] = Field(default_factory=list)
    elapsed_seconds: float = 0.0
