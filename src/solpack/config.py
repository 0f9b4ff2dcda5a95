"""Build configuration for solpack.

BuildConfig is the explicit configuration object handed to every stage of
the pipeline. It can be built in code, loaded from ``solpack.yaml`` in the
project directory, and overridden from CLI options.

Example solpack.yaml:

    sources_dir: contracts
    output_dir: build/contracts
    evm_version: london
    optimizer:
      enabled: true
      runs: 1000
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError
import structlog
import yaml

from solpack.errors import ConfigurationError
from solpack.models import CompilerSettings, OptimizerSettings, default_output_selection

logger = structlog.get_logger(__name__)

CONFIG_FILE_NAME = "solpack.yaml"


class BuildConfig(BaseModel):
    """Configuration for a single build run.

    Relative directories are resolved against ``project_dir``.

    Attributes:
        project_dir: Base directory for relative paths.
        sources_dir: Root directory scanned for sources.
        source_pattern: Glob applied under ``sources_dir``.
        output_dir: Directory receiving one JSON file per contract.
        language: Language tag of the compile request.
        evm_version: Target EVM version.
        optimizer: Optimizer settings.
        output_selection: Output selectors requested from the compiler.
        solc: Compiler binary name or path.
        solc_timeout_seconds: Optional timeout for the compiler process.

    Example:
        >>> config = BuildConfig(project_dir=Path("my-project"), evm_version="london")
        >>> config.resolved_sources_dir
        PosixPath('my-project/contracts')
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    project_dir: Path = Field(default=Path("."))
    sources_dir: Path = Field(default=Path("contracts"))
    source_pattern: str = Field(default="**/*.sol", min_length=1)
    output_dir: Path = Field(default=Path("build/contracts"))
    language: Literal["Solidity", "Yul"] = "Solidity"
    evm_version: str = Field(default="byzantium", min_length=1)
    optimizer: OptimizerSettings = Field(default_factory=OptimizerSettings)
    output_selection: dict[str, dict[str, list[str]]] = Field(
        default_factory=default_output_selection,
    )
    solc: str = Field(default="solc", min_length=1)
    solc_timeout_seconds: float | None = Field(default=None, gt=0)

    @property
    def resolved_sources_dir(self) -> Path:
        return self.project_dir / self.sources_dir

    @property
    def resolved_output_dir(self) -> Path:
        return self.project_dir / self.output_dir

    def compiler_settings(self) -> CompilerSettings:
        """Settings block sent to the compiler."""
        return CompilerSettings(
            evm_version=self.evm_version,
            optimizer=self.optimizer,
            output_selection=self.output_selection,
        )

    def with_overrides(self, **overrides: Any) -> BuildConfig:
        """Return a copy with non-None overrides applied and re-validated.

        Raises:
            ConfigurationError: If an override value is invalid.
        """
        values = self.model_dump()
        values.update({k: v for k, v in overrides.items() if v is not None})
        try:
            return BuildConfig.model_validate(values)
        except PydanticValidationError as e:
            raise ConfigurationError(_format_validation_error(e)) from e

    @classmethod
    def from_yaml(cls, path: str | Path, **overrides: Any) -> BuildConfig:
        """Load and validate BuildConfig from a YAML file.

        ``project_dir`` defaults to the directory containing the file.

        Args:
            path: Path to solpack.yaml.
            **overrides: Values taking precedence over the file (None is ignored).

        Raises:
            ConfigurationError: If the file is missing, not valid YAML, or fails
                validation.
        """
        path = Path(path)
        if not path.is_file():
            raise ConfigurationError("Configuration file not found", file_path=str(path))

        try:
            with path.open("r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(
                "Invalid YAML", file_path=str(path), internal_details=str(e)
            ) from e

        if not isinstance(data, dict):
            raise ConfigurationError("Expected a mapping at top level", file_path=str(path))

        data.setdefault("project_dir", str(path.parent))
        data.update({k: v for k, v in overrides.items() if v is not None})

        try:
            config = cls.model_validate(data)
        except PydanticValidationError as e:
            raise ConfigurationError(_format_validation_error(e), file_path=str(path)) from e

        logger.debug("config_loaded", path=str(path), evm_version=config.evm_version)
        return config


def load_config(
    project_dir: str | Path | None = None,
    config_path: str | Path | None = None,
    **overrides: Any,
) -> BuildConfig:
    """Resolve the configuration for a project.

    Uses ``config_path`` when given, else ``<project_dir>/solpack.yaml`` if it
    exists, else defaults. An explicit ``project_dir`` takes precedence over
    the directory of the configuration file.
    """
    if config_path is not None:
        return BuildConfig.from_yaml(config_path, project_dir=project_dir, **overrides)

    base = Path(project_dir) if project_dir is not None else Path(".")
    candidate = base / CONFIG_FILE_NAME
    if candidate.is_file():
        return BuildConfig.from_yaml(candidate, **overrides)

    return BuildConfig(project_dir=base).with_overrides(**overrides)


def _format_validation_error(err: PydanticValidationError) -> str:
    lines = ["Invalid configuration:"]
    for e in err.errors():
        loc = ".".join(str(x) for x in e["loc"])
        lines.append(f"  - {loc}: {e['msg']}")
    return "\n".join(lines)
