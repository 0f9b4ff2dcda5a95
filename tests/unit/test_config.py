"""Unit tests for solpack.config."""

from __future__ import annotations

from pathlib import Path

from pydantic import ValidationError as PydanticValidationError
import pytest

from solpack.config import CONFIG_FILE_NAME, BuildConfig, load_config
from solpack.errors import ConfigurationError
from solpack.models import DEFAULT_OUTPUT_SELECTION, OptimizerSettings


class TestBuildConfig:
    """Tests for BuildConfig defaults and helpers."""

    def test_defaults(self) -> None:
        """Defaults reproduce the classic contracts/ -> build/contracts/ layout."""
        config = BuildConfig()

        assert config.resolved_sources_dir == Path("contracts")
        assert config.resolved_output_dir == Path("build/contracts")
        assert config.source_pattern == "**/*.sol"
        assert config.evm_version == "byzantium"
        assert config.optimizer.enabled is False
        assert config.solc == "solc"
        assert config.output_selection == DEFAULT_OUTPUT_SELECTION

    def test_paths_resolve_against_project_dir(self, tmp_path: Path) -> None:
        config = BuildConfig(project_dir=tmp_path, sources_dir=Path("src"))

        assert config.resolved_sources_dir == tmp_path / "src"
        assert config.resolved_output_dir == tmp_path / "build" / "contracts"

    def test_absolute_output_dir_is_kept(self, tmp_path: Path) -> None:
        config = BuildConfig(project_dir=Path("proj"), output_dir=tmp_path / "out")

        assert config.resolved_output_dir == tmp_path / "out"

    def test_compiler_settings(self) -> None:
        """The settings block mirrors the configuration."""
        config = BuildConfig(evm_version="london", optimizer=OptimizerSettings(enabled=True))

        settings = config.compiler_settings()

        assert settings.evm_version == "london"
        assert settings.optimizer.enabled is True

    def test_is_frozen(self) -> None:
        config = BuildConfig()

        with pytest.raises(PydanticValidationError):
            config.evm_version = "london"  # type: ignore[misc]

    def test_rejects_unknown_fields(self) -> None:
        with pytest.raises(PydanticValidationError):
            BuildConfig(evm="london")  # type: ignore[call-arg]

    def test_with_overrides_ignores_none(self) -> None:
        """None means 'not given' and keeps the current value."""
        config = BuildConfig(evm_version="london").with_overrides(evm_version=None, solc="solc-8")

        assert config.evm_version == "london"
        assert config.solc == "solc-8"

    def test_with_overrides_validates(self) -> None:
        with pytest.raises(ConfigurationError, match="evm_version"):
            BuildConfig().with_overrides(evm_version="")


class TestFromYaml:
    """Tests for BuildConfig.from_yaml()."""

    def test_loads_values(self, tmp_path: Path) -> None:
        """Values from the file are applied and project_dir defaults to its folder."""
        path = tmp_path / CONFIG_FILE_NAME
        path.write_text(
            "sources_dir: src\n"
            "evm_version: london\n"
            "optimizer:\n"
            "  enabled: true\n"
            "  runs: 1000\n"
        )

        config = BuildConfig.from_yaml(path)

        assert config.project_dir == tmp_path
        assert config.resolved_sources_dir == tmp_path / "src"
        assert config.evm_version == "london"
        assert config.optimizer == OptimizerSettings(enabled=True, runs=1000)

    def test_empty_file_uses_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / CONFIG_FILE_NAME
        path.write_text("")

        assert BuildConfig.from_yaml(path).evm_version == "byzantium"

    def test_overrides_take_precedence(self, tmp_path: Path) -> None:
        path = tmp_path / CONFIG_FILE_NAME
        path.write_text("evm_version: london\n")

        config = BuildConfig.from_yaml(path, evm_version="paris", solc=None)

        assert config.evm_version == "paris"
        assert config.solc == "solc"

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError, match="not found"):
            BuildConfig.from_yaml(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / CONFIG_FILE_NAME
        path.write_text("evm_version: [unclosed\n")

        with pytest.raises(ConfigurationError, match="Invalid YAML"):
            BuildConfig.from_yaml(path)

    def test_non_mapping(self, tmp_path: Path) -> None:
        path = tmp_path / CONFIG_FILE_NAME
        path.write_text("- just\n- a list\n")

        with pytest.raises(ConfigurationError, match="mapping"):
            BuildConfig.from_yaml(path)

    def test_unknown_key_reports_field(self, tmp_path: Path) -> None:
        """Validation errors name the offending field and the file."""
        path = tmp_path / CONFIG_FILE_NAME
        path.write_text("evm_verison: london\n")

        with pytest.raises(ConfigurationError) as exc_info:
            BuildConfig.from_yaml(path)

        message = str(exc_info.value)
        assert "evm_verison" in message
        assert str(path) in message
        assert exc_info.value.file_path == str(path)


class TestLoadConfig:
    """Tests for load_config()."""

    def test_without_file_uses_defaults(self, tmp_path: Path) -> None:
        config = load_config(tmp_path)

        assert config.project_dir == tmp_path
        assert config.evm_version == "byzantium"

    def test_picks_up_project_file(self, tmp_path: Path) -> None:
        (tmp_path / CONFIG_FILE_NAME).write_text("evm_version: london\n")

        assert load_config(tmp_path).evm_version == "london"

    def test_explicit_path(self, tmp_path: Path) -> None:
        """Relative paths in the file resolve against the file's directory."""
        custom = tmp_path / "ci.yaml"
        custom.write_text("output_dir: out\n")

        config = load_config(config_path=custom)

        assert config.resolved_output_dir == tmp_path / "out"

    def test_explicit_project_dir_wins_over_file_location(self, tmp_path: Path) -> None:
        custom = tmp_path / "ci.yaml"
        custom.write_text("output_dir: out\n")

        config = load_config(tmp_path / "elsewhere", config_path=custom)

        assert config.resolved_output_dir == tmp_path / "elsewhere" / "out"

    def test_overrides_apply_without_file(self, tmp_path: Path) -> None:
        config = load_config(tmp_path, output_dir="artifacts")

        assert config.resolved_output_dir == tmp_path / "artifacts"
