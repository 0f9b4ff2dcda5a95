"""Shared pytest fixtures for solpack tests.

Provides a canned-response compiler backend, response builders and
project directory factories.
"""

from __future__ import annotations

from collections.abc import Callable
import json
from pathlib import Path
import sys
from typing import Any

from click.testing import CliRunner
import pytest
import structlog

FOO_SOURCE = "pragma solidity ^0.4.24;\n\ncontract Foo {\n    uint256 public x;\n}\n"
BAR_SOURCE = "pragma solidity ^0.4.24;\n\ncontract Bar {}\n\ncontract Baz {}\n"


class CannedCompiler:
    """Compiler backend returning a fixed response and recording requests."""

    def __init__(self, response: dict[str, Any] | str) -> None:
        self.response = response if isinstance(response, str) else json.dumps(response)
        self.requests: list[str] = []

    def compile(self, request: str) -> str:
        self.requests.append(request)
        return self.response

    @property
    def last_request(self) -> dict[str, Any]:
        return json.loads(self.requests[-1])  # type: ignore[no-any-return]


def contract_output(name: str, *, abi: list[Any] | None = None) -> dict[str, Any]:
    """Standard-json output for one contract with recognizable values."""
    return {
        "abi": abi if abi is not None else [{"type": "constructor", "inputs": []}],
        "evm": {
            "bytecode": {"object": f"6080{name.lower()}", "sourceMap": f"0:10:{name}"},
            "deployedBytecode": {
                "object": f"6080deployed{name.lower()}",
                "sourceMap": f"20:5:{name}",
            },
        },
    }


def solc_response(
    contracts: dict[str, list[str]],
    *,
    errors: list[dict[str, Any]] | None = None,
    extra_sources: list[str] | None = None,
) -> dict[str, Any]:
    """Build a standard-json response.

    Args:
        contracts: Source path -> contract names declared in it.
        errors: Diagnostics to include.
        extra_sources: Paths listed in ``sources`` only.
    """
    paths = list(contracts) + list(extra_sources or [])
    response: dict[str, Any] = {
        "contracts": {
            path: {name: contract_output(name) for name in names}
            for path, names in contracts.items()
        },
        "sources": {
            path: {"id": i, "ast": {"nodeType": "SourceUnit", "absolutePath": path}}
            for i, path in enumerate(paths)
        },
    }
    if errors is not None:
        response["errors"] = errors
    return response


@pytest.fixture(autouse=True)
def configure_structlog_for_tests() -> None:
    """Configure structlog to output to stdout for test capture."""
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=False,  # Important for test isolation
    )


@pytest.fixture(autouse=True)
def keep_test_logging_config(monkeypatch: pytest.MonkeyPatch) -> None:
    """Stop CLI commands from replacing the test structlog configuration.

    configure_logging() caches loggers on first use, which would outlive the
    test and hide later log events from capture_logs().
    """
    monkeypatch.setattr("solpack.observability.configure_logging", lambda **kwargs: None)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Create a Click test runner."""
    return CliRunner()


@pytest.fixture
def make_project(tmp_path: Path) -> Callable[[dict[str, str]], Path]:
    """Factory fixture creating a project with sources under ``contracts/``.

    Returns:
        Function taking ``{relative path: content}`` and returning the
        project directory.
    """

    def _make(files: dict[str, str], sources_dir: str = "contracts") -> Path:
        project = tmp_path / "project"
        root = project / sources_dir
        root.mkdir(parents=True, exist_ok=True)
        for rel, content in files.items():
            path = root / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        return project

    return _make


@pytest.fixture
def foo_project(make_project: Callable[[dict[str, str]], Path]) -> Path:
    """Project with ``contracts/A.sol`` declaring ``Foo``."""
    return make_project({"A.sol": FOO_SOURCE})


@pytest.fixture
def foo_compiler() -> CannedCompiler:
    """Compiler answering for ``A.sol`` -> ``Foo``."""
    return CannedCompiler(solc_response({"A.sol": ["Foo"]}))
