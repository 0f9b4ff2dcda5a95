"""Unit tests for solpack.cli.output."""

from __future__ import annotations

from collections.abc import Iterator
from unittest.mock import patch

import pytest

from solpack.cli import output
from solpack.models import Diagnostic


@pytest.fixture
def plain_console() -> Iterator[None]:
    """Swap in a colorless console writing to the captured stdout."""
    original = output.console
    output.console = output.create_console(no_color=True)
    try:
        yield
    finally:
        output.console = original


class TestCreateConsole:
    """Tests for create_console()."""

    def test_no_color(self) -> None:
        assert output.create_console(no_color=True).no_color is True

    def test_respects_env_var(self) -> None:
        with patch.object(output, "_force_no_color", True):
            assert output.create_console().no_color is True


@pytest.mark.usefixtures("plain_console")
class TestMessages:
    """Tests for the message helpers."""

    def test_success(self, capsys: pytest.CaptureFixture[str]) -> None:
        output.success("Compiled 2 artifacts in 0.100 seconds")

        out = capsys.readouterr().out
        assert "✓" in out
        assert "Compiled 2 artifacts in 0.100 seconds" in out

    def test_error(self, capsys: pytest.CaptureFixture[str]) -> None:
        output.error("Compiler not found: solc")

        out = capsys.readouterr().out
        assert "✗" in out
        assert "Compiler not found: solc" in out

    def test_markup_in_messages_is_escaped(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Compiler text like `uint[2] memory` is printed verbatim."""
        output.success("uint[2] memory [bold]x")

        assert "uint[2] memory [bold]x" in capsys.readouterr().out

    def test_diagnostic_by_severity(self, capsys: pytest.CaptureFixture[str]) -> None:
        output.diagnostic(Diagnostic(severity="warning", formatted_message="unused"))
        output.diagnostic(Diagnostic(severity="error", formatted_message="broken"))

        out = capsys.readouterr().out
        assert "⚠ unused" in out
        assert "✗ broken" in out


class TestSetNoColor:
    def test_replaces_console(self) -> None:
        original = output.console
        try:
            output.set_no_color(True)
            assert output.console is not original
            assert output.console.no_color is True
        finally:
            output.console = original
