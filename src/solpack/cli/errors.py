"""CLI error handling for solpack.

Wraps solpack exceptions into user-friendly messages with exit codes.
"""

from __future__ import annotations

import click

from solpack.cli.output import diagnostic, error
from solpack.errors import (
    ArtifactIOError,
    CompilerDiagnosticsError,
    ExternalCompilerError,
    SolpackError,
)

# Exit codes following sysexits.h convention
EXIT_USER_ERROR = 1  # Compile errors, malformed response, bad configuration
EXIT_SYSTEM_ERROR = 2  # Filesystem failure, compiler cannot be run


class CLIError(click.ClickException):
    """CLI-specific exception with exit code support.

    Attributes:
        message: User-facing error message.
        exit_code: Exit code for the CLI (default: 1).
    """

    def __init__(self, message: str, exit_code: int = EXIT_USER_ERROR) -> None:
        super().__init__(message)
        self.exit_code = exit_code

    def show(self, file: object = None) -> None:
        """Display the error message using Rich formatting.

        Args:
            file: Output file (unused, for Click compatibility).
        """
        error(self.format_message())


def exit_code_for(err: SolpackError) -> int:
    """Map a solpack error to a process exit code."""
    if isinstance(err, (ArtifactIOError, ExternalCompilerError)):
        return EXIT_SYSTEM_ERROR
    return EXIT_USER_ERROR


def to_cli_error(err: SolpackError) -> CLIError:
    """Convert a solpack error to a CLIError, printing compiler diagnostics first."""
    if isinstance(err, CompilerDiagnosticsError):
        for diag in err.diagnostics:
            diagnostic(diag)
    return CLIError(err.user_message, exit_code=exit_code_for(err))
