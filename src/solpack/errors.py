"""Custom exception hierarchy for solpack.

This module defines the exception classes raised by the build pipeline:
- SolpackError: Base exception for all solpack errors
- ConfigurationError: Invalid solpack.yaml or option values
- ArtifactIOError: Reading sources or writing artifacts failed
- ExternalCompilerError: solc could not be invoked
- MalformedCompilerResponseError: solc output does not match the schema
- CompilerDiagnosticsError: solc reported errors for the sources

User-facing messages are safe to display. Technical details (stderr,
raw exception text) are logged internally via structlog.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from solpack.models import Diagnostic

logger = structlog.get_logger(__name__)


class SolpackError(Exception):
    """Base exception for solpack.

    Args:
        user_message: Safe message to display to the user.
        internal_details: Optional technical details for logging. Logged
            when the error is created, never shown on the console.

    Example:
        >>> raise SolpackError(
        ...     "Build failed",
        ...     internal_details="solc exited with status 139",
        ... )
    """

    def __init__(
        self,
        user_message: str,
        *,
        internal_details: str | None = None,
    ) -> None:
        """Initialize SolpackError with user message and optional internal details.

        Args:
            user_message: Safe message to display to the user.
            internal_details: Technical details for internal logging only.
        """
        super().__init__(user_message)
        self.user_message = user_message
        self.internal_details = internal_details

        if internal_details:
            logger.error(
                "solpack_error",
                error_type=self.__class__.__name__,
                user_message=user_message,
                internal_details=internal_details,
            )


class ConfigurationError(SolpackError):
    """Raised when solpack.yaml cannot be parsed or validated.

    Attributes:
        file_path: Path to the configuration file (if known).
    """

    def __init__(
        self,
        user_message: str,
        *,
        file_path: str | None = None,
        internal_details: str | None = None,
    ) -> None:
        if file_path:
            user_message = f"{user_message} (in {file_path})"
        super().__init__(user_message, internal_details=internal_details)
        self.file_path = file_path


class ArtifactIOError(SolpackError):
    """Raised when a filesystem operation of the pipeline fails.

    Attributes:
        path: The file or directory that could not be accessed.
    """

    def __init__(
        self,
        user_message: str,
        *,
        path: str,
        internal_details: str | None = None,
    ) -> None:
        super().__init__(user_message, internal_details=internal_details)
        self.path = path


class SourceReadError(ArtifactIOError):
    """Raised when a matched source file cannot be read as UTF-8 text."""

    def __init__(self, path: str, *, internal_details: str | None = None) -> None:
        super().__init__(
            f"Cannot read source file: {path}",
            path=path,
            internal_details=internal_details,
        )


class ArtifactWriteError(ArtifactIOError):
    """Raised when the output directory or an artifact file cannot be written."""

    def __init__(self, path: str, *, internal_details: str | None = None) -> None:
        super().__init__(
            f"Cannot write to: {path}",
            path=path,
            internal_details=internal_details,
        )


class ExternalCompilerError(SolpackError):
    """Raised when invoking the external compiler itself fails.

    This is independent of the diagnostics the compiler reports: a missing
    binary, a crash, a timeout or a non-zero exit status all end up here.

    Example:
        >>> raise ExternalCompilerError(
        ...     "solc exited with status 1",
        ...     internal_details="Invalid option: --standard-jsn",
        ... )
    """


class MalformedCompilerResponseError(SolpackError):
    """Raised when the compiler output cannot be used.

    Use this exception when:
    - stdout is not valid JSON
    - the JSON does not match the standard-json output schema
    - cross-referenced keys between ``contracts`` and ``sources`` are missing
    """


class MissingSourceMetaError(MalformedCompilerResponseError):
    """A path in ``contracts`` has no entry in the response's ``sources``.

    Attributes:
        source_path: The path present in ``contracts`` only.
    """

    def __init__(self, source_path: str) -> None:
        super().__init__(
            f"Compiler response has contracts for '{source_path}' but no source metadata"
        )
        self.source_path = source_path


class MissingSourceFileError(MalformedCompilerResponseError):
    """A path in ``contracts`` was never part of the compile request.

    Usually a path normalization mismatch between request and response.

    Attributes:
        source_path: The path the compiler reported.
    """

    def __init__(self, source_path: str) -> None:
        super().__init__(
            f"Compiler response references unknown source file '{source_path}'"
        )
        self.source_path = source_path


class CompilerDiagnosticsError(SolpackError):
    """Raised when the compiler reports diagnostics of severity ``error``.

    Attributes:
        diagnostics: The error-severity diagnostics, in reported order.
    """

    def __init__(self, diagnostics: list[Diagnostic]) -> None:
        count = len(diagnostics)
        noun = "error" if count == 1 else "errors"
        super().__init__(f"Compilation failed with {count} {noun}")
        self.diagnostics = diagnostics
