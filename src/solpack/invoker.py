"""Compiler invocation for solpack.

The compiler is treated as a pure function from a standard-json request
string to a standard-json response string. Anything implementing
``CompilerBackend`` can be used by the pipeline, which lets tests swap in a
backend returning canned responses.

Architecture:
    ```
    CompilerBackend (Protocol)
        ↑ implements
    SolcCompiler (runs ``solc --standard-json``)
    ```
"""

from __future__ import annotations

import subprocess
from typing import Protocol, runtime_checkable

import structlog

from solpack.errors import ExternalCompilerError

logger = structlog.get_logger(__name__)

DEFAULT_SOLC_BINARY = "solc"


@runtime_checkable
class CompilerBackend(Protocol):
    """Interface of the external compiler.

    Implementations take the serialized request and return the serialized
    response. They raise ExternalCompilerError when the compiler could not
    produce a response at all; diagnostics about the sources belong in the
    response, not in exceptions.
    """

    def compile(self, request: str) -> str:
        """Compile a standard-json request.

        Args:
            request: UTF-8 JSON string of the CompileRequest.

        Returns:
            UTF-8 JSON string of the compiler's response.

        Raises:
            ExternalCompilerError: If the compiler could not be invoked.
        """
        ...


class SolcCompiler:
    """Run the ``solc`` binary in standard-json mode.

    The request is written to stdin and the response read from stdout. The
    call blocks until the process exits.

    Attributes:
        binary: Name or path of the solc executable.
        timeout_seconds: Optional limit on the process runtime.

    Example:
        >>> compiler = SolcCompiler("/usr/local/bin/solc")
        >>> raw = compiler.compile(request.to_json())
    """

    def __init__(
        self,
        binary: str = DEFAULT_SOLC_BINARY,
        timeout_seconds: float | None = None,
    ) -> None:
        self.binary = binary
        self.timeout_seconds = timeout_seconds

    def compile(self, request: str) -> str:
        logger.info("compiler_invoked", binary=self.binary, request_bytes=len(request))
        try:
            result = subprocess.run(
                [self.binary, "--standard-json"],
                input=request,
                capture_output=True,
                text=True,
                encoding="utf-8",
                timeout=self.timeout_seconds,
                check=False,
            )
        except FileNotFoundError as e:
            raise ExternalCompilerError(
                f"Compiler not found: {self.binary}",
                internal_details=repr(e),
            ) from e
        except PermissionError as e:
            raise ExternalCompilerError(
                f"Compiler is not executable: {self.binary}",
                internal_details=repr(e),
            ) from e
        except OSError as e:
            # e.g. ENOEXEC for a binary built for another architecture
            raise ExternalCompilerError(
                f"Compiler could not be started: {self.binary}",
                internal_details=repr(e),
            ) from e
        except UnicodeDecodeError as e:
            raise ExternalCompilerError(
                "Compiler output is not valid UTF-8",
                internal_details=repr(e),
            ) from e
        except subprocess.TimeoutExpired as e:
            raise ExternalCompilerError(
                f"Compiler timed out after {self.timeout_seconds} seconds",
                internal_details=repr(e),
            ) from e

        if result.returncode != 0:
            raise ExternalCompilerError(
                f"Compiler exited with status {result.returncode}",
                internal_details=result.stderr.strip() or None,
            )

        logger.info("compiler_finished", response_bytes=len(result.stdout))
        return result.stdout

    def __repr__(self) -> str:
        return f"SolcCompiler(binary={self.binary!r}, timeout_seconds={self.timeout_seconds!r})"
