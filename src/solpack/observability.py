"""Structured logging and OpenTelemetry spans for solpack.

This module provides:
- Structured logging setup via structlog
- A ``stage`` context manager wrapping each pipeline stage in a span
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
import logging
import sys
from typing import TYPE_CHECKING, Any

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode
import structlog

if TYPE_CHECKING:
    from opentelemetry.trace import Span, Tracer
    from structlog.stdlib import BoundLogger

TRACER_NAME = "solpack"

_tracer: Tracer | None = None


def get_logger(name: str = TRACER_NAME) -> BoundLogger:
    """Return a structlog logger bound to ``name``."""
    return structlog.get_logger(name)  # type: ignore[no-any-return]


def get_tracer() -> Tracer:
    """Get the OpenTelemetry tracer for solpack.

    Spans are no-ops unless the host process installs an SDK tracer provider.
    """
    global _tracer
    if _tracer is None:
        _tracer = trace.get_tracer(TRACER_NAME)
    return _tracer


def configure_logging(
    *,
    log_level: str = "WARNING",
    json_format: bool = False,
    add_timestamp: bool = True,
) -> None:
    """Configure structured logging for solpack.

    Log records go to stderr so they never mix with the build summary.

    Args:
        log_level: Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        json_format: If True, output JSON lines. If False, output human-readable.
        add_timestamp: If True, add ISO timestamp to log entries.

    Example:
        >>> configure_logging(log_level="DEBUG")
    """
    level = getattr(logging, log_level.upper())

    processors: list[Any] = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if add_timestamp:
        processors.insert(0, structlog.processors.TimeStamper(fmt="iso"))

    if json_format:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=level,
        force=True,
    )


@contextmanager
def stage(name: str, **attributes: Any) -> Iterator[Span]:
    """Run a pipeline stage inside a span with start/end log events.

    Args:
        name: Stage name (e.g. "collect_sources", "invoke_compiler").
        **attributes: Span attributes, also bound to the log events.

    Yields:
        OpenTelemetry Span instance.

    Example:
        >>> with stage("write_artifacts", output_dir="build/contracts"):
        ...     write_artifacts(artifacts, output_dir)
    """
    tracer = get_tracer()
    logger = get_logger()

    with tracer.start_as_current_span(
        f"solpack.{name}",
        attributes=attributes,
        record_exception=False,
        set_status_on_exception=False,
    ) as s:
        logger.debug(f"{name}_started", **attributes)
        try:
            yield s
        except Exception as exc:
            s.set_status(Status(StatusCode.ERROR, str(exc)))
            s.record_exception(exc)
            logger.debug(f"{name}_failed", error=str(exc), **attributes)
            raise
        s.set_status(Status(StatusCode.OK))
        logger.debug(f"{name}_completed", **attributes)
