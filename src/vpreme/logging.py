"""structlog configuration and request-scoped logging context.

Provides request ID generation, a per-request logging context manager,
and structured log configuration for console and JSON output with
optional file logging.
"""

from __future__ import annotations

import logging
import sys
import uuid
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

import structlog

from vpreme.exceptions import VpremeError

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path


def generate_request_id() -> str:
    """Generate a unique identifier for one inbound request."""
    return str(uuid.uuid4())


# ---------------------------------------------------------------------------
# structlog configuration
# ---------------------------------------------------------------------------


_VALID_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def configure_logging(
    level: str = "INFO",
    fmt: str = "console",
    log_file: str | Path | None = None,
) -> None:
    """Configure structlog for the application.

    Sets up structlog with shared processors and a format-specific
    renderer. Configures the stdlib logging root to respect the given
    level and optionally adds a file handler, so uvicorn and httpx log
    records go through the same renderer.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        fmt: Output format: ``"console"`` for human-readable or
            ``"json"`` for machine-parseable.
        log_file: Optional file path for log output (in addition to stderr).

    Raises:
        ValueError: If ``level`` is not a recognized log level.
    """
    level_upper = level.upper()
    if level_upper not in _VALID_LEVELS:
        msg = f"Invalid log level: {level!r}. Must be one of {sorted(_VALID_LEVELS)}"
        raise ValueError(msg)

    numeric_level = getattr(logging, level_upper)

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    renderer: structlog.types.Processor
    if fmt == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    # Clear existing handlers to avoid duplicates on re-configuration
    root_logger.handlers.clear()

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setLevel(numeric_level)
    root_logger.addHandler(stderr_handler)

    if log_file:
        file_handler = logging.FileHandler(str(log_file), encoding="utf-8")
        file_handler.setLevel(numeric_level)
        root_logger.addHandler(file_handler)

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )
    for handler in root_logger.handlers:
        handler.setFormatter(formatter)


# ---------------------------------------------------------------------------
# Request logging context manager
# ---------------------------------------------------------------------------


@contextmanager
def request_logging_context(
    endpoint: str,
    **extra: Any,
) -> Iterator[structlog.stdlib.BoundLogger]:
    """Bind endpoint metadata and a fresh request ID to structlog.

    Logs request start and completion, and binds the endpoint name and
    request ID to all log entries emitted inside the context, including
    the ones from the outbound clients.

    Args:
        endpoint: Name of the HTTP endpoint or CLI command being served.
        **extra: Additional key-value pairs to bind.

    Yields:
        A bound structlog logger with request context.

    Example::

        with request_logging_context("youtube", reference=link) as log:
            log.info("video_id_extracted", video_id=video_id)
    """
    request_id = generate_request_id()
    structlog.contextvars.bind_contextvars(
        endpoint=endpoint,
        request_id=request_id,
        **extra,
    )

    log: structlog.stdlib.BoundLogger = structlog.get_logger(endpoint)
    log.info("request_start")

    try:
        yield log
    except VpremeError as exc:
        log.warning(
            "request_failed",
            status_code=exc.status_code,
            error=exc.message,
            details=exc.details,
        )
        raise
    except Exception:
        log.exception("request_error")
        raise
    finally:
        log.info("request_end")
        structlog.contextvars.unbind_contextvars(
            "endpoint", "request_id", *extra.keys()
        )
