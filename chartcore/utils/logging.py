"""structlog configuration for chartcore.

Two renderers:
- "json": one JSON object per line, for log shippers
- "console": colored key=value output, for local use

Events go through the stdlib logging tree to stderr so that stdout stays
reserved for CLI results. The engine logs at debug level only.
"""

from __future__ import annotations

import logging
import sys
import uuid

import structlog

_RENDERERS = ("json", "console")


def setup_logging(level: str = "INFO", log_format: str = "json") -> None:
    """Configure structlog globally.

    Args:
        level: stdlib level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_format: "json" or "console".
    """
    if log_format not in _RENDERERS:
        raise ValueError(f"log_format must be one of {_RENDERERS}, got {log_format!r}")

    pre_chain: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.format_exc_info,
    ]

    renderer: structlog.types.Processor
    if log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *pre_chain,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper()))


def bind_run_context(command: str) -> str:
    """Start a fresh log context for one CLI command.

    Every later event in this context carries ``command`` and ``run_id``.
    Returns the generated run id.
    """
    run_id = uuid.uuid4().hex[:12]
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(command=command, run_id=run_id)
    return run_id


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Return a named structlog logger."""
    logger: structlog.stdlib.BoundLogger = structlog.get_logger(name)
    return logger
