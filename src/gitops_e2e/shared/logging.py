"""Logging configuration for gitops-e2e.

Fixture logs go to stderr in a readable form while a test is written, or to a
JSON file in CI. Values bound with ``bind_test_context`` (the generated app
name) are added to every line until the next test clears them.
"""

import logging
import sys
from pathlib import Path

import structlog

_PROCESSORS: list[structlog.types.Processor] = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.filter_by_level,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.stdlib.PositionalArgumentsFormatter(),
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.UnicodeDecoder(),
]


def _handler(log_file: str | Path | None) -> logging.Handler:
    if log_file:
        return logging.FileHandler(str(log_file))
    return logging.StreamHandler(sys.stderr)


def configure_logging(
    level: str = "warning",
    log_file: str | Path | None = None,
    json_output: bool = False,
) -> None:
    """Configure standard logging and structlog for fixtures and the CLI.

    May be called again to switch level or output; the last call wins.

    Args:
        level: Log level name; unknown names fall back to warning
        log_file: Write here instead of stderr
        json_output: Render one JSON object per line

    Usage:
        CI: configure_logging("info", log_file=get_log_file(), json_output=True)
        Writing a test: configure_logging("debug")
    """
    log_level = getattr(logging, level.upper(), logging.WARNING)

    handler = _handler(log_file)
    handler.setLevel(log_level)
    logging.basicConfig(level=log_level, handlers=[handler], format="%(message)s", force=True)

    renderer: structlog.types.Processor
    if json_output:
        renderer = structlog.processors.JSONRenderer()
    else:
        # fixture output is often read from CI logs
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[*_PROCESSORS, renderer],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # module loggers exist before the test session configures logging
        cache_logger_on_first_use=False,
    )


def bind_test_context(**values: str) -> None:
    """Replace the per-test values added to every log line."""
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(**values)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger instance.

    Args:
        name: Logger name (typically __name__)
    """
    return structlog.get_logger(name)
