"""
Structured logging for the Perplexity MCP server.

NOTE: stdout carries the MCP stdio protocol, so every log line goes to stderr.
"""
import logging
import sys

import structlog
from structlog.stdlib import BoundLogger

from .settings import Settings, get_settings

_configured = False


def _shared_processors() -> list:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
    ]


def _renderer(settings: Settings):
    if settings.log_format == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=False)


def configure_logging(settings: Settings | None = None, *, force: bool = False) -> None:
    """Configure structlog and the stdlib root logger.

    Args:
        settings: Settings to read level and format from (defaults to the cached settings)
        force: Reconfigure even when logging was already set up
    """
    global _configured

    if _configured and not force:
        return
    if force:
        structlog.reset_defaults()

    settings = settings or get_settings()

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=_renderer(settings),
            foreign_pre_chain=_shared_processors(),
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.getLevelName(settings.log_level.upper()))

    structlog.configure(
        processors=[
            *_shared_processors(),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    _configured = True


def get_logger(component: str | None = None) -> BoundLogger:
    """Return a lazy structlog logger, tagged with ``component`` when given.

    NOTE: loggers are created at import time, before configure_logging().
    Calling .bind() here would finalize them against structlog's defaults (stdout).
    """
    if component:
        return structlog.get_logger(component=component)
    return structlog.get_logger()
