"""Structured logging for the ZDF Mediathek MCP server."""

from __future__ import annotations

import logging
import os
import sys
from typing import Any

import structlog


def _truthy(v: str | None) -> bool:
    return str(v or "").strip().lower() in {"1", "true", "yes", "y", "on"}


def configure_logging(level: str | None = None, structured: bool | None = None) -> None:
    """Configure stdlib logging and structlog once per process.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR). Defaults to LOG_LEVEL.
        structured: Render JSON lines instead of console output. Defaults to LOG_JSON.
    """
    lvl = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    as_json = _truthy(os.getenv("LOG_JSON")) if structured is None else structured
    root = logging.getLogger()
    if getattr(root, "_zdf_logging_configured", False):
        root.setLevel(lvl)
        return

    renderer: Any = (
        structlog.processors.JSONRenderer()
        if as_json
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        context_class=dict,
        cache_logger_on_first_use=True,
    )

    # stdout carries the MCP stdio stream
    handler = logging.StreamHandler(stream=sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s"))
    root.handlers[:] = [handler]
    root.setLevel(lvl)
    setattr(root, "_zdf_logging_configured", True)

    for n in ("uvicorn", "uvicorn.error", "uvicorn.access", "mcp", "mcp.server", "httpx"):
        logging.getLogger(n).setLevel(lvl)
        logging.getLogger(n).handlers[:] = [handler]
        logging.getLogger(n).propagate = False


def get_logger(name: str, **context: Any) -> Any:
    """Get a structlog logger, optionally bound to extra context."""
    logger = structlog.get_logger(name)
    if context:
        logger = logger.bind(**context)
    return logger
