"""
Logging configuration and context management for the monitoring client.

Provides structured logging with context propagation using structlog.
The library modules log through get_bound_logger(); the command-line
entry point calls configure_structlog() once at startup.
"""

import logging
import os
import sys
from contextlib import contextmanager
from typing import Optional
from pathlib import Path

import structlog

from .constants import LOGGER_NAME, DEFAULT_LOG_LEVEL, DEFAULT_LOG_FORMAT

# Global flag to track if structlog has been configured
_STRUCTLOG_CONFIGURED = False


def configure_structlog(
    log_level: str = DEFAULT_LOG_LEVEL,
    log_format: str = DEFAULT_LOG_FORMAT,
    log_file: Optional[Path] = None,
    force_disable_console: bool = False,
    force: bool = False
) -> None:
    """
    Configure structlog with stdlib integration.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Output format ("json" or "console")
        log_file: Optional log file path
        force_disable_console: Route output to a NullHandler
        force: Reconfigure even if logging was already configured
    """
    global _STRUCTLOG_CONFIGURED

    # First call wins unless the caller insists
    if _STRUCTLOG_CONFIGURED and not (force or force_disable_console):
        return

    log_level_numeric = getattr(logging, log_level.upper(), logging.INFO)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(str(log_file), mode='a')
    elif force_disable_console:
        handler = logging.NullHandler()
    else:
        handler = logging.StreamHandler(sys.stdout)

    handler.setLevel(log_level_numeric)

    timestamper = structlog.processors.TimeStamper(fmt="iso")

    # Shared processors for both structlog and stdlib logs
    shared_processors = [
        timestamper,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.contextvars.merge_contextvars,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    if log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    formatter = structlog.stdlib.ProcessorFormatter(
        processor=renderer,
        foreign_pre_chain=shared_processors,
    )
    handler.setFormatter(formatter)

    logging.basicConfig(
        level=log_level_numeric,
        handlers=[handler],
        force=True,  # Remove existing handlers
    )

    _STRUCTLOG_CONFIGURED = True


def get_bound_logger(component: str, **default_context):
    """
    Get a bound logger with component identity and optional default context.

    Usage:
        logger = get_bound_logger("connector")
        logger.warning("connector.connect_failed", address=..., error=...)

    Args:
        component: Component name (e.g., "resolver", "decoder")
        **default_context: Default context to bind to this logger instance

    Returns:
        Bound logger with component context
    """
    if not _STRUCTLOG_CONFIGURED:
        # Library use without an application-level setup: honour the
        # environment so ARTMON_LOG_LEVEL still works.
        log_level = os.environ.get('ARTMON_LOG_LEVEL', DEFAULT_LOG_LEVEL)
        log_format = os.environ.get('ARTMON_LOG_FORMAT', DEFAULT_LOG_FORMAT)
        configure_structlog(log_level=log_level, log_format=log_format)

    base_logger = structlog.get_logger(LOGGER_NAME)
    return base_logger.bind(component=component, **default_context)


def bind_exchange_context(host: Optional[str], port, request: str) -> None:
    """Bind context for one request/response exchange."""
    structlog.contextvars.bind_contextvars(
        host=host if host is not None else "localhost",
        port=str(port),
        request=request,
    )


@contextmanager
def exchange_context(host: Optional[str], port, request: str):
    """Context manager scoping exchange context to a single exchange."""
    bind_exchange_context(host, port, request)
    try:
        yield
    finally:
        structlog.contextvars.unbind_contextvars("host", "port", "request")
