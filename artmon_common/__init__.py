"""ART monitoring common - shared infrastructure for the monitoring client.

Configuration, constants, the exception hierarchy and structured logging.
It has no dependencies on artmon_client to avoid circular imports.
"""

__version__ = "0.1.0"

from .config import ArtMonConfig, config
from .constants import (
    DEFAULT_SOCKET_TIMEOUT,
    DEFAULT_RECV_BUFFER_SIZE,
    REPORT_SECTIONS,
)
from .exceptions import (
    ArtMonError,
    ResolutionError,
    MonitoringConnectionError,
    TransportError,
    DecodeError,
)
from .logging import (
    configure_structlog,
    get_bound_logger,
    exchange_context,
)

__all__ = [
    "ArtMonConfig",
    "config",
    "DEFAULT_SOCKET_TIMEOUT",
    "DEFAULT_RECV_BUFFER_SIZE",
    "REPORT_SECTIONS",
    "ArtMonError",
    "ResolutionError",
    "MonitoringConnectionError",
    "TransportError",
    "DecodeError",
    "configure_structlog",
    "get_bound_logger",
    "exchange_context",
]
