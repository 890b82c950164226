"""
ART Monitoring Client - one-shot status client for oscillatord

Connects to the daemon's monitoring socket, sends a single request and
decodes the JSON status report it answers with.

Usage:
    from artmon_client import connect_and_exchange, RequestKind

    report = connect_and_exchange("localhost", 2958, RequestKind.READ_EEPROM)
    if report.has_oscillator:
        print(report.oscillator.temperature)
"""

from .client import MonitoringClient, connect_and_exchange
from .decoder import decode_status_report
from .formatting import format_report
from .models import (
    CalibrationParameters,
    Clock,
    Disciplining,
    DiscipliningParameters,
    DiscipliningStatus,
    Gnss,
    Oscillator,
    StatusReport,
)
from .protocol import MonitoringRequest, RequestKind, decode_request, encode_request
from .resolver import Endpoint, resolve_endpoints
from .connector import connect_first
from .transport import receive_reply, send_request

from artmon_common.exceptions import (
    ArtMonError,
    ResolutionError,
    MonitoringConnectionError,
    TransportError,
    DecodeError,
)

# Version info
__version__ = "0.1.0"

__all__ = [
    # Exchange
    "connect_and_exchange",
    "MonitoringClient",

    # Protocol
    "RequestKind",
    "MonitoringRequest",
    "encode_request",
    "decode_request",
    "Endpoint",
    "resolve_endpoints",
    "connect_first",
    "send_request",
    "receive_reply",

    # Report
    "decode_status_report",
    "format_report",
    "StatusReport",
    "Disciplining",
    "DiscipliningStatus",
    "Oscillator",
    "Clock",
    "Gnss",
    "DiscipliningParameters",
    "CalibrationParameters",

    # Exceptions
    "ArtMonError",
    "ResolutionError",
    "MonitoringConnectionError",
    "TransportError",
    "DecodeError",
]
