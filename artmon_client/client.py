"""
One-shot monitoring exchange with the daemon.

resolve -> connect -> send request -> receive reply -> decode, all blocking
and in sequence. The connection is closed on every exit path.
"""

import time
from typing import Optional, Union

from artmon_common import config as artmon_config
from artmon_common.logging import get_bound_logger, exchange_context

from .connector import connect_first
from .decoder import decode_status_report
from .models import StatusReport
from .protocol import RequestKind, encode_request
from .resolver import resolve_endpoints
from .transport import receive_reply, send_request

logger = get_bound_logger("client")


def connect_and_exchange(
    host: Optional[str],
    port: Union[str, int],
    request_kind: RequestKind = RequestKind.NONE,
    *,
    timeout: Optional[float] = None,
    buffer_size: Optional[int] = None,
) -> StatusReport:
    """Send one request to the daemon and decode its status reply.

    Args:
        host: Daemon host; None selects the local address
        port: Monitoring port or service name
        request_kind: Action to request; NONE only asks for status
        timeout: I/O timeout in seconds (defaults to config.socket_timeout, 0 blocks)
        buffer_size: Maximum reply size (defaults to config.recv_buffer_size)

    Returns:
        The decoded StatusReport

    Raises:
        ResolutionError: host/port could not be resolved
        MonitoringConnectionError: no endpoint accepted a connection
        TransportError: sending or receiving failed
        DecodeError: the reply is not a well-formed JSON object
    """
    if timeout is None:
        timeout = artmon_config.socket_timeout
    elif timeout <= 0:
        timeout = None  # blocking I/O
    if buffer_size is None:
        buffer_size = artmon_config.recv_buffer_size

    with exchange_context(host, port, request_kind.cli_name):
        start_time = time.time()
        endpoints = resolve_endpoints(host, port)
        sock = connect_first(endpoints, host, port, timeout=timeout)
        try:
            send_request(sock, encode_request(request_kind))
            reply = receive_reply(sock, buffer_size)
        finally:
            sock.close()

        report = decode_status_report(reply)
        duration_ms = (time.time() - start_time) * 1000
        logger.debug("client.exchange_completed",
                     sections=sorted(report.present_sections),
                     duration_ms=round(duration_ms, 1))
        return report


class MonitoringClient:
    """Holds the daemon's address and I/O settings for repeated use.

    Each call to exchange() is an independent one-shot connection; nothing
    is kept open between calls.
    """

    def __init__(self, host: Optional[str] = None, port: Union[str, int, None] = None,
                 timeout: Optional[float] = None, buffer_size: Optional[int] = None):
        self.host = host if host is not None else artmon_config.host
        port = port if port is not None else artmon_config.port
        if port is None:
            raise ValueError("A monitoring port is required")
        self.port = str(port)
        self.timeout = timeout if timeout is not None else artmon_config.socket_timeout
        self.buffer_size = buffer_size if buffer_size is not None else artmon_config.recv_buffer_size

    def exchange(self, request_kind: RequestKind = RequestKind.NONE) -> StatusReport:
        """Send one request and return the decoded reply."""
        return connect_and_exchange(
            self.host, self.port, request_kind,
            timeout=self.timeout, buffer_size=self.buffer_size,
        )

    def status(self) -> StatusReport:
        """Query status without requesting any action."""
        return self.exchange(RequestKind.NONE)

    def __repr__(self) -> str:
        return f"MonitoringClient(host={self.host!r}, port={self.port!r})"
