"""
Sequential connection fallback over resolved endpoints.

Candidates are tried one at a time, in resolver order; the first socket that
connects wins. Sockets opened for failed candidates are closed before the
next attempt, so at most one socket is ever left open.
"""

import socket
from typing import Iterable, Optional, Union

from artmon_common.exceptions import MonitoringConnectionError
from artmon_common.logging import get_bound_logger

from .resolver import Endpoint

logger = get_bound_logger("connector")


def connect_first(
    endpoints: Iterable[Endpoint],
    host: Optional[str],
    port: Union[str, int],
    timeout: Optional[float] = None,
) -> socket.socket:
    """Connect to the first reachable endpoint.

    Args:
        endpoints: Candidates from resolve_endpoints()
        host: Host as given by the caller, for diagnostics
        port: Port as given by the caller, for diagnostics
        timeout: Socket timeout applied before connecting; None blocks

    Returns:
        The connected socket; the caller owns it and must close it

    Raises:
        MonitoringConnectionError: If no candidate accepted a connection
    """
    attempts = 0
    for endpoint in endpoints:
        attempts += 1
        try:
            sock = socket.socket(endpoint.family, endpoint.socktype, endpoint.proto)
        except OSError as e:
            logger.warning("connector.socket_failed",
                           host=host, port=str(port),
                           ip_version=endpoint.ip_version, error=str(e))
            continue

        try:
            sock.settimeout(timeout)
            sock.connect(endpoint.address)
        except OSError as e:
            logger.warning("connector.connect_failed",
                           host=host, port=str(port),
                           ip_version=endpoint.ip_version, error=str(e))
            sock.close()
            continue

        logger.debug("connector.connected", endpoint=str(endpoint), attempts=attempts)
        return sock

    raise MonitoringConnectionError(
        f"Could not connect to {host}:{port}",
        details={"host": host, "port": str(port), "attempts": attempts},
    )
