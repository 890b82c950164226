"""
Address resolution for the daemon's monitoring socket.

Turns a (host, port) pair into the ordered list of TCP endpoints the system
resolver knows for it, across IPv4 and IPv6.
"""

import socket
from dataclasses import dataclass
from typing import Any, Iterator, Optional, Tuple, Union

from artmon_common.exceptions import ResolutionError
from artmon_common.logging import get_bound_logger

logger = get_bound_logger("resolver")


@dataclass(frozen=True)
class Endpoint:
    """One resolved, connectable address candidate."""
    family: int
    socktype: int
    proto: int
    address: Tuple[Any, ...]

    @property
    def ip_version(self) -> int:
        return 6 if self.family == socket.AF_INET6 else 4

    def __str__(self) -> str:
        return f"{self.address[0]}:{self.address[1]} (IPv{self.ip_version})"


def _resolution_error(host: Optional[str], port: str, reason: str) -> ResolutionError:
    return ResolutionError(
        f"Unable to get an Internet address from '{host}:{port}': {reason}",
        details={"host": host, "port": port, "reason": reason},
    )


def resolve_endpoints(host: Optional[str], port: Union[str, int]) -> Iterator[Endpoint]:
    """Resolve host and port into TCP endpoint candidates.

    Args:
        host: Host name or address; None selects the local address
        port: Port number or service name

    Returns:
        A one-shot iterator over the candidates, in resolver order

    Raises:
        ResolutionError: If the resolver cannot map host/port to an address
    """
    port = str(port)
    try:
        infos = socket.getaddrinfo(
            host, port, socket.AF_UNSPEC, socket.SOCK_STREAM, socket.IPPROTO_TCP
        )
    except socket.gaierror as e:
        raise _resolution_error(host, port, e.strerror or str(e)) from e
    except OSError as e:
        # EAI_SYSTEM surfaces as a plain OSError carrying errno
        raise _resolution_error(host, port, e.strerror or str(e)) from e
    except UnicodeError as e:
        # Host names the IDNA codec rejects never reach the resolver
        raise _resolution_error(host, port, str(e)) from e

    endpoints = [
        Endpoint(family=family, socktype=socktype, proto=proto, address=sockaddr)
        for family, socktype, proto, _canonname, sockaddr in infos
    ]
    logger.debug("resolver.resolved", host=host, port=port, candidates=len(endpoints))
    return iter(endpoints)
