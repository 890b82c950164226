"""
Request/reply transport over an established monitoring connection.

One request is written, one reply is read with a single bounded recv().
Failures are terminal for the exchange and are never retried.
"""

import socket

from artmon_common.constants import DEFAULT_RECV_BUFFER_SIZE
from artmon_common.exceptions import TransportError
from artmon_common.logging import get_bound_logger

logger = get_bound_logger("transport")


def send_request(sock: socket.socket, message: bytes) -> None:
    """Write the encoded request as one message.

    Raises:
        TransportError: On any send failure (reset, broken pipe, timeout)
    """
    try:
        sock.sendall(message)
    except OSError as e:
        raise TransportError(
            f"Error sending request: {e}",
            details={"error": str(e), "bytes": len(message)},
        ) from e
    logger.debug("transport.sent", bytes=len(message))


def receive_reply(sock: socket.socket, buffer_size: int = DEFAULT_RECV_BUFFER_SIZE) -> bytes:
    """Read the daemon's reply in a single call.

    A reply larger than buffer_size comes back truncated; the decoder is
    responsible for rejecting it.

    Raises:
        TransportError: If the read fails or the peer closed without replying
    """
    try:
        data = sock.recv(buffer_size)
    except OSError as e:
        raise TransportError(
            f"Error receiving response: {e}",
            details={"error": str(e)},
        ) from e

    if not data:
        raise TransportError("Daemon closed the connection without replying")

    if len(data) >= buffer_size:
        logger.warning("transport.reply_may_be_truncated",
                       bytes=len(data), buffer_size=buffer_size)
    else:
        logger.debug("transport.received", bytes=len(data))
    return data
