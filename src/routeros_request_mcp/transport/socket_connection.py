"""TCP connection to the RouterOS API service.

The API listens on port 8728 by default. The connection is blocking; the
configured timeout applies to connecting and to every write.
"""

from __future__ import annotations

import logging
import select
import socket
from dataclasses import dataclass

logger = logging.getLogger(__name__)

DEFAULT_PORT = 8728
DEFAULT_TIMEOUT = 10.0


@dataclass
class PeerInfo:
    """Addresses of both ends of an open connection."""

    host: str = ""
    port: int = DEFAULT_PORT
    local_address: str = ""


class SocketConnection:
    """Manages the TCP connection to a router.

    Usage::

        conn = SocketConnection("192.168.88.1")
        conn.open()
        conn.write(word_bytes)
        conn.close()
    """

    def __init__(
        self,
        host: str,
        port: int = DEFAULT_PORT,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._host = host
        self._port = port
        self._timeout = timeout
        self._socket: socket.socket | None = None
        self._peer_info = PeerInfo(host=host, port=port)

    @property
    def connected(self) -> bool:
        return self._socket is not None

    @property
    def peer_info(self) -> PeerInfo:
        return self._peer_info

    def open(self) -> PeerInfo:
        """Connect to the router.

        Returns:
            PeerInfo for the new connection.

        Raises:
            ConnectionError: If the router cannot be reached.
        """
        if self.connected:
            return self._peer_info

        try:
            sock = socket.create_connection(
                (self._host, self._port), timeout=self._timeout
            )
        except OSError as e:
            raise ConnectionError(
                f"Could not connect to {self._host}:{self._port}. "
                f"Ensure the API service is enabled on the router. "
                f"Last error: {e}"
            ) from e

        self._socket = sock
        local_host, local_port = sock.getsockname()[:2]
        self._peer_info = PeerInfo(
            host=self._host,
            port=self._port,
            local_address=f"{local_host}:{local_port}",
        )
        logger.info("Connected to %s:%d", self._host, self._port)
        return self._peer_info

    def close(self) -> None:
        """Close the connection."""
        if self._socket is None:
            return

        try:
            self._socket.close()
        except OSError as e:
            logger.warning("Error closing socket: %s", e)
        finally:
            self._socket = None
            logger.info("Disconnected")

    def is_accepting_data(self) -> bool:
        """Tell whether a write can start without blocking on a dead socket."""
        if self._socket is None:
            return False
        try:
            _, writable, errored = select.select(
                [], [self._socket], [self._socket], 0
            )
        except (OSError, ValueError) as e:
            logger.debug("Readiness check failed: %s", e)
            return False
        return bool(writable) and not errored

    def write(self, data: bytes) -> int:
        """Write raw bytes to the router.

        Returns:
            Number of bytes written.

        Raises:
            ConnectionError: If not connected.
            OSError: If the write fails.
        """
        if self._socket is None:
            raise ConnectionError("Not connected to router")

        self._socket.sendall(data)
        return len(data)
