"""TCP link to a host-side serial bridge."""

from __future__ import annotations

import logging
import socket
import time as _time
from typing import Optional

DEFAULT_SERVER = "127.0.0.1"
DEFAULT_PORT = 11411
DEFAULT_TIMEOUT = 0.2

_log = logging.getLogger(__name__)


class TcpHardware:
    """Byte link over a TCP connection, usable as a node handle's hardware."""

    def __init__(
        self,
        server: str = DEFAULT_SERVER,
        port: int = DEFAULT_PORT,
        *,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._server = server
        self._port = port
        self._timeout = timeout
        self._sock: Optional[socket.socket] = None

    @property
    def server(self) -> str:
        return self._server

    @property
    def port(self) -> int:
        return self._port

    def set_connection(self, url: str, port: int = DEFAULT_PORT) -> None:
        """Choose the host and port to connect to on the next :meth:`init`."""
        self._server = url
        self._port = port

    def init(self) -> None:
        """Connect to the configured host; raises ``OSError`` on failure."""
        self.close()
        address = socket.gethostbyname(self._server)
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        sock.settimeout(self._timeout)
        try:
            sock.connect((address, self._port))
        except OSError:
            sock.close()
            _log.error("connect to %s:%d failed", self._server, self._port)
            raise
        self._sock = sock
        _log.info("connected to %s:%d", self._server, self._port)

    def read(self) -> int:
        """Next received byte, or -1 if none arrived within the timeout."""
        if self._sock is None:
            return -1
        try:
            chunk = self._sock.recv(1)
        except OSError:
            return -1
        return chunk[0] if chunk else -1

    def write(self, data: bytes) -> None:
        """Send ``data`` to the host."""
        if self._sock is None:
            raise ConnectionError("not connected")
        self._sock.sendall(bytes(data))

    def time(self) -> int:
        """Milliseconds of a monotonic clock as an unsigned 32-bit counter."""
        return (_time.monotonic_ns() // 1_000_000) & 0xFFFFFFFF

    def close(self) -> None:
        """Close the connection if one is open."""
        if self._sock is not None:
            self._sock.close()
            self._sock = None

    def __enter__(self) -> "TcpHardware":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()