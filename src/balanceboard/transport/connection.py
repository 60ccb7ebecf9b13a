"""L2CAP channel management."""

from __future__ import annotations

import asyncio
import logging
import socket
from typing import Protocol

from ..exceptions import TransportError, TransportTimeoutError

_LOGGER = logging.getLogger(__name__)


class Port(Protocol):
    """Bidirectional byte channel used by the session."""

    async def send(self, data: bytes) -> None:
        ...

    async def receive(self, max_len: int, timeout: float | None = None) -> bytes:
        ...

    async def close(self) -> None:
        ...


class L2CAPPort:
    """One L2CAP channel (PSM) to the board.

    Wraps a non-blocking SOCK_SEQPACKET socket and drives it through the
    running event loop, so each send or receive preserves report boundaries.

    Usage:
        async with L2CAPPort("00:23:CC:43:DC:C2", 0x13) as port:
            data = await port.receive(24, timeout=1.0)
    """

    def __init__(
            self,
            address: str,
            psm: int,
            timeout: float = 10.0,
            sock: socket.socket | None = None,
    ):
        """Initialize L2CAP port.

        Args:
            address: Board Bluetooth address (XX:XX:XX:XX:XX:XX)
            psm: Protocol/service multiplexer to connect to
            timeout: Connect timeout in seconds (default: 10)
            sock: Already connected socket to adopt instead of connecting
        """
        self.address = address
        self.psm = psm
        self.timeout = timeout
        self._sock = sock
        if sock is not None:
            sock.setblocking(False)

    async def __aenter__(self) -> L2CAPPort:
        await self.open()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def open(self) -> None:
        """Connect the channel.

        Raises:
            TransportError: If the socket cannot be created or connected
            TransportTimeoutError: If the connect times out
        """
        if self._sock is not None:
            return  # Already open

        family = getattr(socket, "AF_BLUETOOTH", None)
        proto = getattr(socket, "BTPROTO_L2CAP", None)
        if family is None or proto is None:
            raise TransportError("L2CAP sockets are not supported on this platform")

        try:
            sock = socket.socket(family, socket.SOCK_SEQPACKET, proto)
        except OSError as e:
            raise TransportError(f"Failed to create L2CAP socket: {e}") from e
        sock.setblocking(False)

        _LOGGER.debug("Connecting to %s PSM 0x%02x", self.address, self.psm)
        loop = asyncio.get_running_loop()
        try:
            await asyncio.wait_for(
                loop.sock_connect(sock, (self.address, self.psm)),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError as e:
            sock.close()
            raise TransportTimeoutError(
                f"Connect to {self.address} PSM 0x{self.psm:02x} timed out after {self.timeout}s"
            ) from e
        except OSError as e:
            sock.close()
            raise TransportError(
                f"Failed to connect to {self.address} PSM 0x{self.psm:02x}: {e}"
            ) from e

        self._sock = sock
        _LOGGER.info("Connected to %s PSM 0x%02x", self.address, self.psm)

    async def close(self) -> None:
        """Close the channel."""
        if self._sock is None:
            return
        try:
            _LOGGER.debug("Closing %s PSM 0x%02x", self.address, self.psm)
            self._sock.close()
        except OSError as e:
            _LOGGER.warning("Error during close: %s", e)
        finally:
            self._sock = None

    async def send(self, data: bytes) -> None:
        """Send one command.

        Raises:
            TransportError: If not connected or the send fails
        """
        sock = self._require_socket()
        try:
            await asyncio.get_running_loop().sock_sendall(sock, data)
        except OSError as e:
            raise TransportError(f"Send failed: {e}") from e

    async def receive(self, max_len: int, timeout: float | None = None) -> bytes:
        """Receive one report.

        Args:
            max_len: Maximum number of bytes to read
            timeout: Seconds to wait, None to wait indefinitely

        Returns:
            Received bytes; empty when the peer closed the channel

        Raises:
            TransportError: If not connected or the receive fails
            TransportTimeoutError: If nothing arrived within timeout
        """
        sock = self._require_socket()
        try:
            return await asyncio.wait_for(
                asyncio.get_running_loop().sock_recv(sock, max_len),
                timeout=timeout,
            )
        except asyncio.TimeoutError as e:
            raise TransportTimeoutError(f"No report received within {timeout}s") from e
        except OSError as e:
            raise TransportError(f"Receive failed: {e}") from e

    def _require_socket(self) -> socket.socket:
        if self._sock is None:
            raise TransportError("Not connected")
        return self._sock

    @property
    def is_open(self) -> bool:
        return self._sock is not None
