import asyncio
import logging
import socket
import ssl

from .errors import (
    TransportError,
    DnsFailureError,
    SocketConnectError,
    TlsHandshakeError,
    SocketWriteError,
    SocketReadError,
)
from .transport import Transport

logger = logging.getLogger(__name__)


class TcpTransport(Transport):
    """A single-use stream connection. Once closed it cannot be reconnected."""

    def __init__(self) -> None:
        self._reader: asyncio.StreamReader | None = None
        self._writer: asyncio.StreamWriter | None = None
        self._used: bool = False
        self._aborted: bool = False

    @property
    def is_closed(self) -> bool:
        return self._writer is None

    def _ssl_options(self, host: str) -> dict:
        return {}

    async def connect(self, host: str, port: int) -> None:
        if self._writer is not None:
            raise TransportError("Transport is already connected.")
        if self._used:
            raise TransportError("Transport cannot be reused after close.")
        self._used = True

        try:
            self._reader, self._writer = await asyncio.open_connection(
                host, port, **self._ssl_options(host)
            )
        except socket.gaierror as e:
            raise DnsFailureError(f"DNS Failure for host '{host}'") from e
        except ssl.SSLError as e:
            raise TlsHandshakeError(f"TLS handshake with '{host}:{port}' failed: {e}") from e
        except OSError as e:
            raise SocketConnectError(f"Socket connection failed: {e}") from e

        logger.debug("Connected to %s:%d", host, port)

    async def write(self, data: bytes) -> int:
        if self._writer is None:
            raise TransportError("Cannot write on a disconnected transport.")

        try:
            self._writer.write(data)
            await self._writer.drain()
        except OSError as e:
            raise SocketWriteError(f"Socket write failed: {e}") from e
        return len(data)

    async def read(self, max_bytes: int) -> bytes:
        if self._reader is None:
            raise TransportError("Cannot read from a disconnected transport.")

        try:
            return await self._reader.read(max_bytes)
        except OSError as e:
            raise SocketReadError(f"Socket read failed: {e}") from e

    async def close(self) -> None:
        """Close the connection and wait until the socket is released."""
        if self._writer is None:
            return

        writer, self._writer, self._reader = self._writer, None, None
        if not self._aborted:
            writer.close()
        try:
            await writer.wait_closed()
        except OSError as e:
            logger.debug("Connection reported an error while closing: %s", e)

    def abort(self) -> None:
        """Drop the connection immediately without flushing. close() still needs awaiting."""
        if self._writer is None or self._aborted:
            return

        self._aborted = True
        self._writer.transport.abort()
