import asyncio
import functools
import logging
from typing import Callable

from .config import ClientConfig, TrustPolicy
from .errors import GeminiError, InvalidRequestError, ResponseTimeoutError, ResponseTooLargeError
from .parser import parse_response
from .request import GeminiRequest
from .response import GeminiResponse
from .session import ConnectionSession, SessionState, cancellation_requested, raise_if_cancelling
from .tls_transport import TlsTransport
from .transport import Transport

logger = logging.getLogger(__name__)

TransportFactory = Callable[[], Transport]


class GeminiClient:
    """
    Performs one Gemini request per call over a fresh connection.

    Cancelling the task running `fetch` aborts its socket and re-raises
    asyncio.CancelledError; the socket is closed before the error leaves
    `fetch`. A deadline configured through `ClientConfig.timeout` that runs
    out is reported as ResponseTimeoutError instead.
    """

    def __init__(self, config: ClientConfig, transport_factory: TransportFactory | None = None):
        self._config = config
        if transport_factory is None:
            transport_factory = functools.partial(TlsTransport, config.trust_policy, config.ca_file)
        self._transport_factory = transport_factory

        if config.trust_policy is TrustPolicy.ACCEPT_ANY:
            logger.warning("Certificate verification is disabled; any server certificate will be accepted.")

    @property
    def config(self) -> ClientConfig:
        return self._config

    async def fetch_url(self, url: str) -> GeminiResponse:
        request = GeminiRequest.from_url(
            url,
            default_port=self._config.default_port,
            max_length=self._config.max_request_length,
        )
        return await self.fetch(request.host, request.port, request.request_line)

    async def fetch(self, host: str, port: int, request_line: str | bytes) -> GeminiResponse:
        request_bytes = self._build_request_bytes(request_line)
        session = ConnectionSession(host, port)

        try:
            async with asyncio.timeout(self._config.timeout):
                return await self._run(session, request_bytes)
        except TimeoutError as e:
            raise ResponseTimeoutError(
                f"No complete response from {host}:{port} within {self._config.timeout} seconds."
            ) from e

    def _build_request_bytes(self, request_line: str | bytes) -> bytes:
        if isinstance(request_line, str):
            request_line = request_line.encode("utf-8")
        if not request_line.endswith(b"\r\n"):
            request_line += b"\r\n"

        url_length = len(request_line) - 2
        if url_length > self._config.max_request_length:
            raise InvalidRequestError(
                f"Request URL is {url_length} bytes, the limit is {self._config.max_request_length}."
            )
        if b"\r\n" in request_line[:-2]:
            raise InvalidRequestError("Request line must not contain CRLF before its end.")
        return request_line

    async def _run(self, session: ConnectionSession, request_bytes: bytes) -> GeminiResponse:
        transport = self._transport_factory()
        try:
            await transport.connect(session.host, session.port)
            session.advance(SessionState.READY)

            raise_if_cancelling()
            await transport.write(request_bytes)
            logger.debug("Sent request %r to %s:%d", request_bytes[:-2], session.host, session.port)
            session.advance(SessionState.RECEIVING)

            await self._receive(transport, session)
            # The peer may have closed while the caller was cancelling.
            if cancellation_requested():
                session.request_cancel()
            await transport.close()
        except asyncio.CancelledError:
            session.request_cancel()
            transport.abort()
            session.finish(SessionState.CANCELLED)
            raise
        except GeminiError:
            transport.abort()
            session.finish(SessionState.FAILED)
            raise
        finally:
            await transport.close()

        session.finish(SessionState.CLOSED)
        if session.state is SessionState.CANCELLED:
            raise asyncio.CancelledError()
        return parse_response(session.buffer)

    async def _receive(self, transport: Transport, session: ConnectionSession) -> None:
        limit = self._config.max_response_size

        while True:
            chunk = await transport.read(self._config.read_chunk_size)
            if not chunk:
                logger.debug("Peer %s:%d closed the stream after %d bytes",
                             session.host, session.port, len(session.buffer))
                return

            session.buffer += chunk
            if limit is not None and len(session.buffer) > limit:
                raise ResponseTooLargeError(
                    f"Response from {session.host}:{session.port} exceeds {limit} bytes."
                )
