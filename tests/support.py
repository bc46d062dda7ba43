import asyncio
import socket
from pathlib import Path

from geminipy.config import ClientConfig, TrustPolicy
from geminipy.response import GeminiResponse


CERT_DIR = Path(__file__).parent / "certs"
CERT_FILE = CERT_DIR / "cert.pem"
KEY_FILE = CERT_DIR / "key.pem"
CA_FILE = CERT_DIR / "ca.pem"


def read_request(sock: socket.socket) -> bytes:
    data = b""
    while b"\r\n" not in data:
        chunk = sock.recv(1024)
        if not chunk:
            break
        data += chunk
    return data


class FakeTransport:
    """Scripted transport that records every call in a shared event list."""

    def __init__(self, chunks=(), events=None, name="transport", block_reads=False,
                 connect_error=None, read_error=None):
        self.chunks = list(chunks)
        self.events = events if events is not None else []
        self.name = name
        self.block_reads = block_reads
        self.connect_error = connect_error
        self.read_error = read_error
        self.written: list[bytes] = []
        self.closed = False
        self.aborted = False

    @property
    def is_closed(self) -> bool:
        return self.closed

    async def connect(self, host: str, port: int) -> None:
        self.events.append((self.name, "connect"))
        if self.connect_error is not None:
            raise self.connect_error

    async def write(self, data: bytes) -> int:
        self.events.append((self.name, "write"))
        self.written.append(data)
        return len(data)

    async def read(self, max_bytes: int) -> bytes:
        self.events.append((self.name, "read"))
        if self.read_error is not None:
            raise self.read_error
        if self.block_reads:
            await asyncio.Event().wait()
        if self.chunks:
            return self.chunks.pop(0)
        return b""

    async def close(self) -> None:
        if not self.closed:
            self.closed = True
            self.events.append((self.name, "close"))

    def abort(self) -> None:
        self.aborted = True
        self.events.append((self.name, "abort"))


class FakeClient:
    """Stands in for GeminiClient: answers each fetched URL from a script."""

    def __init__(self, responses, config: ClientConfig | None = None):
        self.responses = responses
        self.config = config or ClientConfig(trust_policy=TrustPolicy.ACCEPT_ANY)
        self.requested: list[str] = []

    async def fetch(self, host: str, port: int, request_line: bytes) -> GeminiResponse:
        url = request_line.decode("utf-8").rstrip("\r\n")
        self.requested.append(url)
        if callable(self.responses):
            return await self.responses(url)
        if isinstance(self.responses, dict):
            return self.responses[url]
        return self.responses[len(self.requested) - 1]
