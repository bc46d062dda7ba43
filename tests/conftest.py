import socket
import ssl
import threading
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Callable

import pytest

from geminipy.config import ClientConfig, TrustPolicy

from support import CERT_FILE, KEY_FILE


@dataclass
class ServerDetails:
    host: str = ""
    port: int = 0

    @property
    def url_base(self) -> str:
        return f"gemini://{self.host}:{self.port}"


@pytest.fixture
def server_factory() -> Callable:
    @contextmanager
    def _factory(handler: Callable[[socket.socket], None], use_tls: bool = True, connections: int = 1):
        listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        listener.bind(("127.0.0.1", 0))
        details = ServerDetails(*listener.getsockname())
        stop_event = threading.Event()

        context = None
        if use_tls:
            context = ssl.SSLContext(ssl.PROTOCOL_TLS_SERVER)
            context.load_cert_chain(CERT_FILE, KEY_FILE)

        def server_loop():
            for _ in range(connections):
                try:
                    client_sock, _ = listener.accept()
                except OSError:
                    return
                if stop_event.is_set():
                    client_sock.close()
                    return
                try:
                    client_sock.settimeout(5.0)
                    if context is not None:
                        client_sock = context.wrap_socket(client_sock, server_side=True)
                    with client_sock:
                        handler(client_sock)
                except (ssl.SSLError, OSError):
                    pass

        listener.settimeout(5.0)
        listener.listen()
        server_thread = threading.Thread(target=server_loop, daemon=True)
        server_thread.start()
        try:
            yield details
        finally:
            stop_event.set()
            # Connect to unblock the accept() call
            try:
                socket.create_connection((details.host, details.port), timeout=0.1).close()
            except OSError:
                pass
            server_thread.join(timeout=2.0)
            listener.close()

    return _factory


@pytest.fixture
def insecure_config() -> ClientConfig:
    return ClientConfig(trust_policy=TrustPolicy.ACCEPT_ANY, timeout=5.0)
