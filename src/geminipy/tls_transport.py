import logging
import ssl

from .config import TrustPolicy
from .tcp_transport import TcpTransport

logger = logging.getLogger(__name__)


def build_ssl_context(trust_policy: TrustPolicy, ca_file: str | None = None) -> ssl.SSLContext:
    if trust_policy is TrustPolicy.ACCEPT_ANY:
        context = ssl.SSLContext(ssl.PROTOCOL_TLS_CLIENT)
        context.check_hostname = False
        context.verify_mode = ssl.CERT_NONE
    else:
        context = ssl.create_default_context(cafile=ca_file)

    context.minimum_version = ssl.TLSVersion.TLSv1_2
    return context


class TlsTransport(TcpTransport):
    def __init__(self, trust_policy: TrustPolicy, ca_file: str | None = None) -> None:
        super().__init__()
        self._trust_policy = trust_policy
        self._context = build_ssl_context(trust_policy, ca_file)

    @property
    def trust_policy(self) -> TrustPolicy:
        return self._trust_policy

    def _ssl_options(self, host: str) -> dict:
        if self._trust_policy is TrustPolicy.ACCEPT_ANY:
            logger.debug("Skipping certificate verification for %s", host)
        return {"ssl": self._context, "server_hostname": host}
