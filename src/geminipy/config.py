import os
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class TrustPolicy(str, Enum):
    """How server certificates are checked during the TLS handshake."""
    STRICT = "strict"
    ACCEPT_ANY = "accept_any"


class ClientConfig(BaseModel):
    """
    Per-client settings.

    `trust_policy` has no default: accepting any certificate is a trust
    decision the caller has to make explicitly. `timeout` bounds each
    connect-send-receive hop in seconds; None disables the deadline.
    """
    model_config = ConfigDict(frozen=True)

    trust_policy: TrustPolicy
    ca_file: str | None = None
    max_redirects: int = Field(default=5, ge=0)
    timeout: float | None = Field(default=30.0, gt=0)
    default_port: int = Field(default=1965, gt=0, le=65535)
    max_request_length: int = Field(default=1024, gt=0)
    read_chunk_size: int = Field(default=65536, gt=0)
    max_response_size: int | None = Field(default=None, gt=0)

    @classmethod
    def from_env(cls, prefix: str = "GEMINIPY_", **overrides) -> "ClientConfig":
        """Build a config from `<prefix><FIELD>` environment variables, e.g. GEMINIPY_TRUST_POLICY."""
        values = {}
        for name in cls.model_fields:
            raw = os.environ.get(f"{prefix}{name.upper()}")
            if raw is None:
                continue
            values[name] = None if raw.lower() in ("", "none") else raw
        values.update(overrides)
        return cls.model_validate(values)
