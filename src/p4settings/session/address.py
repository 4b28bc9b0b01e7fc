"""Parsing of ``p4java://host:port`` style server URIs."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping
from urllib.parse import parse_qsl, urlsplit

from p4settings.session.base import AddressSyntaxError

# scheme -> uses SSL
SCHEMES: Mapping[str, bool] = {
    "p4java": False,
    "p4javassl": True,
    "p4jrpc": False,
    "p4jrpcssl": True,
    "p4jrpcnts": False,
    "p4jrpcntsssl": True,
}


@dataclass(frozen=True)
class ServerAddress:
    """A validated server address."""

    scheme: str
    host: str
    port: int
    properties: Mapping[str, str] = field(default_factory=dict)

    @property
    def secure(self) -> bool:
        return SCHEMES[self.scheme]

    @property
    def p4port(self) -> str:
        """The address in P4PORT form, e.g. ``ssl:myhost:1666``."""
        host = f"[{self.host}]" if ":" in self.host else self.host
        prefix = "ssl:" if self.secure else ""
        return f"{prefix}{host}:{self.port}"

    @classmethod
    def parse(cls, uri: str) -> ServerAddress:
        """Parse ``uri``; raises AddressSyntaxError if it is malformed."""
        try:
            parts = urlsplit(uri.strip())
        except ValueError as e:
            raise AddressSyntaxError(f"Malformed server URI {uri!r}: {e}") from e

        scheme = parts.scheme.lower()
        if scheme not in SCHEMES:
            known = ", ".join(SCHEMES)
            raise AddressSyntaxError(
                f"Unknown scheme in server URI {uri!r}. Expected one of: {known}"
            )
        if parts.username is not None or parts.password is not None:
            raise AddressSyntaxError(f"Server URI {uri!r} must not carry credentials")
        if parts.path not in ("", "/") or parts.fragment:
            raise AddressSyntaxError(f"Unexpected path or fragment in server URI {uri!r}")

        host = parts.hostname
        if not host:
            raise AddressSyntaxError(f"Missing host in server URI {uri!r}")

        try:
            port = parts.port
        except ValueError as e:
            raise AddressSyntaxError(f"Invalid port in server URI {uri!r}: {e}") from e
        if port is None or not 0 < port < 65536:
            raise AddressSyntaxError(f"Missing or invalid port in server URI {uri!r}")

        properties = dict(parse_qsl(parts.query, keep_blank_values=True))
        return cls(scheme=scheme, host=host, port=port, properties=properties)
