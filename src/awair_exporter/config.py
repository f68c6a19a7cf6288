"""
Runtime configuration. Everything comes from the command line (or the
matching AWAIR_* environment variables); there are no config files.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Tuple

from awair_exporter.metrics import DEFAULT_NAMESPACE


DEFAULT_LISTEN_ADDRESS = ":2112"
DEFAULT_TIMEOUT_SECONDS = 5.0

# Metric names must match [a-zA-Z_:][a-zA-Z0-9_:]*; colons are reserved for recording rules
_NAMESPACE_RE = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*$")


def parse_listen_address(address: str) -> Tuple[str, int]:
    """Split "host:port" into (host, port).

    An empty host (":2112") binds every interface. IPv6 hosts must be
    bracketed, e.g. "[::1]:2112".
    """
    host, sep, port_str = address.rpartition(":")
    if not sep:
        raise ValueError(f"listen address {address!r} must look like HOST:PORT or :PORT")

    if host.startswith("[") and host.endswith("]"):
        host = host[1:-1]
    elif ":" in host:
        raise ValueError(f"IPv6 listen address {address!r} must be bracketed, e.g. [::1]:2112")

    try:
        port = int(port_str)
    except ValueError:
        raise ValueError(f"invalid port in listen address {address!r}") from None
    if not (0 <= port <= 65535):
        raise ValueError(f"port must be between 0 and 65535, got {port}")

    return host or "0.0.0.0", port


@dataclass(frozen=True)
class ExporterConfig:
    host: str
    listen_address: str = DEFAULT_LISTEN_ADDRESS
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    check_status: bool = True
    namespace: str = DEFAULT_NAMESPACE
    verbose: bool = False

    def validate(self):
        """Raise ValueError describing the first bad setting."""
        if not self.host or not self.host.strip():
            raise ValueError("target host must not be empty")
        if "/" in self.host:
            raise ValueError(f"target host {self.host!r} must be a bare host or host:port, not a URL")
        if self.timeout_seconds <= 0:
            raise ValueError(f"timeout must be > 0, got {self.timeout_seconds}")
        if self.namespace and not _NAMESPACE_RE.match(self.namespace):
            raise ValueError(f"namespace {self.namespace!r} is not a valid metric name prefix")
        parse_listen_address(self.listen_address)

    @property
    def bind(self) -> Tuple[str, int]:
        return parse_listen_address(self.listen_address)
