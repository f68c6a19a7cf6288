"""
HTTP client for the Awair local API. One GET per collection cycle to
http://<host>/air-data/latest, returning the raw body.

Every fetch is bounded by one overall deadline on top of httpx's
per-socket timeouts, so a device trickling its body out cannot stall a
scrape. Expiry, connection failures and body-read failures all surface
as TransportError.
"""

from __future__ import annotations

import logging
import time
from typing import Optional

import httpx

from awair_exporter.errors import DeviceStatusError, TransportError


log = logging.getLogger(__name__)

USER_AGENT = "github.com/Ichabond/awair-exporter"
AIR_DATA_PATH = "/air-data/latest"


class DeviceClient:

    def __init__(
        self,
        timeout_seconds: float = 5.0,
        check_status: bool = True,
        user_agent: str = USER_AGENT,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self._timeout = timeout_seconds
        self._check_status = check_status
        self._client = httpx.Client(
            timeout=self._timeout,
            headers={"User-Agent": user_agent},
            # One connection per fetch; the device drops idle sockets anyway
            limits=httpx.Limits(max_keepalive_connections=0),
            transport=transport,
        )

    @staticmethod
    def endpoint(host: str) -> str:
        """The host is used as-is, so "10.0.0.5" and "10.0.0.5:8080" both work."""
        return f"http://{host}{AIR_DATA_PATH}"

    def fetch(self, host: str) -> bytes:
        """GET the latest air data and return the body bytes."""
        url = self.endpoint(host)
        log.debug("Fetching %s", url)
        deadline = time.monotonic() + self._timeout

        try:
            # The streamed response is closed on every exit path
            with self._client.stream("GET", url) as response:
                if self._check_status and response.status_code >= 400:
                    raise DeviceStatusError(host, response.status_code, response.reason_phrase)
                body = self._read_before(response, host, deadline)
        except httpx.TimeoutException as e:
            raise TransportError(host, f"timed out after {self._timeout}s: {e}") from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise TransportError(host, f"request failed: {e}") from e

        log.debug("Got %d bytes from %s (HTTP %d)", len(body), host, response.status_code)
        return body

    def _read_before(self, response: httpx.Response, host: str, deadline: float) -> bytes:
        """Read the body, giving up once the fetch deadline has passed.

        The deadline is checked between chunks, so a single stalled read can
        still overrun it by at most the per-socket read timeout.
        """
        chunks = []
        for chunk in response.iter_bytes():
            chunks.append(chunk)
            if time.monotonic() > deadline:
                raise TransportError(host, f"timed out after {self._timeout}s reading the response body")
        return b"".join(chunks)

    def close(self):
        self._client.close()

    def __enter__(self) -> "DeviceClient":
        return self

    def __exit__(self, *exc_info):
        self.close()
