"""Shared fixtures: a loopback fake device running in a background thread."""

import socket
import threading
from http.server import HTTPServer

import pytest

from awair_exporter.mock.fake_awair_device import AirDataHandler


def start_device(handler=AirDataHandler) -> HTTPServer:
    server = HTTPServer(("127.0.0.1", 0), handler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    return server


def host_of(server: HTTPServer) -> str:
    return f"127.0.0.1:{server.server_address[1]}"


@pytest.fixture
def device():
    """Factory fixture: device(handler) -> "127.0.0.1:PORT". Shut down after the test."""
    servers = []

    def _start(handler=AirDataHandler) -> str:
        server = start_device(handler)
        servers.append(server)
        return host_of(server)

    yield _start

    for server in servers:
        server.shutdown()
        server.server_close()


@pytest.fixture
def dead_host() -> str:
    """A loopback address nothing is listening on."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(("127.0.0.1", 0))
    port = sock.getsockname()[1]
    sock.close()
    return f"127.0.0.1:{port}"
