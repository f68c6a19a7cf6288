"""
Wires the collector into a private prometheus_client registry and serves
it on /metrics. Each scrape runs one collection cycle in the exposition
server's request thread; no state is shared between scrapes.
"""

from __future__ import annotations

import logging
import threading
from typing import Optional, Tuple

from prometheus_client import CollectorRegistry, start_http_server

from awair_exporter.client import DeviceClient
from awair_exporter.collector.awair_collector import AwairCollector
from awair_exporter.collector.prometheus_bridge import PrometheusBridge
from awair_exporter.config import ExporterConfig
from awair_exporter.metrics import build_catalog


log = logging.getLogger(__name__)


def build_collector(config: ExporterConfig) -> AwairCollector:
    client = DeviceClient(timeout_seconds=config.timeout_seconds, check_status=config.check_status)
    return AwairCollector(config.host, client, catalog=build_catalog(config.namespace))


def build_registry(bridge: PrometheusBridge) -> CollectorRegistry:
    """A fresh registry holding only the bridge (no process/platform collectors)."""
    registry = CollectorRegistry()
    registry.register(bridge)
    return registry


def start(
    config: ExporterConfig,
    collector: Optional[AwairCollector] = None,
) -> Tuple[object, threading.Thread, AwairCollector]:
    """Start serving in a daemon thread and return (server, thread, collector)."""
    collector = collector or build_collector(config)
    registry = build_registry(PrometheusBridge(collector, namespace=config.namespace))

    addr, port = config.bind
    httpd, thread = start_http_server(port, addr=addr, registry=registry)
    log.info("Serving /metrics on %s:%d for %s", addr, httpd.server_port, collector.name())
    return httpd, thread, collector


def serve(config: ExporterConfig):
    """Block serving /metrics until interrupted."""
    httpd, thread, collector = start(config)
    try:
        while thread.is_alive():
            thread.join(timeout=1.0)
    except KeyboardInterrupt:
        log.info("Interrupted, shutting down")
    finally:
        httpd.shutdown()
        httpd.server_close()
        collector.close()
