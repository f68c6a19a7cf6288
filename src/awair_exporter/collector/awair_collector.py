"""
Collector for a single Awair Element. Each call to collect() fetches
/air-data/latest, decodes it into an AirSample and pairs every field
with its static descriptor. Nothing is cached between calls.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

from awair_exporter.client import DeviceClient
from awair_exporter.collector.base import MetricsCollector
from awair_exporter.metrics import AirSample, MetricDescriptor, MetricValue, build_catalog


log = logging.getLogger(__name__)


class AwairCollector(MetricsCollector):

    def __init__(
        self,
        host: str,
        client: DeviceClient,
        catalog: Optional[Sequence[MetricDescriptor]] = None,
    ):
        self._host = host
        self._client = client
        self._catalog: Tuple[MetricDescriptor, ...] = (
            tuple(catalog) if catalog is not None else build_catalog()
        )

    @property
    def host(self) -> str:
        return self._host

    def describe(self) -> Sequence[MetricDescriptor]:
        return self._catalog

    def read_sample(self) -> AirSample:
        """Fetch and decode one reading. Raises TransportError or DecodeError."""
        raw = self._client.fetch(self._host)
        return AirSample.from_json(raw, hostname=self._host)

    def collect(self) -> List[MetricValue]:
        sample = self.read_sample()
        labels = (sample.hostname,)
        values = [
            MetricValue(descriptor=desc, value=getattr(sample, desc.field), label_values=labels)
            for desc in self._catalog
        ]
        log.debug("Collected %d gauges from %s (score=%.0f)", len(values), self._host, sample.score)
        return values

    def name(self) -> str:
        return f"Awair ({self._client.endpoint(self._host)})"

    def close(self):
        self._client.close()
