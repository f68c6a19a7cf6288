"""
Adapter between MetricsCollector and prometheus_client's custom
collector protocol (describe/collect returning metric families).

A failed cycle never propagates into the HTTP handler: it is logged,
exposed as <namespace>_up 0, and the next scrape starts from scratch.
"""

from __future__ import annotations

import logging
import time
from typing import Iterator, List

from prometheus_client.core import GaugeMetricFamily
from prometheus_client.registry import Collector

from awair_exporter.collector.base import MetricsCollector
from awair_exporter.errors import AwairExporterError
from awair_exporter.metrics import DEFAULT_NAMESPACE, MetricDescriptor, build_up_descriptor


log = logging.getLogger(__name__)


def _family(desc: MetricDescriptor) -> GaugeMetricFamily:
    return GaugeMetricFamily(desc.name, desc.help_text, labels=list(desc.label_names))


class PrometheusBridge(Collector):

    def __init__(self, collector: MetricsCollector, namespace: str = DEFAULT_NAMESPACE):
        self._collector = collector
        self._up = build_up_descriptor(namespace)

    def describe(self) -> Iterator[GaugeMetricFamily]:
        """Empty families, so registering the bridge never hits the device."""
        for desc in self._collector.describe():
            yield _family(desc)
        yield _family(self._up)

    def collect(self) -> Iterator[GaugeMetricFamily]:
        host = self._collector.host
        started = time.monotonic()

        try:
            values = self._collector.collect()
        except AwairExporterError as e:
            log.warning("Scrape of %s failed after %.2fs: %s", host, time.monotonic() - started, e)
            yield self._up_family(host, 0)
            return

        families: List[GaugeMetricFamily] = []
        for value in values:
            family = _family(value.descriptor)
            family.add_metric(list(value.label_values), value.value)
            families.append(family)

        log.debug("Scrape of %s took %.3fs", host, time.monotonic() - started)
        yield from families
        yield self._up_family(host, 1)

    def _up_family(self, host: str, value: float) -> GaugeMetricFamily:
        family = _family(self._up)
        family.add_metric([host], value)
        return family
