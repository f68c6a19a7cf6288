"""
Base collector interface.

A collector declares the gauges it can ever emit (describe) and runs one
fetch-decode-emit cycle on demand (collect). The exposition layer only
talks to this interface, so tests can swap in a collector that never
touches the network.
"""

from abc import ABC, abstractmethod
from typing import List, Sequence

from awair_exporter.metrics import MetricDescriptor, MetricValue


class MetricsCollector(ABC):
    """Interface for all metrics sources."""

    @property
    @abstractmethod
    def host(self) -> str:
        """Target host; also the value of the instance label."""
        ...

    @abstractmethod
    def describe(self) -> Sequence[MetricDescriptor]:
        """Static metric catalog. Must not do any I/O."""
        ...

    @abstractmethod
    def collect(self) -> List[MetricValue]:
        """Run one collection cycle. Raises AwairExporterError on failure."""
        ...

    @abstractmethod
    def name(self) -> str:
        """Human-readable name for this source."""
        ...
