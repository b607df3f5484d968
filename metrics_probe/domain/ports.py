"""Ports (interfaces) for infrastructure adapters."""

from abc import ABC, abstractmethod
from collections.abc import Sequence

from metrics_probe.domain.entities import MetricQuerySpec, MetricSample
from metrics_probe.domain.types import MetricReadResult, Timestamp


class MetricsBackendPort(ABC):
    """Port for the metrics service that stores and aggregates data points."""

    @abstractmethod
    async def put_metric_data(self, namespace: str, samples: Sequence[MetricSample]) -> None:
        """Send all samples in a single write call."""

    @abstractmethod
    async def get_metric_data(
        self,
        start_utc: Timestamp,
        end_utc: Timestamp,
        queries: Sequence[MetricQuerySpec],
    ) -> MetricReadResult:
        """Query aggregated values for the given range."""


class ClockPort(ABC):
    """Port for time operations."""

    @abstractmethod
    def now(self) -> Timestamp:
        """Get current timezone-aware UTC timestamp."""
