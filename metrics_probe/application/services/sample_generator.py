"""Synthetic metric sample generation."""

import random
from datetime import timedelta

from metrics_probe.domain.entities import MetricSample
from metrics_probe.domain.enums import StandardUnit
from metrics_probe.domain.ports import ClockPort
from metrics_probe.domain.types import Timestamp

# PutMetricData accepts at most 1000 datums per request
MAX_BATCH_SIZE = 1000
MAX_JITTER_MINUTES = 30


def round_down_to_minute(ts: Timestamp) -> Timestamp:
    """Truncate a timestamp to whole-minute resolution."""
    return ts.replace(second=0, microsecond=0)


class SampleGenerator:
    """Generates randomized samples from an explicit, seedable RNG."""

    def __init__(self, clock: ClockPort, rng: random.Random | None = None) -> None:
        """Initialize sample generator."""
        self.clock = clock
        self.rng = rng if rng is not None else random.Random()

    def generate(self, name: str, unit: StandardUnit, count: int) -> list[MetricSample]:
        """Generate `count` samples with random value and timestamp jitter.

        Args:
            name: Metric name
            unit: Unit of every generated sample
            count: Number of samples, between 1 and MAX_BATCH_SIZE

        Returns:
            Samples in generation order.
        """
        if count < 1 or count > MAX_BATCH_SIZE:
            raise ValueError(f"Sample count must be between 1 and {MAX_BATCH_SIZE}, got {count}")

        return [self._build_sample(name, unit) for _ in range(count)]

    def _build_sample(self, name: str, unit: StandardUnit) -> MetricSample:
        base = round_down_to_minute(self.clock.now())
        jitter = timedelta(minutes=self.rng.randrange(0, MAX_JITTER_MINUTES))
        return MetricSample(
            name=name,
            unit=unit,
            value=float(self.rng.randint(1, 99)),
            timestamp_utc=base - jitter,
        )
