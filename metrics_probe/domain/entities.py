"""Domain entities."""

from dataclasses import dataclass
from datetime import date

from metrics_probe.domain.enums import StandardUnit
from metrics_probe.domain.types import Timestamp

ONE_DAY_IN_SECONDS = 86400


@dataclass(frozen=True)
class MetricSample:
    """A single synthetic data point."""

    name: str
    unit: StandardUnit
    value: float
    timestamp_utc: Timestamp


@dataclass(frozen=True)
class MetricQuerySpec:
    """One entry of the metric query catalog."""

    query_id: str
    metric_name: str
    namespace: str
    aggregation: str = "Sum"
    period_seconds: int = ONE_DAY_IN_SECONDS


@dataclass(frozen=True)
class TimeWindow:
    """One zone-local calendar day expressed as a UTC range."""

    local_date: date
    start_utc: Timestamp
    end_utc: Timestamp

    @property
    def date_label(self) -> str:
        return self.local_date.isoformat()


@dataclass(frozen=True)
class DailyMetricRow:
    """Counts for one day, aligned with catalog order."""

    date_label: str
    values: tuple[float, ...]
