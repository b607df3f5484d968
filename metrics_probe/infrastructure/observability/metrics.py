"""Prometheus metrics."""

from prometheus_client import Counter, Histogram

samples_written = Counter(
    "metric_samples_written_total",
    "Total number of synthetic samples sent to CloudWatch",
)

write_failures = Counter(
    "metric_write_failures_total",
    "Total number of failed PutMetricData calls",
    ["error_code"],
)

read_requests = Counter(
    "metric_read_requests_total",
    "Total number of GetMetricData calls",
    ["outcome"],
)

read_duration_seconds = Histogram(
    "metric_read_duration_seconds",
    "Duration of GetMetricData calls in seconds",
    buckets=[0.05, 0.1, 0.25, 0.5, 1, 2.5, 5, 10],
)
