"""CloudWatch metrics backend."""

import asyncio
import time
from collections.abc import Sequence

import boto3
import structlog
from botocore.exceptions import BotoCoreError, ClientError
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from metrics_probe.domain.entities import MetricQuerySpec, MetricSample
from metrics_probe.domain.errors import BackendReadError, BackendWriteError
from metrics_probe.domain.ports import MetricsBackendPort
from metrics_probe.domain.types import MetricReadResult, Timestamp
from metrics_probe.infrastructure.config.settings import Settings
from metrics_probe.infrastructure.observability.metrics import (
    read_duration_seconds,
    read_requests,
    samples_written,
    write_failures,
)

logger = structlog.get_logger()


def _error_code(error: Exception) -> str:
    if isinstance(error, ClientError):
        return error.response.get("Error", {}).get("Code", "ClientError")
    return type(error).__name__


class CloudWatchBackend(MetricsBackendPort):
    """CloudWatch metrics backend.

    Uses a boto3 session bound to the configured credential profile. Blocking
    client calls run in a worker thread so several reads can be in flight.
    """

    def __init__(self, settings: Settings) -> None:
        """Initialize CloudWatch client."""
        self.settings = settings
        session = boto3.Session(
            profile_name=settings.aws_profile or None,
            region_name=settings.aws_region,
        )
        self.cloudwatch_client = session.client("cloudwatch")
        self.read_max_attempts = settings.metrics_read_max_attempts
        self.read_retry_wait = wait_exponential(multiplier=1, min=2, max=10)

    async def put_metric_data(self, namespace: str, samples: Sequence[MetricSample]) -> None:
        """Send all samples as one PutMetricData request."""
        metric_data = [
            {
                "MetricName": sample.name,
                "Unit": sample.unit.value,
                "Value": sample.value,
                "Timestamp": sample.timestamp_utc,
            }
            for sample in samples
        ]
        try:
            await asyncio.to_thread(
                self.cloudwatch_client.put_metric_data,
                Namespace=namespace,
                MetricData=metric_data,
            )
        except (ClientError, BotoCoreError) as e:
            write_failures.labels(error_code=_error_code(e)).inc()
            raise BackendWriteError(f"Failed to put metric data to {namespace}: {e}") from e

        samples_written.inc(len(metric_data))

    async def get_metric_data(
        self,
        start_utc: Timestamp,
        end_utc: Timestamp,
        queries: Sequence[MetricQuerySpec],
    ) -> MetricReadResult:
        """Run GetMetricData for the given queries over [start_utc, end_utc]."""
        metric_data_queries = [
            {
                "Id": query.query_id,
                "MetricStat": {
                    "Metric": {
                        "Namespace": query.namespace,
                        "MetricName": query.metric_name,
                    },
                    "Period": query.period_seconds,
                    "Stat": query.aggregation,
                },
            }
            for query in queries
        ]

        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.read_max_attempts),
            wait=self.read_retry_wait,
            retry=retry_if_exception_type(BackendReadError),
            reraise=True,
        )
        return await retrying(self._get_metric_data_once, start_utc, end_utc, metric_data_queries)

    async def _get_metric_data_once(
        self,
        start_utc: Timestamp,
        end_utc: Timestamp,
        metric_data_queries: list[dict],
    ) -> MetricReadResult:
        started = time.perf_counter()
        try:
            response = await asyncio.to_thread(
                self.cloudwatch_client.get_metric_data,
                StartTime=start_utc,
                EndTime=end_utc,
                MetricDataQueries=metric_data_queries,
            )
        except (ClientError, BotoCoreError) as e:
            read_requests.labels(outcome="error").inc()
            logger.error(
                "failed_to_get_metric_data",
                start_utc=start_utc.isoformat(),
                end_utc=end_utc.isoformat(),
                error=str(e),
                error_code=_error_code(e),
            )
            raise BackendReadError(f"Failed to get metric data: {e}") from e
        finally:
            read_duration_seconds.observe(time.perf_counter() - started)

        read_requests.labels(outcome="success").inc()
        return response
