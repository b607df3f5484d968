"""Write synthetic metrics to the backend."""

from collections.abc import Sequence

import structlog

from metrics_probe.application.services.formatting import format_count
from metrics_probe.application.services.sample_generator import SampleGenerator
from metrics_probe.domain.entities import MetricSample
from metrics_probe.domain.enums import StandardUnit, WriteErrorPolicy
from metrics_probe.domain.errors import BackendWriteError
from metrics_probe.domain.ports import MetricsBackendPort

logger = structlog.get_logger()


async def write_batch(
    backend: MetricsBackendPort,
    namespace: str,
    samples: Sequence[MetricSample],
    on_write_error: WriteErrorPolicy = WriteErrorPolicy.SWALLOW,
) -> None:
    """Send all samples in one backend call.

    Failures are logged and swallowed unless the policy is PROPAGATE, in
    which case they are re-raised as BackendWriteError. Writes are never
    retried.
    """
    if not samples:
        logger.warning("metrics_batch_empty", namespace=namespace)
        return

    try:
        await backend.put_metric_data(namespace, samples)
    except Exception as e:
        logger.error(
            "metrics_batch_failed",
            namespace=namespace,
            sample_count=len(samples),
            error=str(e),
            error_type=type(e).__name__,
            exc_info=True,
        )
        if on_write_error is WriteErrorPolicy.PROPAGATE:
            if isinstance(e, BackendWriteError):
                raise
            raise BackendWriteError(f"Failed to send metrics batch: {e}") from e
        return

    logger.info("metrics_batch_sent", namespace=namespace, sample_count=len(samples))


async def run(
    backend: MetricsBackendPort,
    generator: SampleGenerator,
    namespace: str,
    metric_name: str,
    sample_count: int,
    unit: StandardUnit = StandardUnit.COUNT,
    on_write_error: WriteErrorPolicy = WriteErrorPolicy.SWALLOW,
) -> list[MetricSample]:
    """Generate samples, log each one and send them as a single batch."""
    samples = generator.generate(metric_name, unit, sample_count)

    for sample in samples:
        logger.info(
            "metric_sample",
            message=f"Time [{sample.timestamp_utc:%H:%M:%S}] UTC, Value [{format_count(sample.value)}]",
            metric_name=sample.name,
        )

    await write_batch(backend, namespace, samples, on_write_error)
    return samples
