"""Read daily aggregated metrics over a backward window of days."""

import asyncio
from collections.abc import Sequence
from datetime import date
from zoneinfo import ZoneInfo

import structlog

from metrics_probe.application.services.formatting import format_count
from metrics_probe.application.services.time_windows import backward_windows
from metrics_probe.domain.entities import DailyMetricRow, MetricQuerySpec, TimeWindow
from metrics_probe.domain.ports import MetricsBackendPort
from metrics_probe.domain.types import MetricReadResult

logger = structlog.get_logger()


async def read_metric(
    backend: MetricsBackendPort,
    window: TimeWindow,
    query_spec: MetricQuerySpec,
) -> MetricReadResult:
    """Issue one backend query for one metric over one window."""
    logger.debug(
        "getting_metrics",
        query_id=query_spec.query_id,
        start_utc=window.start_utc.isoformat(),
        end_utc=window.end_utc.isoformat(),
    )
    return await backend.get_metric_data(window.start_utc, window.end_utc, [query_spec])


def extract_count(result: MetricReadResult) -> float:
    """First value of the first result series, or 0.0 when there is none.

    An empty series is indistinguishable from a true zero.
    """
    series = result.get("MetricDataResults") or []
    if not series:
        return 0.0
    values = series[0].get("Values") or []
    if not values:
        return 0.0
    return float(values[0])


async def read_report(
    backend: MetricsBackendPort,
    reference_date: date,
    zone_id: str | ZoneInfo,
    day_count: int,
    query_specs: Sequence[MetricQuerySpec],
    minute_offset: int = 0,
    max_concurrency: int = 1,
) -> list[DailyMetricRow]:
    """Collect one row per day, most recent day first, values in catalog order.

    One backend call is made per metric per day. Backend errors are not
    caught: the first failure aborts the whole read. With max_concurrency=1
    calls are issued strictly one after another.
    """
    if max_concurrency < 1:
        raise ValueError(f"max_concurrency must be >= 1, got {max_concurrency}")

    windows = backward_windows(reference_date, zone_id, day_count, minute_offset)

    if max_concurrency == 1:
        rows = []
        for window in windows:
            values = []
            for query_spec in query_specs:
                result = await read_metric(backend, window, query_spec)
                values.append(_log_count(window, query_spec, extract_count(result)))
            rows.append(DailyMetricRow(date_label=window.date_label, values=tuple(values)))
        return rows

    return await _read_report_concurrent(backend, windows, query_specs, max_concurrency)


async def _read_report_concurrent(
    backend: MetricsBackendPort,
    windows: list[TimeWindow],
    query_specs: Sequence[MetricQuerySpec],
    max_concurrency: int,
) -> list[DailyMetricRow]:
    """Fan reads out through a bounded semaphore, then restore row order."""
    semaphore = asyncio.Semaphore(max_concurrency)

    async def read_one(window: TimeWindow, query_spec: MetricQuerySpec) -> float:
        async with semaphore:
            result = await read_metric(backend, window, query_spec)
        return _log_count(window, query_spec, extract_count(result))

    tasks = [
        [asyncio.create_task(read_one(window, query_spec)) for query_spec in query_specs]
        for window in windows
    ]
    flat = [task for day_tasks in tasks for task in day_tasks]

    try:
        await asyncio.gather(*flat)
    except Exception:
        for task in flat:
            task.cancel()
        await asyncio.gather(*flat, return_exceptions=True)
        raise

    rows = []
    for window, day_tasks in zip(windows, tasks):
        values = tuple(task.result() for task in day_tasks)
        rows.append(DailyMetricRow(date_label=window.date_label, values=values))
    return rows


def _log_count(window: TimeWindow, query_spec: MetricQuerySpec, count: float) -> float:
    logger.info(
        "metric_read",
        message=f"{window.date_label} {query_spec.metric_name}: {format_count(count)}",
        query_id=query_spec.query_id,
    )
    return count
