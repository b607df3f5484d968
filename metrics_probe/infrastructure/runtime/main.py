"""Main entrypoint."""

import asyncio
import sys
from collections.abc import Sequence

import structlog
from botocore.exceptions import BotoCoreError
from pydantic import ValidationError

from metrics_probe.application.dto.catalog import MetricCatalog, load_catalog
from metrics_probe.application.services.sample_generator import SampleGenerator
from metrics_probe.application.services.time_windows import current_calendar_date, resolve_zone
from metrics_probe.application.use_cases.read_metrics import read_report
from metrics_probe.application.use_cases.write_metrics import run as write_metrics
from metrics_probe.domain.enums import RunMode
from metrics_probe.domain.errors import (
    BackendReadError,
    BackendWriteError,
    CatalogError,
    ZoneResolutionError,
)
from metrics_probe.domain.ports import ClockPort, MetricsBackendPort
from metrics_probe.infrastructure.aws.cloudwatch_backend import CloudWatchBackend
from metrics_probe.infrastructure.config.settings import Settings
from metrics_probe.infrastructure.io.report_writer import build_report_frame, write_report_csv
from metrics_probe.infrastructure.observability.logging import configure_logging
from metrics_probe.infrastructure.runtime.clock import SystemClock
from metrics_probe.infrastructure.runtime.health import start_metrics_server
from metrics_probe.interfaces.cli.args import parse_mode
from metrics_probe.interfaces.cli.report import render_report

logger = structlog.get_logger()


async def run_write(
    settings: Settings,
    backend: MetricsBackendPort,
    generator: SampleGenerator,
) -> None:
    """Generate and send one batch of synthetic samples."""
    await write_metrics(
        backend,
        generator,
        namespace=settings.metrics_namespace,
        metric_name=settings.metrics_write_metric_name,
        sample_count=settings.metrics_write_sample_count,
        on_write_error=settings.metrics_on_write_error,
    )


async def run_read(
    settings: Settings,
    backend: MetricsBackendPort,
    clock: ClockPort,
    catalog: MetricCatalog,
) -> str | None:
    """Read the daily report and print it. Returns the rendered report."""
    zone_id = settings.metrics_time_zone
    try:
        tz = resolve_zone(zone_id)
        reference_date = current_calendar_date(tz, clock)
    except ZoneResolutionError as e:
        logger.error("time_zone_not_found", time_zone=zone_id, error=str(e))
        return None

    logger.info(
        "reading_metrics",
        time_zone=zone_id,
        resolved_zone=tz.key,
        current_time_utc=clock.now().isoformat(),
        current_date=reference_date.isoformat(),
        day_count=settings.metrics_day_count,
    )

    try:
        rows = await read_report(
            backend,
            reference_date,
            tz,
            settings.metrics_day_count,
            catalog.to_query_specs(settings.metrics_namespace),
            minute_offset=settings.metrics_minute_offset,
            max_concurrency=settings.metrics_read_concurrency,
        )
    except BackendReadError as e:
        logger.error("read_metrics_failed", error=str(e))
        return None

    report = render_report(rows, catalog.metric_names)
    print(report)

    if settings.metrics_report_csv_path:
        frame = build_report_frame(rows, catalog.metric_names)
        write_report_csv(frame, settings.metrics_report_csv_path)
        logger.info("report_csv_written", path=settings.metrics_report_csv_path)

    return report


async def run(
    mode: RunMode,
    settings: Settings,
    backend: MetricsBackendPort,
    clock: ClockPort,
    generator: SampleGenerator | None = None,
) -> None:
    """Dispatch to write, read or both, write first.

    A propagated write failure is logged and does not stop the read.
    """
    logger.info("run_mode", mode=mode.value)

    if mode.writes:
        try:
            await run_write(settings, backend, generator or SampleGenerator(clock))
        except BackendWriteError as e:
            logger.error("write_metrics_failed", error=str(e))

    if mode.reads:
        try:
            catalog = load_catalog(settings.metrics_catalog_path)
        except CatalogError as e:
            logger.error("catalog_load_failed", error=str(e))
            return
        await run_read(settings, backend, clock, catalog)


def main(argv: Sequence[str] | None = None) -> int:
    """Entrypoint. Always returns 0."""
    args = sys.argv[1:] if argv is None else list(argv)

    try:
        settings = Settings()
    except ValidationError as e:
        configure_logging()
        logger.error("settings_invalid", error=str(e))
        return 0
    configure_logging(settings.log_level)
    start_metrics_server(settings)

    clock = SystemClock()
    try:
        backend = CloudWatchBackend(settings)
    except BotoCoreError as e:
        logger.error("cloudwatch_client_unavailable", profile=settings.aws_profile, error=str(e))
        return 0

    asyncio.run(run(parse_mode(args), settings, backend, clock))
    return 0


if __name__ == "__main__":
    sys.exit(main())
