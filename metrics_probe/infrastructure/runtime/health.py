"""Prometheus metrics server."""

import structlog
from prometheus_client import start_http_server

from metrics_probe.infrastructure.config.settings import Settings

logger = structlog.get_logger()


def start_metrics_server(settings: Settings) -> bool:
    """Start Prometheus metrics HTTP server when a port is configured."""
    if settings.prometheus_port is None:
        return False
    start_http_server(settings.prometheus_port)
    logger.info("metrics_server_started", port=settings.prometheus_port)
    return True
