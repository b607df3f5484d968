"""Application settings."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from metrics_probe.application.dto.catalog import (
    GA_METRICS_NAMESPACE,
    METRIC_NAME_429_REQUESTS_PER_DAY,
)
from metrics_probe.domain.enums import WriteErrorPolicy


class Settings(BaseSettings):
    """Application settings."""

    # Named profile from the shared credentials store; empty uses the default chain
    aws_profile: str = "live"
    aws_region: str | None = None

    metrics_namespace: str = GA_METRICS_NAMESPACE
    metrics_time_zone: str = "Pacific Standard Time"
    metrics_day_count: int = Field(7, ge=1)
    metrics_minute_offset: int = 0
    metrics_write_metric_name: str = METRIC_NAME_429_REQUESTS_PER_DAY
    metrics_write_sample_count: int = Field(20, ge=1, le=1000)
    metrics_catalog_path: str | None = None
    metrics_on_write_error: WriteErrorPolicy = WriteErrorPolicy.SWALLOW
    metrics_read_concurrency: int = Field(1, ge=1)
    # 1 means no retry
    metrics_read_max_attempts: int = Field(1, ge=1)
    metrics_report_csv_path: str | None = None

    prometheus_port: int | None = None
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_prefix="",
        extra="ignore",
    )
