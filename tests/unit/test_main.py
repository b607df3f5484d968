"""Unit tests for the runtime entrypoint."""

import random
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from botocore.exceptions import ProfileNotFound

from metrics_probe.application.services.sample_generator import SampleGenerator
from metrics_probe.domain.enums import RunMode
from metrics_probe.domain.errors import BackendReadError, BackendWriteError
from metrics_probe.domain.ports import MetricsBackendPort
from metrics_probe.infrastructure.config.settings import Settings
from metrics_probe.infrastructure.runtime.health import start_metrics_server
from metrics_probe.infrastructure.runtime.main import main, run

NOW = datetime(2024, 1, 10, 20, 0, tzinfo=timezone.utc)


@pytest.fixture
def settings():
    """Create settings."""
    return Settings(metrics_day_count=2, metrics_time_zone="Pacific Standard Time")


@pytest.fixture
def clock():
    """Create fixed clock."""
    clock = MagicMock()
    clock.now.return_value = NOW
    return clock


@pytest.fixture
def mock_backend():
    """Create mock backend."""
    backend = MagicMock(spec=MetricsBackendPort)
    backend.put_metric_data = AsyncMock()
    backend.get_metric_data = AsyncMock(
        return_value={"MetricDataResults": [{"Id": "q", "Values": [4.0]}]}
    )
    return backend


@pytest.mark.asyncio
async def test_run_read_prints_report(settings, clock, mock_backend, capsys):
    """Test read mode prints the CSV report most recent first."""
    await run(RunMode.READ, settings, mock_backend, clock)

    out = capsys.readouterr().out
    assert "Metrics in CSV format (in same date order):" in out
    assert "2024-01-10,4\n2024-01-09,4" in out
    mock_backend.put_metric_data.assert_not_awaited()
    assert mock_backend.get_metric_data.await_count == 2


@pytest.mark.asyncio
async def test_run_write_only(settings, clock, mock_backend):
    """Test write mode sends one batch and reads nothing."""
    generator = SampleGenerator(clock, random.Random(0))

    await run(RunMode.WRITE, settings, mock_backend, clock, generator)

    mock_backend.put_metric_data.assert_awaited_once()
    mock_backend.get_metric_data.assert_not_awaited()


@pytest.mark.asyncio
async def test_run_both_continues_after_write_failure(settings, clock, mock_backend):
    """Test a failed write does not stop the read."""
    mock_backend.put_metric_data.side_effect = BackendWriteError("throttled")

    await run(RunMode.BOTH, settings, mock_backend, clock)

    assert mock_backend.put_metric_data.await_count == 1
    assert mock_backend.get_metric_data.await_count == 2


@pytest.mark.asyncio
async def test_run_unknown_zone_stops_read(clock, mock_backend, capsys):
    """Test an unresolvable zone skips the read without raising."""
    settings = Settings(metrics_time_zone="Atlantis Standard Time")

    await run(RunMode.READ, settings, mock_backend, clock)

    mock_backend.get_metric_data.assert_not_awaited()
    assert "Metrics in CSV format" not in capsys.readouterr().out


@pytest.mark.asyncio
async def test_run_read_failure_is_reported(settings, clock, mock_backend, capsys):
    """Test a read failure stops the read branch without raising."""
    mock_backend.get_metric_data.side_effect = BackendReadError("denied")

    await run(RunMode.READ, settings, mock_backend, clock)

    assert mock_backend.get_metric_data.await_count == 1
    assert "Metrics in CSV format" not in capsys.readouterr().out


@pytest.mark.asyncio
async def test_run_read_writes_csv_file(clock, mock_backend, tmp_path):
    """Test the report is also exported when a CSV path is configured."""
    path = tmp_path / "report.csv"
    settings = Settings(metrics_day_count=1, metrics_report_csv_path=str(path))

    await run(RunMode.READ, settings, mock_backend, clock)

    assert path.read_text().splitlines() == ["date,429: Requests Per Day", "2024-01-10,4"]


def test_main_always_returns_zero():
    """Test the entrypoint exits 0 and dispatches the parsed mode."""
    with patch("metrics_probe.infrastructure.runtime.main.configure_logging"), patch(
        "metrics_probe.infrastructure.runtime.main.CloudWatchBackend"
    ) as mock_backend_cls, patch(
        "metrics_probe.infrastructure.runtime.main.run", new_callable=AsyncMock
    ) as mock_run:
        assert main(["r"]) == 0

    mock_backend_cls.assert_called_once()
    assert mock_run.await_args[0][0] is RunMode.READ


def test_main_missing_profile_returns_zero():
    """Test a missing credential profile is reported, not raised."""
    with patch("metrics_probe.infrastructure.runtime.main.configure_logging"), patch(
        "metrics_probe.infrastructure.runtime.main.CloudWatchBackend",
        side_effect=ProfileNotFound(profile="live"),
    ), patch("metrics_probe.infrastructure.runtime.main.run", new_callable=AsyncMock) as mock_run:
        assert main([]) == 0

    mock_run.assert_not_awaited()


def test_metrics_server_disabled_by_default(settings):
    """Test no exporter is started without a port."""
    with patch("metrics_probe.infrastructure.runtime.health.start_http_server") as mock_server:
        assert start_metrics_server(settings) is False

    mock_server.assert_not_called()


def test_metrics_server_started_with_port():
    """Test the exporter listens on the configured port."""
    settings = Settings(prometheus_port=9300)
    with patch("metrics_probe.infrastructure.runtime.health.start_http_server") as mock_server:
        assert start_metrics_server(settings) is True

    mock_server.assert_called_once_with(9300)


def test_main_propagated_write_failure_returns_zero(monkeypatch):
    """Test a re-raised write failure is reported and the exit status stays 0."""
    monkeypatch.setenv("METRICS_ON_WRITE_ERROR", "propagate")
    backend = MagicMock(spec=MetricsBackendPort)
    backend.put_metric_data = AsyncMock(side_effect=BackendWriteError("denied"))

    with patch("metrics_probe.infrastructure.runtime.main.configure_logging"), patch(
        "metrics_probe.infrastructure.runtime.main.CloudWatchBackend", return_value=backend
    ):
        assert main(["w"]) == 0

    assert backend.put_metric_data.await_count == 1


@pytest.mark.asyncio
async def test_run_both_reads_after_propagated_write_failure(clock, mock_backend):
    """Test the read still runs when the write failure is re-raised."""
    settings = Settings(metrics_day_count=2, metrics_on_write_error="propagate")
    mock_backend.put_metric_data.side_effect = BackendWriteError("denied")

    await run(RunMode.BOTH, settings, mock_backend, clock)

    assert mock_backend.put_metric_data.await_count == 1
    assert mock_backend.get_metric_data.await_count == 2


def test_main_invalid_settings_returns_zero(monkeypatch):
    """Test invalid configuration is reported without building a client."""
    monkeypatch.setenv("METRICS_DAY_COUNT", "0")

    with patch("metrics_probe.infrastructure.runtime.main.configure_logging"), patch(
        "metrics_probe.infrastructure.runtime.main.CloudWatchBackend"
    ) as mock_backend_cls:
        assert main(["r"]) == 0

    mock_backend_cls.assert_not_called()
