"""Console rendering of the daily metrics report."""

from collections.abc import Sequence

from metrics_probe.application.services.formatting import format_count
from metrics_probe.domain.entities import DailyMetricRow

CSV_HEADER = "Metrics in CSV format (in same date order):"


def format_value(value: float) -> str:
    """Render a count without a trailing `.0` when it is integral."""
    return format_count(value)


def format_csv_lines(rows: Sequence[DailyMetricRow]) -> list[str]:
    """One `date,v1,...,vN` line per row, in the given order."""
    return [",".join([row.date_label, *(format_value(v) for v in row.values)]) for row in rows]


def render_report(rows: Sequence[DailyMetricRow], metric_names: Sequence[str]) -> str:
    """Render the column legend, the CSV header and the CSV lines."""
    lines = [f"Columns: date,{','.join(metric_names)}", CSV_HEADER]
    lines.extend(format_csv_lines(rows))
    return "\n".join(lines)
