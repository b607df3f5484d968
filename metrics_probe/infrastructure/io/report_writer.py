"""Report table export."""

from collections.abc import Sequence
from pathlib import Path

import pandas as pd

from metrics_probe.domain.entities import DailyMetricRow


def build_report_frame(rows: Sequence[DailyMetricRow], metric_names: Sequence[str]) -> pd.DataFrame:
    """Build a date-indexed frame, one column per metric, rows in input order."""
    for row in rows:
        if len(row.values) != len(metric_names):
            raise ValueError(
                f"Row {row.date_label} has {len(row.values)} values, expected {len(metric_names)}"
            )

    frame = pd.DataFrame(
        [list(row.values) for row in rows],
        columns=list(metric_names),
        index=pd.Index([row.date_label for row in rows], name="date"),
        dtype="float64",
    )
    return frame


def write_report_csv(frame: pd.DataFrame, path: str | Path) -> None:
    """Write the report frame to a CSV file with a header row.

    Columns holding only whole numbers are written as integers, others at
    full float precision.
    """
    out = frame.copy()
    for column in out.columns:
        values = out[column]
        if values.notna().all() and (values % 1 == 0).all():
            out[column] = values.astype("int64")
    out.to_csv(path, encoding="utf-8")
