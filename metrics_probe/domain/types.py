"""Domain types and aliases."""

from datetime import datetime
from typing import TypedDict

Timestamp = datetime


class MetricDataResultDict(TypedDict, total=False):
    """One series of a get_metric_data response."""

    Id: str
    Label: str
    Timestamps: list[datetime]
    Values: list[float]
    StatusCode: str


class MetricReadResult(TypedDict, total=False):
    """Raw get_metric_data response for one query and window."""

    MetricDataResults: list[MetricDataResultDict]
    NextToken: str
