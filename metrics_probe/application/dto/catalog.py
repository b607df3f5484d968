"""Metric query catalog DTOs."""

import json
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from metrics_probe.domain.entities import MetricQuerySpec
from metrics_probe.domain.errors import CatalogError

GA_METRICS_NAMESPACE = "SessionCam/BiDirectionalReportProcessor/GoogleAnalytics"
METRIC_NAME_429_REQUESTS_PER_DAY = "429: Requests Per Day"


class CatalogQuery(BaseModel):
    """A single (queryId, metricName) pair."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    query_id: str = Field(alias="queryId", pattern=r"^[a-z][a-zA-Z0-9_]*$")
    metric_name: str = Field(alias="metricName", min_length=1)


class MetricCatalog(BaseModel):
    """Ordered metric query catalog. Order defines report column order."""

    model_config = ConfigDict(populate_by_name=True)

    namespace: str | None = None
    queries: list[CatalogQuery] = Field(min_length=1)

    @field_validator("queries")
    @classmethod
    def _unique_query_ids(cls, queries: list[CatalogQuery]) -> list[CatalogQuery]:
        seen: set[str] = set()
        for query in queries:
            if query.query_id in seen:
                raise ValueError(f"Duplicate queryId: {query.query_id}")
            seen.add(query.query_id)
        return queries

    def to_query_specs(self, default_namespace: str) -> tuple[MetricQuerySpec, ...]:
        """Build immutable query specs, in catalog order."""
        namespace = self.namespace or default_namespace
        return tuple(
            MetricQuerySpec(
                query_id=query.query_id,
                metric_name=query.metric_name,
                namespace=namespace,
            )
            for query in self.queries
        )

    @property
    def metric_names(self) -> list[str]:
        return [query.metric_name for query in self.queries]


DEFAULT_CATALOG = MetricCatalog(
    queries=[
        CatalogQuery(
            query_id="metricRequest429RequestsPerDay",
            metric_name=METRIC_NAME_429_REQUESTS_PER_DAY,
        ),
    ],
)


def load_catalog(path: str | Path | None) -> MetricCatalog:
    """Load a catalog from a JSON file, or return the built-in one."""
    if path is None:
        return DEFAULT_CATALOG

    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
        return MetricCatalog(**data)
    except OSError as e:
        raise CatalogError(f"Failed to read catalog {path}: {e}") from e
    except (json.JSONDecodeError, TypeError, ValidationError) as e:
        raise CatalogError(f"Invalid catalog {path}: {e}") from e
