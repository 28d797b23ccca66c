"""Prometheus gauge holding the index existence signal.

One IndexGauge is built at startup and shared by the check loop (writer)
and the HTTP endpoint (reader). It owns its own CollectorRegistry so
nothing depends on the prometheus_client global registry.
"""

from __future__ import annotations

from prometheus_client import CONTENT_TYPE_LATEST, CollectorRegistry, Gauge, generate_latest

METRIC_NAME = "elasticsearch_indices_exists"
METRIC_HELP = "Whether an Elasticsearch index exists (1 if exists, 0 otherwise)"
LABEL = "index_name"


class IndexGauge:
    """Per-index gauge with last-write-wins semantics per label."""

    content_type = CONTENT_TYPE_LATEST

    def __init__(
        self,
        registry: CollectorRegistry | None = None,
        keep_stale: bool = True,
    ) -> None:
        self.registry = registry or CollectorRegistry()
        self.keep_stale = keep_stale
        self._gauge = Gauge(METRIC_NAME, METRIC_HELP, [LABEL], registry=self.registry)
        self._index_names: set[str] = set()

    def set(self, index_name: str, value: float) -> None:
        if not self.keep_stale:
            for stale in self._index_names - {index_name}:
                self._gauge.remove(stale)
            self._index_names &= {index_name}
        self._gauge.labels(index_name).set(value)
        self._index_names.add(index_name)

    def get(self, index_name: str) -> float | None:
        """Current value for ``index_name``, or None if never written."""
        return self.registry.get_sample_value(METRIC_NAME, {LABEL: index_name})

    @property
    def index_names(self) -> list[str]:
        return sorted(self._index_names)

    def render(self) -> bytes:
        """Text exposition of the registry, as served on /metrics."""
        return generate_latest(self.registry)
