"""
Prometheus metrics for badge reconciliation and publishing.

Module-level metric objects are process-wide singletons. Components record
through [Metrics][badgebrotr.core.metrics.Metrics], which turns every call
into a no-op when ``MetricsConfig.enabled`` is false. Exposition is left to
the embedding application (``prometheus_client.generate_latest()`` or its
own HTTP endpoint).

Architecture:
    BADGES_COUNTER:          Cumulative totals, e.g. dropped awards or
                             failed publishes.
    QUERY_DURATION_SECONDS:  Relay query latency per read view.
"""

from __future__ import annotations

from prometheus_client import Counter, Histogram
from pydantic import BaseModel, Field


class MetricsConfig(BaseModel):
    """Configuration for metrics collection."""

    enabled: bool = Field(default=False, description="Enable metrics collection")


BADGES_COUNTER = Counter(
    "badges_counter",
    "Badge reconciliation and publishing counters (cumulative totals)",
    ["name"],
)

QUERY_DURATION_SECONDS = Histogram(
    "badges_query_duration_seconds",
    "Duration of relay queries per read view in seconds",
    ["view"],
    buckets=(0.05, 0.1, 0.25, 0.5, 1, 2, 3, 5, 10),
)


class Metrics:
    """Config-gated facade over the module-level metrics."""

    def __init__(self, config: MetricsConfig | None = None) -> None:
        self._config = config or MetricsConfig()

    @property
    def enabled(self) -> bool:
        return self._config.enabled

    def inc_counter(self, name: str, value: float = 1) -> None:
        """Increment the named counter. No-op if disabled or *value* is zero."""
        if not self._config.enabled or not value:
            return
        BADGES_COUNTER.labels(name=name).inc(value)

    def observe_query(self, view: str, duration: float) -> None:
        """Record a query duration for *view*. No-op if disabled."""
        if not self._config.enabled:
            return
        QUERY_DURATION_SECONDS.labels(view=view).observe(duration)
