"""Core layer: logging, exceptions, YAML loading and metrics.

Sits in the middle of the diamond DAG -- depends only on
``badgebrotr.models`` and is depended upon by ``badgebrotr.services``.

Attributes:
    Logger: Structured logger supporting key=value and JSON output modes.
        See [Logger][badgebrotr.core.logger.Logger].
    Metrics: Config-gated Prometheus counters and query histograms.
        See [Metrics][badgebrotr.core.metrics.Metrics].
    YAML: Safe YAML loading with ``yaml.safe_load()`` to prevent code execution.
        See [load_yaml()][badgebrotr.core.yaml.load_yaml].
    Exceptions: The [BadgeBrotrError][badgebrotr.core.exceptions.BadgeBrotrError]
        hierarchy.
"""

from .exceptions import (
    BadgeBrotrError,
    ConfigurationError,
    ConnectivityError,
    PreconditionError,
    ProfileBadgesConflictError,
    PublishingError,
)
from .logger import Logger, StructuredFormatter, configure_logging, format_kv_pairs
from .metrics import BADGES_COUNTER, QUERY_DURATION_SECONDS, Metrics, MetricsConfig
from .yaml import load_yaml


__all__ = [
    "BADGES_COUNTER",
    "QUERY_DURATION_SECONDS",
    "BadgeBrotrError",
    "ConfigurationError",
    "ConnectivityError",
    "Logger",
    "Metrics",
    "MetricsConfig",
    "PreconditionError",
    "ProfileBadgesConflictError",
    "PublishingError",
    "StructuredFormatter",
    "configure_logging",
    "format_kv_pairs",
    "load_yaml",
]
