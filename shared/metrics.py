"""
Shared metrics configuration for live_attr.
"""

import threading
from typing import Dict, Any

from prometheus_client import REGISTRY, CollectorRegistry, Counter, Info


class MetricsCollector:
    """Centralized metrics collector for the cache components."""

    def __init__(self, service_name: str, registry: CollectorRegistry = REGISTRY):
        self.service_name = service_name
        self.registry = registry
        self._metrics: Dict[str, Any] = {}
        self._lock = threading.Lock()
        self._setup_metrics()

    def _setup_metrics(self):
        """Set up cache metrics."""

        self._metrics["service_info"] = Info(
            "live_attr_service",
            "Service information",
            registry=self.registry
        )
        self._metrics["service_info"].info({
            "service": self.service_name,
            "version": "0.1.0"
        })

        self._metrics["live_attr_cache_hits_total"] = Counter(
            "live_attr_cache_hits_total",
            "Total cache hits",
            ["cache_type"],
            registry=self.registry
        )

        self._metrics["live_attr_cache_misses_total"] = Counter(
            "live_attr_cache_misses_total",
            "Total cache misses",
            ["cache_type"],
            registry=self.registry
        )

        self._metrics["live_attr_increments_total"] = Counter(
            "live_attr_increments_total",
            "Total live attribute increments",
            ["status"],
            registry=self.registry
        )

        self._metrics["live_attr_reconciliations_total"] = Counter(
            "live_attr_reconciliations_total",
            "Total write-backs of live attributes",
            ["status"],
            registry=self.registry
        )

        self._metrics["live_attr_schema_drift_total"] = Counter(
            "live_attr_schema_drift_total",
            "Cached snapshots discarded because they no longer validate",
            registry=self.registry
        )

    def increment_counter(self, metric_name: str, **labels):
        """Increment a counter metric."""
        metric = self._metrics.get(metric_name)
        if metric is None:
            return
        with self._lock:
            if labels:
                metric.labels(**labels).inc()
            else:
                metric.inc()
