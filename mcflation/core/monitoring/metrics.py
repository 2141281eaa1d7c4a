"""Prometheus metrics helpers for the price chart service."""

from __future__ import annotations

from prometheus_client import CollectorRegistry, Counter, Histogram, generate_latest


class MetricsCollector:
    """Collects and exposes Prometheus metrics for dataset loads."""

    def __init__(self, *, registry: CollectorRegistry | None = None) -> None:
        self.registry = registry or CollectorRegistry()
        self.load_latency_seconds = Histogram(
            "mcflation_dataset_load_latency_seconds",
            "Latency distribution for reading and normalizing the price dataset.",
            buckets=(0.001, 0.005, 0.01, 0.05, 0.1, 0.25, 0.5, 1.0, float("inf")),
            registry=self.registry,
        )
        self.loads_total = Counter(
            "mcflation_dataset_loads_total",
            "Total count of dataset loads.",
            ("source",),
            registry=self.registry,
        )
        self.load_failures_total = Counter(
            "mcflation_dataset_load_failures_total",
            "Total count of dataset loads that could not read any source.",
            ("source",),
            registry=self.registry,
        )
        self.degraded_fields_total = Counter(
            "mcflation_degraded_fields_total",
            "Fields that were present but could not be parsed and were read as missing.",
            ("field",),
            registry=self.registry,
        )

    def observe_load(self, source: str, latency_seconds: float, *, success: bool = True) -> None:
        """Record a dataset load."""

        self.loads_total.labels(source=source).inc()
        if success:
            self.load_latency_seconds.observe(latency_seconds)
        else:
            self.load_failures_total.labels(source=source).inc()

    def record_degraded_fields(self, counts: dict[str, int]) -> None:
        for field_name, count in counts.items():
            if count:
                self.degraded_fields_total.labels(field=field_name).inc(count)

    def render(self) -> bytes:
        """Render metrics in Prometheus exposition format."""

        return generate_latest(self.registry)


_DEFAULT_COLLECTOR: MetricsCollector | None = None


def get_metrics_collector() -> MetricsCollector:
    """Return the global metrics collector instance."""

    global _DEFAULT_COLLECTOR
    if _DEFAULT_COLLECTOR is None:
        _DEFAULT_COLLECTOR = MetricsCollector()
    return _DEFAULT_COLLECTOR


def configure_metrics_collector(collector: MetricsCollector | None) -> None:
    """Override the global metrics collector for application wiring or tests."""

    global _DEFAULT_COLLECTOR
    _DEFAULT_COLLECTOR = collector
