"""Tests for the Prometheus metrics collector."""

from prometheus_client import CollectorRegistry

from mcflation.core.monitoring.metrics import MetricsCollector


def test_observe_load_updates_metrics() -> None:
    registry = CollectorRegistry()
    collector = MetricsCollector(registry=registry)

    collector.observe_load("csv", 0.25, success=True)
    collector.observe_load("csv", 0.40, success=False)

    count = registry.get_sample_value("mcflation_dataset_load_latency_seconds_count")
    total_latency = registry.get_sample_value("mcflation_dataset_load_latency_seconds_sum")
    total_loads = registry.get_sample_value("mcflation_dataset_loads_total", {"source": "csv"})
    total_failures = registry.get_sample_value("mcflation_dataset_load_failures_total", {"source": "csv"})

    assert count == 1.0
    assert total_latency == 0.25
    assert total_loads == 2.0
    assert total_failures == 1.0


def test_record_degraded_fields_skips_zero_counts() -> None:
    registry = CollectorRegistry()
    collector = MetricsCollector(registry=registry)

    collector.record_degraded_fields({"max_price": 2, "year": 0})

    assert registry.get_sample_value("mcflation_degraded_fields_total", {"field": "max_price"}) == 2.0
    assert registry.get_sample_value("mcflation_degraded_fields_total", {"field": "year"}) is None


def test_render_returns_exposition_text() -> None:
    collector = MetricsCollector()
    collector.observe_load("memory", 0.0)

    payload = collector.render().decode()

    assert 'mcflation_dataset_loads_total{source="memory"} 1.0' in payload
