"""Integration tests for the metrics endpoint."""

from fastapi.testclient import TestClient
from prometheus_client import CONTENT_TYPE_LATEST

from mcflation.core.config import AppConfig
from mcflation.core.data.sources import MemoryDataSource
from mcflation.web.app import create_app


def test_metrics_endpoint_exposes_prometheus_payload(raw_records) -> None:
    app = create_app(config=AppConfig(), data_source=MemoryDataSource(raw_records))
    client = TestClient(app)

    client.get("/api/prices")
    response = client.get("/metrics")

    assert response.status_code == 200
    assert 'mcflation_dataset_loads_total{source="memory"} 1.0' in response.text
    assert 'mcflation_degraded_fields_total{field="max_price"} 1.0' in response.text
    assert response.headers["content-type"] == CONTENT_TYPE_LATEST
