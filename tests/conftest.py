"""Pytest configuration for the mcflation test suite."""

from __future__ import annotations

from decimal import Decimal

import pytest
from prometheus_client import CollectorRegistry

from mcflation.core.models import CanonicalRow
from mcflation.core.monitoring.metrics import MetricsCollector, configure_metrics_collector


def pytest_addoption(parser: pytest.Parser) -> None:
    """Register command-line options for controlling integration tests."""

    parser.addoption(
        "--mcflation-run-integration",
        action="store_true",
        default=False,
        help="Run mcflation integration tests that require external services.",
    )


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers",
        "integration: marks mcflation tests requiring network or external services",
    )


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Skip integration tests unless explicitly requested."""

    if config.getoption("--mcflation-run-integration"):
        return

    skip_integration = pytest.mark.skip(reason="integration tests require --mcflation-run-integration")
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip_integration)


@pytest.fixture(autouse=True)
def metrics_collector() -> MetricsCollector:
    """Give each test a fresh metrics registry."""

    collector = MetricsCollector(registry=CollectorRegistry())
    configure_metrics_collector(collector)
    yield collector
    configure_metrics_collector(None)


@pytest.fixture
def raw_records() -> list[dict[str, str]]:
    return [
        {
            "year": "2020",
            "available": "yes",
            "min_price": "1.00",
            "max_price": "1.29",
            "notes": "Menu board https://a.example/2020;see also",
            "source_history": "History A",
            "source_cpi_context": "",
            "source_value_menu_anchors": "",
            "source_recent_pricing_anchors": "",
        },
        {
            "year": "2022",
            "available": "no",
            "min_price": "",
            "max_price": "",
            "notes": "",
            "source_history": "",
            "source_cpi_context": "",
            "source_value_menu_anchors": "",
            "source_recent_pricing_anchors": "",
        },
        {
            "year": "",
            "available": "yes",
            "min_price": "2.00",
            "max_price": "2.50",
            "notes": "no year",
            "source_history": "",
            "source_cpi_context": "",
            "source_value_menu_anchors": "",
            "source_recent_pricing_anchors": "",
        },
        {
            "year": "2021",
            "available": "maybe",
            "min_price": "1.10",
            "max_price": "abc",
            "notes": "",
            "source_history": "",
            "source_cpi_context": "CPI B",
            "source_value_menu_anchors": "",
            "source_recent_pricing_anchors": "Recent D",
        },
    ]


@pytest.fixture
def example_rows() -> list[CanonicalRow]:
    return [
        CanonicalRow(year=2020, available=True, min_price=Decimal("1.0"), max_price=Decimal("1.29")),
        CanonicalRow(year=2022, available=False),
    ]
