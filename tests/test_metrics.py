"""Tests for Prometheus metrics endpoint and custom business metrics."""

from __future__ import annotations

from decimal import Decimal

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from marketplace.api.registry import NEGOTIATION, SessionRegistry
from marketplace.config import Settings
from marketplace.domain.models import OrderItem, ProductListing
from marketplace.observability.metrics import ACTIVE_SESSIONS, setup_metrics


@pytest.fixture(autouse=True)
def _reset_metrics():
    """Reset gauge values between tests; counters are compared relatively."""
    for kind in ("negotiation", "shipment", "comparison"):
        ACTIVE_SESSIONS.labels(kind=kind).set(0)
    yield


@pytest.fixture()
def metrics_app() -> FastAPI:
    """Create a minimal FastAPI app with Prometheus instrumentation."""
    app = FastAPI()

    @app.get("/hello")
    async def hello():
        return {"msg": "hello"}

    @app.get("/health")
    async def health():
        return {"status": "healthy"}

    setup_metrics(app)
    return app


@pytest.fixture()
def metrics_client(metrics_app: FastAPI) -> TestClient:
    return TestClient(metrics_app)


def _metric_value(text: str, sample: str) -> float:
    """Extract the numeric value of a sample line from Prometheus text output."""
    for line in text.splitlines():
        parts = line.split()
        if len(parts) == 2 and parts[0] == sample:
            return float(parts[1])
    raise ValueError(f"Metric {sample} not found in output")


def test_metrics_endpoint_returns_prometheus_format(metrics_client: TestClient) -> None:
    metrics_client.get("/hello")
    resp = metrics_client.get("/metrics")
    assert resp.status_code == 200
    body = resp.text
    assert "http_request" in body
    assert "marketplace_active_sessions" in body
    assert "marketplace_negotiations_completed_total" in body
    assert "marketplace_split_shipments_submitted_total" in body


def test_excluded_handlers_not_in_metrics(metrics_client: TestClient) -> None:
    metrics_client.get("/health")
    body = metrics_client.get("/metrics").text
    for line in body.splitlines():
        if "http_request_duration" in line and 'handler="' in line:
            assert '/health"' not in line


def test_registry_tracks_active_sessions(metrics_client: TestClient) -> None:
    registry = SessionRegistry(Settings(_env_file=None, simulate_latency=False))  # type: ignore[call-arg]
    registry.create_comparison()
    session_id, _ = registry.create_comparison()
    registry.discard("comparison", session_id)

    text = metrics_client.get("/metrics").text
    assert _metric_value(text, 'marketplace_active_sessions{kind="comparison"}') == 1.0


def test_completed_negotiation_increments_counter(
    metrics_client: TestClient, sample_listing: ProductListing
) -> None:
    registry = SessionRegistry(Settings(_env_file=None, simulate_latency=False))  # type: ignore[call-arg]
    before = _metric_value(
        metrics_client.get("/metrics").text, "marketplace_negotiations_completed_total"
    )

    _, session = registry.create_negotiation(sample_listing)
    session.send_offer(Decimal("12.99"), 20)

    after = _metric_value(
        metrics_client.get("/metrics").text, "marketplace_negotiations_completed_total"
    )
    assert after == before + 1.0
    assert registry.count(NEGOTIATION) == 1


def test_submitted_shipment_increments_counter(
    metrics_client: TestClient, sample_order_items: list[OrderItem]
) -> None:
    registry = SessionRegistry(Settings(_env_file=None, simulate_latency=False))  # type: ignore[call-arg]
    sample = "marketplace_split_shipments_submitted_total"
    before = _metric_value(metrics_client.get("/metrics").text, sample)

    session_id, allocator = registry.create_shipment("ORD-1", sample_order_items)
    allocator.submit()

    assert _metric_value(metrics_client.get("/metrics").text, sample) == before + 1.0
    assert registry.submitted[session_id].order_id == "ORD-1"
