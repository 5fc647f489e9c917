"""Fixtures for HTTP endpoint tests.

Seller replies run inline (``simulate_latency=False``) so every response
already reflects the scripted answer.
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from marketplace.app import create_app, initialize_services
from marketplace.config import Settings


@pytest.fixture
def client() -> TestClient:
    settings = Settings(_env_file=None, simulate_latency=False)  # type: ignore[call-arg]
    return TestClient(create_app(initialize_services(settings)))


@pytest.fixture
def listing_payload() -> dict:
    return {
        "product_id": "prod-apples",
        "product_name": "Organic Apples",
        "seller_name": "Green Valley Farms",
        "initial_price": "12.99",
        "unit": "case",
    }
