"""Prometheus metrics instrumentation for the marketplace service.

Provides:
- ``setup_metrics(app)``: Attach prometheus-fastapi-instrumentator to a FastAPI app,
  exposing ``/metrics`` with HTTP request duration/count plus custom business gauges.
- ``ACTIVE_SESSIONS``: Gauge of in-memory widget sessions, labelled by kind.
- ``NEGOTIATIONS_COMPLETED``: Counter of negotiations that reached an accepted offer.
- ``SHIPMENTS_SUBMITTED``: Counter of submitted split shipment plans.

Business metrics are updated from widget callbacks, not by polling.
"""

from __future__ import annotations

from fastapi import FastAPI
from prometheus_client import Counter, Gauge
from prometheus_fastapi_instrumentator import Instrumentator

ACTIVE_SESSIONS: Gauge = Gauge(
    "marketplace_active_sessions",
    "Number of in-memory widget sessions",
    ["kind"],
)

NEGOTIATIONS_COMPLETED: Counter = Counter(
    "marketplace_negotiations_completed_total",
    "Total number of negotiations that ended with an accepted offer",
)

SHIPMENTS_SUBMITTED: Counter = Counter(
    "marketplace_split_shipments_submitted_total",
    "Total number of split shipment plans submitted",
)


def setup_metrics(app: FastAPI) -> None:
    """Instrument *app* with Prometheus HTTP metrics and expose ``/metrics``.

    Excludes health/ready/metrics endpoints from instrumentation to avoid
    noise in dashboards.

    Args:
        app: The FastAPI application to instrument.
    """
    Instrumentator(
        should_group_status_codes=True,
        should_ignore_untemplated=True,
        excluded_handlers=["/health", "/ready", "/metrics"],
    ).instrument(app).expose(app, include_in_schema=False, should_gzip=True)
