"""
Unit tests for metrics endpoint.
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from airbrb_client.main import app
from airbrb_client.metrics import (
    api_latency,
    api_requests,
    notifications_emitted,
    poll_duration,
    poll_total,
    polls_skipped,
)


@pytest.fixture
def client() -> TestClient:
    """FastAPI test client."""
    return TestClient(app)


@pytest.mark.unit
def test_metrics_endpoint_returns_prometheus_format(client: TestClient) -> None:
    """Test that /metrics endpoint returns Prometheus text format."""
    response = client.get("/metrics")

    assert response.status_code == 200
    assert "text/plain" in response.headers["content-type"]


@pytest.mark.unit
def test_metrics_endpoint_contains_custom_metrics(client: TestClient) -> None:
    """Test that /metrics endpoint includes the client's own metrics."""
    poll_total.labels(entity_type="bookings", status="success").inc()
    poll_duration.labels(entity_type="bookings").observe(0.42)
    polls_skipped.labels(reason="in_flight").inc()
    api_requests.labels(endpoint="/bookings", method="GET", status_code="200").inc()
    api_latency.labels(endpoint="/bookings").observe(0.12)
    notifications_emitted.labels(type="host").inc()

    content = client.get("/metrics").text

    assert "airbrb_polls_total" in content
    assert "airbrb_poll_duration_seconds" in content
    assert "airbrb_polls_skipped_total" in content
    assert "airbrb_tracked_bookings" in content
    assert "airbrb_api_requests_total" in content
    assert "airbrb_api_latency_seconds" in content
    assert "airbrb_notifications_emitted_total" in content


@pytest.mark.unit
def test_metrics_endpoint_includes_help_and_type_metadata(client: TestClient) -> None:
    """Test that metrics include Prometheus HELP and TYPE metadata."""
    content = client.get("/metrics").text

    assert "# HELP" in content
    assert "# TYPE" in content
