"""
Prometheus metrics for the booking client: polling, backend API calls and
notification output.

Metrics are exposed via the /metrics endpoint for scraping by Prometheus.

Example:
    >>> from airbrb_client.metrics import poll_duration, poll_total
    >>> with poll_duration.labels(entity_type="bookings").time():
    ...     bookings = get_all_bookings(token)
    ...     poll_total.labels(entity_type="bookings", status="success").inc()
"""

from __future__ import annotations

from prometheus_client import Counter, Gauge, Histogram

# =============================================================================
# Poll Metrics
# =============================================================================

poll_total = Counter(
    "airbrb_polls_total",
    "Total number of polling operations (success and failure)",
    ["entity_type", "status"],
)
"""
Counter for total polling operations.

Labels:
    entity_type: Type of entity being polled (bookings, listings)
    status: success or failure
"""

poll_duration = Histogram(
    "airbrb_poll_duration_seconds",
    "Duration of polling operations in seconds",
    ["entity_type"],
    buckets=(0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0, float("inf")),
)

polls_skipped = Counter(
    "airbrb_polls_skipped_total",
    "Poll ticks that were skipped without fetching",
    ["reason"],
)
"""
Counter for skipped poll ticks.

Labels:
    reason: in_flight (previous poll still running) or cancelled (session ended)
"""

tracked_bookings = Gauge(
    "airbrb_tracked_bookings",
    "Number of bookings in the reconciliation snapshot",
)

# =============================================================================
# API Metrics
# =============================================================================

api_requests = Counter(
    "airbrb_api_requests_total",
    "Total backend API requests made",
    ["endpoint", "method", "status_code"],
)
"""
Counter for backend API requests.

Labels:
    endpoint: Request path with ids collapsed (e.g., "/bookings", "/listings/:id")
    method: HTTP method
    status_code: HTTP status code, or "error" when no response was received
"""

api_latency = Histogram(
    "airbrb_api_latency_seconds",
    "Backend API request latency in seconds",
    ["endpoint"],
    buckets=(0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, float("inf")),
)

# =============================================================================
# Notification Metrics
# =============================================================================

notifications_emitted = Counter(
    "airbrb_notifications_emitted_total",
    "Notifications produced by booking reconciliation",
    ["type"],
)
"""Counter for emitted notifications, labelled host or guest."""
