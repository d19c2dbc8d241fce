"""
Prometheus metrics endpoint.

Example:
    GET /metrics

    Response:
        # HELP airbrb_polls_total Total number of polling operations (success and failure)
        # TYPE airbrb_polls_total counter
        airbrb_polls_total{entity_type="bookings",status="success"} 42.0
        ...
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter
from fastapi.responses import Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

router = APIRouter()


@router.get("/metrics", response_class=Response)
async def metrics() -> Any:
    """Expose all metrics in Prometheus text format."""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
