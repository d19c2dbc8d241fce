"""
Shared fixtures: in-memory client storage and record factories.
"""

from __future__ import annotations

from typing import Any, Callable, Generator

import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool

from airbrb_client.db.store import KeyValueStore
from airbrb_client.models.base import Base
from airbrb_client.schemas.bookings import Booking
from airbrb_client.schemas.listings import Listing, ListingSummary

HOST = "host@example.com"
GUEST = "guest@example.com"


@pytest.fixture
def memory_engine() -> Generator[Engine, None, None]:
    """SQLite in-memory engine shared across threads, with tables created."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def store(memory_engine: Engine) -> KeyValueStore:
    return KeyValueStore(memory_engine)


@pytest.fixture
def make_booking() -> Callable[..., Booking]:
    """Factory for bookings in wire format (camelCase, numeric ids)."""

    def _make(
        booking_id: int = 1,
        listing_id: int = 10,
        owner: str = GUEST,
        status: str = "pending",
        start: str = "2025-12-01T00:00:00.000Z",
        end: str = "2025-12-03T00:00:00.000Z",
        total_price: float = 200,
    ) -> Booking:
        return Booking.model_validate(
            {
                "id": booking_id,
                "listingId": listing_id,
                "owner": owner,
                "status": status,
                "dateRange": {"start": start, "end": end},
                "totalPrice": total_price,
            }
        )

    return _make


@pytest.fixture
def make_listing() -> Callable[..., Listing]:
    def _make(
        listing_id: int = 10,
        owner: str = HOST,
        title: str = "Beach House",
        price: float = 100,
        availability: list[dict[str, str]] | None = None,
        **extra: Any,
    ) -> Listing:
        return Listing.model_validate(
            {
                "id": listing_id,
                "owner": owner,
                "title": title,
                "price": price,
                "published": bool(availability),
                "availability": availability or [],
                **extra,
            }
        )

    return _make


@pytest.fixture
def make_summary() -> Callable[..., ListingSummary]:
    def _make(listing_id: int = 10, owner: str = HOST, title: str = "Beach House") -> ListingSummary:
        return ListingSummary.model_validate({"id": listing_id, "owner": owner, "title": title})

    return _make
