from datetime import date
from typing import Callable

import pytest

from airbrb_client.schemas.listings import Listing
from airbrb_client.services.availability import compute_total, is_within_availability, nights_between

TWO_RANGES = [
    {"start": "2025-12-01", "end": "2025-12-05"},
    {"start": "2025-12-06", "end": "2025-12-10"},
]


@pytest.mark.unit
@pytest.mark.parametrize(
    "start,end,expected",
    [
        ("2025-12-10", "2025-12-13", 3),
        ("2025-12-10T00:00:00.000Z", "2025-12-13T00:00:00.000Z", 3),
        (date(2025, 12, 31), date(2026, 1, 2), 2),
        ("2025-12-10", "2025-12-10", 0),
        ("2025-12-13", "2025-12-10", 0),
        ("", "2025-12-10", 0),
        (None, None, 0),
        ("garbage", "2025-12-10", 0),
    ],
)
def test_nights_between(start: object, end: object, expected: int) -> None:
    assert nights_between(start, end) == expected


@pytest.mark.unit
def test_range_inside_one_availability_window(make_listing: Callable[..., Listing]) -> None:
    listing = make_listing(availability=TWO_RANGES)

    assert is_within_availability(listing, "2025-12-01", "2025-12-05") is True
    assert is_within_availability(listing, "2025-12-07", "2025-12-09") is True


@pytest.mark.unit
def test_range_spanning_adjacent_windows_is_rejected(make_listing: Callable[..., Listing]) -> None:
    """Windows are never merged, even when they are contiguous."""
    listing = make_listing(availability=TWO_RANGES)

    assert is_within_availability(listing, "2025-12-03", "2025-12-08") is False


@pytest.mark.unit
def test_range_partly_outside_is_rejected(make_listing: Callable[..., Listing]) -> None:
    listing = make_listing(availability=TWO_RANGES)

    assert is_within_availability(listing, "2025-11-30", "2025-12-02") is False
    assert is_within_availability(listing, "2025-12-09", "2025-12-11") is False


@pytest.mark.unit
def test_no_availability_or_bad_dates(make_listing: Callable[..., Listing]) -> None:
    assert is_within_availability(make_listing(), "2025-12-01", "2025-12-02") is False
    assert is_within_availability(make_listing(availability=TWO_RANGES), "bad", "2025-12-02") is False


@pytest.mark.unit
def test_compute_total(make_listing: Callable[..., Listing]) -> None:
    listing = make_listing(price=125.5)

    assert compute_total(listing, 2) == 251.0
    assert compute_total(listing, 0) == 0
