"""
Availability and pricing rules for a requested stay.

Dates may be ``date``/``datetime`` objects or ISO strings; everything is
compared as UTC calendar days.
"""

from typing import Any

from airbrb_client.schemas.listings import Listing
from airbrb_client.utils.datetime import to_day


def nights_between(start: Any, end: Any) -> int:
    """
    Number of nights in a stay.

    Returns 0 when either date is missing or invalid, or when ``start`` is
    not strictly before ``end``.

    Example:
        >>> nights_between("2025-12-10", "2025-12-13")
        3
    """
    start_day = to_day(start)
    end_day = to_day(end)
    if start_day is None or end_day is None or start_day >= end_day:
        return 0
    return (end_day - start_day).days


def is_within_availability(listing: Listing, start: Any, end: Any) -> bool:
    """
    True iff a single availability range fully contains ``[start, end]``.

    Ranges are not merged: a stay spanning two adjacent ranges is rejected.
    """
    start_day = to_day(start)
    end_day = to_day(end)
    if start_day is None or end_day is None:
        return False
    return any(r.start <= start_day and end_day <= r.end for r in listing.availability)


def compute_total(listing: Listing, nights: int) -> float:
    return nights * listing.price
