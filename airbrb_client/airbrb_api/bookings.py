"""Booking endpoints: /bookings/*. All require a bearer token."""

from airbrb_client.network.client import parse_response, request
from airbrb_client.schemas.bookings import (
    Booking,
    BookingCreatedResponse,
    BookingPayload,
    BookingsResponse,
)
from airbrb_client.schemas.listings import DateRange


def get_all_bookings(token: str) -> list[Booking]:
    """
    Fetch every booking visible to the token's user.

    The backend has no delta endpoint, so this is always the full list.

    Args:
        token (str): Bearer token

    Returns:
        list[Booking]: Bookings in backend order
    """
    data = request("GET", "/bookings", token=token)
    return parse_response(BookingsResponse, data).bookings


def create_booking(listing_id: str, date_range: DateRange, total_price: float, token: str) -> str:
    """
    Request a stay at a listing.

    Returns:
        str: ID of the new (pending) booking
    """
    payload = BookingPayload(date_range=date_range, total_price=total_price).to_wire()
    data = request("POST", f"/bookings/new/{listing_id}", token=token, payload=payload)
    return parse_response(BookingCreatedResponse, data).booking_id


def accept_booking(booking_id: str, token: str) -> None:
    request("PUT", f"/bookings/accept/{booking_id}", token=token)


def decline_booking(booking_id: str, token: str) -> None:
    request("PUT", f"/bookings/decline/{booking_id}", token=token)


def delete_booking(booking_id: str, token: str) -> None:
    request("DELETE", f"/bookings/{booking_id}", token=token)
