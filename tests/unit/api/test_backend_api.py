from datetime import date
from unittest.mock import Mock, patch

import pytest

from airbrb_client.airbrb_api import auth, bookings, listings
from airbrb_client.errors import ProtocolError
from airbrb_client.schemas.bookings import BookingStatus
from airbrb_client.schemas.listings import DateRange, Review


@pytest.mark.unit
@patch("airbrb_client.airbrb_api.bookings.request")
def test_get_all_bookings_parses_wire_format(mock_request: Mock) -> None:
    """Numeric ids become strings and ISO timestamps become calendar days."""
    mock_request.return_value = {
        "bookings": [
            {
                "id": 7,
                "listingId": 3,
                "owner": "guest@example.com",
                "status": "accepted",
                "dateRange": {"start": "2025-12-10T00:00:00.000Z", "end": "2025-12-13T00:00:00.000Z"},
                "totalPrice": 300,
            }
        ]
    }

    result = bookings.get_all_bookings("tok")

    mock_request.assert_called_once_with("GET", "/bookings", token="tok")
    assert result[0].id == "7"
    assert result[0].listing_id == "3"
    assert result[0].status == BookingStatus.ACCEPTED
    assert result[0].date_range.start == date(2025, 12, 10)


@pytest.mark.unit
@patch("airbrb_client.airbrb_api.bookings.request")
def test_create_booking_sends_camel_case_payload(mock_request: Mock) -> None:
    mock_request.return_value = {"bookingId": 55}

    booking_id = bookings.create_booking(
        "3", DateRange(start="2025-12-01", end="2025-12-03"), 200.0, "tok"
    )

    assert booking_id == "55"
    mock_request.assert_called_once_with(
        "POST",
        "/bookings/new/3",
        token="tok",
        payload={
            "dateRange": {"start": "2025-12-01T00:00:00.000Z", "end": "2025-12-03T00:00:00.000Z"},
            "totalPrice": 200.0,
        },
    )


@pytest.mark.unit
@patch("airbrb_client.airbrb_api.bookings.request")
def test_accept_and_decline_paths(mock_request: Mock) -> None:
    bookings.accept_booking("5", "tok")
    bookings.decline_booking("6", "tok")
    bookings.delete_booking("7", "tok")

    paths = [(c.args[0], c.args[1]) for c in mock_request.call_args_list]
    assert paths == [
        ("PUT", "/bookings/accept/5"),
        ("PUT", "/bookings/decline/6"),
        ("DELETE", "/bookings/7"),
    ]


@pytest.mark.unit
@patch("airbrb_client.airbrb_api.auth.request")
def test_login_returns_token_and_name(mock_request: Mock) -> None:
    mock_request.return_value = {"token": "abc", "name": "Hana"}

    data = auth.login("hana@example.com", "pw")

    assert data.token == "abc"
    assert data.name == "Hana"
    assert mock_request.call_args.kwargs["payload"] == {"email": "hana@example.com", "password": "pw"}


@pytest.mark.unit
@patch("airbrb_client.airbrb_api.auth.request")
def test_login_without_token_is_protocol_error(mock_request: Mock) -> None:
    mock_request.return_value = {"name": "Hana"}

    with pytest.raises(ProtocolError):
        auth.login("hana@example.com", "pw")


@pytest.mark.unit
@patch("airbrb_client.airbrb_api.listings.request")
def test_publish_listing_sends_ranges_in_order(mock_request: Mock) -> None:
    ranges = [
        DateRange(start="2025-12-06", end="2025-12-10"),
        DateRange(start="2025-12-01", end="2025-12-05"),
    ]

    listings.publish_listing("9", ranges, "tok")

    payload = mock_request.call_args.kwargs["payload"]
    assert mock_request.call_args.args[:2] == ("PUT", "/listings/publish/9")
    assert [r["start"] for r in payload["availability"]] == [
        "2025-12-06T00:00:00.000Z",
        "2025-12-01T00:00:00.000Z",
    ]


@pytest.mark.unit
@patch("airbrb_client.airbrb_api.listings.request")
def test_get_listing_parses_full_record(mock_request: Mock) -> None:
    mock_request.return_value = {
        "listing": {
            "owner": "host@example.com",
            "title": "Loft",
            "price": 120,
            "metadata": {"propertyType": "Apartment", "amenities": ["wifi", "wifi", "pool"]},
            "published": True,
            "availability": [{"start": "2025-12-01", "end": "2025-12-05"}],
            "reviews": [{"rating": 4, "comment": "Nice", "createdBy": "g@example.com"}],
            "postedOn": "2025-11-01T08:00:00.000Z",
        }
    }

    listing = listings.get_listing("9")

    assert listing.id == "9"
    assert listing.metadata.amenities == {"wifi", "pool"}
    assert listing.metadata.property_type == "Apartment"
    assert listing.availability[0].end == date(2025, 12, 5)
    assert listing.reviews[0].created_by == "g@example.com"


@pytest.mark.unit
@patch("airbrb_client.airbrb_api.listings.request")
def test_leave_review_wraps_review(mock_request: Mock) -> None:
    listings.leave_review("9", "4", Review(rating=5, comment="Great", created_by="g@example.com"), "tok")

    assert mock_request.call_args.args[:2] == ("PUT", "/listings/9/review/4")
    assert mock_request.call_args.kwargs["payload"] == {
        "review": {"rating": 5, "comment": "Great", "createdBy": "g@example.com"}
    }


@pytest.mark.unit
@patch("airbrb_client.airbrb_api.listings.request")
def test_get_listing_without_record_is_protocol_error(mock_request: Mock) -> None:
    mock_request.return_value = {"listings": []}

    with pytest.raises(ProtocolError):
        listings.get_listing("9")
