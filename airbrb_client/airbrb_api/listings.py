"""
Listing endpoints: /listings/*.

Reads are public; every write requires the owner's bearer token.
"""

from airbrb_client.network.client import parse_response, request
from airbrb_client.schemas.listings import (
    DateRange,
    Listing,
    ListingCreatedResponse,
    ListingPayload,
    ListingResponse,
    ListingsResponse,
    ListingSummary,
    Review,
)


def get_all_listings() -> list[ListingSummary]:
    """
    Fetch summary records for every listing.

    Returns:
        list[ListingSummary]: All listings known to the backend
    """
    data = request("GET", "/listings")
    return parse_response(ListingsResponse, data).listings


def get_listing(listing_id: str) -> Listing:
    """
    Fetch the full record of one listing.

    Args:
        listing_id (str): Listing ID

    Returns:
        Listing: Full listing including availability and reviews
    """
    data = request("GET", f"/listings/{listing_id}")
    record = data.get("listing")
    if isinstance(record, dict):
        # The backend does not echo the id inside the record
        record.setdefault("id", listing_id)
    return parse_response(ListingResponse, data).listing


def create_listing(payload: ListingPayload, token: str) -> str:
    """
    Create a draft listing owned by the token's user.

    Returns:
        str: ID of the new listing
    """
    data = request("POST", "/listings/new", token=token, payload=payload.to_wire())
    return parse_response(ListingCreatedResponse, data).listing_id


def update_listing(listing_id: str, payload: ListingPayload, token: str) -> None:
    request("PUT", f"/listings/{listing_id}", token=token, payload=payload.to_wire())


def delete_listing(listing_id: str, token: str) -> None:
    request("DELETE", f"/listings/{listing_id}", token=token)


def publish_listing(listing_id: str, availability: list[DateRange], token: str) -> None:
    """
    Publish a listing with its bookable date ranges.

    Args:
        listing_id (str): Listing ID
        availability (list[DateRange]): Ranges in the order the host entered them
        token (str): Owner's bearer token
    """
    payload = {"availability": [r.to_wire() for r in availability]}
    request("PUT", f"/listings/publish/{listing_id}", token=token, payload=payload)


def unpublish_listing(listing_id: str, token: str) -> None:
    request("PUT", f"/listings/unpublish/{listing_id}", token=token)


def leave_review(listing_id: str, booking_id: str, review: Review, token: str) -> None:
    request(
        "PUT",
        f"/listings/{listing_id}/review/{booking_id}",
        token=token,
        payload={"review": review.to_wire()},
    )
