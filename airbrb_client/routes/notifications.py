"""Notification inbox routes for the signed-in user."""

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status

from airbrb_client.dependencies import get_client, get_notifications
from airbrb_client.services.client import AirbrbClient
from airbrb_client.services.notifications import NotificationCenter

router = APIRouter()


def inbox_view(center: NotificationCenter) -> dict[str, Any]:
    return {
        "notifications": [n.to_wire() for n in center.items()],
        "unreadCount": center.unread_count,
    }


@router.get("/notifications")
def list_notifications(center: NotificationCenter = Depends(get_notifications)) -> dict[str, Any]:
    return inbox_view(center)


@router.post("/notifications/read")
def mark_all_read(center: NotificationCenter = Depends(get_notifications)) -> dict[str, Any]:
    center.mark_all_read()
    return inbox_view(center)


@router.post("/notifications/{notification_id}/read")
def mark_read(
    notification_id: str, center: NotificationCenter = Depends(get_notifications)
) -> dict[str, Any]:
    notification = center.mark_read(notification_id)
    if notification is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Notification not found")
    return notification.to_wire()


@router.delete("/notifications/{notification_id}")
def dismiss(
    notification_id: str, center: NotificationCenter = Depends(get_notifications)
) -> dict[str, Any]:
    if not center.dismiss(notification_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Notification not found")
    return inbox_view(center)


@router.post("/notifications/poll")
def poll_now(client: AirbrbClient = Depends(get_client)) -> dict[str, Any]:
    """
    Run a reconciliation cycle immediately.

    ``updated`` is false when the poll was skipped (another one in flight)
    or failed; failures are logged, not reported.
    """
    if client.engine is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not logged in")
    updated = client.engine.poll()
    return {"updated": updated, "state": client.engine.state.value}
