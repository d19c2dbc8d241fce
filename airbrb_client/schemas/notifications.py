import uuid
from datetime import datetime
from enum import Enum

from pydantic import Field

from airbrb_client.schemas.base import ApiModel
from airbrb_client.utils.datetime import utc_now


class NotificationType(str, Enum):
    HOST = "host"
    GUEST = "guest"


class Notification(ApiModel):
    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    type: NotificationType
    message: str
    detail: str = ""
    created_at: datetime = Field(default_factory=utc_now)
    read: bool = False
