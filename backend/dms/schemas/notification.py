from datetime import datetime
from enum import Enum
from typing import Literal

from pydantic import BaseModel


class NotificationType(str, Enum):
    RECEIVED = "received"
    CANCELLED = "cancelled"
    SENT = "sent"
    RECEIVED_CONFIRMATION = "received-confirmation"
    NOT_RECEIVED = "not-received"
    FOLLOW_UP = "follow-up"


Section = Literal["queue", "received", "archive", "notifications"]


class NotificationResponse(BaseModel):
    id: str
    message: str
    timestamp: datetime | None
    type: NotificationType
    read: bool = False
    cleared: bool = False
    department: str | None = None
    document_id: int | None = None


class SectionBadges(BaseModel):
    queue: int = 0
    received: int = 0
    archive: int = 0
    notifications: int = 0


class NotificationFeedResponse(BaseModel):
    notifications: list[NotificationResponse]
    unread_count: int
    badges: SectionBadges


class FollowUpResponse(BaseModel):
    id: str
    document_id: int
    department: str
    message: str
    created_by: str | None
    created_at: datetime

    model_config = {"from_attributes": True}
